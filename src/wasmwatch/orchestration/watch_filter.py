"""
Watch filter rule deciding which file changes trigger a toolchain run.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from ..validation import validate_file_extension


@dataclass(frozen=True)
class WatchFilterRule:
    """
    Case-insensitive file extension predicate.

    Examples:
        >>> WatchFilterRule(".rs").matches("src/lib.RS")
        True
        >>> WatchFilterRule("rs").matches("src/Main.vue")
        False
    """

    extension: str = ".rs"

    def __post_init__(self):
        normalized = validate_file_extension(self.extension, field_name="watch.extension")
        object.__setattr__(self, "extension", normalized.lower())

    def matches(self, path: Union[str, Path]) -> bool:
        return str(path).lower().endswith(self.extension)
