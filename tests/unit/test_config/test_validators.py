"""
Tests for configuration validators.
"""

from pathlib import Path

import pytest

from wasmwatch.config import validate_app_config, validate_toolchain_config, validate_watch_config
from wasmwatch.models import DEFAULT_IGNORE_DIRS, ArtifactPaths
from wasmwatch.validation import (
    ValidationError,
    validate_enum_choice,
    validate_file_extension,
    validate_positive_float,
    validate_simple_command,
)


class TestValueValidators:

    @pytest.mark.parametrize("value, expected", [("rs", ".rs"), (".rs", ".rs"), (" .RS ", ".RS")])
    def test_file_extension(self, value, expected):
        assert validate_file_extension(value) == expected

    @pytest.mark.parametrize("value", [
        "wasm-pack",
        "/usr/local/bin/wasm-pack",
        "/opt/my tools/wasm-pack",
        r"C:\tools\wasm-pack.exe",
        r"C:\Program Files\wasm-pack\wasm-pack.exe",
    ])
    def test_simple_command_returns_path_unchanged(self, value):
        assert validate_simple_command(value) == value

    def test_simple_command_strips_surrounding_whitespace(self):
        assert validate_simple_command("  /opt/my tools/wasm-pack\n") == "/opt/my tools/wasm-pack"

    @pytest.mark.parametrize("value", ["", "   ", "wasm-pack; rm -rf /", "a | b", "wasm-pack && rm",
                                       "$(which wasm-pack)", "`which wasm-pack`", "wp > log",
                                       "'/opt/my tools/wp'", "wasm-pack\nrm", None])
    def test_simple_command_rejects_arguments_and_operators(self, value):
        with pytest.raises(ValidationError):
            validate_simple_command(value, field_name="toolchain.executable")

    def test_positive_float_bounds(self):
        assert validate_positive_float("0.5", min_value=0.05, max_value=60.0) == 0.5
        with pytest.raises(ValidationError, match="must be >= 0.05"):
            validate_positive_float(0.01, min_value=0.05)
        with pytest.raises(ValidationError, match="must be <= 60.0"):
            validate_positive_float(61, max_value=60.0)
        with pytest.raises(ValidationError, match="valid number"):
            validate_positive_float("fast")
        with pytest.raises(ValidationError, match="valid number"):
            validate_positive_float(True)

    def test_enum_choice(self):
        assert validate_enum_choice("web", ["web", "bundler"]) == "web"
        assert validate_enum_choice("info", ["INFO"], case_sensitive=False) == "INFO"
        with pytest.raises(ValidationError) as exc_info:
            validate_enum_choice("node", ["web", "bundler"], field_name="toolchain.target")
        assert exc_info.value.field_name == "toolchain.target"
        assert exc_info.value.value == "node"


class TestToolchainConfig:

    def test_defaults(self):
        config = validate_toolchain_config({})
        assert config.executable == "wasm-pack"
        assert config.out_name == "index"
        assert config.out_dir == Path("pkg")
        assert config.target == "web"
        assert config.crate_dir == Path(".")
        assert config.command() == [
            "wasm-pack", "build", "--no-pack", "--out-name=index", "--target=web",
        ]

    def test_relative_crate_dir_resolved_against_config_dir(self, temp_dir):
        config = validate_toolchain_config({"crate_dir": "crate"}, config_dir=temp_dir)
        assert config.crate_dir == (temp_dir / "crate").resolve()

    def test_absolute_crate_dir_kept(self, temp_dir):
        config = validate_toolchain_config({"crate_dir": str(temp_dir)}, config_dir=Path("/elsewhere"))
        assert config.crate_dir == temp_dir

    @pytest.mark.parametrize("data, field", [
        ({"target": "wasi"}, "toolchain.target"),
        ({"out_name": "../index"}, "toolchain.out_name"),
        ({"out_dir": ""}, "toolchain.out_dir"),
        ({"out_dir": 3}, "toolchain.out_dir"),
        ({"executable": "wasm-pack && rm -rf pkg"}, "toolchain.executable"),
        ({"crate_dir": ""}, "toolchain.crate_dir"),
    ])
    def test_invalid_values(self, data, field):
        with pytest.raises(ValidationError) as exc_info:
            validate_toolchain_config(data)
        assert exc_info.value.field_name == field

    def test_executable_with_spaces_kept_verbatim(self):
        config = validate_toolchain_config({"executable": "/opt/my tools/wasm-pack"})
        assert config.command()[0] == "/opt/my tools/wasm-pack"

    def test_nested_out_dir(self, temp_dir):
        config = validate_toolchain_config({"crate_dir": str(temp_dir), "out_dir": "web/pkg"})
        assert config.out_dir == Path("web/pkg")
        artifacts = ArtifactPaths.for_toolchain(config)
        assert artifacts.module == temp_dir / "web" / "pkg" / "index.js"
        assert artifacts.wasm == temp_dir / "web" / "pkg" / "index_bg.wasm"

    def test_non_table_rejected(self):
        with pytest.raises(ValidationError, match=r"\[toolchain\] must be a table"):
            validate_toolchain_config("wasm-pack")


class TestWatchConfig:

    def test_defaults(self):
        config = validate_watch_config({})
        assert config.extension == ".rs"
        assert config.poll_interval == 0.5
        assert config.ignore_dirs == DEFAULT_IGNORE_DIRS

    def test_values(self, temp_dir):
        config = validate_watch_config(
            {"extension": "RS", "poll_interval": 2, "root": "src", "ignore_dirs": ["target"]},
            config_dir=temp_dir,
        )
        assert config.extension == ".RS"
        assert config.poll_interval == 2.0
        assert config.root == (temp_dir / "src").resolve()
        assert config.ignore_dirs == ["target"]

    @pytest.mark.parametrize("data, field", [
        ({"poll_interval": 0}, "watch.poll_interval"),
        ({"poll_interval": 120}, "watch.poll_interval"),
        ({"extension": ""}, "watch.extension"),
        ({"ignore_dirs": "target"}, "watch.ignore_dirs"),
        ({"ignore_dirs": ["a/b"]}, "watch.ignore_dirs"),
    ])
    def test_invalid_values(self, data, field):
        with pytest.raises(ValidationError) as exc_info:
            validate_watch_config(data)
        assert exc_info.value.field_name == field


class TestAppConfig:

    def test_empty_document_gives_defaults(self):
        config = validate_app_config({})
        assert config.log_level == "INFO"
        assert config.toolchain.target == "web"
        assert config.artifacts.module == Path(".") / "pkg" / "index.js"
        assert config.artifacts.wasm == Path(".") / "pkg" / "index_bg.wasm"

    def test_log_level_normalised(self):
        assert validate_app_config({"logging": {"level": "warning"}}).log_level == "WARNING"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_app_config({"logging": {"level": "LOUD"}})
        assert exc_info.value.field_name == "logging.level"
