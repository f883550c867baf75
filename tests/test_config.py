"""Tests for configuration module."""

import argparse
import tomllib
from dataclasses import replace
from pathlib import Path

import pytest

from hifi_audio_data.config import (
    AppConfig,
    ConfigOverride,
    ConfigurationError,
    create_config_from_args,
    get_unknown_keys,
    load_config_from_toml,
    load_default_config,
    merge_cli_args,
    process_toml_config,
    validate_config,
)


class TestLoadDefaultConfig:
    """Tests for the bundled default.toml."""

    def test_default_values(self):
        """Test that default values are loaded correctly."""
        config = load_default_config()
        assert config.euler_order == "yaw_pitch_roll"
        assert config.json_indent == 2
        assert config.log_dir is None
        assert config.log_level_console == "WARNING"
        assert config.log_json_console is False
        assert config.log_rotation is None
        assert config.log_retention is None

    def test_default_config_is_valid(self):
        assert validate_config(load_default_config()) == []


class TestLoadConfigFromToml:
    """Tests for load_config_from_toml function."""

    def test_load_valid_toml(self, tmp_path: Path):
        """Test loading a valid TOML file."""
        config_file = tmp_path / "config.toml"
        config_file.write_text('euler_order = "roll_yaw_pitch"\njson_indent = 4\n')

        data = load_config_from_toml(config_file)
        assert data == {"euler_order": "roll_yaw_pitch", "json_indent": 4}

    def test_load_nonexistent_file(self, tmp_path: Path):
        """Test that FileNotFoundError is raised for missing file."""
        with pytest.raises(FileNotFoundError):
            load_config_from_toml(tmp_path / "nonexistent.toml")

    def test_load_invalid_toml(self, tmp_path: Path):
        """Test that TOMLDecodeError is raised for invalid TOML."""
        config_file = tmp_path / "invalid.toml"
        config_file.write_text("invalid = [unclosed")

        with pytest.raises(tomllib.TOMLDecodeError):
            load_config_from_toml(config_file)

    def test_load_empty_toml(self, tmp_path: Path):
        """Test loading an empty TOML file."""
        config_file = tmp_path / "empty.toml"
        config_file.write_text("")

        assert load_config_from_toml(config_file) == {}


class TestProcessTomlConfig:
    """Tests for process_toml_config and get_unknown_keys."""

    def test_empty_strings_become_none(self):
        processed = process_toml_config(
            {"log_dir": "", "log_rotation": "", "log_retention": ""}
        )
        assert processed == {"log_dir": None, "log_rotation": None, "log_retention": None}

    def test_non_optional_empty_string_is_kept(self):
        assert process_toml_config({"euler_order": ""}) == {"euler_order": ""}

    def test_unknown_keys_are_dropped(self):
        processed = process_toml_config({"json_indent": 0, "dealer_port": 5555})
        assert processed == {"json_indent": 0}

    def test_get_unknown_keys(self):
        assert get_unknown_keys({"json_indent": 0, "eular_order": "x"}) == ["eular_order"]


class TestValidateConfig:
    """Tests for validate_config function."""

    @pytest.fixture
    def config(self) -> AppConfig:
        return load_default_config()

    def test_invalid_euler_order(self, config):
        errors = validate_config(replace(config, euler_order="pitch_yaw_roll"))
        assert any("euler_order" in e for e in errors)

    def test_negative_indent(self, config):
        errors = validate_config(replace(config, json_indent=-1))
        assert any("json_indent" in e for e in errors)

    def test_non_integer_indent(self, config):
        errors = validate_config(replace(config, json_indent="2"))
        assert any("json_indent" in e for e in errors)

    def test_invalid_log_level(self, config):
        errors = validate_config(replace(config, log_level_console="LOUD"))
        assert any("log_level_console" in e for e in errors)

    def test_log_level_is_case_insensitive(self, config):
        assert validate_config(replace(config, log_level_console="debug")) == []

    def test_multiple_errors_reported(self, config):
        errors = validate_config(
            replace(config, euler_order="bad", json_indent=-3, log_json_console="yes")
        )
        assert len(errors) == 3


class TestMergeCliArgs:
    """Tests for merge_cli_args function."""

    def test_cli_overrides_order(self):
        """Test that CLI --order overrides config."""
        config = load_default_config()
        args = argparse.Namespace(order="roll_yaw_pitch")

        merged = merge_cli_args(config, args)
        assert merged.euler_order == "roll_yaw_pitch"
        # Original config unchanged
        assert config.euler_order == "yaw_pitch_roll"

    def test_logging_flags(self, tmp_path: Path):
        config = load_default_config()
        args = argparse.Namespace(
            log_dir=tmp_path,
            log_level_console="DEBUG",
            log_json_console=True,
            log_rotation="10 MB",
            log_retention="5 days",
        )

        merged = merge_cli_args(config, args)
        assert merged.log_dir == str(tmp_path)
        assert merged.log_level_console == "DEBUG"
        assert merged.log_json_console is True
        assert merged.log_rotation == "10 MB"
        assert merged.log_retention == "5 days"

    def test_none_values_dont_override(self):
        config = load_default_config()
        args = argparse.Namespace(order=None, log_dir=None, log_json_console=False)

        assert merge_cli_args(config, args) == config

    def test_missing_attributes_handled(self):
        """Test that missing CLI attributes are handled gracefully."""
        config = load_default_config()
        assert merge_cli_args(config, argparse.Namespace()) == config


class TestCreateConfigFromArgs:
    """Tests for layered configuration loading."""

    def test_defaults_only(self):
        config, overrides = create_config_from_args(argparse.Namespace())
        assert config == load_default_config()
        assert overrides == []

    def test_user_config_overrides_defaults(self, tmp_path: Path):
        config_file = tmp_path / "user.toml"
        config_file.write_text('euler_order = "roll_yaw_pitch"\njson_indent = 2\n')

        config, overrides = create_config_from_args(
            argparse.Namespace(config=config_file)
        )

        assert config.euler_order == "roll_yaw_pitch"
        # Same as default, so not reported
        assert overrides == [
            ConfigOverride("euler_order", "yaw_pitch_roll", "roll_yaw_pitch")
        ]

    def test_cli_beats_user_config(self, tmp_path: Path):
        config_file = tmp_path / "user.toml"
        config_file.write_text('euler_order = "roll_yaw_pitch"\n')

        config, _ = create_config_from_args(
            argparse.Namespace(config=config_file, order="yaw_pitch_roll")
        )
        assert config.euler_order == "yaw_pitch_roll"

    def test_unknown_keys_warn(self, tmp_path: Path, capsys):
        config_file = tmp_path / "user.toml"
        config_file.write_text("dealer_port = 5555\n")

        create_config_from_args(argparse.Namespace(config=config_file))

        err = capsys.readouterr().err
        assert "Unknown keys" in err
        assert "dealer_port" in err

    def test_invalid_user_config_raises(self, tmp_path: Path):
        config_file = tmp_path / "user.toml"
        config_file.write_text('euler_order = "sideways"\n')

        with pytest.raises(ConfigurationError) as exc_info:
            create_config_from_args(argparse.Namespace(config=config_file))
        assert any("euler_order" in e for e in exc_info.value.errors)

    def test_missing_user_config_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            create_config_from_args(
                argparse.Namespace(config=tmp_path / "missing.toml")
            )
