"""Configuration management for the hifi-audio-data command line tool.

This module provides TOML-based configuration support with CLI override capability.

Configuration priority: CLI args > user config > default config
"""

from __future__ import annotations

import argparse
import importlib.resources
import sys
import tomllib
from dataclasses import dataclass, fields
from dataclasses import replace as dataclass_replace
from pathlib import Path
from typing import Any, NamedTuple

from .orientation import EulerOrder


class ConfigurationError(Exception):
    """Raised when configuration validation fails.

    Attributes:
        errors: List of validation error messages.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__(f"Configuration validation failed: {'; '.join(errors)}")


class DefaultConfigError(Exception):
    """Raised when the bundled default configuration cannot be loaded."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Failed to load default configuration: {message}")


class ConfigOverride(NamedTuple):
    """A configuration value changed by a user config file.

    Attributes:
        key: The configuration field name.
        default_value: The value from default.toml.
        new_value: The value from the user config.
    """

    key: str
    default_value: Any
    new_value: Any


@dataclass(frozen=True)
class AppConfig:
    """All settings. Defaults come from the bundled default.toml."""

    euler_order: str
    json_indent: int

    log_dir: str | None
    log_level_console: str
    log_json_console: bool
    log_rotation: str | None
    log_retention: str | None


_VALID_KEYS: set[str] = {f.name for f in fields(AppConfig)}
_OPTIONAL_STRING_KEYS = ("log_dir", "log_rotation", "log_retention")
_VALID_LOG_LEVELS = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


def load_default_toml_data() -> dict[str, Any]:
    """Load default.toml from the package.

    Raises:
        DefaultConfigError: If default.toml cannot be found or parsed.
    """
    try:
        content = (
            importlib.resources.files("hifi_audio_data")
            .joinpath("default.toml")
            .read_bytes()
        )
        return tomllib.loads(content.decode("utf-8"))
    except FileNotFoundError as e:
        raise DefaultConfigError(f"default.toml not found in package: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise DefaultConfigError(f"Invalid TOML syntax in default.toml: {e}") from e


def load_config_from_toml(path: Path) -> dict[str, Any]:
    """Load a user TOML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        tomllib.TOMLDecodeError: If the TOML syntax is invalid.
    """
    with open(path, "rb") as f:
        return tomllib.load(f)


def process_toml_config(toml_data: dict[str, Any]) -> dict[str, Any]:
    """Keep known keys, turning empty strings into None for optional fields."""
    result: dict[str, Any] = {}

    for key, value in toml_data.items():
        if key not in _VALID_KEYS:
            continue
        if key in _OPTIONAL_STRING_KEYS and value == "":
            value = None
        result[key] = value

    return result


def get_unknown_keys(toml_data: dict[str, Any]) -> list[str]:
    return [key for key in toml_data if key not in _VALID_KEYS]


def validate_config(config: AppConfig) -> list[str]:
    """Validate configuration values.

    Returns:
        List of error messages. Empty list if configuration is valid.
    """
    errors: list[str] = []

    valid_orders = [order.value for order in EulerOrder]
    if config.euler_order not in valid_orders:
        errors.append(
            f"euler_order must be one of {valid_orders}, got {config.euler_order!r}"
        )

    if not isinstance(config.json_indent, int) or isinstance(config.json_indent, bool):
        errors.append(f"json_indent must be an integer, got {config.json_indent!r}")
    elif config.json_indent < 0:
        errors.append(f"json_indent must not be negative, got {config.json_indent}")

    if str(config.log_level_console).upper() not in _VALID_LOG_LEVELS:
        errors.append(
            f"log_level_console must be one of {_VALID_LOG_LEVELS}, "
            f"got {config.log_level_console}"
        )

    if not isinstance(config.log_json_console, bool):
        errors.append(
            f"log_json_console must be a boolean, got {config.log_json_console!r}"
        )

    return errors


def load_default_config() -> AppConfig:
    """Load the default configuration.

    Raises:
        DefaultConfigError: If default.toml cannot be loaded or is incomplete.
    """
    config_data = process_toml_config(load_default_toml_data())

    missing = _VALID_KEYS - set(config_data)
    if missing:
        raise DefaultConfigError(
            f"Missing required fields in default.toml: {', '.join(sorted(missing))}"
        )

    return AppConfig(**config_data)


def merge_cli_args(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    """Merge CLI arguments into config (CLI takes precedence).

    Only explicitly provided arguments override config values.
    """
    updates: dict[str, Any] = {}

    if getattr(args, "order", None) is not None:
        updates["euler_order"] = args.order
    if getattr(args, "log_dir", None) is not None:
        updates["log_dir"] = str(args.log_dir)
    if getattr(args, "log_level_console", None) is not None:
        updates["log_level_console"] = args.log_level_console
    if getattr(args, "log_json_console", False):
        updates["log_json_console"] = True
    if getattr(args, "log_rotation", None) is not None:
        updates["log_rotation"] = args.log_rotation
    if getattr(args, "log_retention", None) is not None:
        updates["log_retention"] = args.log_retention

    if not updates:
        return config

    return dataclass_replace(config, **updates)


def create_config_from_args(
    args: argparse.Namespace,
) -> tuple[AppConfig, list[ConfigOverride]]:
    """Create AppConfig with layered loading.

    Returns:
        Tuple of (AppConfig, overrides). Overrides list the user config values
        that differ from the defaults.

    Raises:
        DefaultConfigError: If default.toml cannot be loaded.
        FileNotFoundError: If the user config file does not exist.
        tomllib.TOMLDecodeError: If the user config has invalid TOML syntax.
        ConfigurationError: If the final configuration is invalid.
    """
    config = load_default_config()
    overrides: list[ConfigOverride] = []

    if getattr(args, "config", None) is not None:
        user_config_path = Path(args.config)
        toml_data = load_config_from_toml(user_config_path)

        # Logging is not configured yet
        unknown = get_unknown_keys(toml_data)
        if unknown:
            print(f"WARNING: Unknown keys in {user_config_path}:", file=sys.stderr)
            for key in unknown:
                print(f"  - {key}", file=sys.stderr)

        config_data = process_toml_config(toml_data)
        for key, new_value in config_data.items():
            default_value = getattr(config, key)
            if default_value != new_value:
                overrides.append(ConfigOverride(key, default_value, new_value))

        if config_data:
            config = dataclass_replace(config, **config_data)

    config = merge_cli_args(config, args)

    errors = validate_config(config)
    if errors:
        raise ConfigurationError(errors)

    return config, overrides
