"""
Command-line interface for hifi-audio-data.

Converts orientations between Euler angles and quaternions and computes the
minimal update between two wire-format snapshots, printing JSON to stdout.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from . import __version__
from .adapters import (
    audio_api_data_from_wire,
    audio_api_data_to_wire,
    orientation_to_wire,
)
from .config import AppConfig, ConfigOverride, create_config_from_args
from .logging_utils import configure_logging
from .orientation import EulerOrder, euler_to_quaternion, quaternion_to_euler
from .types import OrientationEuler3D, OrientationQuat3D

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hifi-audio-data",
        description="Spatial audio data conversion and diff tool",
    )
    parser.add_argument("--config", type=Path, help="Path to a TOML config file")
    parser.add_argument("--log-dir", type=Path, help="Enable file logging in DIR")
    parser.add_argument(
        "--log-level-console",
        help="Console log level (default from config: WARNING)",
    )
    parser.add_argument(
        "--log-json-console", action="store_true", help="Log to console as JSON"
    )
    parser.add_argument("--log-rotation", help="loguru rotation rule, e.g. '10 MB'")
    parser.add_argument("--log-retention", help="loguru retention rule, e.g. '1 week'")
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Show version and exit",
    )

    orders = [order.value for order in EulerOrder]
    subparsers = parser.add_subparsers(dest="command", required=True)

    to_quat = subparsers.add_parser(
        "euler-to-quat", help="Convert Euler angles (degrees) to a quaternion"
    )
    to_quat.add_argument("--yaw", type=float, default=0.0)
    to_quat.add_argument("--pitch", type=float, default=0.0)
    to_quat.add_argument("--roll", type=float, default=0.0)
    to_quat.add_argument("--order", choices=orders, help="Rotation composition order")

    to_euler = subparsers.add_parser(
        "quat-to-euler", help="Convert a quaternion to Euler angles (degrees)"
    )
    to_euler.add_argument("--w", type=float, default=1.0)
    to_euler.add_argument("--x", type=float, default=0.0)
    to_euler.add_argument("--y", type=float, default=0.0)
    to_euler.add_argument("--z", type=float, default=0.0)
    to_euler.add_argument("--order", choices=orders, help="Rotation composition order")

    diff = subparsers.add_parser(
        "diff", help="Print the minimal update from CURRENT to OTHER"
    )
    diff.add_argument("current", type=Path, help="JSON file with the current snapshot")
    diff.add_argument("other", type=Path, help="JSON file with the newer snapshot")

    return parser


def _read_snapshot(path: Path) -> Any:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def run_command(args: argparse.Namespace, config: AppConfig) -> dict[str, Any]:
    """Execute the selected subcommand and return its JSON-ready result."""
    if args.command == "euler-to-quat":
        euler = OrientationEuler3D(
            pitch_degrees=args.pitch, yaw_degrees=args.yaw, roll_degrees=args.roll
        )
        return orientation_to_wire(euler_to_quaternion(euler, config.euler_order))

    if args.command == "quat-to-euler":
        quat = OrientationQuat3D(w=args.w, x=args.x, y=args.y, z=args.z)
        euler = quaternion_to_euler(quat, config.euler_order)
        return {
            "yawDegrees": euler.yaw_degrees,
            "pitchDegrees": euler.pitch_degrees,
            "rollDegrees": euler.roll_degrees,
        }

    if args.command == "diff":
        current = audio_api_data_from_wire(_read_snapshot(args.current))
        other = audio_api_data_from_wire(_read_snapshot(args.other))
        return audio_api_data_to_wire(current.diff(other))

    raise ValueError(f"Unknown command: {args.command}")


def _log_overrides(overrides: list[ConfigOverride]) -> None:
    for override in overrides:
        logger.info(
            f"Config override: {override.key} = {override.new_value!r} "
            f"(default: {override.default_value!r})"
        )


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    config, overrides = create_config_from_args(args)

    configure_logging(
        log_dir=config.log_dir,
        console_level=config.log_level_console,
        console_json=config.log_json_console,
        rotation=config.log_rotation,
        retention=config.log_retention,
    )
    _log_overrides(overrides)
    logger.debug(f"Running {args.command} with euler_order={config.euler_order}")

    result = run_command(args, config)
    try:
        output = json.dumps(result, indent=config.json_indent or None, allow_nan=False)
    except ValueError as exc:
        raise ValueError(
            f"{args.command} result contains NaN or infinity and cannot be printed as JSON"
        ) from exc
    print(output)


def cli_main() -> None:
    """Console script entry point for the hifi-audio-data command."""
    try:
        main()
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(0)
    except SystemExit:
        raise
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    cli_main()
