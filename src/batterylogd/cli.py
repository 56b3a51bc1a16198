"""Command-line interface for the battery logger."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import (
    BACKLIGHT_ROOT,
    DEFAULT_INTERVAL,
    DEFAULT_LOG_FILENAME,
    POWER_SUPPLY_ROOT,
    TIMESTAMP_MODES,
    VERSION,
    ConfigError,
    LoggerConfig,
)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="batterylogd",
        description="Log battery and backlight state from sysfs to a CSV file",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"batterylogd: version {VERSION}",
    )
    parser.add_argument(
        "-i",
        "--interval",
        type=int,
        default=DEFAULT_INTERVAL,
        help=f"Sampling interval in seconds (default: {DEFAULT_INTERVAL})",
    )
    parser.add_argument(
        "-b",
        "--battery",
        type=Path,
        action="append",
        default=[],
        help=(
            "Path to a battery in sysfs. Can be given multiple times. "
            "If omitted, batteries are detected automatically."
        ),
    )
    parser.add_argument(
        "-L",
        "--backlight",
        type=Path,
        action="append",
        default=[],
        help=(
            "Path to a display backlight in sysfs. Can be given multiple "
            "times. If omitted, backlights are detected automatically."
        ),
    )
    parser.add_argument(
        "--no-backlight",
        action="store_true",
        help="Do not log backlight records",
    )
    parser.add_argument(
        "-l",
        "--log",
        type=Path,
        default=Path.home() / DEFAULT_LOG_FILENAME,
        help=f"Path to log file (default: ~/{DEFAULT_LOG_FILENAME})",
    )
    parser.add_argument(
        "--timestamps",
        choices=TIMESTAMP_MODES,
        default="utc",
        help=(
            "Timestamp format: utc (default), local with UTC offset, or "
            "local-z (local time with a literal Z, as older logs used)"
        ),
    )
    parser.add_argument(
        "--power-supply-root",
        type=Path,
        default=Path(POWER_SUPPLY_ROOT),
        help=f"Directory scanned for batteries (default: {POWER_SUPPLY_ROOT})",
    )
    parser.add_argument(
        "--backlight-root",
        type=Path,
        default=Path(BACKLIGHT_ROOT),
        help=f"Directory scanned for backlights (default: {BACKLIGHT_ROOT})",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> tuple[LoggerConfig, bool]:
    """Parse command-line arguments.

    Returns:
        The LoggerConfig and whether debug logging was requested.
    """
    args = build_parser().parse_args(argv)
    config = LoggerConfig(
        interval=args.interval,
        batteries=args.battery,
        backlights=args.backlight,
        backlight_enabled=not args.no_backlight,
        log_file=args.log,
        timestamps=args.timestamps,
        power_supply_root=args.power_supply_root,
        backlight_root=args.backlight_root,
    )
    return config, args.debug


def main(argv: list[str] | None = None) -> None:
    """Entry point for the batterylogd CLI."""
    config, debug = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    # Import here so --help and --version stay cheap
    from .collector import run_logger

    try:
        run_logger(config)
    except ConfigError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(0)
