"""Configuration for the battery logger."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

VERSION = "0.1.0"

DEFAULT_LOG_FILENAME = "batterylogd.log"
DEFAULT_INTERVAL = 60
POWER_SUPPLY_ROOT = "/sys/class/power_supply"
BACKLIGHT_ROOT = "/sys/class/backlight"

TIMESTAMP_MODES = ("utc", "local", "local-z")


class ConfigError(ValueError):
    """A fatal startup condition that should be reported to the operator."""


@dataclass
class LoggerConfig:
    """Runtime configuration for the battery logger."""

    # Sampling interval in whole seconds
    interval: int = DEFAULT_INTERVAL

    # Explicit battery directories (empty = auto-detect)
    batteries: list[Path] = field(default_factory=list)

    # Explicit backlight directories (empty = auto-detect)
    backlights: list[Path] = field(default_factory=list)

    # Whether to log backlight records at all
    backlight_enabled: bool = True

    # Append-only output file
    log_file: Path = field(
        default_factory=lambda: Path.home() / DEFAULT_LOG_FILENAME
    )

    # Timestamp rendering: "utc", "local" (with offset) or "local-z" (legacy)
    timestamps: str = "utc"

    # sysfs roots scanned during auto-detection
    power_supply_root: Path = field(default_factory=lambda: Path(POWER_SUPPLY_ROOT))
    backlight_root: Path = field(default_factory=lambda: Path(BACKLIGHT_ROOT))

    def __post_init__(self) -> None:
        self.batteries = [Path(p) for p in self.batteries]
        self.backlights = [Path(p) for p in self.backlights]
        self.log_file = Path(self.log_file).expanduser()
        self.power_supply_root = Path(self.power_supply_root)
        self.backlight_root = Path(self.backlight_root)

    def validate(self) -> None:
        """Raise ConfigError if the configuration cannot be run."""
        if isinstance(self.interval, bool) or not isinstance(self.interval, int):
            raise ConfigError(f"Invalid interval given: {self.interval!r}")
        if self.interval <= 0:
            raise ConfigError(f"Invalid interval given: {self.interval}")
        if self.timestamps not in TIMESTAMP_MODES:
            raise ConfigError(
                f"Invalid timestamp mode {self.timestamps!r}, "
                f"expected one of {', '.join(TIMESTAMP_MODES)}"
            )
