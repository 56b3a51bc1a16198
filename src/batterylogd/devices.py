"""Battery and backlight devices read from sysfs.

A device is a directory such as /sys/class/power_supply/BAT0 holding one
file per attribute. Each device type has a fixed attribute schema whose
order defines the column order of its log records.
"""

from __future__ import annotations

from pathlib import Path
from typing import ClassVar

from .attribute import SysfsAttribute, read_first_line

BATTERY_ATTRIBUTES: tuple[str, ...] = (
    "capacity",
    "cycle_count",
    "energy_full",
    "energy_full_design",
    "energy_now",
    "power_now",
    "present",
    "status",
    "voltage_min_design",
    "voltage_now",
)

BACKLIGHT_ATTRIBUTES: tuple[str, ...] = (
    "brightness",
    "max_brightness",
)


class SysfsDevice:
    """A sysfs device directory with a fixed, ordered set of attributes.

    Subclasses set ``TYPE`` (the record tag) and ``ATTRIBUTES`` (the schema).
    """

    TYPE: ClassVar[str] = ""
    ATTRIBUTES: ClassVar[tuple[str, ...]] = ()

    def __init__(self, path: str | Path) -> None:
        # Path() drops trailing separators, so the name is the last segment.
        self._path = Path(path)
        self._name = self._path.name
        self._attributes = tuple(
            SysfsAttribute(self._path / attr) for attr in self.ATTRIBUTES
        )

    @property
    def path(self) -> Path:
        """Device directory."""
        return self._path

    @property
    def name(self) -> str:
        """Display name, the final component of the device path."""
        return self._name

    @property
    def attributes(self) -> tuple[SysfsAttribute, ...]:
        """Attributes in schema order."""
        return self._attributes

    def _identify(self) -> bool:
        """Type-specific identification check. Accepts by default."""
        return True

    def initialize(self) -> bool:
        """Identify the device and open every required attribute.

        Returns False if the device should be discarded.
        """
        if not self._identify():
            return False
        return all(attr.initialize() for attr in self._attributes)

    def sample_all(self) -> None:
        """Sample every attribute in schema order."""
        for attr in self._attributes:
            attr.sample()

    def data_vector(self) -> list[str]:
        """Current attribute values in schema order."""
        return [attr.value for attr in self._attributes]

    def record_fields(self, timestamp: str) -> list[str]:
        """Fields of one log record: type, name, timestamp, values."""
        return [self.TYPE, self._name, timestamp, *self.data_vector()]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self._path)!r})"


class Battery(SysfsDevice):
    """A power-supply device whose ``type`` file reads ``Battery``."""

    TYPE: ClassVar[str] = "battery"
    ATTRIBUTES: ClassVar[tuple[str, ...]] = BATTERY_ATTRIBUTES

    def _identify(self) -> bool:
        return read_first_line(self._path / "type") == "Battery"


class Backlight(SysfsDevice):
    """A display backlight device.

    Backlights carry no identification check of their own; auto-detection
    probes their ``type`` file before construction.
    """

    TYPE: ClassVar[str] = "backlight"
    ATTRIBUTES: ClassVar[tuple[str, ...]] = BACKLIGHT_ATTRIBUTES
