"""Find battery and backlight devices at startup.

Either takes the device paths given on the command line, or walks a sysfs
class directory and keeps every entry whose probe file matches. The same
walk serves both device categories; a DeviceKind supplies what differs.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Generic, Protocol, TypeVar

from .attribute import read_first_line
from .config import ConfigError
from .devices import Backlight, Battery

if TYPE_CHECKING:
    from .config import LoggerConfig

log = logging.getLogger(__name__)


class Device(Protocol):
    """What discovery and the sampling loop need from a device."""

    @property
    def name(self) -> str: ...

    def initialize(self) -> bool: ...

    def sample_all(self) -> None: ...

    def record_fields(self, timestamp: str) -> list[str]: ...


D = TypeVar("D", bound=Device)


@dataclass(frozen=True)
class DeviceKind(Generic[D]):
    """How to recognise and build one category of device."""

    label: str  # e.g. "battery", used in operator messages
    factory: Callable[[Path], D]
    probe_file: str  # file inside each candidate directory
    probe_value: str  # required first line of the probe file


BATTERY_KIND: DeviceKind[Battery] = DeviceKind(
    label="battery", factory=Battery, probe_file="type", probe_value="Battery"
)

BACKLIGHT_KIND: DeviceKind[Backlight] = DeviceKind(
    label="backlight", factory=Backlight, probe_file="type", probe_value="raw"
)


def _add_device(kind: DeviceKind[D], path: Path, devices: list[D]) -> None:
    device = kind.factory(path)
    if not device.initialize():
        log.debug("Skipping %s candidate %s: initialization failed", kind.label, path)
        return
    devices.append(device)
    print(f"Added {kind.label} {device.name}")


def discover_devices(
    kind: DeviceKind[D],
    base_dir: str | Path,
    explicit_paths: Iterable[str | Path] = (),
) -> list[D]:
    """Build the devices of one category.

    Args:
        kind: The device category to build.
        base_dir: sysfs class directory scanned when no paths are given.
        explicit_paths: Device directories to use instead of scanning.

    Returns:
        Initialized devices, in the order given or in sorted directory order.
    """
    devices: list[D] = []

    paths = [Path(p) for p in explicit_paths]
    if paths:
        for path in paths:
            _add_device(kind, path, devices)
        return devices

    root = Path(base_dir)
    if not root.is_dir():
        log.debug("%s root %s does not exist", kind.label, root)
        return devices

    try:
        entries = sorted(root.iterdir())
    except OSError as e:
        log.debug("Cannot list %s root %s: %s", kind.label, root, e)
        return devices

    for entry in entries:
        probe = read_first_line(entry / kind.probe_file)
        if probe != kind.probe_value:
            continue
        _add_device(kind, entry, devices)

    return devices


@dataclass
class DeviceInventory:
    """Devices found at startup, by category."""

    batteries: list[Battery] = field(default_factory=list)
    backlights: list[Backlight] = field(default_factory=list)

    @property
    def devices(self) -> list[Device]:
        """The monitored device set: batteries, then backlights."""
        return [*self.batteries, *self.backlights]


def discover_inventory(config: LoggerConfig) -> DeviceInventory:
    """Run discovery for every enabled category.

    Raises:
        ConfigError: If no battery was found, or none of the explicitly
            given backlights could be used.
    """
    inv = DeviceInventory()

    inv.batteries = discover_devices(
        BATTERY_KIND, config.power_supply_root, config.batteries
    )
    if not inv.batteries:
        if config.batteries:
            raise ConfigError("None of the given batteries could be opened.")
        raise ConfigError("No batteries found. Provide -b argument.")

    if config.backlight_enabled:
        inv.backlights = discover_devices(
            BACKLIGHT_KIND, config.backlight_root, config.backlights
        )
        if config.backlights and not inv.backlights:
            raise ConfigError("Invalid backlight given")

    return inv
