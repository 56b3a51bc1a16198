"""Shared fixtures: fake /sys/class/power_supply and backlight trees."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

BATTERY_VALUES: dict[str, str] = {
    "capacity": "87",
    "cycle_count": "112",
    "energy_full": "45120000",
    "energy_full_design": "50040000",
    "energy_now": "39254400",
    "power_now": "8712000",
    "present": "1",
    "status": "Discharging",
    "voltage_min_design": "11100000",
    "voltage_now": "12345000",
}

BACKLIGHT_VALUES: dict[str, str] = {
    "brightness": "312",
    "max_brightness": "852",
}


def _write_device(path: Path, type_value: str | None, values: dict[str, str]) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    if type_value is not None:
        (path / "type").write_text(f"{type_value}\n")
    for name, value in values.items():
        (path / name).write_text(f"{value}\n")
    return path


@pytest.fixture()
def make_battery() -> Callable[..., Path]:
    """Factory creating a battery directory with all attribute files."""

    def _make(
        root: Path,
        name: str = "BAT0",
        type_value: str | None = "Battery",
        **overrides: str,
    ) -> Path:
        values = {**BATTERY_VALUES, **overrides}
        return _write_device(root / name, type_value, values)

    return _make


@pytest.fixture()
def make_backlight() -> Callable[..., Path]:
    """Factory creating a backlight directory with all attribute files."""

    def _make(
        root: Path,
        name: str = "intel_backlight",
        type_value: str | None = "raw",
        **overrides: str,
    ) -> Path:
        values = {**BACKLIGHT_VALUES, **overrides}
        return _write_device(root / name, type_value, values)

    return _make


@pytest.fixture()
def fake_sysfs(
    tmp_path: Path,
    make_battery: Callable[..., Path],
    make_backlight: Callable[..., Path],
) -> Path:
    """Create a fake sysfs with two batteries, a charger and a backlight."""
    power_supply = tmp_path / "power_supply"
    make_battery(power_supply, "BAT0")
    make_battery(power_supply, "BAT1", capacity="42", status="Charging")

    # AC adapter: probe file says "Mains"
    ac = power_supply / "AC"
    ac.mkdir()
    (ac / "type").write_text("Mains\n")
    (ac / "online").write_text("1\n")

    # Directory without a type file
    (power_supply / "hidpp_battery_0").mkdir()

    backlight = tmp_path / "backlight"
    make_backlight(backlight, "intel_backlight")
    make_backlight(backlight, "acpi_video0", type_value="firmware")

    return tmp_path


@pytest.fixture()
def battery_values() -> dict[str, str]:
    """Attribute values written by make_battery() by default."""
    return dict(BATTERY_VALUES)


@pytest.fixture()
def backlight_values() -> dict[str, str]:
    """Attribute values written by make_backlight() by default."""
    return dict(BACKLIGHT_VALUES)
