"""Single-value sysfs attribute files.

Each attribute is one small text file under a device directory (e.g.
/sys/class/power_supply/BAT0/capacity). Only the first line is significant.
"""

from __future__ import annotations

from pathlib import Path


def read_first_line(path: Path) -> str | None:
    """Return the first line of *path* without its newline, or None.

    None means the file could not be opened, decoded, or was empty.
    """
    try:
        with open(path) as f:
            line = f.readline()
    except (OSError, UnicodeDecodeError):
        return None
    if not line:
        return None
    return line.rstrip("\r\n")


class SysfsAttribute:
    """A named attribute file holding the most recently sampled value.

    The file is reopened on every :meth:`sample` so that deleted or
    replaced files are picked up without holding stale handles. A failed
    read leaves :attr:`value` untouched.
    """

    def __init__(self, path: Path, name: str | None = None) -> None:
        self._path = Path(path)
        self._name = name if name is not None else self._path.name
        self._value = ""

    @property
    def path(self) -> Path:
        """Path to the attribute file."""
        return self._path

    @property
    def name(self) -> str:
        """Attribute name, used as the column name."""
        return self._name

    @property
    def value(self) -> str:
        """Most recently read value ("" until the first good read)."""
        return self._value

    def initialize(self) -> bool:
        """Check that the file can be opened for reading."""
        try:
            with open(self._path):
                pass
        except OSError:
            return False
        return True

    def sample(self) -> str:
        """Re-read the file and return the (possibly stale) value."""
        line = read_first_line(self._path)
        if line is not None:
            self._value = line
        return self._value

    def __repr__(self) -> str:
        return f"SysfsAttribute({str(self._path)!r}, value={self._value!r})"
