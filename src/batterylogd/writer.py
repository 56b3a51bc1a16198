"""Append-only CSV log writer.

Writes one line per device per tick and pushes every line to disk before
returning, so a crash loses at most the record being written.
"""

from __future__ import annotations

import io
import os
from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path

from .config import ConfigError

_ISO_Z_FMT = "%Y-%m-%dT%H:%M:%SZ"


def format_timestamp(mode: str = "utc", now: datetime | None = None) -> str:
    """Render a record timestamp.

    Args:
        mode: ``"utc"`` for UTC with a ``Z`` suffix, ``"local"`` for local
            time with its numeric offset, ``"local-z"`` for local wall-clock
            time followed by a literal ``Z`` (the historical format).
        now: Time to render; naive values are taken as local time.
            Defaults to the current time.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.astimezone()

    if mode == "utc":
        return now.astimezone(timezone.utc).strftime(_ISO_Z_FMT)
    if mode == "local":
        return now.astimezone().isoformat(timespec="seconds")
    if mode == "local-z":
        return now.astimezone().strftime(_ISO_Z_FMT)
    raise ValueError(f"Unknown timestamp mode: {mode!r}")


def format_record(fields: Sequence[str]) -> str:
    """Join record fields with commas. Fields are written as-is."""
    return ",".join(fields)


class LogWriter:
    """Line-per-record writer that appends to an existing log."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._file: io.TextIOWrapper | None = None
        self._record_count = 0

    @property
    def path(self) -> Path:
        """Path to the log file."""
        return self._path

    @property
    def record_count(self) -> int:
        """Number of records written since the last open()."""
        return self._record_count

    @property
    def closed(self) -> bool:
        """Whether the log file is currently closed."""
        return self._file is None

    def open(self) -> None:
        """Open the log file for appending.

        Raises:
            ConfigError: If the file cannot be opened.
        """
        try:
            self._file = open(self._path, "a", buffering=1)  # noqa: SIM115
        except OSError as e:
            raise ConfigError(f"Could not open log file {self._path}: {e}") from e
        self._record_count = 0

    def write_record(self, fields: Sequence[str]) -> None:
        """Append one record and flush it to disk."""
        if self._file is None:
            raise RuntimeError("LogWriter not opened; call open() first")

        self._file.write(format_record(fields) + "\n")
        self._record_count += 1
        self.flush()

    def flush(self) -> None:
        """Flush the log file to disk."""
        if self._file is not None:
            self._file.flush()
            os.fsync(self._file.fileno())

    def close(self) -> None:
        """Flush and close the log file. Safe to call twice."""
        if self._file is not None:
            self.flush()
            self._file.close()
            self._file = None

    def __enter__(self) -> LogWriter:
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.close()
