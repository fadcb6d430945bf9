from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from backlight_ctl.errors import ControlReadError, ControlWriteError, InvariantViolation

log = logging.getLogger(__name__)

BRIGHTNESS = "brightness"
MAX_BRIGHTNESS = "max_brightness"

PERMISSION_HINT = (
    "Add a udev rule giving the 'video' group write access to "
    "/sys/class/backlight/%k/brightness and add yourself to that group."
)


@dataclass(frozen=True)
class Control:
    """A sysfs brightness control. Values are read from disk on every access."""

    sysfs_dir: Path

    @property
    def name(self) -> str:
        return self.sysfs_dir.name

    def read_value(self, file_name: str) -> int:
        path = self.sysfs_dir / file_name
        try:
            text = path.read_text(encoding="ascii")
        except (OSError, UnicodeDecodeError) as e:
            raise ControlReadError(f"Cannot read {path}: {e}") from e

        words = text.split()
        log.debug("read %r from %s", words[0] if words else "", path)
        try:
            value = int(words[0])
        except (IndexError, ValueError) as e:
            raise ControlReadError(f"{path} does not contain an integer: {text!r}") from e

        if value < 0:
            raise InvariantViolation(f"negative brightness {value} in {path}")
        return value

    def write_value(self, file_name: str, value: int) -> None:
        path = self.sysfs_dir / file_name
        log.debug("writing %d to %s", value, path)
        try:
            path.write_text(str(int(value)), encoding="ascii")
        except PermissionError as e:
            raise ControlWriteError(f"No permission to write {path}. {PERMISSION_HINT}") from e
        except OSError as e:
            raise ControlWriteError(f"Cannot write {path}: {e}") from e

    def read_max(self) -> int:
        return self.read_value(MAX_BRIGHTNESS)

    def read_current(self) -> int:
        return self.read_value(BRIGHTNESS)

    def write_current(self, value: int) -> None:
        self.write_value(BRIGHTNESS, value)
