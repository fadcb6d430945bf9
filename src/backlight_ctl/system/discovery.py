from __future__ import annotations

import logging
import os
from pathlib import Path

from backlight_ctl.errors import DiscoveryError
from backlight_ctl.system.control import BRIGHTNESS, MAX_BRIGHTNESS, Control

log = logging.getLogger(__name__)

REQUIRED_FILES = (BRIGHTNESS, MAX_BRIGHTNESS)


def is_control_dir(path: Path) -> bool:
    try:
        if not path.is_dir():
            return False
        return all((path / f).exists() for f in REQUIRED_FILES)
    except OSError as e:
        log.debug("cannot inspect %s: %s", path, e)
        return False


def scan_dir(base_dir: str | Path) -> list[Control]:
    """Return the controls directly below ``base_dir`` in directory listing order.

    An unreadable or missing ``base_dir`` is fatal; entries that are not
    controls are skipped.
    """

    base = Path(base_dir)
    try:
        entries = os.listdir(base)
    except OSError as e:
        raise DiscoveryError(f"Cannot list {base}: {e}") from e

    found: list[Control] = []
    for entry in entries:
        d = base / entry
        if not is_control_dir(d):
            log.debug("skipping %s", d)
            continue
        log.debug("found control %s", d)
        found.append(Control(d))
    return found


def discover(*base_dirs: str | Path) -> list[Control]:
    out: list[Control] = []
    for base in base_dirs:
        out.extend(scan_dir(base))
    return out
