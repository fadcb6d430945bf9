from __future__ import annotations

import logging
from collections.abc import Sequence

from backlight_ctl.errors import ControlNotFoundError
from backlight_ctl.system.control import Control

log = logging.getLogger(__name__)


def select(
    controls: Sequence[Control], index: int | None = None, name: str | None = None
) -> Control | None:
    """Pick one control by discovery index or by directory name.

    Returns None when neither is given, meaning every control.
    """

    if index is not None:
        log.debug("selecting by index %d", index)
        if 0 <= index < len(controls):
            return controls[index]
        raise ControlNotFoundError(f"Brightness control {index} was not found")

    if name:
        log.debug("selecting by name %r", name)
        for c in controls:
            if c.name == name:
                return c
        raise ControlNotFoundError(f"Brightness control named '{name}' not found (try -l)")

    log.debug("selecting all")
    return None
