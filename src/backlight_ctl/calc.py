from __future__ import annotations

import enum
import math
from dataclasses import dataclass


class Mode(enum.Enum):
    ABSOLUTE = "absolute"
    RELATIVE = "relative"
    PERCENT = "percent"
    RELATIVE_PERCENT = "relative_percent"

    @classmethod
    def from_flags(cls, relative: bool, percentage: bool) -> Mode:
        if relative:
            return cls.RELATIVE_PERCENT if percentage else cls.RELATIVE
        return cls.PERCENT if percentage else cls.ABSOLUTE


@dataclass(frozen=True)
class Adjustment:
    value: float
    mode: Mode = Mode.ABSOLUTE

    @property
    def is_relative(self) -> bool:
        return self.mode in (Mode.RELATIVE, Mode.RELATIVE_PERCENT)

    @property
    def is_percentage(self) -> bool:
        return self.mode in (Mode.PERCENT, Mode.RELATIVE_PERCENT)


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3, -2.5 -> -3)."""

    if value < 0:
        return -round_half_away(-value)
    return math.floor(value + 0.5)


def target(maximum: int, current: int, adj: Adjustment) -> float:
    """Unclamped brightness requested by ``adj``."""

    if adj.mode is Mode.RELATIVE_PERCENT:
        return current + maximum * adj.value / 100
    if adj.mode is Mode.RELATIVE:
        return current + adj.value
    if adj.mode is Mode.PERCENT:
        return adj.value / 100 * maximum
    return adj.value


def compute(maximum: int, minimum: int, current: int, adj: Adjustment) -> int:
    """Return the new brightness for ``adj``, kept within [minimum, maximum].

    The float result is clamped first; only values already inside the range
    are rounded. Anything whose integer part falls below ``minimum`` snaps to
    ``minimum`` even when rounding would have lifted it there.

    ``adj.value`` must be finite and ``minimum`` must not exceed ``maximum``.
    """

    bl = target(maximum, current, adj)
    if bl < 0 or math.trunc(bl) < minimum:
        return minimum
    if bl > maximum:
        return maximum
    return round_half_away(bl)


def percent(current: int, maximum: int) -> float:
    if maximum <= 0:
        return 0.0
    return 100.0 * current / maximum
