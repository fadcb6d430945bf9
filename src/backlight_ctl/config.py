from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from backlight_ctl.calc import Adjustment, Mode
from backlight_ctl.paths import DEFAULT_BASE_DIRS, default_config_path

KNOWN_KEYS = {"min_brightness", "base_dirs"}

# -i value that means "not given".
NO_INDEX = -1


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class Options:
    list_controls: bool = False
    index: int | None = None
    name: str | None = None
    adjustment: Adjustment | None = None
    minimum: int = 0
    base_dirs: tuple[Path, ...] = field(default=DEFAULT_BASE_DIRS)
    verbose: bool = False

    @property
    def listing(self) -> bool:
        # No adjustment means there is nothing to do but list.
        return self.list_controls or self.adjustment is None


def parse_adjustment(text: str) -> Adjustment:
    """Parse ``-s`` input such as ``50``, ``+10``, ``-20%`` or ``75%``."""

    s = text.strip()
    if not s:
        raise ConfigError("Empty brightness adjustment")

    relative = s[0] in "+-"
    percentage = s.endswith("%")
    number = s.removesuffix("%")
    try:
        value = float(number)
    except ValueError as e:
        raise ConfigError(f"Invalid brightness adjustment: {text!r}") from e
    if not math.isfinite(value):
        raise ConfigError(f"Brightness adjustment must be finite: {text!r}")

    return Adjustment(value=value, mode=Mode.from_flags(relative, percentage))


def load(path: str | Path | None = None) -> dict[str, Any]:
    """Load the YAML config file.

    An explicit ``path`` must exist; the default location is optional.
    """

    if path is None:
        p = default_config_path()
        if not p.is_file():
            return {}
    else:
        p = Path(path)

    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read config {p}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {p}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("Top-level config must be a mapping")
    validate(data)
    return data


def validate(cfg: dict[str, Any]) -> None:
    unknown = set(cfg) - KNOWN_KEYS
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(sorted(unknown))}")

    if "min_brightness" in cfg:
        m = cfg["min_brightness"]
        if isinstance(m, bool) or not isinstance(m, int) or m < 0:
            raise ConfigError("min_brightness must be a non-negative integer")

    if "base_dirs" in cfg:
        dirs = cfg["base_dirs"]
        if not isinstance(dirs, list) or not dirs:
            raise ConfigError("base_dirs must be a non-empty list")
        for d in dirs:
            if not isinstance(d, str) or not d.strip():
                raise ConfigError(f"base_dirs entries must be paths: {d!r}")


def build_options(
    cfg: dict[str, Any],
    *,
    list_controls: bool = False,
    index: int | None = None,
    name: str | None = None,
    spec: str | None = None,
    minimum: int | None = None,
    verbose: bool = False,
) -> Options:
    """Merge command-line values over config file values and check combinations."""

    if index == NO_INDEX:
        index = None
    if index is not None and index < 0:
        raise ConfigError("Illegal control id (must be positive)")

    if index is not None and name:
        raise ConfigError(
            "Can't specify backlight control by name and id at the same time. "
            "Please use either -i or -n"
        )

    adjustment = parse_adjustment(spec) if spec else None
    if adjustment is not None and index is None and not name:
        raise ConfigError("Brightness control not specified. Please use -i or -n")

    if minimum is None:
        minimum = int(cfg.get("min_brightness", 0))
    if minimum < 0:
        raise ConfigError("Minimum brightness must not be negative")

    base_dirs = tuple(Path(d.strip()) for d in cfg.get("base_dirs", [])) or DEFAULT_BASE_DIRS

    return Options(
        list_controls=list_controls,
        index=index,
        name=name or None,
        adjustment=adjustment,
        minimum=minimum,
        base_dirs=base_dirs,
        verbose=verbose,
    )
