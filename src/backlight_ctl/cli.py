from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from typing import TextIO

from backlight_ctl import __version__
from backlight_ctl.calc import compute, percent
from backlight_ctl.config import ConfigError, Options, build_options, load
from backlight_ctl.errors import BrightnessError, ControlNotFoundError
from backlight_ctl.selector import select
from backlight_ctl.system.discovery import discover

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG = 1
EXIT_NOT_FOUND = 2
EXIT_ENVIRONMENT = 3

_SET_FLAGS = ("-s", "--set")


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="backlight-ctl",
        description="List and adjust sysfs backlight and LED brightness controls.",
    )
    ap.add_argument("--version", action="version", version=__version__)
    ap.add_argument("-l", dest="list_controls", action="store_true", help="list controls")
    ap.add_argument("-i", dest="index", type=int, help="select control by index (see -l)")
    ap.add_argument("-n", dest="name", help="select control by name")
    ap.add_argument(
        "-s",
        "--set",
        dest="spec",
        metavar="VALUE",
        help="set/adjust brightness: 50 (absolute), +10/-10 (relative), 30%%, -5%%",
    )
    ap.add_argument("-m", dest="minimum", type=int, help="minimum brightness (default: 0)")
    ap.add_argument("-c", "--config", help="YAML config file")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return ap


def _join_set_values(argv: Sequence[str]) -> list[str]:
    """Attach the value of -s to its flag so that "-s -20%" is not read as an option."""

    out: list[str] = []
    it = iter(argv)
    for arg in it:
        if arg in _SET_FLAGS:
            value = next(it, None)
            if value is None:
                out.append(arg)
                break
            out.append(f"--set={value}")
        else:
            out.append(arg)
    return out


def list_controls(options: Options, out: TextIO) -> None:
    controls = discover(*options.base_dirs)
    selected = select(controls, options.index, options.name)
    for i, c in enumerate(controls):
        if selected is not None and c != selected:
            continue
        cur = c.read_current()
        mx = c.read_max()
        print(f"{i:2d}  {c.name:>25}  {cur:4d}  {mx:4d}  {percent(cur, mx):6.2f}", file=out)


def adjust(options: Options, out: TextIO) -> int:
    controls = discover(*options.base_dirs)
    selected = select(controls, options.index, options.name)
    if selected is None or options.adjustment is None:
        raise ConfigError("Brightness control not specified. Please use -i or -n")

    mx = selected.read_max()
    cur = selected.read_current()
    if options.minimum > mx:
        raise ConfigError(
            f"Minimum brightness {options.minimum} exceeds max_brightness {mx} "
            f"of {selected.name}"
        )

    new = compute(mx, options.minimum, cur, options.adjustment)
    log.debug("%s: %d -> %d (max %d)", selected.name, cur, new, mx)
    print(f"Setting backlight to {new}", file=out)
    selected.write_current(new)
    return new


def run(options: Options, out: TextIO | None = None) -> None:
    out = sys.stdout if out is None else out
    if options.listing:
        list_controls(options, out)
    else:
        adjust(options, out)


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(_join_set_values(sys.argv[1:] if argv is None else argv))

    try:
        options = build_options(
            load(args.config),
            list_controls=args.list_controls,
            index=args.index,
            name=args.name,
            spec=args.spec,
            minimum=args.minimum,
            verbose=args.verbose,
        )
    except ConfigError as e:
        print(f"backlight-ctl: {e}", file=sys.stderr)
        return EXIT_CONFIG

    setup_logging(options.verbose)
    try:
        run(options)
    except ConfigError as e:
        print(f"backlight-ctl: {e}", file=sys.stderr)
        return EXIT_CONFIG
    except ControlNotFoundError as e:
        print(f"backlight-ctl: {e}", file=sys.stderr)
        return EXIT_NOT_FOUND
    except BrightnessError as e:
        print(f"backlight-ctl: {e}", file=sys.stderr)
        return EXIT_ENVIRONMENT
    return EXIT_OK
