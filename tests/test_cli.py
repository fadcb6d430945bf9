from __future__ import annotations

from pathlib import Path

import pytest

from backlight_ctl import cli
from backlight_ctl.cli import (
    EXIT_CONFIG,
    EXIT_ENVIRONMENT,
    EXIT_NOT_FOUND,
    EXIT_OK,
    _join_set_values,
    main,
)


def _control(base: Path, name: str, current: int, maximum: int) -> Path:
    d = base / name
    d.mkdir(parents=True)
    (d / "brightness").write_text(f"{current}\n", encoding="utf-8")
    (d / "max_brightness").write_text(f"{maximum}\n", encoding="utf-8")
    return d


@pytest.fixture
def sysfs(tmp_path: Path, monkeypatch) -> Path:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    _control(tmp_path / "backlight", "panel", 50, 100)
    _control(tmp_path / "leds", "kbd", 1, 3)
    cfg = tmp_path / "config.yaml"
    cfg.write_text(
        f"base_dirs:\n  - {tmp_path / 'backlight'}\n  - {tmp_path / 'leds'}\n",
        encoding="utf-8",
    )
    return tmp_path


def _run(sysfs: Path, *args: str) -> int:
    return main(["-c", str(sysfs / "config.yaml"), *args])


def _brightness(sysfs: Path) -> str:
    return (sysfs / "backlight" / "panel" / "brightness").read_text(encoding="utf-8")


def test_join_set_values() -> None:
    assert _join_set_values(["-i", "0", "-s", "-20%"]) == ["-i", "0", "--set=-20%"]
    assert _join_set_values(["--set", "+5"]) == ["--set=+5"]
    assert _join_set_values(["-s"]) == ["-s"]


def test_list_all(sysfs: Path, capsys) -> None:
    assert _run(sysfs) == EXIT_OK
    lines = capsys.readouterr().out.splitlines()
    assert [line.split() for line in lines] == [
        ["0", "panel", "50", "100", "50.00"],
        ["1", "kbd", "1", "3", "33.33"],
    ]
    assert lines[0] == f" 0  {'panel':>25}    50   100   50.00"


def test_list_selected_keeps_discovery_index(sysfs: Path, capsys) -> None:
    assert _run(sysfs, "-l", "-n", "kbd") == EXIT_OK
    assert [line.split()[:2] for line in capsys.readouterr().out.splitlines()] == [["1", "kbd"]]


@pytest.mark.parametrize(
    ("spec", "expected"),
    [("-20", "30"), ("+60%", "100"), ("5", "10"), ("25%", "25"), ("-100%", "10")],
)
def test_adjust_with_floor(sysfs: Path, capsys, spec: str, expected: str) -> None:
    assert _run(sysfs, "-i", "0", "-m", "10", "-s", spec) == EXIT_OK
    assert _brightness(sysfs) == expected
    assert capsys.readouterr().out == f"Setting backlight to {expected}\n"


def test_adjust_by_name(sysfs: Path) -> None:
    assert _run(sysfs, "-n", "kbd", "-s", "+1") == EXIT_OK
    assert (sysfs / "leds" / "kbd" / "brightness").read_text(encoding="utf-8") == "2"


def test_min_from_config(sysfs: Path) -> None:
    cfg = sysfs / "config.yaml"
    cfg.write_text(cfg.read_text(encoding="utf-8") + "min_brightness: 40\n", encoding="utf-8")
    assert _run(sysfs, "-i", "0", "-s", "0") == EXIT_OK
    assert _brightness(sysfs) == "40"


def test_list_flag_with_adjustment_does_not_write(sysfs: Path, capsys) -> None:
    assert _run(sysfs, "-l", "-i", "0", "-s", "80") == EXIT_OK
    assert _brightness(sysfs) == "50\n"
    assert "panel" in capsys.readouterr().out


@pytest.mark.parametrize(
    "args",
    [
        ("-i", "0", "-n", "panel"),
        ("-s", "10"),
        ("-i", "-3"),
        ("-i", "0", "-s", "ten"),
        ("-i", "0", "-s", "10", "-m", "500"),
    ],
)
def test_config_errors(sysfs: Path, capsys, args: tuple[str, ...]) -> None:
    assert _run(sysfs, *args) == EXIT_CONFIG
    assert "backlight-ctl:" in capsys.readouterr().err
    assert _brightness(sysfs) == "50\n"


@pytest.mark.parametrize("args", [("-i", "5", "-s", "10"), ("-n", "missing"), ("-l", "-i", "2")])
def test_not_found(sysfs: Path, args: tuple[str, ...]) -> None:
    assert _run(sysfs, *args) == EXIT_NOT_FOUND


def test_malformed_sysfs_value(sysfs: Path, capsys) -> None:
    (sysfs / "leds" / "kbd" / "max_brightness").write_text("lots\n", encoding="utf-8")
    assert _run(sysfs, "-l") == EXIT_ENVIRONMENT
    assert "does not contain an integer" in capsys.readouterr().err


def test_missing_base_dir(sysfs: Path) -> None:
    cfg = sysfs / "config.yaml"
    cfg.write_text(f"base_dirs:\n  - {sysfs / 'nope'}\n", encoding="utf-8")
    assert _run(sysfs) == EXIT_ENVIRONMENT


def test_help_exits_zero(capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["-h"])
    assert exc.value.code == 0
    assert "-s" in capsys.readouterr().out


def test_index_minus_one_lists_everything(sysfs: Path, capsys) -> None:
    assert _run(sysfs, "-i", "-1") == EXIT_OK
    assert [line.split()[1] for line in capsys.readouterr().out.splitlines()] == ["panel", "kbd"]


def test_verbose_flag_reaches_logging_setup(sysfs: Path, monkeypatch) -> None:
    seen: list[bool] = []
    monkeypatch.setattr(cli, "setup_logging", seen.append)
    assert _run(sysfs, "-v") == EXIT_OK
    assert _run(sysfs) == EXIT_OK
    assert seen == [True, False]


def test_uninspectable_entry_is_skipped(sysfs: Path, monkeypatch, capsys) -> None:
    locked = sysfs / "leds" / "locked"
    locked.mkdir()
    real_stat = Path.stat

    def stat(self, *args, **kwargs):
        if locked in (self, self.parent):
            raise PermissionError(13, "Permission denied", str(self))
        return real_stat(self, *args, **kwargs)

    monkeypatch.setattr(Path, "stat", stat)
    assert _run(sysfs) == EXIT_OK
    assert [line.split()[1] for line in capsys.readouterr().out.splitlines()] == ["panel", "kbd"]
