from __future__ import annotations

from pathlib import Path

from backlight_ctl.paths import default_config_path


def test_default_config_path_uses_xdg(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert default_config_path() == tmp_path / "backlight-ctl" / "config.yaml"


def test_default_config_path_falls_back_to_home(monkeypatch) -> None:
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    p = default_config_path()
    assert str(p).startswith(str(Path.home()))
    assert p.parts[-3:] == (".config", "backlight-ctl", "config.yaml")
