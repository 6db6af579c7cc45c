from __future__ import annotations

from pathlib import Path

import pytest

import common.settings as tdk_settings
from tuning.core import FrameClock
from tuning.store import AutoSaver, resolve_autosave_interval


def test_autosave_saves_only_when_dirty_and_due(store, settings_path: Path):
    saver = AutoSaver(store, interval=1.0)
    clock = FrameClock([saver])

    clock.tick(0.6)
    clock.tick(0.6)
    assert saver.saves == 0  # 期限は来たがダーティでない
    assert not settings_path.exists()

    store.set_camera_smoothing(0.2)
    clock.tick(0.5)
    assert saver.saves == 0
    clock.tick(0.5)
    assert saver.saves == 1
    assert settings_path.exists()
    assert store.is_dirty is False


def test_autosave_disabled_with_zero_interval(store):
    saver = AutoSaver(store, interval=0)
    store.set_camera_smoothing(0.2)
    for _ in range(100):
        saver.tick(1.0)
    assert saver.enabled is False
    assert saver.saves == 0


def test_autosave_interval_resolution(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(
        "util.utils.load_config", lambda: {"settings": {"autosave_interval": 5}}, raising=True
    )
    assert resolve_autosave_interval() == 5.0

    monkeypatch.setenv("TDK_AUTOSAVE_INTERVAL", "2.5")
    tdk_settings.reload_from_env()
    assert resolve_autosave_interval() == 2.5
