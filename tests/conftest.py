"""共通フィクスチャ。

- `TDK_*` 環境変数の隔離
- 記録用ノブ表 / 一時ディレクトリ上のストレージ
- 固定値のメモリプローブ
- ストア生成ファクトリ
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterator

import pytest

import common.settings as tdk_settings
from tuning.metrics import MetricsAggregator
from tuning.settings import SettingsDocument
from tuning.store import ConsoleVariableTable, FileStorage, SettingsStore

_TDK_ENV = ("TDK_STATE_DIR", "TDK_LOG_LEVEL", "TDK_AUTOSAVE_INTERVAL", "TDK_OVERLAY_INTERVAL")


class FixedMemoryProbe:
    def __init__(self, used_bytes: int = 256 * 1024 * 1024) -> None:
        self.used_bytes = used_bytes

    def used_physical_bytes(self) -> int:
        return self.used_bytes


class FixedGraphicsMemoryProbe:
    def __init__(self, used_bytes: int = 0) -> None:
        self.used_bytes = used_bytes

    def used_video_bytes(self) -> int:
        return self.used_bytes


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in _TDK_ENV:
        monkeypatch.delenv(name, raising=False)
    tdk_settings.reload_from_env()
    yield
    tdk_settings.reload_from_env()


@pytest.fixture()
def knobs() -> ConsoleVariableTable:
    return ConsoleVariableTable()


@pytest.fixture()
def settings_path(tmp_path: Path) -> Path:
    return tmp_path / "state" / "settings.json"


@pytest.fixture()
def memory_probe() -> FixedMemoryProbe:
    return FixedMemoryProbe()


@pytest.fixture()
def metrics(memory_probe: FixedMemoryProbe) -> MetricsAggregator:
    return MetricsAggregator(memory=memory_probe, graphics_memory=FixedGraphicsMemoryProbe())


@pytest.fixture()
def make_store(
    knobs: ConsoleVariableTable, settings_path: Path, memory_probe: FixedMemoryProbe
) -> Callable[..., SettingsStore]:
    def _make(
        *,
        defaults: SettingsDocument | None = None,
        sink=None,
        storage=None,
        path: Path | None = None,
    ) -> SettingsStore:
        return SettingsStore(
            defaults=defaults,
            sink=knobs if sink is None else sink,
            storage=FileStorage() if storage is None else storage,
            path=settings_path if path is None else path,
            metrics=MetricsAggregator(memory=memory_probe, graphics_memory=FixedGraphicsMemoryProbe()),
        )

    return _make


@pytest.fixture()
def store(make_store: Callable[..., SettingsStore]) -> SettingsStore:
    return make_store()
