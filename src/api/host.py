"""
どこで: `api.host`（ホスト向けの組み立てヘルパ）。
何を: 既定の協調オブジェクトでストアを生成し、保存済み設定を読み込んで全カテゴリを適用する
      `open_store()` と、オーバーレイ/自動保存を FrameClock へ束ねる `make_frame_clock()`。
なぜ: グローバル単一インスタンスを置かず、ホストが明示的に生成・保持する構成を数行で組めるようにするため。

流れ（open_store）:
1) ロギング: `TDK_LOG_LEVEL` → 設定 `logging.level` → INFO で最小構成（既存ハンドラがあれば何もしない）。
2) ストア生成: 未指定の協調オブジェクトは既定（NullRuntimeSink/FileStorage/psutil プローブ）。
3) 読込: ファイル欠損は正常（既定値のまま）。
4) 適用: 読込の成否に関わらず全カテゴリを 1 回適用（読込成功時はストア側で適用済み）。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from common.logging import setup_default_logging
from common.settings import get as get_settings
from tuning.core import FrameClock, Tickable
from tuning.metrics import MetricsAggregator
from tuning.settings import SettingsDocument
from tuning.store import AutoSaver, RuntimeSink, SettingsStore, Storage
from util.utils import config_section

from .overlay import OverlayController

logger = logging.getLogger(__name__)


def _resolve_log_level() -> str:
    env_level = get_settings().LOG_LEVEL
    if env_level:
        return env_level
    level = config_section("logging").get("level", "INFO")
    return str(level) if level else "INFO"


def open_store(
    *,
    defaults: SettingsDocument | None = None,
    sink: RuntimeSink | None = None,
    storage: Storage | None = None,
    path: str | Path | None = None,
    metrics: MetricsAggregator | None = None,
    load: bool = True,
    configure_logging: bool = True,
) -> SettingsStore:
    if configure_logging:
        setup_default_logging(_resolve_log_level())

    store = SettingsStore(
        defaults=defaults, sink=sink, storage=storage, path=path, metrics=metrics
    )
    if load and store.load_settings():
        return store
    store.apply_all()
    logger.debug("settings store opened with defaults: %s", store.path)
    return store


def make_frame_clock(
    store: SettingsStore,
    *,
    overlay: OverlayController | None = None,
    autosave_interval: float | None = None,
    extra: Sequence[Tickable] = (),
) -> FrameClock:
    """オーバーレイ（無ければメトリクス集計器）→ 追加 Tickable → 自動保存 の順で駆動する。"""
    tickables: list[Tickable] = [overlay if overlay is not None else store.metrics]
    tickables.extend(extra)
    saver = AutoSaver(store, autosave_interval)
    if saver.enabled:
        tickables.append(saver)
    return FrameClock(tickables)


__all__ = ["open_store", "make_frame_clock"]
