"""
どこで: `api` 入口（高レベル公開 API）。
何を: 設定ストアの組み立て（`open_store`）と UI 向けファサード（オーバーレイ/パネル）を再輸出。
なぜ: ホストが単一名前空間からストア生成→フレーム駆動→UI 連携まで完結できるようにするため。

Usage:
    from api import open_store, OverlayController, PanelController, make_frame_clock

    store = open_store()
    overlay = OverlayController(store)
    panel = PanelController(store)
    clock = make_frame_clock(store, overlay=overlay)

    clock.tick()                      # 毎フレーム（dt は自動計測）
    panel.set_value("set_shadow_quality", 2)
    store.set_frame_rate_limit(144)
    store.save_settings()
"""

from tuning.metrics import PerformanceMetrics
from tuning.settings import SettingsDocument
from tuning.store import SettingsStore

from .host import make_frame_clock, open_store
from .overlay import OverlayController, format_metrics
from .panel import PanelController

__all__ = [
    "open_store",
    "make_frame_clock",
    "OverlayController",
    "PanelController",
    "format_metrics",
    # 型（高度な使用）
    "SettingsStore",
    "SettingsDocument",
    "PerformanceMetrics",
]

__version__ = "0.3.0"
