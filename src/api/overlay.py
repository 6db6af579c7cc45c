"""
どこで: `api.overlay`（性能オーバーレイのファサード）。
何を: 表示中は毎 tick ストアへ dt を送り、一定間隔で表示用テキスト辞書 `data` を更新して
      購読者へメトリクスのスナップショットを通知する `OverlayController`。
なぜ: 描画ツールキットに依存せず、任意の UI がポーリング/購読だけで性能表示できるようにするため。
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from common.settings import get as get_settings
from tuning.core.tickable import Tickable
from tuning.metrics import FPS_MIN_SENTINEL, PerformanceMetrics, human_bytes
from tuning.metrics.platform import BYTES_PER_MB
from tuning.store import SettingsStore
from util.utils import config_section

logger = logging.getLogger(__name__)

FPS = "FPS"
AVG = "AVG"
MIN = "MIN"
MAX = "MAX"
CPU = "CPU"
GPU = "GPU"
RAM = "RAM"
VRAM = "VRAM"

DEFAULT_ORDER: tuple[str, ...] = (FPS, AVG, MIN, MAX, CPU, GPU, RAM, VRAM)
DEFAULT_UPDATE_INTERVAL = 0.1

MetricsSubscriber = Callable[[PerformanceMetrics], None]


def _resolve_defaults() -> tuple[float, bool]:
    """更新間隔と初期表示: `TDK_OVERLAY_INTERVAL` → 設定 `overlay.*` → 既定。"""
    cfg = config_section("overlay")
    interval = get_settings().OVERLAY_INTERVAL
    if interval is None:
        try:
            interval = float(cfg.get("update_interval", DEFAULT_UPDATE_INTERVAL))
        except (TypeError, ValueError):
            interval = DEFAULT_UPDATE_INTERVAL
    visible = cfg.get("visible", True)
    return max(0.0, float(interval)), bool(visible)


def format_metrics(
    m: PerformanceMetrics, order: Sequence[str] | None = None
) -> dict[str, str]:
    """メトリクスを表示用の文字列辞書へ整形する。

    `order` は表示項目と順序（None なら `DEFAULT_ORDER`）。未知の項目名は無視する。
    """
    no_samples = m.fps_min >= FPS_MIN_SENTINEL and m.fps_max == 0.0
    texts = {
        FPS: f"{m.fps_current:4.1f}",
        AVG: f"{m.fps_average:4.1f}",
        MIN: "--" if no_samples else f"{m.fps_min:4.1f}",
        MAX: "--" if no_samples else f"{m.fps_max:4.1f}",
        CPU: f"{m.cpu_frame_time_ms:4.1f}ms",
        GPU: f"{m.gpu_frame_time_ms:4.1f}ms",
        RAM: human_bytes(m.ram_usage_mb * BYTES_PER_MB),
        VRAM: "N/A" if m.vram_usage_mb <= 0 else human_bytes(m.vram_usage_mb * BYTES_PER_MB),
    }
    return {key: texts[key] for key in (DEFAULT_ORDER if order is None else order) if key in texts}


class OverlayController(Tickable):
    """性能オーバーレイの状態（表示/更新タイマ/表示テキスト）を保持する。"""

    def __init__(
        self,
        store: SettingsStore,
        *,
        update_interval: float | None = None,
        visible: bool | None = None,
        order: Sequence[str] | None = None,
    ) -> None:
        cfg_interval, cfg_visible = _resolve_defaults()
        self._store = store
        self._interval = cfg_interval if update_interval is None else max(0.0, float(update_interval))
        self._visible = cfg_visible if visible is None else bool(visible)
        self._order: tuple[str, ...] = DEFAULT_ORDER if order is None else tuple(order)
        self._timer = 0.0
        self._subscribers: list[MetricsSubscriber] = []
        self.data: dict[str, str] = {}

    # -------- Tickable --------
    def tick(self, dt: float) -> None:
        if not self._visible:
            return
        self._store.update_performance_metrics(dt)
        self._timer += dt
        if self._timer < self._interval:
            return
        self._timer = 0.0
        snapshot = self._store.get_performance_metrics()
        self.data = format_metrics(snapshot, self._order)
        for cb in list(self._subscribers):
            try:
                cb(snapshot)
            except Exception:
                logger.debug("overlay subscriber failed", exc_info=True)

    # -------- 表示制御 --------
    @property
    def is_visible(self) -> bool:
        return self._visible

    @property
    def update_interval(self) -> float:
        return self._interval

    def set_visible(self, visible: bool) -> None:
        self._visible = bool(visible)

    def toggle(self) -> bool:
        self.set_visible(not self._visible)
        return self._visible

    def reset_stats(self) -> None:
        self._store.reset_performance_stats()

    def get_performance_metrics(self) -> PerformanceMetrics:
        return self._store.get_performance_metrics()

    # -------- 購読 --------
    def subscribe(self, cb: MetricsSubscriber) -> None:
        self._subscribers.append(cb)

    def unsubscribe(self, cb: MetricsSubscriber) -> None:
        try:
            self._subscribers.remove(cb)
        except ValueError:
            pass


__all__ = ["OverlayController", "format_metrics", "DEFAULT_ORDER"]
