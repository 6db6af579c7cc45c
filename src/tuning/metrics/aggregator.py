"""
どこで: `tuning.metrics` の集計サブモジュール。
何を: 毎 tick の dt から FPS 履歴（ローリングウィンドウ）を保持し、平均/最小/最大と
      フレーム時間・スレッド負荷の推定値、メモリ使用量を `PerformanceMetrics` として保持する。
なぜ: 描画側の計測 API に依存せず、オーバーレイ/パネルが参照できる軽量な実行時指標を提供するため。

要点:
- dt <= 0（または非有限）は無視する（状態は一切変えない）。
- 累積時間が 2 秒を超えたら、履歴が 60 件超のとき最古から `len-120` 件を捨て、累積を 2 秒に戻す。
- GPU 時間・スレッド負荷は推定値（CPU 時間/60Hz 予算からの比例計算）。
- VRAM はプローブが正の値を返したときのみ更新する（0 は「不明」）。
"""

from __future__ import annotations

import logging
import math
from collections import deque
from dataclasses import dataclass, replace
from typing import Callable, Optional

import numpy as np

from ..core.tickable import Tickable
from .platform import (
    BYTES_PER_MB,
    GraphicsMemoryUsage,
    NullGraphicsMemoryProbe,
    PlatformMemoryStats,
    ProcessMemoryProbe,
)

logger = logging.getLogger(__name__)

WINDOW_SECONDS = 2.0
MIN_SAMPLES_BEFORE_TRIM = 60
MAX_SAMPLES = 120
FRAME_BUDGET_SECONDS = 0.0166
GPU_TIME_RATIO = 0.8
RENDER_LOAD_RATIO = 0.9
RHI_LOAD_RATIO = 0.7
FPS_MIN_SENTINEL = 999.0


@dataclass(frozen=True)
class PerformanceMetrics:
    fps_current: float = 0.0
    fps_average: float = 0.0
    fps_min: float = FPS_MIN_SENTINEL
    fps_max: float = 0.0
    cpu_frame_time_ms: float = 0.0
    gpu_frame_time_ms: float = 0.0
    ram_usage_mb: float = 0.0
    vram_usage_mb: float = 0.0
    game_thread_load: float = 0.0
    render_thread_load: float = 0.0
    rhi_thread_load: float = 0.0
    draw_calls: int = 0
    primitive_count: int = 0
    network_ping_ms: float = 0.0
    packet_loss: float = 0.0


class MetricsAggregator(Tickable):
    """FPS のローリングウィンドウ集計器。`tick(dt)` は `update(dt)` と同じ。"""

    def __init__(
        self,
        memory: PlatformMemoryStats | None = None,
        graphics_memory: GraphicsMemoryUsage | None = None,
    ) -> None:
        self._memory = memory if memory is not None else ProcessMemoryProbe()
        self._graphics_memory = (
            graphics_memory if graphics_memory is not None else NullGraphicsMemoryProbe()
        )
        self._history: deque[float] = deque()
        self._accumulator = 0.0
        self._metrics = PerformanceMetrics()
        # 描画側の計数（draw calls, primitives）
        self._counts_provider: Optional[Callable[[], tuple[int, int]]] = None
        # ネットワーク統計（ping[ms], packet loss[0..1]）
        self._network_provider: Optional[Callable[[], tuple[float, float]]] = None

    # -------- Tickable --------
    def tick(self, dt: float) -> None:
        self.update(dt)

    def update(self, dt: float) -> None:
        try:
            dt = float(dt)
        except (TypeError, ValueError):
            return
        if not math.isfinite(dt) or dt <= 0.0:
            return

        fps = 1.0 / dt
        self._history.append(fps)
        self._accumulator += dt
        if self._accumulator > WINDOW_SECONDS:
            count = len(self._history)
            if count > MIN_SAMPLES_BEFORE_TRIM:
                for _ in range(max(0, count - MAX_SAMPLES)):
                    self._history.popleft()
            self._accumulator = WINDOW_SECONDS

        window = np.fromiter(self._history, dtype=np.float64, count=len(self._history))
        cpu_ms = dt * 1000.0
        game_load = float(np.clip(dt / FRAME_BUDGET_SECONDS, 0.0, 1.0))

        m = replace(
            self._metrics,
            fps_current=fps,
            fps_average=float(window.mean()),
            fps_min=float(window.min()),
            fps_max=float(window.max()),
            cpu_frame_time_ms=cpu_ms,
            gpu_frame_time_ms=cpu_ms * GPU_TIME_RATIO,
            game_thread_load=game_load,
            render_thread_load=game_load * RENDER_LOAD_RATIO,
            rhi_thread_load=game_load * RHI_LOAD_RATIO,
        )
        self._metrics = self._sample_externals(m)

    def _sample_externals(self, m: PerformanceMetrics) -> PerformanceMetrics:
        """メモリ・計数・ネットワークのプローブ値を反映する（失敗時は前回値を維持）。"""
        try:
            ram_mb = float(self._memory.used_physical_bytes()) / BYTES_PER_MB
            m = replace(m, ram_usage_mb=ram_mb)
        except Exception as e:
            logger.debug("memory probe failed: %s", e)
        try:
            vram = float(self._graphics_memory.used_video_bytes())
            if vram > 0:
                m = replace(m, vram_usage_mb=vram / BYTES_PER_MB)
        except Exception as e:
            logger.debug("graphics memory probe failed: %s", e)
        if self._counts_provider is not None:
            try:
                draws, prims = self._counts_provider()
                m = replace(m, draw_calls=int(draws), primitive_count=int(prims))
            except Exception as e:
                logger.debug("counts provider failed: %s", e)
        if self._network_provider is not None:
            try:
                ping, loss = self._network_provider()
                m = replace(m, network_ping_ms=float(ping), packet_loss=float(loss))
            except Exception as e:
                logger.debug("network provider failed: %s", e)
        return m

    def snapshot(self) -> PerformanceMetrics:
        # frozen dataclass なので参照がそのまま時点コピーになる
        return self._metrics

    def reset(self) -> None:
        """履歴と累積を捨て、min/max/avg を初期値へ戻す（fps_current は維持）。"""
        self._history.clear()
        self._accumulator = 0.0
        self._metrics = replace(
            self._metrics, fps_min=FPS_MIN_SENTINEL, fps_max=0.0, fps_average=0.0
        )

    @property
    def history_size(self) -> int:
        return len(self._history)

    # -------- external provider wiring --------
    def set_counts_provider(self, provider: Callable[[], tuple[int, int]] | None) -> None:
        """描画側から (draw calls, primitives) を受け取るプロバイダを登録する。"""
        self._counts_provider = provider

    def set_network_provider(self, provider: Callable[[], tuple[float, float]] | None) -> None:
        """(ping[ms], packet loss) を返すプロバイダを登録する。"""
        self._network_provider = provider


__all__ = [
    "PerformanceMetrics",
    "MetricsAggregator",
    "WINDOW_SECONDS",
    "MAX_SAMPLES",
    "FPS_MIN_SENTINEL",
]
