"""
どこで: `tuning.metrics` パッケージ。
何を: FPS ローリング集計器と、メモリ使用量プローブを公開する。
"""

from .aggregator import FPS_MIN_SENTINEL, MetricsAggregator, PerformanceMetrics
from .platform import (
    GraphicsMemoryUsage,
    NullGraphicsMemoryProbe,
    PlatformMemoryStats,
    ProcessMemoryProbe,
    human_bytes,
)

__all__ = [
    "FPS_MIN_SENTINEL",
    "MetricsAggregator",
    "PerformanceMetrics",
    "GraphicsMemoryUsage",
    "NullGraphicsMemoryProbe",
    "PlatformMemoryStats",
    "ProcessMemoryProbe",
    "human_bytes",
]
