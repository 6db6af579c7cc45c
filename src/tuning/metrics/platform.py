"""
どこで: `tuning.metrics.platform`。
何を: メモリ使用量の取得口（Protocol）と既定実装（psutil による RSS、VRAM は不明扱い）を提供。
なぜ: 集計器をプラットフォーム API から切り離し、テストでは固定値のプローブへ差し替えるため。
"""

from __future__ import annotations

import os
from typing import Protocol

import psutil

BYTES_PER_MB = 1024.0 * 1024.0


class PlatformMemoryStats(Protocol):
    def used_physical_bytes(self) -> int:
        """プロセスが使用中の物理メモリ（バイト）。"""


class GraphicsMemoryUsage(Protocol):
    def used_video_bytes(self) -> int:
        """GPU リソースの使用量（バイト）。不明なら 0。"""


class ProcessMemoryProbe:
    """現在プロセスの RSS を返す。"""

    def __init__(self, pid: int | None = None) -> None:
        self._proc = psutil.Process(os.getpid() if pid is None else pid)

    def used_physical_bytes(self) -> int:
        return int(self._proc.memory_info().rss)


class NullGraphicsMemoryProbe:
    def used_video_bytes(self) -> int:
        return 0


def human_bytes(n: float) -> str:
    """バイト数を `12.3MB` 形式へ整形する。"""
    for u in "B KB MB GB TB".split():
        if n < 1024:
            return f"{n:4.1f}{u}"
        n /= 1024
    return f"{n:4.1f}PB"


__all__ = [
    "BYTES_PER_MB",
    "PlatformMemoryStats",
    "GraphicsMemoryUsage",
    "ProcessMemoryProbe",
    "NullGraphicsMemoryProbe",
    "human_bytes",
]
