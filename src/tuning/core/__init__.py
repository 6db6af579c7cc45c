"""
どこで: `tuning.core` サブパッケージ。
何を: フレーム駆動（Tickable/FrameClock）の最小インターフェースを提供。
なぜ: メトリクス集計/自動保存/オーバーレイ等の毎フレーム処理を一様に扱うため。
"""

from .frame_clock import FrameClock
from .tickable import Tickable

__all__ = ["FrameClock", "Tickable"]
