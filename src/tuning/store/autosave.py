"""
どこで: `tuning.store.autosave`。
何を: 一定間隔ごとに、ストアがダーティなら保存する `AutoSaver`（Tickable）。
なぜ: 保存をホストのフレームループ上で直列に行い、明示保存を忘れても調整値を失わないため。

補足:
- 間隔 0 以下は無効（tick は何もしない）。
- 保存失敗はストア側でログ済み。次の間隔で再び試みる（その場でのリトライはしない）。
"""

from __future__ import annotations

import logging

from common.settings import get as get_settings
from util.utils import config_section

from ..core.tickable import Tickable
from .store import SettingsStore

logger = logging.getLogger(__name__)


def resolve_autosave_interval() -> float:
    """`TDK_AUTOSAVE_INTERVAL` → 設定 `settings.autosave_interval` → 0（無効）。"""
    env_val = get_settings().AUTOSAVE_INTERVAL
    if env_val is not None:
        return float(env_val)
    raw = config_section("settings").get("autosave_interval", 0)
    try:
        return max(0.0, float(raw))
    except (TypeError, ValueError):
        return 0.0


class AutoSaver(Tickable):
    def __init__(self, store: SettingsStore, interval: float | None = None) -> None:
        self._store = store
        self._interval = resolve_autosave_interval() if interval is None else max(0.0, float(interval))
        self._elapsed = 0.0
        self.saves = 0

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def enabled(self) -> bool:
        return self._interval > 0.0

    def tick(self, dt: float) -> None:
        if not self.enabled or dt <= 0:
            return
        self._elapsed += dt
        if self._elapsed < self._interval:
            return
        self._elapsed = 0.0
        if not self._store.is_dirty:
            return
        logger.debug("autosave: dirty categories %s", self._store.dirty_categories())
        if self._store.save_settings():
            self.saves += 1


__all__ = ["AutoSaver", "resolve_autosave_interval"]
