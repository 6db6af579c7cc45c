"""
どこで: `api.panel`（設定パネルのファサード）。
何を: UI からの値変更を生成済みセッターへ名前で転送し、保存/読込/既定復帰と再描画通知を仲介する。
なぜ: ウィジェット実装をストアの詳細から切り離し、どの UI からも同じ経路で設定を操作するため。
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable

from tuning.settings import SETTER_INDEX, SettingsDocument
from tuning.store import SettingsStore

logger = logging.getLogger(__name__)

PanelSubscriber = Callable[[SettingsDocument], None]
ResolutionProvider = Callable[[], Iterable[tuple[int, int]]]

# プラットフォームから取得できないときの候補
FALLBACK_RESOLUTIONS: tuple[tuple[int, int], ...] = (
    (1280, 720),
    (1920, 1080),
    (2560, 1440),
    (3840, 2160),
)


class PanelController:
    def __init__(
        self, store: SettingsStore, *, resolutions: ResolutionProvider | None = None
    ) -> None:
        self._store = store
        self._resolutions = resolutions
        self._subscribers: list[PanelSubscriber] = []

    @property
    def store(self) -> SettingsStore:
        return self._store

    def subscribe(self, cb: PanelSubscriber) -> None:
        self._subscribers.append(cb)

    def unsubscribe(self, cb: PanelSubscriber) -> None:
        try:
            self._subscribers.remove(cb)
        except ValueError:
            pass

    def refresh_from_settings(self) -> None:
        """現在のドキュメントで購読者（ウィジェット）を再描画させる。"""
        document = self._store.get_all_settings()
        for cb in list(self._subscribers):
            try:
                cb(document)
            except Exception:
                logger.debug("panel subscriber failed", exc_info=True)

    def get_current_settings(self) -> SettingsDocument:
        return self._store.get_all_settings()

    def set_value(self, setter: str, *args: Any) -> Any:
        """`set_shadow_quality` などの生成済みセッターを名前で呼ぶ。"""
        if setter not in SETTER_INDEX:
            raise KeyError(f"unknown setter: {setter!r}")
        return getattr(self._store, setter)(*args)

    def get_available_resolutions(self) -> list[tuple[int, int]]:
        """選択肢となる解像度一覧（重複除去・取得順）。空なら代表的な 4 種を返す。"""
        found: list[tuple[int, int]] = []
        if self._resolutions is not None:
            try:
                for w, h in self._resolutions():
                    item = (int(w), int(h))
                    if item[0] > 0 and item[1] > 0 and item not in found:
                        found.append(item)
            except Exception:
                logger.debug("resolution provider failed", exc_info=True)
                found = []
        return found or list(FALLBACK_RESOLUTIONS)

    def save(self) -> bool:
        return self._store.save_settings()

    def load(self) -> bool:
        ok = self._store.load_settings()
        if ok:
            self.refresh_from_settings()
        return ok

    def reset_to_defaults(self) -> None:
        self._store.reset_to_defaults()
        self.refresh_from_settings()


__all__ = ["PanelController", "FALLBACK_RESOLUTIONS"]
