"""
どこで: `tuning.store.runtime`。
何を: 実行時ノブ（エンジン側のランタイム設定名 → 値）を受け取る `RuntimeSink` と、その既定実装。
なぜ: 設定の反映先をエンジン実装から切り離し、テストでは記録用テーブルで検証するため。
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Protocol

logger = logging.getLogger(__name__)

KnobValue = int | float | str


class RuntimeSink(Protocol):
    def apply_setting(self, name: str, value: KnobValue) -> None:
        """名前付きノブへ値を送る。未知の名前は静かに無視してよい。"""


class NullRuntimeSink:
    """すべて捨てる。"""

    def apply_setting(self, name: str, value: KnobValue) -> None:
        return None


class ConsoleVariableTable:
    """メモリ上のノブ表。

    - `known` を与えると、その集合に無い名前は no-op（存在しないコンソール変数の扱い）。
    - `calls` は受け取った順の (name, value) 記録（未知名も含む）。
    """

    def __init__(self, known: Iterable[str] | None = None) -> None:
        self._known = None if known is None else frozenset(known)
        self._values: dict[str, KnobValue] = {}
        self.calls: list[tuple[str, KnobValue]] = []

    def apply_setting(self, name: str, value: KnobValue) -> None:
        self.calls.append((name, value))
        if self._known is not None and name not in self._known:
            logger.debug("unknown knob ignored: %s", name)
            return
        self._values[name] = value

    def get(self, name: str, default: Any = None) -> Any:
        return self._values.get(name, default)

    def values(self) -> dict[str, KnobValue]:
        return dict(self._values)

    def clear_calls(self) -> None:
        self.calls.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)


__all__ = ["KnobValue", "RuntimeSink", "NullRuntimeSink", "ConsoleVariableTable"]
