"""
どこで: `tuning.settings.enums`。
何を: 設定で使う列挙（アップスケーリング/ウィンドウモード/プロセス優先度/色覚補正）を定義する。
なぜ: 保存形式では整数序数で表すため、IntEnum で序数と名前を一箇所に固定する。
"""

from __future__ import annotations

import math
from enum import IntEnum
from typing import Any, TypeVar

E = TypeVar("E", bound=IntEnum)


class UpscalingMode(IntEnum):
    NONE = 0
    DLSS = 1
    FSR = 2
    XESS = 3
    TSR = 4


class WindowMode(IntEnum):
    FULLSCREEN = 0
    WINDOWED_FULLSCREEN = 1
    WINDOWED = 2


class ProcessPriority(IntEnum):
    NORMAL = 0
    HIGH = 1
    REALTIME = 2


class ColorblindMode(IntEnum):
    NONE = 0
    DEUTERANOPIA = 1
    PROTANOPIA = 2
    TRITANOPIA = 3


def coerce_enum(enum_type: type[E], value: Any) -> E:
    """列挙メンバ/整数序数/名前を `enum_type` へ正規化する。

    範囲外・非整数・解釈不能な入力は序数 0 のメンバへフォールバックする（例外にしない）。
    """
    if isinstance(value, enum_type):
        return value
    fallback = enum_type(0)
    if isinstance(value, bool):
        return fallback
    if isinstance(value, str):
        key = value.strip().upper().replace(" ", "_")
        try:
            return enum_type[key]
        except KeyError:
            return fallback
    try:
        num = float(value)
    except Exception:
        return fallback
    if not math.isfinite(num) or num != int(num):
        return fallback
    try:
        return enum_type(int(num))
    except ValueError:
        return fallback


__all__ = [
    "UpscalingMode",
    "WindowMode",
    "ProcessPriority",
    "ColorblindMode",
    "coerce_enum",
]
