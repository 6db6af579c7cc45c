"""
どこで: `tuning.settings` の値検証レイヤ。
何を: `FieldSpec` の値種別/レンジに従って入力値を正規化（クランプ・丸め・列挙化）する。
なぜ: セッターと読込の双方で同じ規則を使い、「数値フィールドは常にレンジ内」を保証するため。

規則:
- 数値は静かにクランプする（例外にしない）。
- 非有限値: NaN と -inf は下限、+inf は上限（上限なしのフィールドでは下限）。
- int フィールドは float 入力を最近接整数へ丸めてからクランプする。
- 列挙は範囲外序数を序数 0 へフォールバック（`coerce_enum`）。
- 解釈不能な入力（数値化できない文字列など）は呼び出し側が渡す `fallback`（セッターでは現在値、
  省略時はフィールド既定値）へフォールバックする。
- float に収まらない巨大な整数は ±inf と同じ扱い。
- 文字列中の孤立サロゲートは UTF-8 で保存できるよう `?` へ置換する。
"""

from __future__ import annotations

import dataclasses
import math
from typing import Any

from .enums import coerce_enum
from .schema import (
    CATEGORY_ORDER,
    CATEGORY_TYPES,
    FIELDS_BY_CATEGORY,
    FieldSpec,
    RangeHint,
    SettingsDocument,
)


def _to_float(value: Any) -> float | None:
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    try:
        return float(value)
    except OverflowError:
        # 10**400 のような有限だが float を超える整数/分数
        try:
            return math.inf if value > 0 else -math.inf
        except TypeError:
            return None
    except (TypeError, ValueError):
        return None


def clamp_float(value: Any, hint: RangeHint | None, fallback: float = 0.0) -> float:
    """`hint` のレンジへ float をクランプする。"""
    lo = None if hint is None else hint.min_value
    hi = None if hint is None else hint.max_value
    num = _to_float(value)
    if num is None:
        return float(fallback)
    if math.isnan(num) or num == -math.inf:
        if lo is not None:
            return float(lo)
        return float(fallback) if hi is None else min(float(fallback), float(hi))
    if num == math.inf:
        if hi is not None:
            return float(hi)
        return float(lo) if lo is not None else float(fallback)
    if lo is not None and num < lo:
        num = float(lo)
    if hi is not None and num > hi:
        num = float(hi)
    return float(num)


def clamp_int(value: Any, hint: RangeHint | None, fallback: int = 0) -> int:
    """`hint` のレンジへ int をクランプする（float 入力は丸め）。"""
    if isinstance(value, int) and not isinstance(value, bool):
        # 大きな整数は float を経由せずに比較する
        lo = None if hint is None else hint.min_value
        hi = None if hint is None else hint.max_value
        if lo is not None and value < lo:
            return int(lo)
        if hi is not None and value > hi:
            return int(hi)
        return value
    clamped = clamp_float(value, hint, float(fallback))
    return int(round(clamped))


def coerce_bool(value: Any, fallback: bool = False) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        s = value.strip().lower()
        if s in {"1", "true", "yes", "on"}:
            return True
        if s in {"0", "false", "no", "off"}:
            return False
        return fallback
    if isinstance(value, (int, float)):
        if isinstance(value, float) and math.isnan(value):
            return fallback
        return value != 0
    return fallback


def coerce_resolution(value: Any, hint: RangeHint | None, fallback: tuple[int, int]) -> tuple[int, int]:
    try:
        x, y = value
    except (TypeError, ValueError):
        return fallback
    return (clamp_int(x, hint, fallback[0]), clamp_int(y, hint, fallback[1]))


def _utf8_safe(text: str) -> str:
    try:
        text.encode("utf-8")
        return text
    except UnicodeEncodeError:
        return text.encode("utf-8", errors="replace").decode("utf-8")


def sanitize_value(spec: FieldSpec, value: Any, fallback: Any = None) -> Any:
    """1 フィールド分の値を正規化して返す。

    `fallback` は解釈不能な入力の代替値。省略時はフィールド既定値を使う。
    """
    if fallback is None:
        fallback = spec.default
    kind = spec.value_type
    if kind == "float":
        return clamp_float(value, spec.range_hint, fallback)
    if kind == "int":
        return clamp_int(value, spec.range_hint, fallback)
    if kind == "bool":
        return coerce_bool(value, fallback)
    if kind == "enum":
        if spec.enum_type is None:
            raise TypeError(f"enum field {spec.category}.{spec.attr} has no enum_type")
        return coerce_enum(spec.enum_type, value)
    if kind == "string":
        if value is None:
            return fallback
        return _utf8_safe(value if isinstance(value, str) else str(value))
    if kind == "resolution":
        return coerce_resolution(value, spec.range_hint, fallback)
    raise ValueError(f"unsupported value type: {kind}")


def sanitize_category(category: str, value: Any) -> Any:
    """カテゴリ値の全フィールドを正規化した新インスタンスを返す。"""
    expected = CATEGORY_TYPES[category]
    if not isinstance(value, expected):
        raise TypeError(f"{category} expects {expected.__name__}, got {type(value).__name__}")
    changes = {}
    for spec in FIELDS_BY_CATEGORY[category]:
        current = getattr(value, spec.attr)
        fixed = sanitize_value(spec, current)
        if fixed != current or type(fixed) is not type(current):
            changes[spec.attr] = fixed
    if not changes:
        return value
    return dataclasses.replace(value, **changes)


def sanitize_document(document: SettingsDocument) -> SettingsDocument:
    out = document
    for name in CATEGORY_ORDER:
        current = out.category(name)
        fixed = sanitize_category(name, current)
        if fixed is not current:
            out = out.with_category(name, fixed)
    return out


__all__ = [
    "clamp_float",
    "clamp_int",
    "coerce_bool",
    "coerce_resolution",
    "sanitize_value",
    "sanitize_category",
    "sanitize_document",
]
