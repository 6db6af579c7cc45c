"""
どこで: `tuning.settings.codec`（永続化フォーマット）。
何を: `SettingsDocument` ⇔ UTF-8 JSON バイト列の相互変換（部分マージ付き decode）。
なぜ: ストレージ実装から独立した純関数として保存形式を固定し、round-trip を検証可能にするため。

フォーマット:
- ルートはオブジェクト。カテゴリ名ごとに 1 オブジェクト、キーは `FieldSpec.key`。
- 列挙は整数序数、解像度は `ResolutionX` / `ResolutionY` に展開。
- ルートのキーはカテゴリ名 9 個のみ。版番号は持たず、互換性は欠損フィールドの既定値補完で保つ。

decode の規則:
- 不正な UTF-8/JSON（桁数超過の整数や過剰なネストを含む）、またはルートが非オブジェクトなら `ParseError`。
- 存在し型の合うフィールドのみ `defaults` を上書き（部分マージ）。カテゴリ欠損/非オブジェクトは既定へ。
- bool は JSON の真偽値のみ、数値は JSON 数値（真偽値は除外）、文字列は文字列のみ、列挙は整数値のみ受理。
- 未知キーは無視。マージ後は全フィールドがクランプ規則を通る。
"""

from __future__ import annotations

import dataclasses
import json
import logging
import math
from typing import Any

from .schema import CATEGORY_ORDER, FIELDS_BY_CATEGORY, FieldSpec, SettingsDocument
from .validation import sanitize_document, sanitize_value

logger = logging.getLogger(__name__)


class ParseError(ValueError):
    """保存データを設定ドキュメントとして解釈できない。"""


def _encode_field(spec: FieldSpec, value: Any) -> dict[str, Any]:
    kind = spec.value_type
    if kind == "resolution":
        kx, ky = spec.json_keys()
        x, y = value
        return {kx: int(x), ky: int(y)}
    if kind == "enum":
        return {spec.key: int(value)}
    if kind == "bool":
        return {spec.key: bool(value)}
    if kind == "int":
        return {spec.key: int(value)}
    if kind == "float":
        return {spec.key: float(value)}
    return {spec.key: value}


def to_dict(document: SettingsDocument) -> dict[str, Any]:
    """JSON 化直前の素の dict を返す（表示/デバッグ用にも使用）。"""
    data: dict[str, Any] = {}
    for name in CATEGORY_ORDER:
        category = document.category(name)
        section: dict[str, Any] = {}
        for spec in FIELDS_BY_CATEGORY[name]:
            section.update(_encode_field(spec, getattr(category, spec.attr)))
        data[name] = section
    return data


def encode(document: SettingsDocument) -> bytes:
    data = to_dict(sanitize_document(document))
    return json.dumps(data, ensure_ascii=False, indent=2, allow_nan=False).encode("utf-8")


def _is_number(raw: Any) -> bool:
    return isinstance(raw, (int, float)) and not isinstance(raw, bool)


def _is_integral(raw: Any) -> bool:
    if isinstance(raw, bool):
        return False
    if isinstance(raw, int):
        return True
    return isinstance(raw, float) and math.isfinite(raw) and raw == int(raw)


_MISSING = object()


def _decode_field(spec: FieldSpec, section: dict[str, Any], current: Any) -> Any:
    """1 フィールドを読み出す。欠損/型不一致なら `_MISSING`。"""
    kind = spec.value_type
    if kind == "resolution":
        kx, ky = spec.json_keys()
        rx, ry = section.get(kx, _MISSING), section.get(ky, _MISSING)
        if not _is_number(rx) and not _is_number(ry):
            return _MISSING
        x = rx if _is_number(rx) else current[0]
        y = ry if _is_number(ry) else current[1]
        return sanitize_value(spec, (x, y), current)

    raw = section.get(spec.key, _MISSING)
    if raw is _MISSING:
        return _MISSING
    if kind == "bool":
        return raw if isinstance(raw, bool) else _MISSING
    if kind in ("int", "float"):
        return sanitize_value(spec, raw, current) if _is_number(raw) else _MISSING
    if kind == "enum":
        return sanitize_value(spec, int(raw), current) if _is_integral(raw) else _MISSING
    if kind == "string":
        return raw if isinstance(raw, str) else _MISSING
    return _MISSING


def _merge_category(name: str, section: Any, base: Any) -> Any:
    if not isinstance(section, dict):
        return base
    changes: dict[str, Any] = {}
    for spec in FIELDS_BY_CATEGORY[name]:
        value = _decode_field(spec, section, getattr(base, spec.attr))
        if value is _MISSING:
            continue
        changes[spec.attr] = value
    return dataclasses.replace(base, **changes) if changes else base


def decode(data: bytes | str, defaults: SettingsDocument) -> SettingsDocument:
    """保存データを `defaults` へ部分マージした新ドキュメントを返す。"""
    try:
        text = data.decode("utf-8") if isinstance(data, (bytes, bytearray)) else data
        root = json.loads(text)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError/UnicodeDecodeError に加え、整数の桁数上限や深すぎるネストもここで拾う
        raise ParseError(f"settings data is not valid JSON: {e}") from e
    if not isinstance(root, dict):
        raise ParseError(f"settings root must be an object, got {type(root).__name__}")

    unknown = set(root) - set(CATEGORY_ORDER)
    if unknown:
        logger.debug("ignoring unknown settings keys: %s", sorted(unknown))

    out = defaults
    for name in CATEGORY_ORDER:
        section = root.get(name)
        if section is None:
            continue
        merged = _merge_category(name, section, out.category(name))
        if merged is not out.category(name):
            out = out.with_category(name, merged)
    return sanitize_document(out)


__all__ = ["ParseError", "encode", "decode", "to_dict"]
