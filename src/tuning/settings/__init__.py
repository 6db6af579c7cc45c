"""
どこで: `tuning.settings` パッケージ。
何を: 設定のデータモデル・列挙・クランプ規則・クイック操作の束・永続化コーデックを公開する。
なぜ: ストア（`tuning.store`）とファサード（`api`）が参照する純データ層をまとめるため。
"""

from .codec import ParseError, decode, encode, to_dict
from .enums import ColorblindMode, ProcessPriority, UpscalingMode, WindowMode, coerce_enum
from .schema import (
    CATEGORY_ORDER,
    CATEGORY_TYPES,
    FIELD_SPECS,
    FIELDS_BY_CATEGORY,
    SETTER_INDEX,
    AccessibilitySettings,
    AudioSettings,
    DebugSettings,
    DisplaySettings,
    FieldSpec,
    GameplaySettings,
    GraphicsSettings,
    NetworkSettings,
    PerformanceSettings,
    RangeHint,
    RenderingSettings,
    SettingsDocument,
    get_field,
)
from .validation import clamp_float, clamp_int, sanitize_category, sanitize_document, sanitize_value

__all__ = [
    "ParseError",
    "decode",
    "encode",
    "to_dict",
    "ColorblindMode",
    "ProcessPriority",
    "UpscalingMode",
    "WindowMode",
    "coerce_enum",
    "CATEGORY_ORDER",
    "CATEGORY_TYPES",
    "FIELD_SPECS",
    "FIELDS_BY_CATEGORY",
    "SETTER_INDEX",
    "AccessibilitySettings",
    "AudioSettings",
    "DebugSettings",
    "DisplaySettings",
    "FieldSpec",
    "GameplaySettings",
    "GraphicsSettings",
    "NetworkSettings",
    "PerformanceSettings",
    "RangeHint",
    "RenderingSettings",
    "SettingsDocument",
    "get_field",
    "clamp_float",
    "clamp_int",
    "sanitize_category",
    "sanitize_document",
    "sanitize_value",
]
