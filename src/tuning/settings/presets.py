"""
どこで: `tuning.settings.presets`。
何を: クイック操作（全体品質/プリセット/ポストプロセス一括/パフォーマンス・品質モード）が
      書き換えるフィールド束を固定テーブルとして定義し、ドキュメントへ適用する関数を提供する。
なぜ: 束の中身は製品判断であり、アルゴリズムではないため。コードに散らさず表で一元管理する。

表の形式: `{カテゴリ名: {属性名: 値}}`。適用時は通常のクランプ規則を通す。
"""

from __future__ import annotations

import dataclasses
from typing import Any, Mapping

from .schema import GRAPHICS, RENDERING, FIELDS_BY_CATEGORY, SettingsDocument, get_field
from .validation import clamp_int, sanitize_value

Overrides = Mapping[str, Mapping[str, Any]]

QUALITY_LEVEL_NAMES: tuple[str, ...] = ("Low", "Medium", "High", "Ultra", "Epic")

# Rendering 側のポストプロセス系トグル（`set_all_post_process_effects` の対象）
POST_PROCESS_TOGGLES: tuple[str, ...] = (
    "enable_motion_blur",
    "enable_bloom",
    "enable_depth_of_field",
    "enable_lens_flares",
    "enable_chromatic_aberration",
    "enable_film_grain",
    "enable_vignette",
)

# 品質プリセット（Graphics 8 項目はレベル値で一律、Rendering は下表）
_PRESET_RENDERING: dict[int, dict[str, Any]] = {
    0: {
        "enable_lumen": False,
        "enable_ray_tracing": False,
        "enable_ssao": False,
        "enable_ssr": False,
        "enable_volumetric_fog": False,
        "enable_ssgi": False,
        "enable_contact_shadows": False,
        "anisotropic_filtering": 0,
        "global_illumination_quality": 0,
        "reflection_quality": 0,
    },
    1: {
        "enable_lumen": False,
        "enable_ray_tracing": False,
        "enable_ssao": True,
        "enable_ssr": False,
        "enable_volumetric_fog": False,
        "enable_ssgi": False,
        "enable_contact_shadows": False,
        "anisotropic_filtering": 2,
        "global_illumination_quality": 1,
        "reflection_quality": 1,
    },
    2: {
        "enable_lumen": True,
        "enable_ray_tracing": False,
        "enable_ssao": True,
        "enable_ssr": True,
        "enable_volumetric_fog": True,
        "enable_ssgi": False,
        "enable_contact_shadows": True,
        "anisotropic_filtering": 3,
        "global_illumination_quality": 2,
        "reflection_quality": 2,
    },
    3: {
        "enable_lumen": True,
        "enable_ray_tracing": False,
        "enable_ssao": True,
        "enable_ssr": True,
        "enable_volumetric_fog": True,
        "enable_ssgi": False,
        "enable_contact_shadows": True,
        "anisotropic_filtering": 4,
        "global_illumination_quality": 3,
        "reflection_quality": 3,
    },
    4: {
        "enable_lumen": True,
        "enable_ray_tracing": True,
        "enable_ssao": True,
        "enable_ssr": True,
        "enable_volumetric_fog": True,
        "enable_ssgi": True,
        "enable_contact_shadows": True,
        "anisotropic_filtering": 4,
        "global_illumination_quality": 4,
        "reflection_quality": 4,
    },
}

PERFORMANCE_MODE: dict[str, dict[str, Any]] = {
    GRAPHICS: {
        "shadow_quality": 1,
        "post_process_quality": 1,
        "effects_quality": 1,
        "foliage_quality": 1,
    },
    RENDERING: {
        "enable_ray_tracing": False,
        "enable_lumen": False,
        "enable_ssgi": False,
        "enable_motion_blur": False,
        "enable_depth_of_field": False,
        "enable_chromatic_aberration": False,
        "enable_film_grain": False,
        "enable_volumetric_fog": False,
        "global_illumination_quality": 1,
        "reflection_quality": 1,
    },
}

QUALITY_MODE: dict[str, dict[str, Any]] = {
    GRAPHICS: {spec.attr: 4 for spec in FIELDS_BY_CATEGORY[GRAPHICS]},
    RENDERING: {
        "enable_lumen": True,
        "enable_ray_tracing": True,
        "enable_ssao": True,
        "enable_ssr": True,
        "enable_bloom": True,
        "enable_depth_of_field": True,
        "enable_volumetric_fog": True,
        "enable_taa": True,
        "enable_ssgi": True,
        "enable_contact_shadows": True,
        "anisotropic_filtering": 4,
        "global_illumination_quality": 4,
        "reflection_quality": 4,
    },
}

# モード ON 時に退避・OFF 時に復元するカテゴリ
MODE_STASH_CATEGORIES: tuple[str, ...] = (GRAPHICS, RENDERING)


def graphics_level(level: Any) -> dict[str, dict[str, Any]]:
    """Graphics の 8 項目をすべて `level`（0..4 にクランプ）へ揃える束。"""
    lvl = clamp_int(level, get_field(GRAPHICS, "shadow_quality").range_hint, 3)
    return {GRAPHICS: {spec.attr: lvl for spec in FIELDS_BY_CATEGORY[GRAPHICS]}}


def quality_preset(level: Any) -> dict[str, dict[str, Any]]:
    lvl = clamp_int(level, get_field(GRAPHICS, "shadow_quality").range_hint, 3)
    bundle = graphics_level(lvl)
    bundle[RENDERING] = dict(_PRESET_RENDERING[lvl])
    return bundle


def post_process_effects(enabled: bool) -> dict[str, dict[str, Any]]:
    return {RENDERING: {attr: bool(enabled) for attr in POST_PROCESS_TOGGLES}}


def apply_overrides(document: SettingsDocument, overrides: Overrides) -> SettingsDocument:
    """束をドキュメントへ適用した新ドキュメントを返す（各値はクランプ規則を通す）。"""
    out = document
    for category, fields in overrides.items():
        current = out.category(category)
        changes = {
            attr: sanitize_value(get_field(category, attr), value, getattr(current, attr))
            for attr, value in fields.items()
        }
        out = out.with_category(category, dataclasses.replace(current, **changes))
    return out


__all__ = [
    "Overrides",
    "QUALITY_LEVEL_NAMES",
    "POST_PROCESS_TOGGLES",
    "PERFORMANCE_MODE",
    "QUALITY_MODE",
    "MODE_STASH_CATEGORIES",
    "graphics_level",
    "quality_preset",
    "post_process_effects",
    "apply_overrides",
]
