"""
どこで: `tuning.store.apply`（カテゴリごとの適用フック）。
何を: カテゴリ値 → 実行時ノブ `(name, value)` 列への純関数群と、そのレジストリ `APPLY_HOOKS`。
なぜ: 反映内容を副作用から分離して列として検証可能にし、送出（RuntimeSink）はストアに一任するため。

注意:
- 列の順序は送出順。同名ノブが複数回現れる場合は後勝ち（例: アクセシビリティによる上書き）。
- Gameplay はノブを持たない（購読者への通知のみ）。
"""

from __future__ import annotations

from typing import Any, Callable

from tuning.settings.enums import UpscalingMode
from tuning.settings.schema import (
    ACCESSIBILITY,
    AUDIO,
    DEBUG,
    DISPLAY,
    FIELDS_BY_CATEGORY,
    GAMEPLAY,
    GRAPHICS,
    NETWORK,
    PERFORMANCE,
    RENDERING,
    AccessibilitySettings,
    AudioSettings,
    DebugSettings,
    DisplaySettings,
    GameplaySettings,
    GraphicsSettings,
    NetworkSettings,
    PerformanceSettings,
    RenderingSettings,
)

from .runtime import KnobValue

Knobs = list[tuple[str, KnobValue]]
ApplyHook = Callable[[Any], Knobs]

# アップスケーラごとの有効化ノブ（NONE/XESS は送出なし）
UPSCALER_KNOBS: dict[UpscalingMode, str] = {
    UpscalingMode.TSR: "r.TemporalSuperResolution",
    UpscalingMode.DLSS: "r.NGX.DLSS.Enable",
    UpscalingMode.FSR: "r.FidelityFX.FSR.Enabled",
}

_VOLUME_ATTRS = (
    "master_volume",
    "sfx_volume",
    "music_volume",
    "voice_dialog_volume",
    "ambient_volume",
    "ui_sound_volume",
    "voice_chat_volume",
)


def _flag(on: bool, when_on: KnobValue, when_off: KnobValue = 0) -> KnobValue:
    return when_on if on else when_off


def graphics_knobs(g: GraphicsSettings) -> Knobs:
    return [(f"sg.{spec.key}", int(getattr(g, spec.attr))) for spec in FIELDS_BY_CATEGORY[GRAPHICS]]


def rendering_knobs(r: RenderingSettings) -> Knobs:
    knobs: Knobs = [
        ("r.Lumen.DiffuseIndirect.Allow", _flag(r.enable_lumen, 1)),
        ("r.RayTracing", _flag(r.enable_ray_tracing, 1)),
        ("r.AmbientOcclusionLevels", _flag(r.enable_ssao, 3)),
        ("r.SSR.Quality", _flag(r.enable_ssr, 3)),
        ("r.MotionBlurQuality", _flag(r.enable_motion_blur, 4)),
        ("r.BloomQuality", _flag(r.enable_bloom, 5)),
        ("r.DepthOfFieldQuality", _flag(r.enable_depth_of_field, 2)),
        ("r.LensFlareQuality", _flag(r.enable_lens_flares, 2)),
        ("r.SceneColorFringe.Max", _flag(r.enable_chromatic_aberration, 5.0, 0.0)),
        ("r.Tonemapper.GrainQuantization", _flag(r.enable_film_grain, 1.0, 0.0)),
        ("r.Tonemapper.Vignette", _flag(r.enable_vignette, 0.4, 0.0)),
        ("r.VolumetricFog", _flag(r.enable_volumetric_fog, 1)),
        # 異方性フィルタはレベル → 2 のべき乗
        ("r.MaxAnisotropy", (1 << r.anisotropic_filtering) if r.anisotropic_filtering > 0 else 0),
        ("r.TemporalAA.Quality", _flag(r.enable_taa, 2)),
    ]
    upscaler = UPSCALER_KNOBS.get(UpscalingMode(r.upscaling_mode))
    if upscaler is not None:
        knobs.append((upscaler, 1))
    knobs += [
        ("r.Lumen.Reflections.ScreenTraces", int(r.global_illumination_quality)),
        ("r.ReflectionEnvironment", 1 if r.reflection_quality > 0 else 0),
        ("r.SSGI.Enable", _flag(r.enable_ssgi, 1)),
        ("r.ContactShadows", _flag(r.enable_contact_shadows, 1)),
    ]
    return knobs


def performance_knobs(p: PerformanceSettings) -> Knobs:
    return [
        ("r.VSync", _flag(p.enable_vsync, 1)),
        ("t.MaxFPS", float(p.frame_rate_limit)),
        ("r.DynamicRes.OperationMode", _flag(p.enable_dynamic_resolution, 2)),
        (
            "r.DynamicRes.MinResolutionChangesPerSecond",
            1000.0 / (float(p.min_frame_rate_for_dynamic_res) + 0.01),
        ),
        ("r.MaxFrameLatency", _flag(p.enable_triple_buffering, 3, 2)),
        ("r.AsyncCompute", _flag(p.enable_async_compute, 1)),
        ("r.ViewDistanceScale", float(p.lod_distance_multiplier)),
        ("process.Priority", int(p.process_priority)),
    ]


def display_knobs(d: DisplaySettings) -> Knobs:
    width, height = d.resolution
    return [
        ("r.SetResX", int(width)),
        ("r.SetResY", int(height)),
        ("r.FullScreenMode", int(d.window_mode)),
        ("r.Tonemapper.Sharpen", float(d.brightness) - 1.0),
        ("r.HDR.EnableHDROutput", _flag(d.enable_hdr, 1)),
        ("r.HDR.Display.OutputDevice", float(d.hdr_max_nits)),
        ("r.ScreenPercentage", float(d.screen_percentage)),
    ]


def audio_knobs(a: AudioSettings) -> Knobs:
    keys = {spec.attr: spec.key for spec in FIELDS_BY_CATEGORY[AUDIO]}
    return [(f"au.{keys[attr]}", float(getattr(a, attr))) for attr in _VOLUME_ATTRS]


def gameplay_knobs(g: GameplaySettings) -> Knobs:
    return []


def accessibility_knobs(a: AccessibilitySettings) -> Knobs:
    knobs: Knobs = [("r.ColorBlind.Mode", int(a.colorblind_mode))]
    if a.photosensitivity_mode:
        knobs += [
            ("r.BloomQuality", 0),
            ("r.MotionBlurQuality", 0),
            ("r.LensFlareQuality", 0),
        ]
    if a.reduced_motion:
        knobs.append(("r.MotionBlurQuality", 0))
    return knobs


def network_knobs(n: NetworkSettings) -> Knobs:
    return [("p.NetClientInterpolation", float(n.network_smoothing))]


def debug_knobs(d: DebugSettings) -> Knobs:
    knobs: Knobs = [
        ("stat.FPS", _flag(d.show_performance_overlay, 1)),
        ("stat.Unit", _flag(d.show_performance_overlay, 1)),
    ]
    if d.benchmark_mode:
        knobs.append(("r.VSync", 0))
    return knobs


APPLY_HOOKS: dict[str, ApplyHook] = {
    GRAPHICS: graphics_knobs,
    RENDERING: rendering_knobs,
    PERFORMANCE: performance_knobs,
    DISPLAY: display_knobs,
    AUDIO: audio_knobs,
    GAMEPLAY: gameplay_knobs,
    ACCESSIBILITY: accessibility_knobs,
    NETWORK: network_knobs,
    DEBUG: debug_knobs,
}


__all__ = [
    "Knobs",
    "ApplyHook",
    "APPLY_HOOKS",
    "UPSCALER_KNOBS",
    "graphics_knobs",
    "rendering_knobs",
    "performance_knobs",
    "display_knobs",
    "audio_knobs",
    "gameplay_knobs",
    "accessibility_knobs",
    "network_knobs",
    "debug_knobs",
]
