"""
どこで: `tuning.settings.schema`（設定のデータモデル層）。
何を: 9 カテゴリの設定値（不変 dataclass）と `SettingsDocument`、および各フィールドのメタ情報
      （保存キー/値種別/レンジ/セッター名）を表す `FieldSpec` テーブルを定義する。
なぜ: クランプ・適用・永続化・セッター生成のすべてを単一のテーブルから駆動し、
      フィールドごとの手書き重複を無くすため。

要点:
- カテゴリ集合は閉じており固定（Graphics, Rendering, Performance, Display, Audio, Gameplay,
  Accessibility, Network, Debug）。この順序は `apply_all()` の適用順でもある。
- 既定値は dataclass のフィールド既定で一元管理する（構築時と読込時フォールバックの両方で使用）。
- `FieldSpec.key` は保存ドキュメント上のキー名（オンディスクのスキーマ）であり、変更しないこと。
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Literal

from .enums import ColorblindMode, ProcessPriority, UpscalingMode, WindowMode

ValueType = Literal["int", "float", "bool", "enum", "string", "resolution"]

GRAPHICS = "Graphics"
RENDERING = "Rendering"
PERFORMANCE = "Performance"
DISPLAY = "Display"
AUDIO = "Audio"
GAMEPLAY = "Gameplay"
ACCESSIBILITY = "Accessibility"
NETWORK = "Network"
DEBUG = "Debug"

# 適用順（後段のカテゴリは前段がエンジン側状態を反映済みである前提に立てる）
CATEGORY_ORDER: tuple[str, ...] = (
    GRAPHICS,
    RENDERING,
    PERFORMANCE,
    DISPLAY,
    AUDIO,
    GAMEPLAY,
    ACCESSIBILITY,
    NETWORK,
    DEBUG,
)


@dataclass(frozen=True)
class GraphicsSettings:
    """スケーラビリティ品質（0=Low .. 4=Epic）。"""

    anti_aliasing_quality: int = 3
    shadow_quality: int = 3
    view_distance_quality: int = 3
    post_process_quality: int = 3
    texture_quality: int = 3
    effects_quality: int = 3
    foliage_quality: int = 3
    shading_quality: int = 3


@dataclass(frozen=True)
class RenderingSettings:
    enable_lumen: bool = True
    enable_ray_tracing: bool = False
    enable_ssao: bool = True
    enable_ssr: bool = True
    enable_motion_blur: bool = True
    enable_bloom: bool = True
    enable_depth_of_field: bool = True
    enable_lens_flares: bool = True
    enable_chromatic_aberration: bool = False
    enable_film_grain: bool = False
    enable_vignette: bool = True
    enable_volumetric_fog: bool = True
    anisotropic_filtering: int = 4  # 0=Off, 1=2x, 2=4x, 3=8x, 4=16x
    enable_taa: bool = True
    upscaling_mode: UpscalingMode = UpscalingMode.TSR
    global_illumination_quality: int = 3
    reflection_quality: int = 3
    enable_ssgi: bool = False
    enable_contact_shadows: bool = True


@dataclass(frozen=True)
class PerformanceSettings:
    enable_vsync: bool = True
    frame_rate_limit: float = 0.0  # 0 = 無制限
    enable_dynamic_resolution: bool = False
    min_frame_rate_for_dynamic_res: float = 30.0
    enable_triple_buffering: bool = False
    enable_async_compute: bool = True
    lod_distance_multiplier: float = 1.0
    process_priority: ProcessPriority = ProcessPriority.NORMAL


@dataclass(frozen=True)
class DisplaySettings:
    resolution: tuple[int, int] = (1920, 1080)
    window_mode: WindowMode = WindowMode.FULLSCREEN
    brightness: float = 1.0
    contrast: float = 1.0
    enable_hdr: bool = False
    hdr_max_nits: float = 1000.0
    monitor_index: int = 0
    borderless_window: bool = False
    screen_percentage: float = 100.0
    menu_field_of_view: float = 90.0
    aspect_ratio_override: float = 0.0  # 0 = 自動
    safe_zone_scale: float = 1.0


@dataclass(frozen=True)
class AudioSettings:
    master_volume: float = 1.0
    sfx_volume: float = 1.0
    music_volume: float = 0.8
    voice_dialog_volume: float = 1.0
    ambient_volume: float = 0.7
    ui_sound_volume: float = 0.9
    voice_chat_volume: float = 1.0
    audio_quality: int = 2  # 0=Low .. 3=Ultra
    surround_sound_mode: int = 0  # 0=Stereo, 1=5.1, 2=7.1
    enable_spatial_audio: bool = False
    dynamic_range: float = 0.5
    subtitle_text_size: float = 1.0
    subtitle_background_opacity: float = 0.5


@dataclass(frozen=True)
class GameplaySettings:
    fov: float = 90.0
    mouse_sensitivity: float = 1.0
    invert_mouse_y: bool = False
    controller_sensitivity: float = 1.0
    controller_dead_zone: float = 0.15
    aim_assist_strength: float = 0.5
    camera_shake_intensity: float = 1.0
    head_bob_intensity: float = 0.5
    enable_vibration: bool = True
    crouch_toggle: bool = False
    sprint_toggle: bool = False
    enable_auto_run: bool = False
    camera_smoothing: float = 0.5


@dataclass(frozen=True)
class AccessibilitySettings:
    colorblind_mode: ColorblindMode = ColorblindMode.NONE
    ui_scale: float = 1.0
    text_size: float = 1.0
    high_contrast_mode: bool = False
    enable_screen_reader: bool = False
    reduced_motion: bool = False
    photosensitivity_mode: bool = False


@dataclass(frozen=True)
class NetworkSettings:
    max_ping_threshold: int = 150
    network_smoothing: float = 0.5
    bandwidth_limit_kbps: int = 0  # 0 = 無制限
    preferred_region: str = "Auto"
    enable_crossplay: bool = True


@dataclass(frozen=True)
class DebugSettings:
    show_performance_overlay: bool = False
    show_network_stats: bool = False
    developer_mode: bool = False
    enable_crash_reporting: bool = True
    benchmark_mode: bool = False


CATEGORY_TYPES: dict[str, type] = {
    GRAPHICS: GraphicsSettings,
    RENDERING: RenderingSettings,
    PERFORMANCE: PerformanceSettings,
    DISPLAY: DisplaySettings,
    AUDIO: AudioSettings,
    GAMEPLAY: GameplaySettings,
    ACCESSIBILITY: AccessibilitySettings,
    NETWORK: NetworkSettings,
    DEBUG: DebugSettings,
}


def category_attr(category: str) -> str:
    """カテゴリ名 → `SettingsDocument` の属性名（例: "Graphics" -> "graphics"）。"""
    if category not in CATEGORY_TYPES:
        raise KeyError(f"unknown settings category: {category!r}")
    return category.lower()


@dataclass(frozen=True)
class SettingsDocument:
    """全カテゴリを束ねた設定ドキュメント（不変）。

    変更は `with_category()` / `dataclasses.replace()` で新インスタンスを作る。
    そのため保存経路は参照をそのまま渡すだけで「時点コピー」になる。
    """

    graphics: GraphicsSettings = field(default_factory=GraphicsSettings)
    rendering: RenderingSettings = field(default_factory=RenderingSettings)
    performance: PerformanceSettings = field(default_factory=PerformanceSettings)
    display: DisplaySettings = field(default_factory=DisplaySettings)
    audio: AudioSettings = field(default_factory=AudioSettings)
    gameplay: GameplaySettings = field(default_factory=GameplaySettings)
    accessibility: AccessibilitySettings = field(default_factory=AccessibilitySettings)
    network: NetworkSettings = field(default_factory=NetworkSettings)
    debug: DebugSettings = field(default_factory=DebugSettings)

    def category(self, name: str) -> Any:
        return getattr(self, category_attr(name))

    def with_category(self, name: str, value: Any) -> "SettingsDocument":
        expected = CATEGORY_TYPES[name]
        if not isinstance(value, expected):
            raise TypeError(f"{name} expects {expected.__name__}, got {type(value).__name__}")
        return dataclasses.replace(self, **{category_attr(name): value})

    def categories(self) -> dict[str, Any]:
        """カテゴリ名 → 値の dict（適用順）。"""
        return {name: self.category(name) for name in CATEGORY_ORDER}


# ---------------------------------------------------------------------------
# フィールドテーブル
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RangeHint:
    """数値フィールドの実レンジ。`None` は片側開放（例: frame_rate_limit は上限なし）。"""

    min_value: float | int | None
    max_value: float | int | None


@dataclass(frozen=True)
class FieldSpec:
    """1 フィールドのメタ情報。

    - `key`: 保存キー。`resolution` のみ `ResolutionX`/`ResolutionY` の 2 キーに展開される。
    - `setter`: `SettingsStore` に生成されるスカラーセッター名。
    """

    category: str
    attr: str
    key: str
    value_type: ValueType
    setter: str
    range_hint: RangeHint | None = None
    enum_type: type | None = None

    @property
    def default(self) -> Any:
        return getattr(CATEGORY_TYPES[self.category](), self.attr)

    def json_keys(self) -> tuple[str, ...]:
        if self.value_type == "resolution":
            return (f"{self.key}X", f"{self.key}Y")
        return (self.key,)


def _i(cat: str, attr: str, key: str, lo: int | None, hi: int | None, setter: str) -> FieldSpec:
    return FieldSpec(cat, attr, key, "int", setter, RangeHint(lo, hi))


def _f(
    cat: str, attr: str, key: str, lo: float | None, hi: float | None, setter: str
) -> FieldSpec:
    return FieldSpec(cat, attr, key, "float", setter, RangeHint(lo, hi))


def _b(cat: str, attr: str, key: str, setter: str) -> FieldSpec:
    return FieldSpec(cat, attr, key, "bool", setter)


def _e(cat: str, attr: str, key: str, enum_type: type, setter: str) -> FieldSpec:
    return FieldSpec(cat, attr, key, "enum", setter, enum_type=enum_type)


FIELD_SPECS: tuple[FieldSpec, ...] = (
    # Graphics
    _i(GRAPHICS, "anti_aliasing_quality", "AntiAliasingQuality", 0, 4, "set_anti_aliasing_quality"),
    _i(GRAPHICS, "shadow_quality", "ShadowQuality", 0, 4, "set_shadow_quality"),
    _i(GRAPHICS, "view_distance_quality", "ViewDistanceQuality", 0, 4, "set_view_distance_quality"),
    _i(GRAPHICS, "post_process_quality", "PostProcessQuality", 0, 4, "set_post_process_quality"),
    _i(GRAPHICS, "texture_quality", "TextureQuality", 0, 4, "set_texture_quality"),
    _i(GRAPHICS, "effects_quality", "EffectsQuality", 0, 4, "set_effects_quality"),
    _i(GRAPHICS, "foliage_quality", "FoliageQuality", 0, 4, "set_foliage_quality"),
    _i(GRAPHICS, "shading_quality", "ShadingQuality", 0, 4, "set_shading_quality"),
    # Rendering
    _b(RENDERING, "enable_lumen", "EnableLumen", "set_lumen_enabled"),
    _b(RENDERING, "enable_ray_tracing", "EnableRayTracing", "set_ray_tracing_enabled"),
    _b(RENDERING, "enable_ssao", "EnableSSAO", "set_ssao_enabled"),
    _b(RENDERING, "enable_ssr", "EnableSSR", "set_ssr_enabled"),
    _b(RENDERING, "enable_motion_blur", "EnableMotionBlur", "set_motion_blur_enabled"),
    _b(RENDERING, "enable_bloom", "EnableBloom", "set_bloom_enabled"),
    _b(RENDERING, "enable_depth_of_field", "EnableDepthOfField", "set_depth_of_field_enabled"),
    _b(RENDERING, "enable_lens_flares", "EnableLensFlares", "set_lens_flares_enabled"),
    _b(
        RENDERING,
        "enable_chromatic_aberration",
        "EnableChromaticAberration",
        "set_chromatic_aberration_enabled",
    ),
    _b(RENDERING, "enable_film_grain", "EnableFilmGrain", "set_film_grain_enabled"),
    _b(RENDERING, "enable_vignette", "EnableVignette", "set_vignette_enabled"),
    _b(RENDERING, "enable_volumetric_fog", "EnableVolumetricFog", "set_volumetric_fog_enabled"),
    _i(RENDERING, "anisotropic_filtering", "AnisotropicFiltering", 0, 4, "set_anisotropic_filtering"),
    _b(RENDERING, "enable_taa", "EnableTAA", "set_taa_enabled"),
    _e(RENDERING, "upscaling_mode", "UpscalingMode", UpscalingMode, "set_upscaling_mode"),
    _i(
        RENDERING,
        "global_illumination_quality",
        "GlobalIlluminationQuality",
        0,
        4,
        "set_global_illumination_quality",
    ),
    _i(RENDERING, "reflection_quality", "ReflectionQuality", 0, 4, "set_reflection_quality"),
    _b(RENDERING, "enable_ssgi", "EnableSSGI", "set_ssgi_enabled"),
    _b(RENDERING, "enable_contact_shadows", "EnableContactShadows", "set_contact_shadows_enabled"),
    # Performance
    _b(PERFORMANCE, "enable_vsync", "EnableVSync", "set_vsync_enabled"),
    _f(PERFORMANCE, "frame_rate_limit", "FrameRateLimit", 0.0, None, "set_frame_rate_limit"),
    _b(
        PERFORMANCE,
        "enable_dynamic_resolution",
        "EnableDynamicResolution",
        "set_dynamic_resolution_enabled",
    ),
    _f(
        PERFORMANCE,
        "min_frame_rate_for_dynamic_res",
        "MinFrameRateForDynamicRes",
        15.0,
        60.0,
        "set_min_frame_rate_for_dynamic_res",
    ),
    _b(PERFORMANCE, "enable_triple_buffering", "EnableTripleBuffering", "set_triple_buffering_enabled"),
    _b(PERFORMANCE, "enable_async_compute", "EnableAsyncCompute", "set_async_compute_enabled"),
    _f(
        PERFORMANCE,
        "lod_distance_multiplier",
        "LODDistanceMultiplier",
        0.25,
        4.0,
        "set_lod_distance_multiplier",
    ),
    _e(PERFORMANCE, "process_priority", "ProcessPriority", ProcessPriority, "set_process_priority"),
    # Display
    FieldSpec(DISPLAY, "resolution", "Resolution", "resolution", "set_resolution", RangeHint(1, None)),
    _e(DISPLAY, "window_mode", "WindowMode", WindowMode, "set_window_mode"),
    _f(DISPLAY, "brightness", "Brightness", 0.0, 2.0, "set_brightness"),
    _f(DISPLAY, "contrast", "Contrast", 0.0, 2.0, "set_contrast"),
    _b(DISPLAY, "enable_hdr", "EnableHDR", "set_hdr_enabled"),
    _f(DISPLAY, "hdr_max_nits", "HDRMaxNits", 1000.0, 10000.0, "set_hdr_max_nits"),
    _i(DISPLAY, "monitor_index", "MonitorIndex", 0, None, "set_monitor_index"),
    _b(DISPLAY, "borderless_window", "BorderlessWindow", "set_borderless_window"),
    _f(DISPLAY, "screen_percentage", "ScreenPercentage", 50.0, 200.0, "set_screen_percentage"),
    _f(DISPLAY, "menu_field_of_view", "MenuFieldOfView", 60.0, 120.0, "set_menu_field_of_view"),
    _f(DISPLAY, "aspect_ratio_override", "AspectRatioOverride", 0.0, None, "set_aspect_ratio_override"),
    _f(DISPLAY, "safe_zone_scale", "SafeZoneScale", 0.8, 1.0, "set_safe_zone_scale"),
    # Audio
    _f(AUDIO, "master_volume", "MasterVolume", 0.0, 1.0, "set_master_volume"),
    _f(AUDIO, "sfx_volume", "SFXVolume", 0.0, 1.0, "set_sfx_volume"),
    _f(AUDIO, "music_volume", "MusicVolume", 0.0, 1.0, "set_music_volume"),
    _f(AUDIO, "voice_dialog_volume", "VoiceDialogVolume", 0.0, 1.0, "set_voice_dialog_volume"),
    _f(AUDIO, "ambient_volume", "AmbientVolume", 0.0, 1.0, "set_ambient_volume"),
    _f(AUDIO, "ui_sound_volume", "UISoundVolume", 0.0, 1.0, "set_ui_sound_volume"),
    _f(AUDIO, "voice_chat_volume", "VoiceChatVolume", 0.0, 1.0, "set_voice_chat_volume"),
    _i(AUDIO, "audio_quality", "AudioQuality", 0, 3, "set_audio_quality"),
    _i(AUDIO, "surround_sound_mode", "SurroundSoundMode", 0, 2, "set_surround_sound_mode"),
    _b(AUDIO, "enable_spatial_audio", "EnableSpatialAudio", "set_spatial_audio_enabled"),
    _f(AUDIO, "dynamic_range", "DynamicRange", 0.0, 1.0, "set_dynamic_range"),
    _f(AUDIO, "subtitle_text_size", "SubtitleTextSize", 0.5, 2.0, "set_subtitle_text_size"),
    _f(
        AUDIO,
        "subtitle_background_opacity",
        "SubtitleBackgroundOpacity",
        0.0,
        1.0,
        "set_subtitle_background_opacity",
    ),
    # Gameplay
    _f(GAMEPLAY, "fov", "FOV", 60.0, 120.0, "set_fov"),
    _f(GAMEPLAY, "mouse_sensitivity", "MouseSensitivity", 0.1, 5.0, "set_mouse_sensitivity"),
    _b(GAMEPLAY, "invert_mouse_y", "InvertMouseY", "set_invert_mouse_y"),
    _f(
        GAMEPLAY,
        "controller_sensitivity",
        "ControllerSensitivity",
        0.1,
        5.0,
        "set_controller_sensitivity",
    ),
    _f(GAMEPLAY, "controller_dead_zone", "ControllerDeadZone", 0.0, 0.5, "set_controller_dead_zone"),
    _f(GAMEPLAY, "aim_assist_strength", "AimAssistStrength", 0.0, 1.0, "set_aim_assist_strength"),
    _f(
        GAMEPLAY,
        "camera_shake_intensity",
        "CameraShakeIntensity",
        0.0,
        1.0,
        "set_camera_shake_intensity",
    ),
    _f(GAMEPLAY, "head_bob_intensity", "HeadBobIntensity", 0.0, 1.0, "set_head_bob_intensity"),
    _b(GAMEPLAY, "enable_vibration", "EnableVibration", "set_vibration_enabled"),
    _b(GAMEPLAY, "crouch_toggle", "CrouchToggle", "set_crouch_toggle"),
    _b(GAMEPLAY, "sprint_toggle", "SprintToggle", "set_sprint_toggle"),
    _b(GAMEPLAY, "enable_auto_run", "EnableAutoRun", "set_auto_run_enabled"),
    _f(GAMEPLAY, "camera_smoothing", "CameraSmoothing", 0.0, 1.0, "set_camera_smoothing"),
    # Accessibility
    _e(ACCESSIBILITY, "colorblind_mode", "ColorblindMode", ColorblindMode, "set_colorblind_mode"),
    _f(ACCESSIBILITY, "ui_scale", "UIScale", 0.5, 2.0, "set_ui_scale"),
    _f(ACCESSIBILITY, "text_size", "TextSize", 0.5, 2.0, "set_text_size"),
    _b(ACCESSIBILITY, "high_contrast_mode", "HighContrastMode", "set_high_contrast_mode"),
    _b(ACCESSIBILITY, "enable_screen_reader", "EnableScreenReader", "set_screen_reader_enabled"),
    _b(ACCESSIBILITY, "reduced_motion", "ReducedMotion", "set_reduced_motion"),
    _b(ACCESSIBILITY, "photosensitivity_mode", "PhotosensitivityMode", "set_photosensitivity_mode"),
    # Network
    _i(NETWORK, "max_ping_threshold", "MaxPingThreshold", 0, None, "set_max_ping_threshold"),
    _f(NETWORK, "network_smoothing", "NetworkSmoothing", 0.0, 1.0, "set_network_smoothing"),
    _i(NETWORK, "bandwidth_limit_kbps", "BandwidthLimitKBps", 0, None, "set_bandwidth_limit"),
    FieldSpec(NETWORK, "preferred_region", "PreferredRegion", "string", "set_preferred_region"),
    _b(NETWORK, "enable_crossplay", "EnableCrossplay", "set_crossplay_enabled"),
    # Debug
    _b(DEBUG, "show_performance_overlay", "ShowPerformanceOverlay", "set_performance_overlay_visible"),
    _b(DEBUG, "show_network_stats", "ShowNetworkStats", "set_network_stats_visible"),
    _b(DEBUG, "developer_mode", "DeveloperMode", "set_developer_mode"),
    _b(DEBUG, "enable_crash_reporting", "EnableCrashReporting", "set_crash_reporting_enabled"),
    _b(DEBUG, "benchmark_mode", "BenchmarkMode", "set_benchmark_mode"),
)

FIELDS_BY_CATEGORY: dict[str, tuple[FieldSpec, ...]] = {
    name: tuple(s for s in FIELD_SPECS if s.category == name) for name in CATEGORY_ORDER
}
FIELD_INDEX: dict[tuple[str, str], FieldSpec] = {(s.category, s.attr): s for s in FIELD_SPECS}
SETTER_INDEX: dict[str, FieldSpec] = {s.setter: s for s in FIELD_SPECS}


def get_field(category: str, attr: str) -> FieldSpec:
    try:
        return FIELD_INDEX[(category, attr)]
    except KeyError:
        raise KeyError(f"unknown settings field: {category}.{attr}") from None


__all__ = [
    "ValueType",
    "CATEGORY_ORDER",
    "CATEGORY_TYPES",
    "GRAPHICS",
    "RENDERING",
    "PERFORMANCE",
    "DISPLAY",
    "AUDIO",
    "GAMEPLAY",
    "ACCESSIBILITY",
    "NETWORK",
    "DEBUG",
    "GraphicsSettings",
    "RenderingSettings",
    "PerformanceSettings",
    "DisplaySettings",
    "AudioSettings",
    "GameplaySettings",
    "AccessibilitySettings",
    "NetworkSettings",
    "DebugSettings",
    "SettingsDocument",
    "RangeHint",
    "FieldSpec",
    "FIELD_SPECS",
    "FIELDS_BY_CATEGORY",
    "FIELD_INDEX",
    "SETTER_INDEX",
    "category_attr",
    "get_field",
]
