from __future__ import annotations

import dataclasses

import pytest

from tuning.settings import (
    CATEGORY_ORDER,
    AccessibilitySettings,
    DebugSettings,
    DisplaySettings,
    GameplaySettings,
    GraphicsSettings,
    PerformanceSettings,
    RenderingSettings,
    SettingsDocument,
    UpscalingMode,
)
from tuning.store import APPLY_HOOKS
from tuning.store.apply import (
    accessibility_knobs,
    audio_knobs,
    debug_knobs,
    display_knobs,
    gameplay_knobs,
    graphics_knobs,
    performance_knobs,
    rendering_knobs,
)


def test_hook_registry_covers_every_category():
    assert list(APPLY_HOOKS) == list(CATEGORY_ORDER)


@pytest.mark.parametrize("category", CATEGORY_ORDER)
def test_hooks_are_pure(category: str):
    value = SettingsDocument().category(category)
    assert APPLY_HOOKS[category](value) == APPLY_HOOKS[category](value)


def test_graphics_knobs_use_scalability_names():
    knobs = dict(graphics_knobs(GraphicsSettings(shadow_quality=1)))
    assert knobs["sg.ShadowQuality"] == 1
    assert knobs["sg.AntiAliasingQuality"] == 3
    assert len(knobs) == 8


@pytest.mark.parametrize("level,expected", [(0, 0), (1, 2), (2, 4), (3, 8), (4, 16)])
def test_anisotropy_level_maps_to_power_of_two(level: int, expected: int):
    knobs = dict(rendering_knobs(RenderingSettings(anisotropic_filtering=level)))
    assert knobs["r.MaxAnisotropy"] == expected


def test_rendering_toggles_and_upscaler():
    r = RenderingSettings(
        enable_ssao=False,
        enable_bloom=True,
        enable_vignette=True,
        upscaling_mode=UpscalingMode.DLSS,
        reflection_quality=0,
    )
    knobs = dict(rendering_knobs(r))
    assert knobs["r.AmbientOcclusionLevels"] == 0
    assert knobs["r.BloomQuality"] == 5
    assert knobs["r.Tonemapper.Vignette"] == pytest.approx(0.4)
    assert knobs["r.NGX.DLSS.Enable"] == 1
    assert "r.TemporalSuperResolution" not in knobs
    assert knobs["r.ReflectionEnvironment"] == 0

    none_knobs = dict(rendering_knobs(RenderingSettings(upscaling_mode=UpscalingMode.NONE)))
    assert "r.NGX.DLSS.Enable" not in none_knobs
    assert "r.FidelityFX.FSR.Enabled" not in none_knobs


def test_performance_knobs():
    p = PerformanceSettings(
        enable_vsync=False,
        frame_rate_limit=144.0,
        enable_dynamic_resolution=True,
        min_frame_rate_for_dynamic_res=30.0,
        enable_triple_buffering=True,
    )
    knobs = dict(performance_knobs(p))
    assert knobs["r.VSync"] == 0
    assert knobs["t.MaxFPS"] == 144.0
    assert knobs["r.DynamicRes.OperationMode"] == 2
    assert knobs["r.DynamicRes.MinResolutionChangesPerSecond"] == pytest.approx(1000 / 30.01)
    assert knobs["r.MaxFrameLatency"] == 3


def test_display_knobs():
    d = DisplaySettings(resolution=(2560, 1440), brightness=1.25, enable_hdr=True)
    knobs = dict(display_knobs(d))
    assert (knobs["r.SetResX"], knobs["r.SetResY"]) == (2560, 1440)
    assert knobs["r.Tonemapper.Sharpen"] == pytest.approx(0.25)
    assert knobs["r.HDR.EnableHDROutput"] == 1
    assert knobs["r.ScreenPercentage"] == 100.0


def test_audio_knobs_push_every_volume():
    names = [name for name, _ in audio_knobs(SettingsDocument().audio)]
    assert names[0] == "au.MasterVolume"
    assert "au.SFXVolume" in names
    assert "au.UISoundVolume" in names
    assert len(names) == 7


def test_gameplay_has_no_knobs():
    assert gameplay_knobs(GameplaySettings()) == []


def test_photosensitivity_and_reduced_motion_override_effects():
    a = AccessibilitySettings(photosensitivity_mode=True, reduced_motion=True)
    knobs = accessibility_knobs(a)
    final = dict(knobs)
    assert final["r.BloomQuality"] == 0
    assert final["r.LensFlareQuality"] == 0
    assert final["r.MotionBlurQuality"] == 0
    assert knobs[0] == ("r.ColorBlind.Mode", 0)

    assert accessibility_knobs(AccessibilitySettings()) == [("r.ColorBlind.Mode", 0)]


def test_accessibility_applies_after_rendering(store, knobs):
    store.set_photosensitivity_mode(True)
    store.apply_all()
    # Rendering は bloom=5 を送るが、後段の Accessibility が 0 で上書きする
    assert knobs.get("r.BloomQuality") == 0


def test_debug_knobs_and_benchmark_vsync():
    d = DebugSettings(show_performance_overlay=True, benchmark_mode=True)
    knobs = dict(debug_knobs(d))
    assert knobs["stat.FPS"] == 1
    assert knobs["stat.Unit"] == 1
    assert knobs["r.VSync"] == 0
    assert "r.VSync" not in dict(debug_knobs(dataclasses.replace(d, benchmark_mode=False)))
