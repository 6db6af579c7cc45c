from __future__ import annotations

import dataclasses
import math
import sys
from pathlib import Path

import pytest

from tuning.settings import (
    CATEGORY_ORDER,
    FIELD_SPECS,
    GraphicsSettings,
    PerformanceSettings,
    SettingsDocument,
    UpscalingMode,
    WindowMode,
)
from tuning.store import ConsoleVariableTable, SettingsStore


def test_frame_rate_limit_scenario(make_store, settings_path: Path):
    store = make_store()
    assert store.get_performance().frame_rate_limit == 0.0

    store.set_frame_rate_limit(-10)
    assert store.get_performance().frame_rate_limit == 0.0

    store.set_frame_rate_limit(9999)
    assert store.get_performance().frame_rate_limit == 9999.0
    assert store.save_settings() is True

    other_defaults = SettingsDocument(performance=PerformanceSettings(frame_rate_limit=30.0))
    fresh = make_store(defaults=other_defaults)
    assert fresh.get_performance().frame_rate_limit == 30.0
    assert fresh.load_settings() is True
    assert fresh.get_performance().frame_rate_limit == 9999.0


def test_every_field_has_a_generated_setter(store: SettingsStore):
    for spec in FIELD_SPECS:
        setter = getattr(store, spec.setter)
        assert callable(setter)
        assert setter.__name__ == spec.setter


def test_setters_clamp_and_return_stored_value(store: SettingsStore):
    assert store.set_shadow_quality(7) == 4
    assert store.get_graphics().shadow_quality == 4
    assert store.set_master_volume(math.nan) == 0.0
    assert store.set_fov(math.inf) == 120.0
    assert store.set_bandwidth_limit(math.inf) == 0
    assert store.set_mouse_sensitivity(0.0) == 0.1
    assert store.set_upscaling_mode(42) is UpscalingMode.NONE
    assert store.set_resolution(800, 600) == (800, 600)
    assert store.get_display().resolution == (800, 600)
    assert store.set_preferred_region("NA-East") == "NA-East"


def test_category_setter_sanitizes_every_field(store: SettingsStore):
    stored = store.set_graphics(GraphicsSettings(shadow_quality=-3, texture_quality=12))
    assert stored.shadow_quality == 0
    assert stored.texture_quality == 4
    assert store.get_graphics() == stored
    with pytest.raises(TypeError):
        store.set_graphics(PerformanceSettings())


def test_set_field_rejects_unknown_names(store: SettingsStore):
    with pytest.raises(KeyError):
        store.set_field("Graphics", "does_not_exist", 1)
    with pytest.raises(KeyError):
        store.set_field("Nope", "shadow_quality", 1)


def test_apply_all_runs_nine_hooks_in_order_and_is_idempotent(store: SettingsStore, knobs):
    seen: list[str] = []
    store.subscribe(seen.append)

    knobs.clear_calls()
    store.apply_all()
    first = list(knobs.calls)
    assert seen == list(CATEGORY_ORDER)

    seen.clear()
    knobs.clear_calls()
    store.apply_all()
    assert knobs.calls == first
    assert seen == list(CATEGORY_ORDER)


def test_setter_applies_only_its_category(store: SettingsStore, knobs):
    seen: list[str] = []
    store.subscribe(seen.append)
    store.set_ssao_enabled(False)
    assert seen == ["Rendering"]
    assert knobs.get("r.AmbientOcclusionLevels") == 0

    store.unsubscribe(seen.append)
    store.set_ssao_enabled(True)
    assert seen == ["Rendering"]


def test_failing_knob_does_not_block_the_rest(make_store):
    class FlakySink(ConsoleVariableTable):
        def apply_setting(self, name, value):
            if name == "r.RayTracing":
                raise RuntimeError("missing console variable")
            super().apply_setting(name, value)

    sink = FlakySink()
    store = make_store(sink=sink)
    store.set_contact_shadows_enabled(False)
    assert sink.get("r.ContactShadows") == 0
    assert "r.RayTracing" not in sink


def test_failing_listener_does_not_break_setters(store: SettingsStore):
    def broken(_category: str) -> None:
        raise RuntimeError("ui gone")

    store.subscribe(broken)
    store.set_vsync_enabled(False)
    assert store.get_performance().enable_vsync is False


def test_dirty_tracking(store: SettingsStore):
    assert store.is_dirty is False
    store.set_vsync_enabled(store.get_performance().enable_vsync)
    assert store.is_dirty is False

    store.set_master_volume(0.3)
    store.set_shadow_quality(1)
    assert store.is_dirty is True
    assert store.dirty_categories() == ("Graphics", "Audio")

    assert store.save_settings() is True
    assert store.is_dirty is False

    store.set_fov(100)
    assert store.load_settings() is True
    assert store.is_dirty is False
    assert store.get_gameplay().fov == 90.0


def test_save_writes_json_at_resolved_path(store: SettingsStore, settings_path: Path):
    store.set_brightness(1.5)
    assert store.save_settings() is True
    assert settings_path.exists()
    assert b'"Brightness": 1.5' in settings_path.read_bytes()


def test_load_missing_file_returns_false_and_keeps_document(store: SettingsStore, caplog):
    store.set_text_size(1.5)
    before = store.get_all_settings()
    with caplog.at_level("WARNING"):
        assert store.load_settings() is False
    assert store.get_all_settings() is before
    assert any("not found" in r.getMessage() for r in caplog.records)


def test_load_corrupt_file_returns_false(store: SettingsStore, settings_path: Path, caplog):
    settings_path.parent.mkdir(parents=True)
    settings_path.write_bytes(b"{broken")
    before = store.get_all_settings()
    with caplog.at_level("ERROR"):
        assert store.load_settings() is False
    assert store.get_all_settings() is before
    assert any(r.levelname == "ERROR" for r in caplog.records)


@pytest.mark.skipif(
    not hasattr(sys, "get_int_max_str_digits") or sys.get_int_max_str_digits() == 0,
    reason="int digit limit not enforced",
)
def test_load_oversized_integer_literal_returns_false(store: SettingsStore, settings_path: Path):
    settings_path.parent.mkdir(parents=True)
    digits = b"9" * (sys.get_int_max_str_digits() + 700)
    settings_path.write_bytes(b'{"Network": {"MaxPingThreshold": ' + digits + b"}}")
    before = store.get_all_settings()
    assert store.load_settings() is False
    assert store.get_all_settings() is before


def test_load_deeply_nested_file_returns_false(store: SettingsStore, settings_path: Path):
    settings_path.parent.mkdir(parents=True)
    settings_path.write_bytes(b"[" * 200_000)
    before = store.get_all_settings()
    assert store.load_settings() is False
    assert store.get_all_settings() is before


def test_huge_integers_clamp_like_infinity(store: SettingsStore):
    assert store.set_brightness(10**400) == 2.0
    assert store.set_brightness(-(10**400)) == 0.0
    # 上限なしのフィールドは下限へ
    assert store.set_frame_rate_limit(10**400) == 0.0


def test_lone_surrogate_region_is_made_saveable(store: SettingsStore, settings_path: Path):
    assert store.set_preferred_region("EU\ud800West") == "EU?West"
    assert store.save_settings() is True
    assert "EU?West" in settings_path.read_text(encoding="utf-8")


def test_save_failure_returns_false(make_store, tmp_path: Path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    store = make_store(path=blocker / "settings.json")
    store.set_master_volume(0.5)
    assert store.save_settings() is False
    assert store.is_dirty is True


def test_reset_to_defaults(make_store):
    defaults = SettingsDocument(graphics=GraphicsSettings(shadow_quality=2))
    store = make_store(defaults=defaults)
    store.set_shadow_quality(4)
    store.set_master_volume(0.1)
    store.reset_to_defaults()
    assert store.get_all_settings() == defaults
    assert store.get_graphics().shadow_quality == 2


def test_quick_operations(store: SettingsStore, knobs):
    store.set_overall_graphics_quality(1)
    assert set(vars(store.get_graphics()).values()) == {1}

    store.set_max_frame_rate(-1)
    assert store.get_performance().frame_rate_limit == 0.0
    store.set_max_frame_rate(120)
    assert knobs.get("t.MaxFPS") == 120.0

    store.set_ray_tracing(True)
    assert store.get_rendering().enable_ray_tracing is True

    store.set_resolution_simple(1280, 720)
    assert store.get_display().resolution == (1280, 720)

    store.set_fullscreen(False)
    assert store.get_display().window_mode is WindowMode.WINDOWED
    store.set_fullscreen(True)
    assert store.get_display().window_mode is WindowMode.FULLSCREEN

    store.set_volume(2.0)
    assert store.get_audio().master_volume == 1.0

    store.set_all_post_process_effects(False)
    r = store.get_rendering()
    assert not (r.enable_bloom or r.enable_motion_blur or r.enable_vignette)

    store.apply_quality_preset(4)
    assert store.get_graphics().texture_quality == 4
    assert store.get_rendering().enable_ssgi is True


def test_performance_mode_restores_previous_state(store: SettingsStore):
    store.set_shadow_quality(4)
    store.set_ray_tracing_enabled(True)
    before_g = store.get_graphics()
    before_r = store.get_rendering()

    store.enable_performance_mode(True)
    assert store.active_mode == "performance"
    assert store.get_rendering().enable_ray_tracing is False
    assert store.get_graphics().shadow_quality == 1

    store.enable_performance_mode(False)
    assert store.active_mode is None
    assert store.get_graphics() == before_g
    assert store.get_rendering() == before_r


def test_switching_modes_restores_state_from_before_the_first(store: SettingsStore):
    original = store.get_all_settings()
    store.enable_performance_mode(True)
    store.enable_quality_mode(True)
    assert store.active_mode == "quality"
    assert store.get_rendering().enable_ray_tracing is True

    # 有効でないモードの OFF は何もしない
    store.enable_performance_mode(False)
    assert store.active_mode == "quality"

    store.enable_quality_mode(False)
    assert store.get_graphics() == original.graphics
    assert store.get_rendering() == original.rendering


def test_metrics_pass_through(store: SettingsStore):
    for _ in range(10):
        store.update_performance_metrics(1 / 50)
    m = store.get_performance_metrics()
    assert m.fps_average == pytest.approx(50.0)
    assert m.ram_usage_mb == pytest.approx(256.0)
    store.reset_performance_stats()
    assert store.get_performance_metrics().fps_max == 0.0


def test_saved_snapshot_is_not_affected_by_later_setters(store: SettingsStore):
    snapshot = store.get_all_settings()
    store.set_sfx_volume(0.1)
    assert snapshot.audio.sfx_volume == 1.0
    assert dataclasses.is_dataclass(snapshot)
