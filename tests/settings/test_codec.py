from __future__ import annotations

import dataclasses
import json

import pytest

from tuning.settings import (
    CATEGORY_ORDER,
    AudioSettings,
    ColorblindMode,
    GraphicsSettings,
    ParseError,
    SettingsDocument,
    UpscalingMode,
    WindowMode,
    decode,
    encode,
)


def _custom_document() -> SettingsDocument:
    doc = SettingsDocument()
    doc = doc.with_category("Graphics", GraphicsSettings(shadow_quality=0, texture_quality=4))
    doc = doc.with_category(
        "Rendering",
        dataclasses.replace(doc.rendering, upscaling_mode=UpscalingMode.DLSS, enable_ssgi=True),
    )
    doc = doc.with_category(
        "Performance", dataclasses.replace(doc.performance, frame_rate_limit=143.5)
    )
    doc = doc.with_category(
        "Display",
        dataclasses.replace(doc.display, resolution=(2560, 1440), window_mode=WindowMode.WINDOWED),
    )
    doc = doc.with_category("Audio", AudioSettings(master_volume=0.25, audio_quality=3))
    doc = doc.with_category(
        "Accessibility",
        dataclasses.replace(doc.accessibility, colorblind_mode=ColorblindMode.TRITANOPIA),
    )
    doc = doc.with_category(
        "Network", dataclasses.replace(doc.network, preferred_region="EU-West 日本")
    )
    return doc


def test_encode_layout():
    data = json.loads(encode(_custom_document()).decode("utf-8"))
    assert list(data) == list(CATEGORY_ORDER)
    assert data["Graphics"]["ShadowQuality"] == 0
    assert data["Rendering"]["UpscalingMode"] == int(UpscalingMode.DLSS)
    assert data["Display"]["ResolutionX"] == 2560
    assert data["Display"]["ResolutionY"] == 1440
    assert data["Performance"]["EnableVSync"] is True
    assert data["Network"]["PreferredRegion"] == "EU-West 日本"


def test_roundtrip_ignores_defaults_argument():
    doc = _custom_document()
    other_defaults = SettingsDocument(graphics=GraphicsSettings(shadow_quality=1))
    assert decode(encode(doc), other_defaults) == doc
    assert decode(encode(SettingsDocument()), other_defaults) == SettingsDocument()


def test_missing_category_falls_back_to_defaults():
    doc = _custom_document()
    data = json.loads(encode(doc))
    del data["Audio"]
    defaults = SettingsDocument(audio=AudioSettings(music_volume=0.1))
    got = decode(json.dumps(data).encode("utf-8"), defaults)
    assert got.audio == defaults.audio
    assert got.graphics == doc.graphics
    assert got.display == doc.display
    assert got.network == doc.network


def test_non_object_category_falls_back_to_defaults():
    got = decode(b'{"Graphics": [1, 2, 3], "Audio": {"MasterVolume": 0.5}}', SettingsDocument())
    assert got.graphics == GraphicsSettings()
    assert got.audio.master_volume == 0.5
    assert got.audio.music_volume == AudioSettings().music_volume


def test_partial_category_merges_field_by_field():
    got = decode(b'{"Display": {"ResolutionX": 1280}}', SettingsDocument())
    assert got.display.resolution == (1280, 1080)
    assert got.display.window_mode is WindowMode.FULLSCREEN


def test_ill_typed_fields_are_ignored():
    payload = {
        "Performance": {"EnableVSync": 0, "FrameRateLimit": True},
        "Rendering": {"UpscalingMode": 1.5, "EnableLumen": "false"},
        "Network": {"PreferredRegion": 42, "MaxPingThreshold": "100"},
        "Accessibility": {"ColorblindMode": 2.0},
    }
    got = decode(json.dumps(payload), SettingsDocument())
    defaults = SettingsDocument()
    assert got.performance == defaults.performance
    assert got.rendering == defaults.rendering
    assert got.network == defaults.network
    assert got.accessibility.colorblind_mode is ColorblindMode.PROTANOPIA


def test_decoded_values_are_clamped():
    payload = {
        "Graphics": {"ShadowQuality": 9, "TextureQuality": 2.6},
        "Audio": {"MasterVolume": 3.5},
        "Rendering": {"UpscalingMode": 77},
        "Display": {"ResolutionX": 0, "HDRMaxNits": 5},
    }
    got = decode(json.dumps(payload).encode("utf-8"), SettingsDocument())
    assert got.graphics.shadow_quality == 4
    assert got.graphics.texture_quality == 3
    assert got.audio.master_volume == 1.0
    assert got.rendering.upscaling_mode is UpscalingMode.NONE
    assert got.display.resolution[0] == 1
    assert got.display.hdr_max_nits == 1000.0


def test_unknown_top_level_and_field_keys_are_ignored():
    payload = {"version": 999, "Extra": {"X": 1}, "Debug": {"DeveloperMode": True, "Nope": 3}}
    got = decode(json.dumps(payload), SettingsDocument())
    assert got.debug.developer_mode is True


@pytest.mark.parametrize(
    "data",
    [b"", b"{not json", b"\xff\xfe\x00", b"[1, 2]", b'"text"', b"42", b"null"],
)
def test_parse_errors(data: bytes):
    with pytest.raises(ParseError):
        decode(data, SettingsDocument())


def test_parse_error_is_a_value_error():
    assert issubclass(ParseError, ValueError)
