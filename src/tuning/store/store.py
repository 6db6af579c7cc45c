"""
どこで: `tuning.store.store`（設定ストア本体）。
何を: `SettingsDocument` を 1 つ所有し、型付きセッター（クランプ付き）・カテゴリ適用・購読通知・
      ダーティ管理・クイック操作・保存/読込・性能メトリクスの窓口をまとめる `SettingsStore`。
なぜ: UI/ホストが触る唯一の入口を用意し、検証・反映・永続化の順序をここで固定するため。

設計:
- ドキュメントとカテゴリは不変 dataclass。更新は差し替えのみで、保存はその時点の参照を符号化する。
- スカラーセッター（`set_shadow_quality` など）は `FieldSpec` テーブルからクラスへ生成する。
  すべて `set_field(category, attr, value)` を経由する。
- 適用は「フック（純関数）→ `RuntimeSink` へノブ送出 → 購読者へカテゴリ名を通知」。
  ノブ単位の失敗はログに残して続行する（ひとつの欠損ノブが残りを止めない）。
- グローバル単一インスタンスは持たない。ホストが生成して保持する（`api.open_store()`）。
"""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import Any, Callable, Iterable, Optional

from tuning.metrics.aggregator import MetricsAggregator, PerformanceMetrics
from tuning.settings import presets
from tuning.settings.codec import ParseError, decode, encode
from tuning.settings.enums import WindowMode
from tuning.settings.schema import (
    AUDIO,
    CATEGORY_ORDER,
    CATEGORY_TYPES,
    DISPLAY,
    FIELD_SPECS,
    PERFORMANCE,
    RENDERING,
    FieldSpec,
    SettingsDocument,
    category_attr,
    get_field,
)
from tuning.settings.validation import sanitize_category, sanitize_document, sanitize_value

from .apply import APPLY_HOOKS
from .runtime import NullRuntimeSink, RuntimeSink
from .storage import FileStorage, Storage, StorageError, StorageNotFound, resolve_settings_path

logger = logging.getLogger(__name__)

Subscriber = Callable[[str], None]

PERFORMANCE_MODE = "performance"
QUALITY_MODE = "quality"


class SettingsStore:
    """設定ドキュメントと性能メトリクスを所有するストア。"""

    def __init__(
        self,
        *,
        defaults: SettingsDocument | None = None,
        sink: RuntimeSink | None = None,
        storage: Storage | None = None,
        path: str | Path | None = None,
        metrics: MetricsAggregator | None = None,
    ) -> None:
        self._defaults = sanitize_document(defaults if defaults is not None else SettingsDocument())
        self._document = self._defaults
        self._sink: RuntimeSink = sink if sink is not None else NullRuntimeSink()
        self._storage: Storage = storage if storage is not None else FileStorage()
        self._path = Path(path) if path is not None else resolve_settings_path()
        self._metrics = metrics if metrics is not None else MetricsAggregator()
        self._listeners: list[Subscriber] = []
        self._dirty: set[str] = set()
        # クイックモード（performance/quality）の有効名と、有効化前の Graphics/Rendering
        self._active_mode: Optional[str] = None
        self._mode_base: dict[str, Any] | None = None

    # --- 参照 ---
    @property
    def path(self) -> Path:
        return self._path

    @property
    def defaults(self) -> SettingsDocument:
        return self._defaults

    @property
    def metrics(self) -> MetricsAggregator:
        return self._metrics

    @property
    def sink(self) -> RuntimeSink:
        return self._sink

    def get_all_settings(self) -> SettingsDocument:
        return self._document

    def get_category(self, name: str) -> Any:
        return self._document.category(name)

    def get_field(self, category: str, attr: str) -> Any:
        get_field(category, attr)
        return getattr(self._document.category(category), attr)

    # --- 変更 ---
    def set_category(self, name: str, value: Any) -> Any:
        """カテゴリ値を丸ごと差し替える（全フィールドをクランプ）。"""
        fixed = sanitize_category(name, value)
        self._commit(self._document.with_category(name, fixed), (name,))
        return fixed

    def set_field(self, category: str, attr: str, value: Any) -> Any:
        """1 フィールドを設定し、クランプ後に実際に格納した値を返す。"""
        spec = get_field(category, attr)
        current = self._document.category(category)
        fixed = sanitize_value(spec, value, getattr(current, attr))
        if fixed != value:
            logger.debug("%s.%s: %r -> %r", category, attr, value, fixed)
        updated = sanitize_category(category, _replace(current, attr, fixed))
        self._commit(self._document.with_category(category, updated), (category,))
        return fixed

    def reset_to_defaults(self) -> None:
        self._active_mode = None
        self._mode_base = None
        self._commit(self._defaults, CATEGORY_ORDER)

    def _commit(self, document: SettingsDocument, categories: Iterable[str]) -> None:
        before = self._document
        self._document = document
        targets = set(categories)
        for name in CATEGORY_ORDER:
            if name not in targets:
                continue
            if document.category(name) != before.category(name):
                self._dirty.add(name)
            self.apply_category(name)

    # --- 適用 ---
    def apply_category(self, name: str) -> list[tuple[str, Any]]:
        """カテゴリのフックを実行し、ノブを送出して購読者へ通知する。送出したノブ列を返す。"""
        knobs = APPLY_HOOKS[name](self._document.category(name))
        for knob, value in knobs:
            try:
                self._sink.apply_setting(knob, value)
            except Exception as e:
                logger.warning("runtime knob %s=%r failed: %s", knob, value, e)
        self._notify(name)
        return knobs

    def apply_all(self) -> None:
        for name in CATEGORY_ORDER:
            self.apply_category(name)

    # --- 購読 ---
    def subscribe(self, listener: Subscriber) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Subscriber) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def _notify(self, category: str) -> None:
        for listener in list(self._listeners):
            try:
                listener(category)
            except Exception:
                logger.debug("settings listener failed for %s", category, exc_info=True)

    # --- ダーティ ---
    @property
    def is_dirty(self) -> bool:
        return bool(self._dirty)

    def dirty_categories(self) -> tuple[str, ...]:
        return tuple(name for name in CATEGORY_ORDER if name in self._dirty)

    # --- クイック操作 ---
    def _apply_bundle(self, bundle: presets.Overrides) -> None:
        self._commit(presets.apply_overrides(self._document, bundle), bundle.keys())

    def set_overall_graphics_quality(self, level: int) -> None:
        """Graphics の 8 項目を同じ品質レベル（0..4）へ揃える。"""
        self._apply_bundle(presets.graphics_level(level))

    def set_max_frame_rate(self, fps: float) -> None:
        self.set_field(PERFORMANCE, "frame_rate_limit", fps)

    def set_ray_tracing(self, enabled: bool) -> None:
        self.set_field(RENDERING, "enable_ray_tracing", enabled)

    def set_resolution_simple(self, width: int, height: int) -> None:
        self.set_field(DISPLAY, "resolution", (width, height))

    def set_fullscreen(self, fullscreen: bool) -> None:
        mode = WindowMode.FULLSCREEN if fullscreen else WindowMode.WINDOWED
        self.set_field(DISPLAY, "window_mode", mode)

    def set_volume(self, volume: float) -> None:
        self.set_field(AUDIO, "master_volume", volume)

    def apply_quality_preset(self, level: int) -> None:
        """品質プリセット（0=Low .. 4=Epic）を Graphics/Rendering へ適用する。"""
        self._apply_bundle(presets.quality_preset(level))

    def set_all_post_process_effects(self, enabled: bool) -> None:
        self._apply_bundle(presets.post_process_effects(enabled))

    def enable_performance_mode(self, enabled: bool) -> None:
        self._set_mode(PERFORMANCE_MODE, presets.PERFORMANCE_MODE, enabled)

    def enable_quality_mode(self, enabled: bool) -> None:
        self._set_mode(QUALITY_MODE, presets.QUALITY_MODE, enabled)

    @property
    def active_mode(self) -> Optional[str]:
        return self._active_mode

    def _set_mode(self, name: str, bundle: presets.Overrides, enabled: bool) -> None:
        """モードの ON/OFF。ON 時に最初のモード有効化前の状態を退避し、OFF 時に戻す。

        別モードが有効な状態で ON にした場合は退避済みの状態を引き継ぐ。
        有効でないモードの OFF は何もしない。
        """
        if enabled:
            if self._mode_base is None:
                self._mode_base = {c: self._document.category(c) for c in presets.MODE_STASH_CATEGORIES}
            self._active_mode = name
            self._apply_bundle(bundle)
            return
        if self._active_mode != name or self._mode_base is None:
            logger.debug("%s mode is not active; nothing to restore", name)
            return
        restored = self._document
        for category, value in self._mode_base.items():
            restored = restored.with_category(category, value)
        self._active_mode = None
        self._mode_base = None
        self._commit(restored, presets.MODE_STASH_CATEGORIES)

    # --- 永続化 ---
    def save_settings(self) -> bool:
        """現在のドキュメントを保存する。失敗はログに残して False を返す。"""
        snapshot = self._document
        try:
            data = encode(snapshot)
            self._storage.ensure_directory(self._path.parent)
            self._storage.write(self._path, data)
        except StorageError as e:
            logger.error("failed to save settings to %s: %s", self._path, e)
            return False
        except (TypeError, ValueError) as e:
            logger.error("failed to encode settings: %s", e)
            return False
        if self._document is snapshot:
            self._dirty.clear()
        logger.info("settings saved: %s", self._path)
        return True

    def load_settings(self) -> bool:
        """保存済み設定を既定へ部分マージして置き換え、全カテゴリを適用する。"""
        try:
            data = self._storage.read(self._path)
        except StorageNotFound:
            logger.warning("settings file not found: %s", self._path)
            return False
        except StorageError as e:
            logger.error("failed to read settings from %s: %s", self._path, e)
            return False
        try:
            document = decode(data, self._defaults)
        except ParseError as e:
            logger.error("failed to parse settings %s: %s", self._path, e)
            return False
        self._document = document
        self._active_mode = None
        self._mode_base = None
        self._dirty.clear()
        self.apply_all()
        logger.info("settings loaded: %s", self._path)
        return True

    # --- 性能メトリクス ---
    def update_performance_metrics(self, dt: float) -> None:
        self._metrics.update(dt)

    def get_performance_metrics(self) -> PerformanceMetrics:
        return self._metrics.snapshot()

    def reset_performance_stats(self) -> None:
        self._metrics.reset()


def _replace(category_value: Any, attr: str, value: Any) -> Any:
    return dataclasses.replace(category_value, **{attr: value})


# ---------------------------------------------------------------------------
# アクセサ生成
# ---------------------------------------------------------------------------


def _make_category_getter(name: str) -> Callable[[SettingsStore], Any]:
    def getter(self: SettingsStore) -> Any:
        return self.get_category(name)

    getter.__name__ = f"get_{category_attr(name)}"
    getter.__doc__ = f"現在の {name} 設定（不変）を返す。"
    return getter


def _make_category_setter(name: str) -> Callable[[SettingsStore, Any], Any]:
    def setter(self: SettingsStore, value: Any) -> Any:
        return self.set_category(name, value)

    setter.__name__ = f"set_{category_attr(name)}"
    setter.__doc__ = f"{name} 設定を丸ごと差し替えて適用する。"
    return setter


def _make_field_setter(spec: FieldSpec) -> Callable[..., Any]:
    if spec.value_type == "resolution":

        def setter(self: SettingsStore, width: Any, height: Any = None) -> Any:
            value = width if height is None else (width, height)
            return self.set_field(spec.category, spec.attr, value)

    else:

        def setter(self: SettingsStore, value: Any) -> Any:  # type: ignore[misc]
            return self.set_field(spec.category, spec.attr, value)

    setter.__name__ = spec.setter
    setter.__doc__ = f"{spec.category}.{spec.attr} を設定する（クランプ後の値を返す）。"
    return setter


def _install_accessors(cls: type) -> None:
    for name in CATEGORY_TYPES:
        attr = category_attr(name)
        setattr(cls, f"get_{attr}", _make_category_getter(name))
        setattr(cls, f"set_{attr}", _make_category_setter(name))
    for spec in FIELD_SPECS:
        if hasattr(cls, spec.setter):
            raise RuntimeError(f"setter name collides with an existing attribute: {spec.setter}")
        setattr(cls, spec.setter, _make_field_setter(spec))


_install_accessors(SettingsStore)


__all__ = ["SettingsStore", "Subscriber", "PERFORMANCE_MODE", "QUALITY_MODE"]
