"""
どこで: `tuning.store` パッケージ。
何を: 設定ストア、カテゴリ適用フック、実行時ノブの送出先、ストレージ、自動保存を公開する。
なぜ: データ層（settings/metrics）の上に、状態の所有と副作用（適用/永続化）を集約するため。
"""

from .apply import APPLY_HOOKS
from .autosave import AutoSaver, resolve_autosave_interval
from .runtime import ConsoleVariableTable, NullRuntimeSink, RuntimeSink
from .storage import (
    FileStorage,
    Storage,
    StorageError,
    StorageNotFound,
    resolve_settings_path,
    resolve_state_dir,
)
from .store import PERFORMANCE_MODE, QUALITY_MODE, SettingsStore

__all__ = [
    "APPLY_HOOKS",
    "AutoSaver",
    "resolve_autosave_interval",
    "ConsoleVariableTable",
    "NullRuntimeSink",
    "RuntimeSink",
    "FileStorage",
    "Storage",
    "StorageError",
    "StorageNotFound",
    "resolve_settings_path",
    "resolve_state_dir",
    "PERFORMANCE_MODE",
    "QUALITY_MODE",
    "SettingsStore",
]
