"""
どこで: `tuning.store.storage`。
何を: 設定ファイルの読み書き口（Protocol）、`pathlib` による既定実装 `FileStorage`、
      および保存先パスの解決（環境変数 → 設定ファイル → `<cwd>/data/settings`）。
なぜ: OS のファイル I/O をストアから切り離し、失敗を `StorageError` に正規化するため。
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Protocol

from common.settings import get as get_settings
from util.utils import config_section

logger = logging.getLogger(__name__)

DEFAULT_FILE_NAME = "settings.json"


class StorageError(OSError):
    """ストレージ操作の失敗。"""


class StorageNotFound(StorageError):
    """読み込み対象が存在しない。"""


class Storage(Protocol):
    def read(self, path: Path) -> bytes: ...

    def write(self, path: Path, data: bytes) -> None: ...

    def ensure_directory(self, path: Path) -> None: ...


class FileStorage:
    """ローカルファイルシステム実装。書き込みは一時ファイル経由で置き換える。"""

    def read(self, path: Path) -> bytes:
        p = Path(path)
        try:
            return p.read_bytes()
        except FileNotFoundError as e:
            raise StorageNotFound(f"settings file not found: {p}") from e
        except OSError as e:
            raise StorageError(f"failed to read {p}: {e}") from e

    def write(self, path: Path, data: bytes) -> None:
        p = Path(path)
        tmp = p.with_name(p.name + ".tmp")
        try:
            tmp.write_bytes(data)
            os.replace(tmp, p)
        except OSError as e:
            raise StorageError(f"failed to write {p}: {e}") from e

    def ensure_directory(self, path: Path) -> None:
        p = Path(path)
        try:
            p.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"failed to create directory {p}: {e}") from e


def resolve_state_dir() -> Path:
    """保存ディレクトリ: `TDK_STATE_DIR` → 設定 `settings.state_dir` → `<cwd>/data/settings`。"""
    env_dir = get_settings().STATE_DIR
    if env_dir:
        return Path(env_dir)
    state_dir = config_section("settings").get("state_dir")
    if isinstance(state_dir, str) and state_dir.strip():
        return Path(state_dir)
    return Path.cwd() / "data" / "settings"


def resolve_settings_path() -> Path:
    name = config_section("settings").get("file_name")
    if not (isinstance(name, str) and name.strip()):
        name = DEFAULT_FILE_NAME
    return resolve_state_dir() / name


__all__ = [
    "DEFAULT_FILE_NAME",
    "StorageError",
    "StorageNotFound",
    "Storage",
    "FileStorage",
    "resolve_state_dir",
    "resolve_settings_path",
]
