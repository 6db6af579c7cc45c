"""
どこで: `common.settings`
何を: プロジェクトの環境変数（`TDK_*`）を型付きで一元管理し、起動時に読み込む。
なぜ: `os.getenv` の散在を解消し、既定値/型の一貫性とテスト容易性を高めるため。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_float, env_str


@dataclass
class _Settings:
    # 保存先
    STATE_DIR: str | None = None

    # ロギング
    LOG_LEVEL: str | None = None

    # 周期（秒）。None は YAML/既定値に委ねる
    AUTOSAVE_INTERVAL: float | None = None
    OVERLAY_INTERVAL: float | None = None


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - 文字列は `env_str`、秒数は `env_float` を使用。
    - 周期は下限 0 に丸める（0 は無効扱い）。
    """
    _settings.STATE_DIR = env_str("TDK_STATE_DIR")
    _settings.LOG_LEVEL = env_str("TDK_LOG_LEVEL")
    _settings.AUTOSAVE_INTERVAL = env_float("TDK_AUTOSAVE_INTERVAL", None, min_value=0.0)
    _settings.OVERLAY_INTERVAL = env_float("TDK_OVERLAY_INTERVAL", None, min_value=0.0)


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
