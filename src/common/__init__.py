"""
どこで: `common` パッケージ。
何を: 環境変数パースとロギング初期化の軽量ユーティリティ。
なぜ: 全レイヤから再利用する共通基盤を分離し、依存の向きを単純化するため。
"""

from .env import env_float, env_str
from .logging import setup_default_logging

__all__ = [
    "env_float",
    "env_str",
    "setup_default_logging",
]
