"""
プロジェクト向けの軽量ロギングユーティリティ。

要点:
- 各モジュールは `logging.getLogger(__name__)` でロガーを取得する。
- ランナー（`api.warp.run_warp`）だけが、未設定時に最小構成を 1 度だけ適用する。
"""

from __future__ import annotations

import logging

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def resolve_level(level: int | str) -> int:
    """"INFO" などのレベル名または数値を logging の数値レベルへ。未知の名前は INFO。"""
    if isinstance(level, str):
        value = logging.getLevelName(level.strip().upper())
        return value if isinstance(value, int) else logging.INFO
    return int(level)


def setup_default_logging(level: int | str = "INFO") -> bool:
    """最小限のロギング設定を 1 度だけ適用する。

    - ルートロガーにハンドラが既にあれば何もしない（False を返す）
    - 適用した場合は True
    """
    root = logging.getLogger()
    if root.handlers:
        # Assume the app has configured logging
        return False
    logging.basicConfig(level=resolve_level(level), format=DEFAULT_FORMAT)
    return True


__all__ = ["DEFAULT_FORMAT", "resolve_level", "setup_default_logging"]
