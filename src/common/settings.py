"""
どこで: `common.settings`
何を: 実行時の周辺設定（FPS/並列度/ログ/タイトル表示）を環境変数から型付きで一元管理。
なぜ: `os.getenv` の散在を避け、既定値と下限丸めを 1 箇所にまとめるため。

注: warp の見た目を決める定数（半径/強さ/サンプル数など）は設定対象外。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_int, env_str

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


@dataclass
class _Settings:
    # 描画トリガのレート [Hz]
    FPS: int = 60
    # シェーダの並列スレッド数（0 で Numba 既定）
    WORKERS: int = 0
    # ウィンドウタイトルへ FPS を表示
    SHOW_FPS: bool = True
    LOG_LEVEL: str = "INFO"


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込（不正値は既定へ、下限は丸め）。"""
    _settings.FPS = env_int("PXW_FPS", 60, min_value=1) or 60
    _settings.WORKERS = env_int("PXW_WORKERS", 0, min_value=0) or 0
    _settings.SHOW_FPS = env_bool("PXW_SHOW_FPS", True)
    _settings.LOG_LEVEL = env_str("PXW_LOG_LEVEL", "INFO", choices=_LOG_LEVELS).upper()


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
