"""
どこで: `engine.monitor` のフレームレート計測。
何を: 1 秒窓でティック数を数え、窓が閉じた呼び出しで確定値を 1 度だけ返す `FrameRateCounter`。
なぜ: ウィンドウタイトルへ FPS を表示するため（描画の正しさには関与しない）。
"""

from __future__ import annotations

import time
from typing import Callable

WINDOW_SECONDS: float = 1.0


class FrameRateCounter:
    """1 秒ごとのティック数を数える。

    - 窓内の呼び出しはカウントを 1 増やして None を返す。
    - 窓開始から 1 秒以上経過した最初の呼び出しは、それまでのカウントを返し、
      カウントと窓開始時刻をリセットする（この呼び出し自身は数えない）。
    """

    def __init__(self, *, now: Callable[[], float] = time.perf_counter):
        self._now = now
        self._count = 0
        self._window_start = now()

    @property
    def count(self) -> int:
        return self._count

    def tick(self) -> int | None:
        current = self._now()
        if current - self._window_start < WINDOW_SECONDS:
            self._count += 1
            return None
        completed = self._count
        self._window_start = current
        self._count = 0
        return completed


__all__ = ["FrameRateCounter", "WINDOW_SECONDS"]
