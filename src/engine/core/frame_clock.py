"""
どこで: `engine.core` のフレーム時間計測。
何を: 前回呼び出しからの経過秒を返す `elapsed()` と、`Tickable` 列を固定順序で駆動する `tick()`。
なぜ: 描画トリガごとの dt を単調・非負に測り、フレーム駆動コンポーネントへ一様に渡すため。
"""

from __future__ import annotations

import time
from typing import Callable, Sequence

from .tickable import Tickable


class FrameClock:
    """経過時間の測定と Tickable の駆動だけを行う極小クラス。

    `now` は単調増加の秒数を返す関数（既定 `time.perf_counter`）。テストでは偽の時計を渡す。
    """

    def __init__(
        self,
        tickables: Sequence[Tickable] = (),
        *,
        now: Callable[[], float] = time.perf_counter,
    ):
        self._tickables = tuple(tickables)
        self._now = now
        self._last_time = now()

    def elapsed(self) -> float:
        """前回呼び出し（初回は生成時）からの経過秒を返し、基準時刻を進める。"""
        current = self._now()
        dt = current - self._last_time
        self._last_time = current
        # 時計が逆行しても負値は返さない
        return dt if dt > 0.0 else 0.0

    # GUI フレームワークから schedule_interval で呼ばせる
    def tick(self, dt: float | None = None) -> None:
        if dt is None:  # 手動駆動時は自前で測る
            dt = self.elapsed()

        for t in self._tickables:
            t.tick(dt)


__all__ = ["FrameClock"]
