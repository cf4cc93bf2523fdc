"""
どこで: `engine.core` の平滑化フィルタ。
何を: 係数固定（履歴 0.6 / 入力 0.4）の一次 IIR ローパス `ExponentialSmoother`。
なぜ: マウス移動の離散サンプリングによる速度のジッタを毎フレーム抑えるため。
"""

from __future__ import annotations

from typing import Generic, Protocol, TypeVar

HISTORY_WEIGHT: float = 0.6
INPUT_WEIGHT: float = 0.4


class Blendable(Protocol):
    """スカラー倍・加算・減算が閉じている値（Vector2/float/ndarray など）。"""

    def __mul__(self, f: float, /): ...

    def __add__(self, other, /): ...

    def __sub__(self, other, /): ...


T = TypeVar("T", bound=Blendable)


class ExponentialSmoother(Generic[T]):
    """`next = prev * 0.6 + input * 0.4` を保持・返却する。

    `prev + (input - prev) * 0.4` の形で評価するため、入力が現在値と等しければ
    丸め誤差なしで同じ値を返す（不動点が厳密）。
    """

    def __init__(self, initial: T):
        self._value: T = initial

    @property
    def value(self) -> T:
        return self._value

    def update(self, sample: T) -> T:
        # 履歴側の重みは 1 - INPUT_WEIGHT (= HISTORY_WEIGHT) として式に含まれる
        value = self._value + (sample - self._value) * INPUT_WEIGHT
        self._value = value
        return value


__all__ = ["ExponentialSmoother", "Blendable", "HISTORY_WEIGHT", "INPUT_WEIGHT"]
