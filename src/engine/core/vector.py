"""
どこで: `engine.core` の 2D ベクトル値型。
何を: カーソル位置・速度・サンプル座標を表す不変の `Vector2` と四則/長さ/距離演算。
なぜ: シェーダ・パイプライン・テストで同じ数値規約（IEEE 754 そのまま）を共有するため。
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True, slots=True)
class Vector2:
    """2 次元の点/ベクトル（不変）。

    - 0 除算はガードしない（inf/nan がそのまま伝搬する）。
    - 演算子 `+ - * /` と名前付きメソッドは同一の結果を返す。
    """

    x: float = 0.0
    y: float = 0.0

    @classmethod
    def zero(cls) -> "Vector2":
        return cls(0.0, 0.0)

    def add(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def sub(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x - other.x, self.y - other.y)

    def scale(self, f: float) -> "Vector2":
        return Vector2(self.x * f, self.y * f)

    def div(self, f: float) -> "Vector2":
        """スカラー除算。`f == 0` では IEEE 754 の inf/nan を返す。"""
        return Vector2(_ieee_div(self.x, f), _ieee_div(self.y, f))

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)

    def distance(self, other: "Vector2") -> float:
        return self.sub(other).length()

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    # ---- operators ----
    def __add__(self, other: "Vector2") -> "Vector2":
        if not isinstance(other, Vector2):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: "Vector2") -> "Vector2":
        if not isinstance(other, Vector2):
            return NotImplemented
        return self.sub(other)

    def __mul__(self, f: float) -> "Vector2":
        if isinstance(f, Vector2):
            return NotImplemented
        return self.scale(float(f))

    __rmul__ = __mul__

    def __truediv__(self, f: float) -> "Vector2":
        if isinstance(f, Vector2):
            return NotImplemented
        return self.div(float(f))

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y


def _ieee_div(a: float, b: float) -> float:
    # Python の float 除算は 0 で例外になるため IEEE 754 の結果を明示的に返す
    if b != 0.0:
        return a / b
    if a == 0.0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


__all__ = ["Vector2"]
