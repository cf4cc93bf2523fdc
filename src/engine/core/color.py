"""
どこで: `engine.core` の色アキュムレータ。
何を: RGB の float 三つ組 `Color3` と加算/スケール、8bit への確定（floor → 0–255 飽和）。
なぜ: 複数サンプルの平均をクランプせずに積算し、書き出し時だけ丸め規約を適用するため。
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import MutableSequence


def channel_to_u8(value: float) -> int:
    """1 チャネルを floor してから 0–255 に飽和させる。NaN は 0。"""
    if math.isnan(value):
        return 0
    if value <= 0.0:
        return 0
    if value >= 255.0:
        return 255
    return int(math.floor(value))


@dataclass(frozen=True, slots=True)
class Color3:
    """範囲外の値も保持する RGB アキュムレータ。"""

    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0

    def add(self, other: "Color3") -> "Color3":
        return Color3(self.red + other.red, self.green + other.green, self.blue + other.blue)

    def scale(self, f: float) -> "Color3":
        return Color3(self.red * f, self.green * f, self.blue * f)

    def finalize(self) -> tuple[int, int, int]:
        """(r, g, b) の 8bit 値を返す。"""
        return (channel_to_u8(self.red), channel_to_u8(self.green), channel_to_u8(self.blue))

    def write_bytes(self, pixel: MutableSequence[int]) -> None:
        """4 バイトのピクセル枠の先頭 3 バイトへ書き込む（アルファは触らない）。"""
        r, g, b = self.finalize()
        pixel[0] = r
        pixel[1] = g
        pixel[2] = b

    def __add__(self, other: "Color3") -> "Color3":
        if not isinstance(other, Color3):
            return NotImplemented
        return self.add(other)

    def __mul__(self, f: float) -> "Color3":
        if isinstance(f, Color3):
            return NotImplemented
        return self.scale(float(f))

    __rmul__ = __mul__


__all__ = ["Color3", "channel_to_u8"]
