"""
どこで: `engine.image.raster`。
何を: 圧縮バイト列 → RGBA8 バッファのデコード（Pillow）と、座標クランプ付きの最近傍サンプリング。
なぜ: 描画パイプラインが不変の画素配列だけを共有し、範囲外座標でも常に値を返せるようにするため。

注意:
- `pixels` は `(height, width, 4)` の C 連続 uint8 配列で、生成後は書き込み不可にする。
- アルファは常に 255 に揃える（描画出力は不透明）。サンプラはアルファを読まない。
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from engine.core.vector import Vector2

logger = logging.getLogger(__name__)


class DecodeError(Exception):
    """画像のデコード失敗（不正なバイト列/寸法が得られない）。起動時に致命的。"""

    def __init__(self, message: str, source: str | None = None) -> None:
        super().__init__(message if source is None else f"{message} (source={source})")
        self.source = source


def _clamp_index(value: float, size: int) -> int:
    """座標を [0, size-1] にクランプしてから切り捨てる。NaN は 0。"""
    if not value > 0.0:
        return 0
    upper = size - 1
    if value >= upper:
        return upper
    return int(value)


class PixelReader:
    """1 画素の R/G/B を float で読むだけの読み取り専用アクセサ。"""

    __slots__ = ("_pixels", "_x", "_y")

    def __init__(self, pixels: np.ndarray, x: int, y: int) -> None:
        self._pixels = pixels
        self._x = x
        self._y = y

    @property
    def index(self) -> tuple[int, int]:
        return (self._x, self._y)

    def red(self) -> float:
        return float(self._pixels[self._y, self._x, 0])

    def green(self) -> float:
        return float(self._pixels[self._y, self._x, 1])

    def blue(self) -> float:
        return float(self._pixels[self._y, self._x, 2])


@dataclass(frozen=True, eq=False)
class RasterImage:
    """デコード済み RGBA8 画像（不変）。"""

    width: int
    height: int
    pixels: np.ndarray = field(repr=False)

    def __post_init__(self) -> None:
        if int(self.width) <= 0 or int(self.height) <= 0:
            raise ValueError(f"image size must be positive, got {self.width}x{self.height}")
        # 呼び出し側のバッファとは共有しない
        if isinstance(self.pixels, (bytes, bytearray, memoryview)):
            arr = np.frombuffer(self.pixels, dtype=np.uint8).copy()
        else:
            arr = np.array(self.pixels, dtype=np.uint8, copy=True)
        expected = int(self.width) * int(self.height) * 4
        if arr.size != expected:
            raise ValueError(
                f"pixel buffer length {arr.size} does not match {self.width}x{self.height}x4"
            )
        arr = np.ascontiguousarray(arr.reshape(int(self.height), int(self.width), 4))
        arr.setflags(write=False)
        object.__setattr__(self, "width", int(self.width))
        object.__setattr__(self, "height", int(self.height))
        object.__setattr__(self, "pixels", arr)

    # ---- constructors ----
    @classmethod
    def from_array(cls, array: np.ndarray) -> "RasterImage":
        """`(h, w, 4)` または `(h, w, 3)` の uint8 配列から生成（アルファは 255 に固定）。"""
        arr = np.asarray(array)
        if arr.ndim != 3 or arr.shape[2] not in (3, 4):
            raise ValueError(f"expected (h, w, 3|4) array, got shape {arr.shape}")
        h, w = int(arr.shape[0]), int(arr.shape[1])
        rgba = np.empty((h, w, 4), dtype=np.uint8)
        rgba[..., :3] = arr[..., :3]
        rgba[..., 3] = 255
        return cls(w, h, rgba)

    @classmethod
    def decode(cls, data: bytes, *, source: str | None = None) -> "RasterImage":
        """圧縮バイト列（JPEG/PNG など Pillow が読める形式）をデコードする。

        Raises
        ------
        DecodeError
            バイト列が不正、または寸法が得られない場合。
        """
        try:
            with Image.open(io.BytesIO(data)) as img:
                img.load()
                rgba = img.convert("RGBA")
        except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as e:
            raise DecodeError(f"failed to decode image: {e}", source) from e
        width, height = rgba.size
        if width <= 0 or height <= 0:
            raise DecodeError(f"cannot get dimensions ({width}x{height})", source)
        arr = np.asarray(rgba, dtype=np.uint8)
        logger.debug("decoded image %dx%d mode=%s source=%s", width, height, rgba.mode, source)
        return cls.from_array(arr)

    @classmethod
    def from_path(cls, path: str | Path) -> "RasterImage":
        p = Path(path)
        try:
            data = p.read_bytes()
        except OSError as e:
            raise DecodeError(f"failed to read image file: {e}", str(p)) from e
        return cls.decode(data, source=str(p))

    # ---- sampling ----
    def sample(self, position: Vector2) -> PixelReader:
        """座標を各軸独立にクランプ→切り捨てした画素のアクセサを返す（全実数で定義）。"""
        x = _clamp_index(position.x, self.width)
        y = _clamp_index(position.y, self.height)
        return PixelReader(self.pixels, x, y)

    @property
    def nbytes(self) -> int:
        return self.width * self.height * 4


__all__ = ["DecodeError", "PixelReader", "RasterImage"]
