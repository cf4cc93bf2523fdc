"""
warp シェーダ（カーソル追従の色収差ワープ）

- カーソルからの距離で減衰する係数 `m` を求め、平滑化速度の逆向きへサンプル位置をずらします。
- R/G/B を少しずつ異なるオフセットで 10 回サンプリングして平均し、尾を引く色ずれを作ります。

定数（効果の見た目を決める固定値。設定では変えない）:
- FALLOFF_RADIUS: 効果半径 [px]。これ以上離れると変位 0。
- STRENGTH: 変位の強さ。負号で動きと逆向きへ引きずる。
- STEPS/STEP_SIZE: サンプル回数と 1 ステップあたりの追加オフセット。
- RED/GREEN/BLUE_OFFSET: チャネルごとの基準オフセット。

実装メモ:
- `shade()` は 1 画素を Vector2/Color3 で評価する純関数（参照実装・テスト用）。
- `warp_frame()` は同じ式を Numba の `prange` で行単位に並列評価し、出力バッファの
  RGB を直接書き込む。各行は互いに素なので排他は不要。アルファは書かない。
- fastmath は NaN/丸めの扱いを変えるため使わない（`shade()` と同じ結果を保つ）。
"""

from __future__ import annotations

import logging

import numba
import numpy as np
from numba import njit, prange  # type: ignore[attr-defined]

from engine.core.color import Color3
from engine.core.vector import Vector2
from engine.image.raster import RasterImage

logger = logging.getLogger(__name__)

FALLOFF_RADIUS: float = 190.0
STRENGTH: float = -1.5
STEPS: int = 10
STEP_SIZE: float = 0.005
RED_OFFSET: float = 0.175
GREEN_OFFSET: float = 0.200
BLUE_OFFSET: float = 0.225
AVERAGE: float = 0.1


def falloff(distance: float) -> float:
    """カーソル距離 → 0..1 の線形減衰（カーソル上で 1、半径以上で 0）。"""
    m = 1.0 - distance / FALLOFF_RADIUS
    return min(max(m, 0.0), 1.0)


def shade(
    image: RasterImage,
    output_position: Vector2,
    cursor_position: Vector2,
    smoothed_velocity: Vector2,
) -> Color3:
    """1 画素分の色を返す純関数。

    速度がゼロベクトルなら全サンプルが一致し、`output_position` の素のサンプルと等しくなる。
    """
    m = falloff(cursor_position.distance(output_position))
    displacement = smoothed_velocity * m * m * STRENGTH

    color = Color3()
    for j in range(STEPS):
        s = j * STEP_SIZE
        color = color + Color3(
            image.sample(output_position + displacement * (s + RED_OFFSET)).red(),
            image.sample(output_position + displacement * (s + GREEN_OFFSET)).green(),
            image.sample(output_position + displacement * (s + BLUE_OFFSET)).blue(),
        )
    return color * AVERAGE


# ---- Numba kernels -----------------------------------------------------------


@njit(cache=True)
def _clamp_index(value, size):
    """座標を [0, size-1] にクランプして切り捨てる（NaN は 0）。"""
    if not value > 0.0:
        return 0
    upper = size - 1
    if value >= upper:
        return upper
    return int(value)


@njit(cache=True)
def _to_u8(value):
    """floor → 0..255 飽和（NaN は 0）。"""
    if not value > 0.0:
        return np.uint8(0)
    if value >= 255.0:
        return np.uint8(255)
    return np.uint8(np.floor(value))


@njit(parallel=True, cache=True)
def _warp_kernel(
    pixels: np.ndarray,
    out: np.ndarray,
    cursor_x: float,
    cursor_y: float,
    velocity_x: float,
    velocity_y: float,
) -> None:
    """出力バッファ `(h, w, 4)` の RGB を行単位の並列ループで埋める。"""
    height = out.shape[0]
    width = out.shape[1]
    src_h = pixels.shape[0]
    src_w = pixels.shape[1]
    for y in prange(height):
        py = float(y)
        for x in range(width):
            px = float(x)
            dx = cursor_x - px
            dy = cursor_y - py
            m = 1.0 - np.sqrt(dx * dx + dy * dy) / FALLOFF_RADIUS
            if m < 0.0:
                m = 0.0
            elif m > 1.0:
                m = 1.0
            mx = velocity_x * m * m * STRENGTH
            my = velocity_y * m * m * STRENGTH

            r = 0.0
            g = 0.0
            b = 0.0
            for j in range(STEPS):
                s = j * STEP_SIZE
                k = s + RED_OFFSET
                r += float(
                    pixels[_clamp_index(py + my * k, src_h), _clamp_index(px + mx * k, src_w), 0]
                )
                k = s + GREEN_OFFSET
                g += float(
                    pixels[_clamp_index(py + my * k, src_h), _clamp_index(px + mx * k, src_w), 1]
                )
                k = s + BLUE_OFFSET
                b += float(
                    pixels[_clamp_index(py + my * k, src_h), _clamp_index(px + mx * k, src_w), 2]
                )
            out[y, x, 0] = _to_u8(r * AVERAGE)
            out[y, x, 1] = _to_u8(g * AVERAGE)
            out[y, x, 2] = _to_u8(b * AVERAGE)


def warp_frame(
    image: RasterImage,
    out: np.ndarray,
    cursor_position: Vector2,
    smoothed_velocity: Vector2,
) -> np.ndarray:
    """全画素に warp を適用して `out` の RGB を上書きする（並列、完了まで待つ）。

    Parameters
    ----------
    image : RasterImage
        サンプリング元（読み取り専用）。
    out : np.ndarray
        `(image.height, image.width, 4)` の C 連続 uint8 配列。アルファは変更しない。
    cursor_position, smoothed_velocity : Vector2
        このフレームのスナップショット値。

    Returns
    -------
    np.ndarray
        `out` 自身。
    """
    expected = (image.height, image.width, 4)
    if out.shape != expected or out.dtype != np.uint8 or not out.flags.c_contiguous:
        raise ValueError(
            f"output buffer must be C-contiguous uint8 {expected}, "
            f"got {out.dtype} {out.shape}"
        )
    _warp_kernel(
        image.pixels,
        out,
        float(cursor_position.x),
        float(cursor_position.y),
        float(smoothed_velocity.x),
        float(smoothed_velocity.y),
    )
    return out


def set_worker_count(workers: int) -> int:
    """Numba スレッド数を設定して実際の値を返す。0 以下は Numba 既定のまま。"""
    limit = int(numba.config.NUMBA_NUM_THREADS)
    if workers > 0:
        numba.set_num_threads(min(int(workers), limit))
    count = int(numba.get_num_threads())
    logger.debug("warp kernel threads=%d (limit=%d)", count, limit)
    return count


__all__ = [
    "AVERAGE",
    "BLUE_OFFSET",
    "FALLOFF_RADIUS",
    "GREEN_OFFSET",
    "RED_OFFSET",
    "STEPS",
    "STEP_SIZE",
    "STRENGTH",
    "falloff",
    "set_worker_count",
    "shade",
    "warp_frame",
]
