"""共通フィクスチャ。

- 乱数シード固定
- 偽の時計（FrameClock/FrameRateCounter 用）
- 小さな RGBA 画像
"""

from __future__ import annotations

import numpy as np
import pytest

from engine.image.raster import RasterImage


class FakeClock:
    """呼ぶたびに `t` を返すだけの時計。テスト側で `t` を進める。"""

    def __init__(self, t: float = 0.0) -> None:
        self.t = float(t)

    def __call__(self) -> float:
        return self.t

    def advance(self, dt: float) -> None:
        self.t += float(dt)


@pytest.fixture(scope="session", autouse=True)
def np_seed() -> None:
    """NumPy の乱数を固定。"""
    np.random.seed(12345)


@pytest.fixture()
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def image_2x2() -> RasterImage:
    # 赤 緑
    # 青 黄
    px = np.array(
        [
            [[255, 0, 0, 255], [0, 255, 0, 255]],
            [[0, 0, 255, 255], [255, 255, 0, 255]],
        ],
        dtype=np.uint8,
    )
    return RasterImage(2, 2, px)


@pytest.fixture()
def image_random() -> RasterImage:
    rng = np.random.default_rng(7)
    rgb = rng.integers(0, 256, size=(9, 12, 3), dtype=np.uint8)
    return RasterImage.from_array(rgb)


@pytest.fixture()
def image_gradient() -> RasterImage:
    """R = 10*x の横グラデーション（20x10）。"""
    h, w = 10, 20
    arr = np.zeros((h, w, 3), dtype=np.uint8)
    arr[..., 0] = (np.arange(w, dtype=np.uint8) * 10)[None, :]
    arr[..., 1] = (np.arange(w, dtype=np.uint8) * 10)[None, :]
    arr[..., 2] = (np.arange(w, dtype=np.uint8) * 10)[None, :]
    return RasterImage.from_array(arr)
