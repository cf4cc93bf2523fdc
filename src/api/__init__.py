"""
どこで: `api` 入口（高レベル公開 API）。
何を: `run_warp` ランナーと、パイプラインを組み立てるための主要型を再輸出。
なぜ: 利用者が単一名前空間から画像読み込み→パイプライン構築→実行まで完結できるようにするため。

Usage:
    from api import run_warp

    run_warp("photo.jpg")
"""

from engine.core.color import Color3
from engine.core.vector import Vector2
from engine.image.raster import DecodeError, RasterImage
from engine.render.pipeline import WarpPipeline, WarpRenderError
from engine.render.warp import shade

from .warp import run_warp

__all__ = [
    "Color3",
    "DecodeError",
    "RasterImage",
    "Vector2",
    "WarpPipeline",
    "WarpRenderError",
    "run_warp",
    "shade",
]
