"""
どこで: `engine.image` サブパッケージ。
何を: デコード済み RGBA8 画像 `RasterImage` と最近傍/クランプのサンプラを提供。
なぜ: 画像コーデック（Pillow）との境界を 1 箇所に閉じ込め、描画側は生バッファだけを扱うため。
"""

from .raster import DecodeError, PixelReader, RasterImage

__all__ = ["DecodeError", "PixelReader", "RasterImage"]
