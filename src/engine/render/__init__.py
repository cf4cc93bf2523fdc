"""
どこで: `engine.render` サブパッケージ。
何を: warp シェーダ（純関数/Numba 並列カーネル）・フレームパイプライン・GPU 提示を提供。
なぜ: 画素計算（CPU）と提示（GPU）の責務を分離し、ウィンドウ実装に依存しない核を保つため。

`FramePresenter` は moderngl を要するため、ここでは再輸出しない。
"""

from .pipeline import WarpPipeline, WarpRenderError
from .warp import shade, warp_frame

__all__ = ["WarpPipeline", "WarpRenderError", "shade", "warp_frame"]
