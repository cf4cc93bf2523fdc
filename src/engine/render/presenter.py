"""
どこで: `engine.render` の提示層。
何を: 描画済み RGBA バッファを ModernGL のテクスチャへ転送し、全画面クアッドとして描く。
なぜ: CPU 側のピクセル計算と GPU リソース（テクスチャ/VAO/シェーダ）の寿命管理を分離するため。
"""

from __future__ import annotations

import logging
from typing import Any

import moderngl as mgl
import numpy as np

logger = logging.getLogger(__name__)

_VERTEX_SHADER = """
#version 330
in vec2 in_pos;
in vec2 in_uv;
out vec2 v_uv;
void main() {
    v_uv = in_uv;
    gl_Position = vec4(in_pos, 0.0, 1.0);
}
"""

_FRAGMENT_SHADER = """
#version 330
uniform sampler2D frame;
in vec2 v_uv;
out vec4 f_color;
void main() {
    f_color = texture(frame, v_uv);
}
"""

# TRIANGLE_STRIP: (x, y, u, v)。バッファの 0 行目が画面上端に来るよう v を反転。
_QUAD = np.array(
    [
        [-1.0, -1.0, 0.0, 1.0],
        [1.0, -1.0, 1.0, 1.0],
        [-1.0, 1.0, 0.0, 0.0],
        [1.0, 1.0, 1.0, 0.0],
    ],
    dtype=np.float32,
)


class PresentationError(RuntimeError):
    """表示面の生成/描画に失敗（致命的、再試行しない）。"""


class FramePresenter:
    """
    RGBA バッファ（`(h, w, 4)` uint8、0 行目が上端）を毎フレーム GPU に送り込んで描画する。
    """

    def __init__(self, ctx: Any, width: int, height: int):
        """
        ctx: moderngl コンテキスト
        width/height: バッファの画素数（テクスチャサイズ）
        """
        self.ctx = ctx
        self.width = int(width)
        self.height = int(height)
        self._released = False
        try:
            self.program = ctx.program(
                vertex_shader=_VERTEX_SHADER, fragment_shader=_FRAGMENT_SHADER
            )
            self.texture = ctx.texture((self.width, self.height), 4, dtype="f1")
            self.texture.filter = (mgl.NEAREST, mgl.NEAREST)
            self.vbo = ctx.buffer(_QUAD.tobytes())
            self.vao = ctx.vertex_array(self.program, [(self.vbo, "2f 2f", "in_pos", "in_uv")])
        except mgl.Error as e:
            raise PresentationError(f"表示面の初期化に失敗: {e}") from e
        self.program["frame"].value = 0

    def present(self, frame: np.ndarray) -> None:
        """バッファをテクスチャへ書き込み、全画面に描く。"""
        if self._released:
            raise PresentationError("presenter は解放済みです")
        if frame.shape != (self.height, self.width, 4):
            raise PresentationError(
                f"frame shape {frame.shape} != {(self.height, self.width, 4)}"
            )
        try:
            self.texture.write(np.ascontiguousarray(frame))
            self.texture.use(location=0)
            self.vao.render(mgl.TRIANGLE_STRIP)
        except mgl.Error as e:
            raise PresentationError(f"フレーム描画に失敗: {e}") from e

    def release(self) -> None:
        """GPU リソースを解放（多重呼び出しに安全）。"""
        if self._released:
            return
        self._released = True
        for res in (self.vao, self.vbo, self.texture, self.program):
            try:
                res.release()
            except mgl.Error as e:
                logger.debug("release failed: %s", e, exc_info=True)


__all__ = ["FramePresenter", "PresentationError"]
