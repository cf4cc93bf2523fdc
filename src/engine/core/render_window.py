"""
どこで: `engine.core` の描画ウィンドウ薄ラッパ。
何を: Pyglet Window（固定サイズ/vsync）と、描画・カーソル移動コールバックの登録を提供。
なぜ: 描画パイプラインから GUI 依存を切り離し、最小インターフェイスで統一するため。

使用例:
    win = RenderWindow(640, 480, caption="pyxiwarp")
    win.add_pointer_callback(pipeline.on_pointer_move)
    win.add_draw_callback(draw_frame)
    pyglet.app.run()
"""

from typing import Callable

import pyglet
from pyglet.gl import Config

from .vector import Vector2


class RenderWindow(pyglet.window.Window):
    def __init__(self, width: int, height: int, *, caption: str = "pyxiwarp"):
        """ウィンドウを生成する。

        引数:
            width: ウィンドウ幅（画像のピクセル数と一致させる）。
            height: ウィンドウ高さ。
            caption: タイトル。
        """
        config = Config(double_buffer=True, vsync=True)
        super().__init__(
            width=width, height=height, caption=caption, config=config, resizable=False
        )
        self._base_caption = caption
        self._draw_callbacks: list[Callable[[], None]] = []
        self._pointer_callbacks: list[Callable[[Vector2], None]] = []

    def add_draw_callback(self, func: Callable[[], None]) -> None:
        """
        `on_draw` 中に呼び出す描画関数を登録する。

        - 関数は引数を取らず、副作用で描画を行うこと。
        - 登録順に呼び出される。
        """
        self._draw_callbacks.append(func)

    def add_pointer_callback(self, func: Callable[[Vector2], None]) -> None:
        """カーソル移動時に画像座標（左上原点）の位置を受け取る関数を登録する。"""
        self._pointer_callbacks.append(func)

    def to_image_coords(self, x: float, y: float) -> Vector2:
        """pyglet の左下原点座標を画像の左上原点座標へ変換する。"""
        return Vector2(float(x), float(self.height - 1) - float(y))

    def on_draw(self):  # Pyglet 既定のイベント名
        """ウィンドウ描画イベントハンドラ。登録された描画コールバックを呼び出す。"""
        self.clear()
        for cb in self._draw_callbacks:
            cb()

    def on_mouse_motion(self, x, y, dx, dy):  # noqa: ANN001
        pos = self.to_image_coords(x, y)
        for cb in self._pointer_callbacks:
            cb(pos)

    def on_mouse_drag(self, x, y, dx, dy, buttons, modifiers):  # noqa: ANN001
        self.on_mouse_motion(x, y, dx, dy)

    # ---- helpers ----
    def show_fps(self, fps: int) -> None:
        """タイトルを `<caption> | N fps` に更新する。"""
        self.set_caption(f"{self._base_caption} | {int(fps)} fps")
