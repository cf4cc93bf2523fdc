"""
どこで: `engine.render` のフレーム駆動層。
何を: カーソル入力（`on_pointer_move`）と描画トリガ（`on_render_trigger`/`tick`）を受け、
      経過時間から平滑化速度を求めて warp シェーダを全画素へ並列適用し、RGBA バッファを提示側へ渡す。
なぜ: ウィンドウ実装（pyglet など）から描画ロジックを切り離し、2 つの入口だけで駆動できるようにするため。

状態:
- カーソル位置/前フレーム位置、速度スムーザ、FrameClock、FrameRateCounter を保持する。
- 出力バッファのアルファは確保時に 255 を 1 度だけ書き、以降は触らない。

注意:
- `dt <= 0`（同一時刻の描画トリガ）では速度の更新を行わず、前回の平滑化速度で描画する。
  前フレーム位置も据え置くため、その間のカーソル移動は次の正の dt に反映される。
- シェーダ実行中の例外は `WarpRenderError` として文脈付きで送出する（致命的）。
"""

from __future__ import annotations

import logging
from typing import Callable

import numpy as np

from engine.core.frame_clock import FrameClock
from engine.core.smoothing import ExponentialSmoother
from engine.core.vector import Vector2
from engine.image.raster import RasterImage
from engine.monitor.fps_counter import FrameRateCounter

from ..core.tickable import Tickable
from .warp import warp_frame

# カーソル変位 [px/frame] → 速度のゲイン
VELOCITY_GAIN: float = 0.2

logger = logging.getLogger(__name__)


class WarpRenderError(Exception):
    """シェーダパス中の例外をラップしてフレームID等の文脈を付与。

    単一のメッセージ引数でも初期化できるようにし、ピクル往復に耐える。
    """

    def __init__(
        self,
        frame_id: int | None = None,
        original: Exception | None = None,
        message: str | None = None,
    ) -> None:
        # Unpickle 経路（例外は message だけで復元されることがある）
        if message is None and isinstance(frame_id, str) and original is None:
            message = frame_id
            frame_id = None

        if message is None:
            message = f"WarpRenderError(frame_id={frame_id}): {original}"
        super().__init__(message)
        self.frame_id = frame_id
        self.original = original

    def __reduce__(self):
        return (WarpRenderError, (str(self),))


def allocate_frame(width: int, height: int) -> np.ndarray:
    """`(height, width, 4)` の出力バッファを確保し、アルファを 255 で埋める。"""
    frame = np.zeros((int(height), int(width), 4), dtype=np.uint8)
    frame[..., 3] = 255
    return frame


class WarpPipeline(Tickable):
    """カーソル状態と平滑化速度を保持し、1 フレームごとに warp を描画する。"""

    def __init__(
        self,
        image: RasterImage,
        *,
        present: Callable[[np.ndarray], None] | None = None,
        on_fps: Callable[[int], None] | None = None,
        clock: FrameClock | None = None,
        fps_counter: FrameRateCounter | None = None,
    ):
        """
        image: サンプリング元の画像（不変、パイプラインが生涯保持）
        present: 描画済みバッファを受け取る提示コールバック（None で提示しない）
        on_fps: FPS 確定値（1 秒に最大 1 回）を受け取るコールバック
        clock / fps_counter: 時計の差し替え用（テストで偽の時計を渡す）
        """
        self._image = image
        self._frame = allocate_frame(image.width, image.height)
        self._present = present
        self._on_fps = on_fps
        self._clock = clock if clock is not None else FrameClock()
        self._fps = fps_counter if fps_counter is not None else FrameRateCounter()

        self._cursor = Vector2.zero()
        self._last = Vector2.zero()
        self._velocity: ExponentialSmoother[Vector2] = ExponentialSmoother(Vector2.zero())
        self._frame_id: int = 0

    # ---- read-only views ----
    @property
    def image(self) -> RasterImage:
        return self._image

    @property
    def frame(self) -> np.ndarray:
        """直近に描画した RGBA バッファ（`(h, w, 4)` uint8）。"""
        return self._frame

    @property
    def frame_id(self) -> int:
        return self._frame_id

    @property
    def cursor(self) -> Vector2:
        return self._cursor

    @property
    def velocity(self) -> Vector2:
        """現在の平滑化速度。"""
        return self._velocity.value

    # ---- inputs ----
    def on_pointer_move(self, position: Vector2) -> None:
        """カーソル位置を置き換えるだけ（再計算は次の描画で行う）。"""
        self._cursor = position

    def on_render_trigger(self) -> np.ndarray:
        """表示更新ごとに呼ぶ。前回からの経過時間で 1 フレーム描画する。"""
        return self.render(self._clock.elapsed())

    # -------- Tickable interface --------
    def tick(self, dt: float) -> None:
        self.render(dt)

    # ---- frame ----
    def update(self, dt: float) -> tuple[Vector2, Vector2]:
        """カーソルのスナップショットと平滑化速度を返し、前フレーム位置を進める。"""
        location = self._cursor
        if not dt > 0.0:
            logger.debug("non-positive frame time dt=%r; keeping velocity", dt)
            return location, self._velocity.value
        raw = (location - self._last) * VELOCITY_GAIN / dt
        velocity = self._velocity.update(raw)
        self._last = location
        return location, velocity

    def render(self, dt: float) -> np.ndarray:
        """1 フレーム分: 速度更新 → 並列シェーディング → 提示 → FPS 更新。"""
        location, velocity = self.update(dt)
        try:
            warp_frame(self._image, self._frame, location, velocity)
        except Exception as e:
            logger.exception(
                "[pipeline] stage=shade frame_id=%s error=%s", self._frame_id, e
            )
            raise WarpRenderError(self._frame_id, e) from e
        self._frame_id += 1

        if self._present is not None:
            self._present(self._frame)

        fps = self._fps.tick()
        if fps is not None:
            logger.debug("fps=%d frame_id=%d", fps, self._frame_id)
            if self._on_fps is not None:
                self._on_fps(fps)
        return self._frame


__all__ = ["VELOCITY_GAIN", "WarpPipeline", "WarpRenderError", "allocate_frame"]
