"""
どこで: `api.warp`（実行ランナー）。
何を: 画像をデコードしてウィンドウ・ModernGL 提示・warp パイプラインを結線し、pyglet のループで駆動する。
なぜ: 少ない記述で対話的に warp を表示できるようにし、エンジン層をウィンドウ実装から切り離すため。

実行フロー（概要）:
1) 設定/ログ: `common.settings` を読み、`setup_default_logging` を 1 度だけ適用。
2) 画像: パス/バイト列/`RasterImage` から RGBA8 画像を得る。失敗は `DecodeError`（致命的）。
3) 並列度: Numba のスレッド数を設定（`workers` 明示 > `PXW_WORKERS` > Numba 既定）。
4) ウィンドウ/GL: `RenderWindow`（画像と同寸・固定サイズ）と ModernGL コンテキスト、`FramePresenter`。
5) 結線（`bind_window`）: カーソル移動 → `WarpPipeline.on_pointer_move`、描画 → `FrameClock([pipeline]).tick`、
   FPS 確定値 → タイトル更新。`ESC`/クローズで GL 資源を解放して終了。

`init_only=True` は 1)〜3) とパイプライン生成だけを行い、ウィンドウを作らずに返す。

エラー:
- デコード失敗・表示面の生成/描画失敗・シェーダ失敗はいずれも再試行せずに送出する。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

from common.logging import setup_default_logging
from common.settings import get as get_settings
from engine.core.frame_clock import FrameClock
from engine.image.raster import RasterImage
from engine.render.pipeline import WarpPipeline
from engine.render.warp import set_worker_count

logger = logging.getLogger(__name__)

DEFAULT_CAPTION = "pyxiwarp"


def resolve_fps(requested_fps: int | None, *, default: int = 60) -> int:
    """FPS を解決して 1 以上の int を返す。

    - 明示指定があればそれを優先（数値化できない/<=0 は既定へ）。
    - それ以外は `default`（設定値）。
    """
    if requested_fps is None:
        return max(1, int(default))
    try:
        v = int(requested_fps)
    except (TypeError, ValueError):
        return max(1, int(default))
    return v if v >= 1 else max(1, int(default))


def load_image(source: str | Path | bytes | RasterImage) -> RasterImage:
    """パス/圧縮バイト列/既存画像から `RasterImage` を得る。"""
    if isinstance(source, RasterImage):
        return source
    if isinstance(source, (bytes, bytearray, memoryview)):
        return RasterImage.decode(bytes(source), source="<bytes>")
    return RasterImage.from_path(source)


def run_warp(
    source: str | Path | bytes | RasterImage,
    *,
    fps: int | None = None,
    workers: int | None = None,
    caption: str = DEFAULT_CAPTION,
    init_only: bool = False,
) -> WarpPipeline | None:
    """画像に warp をかけてウィンドウに表示する（ウィンドウを閉じるまで戻らない）。

    Parameters
    ----------
    source : str | Path | bytes | RasterImage
        画像ファイルのパス、圧縮バイト列、またはデコード済み画像。
    fps : int | None
        描画トリガのレート。None で `PXW_FPS`（既定 60）。
    workers : int | None
        シェーダの並列スレッド数。None で `PXW_WORKERS`、0 以下で Numba 既定。
    caption : str
        ウィンドウタイトル（FPS 表示の前置き）。
    init_only : bool
        True でウィンドウを作らず、構築したパイプラインを返す。

    Returns
    -------
    WarpPipeline | None
        `init_only=True` のときのみパイプライン。
    """
    settings = get_settings()
    setup_default_logging(settings.LOG_LEVEL)
    fps = resolve_fps(fps, default=settings.FPS)

    try:
        image = load_image(source)
    except Exception as e:
        logger.error("image load failed: %s", e)
        raise
    threads = set_worker_count(settings.WORKERS if workers is None else int(workers))
    logger.info("image %dx%d fps=%d threads=%d", image.width, image.height, fps, threads)

    if init_only:
        return WarpPipeline(image)

    # 遅延インポート（ヘッドレス環境でのウィンドウ生成を避ける）
    import moderngl
    import pyglet

    from engine.core.render_window import RenderWindow
    from engine.render.presenter import FramePresenter, PresentationError

    window = RenderWindow(image.width, image.height, caption=caption)
    try:
        ctx = moderngl.create_context()
    except Exception as e:
        window.close()
        raise PresentationError(f"ModernGL コンテキストの生成に失敗: {e}") from e
    fb_w, fb_h = window.get_framebuffer_size()
    ctx.viewport = (0, 0, int(fb_w), int(fb_h))
    presenter = FramePresenter(ctx, image.width, image.height)

    pipeline = WarpPipeline(
        image,
        present=presenter.present,
        on_fps=window.show_fps if settings.SHOW_FPS else None,
    )
    bind_window(window, pipeline, presenter, exit_app=pyglet.app.exit)

    pyglet.app.run(1 / fps)
    return None


def bind_window(
    window: Any,
    pipeline: WarpPipeline,
    presenter: Any,
    *,
    exit_app: Callable[[], None],
) -> FrameClock:
    """ウィンドウのイベントへパイプラインと終了処理を結線し、描画ドライバを返す。

    - カーソル移動 → `pipeline.on_pointer_move`
    - 描画 → `FrameClock([pipeline]).tick`（経過時間を測って 1 フレーム描画）
    - `ESC` → `on_close` を発火（既定ハンドラより先に処理し、GL コンテキストが生きているうちに解放）
    - `on_close` → presenter を 1 度だけ解放して `exit_app()`。ウィンドウ自体は既定ハンドラが閉じる。
    """
    from pyglet.event import EVENT_HANDLED
    from pyglet.window import key

    driver = FrameClock([pipeline])
    window.add_pointer_callback(pipeline.on_pointer_move)
    window.add_draw_callback(driver.tick)

    @window.event
    def on_key_press(sym, mods):  # noqa: ANN001
        if sym == key.ESCAPE:
            window.dispatch_event("on_close")
            return EVENT_HANDLED
        return None

    @window.event
    def on_close():  # noqa: ANN001
        # 冪等なクリーンアップ
        if getattr(on_close, "_closed", False):
            return
        presenter.release()
        setattr(on_close, "_closed", True)
        logger.info("closed after %d frames", pipeline.frame_id)
        exit_app()

    return driver


__all__ = ["DEFAULT_CAPTION", "bind_window", "load_image", "resolve_fps", "run_warp"]
