from __future__ import annotations

from types import SimpleNamespace

import pytest

from engine.core.vector import Vector2

# What this tests
# - Cursor positions are flipped from pyglet's bottom-left origin to top-left image coordinates.
# - Pointer events forward the flipped position to every registered callback.
# - The caption shows "<caption> | N fps".
# Methods are called unbound on stand-ins, so no display is needed.

pytest.importorskip("pyglet")
render_window = pytest.importorskip("engine.core.render_window")
RenderWindow = render_window.RenderWindow


def _stub(height: int = 480) -> SimpleNamespace:
    stub = SimpleNamespace(height=height, _pointer_callbacks=[])
    stub.to_image_coords = lambda x, y: RenderWindow.to_image_coords(stub, x, y)
    return stub


@pytest.mark.parametrize(
    "x, y, expected",
    [(10, 0, Vector2(10.0, 479.0)), (0, 479, Vector2(0.0, 0.0)), (3.5, 100.25, Vector2(3.5, 378.75))],
)
def test_to_image_coords_flips_y(x, y, expected) -> None:
    assert RenderWindow.to_image_coords(SimpleNamespace(height=480), x, y) == expected


def test_mouse_motion_and_drag_forward_image_coords() -> None:
    stub = _stub(100)
    seen: list[Vector2] = []
    stub._pointer_callbacks.append(seen.append)
    RenderWindow.on_mouse_motion(stub, 5, 99, 1, 1)
    stub.on_mouse_motion = lambda x, y, dx, dy: RenderWindow.on_mouse_motion(stub, x, y, dx, dy)
    RenderWindow.on_mouse_drag(stub, 7, 0, 1, 1, 1, 0)
    assert seen == [Vector2(5.0, 0.0), Vector2(7.0, 99.0)]


def test_show_fps_formats_caption() -> None:
    captions: list[str] = []
    stub = SimpleNamespace(_base_caption="pyxiwarp", set_caption=captions.append)
    RenderWindow.show_fps(stub, 59)
    RenderWindow.show_fps(stub, 60.0)
    assert captions == ["pyxiwarp | 59 fps", "pyxiwarp | 60 fps"]
