from __future__ import annotations

import pytest

from engine.core.color import Color3
from engine.core.vector import Vector2
from engine.render.warp import FALLOFF_RADIUS, falloff, shade


def _plain(image, p: Vector2) -> tuple[int, int, int]:
    s = image.sample(p)
    return (int(s.red()), int(s.green()), int(s.blue()))


def test_falloff_shape() -> None:
    assert falloff(0.0) == 1.0
    assert falloff(FALLOFF_RADIUS / 2) == pytest.approx(0.5)
    assert falloff(FALLOFF_RADIUS) == 0.0
    assert falloff(FALLOFF_RADIUS * 3) == 0.0


@pytest.mark.parametrize("cursor", [Vector2(0.0, 0.0), Vector2(5.5, 3.0), Vector2(-100.0, 400.0)])
def test_zero_velocity_is_identity(image_random, cursor) -> None:
    zero = Vector2.zero()
    for y in range(image_random.height):
        for x in range(image_random.width):
            p = Vector2(float(x), float(y))
            c = shade(image_random, p, cursor, zero)
            assert c.finalize() == _plain(image_random, p)


def test_end_to_end_pixel_origin(image_2x2) -> None:
    c = shade(image_2x2, Vector2(0.0, 0.0), Vector2(0.0, 0.0), Vector2.zero())
    assert isinstance(c, Color3)
    assert c.finalize() == (255, 0, 0)


def test_outside_radius_is_unaffected_by_velocity(image_gradient) -> None:
    p = Vector2(3.0, 4.0)
    cursor = Vector2(3.0 + FALLOFF_RADIUS, 4.0)
    c = shade(image_gradient, p, cursor, Vector2(500.0, -300.0))
    assert c.finalize() == _plain(image_gradient, p)


def test_samples_trail_behind_motion(image_gradient) -> None:
    # 右向きに動くと左側（x が小さい＝暗い側）からサンプルされる
    p = Vector2(10.0, 5.0)
    c = shade(image_gradient, p, p, Vector2(10.0, 0.0))
    r, g, b = c.finalize()
    assert _plain(image_gradient, p) == (100, 100, 100)
    assert 60 <= r <= 70
    assert 60 <= g <= 70
    assert 50 <= b <= 70
    # 青はより遠くまでずれる
    assert b <= r


def test_leftward_motion_samples_from_the_right(image_gradient) -> None:
    p = Vector2(10.0, 5.0)
    r, _, _ = shade(image_gradient, p, p, Vector2(-10.0, 0.0)).finalize()
    assert 120 <= r <= 140
