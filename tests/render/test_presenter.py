from __future__ import annotations

import moderngl as mgl
import numpy as np
import pytest

from engine.render.presenter import FramePresenter, PresentationError


class _Uniform:
    def __init__(self) -> None:
        self.value = None


class _Res:
    def __init__(self, log: list, name: str) -> None:
        self._log = log
        self._name = name
        self.filter = None
        self.writes: list[bytes] = []

    def release(self) -> None:
        self._log.append(("release", self._name))

    # texture
    def write(self, data) -> None:
        self.writes.append(bytes(memoryview(data)))

    def use(self, location: int = 0) -> None:
        self._log.append(("use", location))

    # vao
    def render(self, mode) -> None:
        self._log.append(("render", mode))


class _Program(_Res):
    def __init__(self, log: list) -> None:
        super().__init__(log, "program")
        self._uniforms = {"frame": _Uniform()}

    def __getitem__(self, key: str) -> _Uniform:
        return self._uniforms[key]


class _DummyCtx:
    def __init__(self, fail_texture: bool = False) -> None:
        self.log: list = []
        self.fail_texture = fail_texture
        self.texture_args = None

    def program(self, vertex_shader: str, fragment_shader: str) -> _Program:
        return _Program(self.log)

    def texture(self, size, components, dtype="f1") -> _Res:
        if self.fail_texture:
            raise mgl.Error("no texture for you")
        self.texture_args = (size, components, dtype)
        return _Res(self.log, "texture")

    def buffer(self, data) -> _Res:
        return _Res(self.log, "vbo")

    def vertex_array(self, program, content) -> _Res:
        return _Res(self.log, "vao")


def test_present_uploads_and_draws() -> None:
    ctx = _DummyCtx()
    pres = FramePresenter(ctx, 3, 2)
    assert ctx.texture_args == ((3, 2), 4, "f1")
    frame = np.arange(2 * 3 * 4, dtype=np.uint8).reshape(2, 3, 4)
    pres.present(frame)
    assert pres.texture.writes == [frame.tobytes()]
    assert ("render", mgl.TRIANGLE_STRIP) in ctx.log


def test_present_rejects_wrong_shape() -> None:
    pres = FramePresenter(_DummyCtx(), 3, 2)
    with pytest.raises(PresentationError):
        pres.present(np.zeros((3, 2, 4), dtype=np.uint8))


def test_init_failure_is_presentation_error() -> None:
    with pytest.raises(PresentationError):
        FramePresenter(_DummyCtx(fail_texture=True), 3, 2)


def test_release_is_idempotent_and_blocks_present() -> None:
    ctx = _DummyCtx()
    pres = FramePresenter(ctx, 1, 1)
    pres.release()
    pres.release()
    released = [name for op, name in ctx.log if op == "release"]
    assert sorted(released) == ["program", "texture", "vao", "vbo"]
    with pytest.raises(PresentationError):
        pres.present(np.zeros((1, 1, 4), dtype=np.uint8))
