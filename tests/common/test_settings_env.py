from __future__ import annotations

import logging
from typing import Iterator

import pytest

from common import settings
from common.env import env_bool, env_int, env_str
from common.logging import resolve_level, setup_default_logging


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[pytest.MonkeyPatch]:
    for name in ("PXW_FPS", "PXW_WORKERS", "PXW_SHOW_FPS", "PXW_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    yield monkeypatch
    monkeypatch.undo()
    settings.reload_from_env()


def test_env_int_parsing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PXW_TEST_INT", " 12 ")
    assert env_int("PXW_TEST_INT", 3) == 12
    monkeypatch.setenv("PXW_TEST_INT", "-4")
    assert env_int("PXW_TEST_INT", 3, min_value=0) == 0
    monkeypatch.setenv("PXW_TEST_INT", "twelve")
    assert env_int("PXW_TEST_INT", 3) == 3
    monkeypatch.delenv("PXW_TEST_INT")
    assert env_int("PXW_TEST_INT", None) is None


@pytest.mark.parametrize(
    "raw, expected",
    [("1", True), ("0", False), ("yes", True), ("Off", False), ("maybe", True)],
)
def test_env_bool_parsing(monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool) -> None:
    monkeypatch.setenv("PXW_TEST_BOOL", raw)
    assert env_bool("PXW_TEST_BOOL", True) is expected


def test_env_str_choices(monkeypatch: pytest.MonkeyPatch) -> None:
    choices = frozenset({"A", "B"})
    monkeypatch.setenv("PXW_TEST_STR", "b")
    assert env_str("PXW_TEST_STR", "A", choices=choices) == "b"
    monkeypatch.setenv("PXW_TEST_STR", "c")
    assert env_str("PXW_TEST_STR", "A", choices=choices) == "A"
    monkeypatch.setenv("PXW_TEST_STR", "   ")
    assert env_str("PXW_TEST_STR", "A") == "A"


def test_settings_defaults(clean_env: pytest.MonkeyPatch) -> None:
    settings.reload_from_env()
    s = settings.get()
    assert (s.FPS, s.WORKERS, s.SHOW_FPS, s.LOG_LEVEL) == (60, 0, True, "INFO")


def test_settings_from_env(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("PXW_FPS", "0")
    clean_env.setenv("PXW_WORKERS", "3")
    clean_env.setenv("PXW_SHOW_FPS", "off")
    clean_env.setenv("PXW_LOG_LEVEL", "debug")
    settings.reload_from_env()
    s = settings.get()
    assert s.FPS == 1
    assert s.WORKERS == 3
    assert s.SHOW_FPS is False
    assert s.LOG_LEVEL == "DEBUG"


def test_settings_invalid_log_level_falls_back(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("PXW_LOG_LEVEL", "verbose")
    settings.reload_from_env()
    assert settings.get().LOG_LEVEL == "INFO"


def test_resolve_level() -> None:
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level("nonsense") == logging.INFO
    assert resolve_level(logging.WARNING) == logging.WARNING


def test_setup_default_logging_is_noop_when_configured() -> None:
    root = logging.getLogger()
    handler = logging.NullHandler()
    root.addHandler(handler)
    try:
        assert setup_default_logging("DEBUG") is False
    finally:
        root.removeHandler(handler)
