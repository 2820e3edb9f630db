from __future__ import annotations

import logging

import pytest

from common import settings
from common.env import env_bool, env_int, env_str
from common.logging import setup_default_logging
from common.param_utils import clamp, clamp01, round_half_up


def test_env_helpers_parse_and_fallback(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DLG_TEST_NUM", "2")
    monkeypatch.setenv("DLG_TEST_BAD", "x")
    monkeypatch.setenv("DLG_TEST_BOOL", "off")
    monkeypatch.setenv("DLG_TEST_STR", "  ")
    assert env_bool("DLG_TEST_NUM") is True
    assert env_bool("DLG_TEST_BAD", True) is True
    assert env_str("DLG_TEST_BAD") == "x"
    assert env_bool("DLG_TEST_BOOL", True) is False
    assert env_bool("DLG_TEST_MISSING", True) is True
    assert env_str("DLG_TEST_STR", "d") == "d"
    assert env_int("DLG_TEST_NUM") == 2
    assert env_int("DLG_TEST_BAD", 7) == 7
    assert env_int("DLG_TEST_MISSING") is None
    assert env_int("DLG_TEST_NUM", min_value=5) == 5


def test_reload_from_env_updates_snapshot(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.setenv("DLG_USE_NUMBA", "0")
    monkeypatch.setenv("DLG_LOG_LEVEL", "debug")
    monkeypatch.setenv("DLG_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("DLG_FPS", "0")
    settings.reload_from_env()
    s = settings.get()
    assert s.USE_NUMBA is False
    assert s.LOG_LEVEL == "DEBUG"
    assert s.DATA_DIR == str(tmp_path)
    # 下限 1 に丸める
    assert s.FPS == 1


def test_setup_default_logging_is_noop_when_configured() -> None:
    root = logging.getLogger()
    handler = logging.NullHandler()
    root.addHandler(handler)
    try:
        before = list(root.handlers)
        setup_default_logging("DEBUG")
        assert root.handlers == before
    finally:
        root.removeHandler(handler)


def test_param_utils() -> None:
    assert clamp(5.0, 0.0, 3.0) == 3.0
    assert clamp(-1.0, 0.0, 3.0) == 0.0
    assert clamp01(0.25) == 0.25
    # 組込み round（偶数丸め）ではなく 0.5 切り上げ
    assert round_half_up(2.5) == 3
    assert round_half_up(266.5) == 267
    assert round_half_up(266.4) == 266
