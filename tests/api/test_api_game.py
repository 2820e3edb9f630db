from __future__ import annotations

import pytest

import api
from common import settings
from engine.game.session import GameState
from engine.io.storage import MemoryScoreStore


def test_public_surface() -> None:
    for name in ("GameMachine", "GameConfig", "PointerSample", "generate_path", "run", "run_game"):
        assert hasattr(api, name)
    assert api.run is api.run_game


def test_run_game_init_only_wires_best_score() -> None:
    store = MemoryScoreStore()
    m = api.run_game(
        shape="circle", config=api.GameConfig(crack_budget=1), store=store, init_only=True
    )
    assert m.state is GameState.IDLE
    m.pointer_down(m.session.start_point, 0.0)
    m.tick(60.0)
    assert m.state is GameState.FAIL
    # 時間切れ: 0 * 20 + 1.0 * 800
    assert store.best_score() == 800


def test_create_game_keeps_higher_best() -> None:
    store = MemoryScoreStore({"best_score": 5000})
    m, s = api.create_game(store=store, config=api.GameConfig())
    assert s is store
    m.pointer_down(m.session.start_point, 0.0)
    m.tick(60.0)
    assert store.best_score() == 5000


def test_resolve_fps_prefers_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    from api.game import resolve_fps

    monkeypatch.delenv("DLG_FPS", raising=False)
    settings.reload_from_env()
    assert resolve_fps(60) == 60
    assert resolve_fps(0) == 1
    monkeypatch.setenv("DLG_FPS", "30")
    settings.reload_from_env()
    assert resolve_fps(60) == 30
