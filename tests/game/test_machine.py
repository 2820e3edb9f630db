from __future__ import annotations

import numpy as np
import pytest

from engine.game.config import GameConfig
from engine.game.cracks import CrackGenerator
from engine.game.input import PointerPhase, PointerSample
from engine.game.machine import GameMachine, GameResult
from engine.game.session import GameState

CANVAS = (800.0, 600.0)
# 円の中心 (400, 300)、半径 210。始点は (610, 300)
START = (610.0, 300.0)
# 帯外（パスから 60px 内側）
OFF_PATH = (550.0, 300.0)


@pytest.fixture()
def machine(rng: np.random.Generator) -> GameMachine:
    return GameMachine("circle", CANVAS, crack_generator=CrackGenerator(CANVAS, rng=rng))


def _results(m: GameMachine) -> list[GameResult]:
    out: list[GameResult] = []
    m.on_finish(out.append)
    return out


def test_initial_state_is_idle(machine: GameMachine) -> None:
    s = machine.session
    assert machine.state is GameState.IDLE
    assert s.elapsed == 0.0 and s.cracks == 0
    assert s.time_left == 60.0
    assert s.start_point == pytest.approx(START)


def test_pointer_down_far_from_path_stays_idle(machine: GameMachine) -> None:
    assert machine.pointer_down((400.0, 300.0), 0.0) is False
    assert machine.state is GameState.IDLE
    # pointer 位置は描画用に保持
    assert machine.session.pointer == (400.0, 300.0)


def test_pointer_down_near_start_starts_timer(machine: GameMachine) -> None:
    assert machine.pointer_down((START[0] + 10.0, START[1] + 10.0), 5.0) is True
    s = machine.session
    assert machine.state is GameState.PLAYING
    assert s.started and s.clock_origin == 5.0
    machine.tick(7.5)
    assert s.elapsed == pytest.approx(2.5)
    assert s.time_left == pytest.approx(57.5)


def test_pointer_down_on_path_sets_start_offset(machine: GameMachine) -> None:
    # 円の真下（角度 90°）は弧長 L/4
    assert machine.pointer_down((400.0, 510.0), 0.0)
    s = machine.session
    assert s.start_offset == pytest.approx(s.total_length / 4.0, rel=1e-3)
    assert list(s.trace) == [(400.0, 510.0)]


def test_new_game_arms_without_starting_timer(machine: GameMachine) -> None:
    machine.new_game()
    s = machine.session
    assert machine.state is GameState.PLAYING
    assert not s.started
    machine.tick(100.0)
    assert s.elapsed == 0.0
    assert machine.pointer_down(START, 100.0)
    machine.tick(101.0)
    assert s.elapsed == pytest.approx(1.0)


def test_moves_without_pointer_down_are_ignored(machine: GameMachine) -> None:
    machine.pointer_move(OFF_PATH, 0.0)
    machine.pointer_down(START, 0.0)
    machine.pointer_up()
    machine.pointer_move(OFF_PATH, 1.0)
    assert machine.session.cracks == 0


def test_deviation_counts_crack_and_generates_lines(machine: GameMachine) -> None:
    machine.pointer_down(START, 0.0)
    machine.pointer_move(OFF_PATH, 0.1)
    s = machine.session
    assert s.cracks == 1
    assert 1 <= len(s.crack_lines) <= 3
    assert s.last_crack_at == pytest.approx(0.1)


def test_deviation_debounce(machine: GameMachine) -> None:
    machine.pointer_down(START, 0.0)
    machine.pointer_move(OFF_PATH, 1.00)
    machine.pointer_move(OFF_PATH, 1.05)
    assert machine.session.cracks == 1
    # ちょうど 0.3 秒後は数える
    machine.pointer_move(OFF_PATH, 1.30)
    assert machine.session.cracks == 2


def test_crack_budget_fails_game(machine: GameMachine) -> None:
    results = _results(machine)
    machine.pointer_down(START, 0.0)
    for i in range(1, 6):
        machine.pointer_move(OFF_PATH, 0.5 * i)
    s = machine.session
    assert machine.state is GameState.FAIL
    assert s.cracks == 3
    assert len(results) == 1
    r = results[0]
    assert (r.success, r.reason, r.cracks) == (False, "cracks", 3)
    # 3 本目は 1.5 秒時点: time_left 58.5 * 20 + accuracy 0 = 1170
    assert r.elapsed == pytest.approx(1.5)
    assert r.score == 1170
    assert s.score == 1170


def test_timeout_on_tick(machine: GameMachine) -> None:
    results = _results(machine)
    machine.pointer_down(START, 0.0)
    machine.tick(59.9)
    assert machine.state is GameState.PLAYING
    machine.tick(60.0)
    assert machine.state is GameState.FAIL
    assert results[0].reason == "timeout"
    assert machine.session.time_left == 0.0
    assert results[0].score == 800


def test_timeout_detected_on_pointer_sample(machine: GameMachine) -> None:
    results = _results(machine)
    machine.pointer_down(START, 0.0)
    machine.pointer_move(OFF_PATH, 61.0)
    assert machine.state is GameState.FAIL
    assert results[0].reason == "timeout"
    # 終了後のサンプルでは亀裂を数えない
    assert machine.session.cracks == 0


def test_terminal_state_ignores_input_until_reset(machine: GameMachine) -> None:
    results = _results(machine)
    machine.pointer_down(START, 0.0)
    machine.tick(60.0)
    assert machine.pointer_down(START, 61.0) is False
    machine.pointer_move(OFF_PATH, 62.0)
    machine.tick(70.0)
    assert machine.state is GameState.FAIL
    assert len(results) == 1

    machine.reset()
    assert machine.state is GameState.IDLE
    assert machine.session.score is None
    assert machine.pointer_down(START, 80.0)


def test_regrab_while_playing_reanchors_but_keeps_timer(machine: GameMachine) -> None:
    machine.pointer_down(START, 0.0)
    machine.pointer_move(OFF_PATH, 1.0)
    machine.pointer_up()
    s = machine.session
    assert machine.pointer_down((400.0, 510.0), 4.0)
    assert s.clock_origin == 0.0
    assert s.elapsed == pytest.approx(4.0)
    assert s.cracks == 1
    assert list(s.trace) == [(400.0, 510.0)]
    assert s.start_offset == pytest.approx(s.total_length / 4.0, rel=1e-3)


def test_shape_cycle_resets_session(machine: GameMachine) -> None:
    machine.pointer_down(START, 0.0)
    assert machine.next_shape().shape == "triangle"
    assert machine.state is GameState.IDLE
    assert machine.next_shape().shape == "star"
    assert machine.next_shape().shape == "circle"
    assert machine.set_shape("star").path.shape == (51, 2)


def test_handle_dispatches_by_phase(machine: GameMachine) -> None:
    machine.handle(PointerSample(*START, PointerPhase.DOWN, 0.0))
    assert machine.session.pointer_down
    machine.handle(PointerSample(*OFF_PATH, PointerPhase.MOVE, 0.2))
    assert machine.session.cracks == 1
    machine.handle(PointerSample(*OFF_PATH, PointerPhase.UP, 0.3))
    assert not machine.session.pointer_down


def test_small_backward_wiggle_at_start_does_not_complete(machine: GameMachine) -> None:
    machine.pointer_down(START, 0.0)
    # 始点から 3px ほど逆方向（y 負側）へ
    machine.pointer_move((609.98, 297.0), 0.1)
    assert machine.state is GameState.PLAYING


@pytest.mark.e2e
def test_circle_lap_in_ten_seconds_scores_1800(rng: np.random.Generator) -> None:
    m = GameMachine("circle", CANVAS, crack_generator=CrackGenerator(CANVAS, rng=rng))
    results = _results(m)
    path = m.session.path
    assert path.shape[0] == 201

    m.pointer_down((float(path[0, 0]), float(path[0, 1])), 0.0)
    for k in range(1, 200):
        t = 10.0 * k / 199
        m.handle(PointerSample(float(path[k, 0]), float(path[k, 1]), PointerPhase.MOVE, t))
        if k < 199:
            assert m.state is GameState.PLAYING, f"completed early at k={k}"

    assert m.state is GameState.DONE
    assert len(results) == 1
    r = results[0]
    assert r.success and r.reason == "complete"
    assert r.cracks == 0
    assert r.elapsed == pytest.approx(10.0)
    assert r.score == 1800
    assert m.session.score == 1800


@pytest.mark.e2e
def test_custom_config_changes_budget_and_limit(rng: np.random.Generator) -> None:
    cfg = GameConfig(crack_budget=1, time_limit=5.0)
    m = GameMachine("circle", CANVAS, config=cfg, crack_generator=CrackGenerator(CANVAS, rng=rng))
    results = _results(m)
    m.pointer_down(START, 0.0)
    m.pointer_move(OFF_PATH, 1.0)
    assert m.state is GameState.FAIL
    # (5 - 1) * 20 + 0 * 800
    assert results[0].score == 80


def _steps(a: np.ndarray, b: np.ndarray, step: float = 2.0) -> list[tuple[float, float]]:
    """a から b まで `step` 間隔で直線補間した点（a を除き b を含む）。"""
    n = max(1, int(np.ceil(np.hypot(*(b - a)) / step)))
    return [(float(p[0]), float(p[1])) for p in (a + (b - a) * (k / n) for k in range(1, n + 1))]


@pytest.mark.e2e
def test_triangle_corner_cut_still_completes(rng: np.random.Generator) -> None:
    m = GameMachine("triangle", CANVAS, crack_generator=CrackGenerator(CANVAS, rng=rng))
    results = _results(m)
    path = m.session.path
    assert path.shape[0] == 19

    points: list[tuple[float, float]] = []
    for k in range(2):
        points += _steps(path[k], path[k + 1])
    # path[2] から内側（中心）を経由して path[10] へ一気に横切る
    points += [(400.0, 300.0), (float(path[10, 0]), float(path[10, 1]))]
    for k in range(10, 18):
        points += _steps(path[k], path[k + 1])

    m.pointer_down((float(path[0, 0]), float(path[0, 1])), 0.0)
    for i, (x, y) in enumerate(points, start=1):
        m.handle(PointerSample(x, y, PointerPhase.MOVE, 0.01 * i))
        if m.state is not GameState.PLAYING:
            break

    assert m.state is GameState.DONE
    assert m.session.cracks == 1
    assert results[0].success and results[0].reason == "complete"
