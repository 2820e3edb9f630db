"""
どこで: `engine.game.machine`（GameStateMachine）。
何を: idle/playing/fail/done の遷移、タイマー、亀裂予算、採点の起動を担う状態機械。
なぜ: ポインタ入力と tick という 2 系統のイベントを、1 イベントずつ完結する形でセッションへ反映するため。

遷移:
- idle → playing: 開始判定を満たす pointerdown、または `new_game()`。
  `new_game()` 直後は playing だがタイマーは未始動（最初の有効な pointerdown で 0 から始まる）。
- playing → fail: 亀裂数が予算に達した / 経過時間が制限時間に達した。
- playing → done: 周回完了。
- fail/done は終端。入力は無視し、`reset()` / `new_game()` / `set_shape()` / `next_shape()` でのみ抜ける。

逸脱（帯外サンプル）は前回カウントから `crack_debounce` 秒以上経過していれば 1 回数え、
そのたびに CrackGenerator を 1 回呼ぶ。1 回の大きなはみ出しが毎秒何度も数えられるのを防ぐ。

時刻はすべて単調時刻 [秒]（`FrameClock.now()` と同じ時間源）。タイムアウトは tick と
ポインタサンプルの両方で判定するため、期限から 1 tick 以内に fail へ遷移する。

終端遷移ではスコアを 1 度だけ計算してセッションに保存し、登録済みリスナへ `GameResult` を通知する。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Literal

from common.types import Vec2
from engine.core.polyline import nearest_on_polyline
from shapes.path import next_shape

from .config import GameConfig
from .cracks import CrackGenerator
from .input import PointerPhase, PointerSample
from .progress import ProgressTracker, in_start_gate
from .score import compute_score
from .session import GameSession, GameState

logger = logging.getLogger(__name__)

FinishReason = Literal["complete", "cracks", "timeout"]

# デバウンス比較での浮動小数誤差の吸収幅（秒）
_DEBOUNCE_EPS = 1e-9


@dataclass(frozen=True)
class GameResult:
    success: bool
    reason: FinishReason
    score: int
    elapsed: float
    cracks: int
    shape: str


class GameMachine:
    """1 つのアクティブな `GameSession` を所有する状態機械。

    Parameters
    ----------
    shape : str, default "circle"
        初期シェイプ名。
    canvas_size : Vec2, default (800, 600)
        キャンバス寸法（論理ピクセル）。
    config : GameConfig | None
        調整値。None で既定値。
    crack_generator : CrackGenerator | None
        亀裂生成器。None でシードなし乱数の既定生成器。
    """

    def __init__(
        self,
        shape: str = "circle",
        canvas_size: Vec2 = (800.0, 600.0),
        *,
        config: GameConfig | None = None,
        crack_generator: CrackGenerator | None = None,
    ) -> None:
        self._config = config or GameConfig()
        self._canvas_size = (float(canvas_size[0]), float(canvas_size[1]))
        self._tracker = ProgressTracker(self._config)
        self._cracker = crack_generator or CrackGenerator(self._canvas_size)
        self._listeners: list[Callable[[GameResult], None]] = []
        self._session = GameSession.create(shape, self._canvas_size, self._config)

    # ---- 参照 ----
    @property
    def session(self) -> GameSession:
        return self._session

    @property
    def state(self) -> GameState:
        return self._session.state

    @property
    def config(self) -> GameConfig:
        return self._config

    def on_finish(self, callback: Callable[[GameResult], None]) -> None:
        """終端遷移時に 1 度だけ呼ばれるコールバックを登録する（登録順に呼ぶ）。"""
        self._listeners.append(callback)

    # ---- 外部リセット ----
    def reset(self, shape: str | None = None) -> GameSession:
        """任意の状態から idle へ。セッションは丸ごと作り直す（進行中の進捗は破棄）。"""
        kind = shape if shape is not None else self._session.shape
        self._session = GameSession.create(kind, self._canvas_size, self._config)
        logger.info("reset: shape=%s", kind)
        return self._session

    def set_shape(self, shape: str) -> GameSession:
        return self.reset(shape)

    def next_shape(self) -> GameSession:
        return self.reset(next_shape(self._session.shape))

    def new_game(self) -> GameSession:
        """リセットして playing へ。タイマーは最初の有効な pointerdown で始まる。"""
        s = self.reset()
        s.state = GameState.PLAYING
        logger.info("new game armed: shape=%s", s.shape)
        return s

    # ---- イベント ----
    def handle(self, sample: PointerSample) -> None:
        """ポインタサンプルをフェーズに応じて振り分ける。"""
        if sample.phase is PointerPhase.DOWN:
            self.pointer_down(sample.point, sample.timestamp)
        elif sample.phase is PointerPhase.MOVE:
            self.pointer_move(sample.point, sample.timestamp)
        else:
            self.pointer_up()

    def tick(self, now: float) -> None:
        """周期 tick。playing かつ始動済みなら経過時間を進め、タイムアウトを判定する。"""
        self._advance_clock(now)

    def pointer_down(self, p: Vec2, now: float) -> bool:
        """掴み。開始判定を満たせば True（始動または開始位置の取り直し）。"""
        s = self._session
        s.pointer = p
        if s.state.is_terminal:
            return False
        near = nearest_on_polyline(p, s.path)
        if not in_start_gate(p, s.path, near, self._config):
            return False

        if s.state is GameState.IDLE or not s.started:
            s.state = GameState.PLAYING
            s.started = True
            s.clock_origin = float(now)
            s.elapsed = 0.0
            s.cracks = 0
            s.last_crack_at = None
            s.score = None
            s.clear_marks()
            logger.info("playing: shape=%s start_len=%.1f", s.shape, near.arc_length)
        else:
            if not self._advance_clock(now):
                return False
            s.trace.clear()
            logger.debug("re-anchored at len=%.1f", near.arc_length)

        s.pointer_down = True
        s.start_offset = near.arc_length % s.total_length
        s.progress = 0.0
        s.trace.append((float(p[0]), float(p[1])))
        return True

    def pointer_move(self, p: Vec2, now: float) -> None:
        s = self._session
        s.pointer = p
        if not s.pointer_down or s.state is not GameState.PLAYING:
            return
        if not self._advance_clock(now):
            return

        update = self._tracker.evaluate(s, p)
        if not update.in_band:
            self._register_deviation(p, now)
            if s.state is not GameState.PLAYING:
                return
        if update.complete:
            self._finish(True, "complete")

    def pointer_up(self) -> None:
        self._session.pointer_down = False

    # ---- 内部 ----
    def _advance_clock(self, now: float) -> bool:
        """経過時間を更新する。playing を継続していれば True。"""
        s = self._session
        if s.state is not GameState.PLAYING:
            return False
        if not s.started or s.clock_origin is None:
            return True
        s.elapsed = max(s.elapsed, float(now) - s.clock_origin)
        if s.elapsed >= s.time_limit:
            self._finish(False, "timeout")
            return False
        return True

    def _register_deviation(self, p: Vec2, now: float) -> None:
        s = self._session
        if (
            s.last_crack_at is not None
            and float(now) - s.last_crack_at < self._config.crack_debounce - _DEBOUNCE_EPS
        ):
            return
        s.cracks = min(s.cracks + 1, s.crack_budget)
        s.last_crack_at = float(now)
        s.crack_lines.extend(self._cracker.generate(p))
        logger.debug("crack %d/%d at (%.1f, %.1f)", s.cracks, s.crack_budget, p[0], p[1])
        if s.cracks >= s.crack_budget:
            self._finish(False, "cracks")

    def _finish(self, success: bool, reason: FinishReason) -> None:
        s = self._session
        if s.state.is_terminal:
            return
        s.state = GameState.DONE if success else GameState.FAIL
        s.pointer_down = False
        cfg = self._config
        s.score = compute_score(
            s.elapsed,
            s.cracks,
            time_limit=cfg.time_limit,
            crack_budget=cfg.crack_budget,
            time_weight=cfg.score_time_weight,
            accuracy_weight=cfg.score_accuracy_weight,
        )
        result = GameResult(
            success=success,
            reason=reason,
            score=s.score,
            elapsed=s.elapsed,
            cracks=s.cracks,
            shape=s.shape,
        )
        logger.info(
            "%s (%s): score=%d elapsed=%.2f cracks=%d",
            s.state.value,
            reason,
            result.score,
            result.elapsed,
            result.cracks,
        )
        for cb in self._listeners:
            cb(result)


__all__ = ["GameMachine", "GameResult", "FinishReason"]
