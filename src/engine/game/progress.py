"""
どこで: `engine.game.progress`（ProgressTracker）。
何を: ポインタサンプルを「帯内/帯外」に分類し、開始点からの周回進捗（剰余つき弧長）を求め、トレースを記録する。
なぜ: 参照パスを開いた点列のまま扱い、閉路の継ぎ目を剰余演算だけで処理するため（合成辺での二重計上を避ける）。

手順（1 サンプルあたり）:
1. `near = nearest_on_polyline(p, path)`
2. 帯内判定: `near.distance <= band * deviation_ratio`
3. 進捗: `((near.arc_length - start_offset) + L) % L`。
   受理済み進捗が `< L * progress_max_step_ratio` のまま候補が `> L - L * progress_max_step_ratio` へ跳ぶ
   （継ぎ目を逆向きに越える）サンプルだけを捨て、それ以外はそのまま受理する。
   受理済み進捗が `>= L - close_tolerance` で周回完了。
   始点から逆方向へ 1 歩動くと生の進捗は `L - 数px` になるが、これは周回ではないので数えない。
   角を横切るなどの大きな前進は受理する。
4. トレース: 直前の記録点から `trace_min_step` より離れていれば追加（容量超過は古い順に破棄）。

帯外サンプルも進捗とトレースは更新する（帯へ戻れるため）。亀裂生成の可否だけを分類で決める。
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass

import numpy as np

from common.types import Vec2
from engine.core.polyline import NearestPoint, nearest_on_polyline, segment_length

from .config import GameConfig
from .session import GameSession


@dataclass(frozen=True)
class ProgressUpdate:
    near: NearestPoint
    in_band: bool
    progressed: float
    accepted: bool
    complete: bool


def wrap_progress(arc_length: float, start_offset: float, total_length: float) -> float:
    """開始オフセットからの進捗を `[0, total_length)` に折り返す。"""
    return ((arc_length - start_offset) + total_length) % total_length


def is_loop_complete(progressed: float, total_length: float, close_tolerance: float) -> bool:
    return progressed >= total_length - close_tolerance


def crosses_seam_backward(
    current: float, candidate: float, total_length: float, max_step: float
) -> bool:
    """始点付近（`current < max_step`）から終端付近（`candidate > L - max_step`）への跳びなら True。"""
    return current < max_step and candidate > total_length - max_step


def in_start_gate(p: Vec2, path: np.ndarray, near: NearestPoint, config: GameConfig) -> bool:
    """開始（掴み）判定: 始点から `band` 以内、またはパスから `band/2` 以内。"""
    start = (float(path[0, 0]), float(path[0, 1]))
    return segment_length(p, start) <= config.band or near.distance <= config.deviation_radius


def record_trace(trace: deque[Vec2], p: Vec2, min_step: float) -> bool:
    """直前点から `min_step` より離れていれば追加する。追加したら True。"""
    if trace and segment_length(trace[-1], p) <= min_step:
        return False
    trace.append((float(p[0]), float(p[1])))
    return True


class ProgressTracker:
    """セッションに対する 1 サンプル分の評価器（状態はセッション側に持つ）。"""

    def __init__(self, config: GameConfig) -> None:
        self._config = config

    def evaluate(self, session: GameSession, p: Vec2) -> ProgressUpdate:
        near = nearest_on_polyline(p, session.path)
        in_band = near.distance <= self._config.deviation_radius
        progressed = wrap_progress(near.arc_length, session.start_offset, session.total_length)
        accepted = not crosses_seam_backward(
            session.progress,
            progressed,
            session.total_length,
            session.total_length * self._config.progress_max_step_ratio,
        )
        if accepted:
            session.progress = progressed
        complete = is_loop_complete(
            session.progress, session.total_length, self._config.close_tolerance
        )
        record_trace(session.trace, p, self._config.trace_min_step)
        return ProgressUpdate(
            near=near,
            in_band=in_band,
            progressed=progressed,
            accepted=accepted,
            complete=complete,
        )


__all__ = [
    "ProgressUpdate",
    "ProgressTracker",
    "wrap_progress",
    "is_loop_complete",
    "crosses_seam_backward",
    "in_start_gate",
    "record_trace",
]
