"""
どこで: `engine.game.session`。
何を: 1 ゲーム分の可変状態を束ねる `GameSession` と状態列挙 `GameState`。
なぜ: グローバル変数に散らさず、単一の所有集約として各コンポーネントへ参照渡しするため。

不変条件:
- 参照パスは 2 点以上、全長 > 0（生成時に検証）。
- `cracks` は `[0, crack_budget]`。
- `elapsed >= 0`、playing 中は単調非減少。
- `start_offset` は `[0, total_length)`。
- トレース/亀裂は固定容量の FIFO（`deque(maxlen=...)`）。

ライフサイクル:
- 新規ゲーム/シェイプ変更ごとに丸ごと作り直す（部分的な後始末はしない）。
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from common.types import Vec2
from engine.core.polyline import as_polyline, polyline_length
from shapes.path import generate_path

from .config import GameConfig


class GameState(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    FAIL = "fail"
    DONE = "done"

    @property
    def is_terminal(self) -> bool:
        return self in (GameState.FAIL, GameState.DONE)


@dataclass
class GameSession:
    shape: str
    canvas_size: Vec2
    path: np.ndarray
    config: GameConfig = field(default_factory=GameConfig)
    total_length: float = 0.0
    state: GameState = GameState.IDLE
    elapsed: float = 0.0
    cracks: int = 0
    start_offset: float = 0.0
    # 受理済みの周回進捗（継ぎ目を逆向きに越えたサンプルは反映しない）
    progress: float = 0.0
    # 有効な掴み（pointerdown）でタイマーが動き始めたか
    started: bool = False
    clock_origin: float | None = None
    last_crack_at: float | None = None
    pointer_down: bool = False
    pointer: Vec2 | None = None
    score: int | None = None
    trace: deque[Vec2] = field(init=False)
    crack_lines: deque[np.ndarray] = field(init=False)

    def __post_init__(self) -> None:
        self.path = as_polyline(self.path)
        if self.path.shape[0] < 2:
            raise ValueError("参照パスは 2 点以上である必要があります")
        self.total_length = polyline_length(self.path)
        if self.total_length <= 0.0:
            raise ValueError("参照パスの全長は正である必要があります")
        self.trace = deque(maxlen=self.config.trace_capacity)
        self.crack_lines = deque(maxlen=self.config.crack_capacity)

    @classmethod
    def create(
        cls, shape: str, canvas_size: Vec2, config: GameConfig | None = None
    ) -> "GameSession":
        """シェイプ名からパスを生成して idle のセッションを作る。"""
        cfg = config or GameConfig()
        path = generate_path(shape, canvas_size, radius_ratio=cfg.radius_ratio)
        return cls(shape=shape, canvas_size=canvas_size, path=path, config=cfg)

    # ---- 派生値 ----
    @property
    def crack_budget(self) -> int:
        return self.config.crack_budget

    @property
    def time_limit(self) -> float:
        return self.config.time_limit

    @property
    def time_left(self) -> float:
        return max(0.0, self.time_limit - self.elapsed)

    @property
    def start_point(self) -> Vec2:
        return (float(self.path[0, 0]), float(self.path[0, 1]))

    def clear_marks(self) -> None:
        """トレースと亀裂を破棄する。"""
        self.trace.clear()
        self.crack_lines.clear()


__all__ = ["GameState", "GameSession"]
