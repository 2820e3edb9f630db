"""
どこで: `api` 入口（高レベル公開 API）。
何を: 状態機械 `GameMachine`・設定 `GameConfig`・パス生成・実行ランナーを再輸出。
なぜ: 利用者が単一名前空間からゲームの生成→入力→実行まで完結できるようにするため。

Usage:
    from api import GameMachine, PointerSample, PointerPhase

    m = GameMachine("star", (800, 600))
    m.handle(PointerSample(400, 90, PointerPhase.DOWN, 0.0))
    m.tick(0.5)

    from api import run
    run(shape="circle")
"""

from engine.core.polyline import nearest_on_polyline, polyline_length
from engine.game import (
    GameConfig,
    GameMachine,
    GameResult,
    GameState,
    PointerPhase,
    PointerSample,
    compute_score,
)
from shapes import SHAPE_ORDER, generate_path, shape

from .game import create_game, run_game
from .game import run_game as run

__all__ = [
    "GameMachine",
    "GameConfig",
    "GameResult",
    "GameState",
    "PointerPhase",
    "PointerSample",
    "compute_score",
    "generate_path",
    "nearest_on_polyline",
    "polyline_length",
    "shape",
    "SHAPE_ORDER",
    "create_game",
    "run_game",
    "run",
]

# バージョン情報
__version__ = "2026.10"
