"""
どこで: `engine.game` サブパッケージ。
何を: なぞりゲームの中核（設定・セッション・進捗判定・亀裂生成・採点・状態機械）。
なぜ: 描画/永続化/入力配線から独立した純粋なゲーム規則を 1 か所に置き、単体で検証できるようにするため。
"""

from .config import GameConfig, load_game_config
from .cracks import CrackGenerator, CrackParams, load_crack_params
from .input import PointerPhase, PointerSample
from .machine import GameMachine, GameResult
from .progress import ProgressTracker, ProgressUpdate
from .score import compute_score
from .session import GameSession, GameState

__all__ = [
    "GameConfig",
    "load_game_config",
    "CrackGenerator",
    "CrackParams",
    "load_crack_params",
    "PointerPhase",
    "PointerSample",
    "GameMachine",
    "GameResult",
    "ProgressTracker",
    "ProgressUpdate",
    "compute_score",
    "GameSession",
    "GameState",
]
