"""
どこで: `engine.io` サブパッケージ（永続化）。
何を: ベストスコア・プレイヤー名・同意フラグの保存先（ScoreStore）を提供。
なぜ: 保存媒体への依存を隔離し、ゲーム中核/ランナーから統一 API で参照できるようにするため。
"""

from .profile import ProfileEditor
from .storage import JsonScoreStore, MemoryScoreStore, ScoreStore, normalize_player_name

__all__ = [
    "ScoreStore",
    "MemoryScoreStore",
    "JsonScoreStore",
    "ProfileEditor",
    "normalize_player_name",
]
