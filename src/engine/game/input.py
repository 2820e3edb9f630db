"""
どこで: `engine.game.input`。
何を: 入力境界のポインタサンプル（座標・フェーズ・単調時刻）を定義する。
なぜ: ウィンドウ系イベント（pyglet 等）とゲーム規則の間を、座標変換済みの値型 1 つで受け渡すため。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from common.types import Vec2


class PointerPhase(str, Enum):
    DOWN = "down"
    MOVE = "move"
    UP = "up"


@dataclass(frozen=True)
class PointerSample:
    """キャンバス論理ピクセル座標（y 下向き）のポインタサンプル。

    `timestamp` は単調時刻 [秒]。tick と同じ時間源を使うこと。
    """

    x: float
    y: float
    phase: PointerPhase
    timestamp: float

    @property
    def point(self) -> Vec2:
        return (float(self.x), float(self.y))


__all__ = ["PointerPhase", "PointerSample"]
