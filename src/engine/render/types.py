"""
どこで: `engine.render` 型定義。
何を: レイヤー描画用の `Layer`、1 フレーム分の描画データ `RenderFrame`、描画先 `Renderer` Protocol。
なぜ: ゲーム中核から見た「外部レンダラ」との境界を、点列と HUD 値だけの値型に固定するため。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from common.types import RGBA, Vec2
from engine.core.geometry import Geometry


@dataclass(frozen=True)
class Layer:
    """色/太さ付きの描画レイヤー。"""

    geometry: Geometry
    color: RGBA
    thickness: float
    name: str | None = None


@dataclass(frozen=True)
class RenderFrame:
    """1 フレーム分の描画データ（座標はキャンバス論理ピクセル、y 下向き）。

    レイヤーは描画順（奥 → 手前）に並ぶ。
    """

    canvas_size: Vec2
    layers: tuple[Layer, ...]
    start: Vec2
    pointer: Vec2 | None
    state: str
    time_left: float
    cracks: int
    crack_budget: int
    score: int | None
    best: int
    player: str | None = None
    editing_name: bool = False
    banner: str | None = None

    def layer(self, name: str) -> Layer | None:
        for lay in self.layers:
            if lay.name == name:
                return lay
        return None

    def hud_lines(self) -> list[str]:
        """HUD 表示用の文字列（残り時間は小数 1 桁）。"""
        score = "-" if self.score is None else str(self.score)
        lines = [
            f"TIME {self.time_left:.1f}",
            f"CRACKS {self.cracks}/{self.crack_budget}",
            f"SCORE {score}",
            f"BEST {self.best}",
        ]
        if self.editing_name:
            lines.append(f"NAME {self.player or ''}_")
        elif self.player:
            lines.append(f"PLAYER {self.player}")
        return lines


class Renderer(Protocol):
    def draw(self, frame: RenderFrame) -> None: ...


__all__ = ["Layer", "RenderFrame", "Renderer"]
