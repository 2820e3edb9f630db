"""
どこで: `engine.render.frame`。
何を: `GameSession` から `RenderFrame`（帯・中心線・トレース・亀裂の各レイヤー + HUD 値）を組み立てる。
なぜ: レンダラがセッション内部（deque/ndarray）を知らずに済むよう、Geometry へ正規化して渡すため。
"""

from __future__ import annotations

from common.types import RGBA
from engine.core.geometry import Geometry
from engine.game.session import GameSession

from .types import Layer, RenderFrame

BAND_COLOR: RGBA = (125, 211, 252, 46)
GUIDE_COLOR: RGBA = (96, 165, 250, 230)
TRACE_COLOR: RGBA = (250, 204, 21, 242)
CRACK_COLOR: RGBA = (239, 68, 68, 242)


def build_frame(
    session: GameSession,
    *,
    best: int = 0,
    player: str | None = None,
    editing_name: bool = False,
    banner: str | None = None,
) -> RenderFrame:
    """HUD の名前/バナーは呼び出し側（`engine.io.profile.ProfileEditor`）から受け取る。"""
    reference = Geometry.from_lines([session.path])
    layers = [
        Layer(reference, BAND_COLOR, session.config.band, name="band"),
        Layer(reference, GUIDE_COLOR, 2.0, name="guide"),
    ]
    if len(session.trace) > 1:
        layers.append(Layer(Geometry.from_lines([list(session.trace)]), TRACE_COLOR, 3.0, name="trace"))
    if session.crack_lines:
        layers.append(Layer(Geometry.from_lines(session.crack_lines), CRACK_COLOR, 2.0, name="cracks"))
    return RenderFrame(
        canvas_size=session.canvas_size,
        layers=tuple(layers),
        start=session.start_point,
        pointer=session.pointer,
        state=session.state.value,
        time_left=session.time_left,
        cracks=session.cracks,
        crack_budget=session.crack_budget,
        score=session.score,
        best=int(best),
        player=player,
        editing_name=editing_name,
        banner=banner,
    )


__all__ = ["build_frame", "BAND_COLOR", "GUIDE_COLOR", "TRACE_COLOR", "CRACK_COLOR"]
