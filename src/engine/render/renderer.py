"""
どこで: `engine.render.renderer`。
何を: `RenderFrame` を pyglet.shapes の線分と pyglet.text.Label の HUD で描画する。
なぜ: ゲーム中核が渡す点列（y 下向き）を、pyglet の座標系（y 上向き）へ写して表示するため。

描画順:
- 静的レイヤー（band/guide）と始点マーカーはパスが変わったときだけ作り直す。
- 動的レイヤー（trace/cracks）・ポインタ・HUD は毎フレーム作り直す。
"""

from __future__ import annotations

import hashlib
import logging

import pyglet
from pyglet import shapes

from common.types import RGBA, Vec2

from .types import Layer, RenderFrame

logger = logging.getLogger(__name__)

STATIC_LAYERS = frozenset({"band", "guide"})
START_COLOR: RGBA = (16, 185, 129, 255)
POINTER_COLOR: RGBA = (255, 255, 255, 255)
HUD_COLOR: RGBA = (226, 232, 240, 255)
BANNER_COLOR: RGBA = (253, 224, 71, 255)

_STATE_MESSAGES = {
    "idle": "Grab the green dot and trace the outline",
    "fail": "CRACKED - press N for a new game",
    "done": "CLEAN CUT - press N for a new game",
}


class PygletRenderer:
    """`engine.render.types.Renderer` の pyglet 実装。"""

    def __init__(self, canvas_size: Vec2, *, font_size: int = 11) -> None:
        self._width = float(canvas_size[0])
        self._height = float(canvas_size[1])
        self._font_size = int(font_size)
        self._static_key: str | None = None
        self._static_batch = pyglet.graphics.Batch()
        self._static_shapes: list[object] = []

    def _flip(self, p: Vec2) -> Vec2:
        return (float(p[0]), self._height - float(p[1]))

    def _layer_shapes(self, layer: Layer, batch: pyglet.graphics.Batch) -> list[object]:
        out: list[object] = []
        for line in layer.geometry.lines():
            for i in range(1, line.shape[0]):
                x0, y0 = self._flip((line[i - 1, 0], line[i - 1, 1]))
                x1, y1 = self._flip((line[i, 0], line[i, 1]))
                out.append(shapes.Line(x0, y0, x1, y1, layer.thickness, layer.color, batch=batch))
        return out

    def _ensure_static(self, frame: RenderFrame) -> None:
        static = [lay for lay in frame.layers if lay.name in STATIC_LAYERS]
        h = hashlib.blake2b(digest_size=16)
        for lay in static:
            h.update(lay.geometry.coords.tobytes())
            h.update(repr((lay.name, lay.thickness, lay.color)).encode())
        key = h.hexdigest()
        if key == self._static_key:
            return
        self._static_batch = pyglet.graphics.Batch()
        self._static_shapes = []
        for lay in static:
            self._static_shapes.extend(self._layer_shapes(lay, self._static_batch))
        sx, sy = self._flip(frame.start)
        self._static_shapes.append(
            shapes.Circle(sx, sy, 8, color=START_COLOR, batch=self._static_batch)
        )
        self._static_key = key
        logger.debug("static layers rebuilt: %d shapes", len(self._static_shapes))

    def draw(self, frame: RenderFrame) -> None:
        self._ensure_static(frame)
        self._static_batch.draw()

        batch = pyglet.graphics.Batch()
        keep: list[object] = []
        for lay in frame.layers:
            if lay.name in STATIC_LAYERS:
                continue
            keep.extend(self._layer_shapes(lay, batch))
        if frame.pointer is not None:
            px, py = self._flip(frame.pointer)
            keep.append(shapes.Circle(px, py, 3, color=POINTER_COLOR, batch=batch))

        y = self._height - 8
        for text in frame.hud_lines():
            keep.append(
                pyglet.text.Label(
                    text,
                    font_size=self._font_size,
                    x=8,
                    y=y,
                    anchor_x="left",
                    anchor_y="top",
                    color=HUD_COLOR,
                    batch=batch,
                )
            )
            y -= self._font_size + 8
        message = _STATE_MESSAGES.get(frame.state)
        if message:
            keep.append(
                pyglet.text.Label(
                    message,
                    font_size=self._font_size + 2,
                    x=self._width / 2,
                    y=16,
                    anchor_x="center",
                    anchor_y="bottom",
                    color=HUD_COLOR,
                    batch=batch,
                )
            )
        if frame.banner:
            keep.append(
                pyglet.text.Label(
                    frame.banner,
                    font_size=self._font_size + 1,
                    x=self._width / 2,
                    y=self._height - 8,
                    anchor_x="center",
                    anchor_y="top",
                    color=BANNER_COLOR,
                    batch=batch,
                )
            )
        batch.draw()


__all__ = ["PygletRenderer"]
