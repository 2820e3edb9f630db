"""
どこで: `engine.core.render_window`。
何を: ゲーム用の固定サイズ pyglet ウィンドウ（MSAA 優先・背景クリア・描画コールバック）。
なぜ: キャンバス寸法＝ウィンドウ寸法に固定し、レンダラ側が座標変換を y 反転だけで済ませられるようにするため。

使用例:
    win = RenderWindow(800, 600)
    win.add_draw_callback(lambda: renderer.draw(build_frame(machine.session)))
    pyglet.app.run()
"""

from __future__ import annotations

import logging
from typing import Callable

import pyglet
from pyglet.gl import Config, glClearColor

logger = logging.getLogger(__name__)

DrawCallback = Callable[[], None]


def _msaa_config(samples: int) -> Config:
    return Config(double_buffer=True, sample_buffers=1, samples=samples)


class RenderWindow(pyglet.window.Window):
    """キャンバスと同寸のリサイズ不可ウィンドウ。

    引数:
        width, height: キャンバス寸法（論理ピクセル）。
        caption: タイトルバー文字列。
        bg_color: 背景色 RGBA（0.0〜1.0）。
        samples: MSAA サンプル数。非対応環境では MSAA なしで作り直す。
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        caption: str = "Dalgona Tracer",
        bg_color: tuple[float, float, float, float] = (0.04, 0.05, 0.09, 1.0),
        samples: int = 4,
    ) -> None:
        size = dict(width=int(width), height=int(height), caption=caption, resizable=False)
        try:
            super().__init__(config=_msaa_config(samples), **size)
        except pyglet.window.NoSuchConfigException:
            logger.info("MSAA x%d unavailable; falling back to default GL config", samples)
            super().__init__(**size)
        self._bg_color = bg_color
        self._draw_callbacks: list[DrawCallback] = []

    def add_draw_callback(self, func: DrawCallback) -> None:
        """`on_draw` 中に登録順で呼ぶ描画関数（引数なし）を追加する。"""
        self._draw_callbacks.append(func)

    def on_draw(self) -> None:
        glClearColor(*self._bg_color)
        self.clear()
        for cb in self._draw_callbacks:
            cb()

    def on_close(self) -> None:
        logger.info("window closed")
        super().on_close()
