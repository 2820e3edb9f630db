from __future__ import annotations

import math

import numpy as np

from common.types import Vec2

from .densify import densify
from .registry import shape


@shape
def star(
    center: Vec2,
    radius: float,
    *,
    spikes: int = 5,
    inner_ratio: float = 0.45,
    segs_per: int = 5,
) -> np.ndarray:
    """外半径 `radius`・内半径 `radius * inner_ratio` を交互に結ぶ星形を生成します。

    頂点は -90° から `180° / spikes` 刻み（既定 36°）で外/内を交互に置き、
    先頭頂点を末尾に複製して閉じたうえで `densify` します。
    """
    n = max(2, int(spikes))
    cx, cy = center
    i = np.arange(2 * n)
    r = np.where(i % 2 == 0, float(radius), float(radius) * float(inner_ratio))
    t = -math.pi / 2.0 + i * (math.pi / n)
    vertices = np.stack([cx + np.cos(t) * r, cy + np.sin(t) * r], axis=1)
    vertices = np.vstack([vertices, vertices[:1]])
    return densify(vertices, segs_per)
