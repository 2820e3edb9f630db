from __future__ import annotations

import math

import numpy as np

from common.types import Vec2

from .densify import densify
from .registry import shape


@shape
def triangle(center: Vec2, radius: float, *, segs_per: int = 6) -> np.ndarray:
    """半径 `radius` の円に内接し、頂点が真上（-90°）にある正三角形を生成します。

    引数:
        center: 中心座標。
        radius: 外接円の半径。
        segs_per: 1 辺あたりの補間分割数。

    返り値:
        閉じた頂点列（最初の頂点を末尾に複製）を `densify` した点列。
    """
    cx, cy = center
    i = np.arange(4) % 3
    t = -math.pi / 2.0 + i * (2.0 * math.pi / 3.0)
    vertices = np.stack([cx + np.cos(t) * radius, cy + np.sin(t) * radius], axis=1)
    return densify(vertices, segs_per)
