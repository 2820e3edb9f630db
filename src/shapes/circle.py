from __future__ import annotations

import math

import numpy as np

from common.types import Vec2

from .registry import shape


@shape
def circle(center: Vec2, radius: float, *, segments: int = 200) -> np.ndarray:
    """中心 `center`・半径 `radius` の円周を `segments` 等分した点列を生成します。

    引数:
        center: 中心座標。
        radius: 半径。
        segments: 分割数。

    返り値:
        `segments + 1` 点（先頭と末尾は同一点で閉ループ）。
    """
    n = max(3, int(segments))
    cx, cy = center
    t = (np.arange(n + 1, dtype=np.float64) / n) * (2.0 * math.pi)
    return np.stack([cx + np.cos(t) * radius, cy + np.sin(t) * radius], axis=1)
