"""
どこで: `shapes.densify`。
何を: 粗い頂点列の各辺を等間隔に補間し、点密度をそろえる。
なぜ: 三角形/星のような少頂点の形状でも、最近点クエリの精度と描画の滑らかさを円と同程度にするため。

出力規則:
- 各辺 `v[i-1] -> v[i]` について `t = s / segs_per (s = 0..segs_per-1)` の点を出す（辺の始点を含み終点を含まない）。
- 全体の最終頂点だけを末尾に 1 回追加する。
- 出力点数は `(K - 1) * segs_per + 1`（K は入力頂点数）。
"""

from __future__ import annotations

import numpy as np

from engine.core.polyline import PointsLike, as_polyline


def densify(vertices: PointsLike, segs_per: int = 4) -> np.ndarray:
    """頂点列を辺ごとに `segs_per` 分割した点列を返す。

    Parameters
    ----------
    vertices : PointsLike
        `(K, 2)` の頂点列。
    segs_per : int, default 4
        1 辺あたりの分割数（1 以上）。

    Returns
    -------
    np.ndarray
        `float64 (N, 2)`。`K < 2` の場合は入力のコピー。

    Raises
    ------
    ValueError
        `segs_per < 1` の場合。
    """
    v = as_polyline(vertices)
    segs = int(segs_per)
    if segs < 1:
        raise ValueError(f"segs_per は 1 以上である必要があります: got {segs_per}")
    if v.shape[0] < 2:
        return v.copy()

    t = np.arange(segs, dtype=np.float64) / segs
    start = v[:-1]
    delta = v[1:] - v[:-1]
    pts = start[:, None, :] + delta[:, None, :] * t[None, :, None]
    return np.vstack([pts.reshape(-1, 2), v[-1:]])


__all__ = ["densify"]
