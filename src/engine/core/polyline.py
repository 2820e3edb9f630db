"""
どこで: `engine.core.polyline`（ポリライン幾何の純関数群）。
何を: 線分長・ポリライン長・線分への最近点・ポリラインへの最近点（累積弧長つき）を提供する。
なぜ: ポインタ入力ごとに呼ばれる判定（帯内/帯外・周回進捗）の唯一の計算源にするため。

データ表現:
- 点は `(x, y)` タプル（`common.types.Vec2`）。
- ポリラインは `float64 ndarray (N, 2)`。挿入順が進行方向と弧長を定義する。
- 閉路は「末尾→先頭の合成辺」を持たない。周回は呼び出し側（`engine.game.progress`）の剰余演算で扱う。

性能上の注意:
- `nearest_on_polyline` はポインタイベント毎（毎秒数十回）に呼ばれる。
  全線分走査は Numba カーネル `_nearest_kernel` で行い、ループ内で配列を確保しない。
- `DLG_USE_NUMBA=0` の場合は同じカーネルの純 Python 版（`py_func`）を使う。結果は同一。

縮退ケース:
- 長さ 0 の線分は `t=0, q=a` に解決する（例外にしない）。
- 1 点だけのポリラインはその点を最近点とし、弧長 0 を返す。
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np
from numba import njit  # type: ignore[attr-defined]

from common import settings
from common.types import Vec2

PointsLike = np.ndarray | Sequence[Sequence[float]]


@dataclass(frozen=True)
class NearestPoint:
    """ポリライン上の最近点クエリの結果。

    Attributes
    ----------
    distance : float
        クエリ点から最近点までのユークリッド距離（>= 0）。
    point : Vec2
        ポリライン上の最近点。
    segment_index : int
        最近点を含む線分の index（線分 i は頂点 i → i+1）。
    t : float
        線分内パラメータ（0..1）。
    arc_length : float
        ポリライン先頭から最近点までの累積弧長。
    """

    distance: float
    point: Vec2
    segment_index: int
    t: float
    arc_length: float


def as_polyline(points: PointsLike) -> np.ndarray:
    """点列を `float64 (N, 2)` の C 連続配列に正規化する。

    Raises
    ------
    ValueError
        形状が `(N, 2)` でない場合。
    """
    arr = np.asarray(points, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError(f"ポリラインは形状 (N, 2) である必要があります: got {arr.shape}")
    if not arr.flags.c_contiguous:
        arr = np.ascontiguousarray(arr)
    return arr


def segment_length(a: Vec2, b: Vec2) -> float:
    """2 点間のユークリッド距離。"""
    return math.hypot(float(b[0]) - float(a[0]), float(b[1]) - float(a[1]))


def polyline_length(points: PointsLike) -> float:
    """隣接頂点間距離の総和（2 点未満は 0.0）。"""
    xy = as_polyline(points)
    if xy.shape[0] < 2:
        return 0.0
    d = np.diff(xy, axis=0)
    return float(np.sqrt(np.sum(d * d, axis=1)).sum())


def nearest_on_segment(p: Vec2, a: Vec2, b: Vec2) -> tuple[Vec2, float, float]:
    """点 `p` を線分 `[a, b]` へ射影した最近点を返す。

    Returns
    -------
    tuple[Vec2, float, float]
        `(q, t, distance)`。`t` は 0..1 にクランプ済み。`a == b` なら `t=0, q=a`。
    """
    ax, ay = float(a[0]), float(a[1])
    abx = float(b[0]) - ax
    aby = float(b[1]) - ay
    apx = float(p[0]) - ax
    apy = float(p[1]) - ay
    ab2 = abx * abx + aby * aby
    if ab2 == 0.0:
        t = 0.0
    else:
        t = (apx * abx + apy * aby) / ab2
        t = 0.0 if t < 0.0 else 1.0 if t > 1.0 else t
    q = (ax + abx * t, ay + aby * t)
    return q, t, math.hypot(float(p[0]) - q[0], float(p[1]) - q[1])


def nearest_on_polyline(p: Vec2, points: PointsLike) -> NearestPoint:
    """ポリライン全線分を走査し、大域的な最近点を返す。

    - 同距離の場合は先に見つかった線分を採用する（厳密な `<` 比較）。
    - 累積弧長は先頭から「最近点を含む線分の始点までの長さ + 始点から最近点まで」。

    Raises
    ------
    ValueError
        点列が空、または形状が `(N, 2)` でない場合（呼び出し側の契約違反）。
    """
    xy = as_polyline(points)
    if xy.shape[0] == 0:
        raise ValueError("空のポリラインには最近点がありません")
    kernel = _nearest_kernel if settings.get().USE_NUMBA else _nearest_kernel.py_func
    d, qx, qy, seg, t, arc = kernel(float(p[0]), float(p[1]), xy)
    return NearestPoint(
        distance=float(d),
        point=(float(qx), float(qy)),
        segment_index=int(seg),
        t=float(t),
        arc_length=float(arc),
    )


@njit(cache=True)
def _nearest_kernel(px: float, py: float, xy: np.ndarray):
    """全線分の最近点を 1 パスで求める（Numba 最適化）。

    戻り値は `(distance, qx, qy, segment_index, t, arc_length)`。
    """
    n = xy.shape[0]
    best_qx = xy[0, 0]
    best_qy = xy[0, 1]
    best_d = math.sqrt((px - best_qx) * (px - best_qx) + (py - best_qy) * (py - best_qy))
    best_seg = 0
    best_t = 0.0
    best_arc = 0.0
    if n < 2:
        return best_d, best_qx, best_qy, best_seg, best_t, best_arc

    best_d = np.inf
    acc = 0.0
    for i in range(1, n):
        ax = xy[i - 1, 0]
        ay = xy[i - 1, 1]
        abx = xy[i, 0] - ax
        aby = xy[i, 1] - ay
        ab2 = abx * abx + aby * aby
        t = 0.0
        if ab2 > 0.0:
            t = ((px - ax) * abx + (py - ay) * aby) / ab2
            if t < 0.0:
                t = 0.0
            elif t > 1.0:
                t = 1.0
        qx = ax + abx * t
        qy = ay + aby * t
        dx = px - qx
        dy = py - qy
        d = math.sqrt(dx * dx + dy * dy)
        if d < best_d:
            best_d = d
            best_qx = qx
            best_qy = qy
            best_seg = i - 1
            best_t = t
            best_arc = acc + math.sqrt((qx - ax) * (qx - ax) + (qy - ay) * (qy - ay))
        acc += math.sqrt(ab2)
    return best_d, best_qx, best_qy, best_seg, best_t, best_arc


__all__ = [
    "NearestPoint",
    "as_polyline",
    "segment_length",
    "polyline_length",
    "nearest_on_segment",
    "nearest_on_polyline",
]
