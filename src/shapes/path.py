"""
どこで: `shapes.path`。
何を: シェイプ種別とキャンバス寸法から、ゲームの参照パス（閉じたポリライン）を生成する。
なぜ: 中心/半径の決め方と出力検証を 1 か所にまとめ、状態機械からは種別名だけで扱えるようにするため。
"""

from __future__ import annotations

import logging
from typing import Literal

import numpy as np

from common.types import Vec2
from engine.core.polyline import as_polyline, polyline_length

from .registry import get_shape

ShapeKind = Literal["circle", "triangle", "star"]

# 「シェイプ切替」で巡回する順序
SHAPE_ORDER: tuple[ShapeKind, ...] = ("circle", "triangle", "star")

logger = logging.getLogger(__name__)


def canvas_center(canvas_size: Vec2) -> Vec2:
    w, h = canvas_size
    return (float(w) / 2.0, float(h) / 2.0)


def nominal_radius(canvas_size: Vec2, ratio: float = 0.35) -> float:
    """キャンバス短辺 × `ratio` を公称半径とする。"""
    w, h = canvas_size
    return min(float(w), float(h)) * float(ratio)


def generate_path(
    kind: str, canvas_size: Vec2, *, radius_ratio: float = 0.35
) -> np.ndarray:
    """キャンバス中心に置いた参照パスを生成する。

    Parameters
    ----------
    kind : str
        登録済みシェイプ名（"circle" / "triangle" / "star"）。
    canvas_size : Vec2
        キャンバスの `(幅, 高さ)`（論理ピクセル）。
    radius_ratio : float, default 0.35
        公称半径 = 短辺 × この比率。

    Returns
    -------
    np.ndarray
        `float64 (N, 2)`、N >= 2、全長 > 0。

    Raises
    ------
    KeyError
        未登録のシェイプ名。
    ValueError
        キャンバス寸法が正でない、または生成結果が 2 点未満/全長 0 の場合。
    """
    w, h = canvas_size
    if not (float(w) > 0.0 and float(h) > 0.0):
        raise ValueError(f"キャンバス寸法は正である必要があります: got {canvas_size}")
    fn = get_shape(kind)
    pts = as_polyline(
        fn(canvas_center(canvas_size), nominal_radius(canvas_size, radius_ratio))
    )
    if pts.shape[0] < 2 or polyline_length(pts) <= 0.0:
        raise ValueError(f"シェイプ '{kind}' が有効なパスを生成しませんでした")
    logger.debug("path generated: kind=%s points=%d", kind, pts.shape[0])
    return pts


def next_shape(kind: str) -> ShapeKind:
    """`SHAPE_ORDER` 上で次のシェイプ名を返す（末尾の次は先頭）。"""
    try:
        idx = SHAPE_ORDER.index(kind)  # type: ignore[arg-type]
    except ValueError:
        raise KeyError(f"'{kind}' は巡回対象のシェイプではありません") from None
    return SHAPE_ORDER[(idx + 1) % len(SHAPE_ORDER)]


__all__ = [
    "ShapeKind",
    "SHAPE_ORDER",
    "canvas_center",
    "nominal_radius",
    "generate_path",
    "next_shape",
]
