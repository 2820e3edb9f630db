"""
どこで: `common` のパラメータ正規化ユーティリティ。
何を: クランプと四捨五入の小さな純関数群。
なぜ: 採点/亀裂生成/設定読込が同じ境界規則（閉区間クランプ・四捨五入）で値を扱えるようにするため。
"""

from __future__ import annotations

import math


def clamp(x: float, lo: float, hi: float) -> float:
    """`x` を閉区間 `[lo, hi]` に収める。"""
    return lo if x <= lo else hi if x >= hi else x


def clamp01(x: float) -> float:
    return 0.0 if x <= 0.0 else 1.0 if x >= 1.0 else x


def round_half_up(x: float) -> int:
    """0.5 を切り上げる四捨五入（組込み `round` の偶数丸めは使わない）。

    例: 266.5 -> 267, 2.5 -> 3。採点は非負値でのみ使う。
    """
    return int(math.floor(float(x) + 0.5))


__all__ = [
    "clamp",
    "clamp01",
    "round_half_up",
]
