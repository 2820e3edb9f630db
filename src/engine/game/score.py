"""
どこで: `engine.game.score`。
何を: 経過時間と亀裂数から整数スコアを求める純関数。
なぜ: 終了遷移から 1 度だけ呼ばれ、状態を持たず決定的であることをテストで保証するため。

    time_left = max(0, time_limit - elapsed)
    accuracy  = clamp(1 - cracks / crack_budget, 0, 1)
    score     = max(0, round(time_left * 20 + accuracy * 800))
"""

from __future__ import annotations

from common.param_utils import clamp01, round_half_up


def compute_score(
    elapsed: float,
    cracks: int,
    *,
    time_limit: float = 60.0,
    crack_budget: int = 3,
    time_weight: float = 20.0,
    accuracy_weight: float = 800.0,
) -> int:
    """スコアを返す（0 以上の整数）。

    例:
        >>> compute_score(45.0, 0)
        1100
        >>> compute_score(60.0, 2)
        267
    """
    if crack_budget <= 0:
        raise ValueError("crack_budget は正である必要があります")
    time_left = max(0.0, float(time_limit) - float(elapsed))
    accuracy = clamp01(1.0 - float(cracks) / float(crack_budget))
    raw = time_left * float(time_weight) + accuracy * float(accuracy_weight)
    return max(0, round_half_up(raw))


__all__ = ["compute_score"]
