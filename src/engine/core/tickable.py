"""
どこで: `engine.core` の更新インターフェース。
何を: 単調時刻を受け取る `tick(now)` を持つ `Tickable` Protocol を定義。
なぜ: フレーム駆動のオブジェクト（ゲーム状態機械/レンダラ等）を一様に扱うため。
"""

from typing import Protocol


class Tickable(Protocol):
    """1 フレーム分の更新を行うインターフェース。"""

    def tick(self, now: float) -> None:
        """単調時刻 `now` [秒] まで内部状態を進める。"""
