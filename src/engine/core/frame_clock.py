"""
どこで: `engine.core` の簡易フレームドライバ。
何を: `Tickable` の列を固定順序で呼び出す FrameClock（単調時刻の取得とループ管理）。
なぜ: GUI/ループから呼び出すだけで複数コンポーネントの更新順を統一するため。
"""

from __future__ import annotations

import time
from typing import Callable, Sequence

from .tickable import Tickable


class FrameClock:
    """登録された Tickable を固定順序で実行するだけの極小クラス。

    各 Tickable には経過時間 dt ではなく単調時刻 `now` を渡す。
    経過時間の導出（開始時刻の保持）は各 Tickable 側の責務。
    """

    def __init__(
        self,
        tickables: Sequence[Tickable],
        *,
        time_source: Callable[[], float] = time.perf_counter,
    ):
        self._tickables = tuple(tickables)
        self._time_source = time_source

    def now(self) -> float:
        return float(self._time_source())

    # GUI フレームワークから schedule_interval で呼ばせる（pyglet は dt を渡すが使わない）
    def tick(self, dt: float | None = None) -> None:
        now = self.now()
        for t in self._tickables:
            t.tick(now)
