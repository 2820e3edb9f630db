"""
どこで: `engine.core.geometry`。
何を: 描画へ渡す 2D ポリライン集合 `Geometry`（全頂点を 1 本の配列に詰め、区切りを offsets で持つ）。
なぜ: 参照パス・トレース・亀裂（複数本）を同じ表現にそろえ、レンダラ側の分岐をなくすため。

    # 線0 = 3 点、線1 = 2 点
    coords  = [[0,0], [1,0], [1,1], [2,2], [3,2]]   # float64 (N, 2)
    offsets = [0, 3, 5]                             # int32 (M+1,)、末尾は N

空ジオメトリは `coords.shape == (0, 2)`、`offsets == [0]`。
"""

from __future__ import annotations

from typing import Iterable, Iterator, Sequence

import numpy as np

LineLike = np.ndarray | Sequence[Sequence[float]]


class Geometry:
    __slots__ = ("coords", "offsets")

    coords: np.ndarray
    offsets: np.ndarray

    def __init__(self, coords: np.ndarray, offsets: np.ndarray) -> None:
        xy = np.ascontiguousarray(coords, dtype=np.float64)
        off = np.ascontiguousarray(offsets, dtype=np.int32)
        if xy.ndim != 2 or xy.shape[1] != 2:
            raise ValueError(f"coords は (N, 2) である必要があります: got {xy.shape}")
        if off.ndim != 1 or off.size == 0 or off[0] != 0 or off[-1] != xy.shape[0]:
            raise ValueError("offsets は 0 で始まり N で終わる 1 次元配列である必要があります")
        if np.any(np.diff(off) < 0):
            raise ValueError("offsets は単調非減少である必要があります")
        self.coords = xy
        self.offsets = off

    @classmethod
    def from_lines(cls, lines: Iterable[LineLike]) -> "Geometry":
        """点列の列から作る。各点列は `(K, 2)`（空は可）。"""
        arrays: list[np.ndarray] = []
        for line in lines:
            arr = np.asarray(line, dtype=np.float64)
            if arr.size == 0:
                arr = arr.reshape(0, 2)
            if arr.ndim != 2 or arr.shape[1] != 2:
                raise ValueError(f"点列は (K, 2) である必要があります: got {arr.shape}")
            arrays.append(arr)
        counts = [a.shape[0] for a in arrays]
        offsets = np.concatenate([[0], np.cumsum(counts, dtype=np.int64)])
        coords = np.concatenate(arrays, axis=0) if arrays else np.empty((0, 2))
        return cls(coords, offsets)

    @property
    def is_empty(self) -> bool:
        return self.coords.shape[0] == 0

    @property
    def n_lines(self) -> int:
        return int(self.offsets.size - 1)

    @property
    def n_vertices(self) -> int:
        return int(self.coords.shape[0])

    def lines(self) -> Iterator[np.ndarray]:
        """各ポリラインを `coords` のビューとして順に返す。"""
        for start, stop in zip(self.offsets[:-1], self.offsets[1:]):
            yield self.coords[start:stop]

    def __len__(self) -> int:
        return self.n_lines

    def __repr__(self) -> str:
        return f"Geometry(lines={self.n_lines}, vertices={self.n_vertices})"


__all__ = ["Geometry"]
