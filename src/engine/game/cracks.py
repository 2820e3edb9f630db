"""
どこで: `engine.game.cracks`（CrackGenerator）。
何を: 逸脱点から放射状に伸びる、枝分かれしたギザギザの亀裂ポリラインを確率的に生成する。
なぜ: 逸脱イベントを視覚的に示すため。見た目専用で、採点には本数ではなく呼び出し側のカウントだけが効く。

生成規則（1 回の呼び出し）:
- 枝数は [1, 3] の一様整数。
- 各枝: 基準角 = atan2(p - 中心) + U(-0.6, 0.6)、セグメント数は [8, 13] の一様整数、初期歩幅 U(8, 18)。
- 各セグメント: 角度 += U(-0.3, 0.3)、歩幅 *= U(0.95, 1.05)、次点 = 直前点 + (cos, sin) × 歩幅。
  各座標はキャンバス範囲にクランプする。
- 次点がキャンバス端から `edge_margin` 以内に入ったら（その点を含めて）枝の成長を打ち切る。

乱数源は `numpy.random.Generator` を注入できる。既定はシードなしの `default_rng()`（実行ごとに非決定）。
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Mapping

import numpy as np

from common.param_utils import clamp
from common.types import Vec2
from util.utils import load_config

from .config import coerce_dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CrackParams:
    """亀裂生成の乱数レンジ（閉区間）。"""

    branches: tuple[int, int] = (1, 3)
    angle_jitter: float = 0.6
    segments: tuple[int, int] = (8, 13)
    step: tuple[float, float] = (8.0, 18.0)
    turn_jitter: float = 0.3
    step_scale: tuple[float, float] = (0.95, 1.05)
    edge_margin: float = 2.0

    def __post_init__(self) -> None:
        for name in ("branches", "segments", "step", "step_scale"):
            lo, hi = getattr(self, name)
            if lo > hi:
                raise ValueError(f"CrackParams.{name} は (下限, 上限) の順で指定してください")
        if self.branches[0] < 1 or self.segments[0] < 1:
            raise ValueError("branches / segments の下限は 1 以上である必要があります")

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any] | None) -> "CrackParams":
        return coerce_dataclass(cls, values)


def load_crack_params() -> CrackParams:
    """`configs/default.yaml`（+ `config.yaml`）の `cracks:` セクションから CrackParams を作る。"""
    section = load_config().get("cracks", {})
    if not isinstance(section, Mapping):
        logger.warning("config 'cracks' section is not a mapping; using defaults")
        section = {}
    return CrackParams.from_mapping(section)


class CrackGenerator:
    """キャンバス範囲に収まる亀裂ポリラインを生成する。"""

    def __init__(
        self,
        canvas_size: Vec2,
        *,
        params: CrackParams | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        w, h = canvas_size
        if not (float(w) > 0.0 and float(h) > 0.0):
            raise ValueError(f"キャンバス寸法は正である必要があります: got {canvas_size}")
        self._width = float(w)
        self._height = float(h)
        self._params = params or CrackParams()
        self._rng = rng if rng is not None else np.random.default_rng()

    @property
    def params(self) -> CrackParams:
        return self._params

    def generate(self, p: Vec2) -> list[np.ndarray]:
        """逸脱点 `p` を根元とする 1〜3 本の枝を返す（各 `float64 (K, 2)`、K >= 2）。"""
        prm = self._params
        rng = self._rng
        x0 = clamp(float(p[0]), 0.0, self._width)
        y0 = clamp(float(p[1]), 0.0, self._height)
        cx, cy = self._width / 2.0, self._height / 2.0
        radial = math.atan2(y0 - cy, x0 - cx)

        n_branches = int(rng.integers(prm.branches[0], prm.branches[1] + 1))
        out: list[np.ndarray] = []
        for _ in range(n_branches):
            angle = radial + float(rng.uniform(-prm.angle_jitter, prm.angle_jitter))
            n_segs = int(rng.integers(prm.segments[0], prm.segments[1] + 1))
            step = float(rng.uniform(prm.step[0], prm.step[1]))
            out.append(self._grow(x0, y0, angle, step, n_segs))
        logger.debug("cracks generated: branches=%d at (%.1f, %.1f)", n_branches, x0, y0)
        return out

    def _grow(self, x: float, y: float, angle: float, step: float, n_segs: int) -> np.ndarray:
        prm = self._params
        rng = self._rng
        w, h, m = self._width, self._height, prm.edge_margin
        pts = [(x, y)]
        for _ in range(n_segs):
            angle += float(rng.uniform(-prm.turn_jitter, prm.turn_jitter))
            step *= float(rng.uniform(prm.step_scale[0], prm.step_scale[1]))
            x = clamp(x + math.cos(angle) * step, 0.0, w)
            y = clamp(y + math.sin(angle) * step, 0.0, h)
            pts.append((x, y))
            # 端に近づいたら打ち切り
            if x <= m or y <= m or x >= w - m or y >= h - m:
                break
        return np.asarray(pts, dtype=np.float64)


__all__ = ["CrackParams", "CrackGenerator", "load_crack_params"]
