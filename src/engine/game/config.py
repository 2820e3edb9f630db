"""
どこで: `engine.game.config`。
何を: ゲームの調整値（帯幅・許容差・亀裂予算・制限時間・容量・採点重み）を定義し、YAML から読み込む。
なぜ: 経験的に決めた定数をコードに直書きせず、`configs/default.yaml` / `config.yaml` で差し替え可能にするため。
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Mapping, TypeVar

from util.utils import load_config

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


def coerce_dataclass(cls: type[_T], values: Mapping[str, Any] | None) -> _T:
    """`values` のうち `cls` のフィールド名に一致するキーだけを型変換して `cls(...)` を作る。

    - 未知キーは無視（debug ログのみ）。
    - 既定値がタプルのフィールドは要素ごとに既定値側の型へ変換する。
    - 変換不能な値は ValueError。
    """
    if not values:
        return cls()
    fields = {f.name: f for f in dataclasses.fields(cls)}  # type: ignore[arg-type]
    kwargs: dict[str, Any] = {}
    for key, raw in values.items():
        f = fields.get(str(key))
        if f is None:
            logger.debug("unknown %s key ignored: %s", cls.__name__, key)
            continue
        default = f.default
        try:
            if isinstance(default, tuple):
                kwargs[f.name] = tuple(type(d)(v) for d, v in zip(default, raw, strict=True))
            elif isinstance(default, bool):
                kwargs[f.name] = bool(raw)
            else:
                kwargs[f.name] = type(default)(raw)
        except (TypeError, ValueError) as e:
            raise ValueError(f"{cls.__name__}.{f.name} の値が不正です: {raw!r}") from e
    return cls(**kwargs)


@dataclass(frozen=True)
class GameConfig:
    """ゲーム規則の調整値。

    Parameters
    ----------
    band : float
        描画される許容帯の太さ（px）。開始判定の「始点からの距離」はこの値で比較する。
    deviation_ratio : float
        逸脱判定の半径 = `band * deviation_ratio`（既定 0.5 → 9px）。
    close_tolerance : float
        周回完了とみなす残り弧長（px）。
    crack_budget : int
        失敗となる亀裂数。
    time_limit : float
        制限時間（秒）。
    crack_debounce : float
        亀裂カウントの最小間隔（秒）。
    trace_min_step : float
        トレースへ追加する最小移動距離（px）。
    trace_capacity : int
        トレースの最大点数（古い順に破棄）。
    crack_capacity : int
        保持する亀裂ポリラインの最大本数（古い順に破棄）。
    radius_ratio : float
        参照パスの公称半径 = キャンバス短辺 × この比率。
    progress_max_step_ratio : float
        継ぎ目判定の幅（全長比）。始点からこの範囲内にいる間、終端側のこの範囲への跳びは進捗に数えない。
    score_time_weight, score_accuracy_weight : float
        採点式の重み（残り時間 1 秒あたり / 正確さ 1.0 あたり）。
    """

    band: float = 18.0
    deviation_ratio: float = 0.5
    close_tolerance: float = 12.0
    crack_budget: int = 3
    time_limit: float = 60.0
    crack_debounce: float = 0.3
    trace_min_step: float = 2.0
    trace_capacity: int = 2000
    crack_capacity: int = 200
    radius_ratio: float = 0.35
    progress_max_step_ratio: float = 0.25
    score_time_weight: float = 20.0
    score_accuracy_weight: float = 800.0

    def __post_init__(self) -> None:
        if self.band <= 0.0:
            raise ValueError("band は正である必要があります")
        if not 0.0 < self.deviation_ratio <= 1.0:
            raise ValueError("deviation_ratio は (0, 1] である必要があります")
        if self.close_tolerance < 0.0:
            raise ValueError("close_tolerance は 0 以上である必要があります")
        if self.crack_budget < 1:
            raise ValueError("crack_budget は 1 以上である必要があります")
        if self.time_limit <= 0.0:
            raise ValueError("time_limit は正である必要があります")
        if self.crack_debounce < 0.0:
            raise ValueError("crack_debounce は 0 以上である必要があります")
        if self.trace_capacity < 1 or self.crack_capacity < 1:
            raise ValueError("trace_capacity / crack_capacity は 1 以上である必要があります")
        if not 0.0 < self.radius_ratio <= 0.5:
            raise ValueError("radius_ratio は (0, 0.5] である必要があります")
        if not 0.0 < self.progress_max_step_ratio < 0.5:
            raise ValueError("progress_max_step_ratio は (0, 0.5) である必要があります")

    @property
    def deviation_radius(self) -> float:
        """逸脱判定の半径（帯の半分）。"""
        return self.band * self.deviation_ratio

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any] | None) -> "GameConfig":
        return coerce_dataclass(cls, values)


def load_game_config() -> GameConfig:
    """`configs/default.yaml`（+ `config.yaml`）の `game:` セクションから GameConfig を作る。"""
    section = load_config().get("game", {})
    if not isinstance(section, Mapping):
        logger.warning("config 'game' section is not a mapping; using defaults")
        section = {}
    return GameConfig.from_mapping(section)


__all__ = ["GameConfig", "coerce_dataclass", "load_game_config"]
