"""共通フィクスチャ。

- 乱数源（シード固定の `np.random.Generator`）
- 既定キャンバスと小さなポリライン試料
- 環境変数由来の設定を各テスト後に戻す
"""

from __future__ import annotations

from typing import Iterator

import numpy as np
import pytest

from common import settings
from engine.game.config import GameConfig


@pytest.fixture()
def rng() -> np.random.Generator:
    """亀裂生成用のシード固定乱数。"""
    return np.random.default_rng(12345)


@pytest.fixture()
def canvas() -> tuple[float, float]:
    return (800.0, 600.0)


@pytest.fixture()
def config() -> GameConfig:
    return GameConfig()


@pytest.fixture()
def square_path() -> np.ndarray:
    # 1 辺 100 の正方形（閉路、全長 400）
    return np.array(
        [[0.0, 0.0], [100.0, 0.0], [100.0, 100.0], [0.0, 100.0], [0.0, 0.0]],
        dtype=np.float64,
    )


@pytest.fixture()
def l_path() -> np.ndarray:
    # L 字の開いたポリライン（全長 20）
    return np.array([[0.0, 0.0], [10.0, 0.0], [10.0, 10.0]], dtype=np.float64)


@pytest.fixture(autouse=True)
def restore_settings() -> Iterator[None]:
    """テスト中に monkeypatch した環境変数を設定スナップショットへ反映し直す。"""
    yield
    settings.reload_from_env()
