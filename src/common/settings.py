"""
どこで: `common.settings`
何を: プロジェクトの環境変数を型付きで一元管理し、起動時に読み込む。
なぜ: `os.getenv` の散在を解消し、既定値/型の一貫性とテスト容易性を高めるため。

ゲームの調整値（帯幅・許容差など）は `configs/default.yaml` 側（`engine.game.config`）で扱い、
ここにはプロセス単位のスイッチだけを置く。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_int, env_str


@dataclass
class _Settings:
    # 幾何カーネル
    USE_NUMBA: bool = True

    # ロギング
    LOG_LEVEL: str = "INFO"

    # 永続化（None でプロジェクトルート直下の data/）
    DATA_DIR: str | None = None

    # tick レートの上書き（None で configs の window.fps）
    FPS: int | None = None


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - `DLG_USE_NUMBA`: 0/false で最近傍探索を純 Python 実装に切り替える。
    - `DLG_LOG_LEVEL`: `setup_default_logging` の既定レベル。
    - `DLG_DATA_DIR`: ベストスコア等の保存先ディレクトリ。
    - `DLG_FPS`: tick レート（1 以上）。
    """
    _settings.USE_NUMBA = env_bool("DLG_USE_NUMBA", True)
    _settings.LOG_LEVEL = (env_str("DLG_LOG_LEVEL", "INFO") or "INFO").upper()
    _settings.DATA_DIR = env_str("DLG_DATA_DIR", None)
    _settings.FPS = env_int("DLG_FPS", None, min_value=1)


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
