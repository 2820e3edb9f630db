"""
どこで: `common.logging`。
何を: ランナー起動時に 1 度だけ適用する最小ロギング設定。
なぜ: 各モジュールは `logging.getLogger(__name__)` で記録するだけにし、出力先/書式の決定をアプリ入口に寄せるため。

レベルは引数 → `common.settings` の `LOG_LEVEL`（環境変数 `DLG_LOG_LEVEL`）の順で決める。
"""

from __future__ import annotations

import logging

from . import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        level = settings.get().LOG_LEVEL
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_default_logging(level: int | str | None = None) -> None:
    """ルートロガーにハンドラが無いときだけ `basicConfig` を適用する。

    既にアプリ（や pytest）が設定していれば何もしない。
    """
    if logging.getLogger().handlers:
        return
    logging.basicConfig(level=_resolve_level(level), format=LOG_FORMAT)


__all__ = ["setup_default_logging", "LOG_FORMAT"]
