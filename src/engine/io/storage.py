"""
どこで: `engine.io.storage`。
何を: ベストスコア（整数）・プレイヤー表示名・保存同意フラグを読み書きする ScoreStore 実装。
なぜ: ゲーム中核は採点結果を上位へ渡すだけにし、保存媒体（メモリ/JSON ファイル）を差し替え可能にするため。

規則:
- ベストスコアは `record_score` で上回った場合のみ更新する。
- プレイヤー名は前後空白を除いて 20 文字に切り詰め、同意が True のときだけ保存する。
- 同意フラグは未回答を `None` で表す。
- JSON ファイルが読めない/壊れている場合は warning を出して空として扱う（フェイルソフト）。
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 20


def normalize_player_name(name: str | None) -> str | None:
    """前後空白を除去して最大 20 文字に切り詰める（空なら None）。"""
    if name is None:
        return None
    s = str(name).strip()[:MAX_NAME_LENGTH]
    return s or None


class ScoreStore(Protocol):
    def best_score(self) -> int: ...

    def record_score(self, score: int) -> bool: ...

    def consent(self) -> bool | None: ...

    def set_consent(self, accepted: bool, *, pending_name: str | None = None) -> None: ...

    def player_name(self) -> str | None: ...

    def save_player_name(self, name: str) -> str | None: ...


class MemoryScoreStore:
    """プロセス内メモリに保持する ScoreStore。サブクラスは `_flush` で永続化する。"""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = {"best_score": 0, "consent": None, "player": None}
        if data:
            self._data.update(_sanitize(data))

    # ---- スコア ----
    def best_score(self) -> int:
        return int(self._data["best_score"])

    def record_score(self, score: int) -> bool:
        """ベストを上回れば更新して True。"""
        score = int(score)
        if score <= self.best_score():
            return False
        self._data["best_score"] = score
        logger.info("new best score: %d", score)
        self._flush()
        return True

    # ---- 同意/名前 ----
    def consent(self) -> bool | None:
        return self._data["consent"]

    def set_consent(self, accepted: bool, *, pending_name: str | None = None) -> None:
        """同意を記録する。承諾時に入力中の名前があれば併せて保存する。"""
        self._data["consent"] = bool(accepted)
        if accepted:
            name = normalize_player_name(pending_name)
            if name is not None:
                self._data["player"] = name
        self._flush()

    def player_name(self) -> str | None:
        """同意済みの場合のみ保存名を返す。"""
        if self._data["consent"] is not True:
            return None
        return self._data["player"]

    def save_player_name(self, name: str) -> str | None:
        """名前を保存する。保存した正規化名を返す（空/未同意なら None）。"""
        norm = normalize_player_name(name)
        if norm is None or self._data["consent"] is not True:
            return None
        self._data["player"] = norm
        self._flush()
        return norm

    def as_dict(self) -> dict[str, Any]:
        return dict(self._data)

    def _flush(self) -> None:
        pass


class JsonScoreStore(MemoryScoreStore):
    """1 つの JSON ファイルに保存する ScoreStore。"""

    FILE_NAME = "scores.json"

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        super().__init__(self._load())

    @classmethod
    def default(cls) -> "JsonScoreStore":
        """`util.paths.ensure_data_dir()` 直下の `scores.json` を使う。"""
        from util.paths import ensure_data_dir

        return cls(ensure_data_dir() / cls.FILE_NAME)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("score store unreadable, starting empty: %s (%s)", self._path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("score store is not an object, starting empty: %s", self._path)
            return {}
        return data

    def _flush(self) -> None:
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with tmp.open("w", encoding="utf-8") as f:
                json.dump(self.as_dict(), f, ensure_ascii=False, indent=2)
            os.replace(tmp, self._path)
        except OSError as e:
            logger.warning("score store write failed: %s (%s)", self._path, e)


def _sanitize(data: dict[str, Any]) -> dict[str, Any]:
    """外部由来の辞書から既知キーだけを型を整えて取り出す。"""
    out: dict[str, Any] = {}
    try:
        out["best_score"] = max(0, int(data.get("best_score", 0)))
    except (TypeError, ValueError):
        out["best_score"] = 0
    consent = data.get("consent")
    out["consent"] = consent if isinstance(consent, bool) else None
    player = data.get("player")
    out["player"] = normalize_player_name(player) if isinstance(player, str) else None
    return out


__all__ = [
    "MAX_NAME_LENGTH",
    "normalize_player_name",
    "ScoreStore",
    "MemoryScoreStore",
    "JsonScoreStore",
]
