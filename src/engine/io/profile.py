"""
どこで: `engine.io.profile`。
何を: 保存同意の回答とプレイヤー表示名の入力を扱う小さな編集器（キー入力 → ScoreStore）。
なぜ: ランナーのキーハンドラを薄く保ち、同意バナーと名前入力の規則をウィンドウなしで検証できるようにするため。

規則:
- 同意が未回答（`None`）の間はバナーを出す。承諾すると入力中の名前も保存する。
- 名前は 20 文字まで（印字可能文字のみ）。確定時は同意済みのときだけ保存し、未同意なら入力値を保持するだけ。
- 編集中のキャンセルは直前の表示名へ戻す。
"""

from __future__ import annotations

import logging

from .storage import MAX_NAME_LENGTH, ScoreStore

logger = logging.getLogger(__name__)

CONSENT_PROMPT = "Save your name on this device? [Y] yes / [D] no"


class ProfileEditor:
    def __init__(self, store: ScoreStore) -> None:
        self._store = store
        self._pending = store.player_name() or ""
        self._before = self._pending
        self._editing = False

    @property
    def editing(self) -> bool:
        return self._editing

    @property
    def needs_consent(self) -> bool:
        return self._store.consent() is None

    @property
    def pending_name(self) -> str:
        return self._pending

    def display_name(self) -> str | None:
        """HUD 表示名。編集中は入力中の文字列、それ以外は保存名（なければ入力値）。"""
        if self._editing:
            return self._pending
        return self._store.player_name() or self._pending or None

    def banner(self) -> str | None:
        if self.needs_consent and not self._editing:
            return CONSENT_PROMPT
        return None

    # ---- 同意 ----
    def accept(self) -> None:
        self._store.set_consent(True, pending_name=self._pending)
        logger.info("consent accepted")

    def decline(self) -> None:
        self._store.set_consent(False)
        logger.info("consent declined")

    # ---- 名前入力 ----
    def begin_edit(self) -> None:
        self._before = self._pending
        self._editing = True

    def type_text(self, text: str) -> None:
        if not self._editing:
            return
        chars = "".join(c for c in text if c.isprintable())
        self._pending = (self._pending + chars)[:MAX_NAME_LENGTH]

    def backspace(self) -> None:
        if self._editing:
            self._pending = self._pending[:-1]

    def commit(self) -> str | None:
        """編集を確定する。保存した正規化名を返す（未同意/空なら None）。"""
        self._editing = False
        self._pending = self._pending.strip()
        saved = self._store.save_player_name(self._pending)
        if saved is not None:
            logger.info("player name saved: %s", saved)
        return saved

    def cancel(self) -> None:
        self._pending = self._before
        self._editing = False


__all__ = ["CONSENT_PROMPT", "ProfileEditor"]
