"""
どこで: `common.env`
何を: `DLG_*` 環境変数を型付きで読むヘルパ（整数・真偽・文字列）。
なぜ: `common.settings` 以外で `os.getenv` を直接触らず、未設定/空文字/不正値の扱いを 1 か所にそろえるため。
"""

from __future__ import annotations

import os

_TRUE = frozenset({"1", "true", "t", "yes", "y", "on"})
_FALSE = frozenset({"0", "false", "f", "no", "n", "off"})


def env_str(name: str, default: str | None = None) -> str | None:
    """前後空白を除いた値を返す。未設定または空文字なら `default`。"""
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def env_int(
    name: str, default: int | None = None, *, min_value: int | None = None
) -> int | None:
    """整数を返す。未設定/不正値は `default`、`min_value` 指定時は下限に丸める。"""
    raw = env_str(name)
    if raw is None:
        return default
    try:
        val = int(raw)
    except ValueError:
        return default
    if min_value is not None and val < min_value:
        val = min_value
    return val


def env_bool(name: str, default: bool = False) -> bool:
    """真偽値を返す。

    `1/true/yes/on` と `0/false/no/off`（大文字小文字は無視）を受け付け、
    それ以外の数値は非 0 を真とみなす。解釈できない値は `default`。
    """
    raw = env_str(name)
    if raw is None:
        return bool(default)
    s = raw.lower()
    if s in _TRUE:
        return True
    if s in _FALSE:
        return False
    try:
        return float(s) != 0.0
    except ValueError:
        return bool(default)


__all__ = ["env_bool", "env_int", "env_str"]
