"""
どこで: `common.base_registry`。
何を: 名前 → オブジェクトの登録表（キー正規化・登録順保持・重複検出）。
なぜ: シェイプのような拡張点を名前で引くとき、表記ゆれ（`FivePoint` / `five-point`）を吸収し、
      未登録名では候補つきの KeyError で即座に失敗させるため。
"""

from __future__ import annotations

import re
from typing import Any, Callable, Iterator

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def normalize_key(name: str) -> str:
    """`"FivePointStar"` / `"five-point-star"` / `" five_point_star "` を `"five_point_star"` にそろえる。"""
    if not isinstance(name, str):
        raise TypeError(f"レジストリキーは str である必要があります: got {type(name).__name__}")
    key = _CAMEL_BOUNDARY.sub("_", name.strip()).replace("-", "_").lower()
    if not key:
        raise ValueError("レジストリキーは空であってはなりません")
    return key


class BaseRegistry:
    """登録順を保つ名前付き登録表。"""

    def __init__(self, kind: str = "item") -> None:
        self._kind = kind
        self._entries: dict[str, Any] = {}

    def register(self, name: str | None = None) -> Callable[[Any], Any]:
        """`obj` を `name`（省略時は `obj.__name__`）で登録するデコレータを返す。

        同じキーに別オブジェクトを登録しようとすると ValueError。
        """

        def decorator(obj: Any) -> Any:
            key = normalize_key(name if name else obj.__name__)
            current = self._entries.get(key)
            if current is not None and current is not obj:
                raise ValueError(f"{self._kind} '{key}' は既に登録されています")
            self._entries[key] = obj
            return obj

        return decorator

    def get(self, name: str) -> Any:
        key = normalize_key(name)
        try:
            return self._entries[key]
        except KeyError:
            known = ", ".join(self._entries) or "(none)"
            raise KeyError(f"未登録の {self._kind} '{name}'（登録済み: {known}）") from None

    def list_all(self) -> list[str]:
        return list(self._entries)

    def is_registered(self, name: str) -> bool:
        try:
            return normalize_key(name) in self._entries
        except (TypeError, ValueError):
            return False

    def unregister(self, name: str) -> None:
        """登録を外す（未登録なら何もしない）。"""
        self._entries.pop(normalize_key(name), None)

    def clear(self) -> None:
        self._entries.clear()

    @property
    def registry(self) -> dict[str, Any]:
        """登録表の浅いコピー。"""
        return dict(self._entries)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.is_registered(name)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)
