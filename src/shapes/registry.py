"""
どこで: `shapes.registry`。
何を: 参照パス生成関数の登録表と `@shape` デコレータ。
なぜ: `shapes.path.generate_path` がシェイプ名だけで生成関数を解決できるようにするため。

登録できるのは `(center, radius, **params) -> ndarray (N, 2)` を返す関数のみ。

    @shape
    def circle(center, radius, *, segments=200): ...

    @shape("hexagon")
    def _hex(center, radius): ...
"""

from __future__ import annotations

import inspect
from typing import Any, Callable, Mapping

from common.base_registry import BaseRegistry

ShapeFn = Callable[..., Any]

_shapes = BaseRegistry("shape")


def _register(fn: Any, name: str | None) -> ShapeFn:
    if not inspect.isfunction(fn):
        raise TypeError(f"@shape は関数のみ登録可能です: got {fn!r}")
    return _shapes.register(name)(fn)


def shape(arg: Any = None, /, name: str | None = None) -> Any:
    """`@shape` / `@shape("name")` / `@shape(name="name")` の 3 形式を受け付ける。"""
    if isinstance(arg, str):
        return lambda fn: _register(fn, arg)
    if arg is not None:
        return _register(arg, name)
    return lambda fn: _register(fn, name)


def get_shape(name: str) -> ShapeFn:
    """生成関数を返す（未登録は KeyError）。"""
    return _shapes.get(name)


def list_shapes() -> list[str]:
    return _shapes.list_all()


def is_shape_registered(name: str) -> bool:
    return _shapes.is_registered(name)


def unregister(name: str) -> None:
    _shapes.unregister(name)


def get_registry() -> Mapping[str, Any]:
    """登録表のコピー（変更しても登録には影響しない）。"""
    return _shapes.registry


__all__ = [
    "shape",
    "get_shape",
    "list_shapes",
    "is_shape_registered",
    "unregister",
    "get_registry",
]
