"""
どこで: `shapes` パッケージ（関数登録）。
何を: ビルトインのパス形状（circle/triangle/star）を import 副作用で登録し、`shapes.path` から解決できるようにする。
なぜ: 参照パス生成の拡張点を一箇所に集約するため。
"""

# 関数版 shape 定義を import して登録（副作用）
from . import circle as _register_circle  # noqa: F401
from . import star as _register_star  # noqa: F401
from . import triangle as _register_triangle  # noqa: F401
from .densify import densify
from .path import SHAPE_ORDER, ShapeKind, generate_path, next_shape
from .registry import get_shape, is_shape_registered, list_shapes, shape  # re-export

__all__ = [
    "shape",
    "get_shape",
    "list_shapes",
    "is_shape_registered",
    "densify",
    "generate_path",
    "next_shape",
    "SHAPE_ORDER",
    "ShapeKind",
]
