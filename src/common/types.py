"""
どこで: `common` の型定義。
何を: Vec2/RGBA などの軽量エイリアス（組込みジェネリックで記述）。
なぜ: 依存の少ない場所に配置して循環と分散定義を避けるため。
"""

# キャンバス論理ピクセル座標（x 右向き, y 下向き）
Vec2 = tuple[float, float]
# 色 RGBA（0..255）
RGBA = tuple[int, int, int, int]


__all__ = ["Vec2", "RGBA"]
