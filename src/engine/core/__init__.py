"""
どこで: `engine.core` サブパッケージ。
何を: ポリライン幾何・Geometry・フレーム駆動（Tickable/FrameClock）・描画ウィンドウを提供。
なぜ: 計算と描画の基盤を構成し、上位層（game/render/api）から再利用可能にするため。
"""
