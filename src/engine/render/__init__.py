"""
どこで: `engine.render` サブパッケージ。
何を: GameSession → 描画フレーム（RenderFrame/Layer）への変換と、pyglet によるフレーム描画。
なぜ: ゲーム中核は点列を渡すだけにし、描画の責務と GUI 依存をこの層に閉じ込めるため。
"""
