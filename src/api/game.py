"""
どこで: `api.game`（実行ランナー）。
何を: ウィンドウ・状態機械・レンダラ・スコア保存を結線し、pyglet のイベントループでゲームを動かす。
なぜ: 外部コラボレータ（描画/入力/tick/永続化）をゲーム中核へ最小の配線で接続するため。

実行フロー（概要）:
1) ロギング初期化（`common.logging.setup_default_logging`）と GameConfig の解決。
2) `GameMachine` と `JsonScoreStore` を生成し、終了通知でベストスコアを更新する。
3) `RenderWindow` を作り、`PygletRenderer` の描画を `on_draw` に登録する。
4) `FrameClock([machine])` を `pyglet.clock.schedule_interval` で駆動する。
5) マウスイベントを `PointerSample`（y 反転済み、単調時刻つき）へ変換して `machine.handle` に渡す。

キー操作:
- N: 新しいゲーム（playing で待機し、緑の始点付近を掴むとタイマー開始）
- S: 次のシェイプ（circle → triangle → star → circle）
- TAB: 名前入力の開始（ENTER で確定、BACKSPACE で 1 文字削除、ESC で取り消し）
- Y / D: 保存同意バナーへの回答（未回答の間だけ有効）
- ESC: 終了

`DLG_FPS` を設定すると `fps` 引数より優先する（`resolve_fps`）。

注意/制限:
- ヘッドレス環境では `pyglet` のウィンドウ生成に失敗する場合がある。`init_only=True` で結線のみ検証できる。
"""

from __future__ import annotations

import logging

from common import settings
from common.logging import setup_default_logging
from common.types import Vec2
from engine.game.config import GameConfig, load_game_config
from engine.game.cracks import CrackGenerator, load_crack_params
from engine.game.input import PointerPhase, PointerSample
from engine.game.machine import GameMachine, GameResult
from engine.io.profile import ProfileEditor
from engine.io.storage import JsonScoreStore, ScoreStore

logger = logging.getLogger(__name__)


def create_game(
    *,
    shape: str = "circle",
    canvas_size: Vec2 = (800, 600),
    config: GameConfig | None = None,
    store: ScoreStore | None = None,
) -> tuple[GameMachine, ScoreStore]:
    """状態機械とスコア保存先を生成し、終了時のベストスコア更新を結線する。"""
    cfg = config or load_game_config()
    cracker = CrackGenerator(canvas_size, params=load_crack_params())
    machine = GameMachine(shape, canvas_size, config=cfg, crack_generator=cracker)
    score_store: ScoreStore = store if store is not None else JsonScoreStore.default()

    def _on_finish(result: GameResult) -> None:
        if score_store.record_score(result.score):
            logger.info("best score updated: %d", result.score)

    machine.on_finish(_on_finish)
    return machine, score_store


def resolve_fps(fps: int) -> int:
    """tick レートを決める。`DLG_FPS` があればそれを、なければ `fps`（1 以上）を使う。"""
    override = settings.get().FPS
    if override is not None:
        return override
    return max(1, int(fps))


def run_game(
    *,
    shape: str = "circle",
    canvas_size: tuple[int, int] = (800, 600),
    config: GameConfig | None = None,
    store: ScoreStore | None = None,
    fps: int = 60,
    init_only: bool = False,
) -> GameMachine:
    """ウィンドウを開いてゲームを実行する（ウィンドウが閉じるまで戻らない）。

    Parameters
    ----------
    shape : str, default "circle"
        初期シェイプ名。
    canvas_size : tuple[int, int], default (800, 600)
        キャンバス＝ウィンドウの論理ピクセル寸法。
    config : GameConfig | None
        調整値。None で `configs/default.yaml` から解決。
    store : ScoreStore | None
        保存先。None で `data/scores.json`。
    fps : int, default 60
        tick レート。1 以上にクランプ（`DLG_FPS` が優先）。
    init_only : bool, default False
        True で GUI を作らず、結線済みの状態機械を返す。
    """
    setup_default_logging()
    machine, score_store = create_game(
        shape=shape, canvas_size=canvas_size, config=config, store=store
    )
    if init_only:
        return machine

    # 遅延インポート（ヘッドレス環境でのウィンドウ生成を避ける）
    import pyglet
    from pyglet.window import key, mouse

    from engine.core.frame_clock import FrameClock
    from engine.core.render_window import RenderWindow
    from engine.render.frame import build_frame
    from engine.render.renderer import PygletRenderer

    width, height = int(canvas_size[0]), int(canvas_size[1])
    window = RenderWindow(width, height)
    renderer = PygletRenderer((width, height))
    clock = FrameClock([machine])
    profile = ProfileEditor(score_store)

    def _draw() -> None:
        renderer.draw(
            build_frame(
                machine.session,
                best=score_store.best_score(),
                player=profile.display_name(),
                editing_name=profile.editing,
                banner=profile.banner(),
            )
        )

    window.add_draw_callback(_draw)

    def _sample(x: int, y: int, phase: PointerPhase) -> PointerSample:
        # pyglet は y 上向き。キャンバス座標（y 下向き）へ写す
        return PointerSample(float(x), float(height - y), phase, clock.now())

    @window.event
    def on_mouse_press(x, y, button, modifiers):  # type: ignore[no-untyped-def]
        if button & mouse.LEFT:
            machine.handle(_sample(x, y, PointerPhase.DOWN))

    @window.event
    def on_mouse_drag(x, y, dx, dy, buttons, modifiers):  # type: ignore[no-untyped-def]
        if buttons & mouse.LEFT:
            machine.handle(_sample(x, y, PointerPhase.MOVE))

    @window.event
    def on_mouse_motion(x, y, dx, dy):  # type: ignore[no-untyped-def]
        machine.handle(_sample(x, y, PointerPhase.MOVE))

    @window.event
    def on_mouse_release(x, y, button, modifiers):  # type: ignore[no-untyped-def]
        if button & mouse.LEFT:
            machine.handle(_sample(x, y, PointerPhase.UP))

    @window.event
    def on_mouse_leave(x, y):  # type: ignore[no-untyped-def]
        machine.handle(_sample(x, y, PointerPhase.UP))

    @window.event
    def on_key_press(symbol, modifiers):  # type: ignore[no-untyped-def]
        if profile.editing:
            # 入力中は N/S/ESC をゲーム操作として扱わない
            if symbol == key.ENTER:
                profile.commit()
            elif symbol == key.BACKSPACE:
                profile.backspace()
            elif symbol == key.ESCAPE:
                profile.cancel()
            return pyglet.event.EVENT_HANDLED
        if symbol == key.ESCAPE:
            window.close()
            return pyglet.event.EVENT_HANDLED
        if symbol == key.N:
            machine.new_game()
        elif symbol == key.S:
            machine.next_shape()
        elif symbol == key.TAB:
            profile.begin_edit()
        elif profile.needs_consent and symbol == key.Y:
            profile.accept()
        elif profile.needs_consent and symbol == key.D:
            profile.decline()
        return None

    @window.event
    def on_text(text):  # type: ignore[no-untyped-def]
        profile.type_text(text)

    pyglet.clock.schedule_interval(clock.tick, 1.0 / resolve_fps(fps))
    logger.info("window opened: %dx%d shape=%s", width, height, machine.session.shape)
    pyglet.app.run()
    pyglet.clock.unschedule(clock.tick)
    return machine


__all__ = ["create_game", "resolve_fps", "run_game"]
