"""
Dalgona Tracer ランチャー。

    python main.py            # configs/default.yaml の window: に従って起動
    DLG_LOG_LEVEL=DEBUG python main.py

`src/` を import パスに追加してから `api.run` を呼ぶ（`pip install -e .` 済みなら不要）。
"""

from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

from api import run  # noqa: E402
from util.utils import load_config  # noqa: E402


def main() -> None:
    window = load_config().get("window", {}) or {}
    run(
        shape=str(window.get("shape", "circle")),
        canvas_size=(int(window.get("width", 800)), int(window.get("height", 600))),
        fps=int(window.get("fps", 60)),
    )


if __name__ == "__main__":
    main()
