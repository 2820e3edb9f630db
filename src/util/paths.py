"""
どこで: `util.paths`。
何を: 永続化データ（ベストスコア・プレイヤー名・同意フラグ）の保存先ディレクトリを解決する。
なぜ: ランタイムから簡潔に保存先を扱え、並行呼び出しでも安全に作成できるようにするため。
"""

from __future__ import annotations

from pathlib import Path

from common import settings

from .utils import _find_project_root


def ensure_data_dir() -> Path:
    """保存先ディレクトリを作成して返す。

    - `DLG_DATA_DIR` が設定されていればそれを使う。
    - 未設定時はプロジェクトルート直下の `data/` を使う。
    - 既存の場合もそのまま Path を返す（`exist_ok=True`）。
    """
    override = settings.get().DATA_DIR
    if override:
        out = Path(override).expanduser()
    else:
        out = _find_project_root(Path(__file__).parent) / "data"
    out.mkdir(parents=True, exist_ok=True)
    return out
