"""
どこで: `util.utils`。
何を: プロジェクトルートの推定と YAML 構成（`configs/default.yaml` → ルート `config.yaml`）の読込。
なぜ: ゲーム調整値をコードから切り離し、ユーザが上書きファイル 1 枚で挙動を変えられるようにするため。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

import yaml

logger = logging.getLogger(__name__)

# 後ろほど優先（トップレベルのキー単位で上書き）
CONFIG_FILES = (Path("configs") / "default.yaml", Path("config.yaml"))

_ROOT_MARKERS = ("pyproject.toml", "configs", ".git")


def _safe_load_yaml(path: Path) -> Dict[str, Any]:
    """YAML を辞書として読む。読めない/壊れている/辞書でない場合は warning を出して空辞書。"""
    try:
        text = path.read_text(encoding="utf-8")
        data = yaml.safe_load(text)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("config load failed: %s (%s)", path, e)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("config ignored (top level is not a mapping): %s", path)
        return {}
    return data


def _find_project_root(start: Path) -> Path:
    """`start` から上へたどり、`pyproject.toml` / `configs/` / `.git` のいずれかを持つ最初のディレクトリ。

    見つからなければ `<start>/../..`（`src/util/` から見たリポジトリ直下）を返す。
    """
    here = start.resolve()
    for cand in (here, *here.parents):
        if any((cand / marker).exists() for marker in _ROOT_MARKERS):
            return cand
    return here.parent.parent


def load_config(root: Path | None = None) -> Dict[str, Any]:
    """構成を読み込んで 1 つの辞書にまとめる（フェイルソフト）。

    - `CONFIG_FILES` を順に読み、トップレベルのキー単位で後勝ちにする（ネストは混ぜない）。
    - どのファイルも無ければ空辞書。
    """
    base_dir = root if root is not None else _find_project_root(Path(__file__).parent)
    merged: Dict[str, Any] = {}
    for rel in CONFIG_FILES:
        path = base_dir / rel
        if path.is_file():
            merged.update(_safe_load_yaml(path))
    return merged
