from __future__ import annotations

from pathlib import Path

import pytest

from engine.game import config as config_mod
from engine.game.config import GameConfig, load_game_config
from engine.game.cracks import CrackParams, load_crack_params
from util.utils import load_config


def test_defaults() -> None:
    cfg = GameConfig()
    assert cfg.band == 18.0
    assert cfg.deviation_radius == 9.0
    assert cfg.close_tolerance == 12.0
    assert cfg.crack_budget == 3
    assert cfg.time_limit == 60.0
    assert cfg.crack_debounce == 0.3
    assert cfg.trace_capacity == 2000
    assert cfg.crack_capacity == 200


def test_from_mapping_coerces_and_ignores_unknown() -> None:
    cfg = GameConfig.from_mapping({"band": "20", "crack_budget": 5.0, "colour": "red"})
    assert cfg.band == 20.0
    assert cfg.crack_budget == 5
    assert GameConfig.from_mapping(None) == GameConfig()


@pytest.mark.parametrize(
    "values",
    [
        {"band": 0},
        {"deviation_ratio": 1.5},
        {"crack_budget": 0},
        {"time_limit": -1},
        {"trace_capacity": 0},
        {"radius_ratio": 0.9},
        {"progress_max_step_ratio": 0},
        {"band": "wide"},
    ],
)
def test_invalid_values_raise(values: dict) -> None:
    with pytest.raises(ValueError):
        GameConfig.from_mapping(values)


def test_load_config_merges_root_override(tmp_path: Path) -> None:
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text(
        "game:\n  band: 18.0\nwindow:\n  fps: 60\n", encoding="utf-8"
    )
    (tmp_path / "config.yaml").write_text("game:\n  band: 24.0\n", encoding="utf-8")
    cfg = load_config(tmp_path)
    # トップレベル単位の上書き
    assert cfg["game"] == {"band": 24.0}
    assert cfg["window"] == {"fps": 60}


def test_load_config_is_fail_soft(tmp_path: Path) -> None:
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text("game: [unclosed\n", encoding="utf-8")
    assert load_config(tmp_path) == {}
    assert load_config(tmp_path / "missing") == {}


def test_load_game_config_reads_game_section(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config_mod, "load_config", lambda: {"game": {"time_limit": 30}})
    assert load_game_config().time_limit == 30.0
    monkeypatch.setattr(config_mod, "load_config", lambda: {"game": "oops"})
    assert load_game_config() == GameConfig()


def test_shipped_default_yaml_matches_dataclass_defaults() -> None:
    root = Path(__file__).resolve().parents[2]
    cfg = load_config(root)
    assert GameConfig.from_mapping(cfg.get("game")) == GameConfig()
    assert load_crack_params() == CrackParams()
