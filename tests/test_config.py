from __future__ import annotations

import dataclasses

import pytest

from game.arena.config import GAME_CONFIG, GameConfig


def test_defaults_match_dict_config() -> None:
    assert GameConfig.from_dict().to_dict() == GAME_CONFIG


def test_fields_have_no_defaults_of_their_own() -> None:
    # Every default comes from GAME_CONFIG through from_dict()
    with pytest.raises(TypeError):
        GameConfig()  # type: ignore[call-arg]
    assert {f.name for f in dataclasses.fields(GameConfig)} == set(GAME_CONFIG)


def test_overrides_are_applied() -> None:
    cfg = GameConfig.from_dict({"width": 800}, height=400)
    assert (cfg.width, cfg.height) == (800, 400)
    assert cfg.center == (400, 200)


def test_unknown_keys_are_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown game config keys"):
        GameConfig.from_dict({"widht": 800})


@pytest.mark.parametrize(
    "overrides",
    [
        {"width": 0},
        {"height": -10},
        {"step_ms": 0.0},
        {"max_ticks_per_frame": 0},
        {"points_per_level": 0},
        {"enemy_radius_range": (25.0, 15.0)},
    ],
)
def test_invalid_values_are_rejected(overrides: dict) -> None:
    with pytest.raises(ValueError):
        GameConfig.from_dict(overrides)
