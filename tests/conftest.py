from __future__ import annotations

import numpy as np
import pytest

from game.arena.config import GameConfig
from game.arena.entities import Enemy
from game.arena.frame_driver import Game
from game.arena.state import RoundState


@pytest.fixture()
def config() -> GameConfig:
    # Whole-number step keeps the simulated clock exact
    return GameConfig.from_dict(step_ms=100.0)


@pytest.fixture()
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture()
def state(config: GameConfig) -> RoundState:
    return RoundState.new(config)


@pytest.fixture()
def game(config: GameConfig, rng: np.random.Generator) -> Game:
    g = Game(config, rng=rng)
    g.start()
    return g


def make_enemy(x: float, y: float, radius: float = 15.0, speed: float = 0.0) -> Enemy:
    return Enemy(x=x, y=y, radius=radius, speed=speed, color=(200, 60, 40))
