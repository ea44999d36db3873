"""
Enemy spawning: level-scaled cadence, random edge placement
"""

from __future__ import annotations

import logging

import numpy as np

from .config import GameConfig
from .entities import Enemy
from .state import RoundState
from .utils import hsl_to_rgb

logger = logging.getLogger(__name__)

# edge index -> name, clockwise from the top
EDGES = ("top", "right", "bottom", "left")


def spawn_interval_ms(level: int, config: GameConfig) -> float:
    """Delay until the next spawn: max(min, base - level * per_level)"""
    return max(
        config.spawn_interval_min_ms,
        config.spawn_interval_base_ms - level * config.spawn_interval_per_level_ms,
    )


def make_enemy(level: int, config: GameConfig, rng: np.random.Generator) -> Enemy:
    """Create an enemy just outside a random edge of the field"""
    side = int(rng.integers(4))
    margin = config.spawn_margin

    if side == 0:  # top
        x = rng.uniform(0.0, config.width)
        y = -margin
    elif side == 1:  # right
        x = config.width + margin
        y = rng.uniform(0.0, config.height)
    elif side == 2:  # bottom
        x = rng.uniform(0.0, config.width)
        y = config.height + margin
    else:  # left
        x = -margin
        y = rng.uniform(0.0, config.height)

    radius = rng.uniform(*config.enemy_radius_range)
    speed = (
        config.enemy_base_speed
        + level * config.enemy_speed_per_level
        + rng.uniform(0.0, config.enemy_speed_jitter)
    )
    hue = rng.uniform(*config.enemy_hue_range)
    color = hsl_to_rgb(hue, config.enemy_saturation, config.enemy_lightness)

    logger.debug("Spawning enemy on %s edge at (%.1f, %.1f) speed=%.2f", EDGES[side], x, y, speed)
    return Enemy(x=float(x), y=float(y), radius=float(radius), speed=float(speed), color=color)


def spawn_enemy(state: RoundState, config: GameConfig, rng: np.random.Generator) -> Enemy:
    enemy = make_enemy(state.level, config, rng)
    state.entities.enemies.append(enemy)
    return enemy
