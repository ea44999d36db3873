"""
Per-tick motion integration and lifecycle pruning
"""

from __future__ import annotations

import math

from .config import GameConfig
from .state import RoundState
from .utils import clamp, direction


def update_player(state: RoundState, config: GameConfig):
    p = state.player
    ix, iy = state.intent.vector()
    p.x += ix * p.speed
    p.y += iy * p.speed

    # Keep the whole body in bounds
    r = p.radius
    p.x = clamp(p.x, r, config.width - r)
    p.y = clamp(p.y, r, config.height - r)


def update_bullets(state: RoundState, config: GameConfig):
    survivors = []
    for b in state.entities.bullets:
        b.x += math.cos(b.angle) * b.speed
        b.y += math.sin(b.angle) * b.speed

        # Out of bounds -> gone
        if b.x < 0 or b.x > config.width or b.y < 0 or b.y > config.height:
            continue
        survivors.append(b)
    state.entities.bullets = survivors


def update_enemies(state: RoundState):
    px, py = state.player.x, state.player.y
    step_scale = state.multiplier

    for e in state.entities.enemies:
        # Zero distance gives (0, 0): the enemy holds still this tick
        nx, ny = direction(e.x, e.y, px, py)
        e.x += nx * e.speed * step_scale
        e.y += ny * e.speed * step_scale


def update_particles(state: RoundState, config: GameConfig):
    survivors = []
    for p in state.entities.particles:
        p.x += p.vx
        p.y += p.vy
        p.life -= 1
        p.radius *= config.particle_decay

        if p.life <= 0 or p.radius < config.particle_min_radius:
            continue
        survivors.append(p)
    state.entities.particles = survivors


def update_world(state: RoundState, config: GameConfig):
    """Advance every entity by one tick"""
    update_player(state, config)
    update_bullets(state, config)
    update_enemies(state)
    update_particles(state, config)
