"""
Collision resolution: bullets vs enemies, then enemies vs player
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np

from .config import GameConfig
from .entities import Color, Particle
from .state import RoundState
from .utils import circle_collide


@dataclass
class CollisionReport:
    """What happened during one resolution pass"""
    kills: int = 0
    player_hits: int = 0
    score_gained: int = 0
    damage: int = 0

    @property
    def flash(self) -> bool:
        return self.player_hits > 0


def make_burst(x: float, y: float, color: Color, config: GameConfig,
               rng: np.random.Generator) -> List[Particle]:
    """Fixed-size group of particles flying out of (x, y)"""
    lo_r, hi_r = config.particle_radius_range
    v = config.particle_max_speed
    burst = []
    for _ in range(config.burst_size):
        burst.append(Particle(
            x=x,
            y=y,
            vx=float(rng.uniform(-v, v)),
            vy=float(rng.uniform(-v, v)),
            radius=float(rng.uniform(lo_r, hi_r)),
            color=color,
            life=config.particle_life,
        ))
    return burst


def resolve_bullet_hits(state: RoundState, config: GameConfig, rng: np.random.Generator,
                        report: CollisionReport):
    store = state.entities
    dead_enemies = set()
    dead_bullets = set()

    # Newest bullet first, and each bullet checks the newest enemy first
    for b_idx in range(len(store.bullets) - 1, -1, -1):
        b = store.bullets[b_idx]
        for idx in range(len(store.enemies) - 1, -1, -1):
            if idx in dead_enemies:
                continue
            e = store.enemies[idx]
            if circle_collide(b.x, b.y, b.radius, e.x, e.y, e.radius):
                # One-hit kill; a bullet takes out at most one enemy
                store.particles.extend(make_burst(e.x, e.y, e.color, config, rng))
                dead_enemies.add(idx)
                dead_bullets.add(b_idx)
                state.score += config.score_per_kill
                report.kills += 1
                report.score_gained += config.score_per_kill
                break

    store.bullets = [b for idx, b in enumerate(store.bullets) if idx not in dead_bullets]
    store.enemies = [e for idx, e in enumerate(store.enemies) if idx not in dead_enemies]


def resolve_player_hits(state: RoundState, config: GameConfig, rng: np.random.Generator,
                        report: CollisionReport):
    store = state.entities
    p = state.player
    remaining = []

    for e in reversed(store.enemies):
        if circle_collide(p.x, p.y, p.radius, e.x, e.y, e.radius):
            store.particles.extend(make_burst(e.x, e.y, config.hit_color, config, rng))
            state.health -= config.damage_per_hit
            report.player_hits += 1
            report.damage += config.damage_per_hit
        else:
            remaining.append(e)

    remaining.reverse()
    store.enemies = remaining


def resolve_collisions(state: RoundState, config: GameConfig,
                       rng: np.random.Generator) -> CollisionReport:
    report = CollisionReport()
    resolve_bullet_hits(state, config, rng, report)
    resolve_player_hits(state, config, rng, report)
    state.kills += report.kills
    state.hits_taken += report.player_hits
    return report
