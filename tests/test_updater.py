from __future__ import annotations

import math

import numpy as np
import pytest

from conftest import make_enemy
from game.arena.config import GameConfig
from game.arena.entities import Bullet, Intent, Particle
from game.arena.state import RoundState
from game.arena.updater import (
    update_bullets,
    update_enemies,
    update_particles,
    update_player,
    update_world,
)


def _particle(radius: float = 4.0, life: int = 30) -> Particle:
    return Particle(x=50.0, y=50.0, vx=1.0, vy=-2.0, radius=radius, color=(255, 0, 0), life=life)


def test_player_moves_by_intent_times_speed(state: RoundState, config: GameConfig) -> None:
    state.intent = Intent(right=True, down=True)
    x0, y0 = state.player.x, state.player.y
    update_player(state, config)
    assert state.player.x == pytest.approx(x0 + 5.0)
    assert state.player.y == pytest.approx(y0 + 5.0)


def test_opposite_flags_cancel(state: RoundState, config: GameConfig) -> None:
    state.intent = Intent(up=True, down=True, left=True, right=True)
    x0, y0 = state.player.x, state.player.y
    update_player(state, config)
    assert (state.player.x, state.player.y) == (x0, y0)


def test_player_stays_inside_field(state: RoundState, config: GameConfig) -> None:
    rng = np.random.default_rng(0)
    p = state.player
    r = p.radius
    for _ in range(300):
        p.x = float(rng.uniform(r, config.width - r))
        p.y = float(rng.uniform(r, config.height - r))
        flags = rng.integers(0, 2, size=4).astype(bool)
        state.intent = Intent(*flags)
        p.speed = float(rng.uniform(0, 60))
        update_player(state, config)
        assert r <= p.x <= config.width - r
        assert r <= p.y <= config.height - r


def test_player_clamped_at_corner(state: RoundState, config: GameConfig) -> None:
    state.player.x, state.player.y = 22.0, 21.0
    state.intent = Intent(up=True, left=True)
    update_player(state, config)
    assert (state.player.x, state.player.y) == (20.0, 20.0)


def test_bullet_leaving_field_is_removed_in_one_tick(state: RoundState, config: GameConfig) -> None:
    state.entities.bullets.append(Bullet(x=config.width - 5, y=300.0, angle=0.0, speed=10.0))
    update_bullets(state, config)
    assert state.entities.bullets == []


def test_bullet_inside_field_keeps_flying(state: RoundState, config: GameConfig) -> None:
    state.entities.bullets.append(Bullet(x=100.0, y=100.0, angle=math.pi / 2, speed=10.0))
    update_bullets(state, config)
    (b,) = state.entities.bullets
    assert b.x == pytest.approx(100.0)
    assert b.y == pytest.approx(110.0)


def test_bullet_culling_checks_each_axis(state: RoundState, config: GameConfig) -> None:
    state.entities.bullets.extend([
        Bullet(x=100.0, y=3.0, angle=-math.pi / 2, speed=10.0),  # exits top
        Bullet(x=3.0, y=100.0, angle=math.pi, speed=10.0),  # exits left
        Bullet(x=100.0, y=config.height - 1, angle=math.pi / 2, speed=10.0),  # exits bottom
    ])
    update_bullets(state, config)
    assert state.entities.bullets == []


def test_enemy_moves_towards_player_scaled_by_difficulty(state: RoundState) -> None:
    state.player.x, state.player.y = 600.0, 300.0
    state.multiplier = 1.5
    state.entities.enemies.append(make_enemy(0.0, 300.0, speed=2.0))
    update_enemies(state)
    e = state.entities.enemies[0]
    assert e.x == pytest.approx(3.0)
    assert e.y == pytest.approx(300.0)


def test_enemy_on_top_of_player_holds_still(state: RoundState) -> None:
    p = state.player
    state.entities.enemies.append(make_enemy(p.x, p.y, speed=3.0))
    update_enemies(state)
    e = state.entities.enemies[0]
    assert (e.x, e.y) == (p.x, p.y)
    assert not math.isnan(e.x)


def test_enemies_are_never_pruned_by_the_updater(state: RoundState, config: GameConfig) -> None:
    state.entities.enemies.append(make_enemy(-500.0, -500.0, speed=1.0))
    update_world(state, config)
    assert len(state.entities.enemies) == 1


def test_particle_moves_and_decays(state: RoundState, config: GameConfig) -> None:
    state.entities.particles.append(_particle(radius=4.0, life=30))
    update_particles(state, config)
    (p,) = state.entities.particles
    assert (p.x, p.y) == (51.0, 48.0)
    assert p.radius == pytest.approx(3.92)
    assert p.life == 29


def test_particle_with_one_tick_left_is_removed(state: RoundState, config: GameConfig) -> None:
    state.entities.particles.append(_particle(life=1))
    update_particles(state, config)
    assert state.entities.particles == []


def test_particle_shrinking_below_threshold_is_removed(state: RoundState, config: GameConfig) -> None:
    state.entities.particles.append(_particle(radius=0.51, life=30))
    update_particles(state, config)
    assert state.entities.particles == []


def test_particle_lives_exactly_its_lifetime(state: RoundState, config: GameConfig) -> None:
    state.entities.particles.append(_particle(radius=5.0, life=3))
    for _ in range(2):
        update_particles(state, config)
    assert len(state.entities.particles) == 1
    update_particles(state, config)
    assert state.entities.particles == []
