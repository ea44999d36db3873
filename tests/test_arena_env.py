from __future__ import annotations

import numpy as np
import pytest

from conftest import make_enemy
from game.arena.arena_env import ArenaEnv
from game.arena.config import REWARD_CONFIG
from game.arena.state import Phase

STAY = np.array([0, 0, 0])


@pytest.fixture()
def env() -> ArenaEnv:
    e = ArenaEnv(max_steps=200)
    yield e
    e.close()


def test_reset_starts_a_round(env: ArenaEnv) -> None:
    obs, info = env.reset(seed=0)
    assert obs.shape == env.observation_space.shape
    assert obs.dtype == np.float32
    assert env.observation_space.contains(obs)
    assert env.game.phase is Phase.PLAYING
    assert info["score"] == 0
    assert info["health"] == 100
    assert info["step"] == 0


def test_random_actions_keep_observations_in_bounds(env: ArenaEnv) -> None:
    env.reset(seed=1)
    env.action_space.seed(1)
    for _ in range(150):
        obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
        assert env.observation_space.contains(obs)
        assert isinstance(reward, float)
        if terminated or truncated:
            break


def test_same_seed_same_trajectory() -> None:
    trajectories = []
    for _ in range(2):
        e = ArenaEnv()
        obs, _ = e.reset(seed=5)
        seen = [obs]
        for _ in range(150):
            obs, *_ = e.step(STAY)
            seen.append(obs)
        trajectories.append(np.stack(seen))
    np.testing.assert_array_equal(trajectories[0], trajectories[1])


def test_truncates_at_max_steps() -> None:
    e = ArenaEnv(max_steps=5)
    e.reset(seed=0)
    for i in range(5):
        _, _, terminated, truncated, info = e.step(STAY)
    assert truncated
    assert not terminated
    assert info["step"] == 5


def test_death_terminates_with_penalty(env: ArenaEnv) -> None:
    env.reset(seed=0)
    p = env.game.state.player
    env.game.state.health = 10
    env.game.state.entities.enemies.append(make_enemy(p.x, p.y))

    _, reward, terminated, truncated, info = env.step(STAY)

    assert terminated
    assert not truncated
    assert info["health"] == 0
    expected = -REWARD_CONFIG["R_TIME"] - REWARD_CONFIG["R_DAMAGE"] * 10 - REWARD_CONFIG["R_DEATH"]
    assert reward == pytest.approx(expected)


def test_kill_is_rewarded(env: ArenaEnv) -> None:
    env.reset(seed=0)
    p = env.game.state.player
    # Enemy straight to the right, aim index 0
    env.game.state.entities.enemies.append(make_enemy(p.x + 25, p.y, radius=15.0))

    _, reward, _, _, info = env.step(np.array([0, 1, 0]))

    assert info["kills"] == 1
    assert info["score"] == 10
    expected = REWARD_CONFIG["R_KILL"] - REWARD_CONFIG["R_SHOT"] - REWARD_CONFIG["R_TIME"]
    assert reward == pytest.approx(expected)


def test_shooting_respects_cooldown(env: ArenaEnv) -> None:
    env.reset(seed=0)
    env.step(np.array([0, 1, 2]))
    _, _, _, _, info = env.step(np.array([0, 1, 2]))
    assert info["shots"] == 1
    assert info["num_bullets"] == 1

    for _ in range(env.shoot_cooldown_steps):
        env.step(STAY)
    _, _, _, _, info = env.step(np.array([0, 1, 2]))
    assert info["shots"] == 2


def test_move_actions_map_to_intent(env: ArenaEnv) -> None:
    env.reset(seed=0)
    x0 = env.game.state.player.x
    env.step(np.array([4, 0, 0]))
    assert env.game.state.player.x == pytest.approx(x0 + 5.0)
    y0 = env.game.state.player.y
    env.step(np.array([1, 0, 0]))
    assert env.game.state.player.y == pytest.approx(y0 - 5.0)


@pytest.mark.parametrize(
    "dx, dy, index",
    [(100, 0, 0), (0, 100, 2), (-100, 0, 4), (0, -100, 6), (70, 70, 1)],
)
def test_aim_index(env: ArenaEnv, dx: float, dy: float, index: int) -> None:
    env.reset(seed=0)
    p = env.game.state.player
    assert env.aim_index(p.x + dx, p.y + dy) == index


def test_rejects_unknown_obs_mode() -> None:
    with pytest.raises(AssertionError):
        ArenaEnv(obs_mode="pixels")
