"""
ArenaEnv - Gymnasium wrapper around the arena shooter simulation
----------------------------------------------------------------
- One env step == one simulation tick of game.arena.frame_driver.Game
- The game's random source is the env's seeded np_random
- Vector observation: player state + top-K nearest enemies
- Discrete MultiDiscrete action space: [move(5), shoot(2), aim(8)]
- Optional Arcade window for "human" rendering

Install:
    pip install gymnasium arcade numpy python-statemachine

Quick test:
    python -m game.arena.arena_env
"""

from __future__ import annotations

import math
from typing import Optional, Dict, Any

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import ENV_CONFIG, REWARD_CONFIG, GameConfig
from .frame_driver import Game, TickReport
from .state import Phase
from .utils import clamp


class ArenaEnv(gym.Env):
    """Gymnasium environment for the arena shooter"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        obs_mode: str = "vector",
        game_config: Optional[GameConfig] = None,
        max_steps: int = ENV_CONFIG["max_steps"],
        k_enemies: int = ENV_CONFIG["k_enemies"],
        shoot_cooldown_steps: int = ENV_CONFIG["shoot_cooldown_steps"],
        aim_distance: float = ENV_CONFIG["aim_distance"],
        reward_config: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        assert obs_mode in ("vector",), "Only 'vector' observations are implemented."
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.obs_mode = obs_mode

        self.game_config = game_config or GameConfig.from_dict()
        self.max_steps = max_steps
        self.k_enemies = k_enemies
        self.shoot_cooldown_steps = shoot_cooldown_steps
        self.aim_distance = aim_distance
        self.reward_config = dict(REWARD_CONFIG)
        self.reward_config.update(reward_config or {})

        # Action space:
        # move: 0 stay, 1 up, 2 down, 3 left, 4 right
        # shoot: 0/1
        # aim: 0..7 (8 directions)
        self.action_space = spaces.MultiDiscrete([5, 2, 8])

        # Observation space (vector)
        # Player: pos(2) health(1) cooldown(1) difficulty(1)
        # Each enemy: rel pos(2) radius(1)
        obs_dim = 2 + 1 + 1 + 1 + (self.k_enemies * 3)
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None

        self.game: Game = None  # type: ignore
        self._cooldown = 0
        self._step_count = 0
        self._shots = 0

        # Precompute aim directions (8-way, screen coordinates)
        self._aim_dirs = []
        for i in range(8):
            ang = (math.pi * 2) * (i / 8.0)
            self._aim_dirs.append((math.cos(ang), math.sin(ang)))

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        self.game = Game(self.game_config, rng=self.np_random)
        self.game.start()
        if self._window is not None:
            self._window.game = self.game

        self._cooldown = 0
        self._step_count = 0
        self._shots = 0

        return self._get_obs(), self._get_info()

    def step(self, action):
        move, shoot, aim = int(action[0]), int(action[1]), int(action[2])

        self.game.set_intent(up=move == 1, down=move == 2, left=move == 3, right=move == 4)
        shots = self._apply_shoot(shoot, aim)

        report = self.game.tick()
        if self._cooldown > 0:
            self._cooldown -= 1

        reward = self._compute_reward(report, shots)

        terminated = self.game.phase is Phase.GAME_OVER
        self._step_count += 1
        truncated = self._step_count >= self.max_steps and not terminated

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Action handling
    # ----------------------------

    def aim_index(self, x: float, y: float) -> int:
        """Closest of the 8 aim directions to the point (x, y)"""
        p = self.game.state.player
        ang = math.atan2(y - p.y, x - p.x)
        return int(round(ang / (math.pi / 4))) % 8

    def _apply_shoot(self, shoot: int, aim: int) -> int:
        if shoot == 0 or self._cooldown > 0:
            return 0

        dx, dy = self._aim_dirs[aim % 8]
        p = self.game.state.player
        self.game.aim(p.x + dx * self.aim_distance, p.y + dy * self.aim_distance)
        if self.game.fire() is None:
            return 0

        self._cooldown = self.shoot_cooldown_steps
        self._shots += 1
        return 1

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        cfg = self.game_config
        s = self.game.state
        p = s.player

        obs_parts = [
            (p.x / cfg.width) * 2 - 1,
            (p.y / cfg.height) * 2 - 1,
            clamp(s.health / max(1, cfg.start_health), 0, 1) * 2 - 1,
            clamp(self._cooldown / max(1, self.shoot_cooldown_steps), 0, 1) * 2 - 1,
            clamp(s.multiplier - 1.0, -1, 1),
        ]

        # Enemies: top-K nearest
        enemies_sorted = sorted(
            s.entities.enemies,
            key=lambda e: (e.x - p.x) ** 2 + (e.y - p.y) ** 2
        )
        max_r = max(1e-6, cfg.enemy_radius_range[1])
        for i in range(self.k_enemies):
            if i < len(enemies_sorted):
                e = enemies_sorted[i]
                obs_parts += [
                    clamp((e.x - p.x) / cfg.width, -1, 1),
                    clamp((e.y - p.y) / cfg.height, -1, 1),
                    clamp(e.radius / max_r, 0, 1),
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self, report: Optional[TickReport], shots: int) -> float:
        rc = self.reward_config
        reward = -rc["R_TIME"] - rc["R_SHOT"] * shots
        if report is None:
            return float(reward)

        reward += rc["R_KILL"] * report.kills
        reward -= rc["R_DAMAGE"] * report.damage
        if report.game_over:
            reward -= rc["R_DEATH"]
        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        s = self.game.state
        n_bullets, n_enemies, n_particles = s.entities.counts()
        return {
            "score": s.score,
            "health": s.health,
            "level": s.level,
            "kills": s.kills,
            "hits_taken": s.hits_taken,
            "shots": self._shots,
            "num_enemies": n_enemies,
            "num_bullets": n_bullets,
            "num_particles": n_particles,
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode != "human":
            return None

        if self._window is None:
            # Arcade needs a display; only import it when a window is wanted
            from .window import ArenaWindow
            self._window = ArenaWindow(self.game, interactive=False)

        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: Optional[int] = 42) -> float:
    """Run a random episode for testing"""
    env = ArenaEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    print(f"Random episode return: {total:.3f}  score: {info['score']}  level: {info['level']}")
    env.close()
    return total


if __name__ == "__main__":
    run_random_episode(render=True)
