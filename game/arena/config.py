"""
Configuration for the arena shooter
Dict configs (easy to tweak / override from scripts) plus the validated
GameConfig the simulation actually reads.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, asdict
from typing import Any, Dict, Optional, Tuple

# Simulation parameters
GAME_CONFIG = {
    "width": 1200,
    "height": 600,
    "step_ms": 1000.0 / 60.0,  # one tick of simulated time
    "max_ticks_per_frame": 5,  # accumulator cap per advance() call
    # Player
    "player_radius": 20.0,
    "player_speed": 5.0,
    "player_color": (74, 222, 128),
    "start_health": 100,
    # Bullets
    "bullet_radius": 5.0,
    "bullet_speed": 10.0,
    "bullet_color": (251, 191, 36),
    # Enemies
    "enemy_radius_range": (15.0, 25.0),
    "enemy_base_speed": 1.0,
    "enemy_speed_per_level": 0.2,
    "enemy_speed_jitter": 0.5,
    "enemy_hue_range": (0.0, 60.0),
    "enemy_saturation": 0.7,
    "enemy_lightness": 0.5,
    "spawn_margin": 20.0,
    # Spawn interval: max(min, base - level * per_level)
    "spawn_interval_base_ms": 2000.0,
    "spawn_interval_per_level_ms": 100.0,
    "spawn_interval_min_ms": 500.0,
    # Particles
    "burst_size": 8,
    "particle_radius_range": (3.0, 6.0),
    "particle_max_speed": 2.5,
    "particle_life": 30,
    "particle_decay": 0.98,
    "particle_min_radius": 0.5,
    "hit_color": (255, 0, 0),
    # Scoring / damage / progression
    "score_per_kill": 10,
    "damage_per_hit": 10,
    "points_per_level": 100,
    "multiplier_per_level": 0.1,
    "flash_ms": 100.0,
}

# Gym environment parameters
ENV_CONFIG = {
    "max_steps": 3600,  # 60s at 60 ticks/s
    "k_enemies": 5,
    "shoot_cooldown_steps": 6,
    "aim_distance": 100.0,
}

# Reward shaping for agents playing through the gym env
REWARD_CONFIG = {
    "R_KILL": 1.0,       # per enemy destroyed
    "R_DAMAGE": 0.1,     # per health point lost
    "R_SHOT": 0.01,      # per bullet fired
    "R_TIME": 0.001,     # per tick
    "R_DEATH": 5.0,      # on game over
}


@dataclass(frozen=True)
class GameConfig:
    """Validated simulation settings; build with from_dict() to get GAME_CONFIG defaults"""
    width: float
    height: float
    step_ms: float
    max_ticks_per_frame: int
    player_radius: float
    player_speed: float
    player_color: Tuple[int, int, int]
    start_health: int
    bullet_radius: float
    bullet_speed: float
    bullet_color: Tuple[int, int, int]
    enemy_radius_range: Tuple[float, float]
    enemy_base_speed: float
    enemy_speed_per_level: float
    enemy_speed_jitter: float
    enemy_hue_range: Tuple[float, float]
    enemy_saturation: float
    enemy_lightness: float
    spawn_margin: float
    spawn_interval_base_ms: float
    spawn_interval_per_level_ms: float
    spawn_interval_min_ms: float
    burst_size: int
    particle_radius_range: Tuple[float, float]
    particle_max_speed: float
    particle_life: int
    particle_decay: float
    particle_min_radius: float
    hit_color: Tuple[int, int, int]
    score_per_kill: int
    damage_per_hit: int
    points_per_level: int
    multiplier_per_level: float
    flash_ms: float

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Field size must be positive, got {self.width}x{self.height}")
        if self.step_ms <= 0:
            raise ValueError(f"step_ms must be positive, got {self.step_ms}")
        if self.max_ticks_per_frame < 1:
            raise ValueError(f"max_ticks_per_frame must be >= 1, got {self.max_ticks_per_frame}")
        if self.points_per_level <= 0:
            raise ValueError(f"points_per_level must be positive, got {self.points_per_level}")
        if self.spawn_interval_min_ms <= 0:
            raise ValueError(f"spawn_interval_min_ms must be positive, got {self.spawn_interval_min_ms}")
        for name in ("enemy_radius_range", "particle_radius_range", "enemy_hue_range"):
            lo, hi = getattr(self, name)
            if lo > hi:
                raise ValueError(f"{name} must be (low, high), got {(lo, hi)}")

    @property
    def center(self) -> Tuple[float, float]:
        return self.width / 2, self.height / 2

    @classmethod
    def from_dict(cls, cfg: Optional[Dict[str, Any]] = None, **overrides) -> "GameConfig":
        """Build from a GAME_CONFIG-style dict; unknown keys are rejected"""
        merged = dict(GAME_CONFIG)
        merged.update(cfg or {})
        merged.update(overrides)
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(merged) - known)
        if unknown:
            raise ValueError(f"Unknown game config keys: {unknown}")
        return cls(**merged)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
