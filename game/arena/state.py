"""
Round state owned by the frame driver and passed into every component
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .config import GameConfig
from .entities import EntityStore, Player, Intent


class Phase(str, Enum):
    START = "Start"
    PLAYING = "Playing"
    GAME_OVER = "GameOver"


@dataclass
class RoundState:
    """Score, health, progression and the entity store for one round"""
    entities: EntityStore
    score: int = 0
    health: int = 100
    level: int = 1
    multiplier: float = 1.0  # difficulty speed scale for enemies
    clock_ms: float = 0.0
    ticks: int = 0
    kills: int = 0
    hits_taken: int = 0
    flashing: bool = False
    intent: Intent = field(default_factory=Intent)
    pointer: tuple = (0.0, 0.0)

    @classmethod
    def new(cls, config: GameConfig) -> "RoundState":
        cx, cy = config.center
        player = Player(
            x=cx,
            y=cy,
            radius=config.player_radius,
            speed=config.player_speed,
            color=config.player_color,
        )
        return cls(entities=EntityStore(player=player), health=config.start_health, pointer=(cx, cy))

    @property
    def player(self) -> Player:
        return self.entities.player

    @property
    def alive(self) -> bool:
        return self.health > 0
