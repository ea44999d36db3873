"""
Game entity dataclasses and the per-round entity store
"""

from dataclasses import dataclass, field
from typing import List, Tuple

Color = Tuple[int, int, int]


@dataclass
class Player:
    """Player entity, moved by directional intent"""
    x: float
    y: float
    radius: float = 20.0
    speed: float = 5.0  # units per tick
    color: Color = (74, 222, 128)


@dataclass
class Bullet:
    """Bullet projectile travelling along a fixed angle"""
    x: float
    y: float
    angle: float  # radians
    radius: float = 5.0
    speed: float = 10.0
    color: Color = (251, 191, 36)


@dataclass
class Enemy:
    """Enemy entity that chases the player"""
    x: float
    y: float
    radius: float
    speed: float
    color: Color
    health: int = 1  # any hit is lethal


@dataclass
class Particle:
    """Short-lived debris from a destroyed enemy"""
    x: float
    y: float
    vx: float
    vy: float
    radius: float
    color: Color
    life: int = 30  # ticks left


@dataclass
class Intent:
    """Directional movement flags fed by the input layer"""
    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False

    def vector(self) -> Tuple[float, float]:
        return float(self.right) - float(self.left), float(self.down) - float(self.up)


@dataclass
class EntityStore:
    """Everything alive on the field during one round"""
    player: Player
    bullets: List[Bullet] = field(default_factory=list)
    enemies: List[Enemy] = field(default_factory=list)
    particles: List[Particle] = field(default_factory=list)

    def counts(self) -> Tuple[int, int, int]:
        return len(self.bullets), len(self.enemies), len(self.particles)
