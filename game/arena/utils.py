"""
Utility functions for game mechanics
"""

from __future__ import annotations
import colorsys
import math
from typing import Tuple, Optional
import numpy as np


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points"""
    return math.hypot(x2 - x1, y2 - y1)


def normalize(x: float, y: float, eps: float = 1e-8) -> Tuple[float, float]:
    """Normalize a vector to unit length (zero vector stays zero)"""
    l = math.hypot(x, y)
    if l < eps:
        return 0.0, 0.0
    return x / l, y / l


def direction(x1: float, y1: float, x2: float, y2: float) -> Tuple[float, float]:
    """Unit vector pointing from (x1, y1) to (x2, y2); (0, 0) if the points coincide"""
    return normalize(x2 - x1, y2 - y1)


def angle_to(x1: float, y1: float, x2: float, y2: float) -> float:
    """Angle in radians of the ray from (x1, y1) towards (x2, y2)"""
    return math.atan2(y2 - y1, x2 - x1)


def circle_collide(x1, y1, r1, x2, y2, r2) -> bool:
    """Check if two circles overlap (touching edges do not count)"""
    return distance(x1, y1, x2, y2) < r1 + r2


def hsl_to_rgb(hue_deg: float, saturation: float, lightness: float) -> Tuple[int, int, int]:
    """HSL (degrees, fractions) to an 8-bit RGB tuple"""
    r, g, b = colorsys.hls_to_rgb((hue_deg % 360.0) / 360.0, lightness, saturation)
    return int(round(r * 255)), int(round(g * 255)), int(round(b * 255))


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create the random source every game component draws from"""
    return np.random.default_rng(seed)
