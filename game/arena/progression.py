"""
Score -> level -> difficulty progression
"""

import logging

from .config import GameConfig
from .state import RoundState

logger = logging.getLogger(__name__)


def level_for_score(score: int, points_per_level: int = 100) -> int:
    """Level reached with a given score: floor(score / points_per_level) + 1"""
    return score // points_per_level + 1


def multiplier_for_level(level: int, per_level: float = 0.1) -> float:
    return 1.0 + level * per_level


def update_progression(state: RoundState, config: GameConfig) -> bool:
    """
    Recompute level from score; on a level increase rescale enemy speed.
    Returns True if the level went up. Level never goes down.
    """
    new_level = level_for_score(state.score, config.points_per_level)
    if new_level <= state.level:
        return False

    state.level = new_level
    state.multiplier = multiplier_for_level(new_level, config.multiplier_per_level)
    logger.info("Level up: level=%d multiplier=%.2f score=%d", state.level, state.multiplier, state.score)
    return True
