"""Arena shooter - top-down arcade simulation core"""

from .config import GameConfig
from .frame_driver import Game, Snapshot, TickReport
from .state import Phase, RoundState
from .arena_env import ArenaEnv, run_random_episode

__all__ = ['GameConfig', 'Game', 'Snapshot', 'TickReport', 'Phase', 'RoundState',
           'ArenaEnv', 'run_random_episode']
