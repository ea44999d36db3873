"""
Frame driver - owns the round and runs the simulation one tick at a time
------------------------------------------------------------------------
- Phase machine: Start -> Playing -> GameOver, GameOver -> Playing (restart)
- Tick order: scheduled jobs (spawn, flash expiry) -> motion -> collisions
  -> progression -> presenter -> game-over check
- advance(elapsed_ms) runs fixed-size ticks from an accumulator, so the
  simulation speed does not depend on how often the host draws frames
- All randomness comes from one injected numpy Generator
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Optional, Tuple

import numpy as np
from statemachine import State, StateMachine

from .collisions import resolve_collisions
from .config import GameConfig
from .entities import Bullet, Enemy, Particle, Player
from .progression import update_progression
from .scheduler import Scheduler
from .spawner import spawn_enemy, spawn_interval_ms
from .state import Phase, RoundState
from .updater import update_world
from .utils import angle_to, make_rng

logger = logging.getLogger(__name__)

SPAWN_JOB = "spawn"
FLASH_OFF_JOB = "flash_off"


class PhaseMachine(StateMachine):
    """Coarse game mode. Anything not listed here raises TransitionNotAllowed."""

    idle = State("Start", value=Phase.START, initial=True)
    playing = State("Playing", value=Phase.PLAYING)
    game_over = State("GameOver", value=Phase.GAME_OVER)

    begin = idle.to(playing) | game_over.to(playing)
    finish = playing.to(game_over)


@dataclass(frozen=True)
class Snapshot:
    """Detached copy of everything a renderer / HUD needs for one frame"""
    phase: Phase
    player: Player
    bullets: Tuple[Bullet, ...]
    enemies: Tuple[Enemy, ...]
    particles: Tuple[Particle, ...]
    score: int
    health: int
    max_health: int
    level: int
    multiplier: float
    flashing: bool
    pointer: Tuple[float, float]
    tick: int

    @property
    def health_fraction(self) -> float:
        return max(0.0, min(1.0, self.health / max(1, self.max_health)))


@dataclass
class TickReport:
    tick: int
    spawned: int = 0
    kills: int = 0
    player_hits: int = 0
    score_gained: int = 0
    damage: int = 0
    level_up: bool = False
    game_over: bool = False


class Game:
    """
    Arena shooter simulation.

    `presenter` is any object with some of on_frame(snapshot), on_flash(),
    on_phase_change(phase); missing methods are skipped.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
        presenter: Any = None,
    ):
        self.config = config or GameConfig.from_dict()
        self.rng = rng if rng is not None else make_rng(seed)
        self.presenter = presenter

        self.machine = PhaseMachine()
        self.scheduler = Scheduler()
        self.state = RoundState.new(self.config)
        self.rounds = 0

        self._accumulator = 0.0

    # ----------------------------
    # Phase / round control
    # ----------------------------

    @property
    def phase(self) -> Phase:
        return self.machine.current_state.value

    @property
    def playing(self) -> bool:
        return self.phase is Phase.PLAYING

    def start(self):
        """Start (or restart) a round; raises TransitionNotAllowed while Playing"""
        self.machine.begin()

        previous = self.state
        self.state = RoundState.new(self.config)
        # Held keys and pointer position survive a restart
        self.state.intent = previous.intent
        self.state.pointer = previous.pointer

        self.scheduler.clear()
        self._accumulator = 0.0
        self._schedule_spawn()
        self.rounds += 1

        logger.info("Round %d started (field %sx%s)", self.rounds, self.config.width, self.config.height)
        self._notify("on_phase_change", self.phase)
        self._notify_frame()

    def _game_over(self):
        self.machine.finish()
        self.scheduler.clear()
        self.state.flashing = False
        self._accumulator = 0.0
        logger.info(
            "Game over after %d ticks: score=%d level=%d kills=%d",
            self.state.ticks, self.state.score, self.state.level, self.state.kills,
        )
        self._notify("on_phase_change", self.phase)

    # ----------------------------
    # Input
    # ----------------------------

    def set_intent(self, up: bool = False, down: bool = False, left: bool = False, right: bool = False):
        intent = self.state.intent
        intent.up, intent.down, intent.left, intent.right = bool(up), bool(down), bool(left), bool(right)

    def aim(self, x: float, y: float):
        self.state.pointer = (float(x), float(y))

    def fire(self) -> Optional[Bullet]:
        """Shoot from the player towards the pointer; ignored unless Playing"""
        if not self.playing:
            return None

        p = self.state.player
        px, py = self.state.pointer
        bullet = Bullet(
            x=p.x,
            y=p.y,
            angle=angle_to(p.x, p.y, px, py),
            radius=self.config.bullet_radius,
            speed=self.config.bullet_speed,
            color=self.config.bullet_color,
        )
        self.state.entities.bullets.append(bullet)
        return bullet

    # ----------------------------
    # Simulation
    # ----------------------------

    def tick(self) -> Optional[TickReport]:
        """Run one simulation step; does nothing outside the Playing phase"""
        if not self.playing:
            return None

        s = self.state
        s.clock_ms += self.config.step_ms
        s.ticks += 1
        report = TickReport(tick=s.ticks)

        report.spawned = self._run_due_jobs()

        update_world(s, self.config)

        hits = resolve_collisions(s, self.config, self.rng)
        report.kills = hits.kills
        report.player_hits = hits.player_hits
        report.score_gained = hits.score_gained
        report.damage = hits.damage
        if hits.flash:
            self._start_flash()

        report.level_up = update_progression(s, self.config)

        self._notify_frame()

        if not s.alive:
            self._game_over()
            report.game_over = True

        return report

    def advance(self, elapsed_ms: float) -> int:
        """
        Feed wall-clock time from the host; runs as many fixed ticks as fit.
        At most max_ticks_per_frame ticks run per call, the rest is dropped.
        Returns the number of ticks run.
        """
        if not self.playing:
            self._accumulator = 0.0
            return 0

        step = self.config.step_ms
        self._accumulator += max(0.0, elapsed_ms)
        ran = 0
        while self._accumulator >= step and ran < self.config.max_ticks_per_frame:
            self._accumulator -= step
            self.tick()
            ran += 1
            if not self.playing:
                self._accumulator = 0.0
                return ran

        if self._accumulator >= step:
            # Too far behind; don't try to catch up
            self._accumulator %= step
        return ran

    def _run_due_jobs(self) -> int:
        spawned = 0
        for job in self.scheduler.pop_due(self.state.clock_ms):
            if job == SPAWN_JOB:
                spawn_enemy(self.state, self.config, self.rng)
                spawned += 1
                self._schedule_spawn()
            elif job == FLASH_OFF_JOB:
                self.state.flashing = False
        return spawned

    def _schedule_spawn(self):
        delay = spawn_interval_ms(self.state.level, self.config)
        self.scheduler.schedule(self.state.clock_ms + delay, SPAWN_JOB)

    def _start_flash(self):
        self.state.flashing = True
        self.scheduler.cancel(FLASH_OFF_JOB)
        self.scheduler.schedule(self.state.clock_ms + self.config.flash_ms, FLASH_OFF_JOB)
        self._notify("on_flash")

    # ----------------------------
    # Output
    # ----------------------------

    def snapshot(self) -> Snapshot:
        s = self.state
        store = s.entities
        return Snapshot(
            phase=self.phase,
            player=replace(store.player),
            bullets=tuple(replace(b) for b in store.bullets),
            enemies=tuple(replace(e) for e in store.enemies),
            particles=tuple(replace(p) for p in store.particles),
            score=s.score,
            health=s.health,
            max_health=self.config.start_health,
            level=s.level,
            multiplier=s.multiplier,
            flashing=s.flashing,
            pointer=s.pointer,
            tick=s.ticks,
        )

    def _notify_frame(self):
        # Snapshots copy every entity; skip them when nobody draws
        handler = getattr(self.presenter, "on_frame", None)
        if handler is not None:
            handler(self.snapshot())

    def _notify(self, method: str, *args):
        if self.presenter is None:
            return
        handler = getattr(self.presenter, method, None)
        if handler is not None:
            handler(*args)
