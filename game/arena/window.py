"""
Arcade window: draws Game snapshots and feeds keyboard / mouse input back.
The simulation uses screen coordinates (y down); Arcade's origin is the
bottom-left corner, so every y is flipped on the way in and out.
"""

from __future__ import annotations

import math

import arcade

from .frame_driver import Game, Snapshot
from .state import Phase
from .utils import angle_to

BG_C = (26, 26, 46)
GRID_C = (255, 255, 255, 13)
PLAYER_EDGE_C = (34, 197, 94)
ENEMY_EDGE_C = (255, 0, 0)
HUD_C = (220, 220, 220)
FLASH_C = (255, 255, 255, 70)

HEALTH_COLORS = (
    (0.6, (74, 222, 128)),
    (0.3, (251, 191, 36)),
    (0.0, (239, 68, 68)),
)

UP_KEYS = (arcade.key.W, arcade.key.UP)
DOWN_KEYS = (arcade.key.S, arcade.key.DOWN)
LEFT_KEYS = (arcade.key.A, arcade.key.LEFT)
RIGHT_KEYS = (arcade.key.D, arcade.key.RIGHT)


class ArenaWindow(arcade.Window):
    """Arcade window for playing (or watching) the arena shooter"""

    def __init__(self, game: Game, interactive: bool = True, title: str = "Arena Shooter"):
        cfg = game.config
        super().__init__(int(cfg.width), int(cfg.height), title)
        self.game = game
        self.interactive = interactive
        self._held = set()
        self.background_color = BG_C

        if interactive:
            game.presenter = self

    # ----------------------------
    # Presenter hooks
    # ----------------------------

    def on_phase_change(self, phase: Phase):
        self.set_caption(f"Arena Shooter - {phase.value}")

    # ----------------------------
    # Input
    # ----------------------------

    def _to_world_y(self, y: float) -> float:
        return self.game.config.height - y

    def _sync_intent(self):
        held = self._held
        self.game.set_intent(
            up=any(k in held for k in UP_KEYS),
            down=any(k in held for k in DOWN_KEYS),
            left=any(k in held for k in LEFT_KEYS),
            right=any(k in held for k in RIGHT_KEYS),
        )

    def on_key_press(self, symbol: int, modifiers: int):
        if not self.interactive:
            return
        if symbol == arcade.key.ENTER and not self.game.playing:
            self.game.start()
            return
        if symbol == arcade.key.SPACE:
            self.game.fire()
            return
        self._held.add(symbol)
        self._sync_intent()

    def on_key_release(self, symbol: int, modifiers: int):
        if not self.interactive:
            return
        self._held.discard(symbol)
        self._sync_intent()

    def on_mouse_motion(self, x: int, y: int, dx: int, dy: int):
        if self.interactive:
            self.game.aim(x, self._to_world_y(y))

    def on_mouse_press(self, x: int, y: int, button: int, modifiers: int):
        if not self.interactive:
            return
        self.game.aim(x, self._to_world_y(y))
        self.game.fire()

    def on_update(self, delta_time: float):
        if self.interactive:
            self.game.advance(delta_time * 1000.0)

    # ----------------------------
    # Drawing
    # ----------------------------

    def on_draw(self):
        self.clear()
        snap = self.game.snapshot()

        self._draw_grid()
        self._draw_player(snap)
        for b in snap.bullets:
            arcade.draw_circle_filled(b.x, self._to_world_y(b.y), b.radius, b.color)
        self._draw_enemies(snap)
        for p in snap.particles:
            arcade.draw_circle_filled(p.x, self._to_world_y(p.y), p.radius, p.color)

        if snap.flashing:
            arcade.draw_lrbt_rectangle_filled(0, self.width, 0, self.height, FLASH_C)

        self._draw_hud(snap)

        if snap.phase is Phase.START:
            self._draw_banner("ARENA SHOOTER", "WASD to move, mouse to aim, click / space to shoot - Enter to start")
        elif snap.phase is Phase.GAME_OVER:
            self._draw_banner("GAME OVER", f"Score {snap.score}  Level {snap.level} - Enter to play again")

    def _draw_grid(self, size: int = 50):
        for x in range(0, self.width, size):
            arcade.draw_line(x, 0, x, self.height, GRID_C, 1)
        for y in range(0, self.height, size):
            arcade.draw_line(0, y, self.width, y, GRID_C, 1)

    def _draw_player(self, snap: Snapshot):
        p = snap.player
        py = self._to_world_y(p.y)
        arcade.draw_circle_filled(p.x, py, p.radius, p.color)
        arcade.draw_circle_outline(p.x, py, p.radius, PLAYER_EDGE_C, 3)

        # Direction indicator towards the pointer
        ang = angle_to(p.x, p.y, *snap.pointer)
        reach = p.radius + 10
        arcade.draw_line(
            p.x, py,
            p.x + math.cos(ang) * reach, self._to_world_y(p.y + math.sin(ang) * reach),
            arcade.color.WHITE, 3,
        )

    def _draw_enemies(self, snap: Snapshot):
        px, py = snap.player.x, snap.player.y
        for e in snap.enemies:
            ey = self._to_world_y(e.y)
            arcade.draw_circle_filled(e.x, ey, e.radius, e.color)
            arcade.draw_circle_outline(e.x, ey, e.radius, ENEMY_EDGE_C, 2)

            # Eyes look at the player
            ang = angle_to(e.x, e.y, px, py)
            off = e.radius * 0.4
            size = e.radius * 0.3
            c, s = math.cos(ang), math.sin(ang)
            for side in (-1, 1):
                ex = e.x + c * off - side * s * off * 0.5
                eye_y = e.y + s * off + side * c * off * 0.5
                arcade.draw_circle_filled(ex, self._to_world_y(eye_y), size, arcade.color.WHITE)

    def _draw_hud(self, snap: Snapshot):
        bar_w, bar_h = 200, 12
        x0, y0 = 12, self.height - 24
        arcade.draw_lrbt_rectangle_filled(x0, x0 + bar_w, y0, y0 + bar_h, (60, 60, 60))

        frac = snap.health_fraction
        fill_c = next(c for threshold, c in HEALTH_COLORS if frac > threshold or threshold == 0.0)
        if frac > 0:
            arcade.draw_lrbt_rectangle_filled(x0, x0 + bar_w * frac, y0, y0 + bar_h, fill_c)

        txt = f"Score: {snap.score}  Health: {max(0, snap.health)}  Level: {snap.level}"
        arcade.draw_text(txt, x0, y0 - 22, HUD_C, 14)

    def _draw_banner(self, title: str, subtitle: str):
        cx, cy = self.width / 2, self.height / 2
        arcade.draw_lrbt_rectangle_filled(0, self.width, cy - 60, cy + 60, (0, 0, 0, 170))
        arcade.draw_text(title, cx, cy + 10, HUD_C, 32, anchor_x="center")
        arcade.draw_text(subtitle, cx, cy - 30, HUD_C, 14, anchor_x="center")
