"""
Arcade window: draws world snapshots and, in play mode, turns the
keyboard into dog intent and sound events into audio.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Set

import arcade

from .sounds import ANGRY_MEOW, MEOW, WOOF, YIP, SoundEvent
from .world import CatPenWorld, EntitySnapshot

DEFAULT_SCALE = 2

# Stand-ins from arcade's bundled resources
SOUND_FILES = {
    YIP: ":resources:sounds/hurt1.wav",
    WOOF: ":resources:sounds/jump1.wav",
    MEOW: ":resources:sounds/coin1.wav",
    ANGRY_MEOW: ":resources:sounds/error1.wav",
}


class SoundBoard:
    """Plays SoundEvents, loading each clip on first use"""

    def __init__(self, muted: bool = False):
        self.muted = muted
        self._sounds: Dict[str, arcade.Sound] = {}

    def play(self, events: Iterable[SoundEvent]):
        if self.muted:
            return
        for event in events:
            sound = self._sounds.get(event.name)
            if sound is None:
                sound = arcade.load_sound(SOUND_FILES[event.name])
                self._sounds[event.name] = sound
            # Chonks sound lower, kittens higher
            speed = {"chonk": 0.8, "kitten": 1.3}.get(event.kind or "", 1.0)
            arcade.play_sound(sound, speed=speed)


class CatPenWindow(arcade.Window):
    """Arcade window for rendering (and optionally playing) a CatPenWorld"""

    def __init__(self, world: CatPenWorld, scale: int = DEFAULT_SCALE,
                 title: str = "Cat Pen", interactive: bool = False,
                 sound_board: Optional[SoundBoard] = None):
        super().__init__(int(world.arena.width * scale), int(world.arena.height * scale), title)
        self.world = world
        self.scale = scale
        self.interactive = interactive
        self.sound_board = sound_board or SoundBoard(muted=not interactive)
        self._keys: Set[int] = set()
        self._bark = False
        self._announced_win = False

        # Colors
        self.BG = (24, 24, 24)
        self.PEN_C = (150, 110, 60)
        self.DOG_C = (235, 170, 80)
        self.DOG_FLASH_C = (255, 255, 255)
        self.DASH_C = (220, 80, 80)
        self.HUD_C = (220, 220, 220)

    # ----------------------------
    # Input
    # ----------------------------

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == arcade.key.ESCAPE:
            self.close()
            return
        if symbol == arcade.key.SPACE:
            self._bark = True
        self._keys.add(symbol)

    def on_key_release(self, symbol: int, modifiers: int):
        self._keys.discard(symbol)

    def intent(self):
        """Arrow keys / WASD to a raw direction, opposite keys cancel"""
        keys = self._keys
        left = arcade.key.LEFT in keys or arcade.key.A in keys
        right = arcade.key.RIGHT in keys or arcade.key.D in keys
        up = arcade.key.UP in keys or arcade.key.W in keys
        down = arcade.key.DOWN in keys or arcade.key.S in keys
        return (float(right) - float(left), float(down) - float(up))

    def on_update(self, delta_time: float):
        if not self.interactive:
            return
        result = self.world.step(delta_time, self.intent(), bark=self._bark)
        self._bark = False
        self.sound_board.play(result.sounds)
        if result.won and not self._announced_win:
            self._announced_win = True
            print(f"[CatPen] YOU WON in {self.world.time:.1f}s, "
                  f"hits taken: {self.world.hits_taken}")

    # ----------------------------
    # Drawing
    # ----------------------------

    def _box(self, x, y, w, h):
        """Simulation box (y down) to lrbt window coordinates (y up)"""
        s = self.scale
        top = self.height - (y - h * 0.5) * s
        return (x - w * 0.5) * s, (x + w * 0.5) * s, top - h * s, top

    def _draw_entity(self, e: EntitySnapshot, color):
        l, r, b, t = self._box(e.x, e.y, e.width, e.height)
        arcade.draw_lrbt_rectangle_filled(l, r, b, t, color)
        # Little nose on the facing side
        nx = r - 4 if e.facing == "right" else l
        arcade.draw_lrbt_rectangle_filled(nx, nx + 4, (b + t) * 0.5 - 2, (b + t) * 0.5 + 2, (30, 30, 30))

    def on_draw(self):
        self.clear(color=self.BG)
        snap = self.world.snapshot()

        arcade.draw_lrbt_rectangle_outline(
            *self._box(snap.pen_position[0], snap.pen_position[1], *snap.pen_size),
            self.PEN_C, 3,
        )

        for cat in snap.cats:
            color = self.DASH_C if cat.state == "cannonballing" else cat.color
            self._draw_entity(cat, color)

        dog = snap.dog
        self._draw_entity(dog, self.DOG_FLASH_C if dog.flash_on else self.DOG_C)

        txt = (f"Penned: {snap.cats_in_pen}/{len(snap.cats)}  "
               f"Hits: {self.world.hits_taken}  "
               f"Time: {self.world.time:.1f}s")
        arcade.draw_text(txt, 12, self.height - 24, self.HUD_C, 14)
        if snap.won:
            arcade.draw_text("ALL CATS PENNED!", self.width * 0.5, self.height * 0.5,
                             self.HUD_C, 24, anchor_x="center")


def play(world: CatPenWorld, scale: int = DEFAULT_SCALE, muted: bool = False):
    """Open an interactive window and run until it is closed"""
    window = CatPenWindow(world, scale=scale, interactive=True,
                          sound_board=SoundBoard(muted=muted))
    window.set_update_rate(1 / 60)
    arcade.run()
