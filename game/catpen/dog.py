"""
The dog: the single pursuer herding cats toward the pen
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .entities import Arena, Facing, facing_from_x
from .sounds import SoundEvent, WOOF, YIP
from .utils import normalize

DOG_SPEED = 150.0
DOG_HIT_DURATION = 0.5  # seconds of invulnerability after a hit
BLINK_TICK_PERIOD = 2  # ticks between flash toggles


class DogState(str, Enum):
    CHASING = "chasing"
    BLINKING = "blinking"


@dataclass
class Dog:
    """Pursuer entity, position is the box center"""
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    width: float = 30.0
    height: float = 30.0
    speed: float = DOG_SPEED
    facing: Facing = Facing.LEFT
    state: DogState = DogState.CHASING
    flash_on: bool = False
    hit_timer: float = 0.0
    blink_tick_counter: int = 0

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def size(self) -> Tuple[float, float]:
        return (self.width, self.height)

    @property
    def can_be_hit(self) -> bool:
        return self.state == DogState.CHASING

    def set_velocity_from_intent(self, dx: float, dy: float):
        dx, dy = normalize(dx, dy)
        self.facing = facing_from_x(dx, self.facing)
        self.vx = dx * self.speed
        self.vy = dy * self.speed

    def move(self, dt: float, arena: Arena):
        # Loose clamp: the dog may overhang the edge by half its size
        self.x, self.y = arena.clamp_position(
            (self.x + self.vx * dt, self.y + self.vy * dt),
            (self.width * 0.5, self.height * 0.5),
            strict=False,
        )

    def on_hit(self) -> SoundEvent:
        self.state = DogState.BLINKING
        self.flash_on = True
        self.hit_timer = DOG_HIT_DURATION
        self.blink_tick_counter = 0
        return SoundEvent(YIP)

    def tick(self, dt: float):
        """Advance the blink window; the flash toggles every BLINK_TICK_PERIOD ticks"""
        if self.state == DogState.CHASING:
            return

        self.blink_tick_counter += 1
        if self.blink_tick_counter < BLINK_TICK_PERIOD:
            return
        self.blink_tick_counter = 0

        self.hit_timer -= dt
        if self.hit_timer > 0.0:
            self.flash_on = not self.flash_on
        else:
            self.state = DogState.CHASING
            self.flash_on = False

    def bark(self) -> SoundEvent:
        return SoundEvent(WOOF)
