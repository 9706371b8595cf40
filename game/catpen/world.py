"""
CatPenWorld - owns one session and advances it tick by tick
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .cats import Cat, CatEvent
from .dog import Dog, DogState
from .level import Level
from .random_source import RandomSource, default_source
from .sounds import SoundEvent


@dataclass(frozen=True)
class EntitySnapshot:
    """Read-only view of one entity for renderers"""
    x: float
    y: float
    width: float
    height: float
    facing: str
    state: str
    kind: str = "dog"
    flash_on: bool = False
    color: Tuple[int, int, int] = (255, 255, 255)


@dataclass(frozen=True)
class WorldSnapshot:
    dog: EntitySnapshot
    cats: Tuple[EntitySnapshot, ...]
    pen_position: Tuple[float, float]
    pen_size: Tuple[float, float]
    cats_in_pen: int
    won: bool


@dataclass
class StepResult:
    sounds: List[SoundEvent] = field(default_factory=list)
    hits: int = 0
    won: bool = False


class CatPenWorld:
    """One dog, one pen, a fixed roster of cats"""

    def __init__(self, level: Level, rng: Optional[RandomSource] = None):
        self.level = level
        self.rng = rng if rng is not None else default_source()
        self.arena = level.arena
        self.pen = level.pen
        self.dog = Dog(x=level.dog_spawn[0], y=level.dog_spawn[1])
        self.cats: List[Cat] = [
            Cat.spawn(spawn.kind, spawn.x, spawn.y, self.rng) for spawn in level.cats
        ]
        self.won = False
        self.hits_taken = 0
        self.time = 0.0

    def step(self, dt: float, intent: Tuple[float, float] = (0.0, 0.0),
             bark: bool = False) -> StepResult:
        result = StepResult()

        # Dog first
        self.dog.set_velocity_from_intent(*intent)
        self.dog.move(dt, self.arena)
        self.dog.tick(dt)
        if bark:
            result.sounds.append(self.dog.bark())

        # Cats in roster order; a hit lands before the next cat looks at the dog
        for cat in self.cats:
            event = cat.update(dt, self.dog, self.pen, self.arena, self.rng)
            if event == CatEvent.HIT_DOG:
                result.sounds.append(self.dog.on_hit())
                result.hits += 1

        for cat in self.cats:
            meow = cat.tick_meow(dt)
            if meow is not None:
                result.sounds.append(meow)

        self.hits_taken += result.hits
        self.time += dt

        if not self.won and self.all_penned():
            self.won = True
        result.won = self.won
        return result

    def cats_in_pen(self) -> int:
        return sum(1 for cat in self.cats if self.pen.contains(cat.position))

    def all_penned(self) -> bool:
        """True only for a non-empty roster that is entirely inside the pen"""
        return len(self.cats) > 0 and self.cats_in_pen() == len(self.cats)

    def snapshot(self) -> WorldSnapshot:
        dog = self.dog
        return WorldSnapshot(
            dog=EntitySnapshot(
                x=dog.x,
                y=dog.y,
                width=dog.width,
                height=dog.height,
                facing=dog.facing.value,
                state=dog.state.value,
                flash_on=dog.state == DogState.BLINKING and dog.flash_on,
            ),
            cats=tuple(
                EntitySnapshot(
                    x=cat.x,
                    y=cat.y,
                    width=cat.width,
                    height=cat.height,
                    facing=cat.facing.value,
                    state=cat.state.value,
                    kind=cat.kind.value,
                    color=cat.color,
                )
                for cat in self.cats
            ),
            pen_position=self.pen.position,
            pen_size=self.pen.size,
            cats_in_pen=self.cats_in_pen(),
            won=self.won,
        )
