"""
Cat agents and their behaviour state machine.

Every kind runs the same machine; only the numbers in CAT_TUNING differ.
Each tick a cat first picks its state (update_state) and then runs the
behaviour for that state. Fleeing builds annoyance; once it reaches
ANNOYANCE_THRESHOLD the cat jitters in place for JITTER_DURATION and then
cannonballs at the spot the dog was standing on.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from .dog import Dog, DogState
from .entities import Arena, Facing, Pen, facing_from_x
from .random_source import RandomSource
from .sounds import ANGRY_MEOW, MEOW, SoundEvent
from .utils import distance, normalize, rects_overlap, rotate, vec_len

DETECTION_RADIUS = 70.0
ANNOYANCE_THRESHOLD = 1.0
JITTER_DURATION = 1.0  # seconds of shaking before the dash
JITTER_OFFSET_MAGNITUDE = 2.0
DASH_SPEED = 240.0
DASH_DURATION = 1.25
RANDOM_WALK_TURN = 0.3  # max heading change per idle tick, radians
PEN_REPULSION = 150.0
CAT_SIZE = 30.0
MEOW_INTERVAL = 3.0

CAT_COLORS = (
    (203, 219, 252),  # default purple blue
    (189, 245, 242),  # robin's egg blue
    (174, 245, 184),  # pastel green
    (255, 193, 229),  # sort of pink
)


class CatKind(str, Enum):
    BASIC = "basic"
    KITTEN = "kitten"
    CHONK = "chonk"


class CatState(str, Enum):
    IDLE = "idle"
    FLEE = "flee"
    JITTERING = "jittering"
    CANNONBALLING = "cannonballing"
    IN_PEN = "in_pen"


class CatEvent(str, Enum):
    HIT_DOG = "hit_dog"


@dataclass(frozen=True)
class CatTuning:
    speed: float
    annoyance_rate: float
    calming_rate: float
    random_walk_radius: float
    flee_scalar: float
    meow_start: Tuple[float, float]  # range the first meow_time is drawn from


CAT_TUNING: Dict[CatKind, CatTuning] = {
    CatKind.BASIC: CatTuning(150.0, 1.0, 0.75, 9.0, 1.0, (-3.0, 2.0)),
    CatKind.KITTEN: CatTuning(175.0, 0.0, 0.0, 12.0, 1.5, (-3.0, 2.0)),
    CatKind.CHONK: CatTuning(100.0, 1.5, 0.5, 6.0, 1.0, (-1.0, 1.0)),
}


@dataclass
class Cat:
    """Cat agent, position is the box center"""
    kind: CatKind
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    width: float = CAT_SIZE
    height: float = CAT_SIZE
    facing: Facing = Facing.LEFT
    state: CatState = CatState.IDLE
    annoyance: float = 0.0
    detection_radius: float = DETECTION_RADIUS
    random_walk_heading: float = 0.0
    jitter_origin: Tuple[float, float] = (0.0, 0.0)
    jitter_countdown: float = 0.0
    cannonball_direction: Tuple[float, float] = (0.0, 0.0)
    cannonball_countdown: float = 0.0
    meow_interval: float = MEOW_INTERVAL
    meow_time: float = 0.0
    color: Tuple[int, int, int] = CAT_COLORS[0]

    @classmethod
    def spawn(cls, kind: CatKind, x: float, y: float, rng: RandomSource) -> "Cat":
        """New idle cat with a random meow phase and coat color"""
        tuning = CAT_TUNING[kind]
        idx = min(int(rng.uniform(0.0, len(CAT_COLORS))), len(CAT_COLORS) - 1)
        return cls(
            kind=kind,
            x=x,
            y=y,
            jitter_origin=(x, y),
            meow_time=rng.uniform(*tuning.meow_start),
            color=CAT_COLORS[idx],
        )

    @property
    def tuning(self) -> CatTuning:
        return CAT_TUNING[self.kind]

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def size(self) -> Tuple[float, float]:
        return (self.width, self.height)

    @property
    def normalized_annoyance(self) -> float:
        return self.annoyance / ANNOYANCE_THRESHOLD

    # ----------------------------
    # State selection
    # ----------------------------

    def next_state(self, dog: Dog, pen: Pen) -> CatState:
        """Pick the state for this tick, first matching rule wins"""
        if self.state == CatState.CANNONBALLING:
            if self.cannonball_countdown > 0.0:
                return CatState.CANNONBALLING
            return CatState.IDLE
        if self.state == CatState.JITTERING and self.jitter_countdown <= 0.0:
            return CatState.CANNONBALLING
        if self.annoyance >= ANNOYANCE_THRESHOLD:
            return CatState.JITTERING
        if pen.contains(self.position):
            return CatState.IN_PEN
        if dog.state == DogState.CHASING and distance(self.position, dog.position) < self.detection_radius:
            return CatState.FLEE
        return CatState.IDLE

    def update_state(self, dog: Dog, pen: Pen) -> CatState:
        """Apply the transition along with its entry actions"""
        new_state = self.next_state(dog, pen)
        if new_state != self.state:
            if self.state == CatState.CANNONBALLING:
                self.annoyance = 0.0
            if new_state == CatState.JITTERING:
                self._start_jitter()
            elif new_state == CatState.CANNONBALLING:
                self._start_dash(dog)
        self.state = new_state
        return new_state

    def _start_jitter(self):
        self.jitter_origin = self.position
        self.jitter_countdown = JITTER_DURATION

    def _start_dash(self, dog: Dog):
        # Aim at where the dog is now; the dash does not track it afterwards
        self.cannonball_direction = normalize(dog.x - self.x, dog.y - self.y)
        self.cannonball_countdown = DASH_DURATION

    # ----------------------------
    # Behaviours
    # ----------------------------

    def update(self, dt: float, dog: Dog, pen: Pen, arena: Arena,
               rng: RandomSource) -> Optional[CatEvent]:
        """One tick: transition, then run the behaviour of the new state"""
        state = self.update_state(dog, pen)
        event = None

        if state == CatState.IDLE:
            self.idle(dt, pen, arena, rng)
        elif state == CatState.FLEE:
            self.flee(dt, dog, arena)
        elif state == CatState.JITTERING:
            self.jitter(dt, arena, rng)
        elif state == CatState.CANNONBALLING:
            event = self.cannonball(dt, dog, arena)
        else:
            self.in_pen(dt)

        self.facing = facing_from_x(self.vx, self.facing)
        return event

    def idle(self, dt: float, pen: Pen, arena: Arena, rng: RandomSource):
        """Biased random walk that steers clear of the pen"""
        tuning = self.tuning
        walk_speed = tuning.speed / 3.0

        self.random_walk_heading += rng.uniform(-RANDOM_WALK_TURN, RANDOM_WALK_TURN)
        cx, cy = normalize(*rotate(1.0, 0.0, self.random_walk_heading))
        cx *= tuning.random_walk_radius
        cy *= tuning.random_walk_radius

        sx, sy = self.vx + cx, self.vy + cy
        if vec_len(sx, sy) != 0.0:
            nx, ny = normalize(sx, sy)
            self.vx, self.vy = nx * walk_speed, ny * walk_speed

        bx, by = self.x - pen.position[0], self.y - pen.position[1]
        d = vec_len(bx, by)
        if 0.0 < d < pen.half_extent[0] + self.detection_radius:
            push = PEN_REPULSION / d
            nx, ny = normalize(bx, by)
            nx, ny = normalize(self.vx + nx * push, self.vy + ny * push)
            self.vx, self.vy = nx * walk_speed, ny * walk_speed

        self._move(self.vx * dt, self.vy * dt, arena)
        self._calm(dt)

    def flee(self, dt: float, dog: Dog, arena: Arena):
        tuning = self.tuning
        speed = tuning.speed * tuning.flee_scalar
        fx, fy = normalize(self.x - dog.x, self.y - dog.y)
        self.vx, self.vy = fx * speed, fy * speed
        self._move(self.vx * dt, self.vy * dt, arena)
        # Crossing the threshold is picked up by next tick's update_state
        self.annoyance += tuning.annoyance_rate * dt

    def jitter(self, dt: float, arena: Arena, rng: RandomSource):
        """Shake around jitter_origin, offsets do not accumulate"""
        ox = rng.uniform(-JITTER_OFFSET_MAGNITUDE, JITTER_OFFSET_MAGNITUDE)
        oy = rng.uniform(-JITTER_OFFSET_MAGNITUDE, JITTER_OFFSET_MAGNITUDE)
        self.vx, self.vy = 0.0, 0.0
        self.x, self.y = self.jitter_origin
        self._move(ox, oy, arena)
        self.jitter_countdown -= dt

    def cannonball(self, dt: float, dog: Dog, arena: Arena) -> Optional[CatEvent]:
        # velocity already carries dt and is added to the position as is
        dx, dy = self.cannonball_direction
        self.vx, self.vy = dx * DASH_SPEED * dt, dy * DASH_SPEED * dt
        self._move(self.vx, self.vy, arena)
        self.cannonball_countdown -= dt

        if dog.can_be_hit and rects_overlap(self.position, self.size, dog.position, dog.size):
            return CatEvent.HIT_DOG
        return None

    def in_pen(self, dt: float):
        self.vx, self.vy = 0.0, 0.0
        self._calm(dt)

    def tick_meow(self, dt: float) -> Optional[SoundEvent]:
        """Meow every meow_interval seconds, angrily while jittering"""
        self.meow_time += dt
        if self.meow_time < self.meow_interval:
            return None
        self.meow_time = 0.0
        name = ANGRY_MEOW if self.state == CatState.JITTERING else MEOW
        return SoundEvent(name, self.kind.value)

    def _move(self, dx: float, dy: float, arena: Arena):
        self.x, self.y = arena.clamp_position(
            (self.x + dx, self.y + dy),
            (self.width * 0.5, self.height * 0.5),
            strict=True,
        )

    def _calm(self, dt: float):
        self.annoyance = max(0.0, self.annoyance - self.tuning.calming_rate * dt)
