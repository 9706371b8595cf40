"""
Level definitions: arena size, pen, dog spawn and the cat roster
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .cats import CAT_SIZE, CatKind
from .entities import Arena, Pen
from .random_source import RandomSource, default_source

GAME_SIZE = (400.0, 300.0)
DEFAULT_NUM_CATS = 10


@dataclass(frozen=True)
class CatSpawn:
    kind: CatKind
    x: float
    y: float


@dataclass
class Level:
    """Initial layout for one session, validated on construction"""
    arena: Arena
    pen: Pen
    dog_spawn: Tuple[float, float]
    cats: List[CatSpawn] = field(default_factory=list)

    def __post_init__(self):
        if not self.pen.fits_in(self.arena):
            raise ValueError(
                f"Pen at {self.pen.position} with size {self.pen.size} does not fit "
                f"in a {self.arena.width}x{self.arena.height} arena"
            )
        if not self.arena.contains(self.dog_spawn):
            raise ValueError(f"Dog spawn {self.dog_spawn} is outside the arena")
        for spawn in self.cats:
            if not self.arena.contains((spawn.x, spawn.y)):
                raise ValueError(f"Cat spawn ({spawn.x}, {spawn.y}) is outside the arena")

    @classmethod
    def random(
        cls,
        num_cats: int = DEFAULT_NUM_CATS,
        width: float = GAME_SIZE[0],
        height: float = GAME_SIZE[1],
        pen_position: Tuple[float, float] = (100.0, 100.0),
        pen_size: Tuple[float, float] = (60.0, 60.0),
        kinds: Sequence[CatKind] = tuple(CatKind),
        rng: Optional[RandomSource] = None,
    ) -> "Level":
        """Scatter num_cats cats of random kinds outside the pen, dog starts on the pen"""
        if num_cats < 0:
            raise ValueError(f"num_cats must be >= 0, got {num_cats}")
        if not kinds:
            raise ValueError("At least one cat kind is required")
        rng = rng or default_source()
        arena = Arena(width, height)
        pen = Pen(pen_position, pen_size)

        half = CAT_SIZE * 0.5
        cats = []
        for _ in range(num_cats):
            # Retry a few times to keep cats from starting in the pen
            for _attempt in range(20):
                x = rng.uniform(half, width - half)
                y = rng.uniform(half, height - half)
                if not pen.contains((x, y)):
                    break
            idx = min(int(rng.uniform(0.0, len(kinds))), len(kinds) - 1)
            cats.append(CatSpawn(kinds[idx], x, y))

        return cls(arena=arena, pen=pen, dog_spawn=pen_position, cats=cats)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Level":
        """
        Build a level from plain data, e.g.::

            {"width": 400, "height": 300,
             "pen": {"position": [100, 100], "size": [60, 60]},
             "dog": [100, 100],
             "cats": [{"kind": "basic", "x": 300, "y": 200}]}
        """
        pen_data = data["pen"]
        cats = []
        for c in data.get("cats", []):
            try:
                kind = CatKind(c["kind"])
            except ValueError:
                raise ValueError(f"Unknown cat kind: {c['kind']!r}") from None
            cats.append(CatSpawn(kind, float(c["x"]), float(c["y"])))
        return cls(
            arena=Arena(float(data["width"]), float(data["height"])),
            pen=Pen(tuple(pen_data["position"]), tuple(pen_data.get("size", (60.0, 60.0)))),
            dog_spawn=tuple(data.get("dog", pen_data["position"])),
            cats=cats,
        )
