"""
Audio events emitted by the simulation.

The core never plays anything itself; it hands these fire-and-forget
events to whoever owns the speakers (see render.SoundBoard).
"""

from dataclasses import dataclass
from typing import Optional

YIP = "yip"
WOOF = "woof"
MEOW = "meow"
ANGRY_MEOW = "angry_meow"

SOUND_NAMES = (YIP, WOOF, MEOW, ANGRY_MEOW)


@dataclass(frozen=True)
class SoundEvent:
    """Play sound `name`, optionally for a cat kind"""
    name: str
    kind: Optional[str] = None

    def __post_init__(self):
        if self.name not in SOUND_NAMES:
            raise ValueError(f"Unknown sound: {self.name}")
