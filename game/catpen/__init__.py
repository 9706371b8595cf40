"""2D Game module - Cat herding simulation"""

from .cats import Cat, CatKind, CatState, CatEvent
from .dog import Dog, DogState
from .entities import Arena, Pen, Facing
from .level import Level, CatSpawn
from .world import CatPenWorld, WorldSnapshot
from .catpen_env import CatPenEnv, run_random_episode

__all__ = [
    'Cat', 'CatKind', 'CatState', 'CatEvent',
    'Dog', 'DogState',
    'Arena', 'Pen', 'Facing',
    'Level', 'CatSpawn',
    'CatPenWorld', 'WorldSnapshot',
    'CatPenEnv', 'run_random_episode',
]
