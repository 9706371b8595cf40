import random

import pytest

from game.catpen.cats import CatKind
from game.catpen.entities import Arena, Pen
from game.catpen.level import CatSpawn, Level


def test_pen_outside_arena_rejected():
    with pytest.raises(ValueError):
        Level(arena=Arena(400, 300), pen=Pen((390.0, 100.0), (60.0, 60.0)), dog_spawn=(10.0, 10.0))


def test_pen_larger_than_arena_rejected():
    with pytest.raises(ValueError):
        Level(arena=Arena(100, 100), pen=Pen((50.0, 50.0), (200.0, 200.0)), dog_spawn=(10.0, 10.0))


def test_spawns_outside_arena_rejected():
    with pytest.raises(ValueError):
        Level(arena=Arena(400, 300), pen=Pen((100.0, 100.0)), dog_spawn=(500.0, 10.0))
    with pytest.raises(ValueError):
        Level(arena=Arena(400, 300), pen=Pen((100.0, 100.0)), dog_spawn=(10.0, 10.0),
              cats=[CatSpawn(CatKind.BASIC, -5.0, 10.0)])


def test_random_level_layout():
    level = Level.random(num_cats=10, rng=random.Random(5))

    assert len(level.cats) == 10
    assert level.dog_spawn == (100.0, 100.0)
    for spawn in level.cats:
        assert 15.0 <= spawn.x <= 385.0
        assert 15.0 <= spawn.y <= 285.0
        assert not level.pen.contains((spawn.x, spawn.y))
        assert spawn.kind in CatKind


def test_random_level_respects_kinds():
    level = Level.random(num_cats=6, kinds=[CatKind.KITTEN], rng=random.Random(1))
    assert {s.kind for s in level.cats} == {CatKind.KITTEN}


def test_random_level_bad_arguments():
    with pytest.raises(ValueError):
        Level.random(num_cats=-1)
    with pytest.raises(ValueError):
        Level.random(kinds=[])
    with pytest.raises(ValueError):
        Level.random(width=0)


def test_from_dict():
    level = Level.from_dict({
        "width": 400,
        "height": 300,
        "pen": {"position": [200, 150], "size": [80, 40]},
        "cats": [{"kind": "chonk", "x": 30, "y": 40}],
    })

    assert level.arena == Arena(400.0, 300.0)
    assert level.pen.size == (80, 40)
    assert level.dog_spawn == (200, 150)
    assert level.cats == [CatSpawn(CatKind.CHONK, 30.0, 40.0)]


def test_from_dict_unknown_kind():
    with pytest.raises(ValueError, match="Unknown cat kind"):
        Level.from_dict({
            "width": 400,
            "height": 300,
            "pen": {"position": [100, 100]},
            "cats": [{"kind": "tiger", "x": 30, "y": 40}],
        })
