import pytest

from game.catpen.cats import CatKind, CatState
from game.catpen.dog import DogState
from game.catpen.entities import Arena, Pen
from game.catpen.level import CatSpawn, Level
from game.catpen.random_source import SequenceSource
from game.catpen.sounds import WOOF, YIP
from game.catpen.world import CatPenWorld


def make_world(cats, dog=(300.0, 250.0)):
    level = Level(
        arena=Arena(400, 300),
        pen=Pen((100.0, 100.0), (60.0, 60.0)),
        dog_spawn=dog,
        cats=[CatSpawn(kind, x, y) for kind, x, y in cats],
    )
    return CatPenWorld(level, rng=SequenceSource([0.5]))


def test_world_spawns_roster():
    world = make_world([(CatKind.BASIC, 300.0, 50.0), (CatKind.CHONK, 50.0, 250.0)])

    assert [c.kind for c in world.cats] == [CatKind.BASIC, CatKind.CHONK]
    assert world.dog.position == (300.0, 250.0)
    assert not world.won


def test_dog_moves_from_intent():
    world = make_world([(CatKind.BASIC, 350.0, 50.0)], dog=(200.0, 150.0))
    world.step(0.1, (1.0, 0.0))

    assert world.dog.x == pytest.approx(215.0)
    assert world.dog.y == pytest.approx(150.0)


def test_bark_emits_woof():
    world = make_world([(CatKind.BASIC, 350.0, 50.0)])
    result = world.step(0.1, bark=True)

    assert WOOF in [s.name for s in result.sounds]


def test_only_one_hit_per_tick():
    world = make_world([(CatKind.BASIC, 280.0, 250.0), (CatKind.CHONK, 320.0, 250.0)])
    for cat, direction in zip(world.cats, [(1.0, 0.0), (-1.0, 0.0)]):
        cat.state = CatState.CANNONBALLING
        cat.annoyance = 1.0
        cat.cannonball_direction = direction
        cat.cannonball_countdown = 1.0

    result = world.step(0.1)

    assert result.hits == 1
    assert [s.name for s in result.sounds].count(YIP) == 1
    assert world.dog.state == DogState.BLINKING
    assert world.hits_taken == 1


def test_win_latches():
    world = make_world([(CatKind.BASIC, 100.0, 100.0)])

    result = world.step(0.1)
    assert result.won
    assert world.won

    # drag the cat back out, the win stays
    world.cats[0].x, world.cats[0].y = 300.0, 50.0
    result = world.step(0.1)
    assert not world.all_penned()
    assert result.won
    assert world.won


def test_win_needs_every_cat():
    world = make_world([(CatKind.BASIC, 100.0, 100.0), (CatKind.KITTEN, 350.0, 50.0)])
    world.step(0.1)

    assert world.cats_in_pen() == 1
    assert not world.won


def test_empty_roster_never_wins():
    world = make_world([])
    for _ in range(5):
        world.step(0.1)

    assert not world.all_penned()
    assert not world.won


def test_snapshot():
    world = make_world([(CatKind.KITTEN, 100.0, 100.0)])
    world.step(0.1)
    snap = world.snapshot()

    assert snap.dog.state == "chasing"
    assert not snap.dog.flash_on
    assert len(snap.cats) == 1
    assert snap.cats[0].kind == "kitten"
    assert snap.cats[0].state == "in_pen"
    assert snap.cats_in_pen == 1
    assert snap.won
    assert snap.pen_size == (60.0, 60.0)


def test_snapshot_shows_flash():
    world = make_world([(CatKind.BASIC, 350.0, 50.0)])
    world.dog.on_hit()

    assert world.snapshot().dog.flash_on


def test_meows_are_collected():
    world = make_world([(CatKind.BASIC, 350.0, 50.0)])
    world.cats[0].meow_time = 2.95
    result = world.step(0.1)

    assert [(s.name, s.kind) for s in result.sounds] == [("meow", "basic")]


def test_full_escalation_through_world_step():
    world = make_world([(CatKind.BASIC, 200.0, 150.0)])
    cat, dog = world.cats[0], world.dog

    # dog keeps crowding the cat from the left: 4 x 0.25s of fleeing
    for _ in range(4):
        dog.x, dog.y = cat.x - 10.0, cat.y
        world.step(0.25)
        assert cat.state == CatState.FLEE
    assert cat.annoyance == 1.0
    assert cat.x == pytest.approx(350.0)

    for _ in range(4):
        world.step(0.25)
        assert cat.state == CatState.JITTERING
        assert cat.position == (350.0, 150.0)

    # dash straight up into the dog
    dog.x, dog.y = 350.0, 80.0
    result = world.step(0.25)

    assert cat.state == CatState.CANNONBALLING
    assert cat.cannonball_direction == pytest.approx((0.0, -1.0))
    assert result.hits == 1
    assert YIP in [s.name for s in result.sounds]
    assert dog.state == DogState.BLINKING
    assert world.hits_taken == 1

    dog.x, dog.y = 100.0, 250.0
    for _ in range(5):
        world.step(0.25)

    assert dog.state == DogState.CHASING
    assert not dog.flash_on
    assert cat.state == CatState.IDLE
    assert cat.annoyance == 0.0
    assert world.hits_taken == 1
