import pytest

from game.catpen.dog import DOG_HIT_DURATION, Dog, DogState
from game.catpen.entities import Arena, Facing
from game.catpen.sounds import WOOF, YIP


def test_intent_is_normalized_and_scaled():
    dog = Dog(x=200.0, y=150.0)
    dog.set_velocity_from_intent(3.0, 4.0)

    assert dog.vx == pytest.approx(90.0)
    assert dog.vy == pytest.approx(120.0)
    assert dog.facing == Facing.RIGHT


def test_zero_intent_stops_and_keeps_facing():
    dog = Dog(x=200.0, y=150.0, facing=Facing.RIGHT, vx=10.0)
    dog.set_velocity_from_intent(0.0, 0.0)

    assert (dog.vx, dog.vy) == (0.0, 0.0)
    assert dog.facing == Facing.RIGHT


def test_move_uses_loose_clamp():
    arena = Arena(400, 300)
    dog = Dog(x=390.0, y=290.0)
    dog.set_velocity_from_intent(1.0, 1.0)
    dog.move(1.0, arena)

    assert dog.position == (400.0, 300.0)


def test_on_hit_starts_blinking():
    dog = Dog(x=0.0, y=0.0, blink_tick_counter=1)
    sound = dog.on_hit()

    assert sound.name == YIP
    assert dog.state == DogState.BLINKING
    assert dog.flash_on
    assert dog.hit_timer == DOG_HIT_DURATION
    assert dog.blink_tick_counter == 0
    assert not dog.can_be_hit


def test_blink_toggles_every_two_ticks_then_recovers():
    dog = Dog(x=0.0, y=0.0)
    dog.on_hit()

    dog.tick(0.25)
    assert dog.state == DogState.BLINKING and dog.flash_on
    assert dog.hit_timer == 0.5

    dog.tick(0.25)
    assert dog.state == DogState.BLINKING and not dog.flash_on
    assert dog.hit_timer == 0.25

    dog.tick(0.25)
    assert dog.state == DogState.BLINKING and not dog.flash_on

    dog.tick(0.25)
    assert dog.state == DogState.CHASING
    assert dog.can_be_hit


def test_tick_while_chasing_is_noop():
    dog = Dog(x=0.0, y=0.0)
    dog.tick(0.1)

    assert dog.state == DogState.CHASING
    assert dog.blink_tick_counter == 0


def test_bark_emits_woof():
    assert Dog(x=0.0, y=0.0).bark().name == WOOF
