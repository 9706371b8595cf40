import numpy as np
import pytest
from gymnasium.utils.env_checker import check_env

from game.catpen.catpen_env import DEFAULT_REWARDS, CatPenEnv
from game.catpen.cats import CatState


def test_env_passes_gymnasium_checks():
    check_env(CatPenEnv(), skip_render_check=True)


def test_reset_observation():
    env = CatPenEnv(num_cats=4, k_cats=6)
    obs, info = env.reset(seed=0)

    assert obs.shape == env.observation_space.shape == (7 + 6 * 5,)
    assert obs.dtype == np.float32
    assert env.observation_space.contains(obs)
    # padded slots for missing cats are zero
    assert np.all(obs[7 + 4 * 5:] == 0.0)
    assert info == {"cats_in_pen": 0, "num_cats": 4, "hits_taken": 0, "won": False, "step": 0}


def test_same_seed_same_layout():
    a, _ = CatPenEnv().reset(seed=123)
    b, _ = CatPenEnv().reset(seed=123)
    np.testing.assert_array_equal(a, b)


def test_unseeded_reset_continues_seeded_stream():
    a, b = CatPenEnv(), CatPenEnv()
    first, _ = a.reset(seed=7)
    b.reset(seed=7)

    a_next, _ = a.reset()
    b_next, _ = b.reset()

    np.testing.assert_array_equal(a_next, b_next)
    assert not np.array_equal(first, a_next)


def test_random_rollout_stays_in_space():
    env = CatPenEnv(max_steps=60)
    env.reset(seed=1)
    env.action_space.seed(1)

    truncated = terminated = False
    steps = 0
    while not (terminated or truncated):
        obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
        assert env.observation_space.contains(obs)
        assert isinstance(reward, float)
        steps += 1

    assert steps <= 60
    assert info["step"] == steps


def test_moving_dog_east():
    env = CatPenEnv(num_cats=1)
    env.reset(seed=2)
    x0 = env.world.dog.x

    env.step(1)

    assert env.world.dog.x == pytest.approx(x0 + 150.0 * env.dt)


def test_penning_last_cat_wins():
    env = CatPenEnv(num_cats=1)
    env.reset(seed=3)
    cat = env.world.cats[0]
    cat.x, cat.y = env.world.pen.position

    obs, reward, terminated, truncated, info = env.step(0)

    R = DEFAULT_REWARDS
    assert terminated
    assert not truncated
    assert info["won"]
    assert info["cats_in_pen"] == 1
    assert reward == pytest.approx(R["R_PEN"] + R["R_WIN"] - R["R_TIME"])


def test_reward_config_overrides():
    env = CatPenEnv(rewards={"name": "custom", "R_TIME": 0.5})
    env.reset(seed=4)

    assert env.rewards["R_TIME"] == 0.5
    assert env.rewards["R_PEN"] == DEFAULT_REWARDS["R_PEN"]
    assert "name" not in env.rewards


def test_hit_penalty():
    env = CatPenEnv(num_cats=1)
    env.reset(seed=5)
    dog = env.world.dog
    dog.x, dog.y = 300.0, 250.0
    cat = env.world.cats[0]
    cat.x, cat.y = 280.0, 250.0
    cat.state = CatState.CANNONBALLING
    cat.annoyance = 1.0
    cat.cannonball_direction = (1.0, 0.0)
    cat.cannonball_countdown = 1.0

    _, reward, _, _, info = env.step(0)

    assert info["hits_taken"] == 1
    assert reward == pytest.approx(-DEFAULT_REWARDS["R_HIT"] - DEFAULT_REWARDS["R_TIME"])


def test_bad_arguments():
    with pytest.raises(ValueError):
        CatPenEnv(dt=0)
    with pytest.raises(ValueError):
        CatPenEnv(render_mode="rgb_array")
