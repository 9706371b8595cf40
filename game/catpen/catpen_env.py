"""
CatPenEnv - a compact 2D cat herding RL environment
---------------------------------------------------
- Gymnasium API around CatPenWorld
- 1 RL agent (the dog) that moves in 8 directions
- Cats wander, flee the dog, and cannonball into it when annoyed
- Reward for every cat that ends up in the pen, penalty for getting hit
- Vector observation: dog state + pen offset + top-K nearest cats
- Discrete action space: stay + 8 compass directions
- Arcade window for human rendering (imported lazily)

Install:
    pip install gymnasium arcade numpy

Quick test:
    python -m game.catpen --random
"""

from __future__ import annotations

import math
import time
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .cats import CatState
from .dog import DogState
from .level import GAME_SIZE, Level
from .random_source import default_source
from .utils import clamp
from .world import CatPenWorld

DEFAULT_REWARDS = {
    "R_PEN": 1.0,     # per cat entering the pen (negated when one leaves)
    "R_HIT": 0.5,     # per dash hit taken
    "R_TIME": 0.001,  # per step
    "R_WIN": 10.0,    # all cats penned
}


class CatPenEnv(gym.Env):
    """2D cat herding environment, the dog is the agent"""

    metadata = {"render_modes": ["human"], "render_fps": 30}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        width: int = int(GAME_SIZE[0]),
        height: int = int(GAME_SIZE[1]),
        dt: float = 1 / 30,
        max_steps: int = 1800,  # 60s at 30 FPS
        num_cats: int = 10,
        k_cats: int = 10,
        pen_position: tuple = (100.0, 100.0),
        pen_size: tuple = (60.0, 60.0),
        rewards: Optional[Dict[str, float]] = None,
        verbose: int = 0,
    ):
        super().__init__()

        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render_mode: {render_mode}")
        if dt <= 0:
            raise ValueError(f"dt must be positive, got {dt}")
        self.render_mode = render_mode

        # Arena
        self.width = width
        self.height = height
        self.dt = dt
        self.max_steps = max_steps

        # Level config
        self.num_cats = num_cats
        self.k_cats = k_cats
        self.pen_position = tuple(pen_position)
        self.pen_size = tuple(pen_size)
        self.rewards = dict(DEFAULT_REWARDS)
        if rewards:
            self.rewards.update({k: v for k, v in rewards.items() if k.startswith("R_")})
        self.verbose = verbose

        # Action space: 0 stay, 1..8 compass directions starting east, counter-clockwise
        self.action_space = spaces.Discrete(9)
        self._move_dirs = [(0.0, 0.0)]
        for i in range(8):
            ang = (math.pi * 2) * (i / 8.0)
            # screen y grows downward, so "up" is -y
            self._move_dirs.append((math.cos(ang), -math.sin(ang)))

        # Observation space (vector)
        # Dog: pos(2) vel(2) blinking(1)
        # Pen: rel pos(2)
        # Each cat: rel pos(2) penned(1) annoyance(1) dashing(1)
        obs_dim = 2 + 2 + 1 + 2 + (self.k_cats * 5)
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None

        # Reseeded only by reset(seed=...), unseeded resets continue the stream
        self._rng = default_source()
        self.world: CatPenWorld = None  # type: ignore
        self._step_count = 0
        self._prev_in_pen = 0
        self._events: Dict[str, float] = {}

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        if seed is not None:
            self._rng = default_source(seed)
        level = Level.random(
            num_cats=self.num_cats,
            width=self.width,
            height=self.height,
            pen_position=self.pen_position,
            pen_size=self.pen_size,
            rng=self._rng,
        )
        self.world = CatPenWorld(level, rng=self._rng)
        self._step_count = 0
        self._prev_in_pen = self.world.cats_in_pen()
        if self._window is not None:
            self._window.world = self.world

        return self._get_obs(), self._get_info()

    def step(self, action):
        self._events = {"penned": 0.0, "unpenned": 0.0, "hit": 0.0, "win": 0.0}

        was_won = self.world.won
        result = self.world.step(self.dt, self._move_dirs[int(action)])

        in_pen = self.world.cats_in_pen()
        delta = in_pen - self._prev_in_pen
        if delta > 0:
            self._events["penned"] += delta
        elif delta < 0:
            self._events["unpenned"] += -delta
        self._prev_in_pen = in_pen
        self._events["hit"] += result.hits
        if result.won and not was_won:
            self._events["win"] = 1.0
            if self.verbose > 0:
                print(f"[CatPenEnv] All {len(self.world.cats)} cats penned "
                      f"at step {self._step_count + 1}")

        reward = self._compute_reward()

        terminated = self.world.won
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        dog = self.world.dog
        dx = dog.x / self.width
        dy = dog.y / self.height
        dvx = dog.vx / max(1e-6, dog.speed)
        dvy = dog.vy / max(1e-6, dog.speed)
        blinking = 1.0 if dog.state == DogState.BLINKING else 0.0

        px = (self.world.pen.position[0] - dog.x) / self.width
        py = (self.world.pen.position[1] - dog.y) / self.height

        obs_parts = [dx * 2 - 1, dy * 2 - 1,  # map to [-1,1]
                     clamp(dvx, -1, 1), clamp(dvy, -1, 1),
                     blinking * 2 - 1,
                     clamp(px, -1, 1), clamp(py, -1, 1)]

        # Cats: top-K nearest to the dog
        cats_sorted = sorted(
            self.world.cats,
            key=lambda c: (c.x - dog.x) ** 2 + (c.y - dog.y) ** 2
        )
        for i in range(self.k_cats):
            if i < len(cats_sorted):
                c = cats_sorted[i]
                penned = 1.0 if self.world.pen.contains(c.position) else 0.0
                dashing = 1.0 if c.state == CatState.CANNONBALLING else 0.0
                obs_parts += [
                    clamp((c.x - dog.x) / self.width, -1, 1),
                    clamp((c.y - dog.y) / self.height, -1, 1),
                    penned * 2 - 1,
                    clamp(c.normalized_annoyance * 2 - 1, -1, 1),
                    dashing * 2 - 1,
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self) -> float:
        R = self.rewards
        reward = 0.0

        reward += R["R_PEN"] * self._events.get("penned", 0.0)
        reward -= R["R_PEN"] * self._events.get("unpenned", 0.0)
        reward -= R["R_HIT"] * self._events.get("hit", 0.0)
        reward -= R["R_TIME"]
        reward += R["R_WIN"] * self._events.get("win", 0.0)

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "cats_in_pen": self.world.cats_in_pen(),
            "num_cats": len(self.world.cats),
            "hits_taken": self.world.hits_taken,
            "won": self.world.won,
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            from .render import CatPenWindow
            self._window = CatPenWindow(self.world, title="CatPenEnv - Arcade")

        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: Optional[int] = 42, fps: float = 30.0):
    """Run a random-policy episode and print its return"""
    env = CatPenEnv(render_mode="human" if render else None, verbose=1)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    print("Running episode... close the window to exit early.")

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward
        if render:
            time.sleep(1.0 / fps)

    print(f"Random episode return: {total:.2f}  "
          f"Cats penned: {info['cats_in_pen']}/{info['num_cats']}  "
          f"Hits taken: {info['hits_taken']}")

    env.close()
    return total
