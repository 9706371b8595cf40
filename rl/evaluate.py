"""
Evaluation script for trained herding agents
"""

import argparse
import time
from typing import Optional

import numpy as np

from stable_baselines3 import PPO, DQN
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize

from game.catpen import CatPenEnv
from rl.configs.catpen_config import ENV_CONFIG, REWARD_CONFIG

ALGORITHMS = {"ppo": PPO, "dqn": DQN}


def load_model(model_path: str, algo: str):
    if algo not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm: {algo}")
    return ALGORITHMS[algo].load(model_path)


def _report(title: str, episode_rewards, episode_lengths, episode_wins):
    mean_reward = np.mean(episode_rewards)
    std_reward = np.std(episode_rewards)
    mean_length = np.mean(episode_lengths)

    print("\n" + "="*50)
    print(f"{title} ({len(episode_rewards)} episodes):")
    print(f"Mean Reward: {mean_reward:.2f} ± {std_reward:.2f}")
    print(f"Mean Episode Length: {mean_length:.1f}")
    print(f"Win Rate: {np.mean(episode_wins):.2%}")
    print("="*50)

    return {
        "mean_reward": mean_reward,
        "std_reward": std_reward,
        "mean_length": mean_length,
        "win_rate": float(np.mean(episode_wins)),
        "episode_rewards": episode_rewards,
        "episode_lengths": episode_lengths,
    }


def evaluate_model(
    model_path: str,
    algo: str = "ppo",
    n_episodes: int = 10,
    render: bool = True,
    seed: Optional[int] = None,
    vec_normalize_path: Optional[str] = None,
):
    """
    Evaluate a trained model

    Args:
        model_path: Path to the saved model
        algo: Algorithm used ('ppo' or 'dqn')
        n_episodes: Number of episodes to evaluate
        render: Whether to render the environment
        seed: Random seed for evaluation
        vec_normalize_path: Path to VecNormalize stats (for PPO)
    """
    model = load_model(model_path, algo)

    render_mode = "human" if render else None
    env = DummyVecEnv([lambda: CatPenEnv(render_mode=render_mode, rewards=REWARD_CONFIG, **ENV_CONFIG)])

    if vec_normalize_path:
        env = VecNormalize.load(vec_normalize_path, env)
        env.training = False
        env.norm_reward = False

    episode_rewards = []
    episode_lengths = []
    episode_wins = []

    for episode in range(n_episodes):
        if seed is not None:
            env.seed(seed + episode)
        obs = env.reset()

        total_reward = 0.0
        steps = 0

        while True:
            action, _ = model.predict(obs, deterministic=True)
            obs, reward, done, info = env.step(action)
            total_reward += reward[0]
            steps += 1

            if render:
                time.sleep(1 / 30)

            if done[0]:
                break

        won = bool(info[0].get("won", False))
        episode_rewards.append(total_reward)
        episode_lengths.append(steps)
        episode_wins.append(1.0 if won else 0.0)

        print(f"Episode {episode + 1}/{n_episodes}: "
              f"Reward = {total_reward:.2f}, Length = {steps}, "
              f"Penned = {info[0].get('cats_in_pen', 0)}/{info[0].get('num_cats', 0)}")

    env.close()

    return _report("Evaluation Results", episode_rewards, episode_lengths, episode_wins)


def compare_with_random(n_episodes: int = 10, seed: Optional[int] = None):
    """
    Evaluate a random policy baseline
    """
    print("Evaluating random policy baseline...")

    env = CatPenEnv(render_mode=None, rewards=REWARD_CONFIG, **ENV_CONFIG)

    episode_rewards = []
    episode_lengths = []
    episode_wins = []

    for episode in range(n_episodes):
        obs, info = env.reset(seed=seed + episode if seed is not None else None)

        terminated = False
        truncated = False
        total_reward = 0.0
        steps = 0

        while not (terminated or truncated):
            action = env.action_space.sample()
            obs, reward, terminated, truncated, info = env.step(action)
            total_reward += reward
            steps += 1

        episode_rewards.append(total_reward)
        episode_lengths.append(steps)
        episode_wins.append(1.0 if info["won"] else 0.0)

    env.close()

    return _report("Random Policy Results", episode_rewards, episode_lengths, episode_wins)


def main():
    parser = argparse.ArgumentParser(description="Evaluate trained herding agent")
    parser.add_argument(
        "model_path",
        type=str,
        help="Path to the trained model",
    )
    parser.add_argument(
        "--algo",
        type=str,
        default="ppo",
        choices=sorted(ALGORITHMS),
        help="Algorithm used to train the model (default: ppo)",
    )
    parser.add_argument(
        "--n-episodes",
        type=int,
        default=10,
        help="Number of evaluation episodes (default: 10)",
    )
    parser.add_argument(
        "--no-render",
        action="store_true",
        help="Disable rendering",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed (default: 42)",
    )
    parser.add_argument(
        "--vec-normalize",
        type=str,
        default=None,
        help="Path to VecNormalize stats file (for PPO)",
    )
    parser.add_argument(
        "--compare-random",
        action="store_true",
        help="Also evaluate random policy for comparison",
    )

    args = parser.parse_args()

    results = evaluate_model(
        model_path=args.model_path,
        algo=args.algo,
        n_episodes=args.n_episodes,
        render=not args.no_render,
        seed=args.seed,
        vec_normalize_path=args.vec_normalize,
    )

    if args.compare_random:
        print("\n")
        random_results = compare_with_random(
            n_episodes=args.n_episodes,
            seed=args.seed,
        )

        improvement = results["mean_reward"] - random_results["mean_reward"]
        print(f"\nImprovement over random: {improvement:.2f}")


if __name__ == "__main__":
    main()
