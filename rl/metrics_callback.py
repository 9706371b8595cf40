"""
Custom callback for tracking herding metrics during training.
Records: cats penned, hits taken, wins.
"""

import os
import csv
from typing import Dict, List, Any, Optional

import numpy as np
from stable_baselines3.common.callbacks import BaseCallback


class MetricsCallback(BaseCallback):
    """
    Callback to track and log herding metrics per episode.
    Saves to CSV for easy plotting.
    """

    def __init__(
        self,
        log_dir: str,
        algo_name: str,
        verbose: int = 1,
    ):
        super().__init__(verbose)
        self.log_dir = log_dir
        self.algo_name = algo_name

        self.episode_rewards: List[float] = []
        self.episode_lengths: List[int] = []
        self.episode_penned: List[float] = []
        self.episode_hits: List[float] = []
        self.episode_wins: List[float] = []

        self.csv_path: Optional[str] = None
        self.csv_file = None
        self.csv_writer = None

    def _on_training_start(self) -> None:
        """Initialize CSV file for logging."""
        os.makedirs(self.log_dir, exist_ok=True)
        self.csv_path = os.path.join(self.log_dir, f"{self.algo_name}_metrics.csv")

        self.csv_file = open(self.csv_path, "w", newline="")
        self.csv_writer = csv.writer(self.csv_file)
        self.csv_writer.writerow([
            "timestep", "episode", "reward", "length",
            "cats_in_pen", "num_cats", "hits_taken", "won"
        ])
        self.csv_file.flush()

        if self.verbose > 0:
            print(f"[MetricsCallback] Logging to {self.csv_path}")

    def _on_step(self) -> bool:
        infos = self.locals.get("infos", [])
        dones = self.locals.get("dones", [])

        for info, done in zip(infos, dones):
            # Monitor wrapper adds episode info on the final step
            if done and "episode" in info:
                self.record_episode(info)

        return True

    def record_episode(self, info: Dict[str, Any]) -> None:
        ep_info = info["episode"]
        penned = info.get("cats_in_pen", 0)
        num_cats = info.get("num_cats", 0)
        hits = info.get("hits_taken", 0)
        won = 1.0 if info.get("won", False) else 0.0

        self.episode_rewards.append(ep_info["r"])
        self.episode_lengths.append(ep_info["l"])
        self.episode_penned.append(penned)
        self.episode_hits.append(hits)
        self.episode_wins.append(won)

        if self.csv_writer:
            self.csv_writer.writerow([
                self.num_timesteps,
                len(self.episode_rewards),
                ep_info["r"],
                ep_info["l"],
                penned,
                num_cats,
                hits,
                won,
            ])
            self.csv_file.flush()

        if self.verbose > 0 and len(self.episode_rewards) % 10 == 0:
            avg_reward = sum(self.episode_rewards[-10:]) / 10
            print(f"[{self.algo_name}] Episode {len(self.episode_rewards)}, "
                  f"Timestep {self.num_timesteps}, "
                  f"Avg Reward (10 ep): {avg_reward:.2f}")

    def _on_training_end(self) -> None:
        """Cleanup CSV file."""
        if self.csv_file:
            self.csv_file.close()
            if self.verbose > 0:
                print(f"[MetricsCallback] Saved {len(self.episode_rewards)} episodes to {self.csv_path}")

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics."""
        if not self.episode_rewards:
            return {}

        return {
            "mean_reward": np.mean(self.episode_rewards),
            "std_reward": np.std(self.episode_rewards),
            "mean_length": np.mean(self.episode_lengths),
            "total_episodes": len(self.episode_rewards),
            "mean_penned": np.mean(self.episode_penned),
            "mean_hits": np.mean(self.episode_hits),
            "win_rate": np.mean(self.episode_wins),
        }


class TensorboardMetricsCallback(BaseCallback):
    """
    Logs herding metrics to TensorBoard.
    """

    def _on_step(self) -> bool:
        infos = self.locals.get("infos", [])
        dones = self.locals.get("dones", [])

        for info, done in zip(infos, dones):
            if done and "episode" in info and self.logger:
                ep = info["episode"]
                self.logger.record("custom/episode_reward", ep["r"])
                self.logger.record("custom/episode_length", ep["l"])
                if "cats_in_pen" in info:
                    self.logger.record("custom/cats_in_pen", info["cats_in_pen"])
                    self.logger.record("custom/hits_taken", info["hits_taken"])

        return True
