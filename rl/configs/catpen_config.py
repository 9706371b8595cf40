"""
Training configuration for the cat pen environment
"""

# Environment parameters
ENV_CONFIG = {
    # "render_mode": None,  # Don't render during training - it's too slow with parallel envs
    "width": 400,
    "height": 300,
    "dt": 1/30,
    "max_steps": 1800,  # 60 seconds at 30 FPS
    "num_cats": 10,
    "k_cats": 10,
    "pen_position": (100.0, 100.0),
    "pen_size": (60.0, 60.0),
}

# ==============================================================================
# REWARD SHAPING
# ==============================================================================

REWARD_CONFIG = {
    "name": "baseline",
    "description": "Pen cats, avoid dashes, finish quickly",
    "R_PEN": 1.0,      # Cat enters the pen (negative when it leaves)
    "R_HIT": 0.5,      # Penalty for taking a cannonball
    "R_TIME": 0.001,   # Small time penalty
    "R_WIN": 10.0,     # Every cat penned
}

# ==============================================================================
# ALGORITHM HYPERPARAMETERS
# ==============================================================================

# PPO hyperparameters
PPO_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 3e-4,
    "n_steps": 1024,
    "batch_size": 256,
    "n_epochs": 10,
    "gamma": 0.99,
    "gae_lambda": 0.95,
    "clip_range": 0.2,
    "ent_coef": 0.01,
    "vf_coef": 0.5,
    "max_grad_norm": 0.5,
    "verbose": 1,
}

# DQN hyperparameters
DQN_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 1e-4,
    "buffer_size": 100_000,
    "learning_starts": 1000,
    "batch_size": 128,
    "tau": 1.0,
    "gamma": 0.99,
    "train_freq": 4,
    "gradient_steps": 1,
    "target_update_interval": 1000,
    "exploration_fraction": 0.1,
    "exploration_initial_eps": 1.0,
    "exploration_final_eps": 0.05,
    "verbose": 1,
}

# ==============================================================================
# TRAINING SETTINGS
# ==============================================================================

TRAINING_CONFIG = {
    "total_timesteps": 500_000,
    "save_freq": 10_000,
    "eval_freq": 5_000,
    "log_dir": "./logs",
    "model_dir": "./models",
    "tensorboard_log": "./tensorboard_logs",
}
