from __future__ import annotations

import random
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import Action, Color, Game, GameConfig


class FallingBlocksEnv(gym.Env):
    """One engine tick per step; actions are the `Action` values.

    Reward is the number of rows the step removed (the engine clears rows one
    tick after the lock that completed them), plus optional shaping penalties.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 max_episode_steps: int = 10000,
                 step_penalty: float = 0.0,
                 terminal_penalty: float = 0.0) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.game = Game.from_config(self.config)
        self.render_mode = render_mode

        self.max_episode_steps = int(max_episode_steps)
        self.step_penalty = float(step_penalty)
        self.terminal_penalty = float(terminal_penalty)

        h, w = self.config.height, self.config.width
        self.observation_space = spaces.Box(
            low=0, high=int(max(Color)), shape=(h, w), dtype=np.int8
        )
        self.action_space = spaces.Discrete(len(Action))

        self._last_obs: Optional[np.ndarray] = None
        self._steps = 0

    def _get_info(self) -> Dict[str, Any]:
        return {
            "rows_cleared": self.game.last_rows_cleared,
            "rows_cleared_total": self.game.rows_cleared_total,
            "steps": self._steps,
            "has_piece": self.game.get_piece() is not None,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.rng = random.Random(seed)
        self.game.reset()
        self.game.start()
        self._steps = 0
        obs = self.game.get_state()
        self._last_obs = obs
        return obs, self._get_info()

    def step(self, action: int):
        self.game.update(Action(int(action)))
        self._steps += 1

        reward = float(self.game.last_rows_cleared) + self.step_penalty
        terminated = self.game.game_over()
        truncated = self._steps >= self.max_episode_steps
        if terminated:
            reward += self.terminal_penalty

        obs = self.game.get_state()
        self._last_obs = obs
        return obs, reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            from falling_blocks.visualization.renderer import color_for_value

            grid = self._last_obs if self._last_obs is not None else self.game.get_state()
            cell = 12
            h, w = grid.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color_for_value(int(grid[y, x]))
            return img
        return None

    def close(self) -> None:
        pass
