from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from block_blast.game import BlockBlastGame, GameConfig


PIECE_CANVAS = 5


def _compute_action_mask(game: BlockBlastGame) -> np.ndarray:
    size = game.grid.size
    k = game.config.pieces_per_set
    mask = np.zeros((k, size, size), dtype=np.bool_)
    for piece_idx, row, col in game.valid_actions():
        if 0 <= piece_idx < k:
            mask[piece_idx, row, col] = True
    return mask


class BlockBlastEnv(gym.Env):
    """Places bag pieces directly by (piece, row, col).

    Sweeps are completed instantly after every placement so each step sees a
    settled board. The episode terminates when the game is won or lost.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 invalid_action_penalty: float = -1.0,
                 terminal_penalty: float = 0.0) -> None:
        super().__init__()
        self.game = BlockBlastGame(config)
        self.render_mode = render_mode
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.terminal_penalty = float(terminal_penalty)

        size = self.game.config.board_size
        k = self.game.config.pieces_per_set

        # Observation space: occupancy grid, padded piece bitmaps, live piece count
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=0, high=1, shape=(size, size), dtype=np.int8),
                "pieces": spaces.Box(low=0, high=1, shape=(k, PIECE_CANVAS, PIECE_CANVAS), dtype=np.int8),
                "pieces_remaining": spaces.Discrete(k + 1),
            }
        )

        # Action: (piece_idx, row, col); shapes are never rotated
        self.action_space = spaces.MultiDiscrete((k, size, size))

    def _get_obs(self) -> Dict[str, Any]:
        k = self.game.config.pieces_per_set
        pieces = np.zeros((k, PIECE_CANVAS, PIECE_CANVAS), dtype=np.int8)
        for i, shape in enumerate(self.game.bag.shapes[:k]):
            pieces[i] = shape.padded(PIECE_CANVAS)
        return {
            "grid": self.game.grid.occupancy(),
            "pieces": pieces,
            "pieces_remaining": len(self.game.bag.shapes),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": _compute_action_mask(self.game),
            "valid_actions": self.game.valid_actions(),
            "score": self.game.score,
            "lines_cleared": self.game.lines_cleared_total,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        obs = self._get_obs()
        return obs, self._get_info()

    def step(self, action):
        piece_idx, row, col = map(int, action)
        score_before = self.game.score

        success = self.game.place(piece_idx, row, col)
        self.game.finish_animation()

        if success:
            reward = float(self.game.score - score_before)
        else:
            reward = self.invalid_action_penalty

        terminated = bool(self.game.is_over)
        if self.game.lost:
            reward += self.terminal_penalty

        obs = self._get_obs()
        info = self._get_info()
        info["placed"] = success
        return obs, reward, terminated, False, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        cell = 12
        size = self.game.grid.size
        img = np.full((size * cell, size * cell, 3), 30, dtype=np.uint8)
        filled = self.game.grid.occupancy().astype(bool)
        for row in range(size):
            for col in range(size):
                if filled[row, col]:
                    img[row * cell:(row + 1) * cell, col * cell:(col + 1) * cell, :] = self.game.grid.colors[row, col]
        return img

    def close(self) -> None:
        pass
