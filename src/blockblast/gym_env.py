"""Gymnasium-compatible wrapper for placement-level Block Blast.

Observation is a flat vector suitable for SB3 MlpPolicy by default.
It includes:
  - board mask (10x10=100)
  - one-hot of the piece in each tray slot (3 x 19)
  - optional action mask (3x10x10=300)

Action space is Discrete(300). Only legal placements are enabled in the mask
(exposed via ``info['action_mask']`` and :meth:`action_masks`). Invalid
actions are penalised and treated as no-op.
"""

from __future__ import annotations

from typing import Dict, Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .config import GameConfig
from .pieces import PIECE_KEYS
from .placement_env import PlacementEnv


class BlockBlastGymEnv(gym.Env):
    metadata = {
        "render_modes": ["ansi"],
        "render_fps": 60,
    }

    def __init__(
        self,
        *,
        include_action_mask: bool = True,
        invalid_action_penalty: float = -0.1,
        game_over_penalty: float = -10.0,
        max_steps: Optional[int] = None,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        self._env = PlacementEnv(
            config=config,
            invalid_action_penalty=invalid_action_penalty,
            game_over_penalty=game_over_penalty,
        )
        cfg = self._env.config
        self.include_action_mask = include_action_mask
        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render_mode: {render_mode!r}")
        self.render_mode = render_mode
        self._n_actions = self._env.action_space_n()
        self._board_size = cfg.height * cfg.width
        self._tray_size = cfg.tray_size
        self.action_space = spaces.Discrete(self._n_actions)
        self._obs_size = (
            self._board_size
            + self._tray_size * len(PIECE_KEYS)
            + (self._n_actions if include_action_mask else 0)
        )
        self.observation_space = spaces.Box(
            low=0.0, high=1.0, shape=(self._obs_size,), dtype=np.float32
        )
        self._steps = 0
        self._max_steps = max_steps
        self._last_mask = np.zeros(self._n_actions, dtype=bool)

    # ----------------------- Env API -----------------------
    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        obs, info = self._env.reset(seed=seed)
        self._steps = 0
        return self._convert_obs(obs, info), self._convert_info(info)

    def step(self, action: int):
        obs, reward, done, info = self._env.step(int(action))
        self._steps += 1
        terminated = bool(done)
        truncated = False
        if self._max_steps is not None and self._steps >= self._max_steps:
            truncated = True
        return (
            self._convert_obs(obs, info),
            float(reward),
            terminated,
            truncated,
            self._convert_info(info),
        )

    def render(self):
        if self.render_mode is None:
            return None
        return self._env.render_ascii()

    def close(self):
        return None

    def action_masks(self) -> np.ndarray:
        """Return the mask of legal actions for the current state."""

        return self._last_mask.copy()

    # -------------------- Helpers -------------------------
    def _convert_obs(self, obs: Dict, info: Dict) -> np.ndarray:
        board = np.asarray(obs["board"], dtype=np.float32).reshape(-1)
        tray_oh = np.zeros((self._tray_size, len(PIECE_KEYS)), dtype=np.float32)
        for slot, idx in enumerate(obs["tray"]):
            if 0 <= idx < len(PIECE_KEYS):
                tray_oh[slot, idx] = 1.0
        parts = [board, tray_oh.reshape(-1)]
        if self.include_action_mask:
            parts.append(np.asarray(info["action_mask"], dtype=np.float32))
        return np.concatenate(parts).astype(np.float32)

    def _convert_info(self, info: Dict) -> Dict:
        self._last_mask = np.asarray(info["action_mask"], dtype=bool)
        return {"action_mask": self._last_mask.copy()}
