"""Placement-level environment for Block Blast.

Each action is a complete move: choose a tray slot and an anchor cell, place
the piece, score any cleared lines and, once the tray is empty, deal the next
one.  Clears and refills happen immediately instead of after the animation
delays used by the interactive front-end.

Example usage
-------------

>>> from blockblast.placement_env import PlacementEnv
>>> env = PlacementEnv()
>>> obs, info = env.reset(seed=0)
>>> done = False
>>> while not done:
...     actions = info["action_list"]
...     if not actions:
...         break
...     obs, reward, done, info = env.step(actions[0].action)
>>> obs["score"] >= 0
True

Notes
-----
- Actions are flat indices ``slot * H * W + row * W + col``.
- ``info`` contains a fixed-size boolean ``action_mask`` and the concrete
  ``action_list`` of :class:`Placement` objects that are legal right now.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
import logging
import random

import numpy as np

from .config import GameConfig
from .game_state import GameState
from .pieces import PIECE_KEYS
from .utils import legal_anchors


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Placement:
    slot: int
    row: int
    col: int
    action: int


class PlacementEnv:
    """Placement-level environment with score-based rewards.

    - Action: flat index of ``(slot, row, col)``.  Indices whose slot is empty
      or whose placement is illegal are invalid; they incur
      ``invalid_action_penalty`` and leave the state unchanged.
    - Reward: the score gained by the move (cells placed plus line points).
      ``game_over_penalty`` is added once when the episode ends.
    - Observation: dictionary with the 0/1 occupancy grid, the catalog index
      of each tray piece (``-1`` for empty slots) and the score.
    """

    def __init__(
        self,
        *,
        config: Optional[GameConfig] = None,
        invalid_action_penalty: float = -1.0,
        game_over_penalty: float = 0.0,
    ) -> None:
        self.config = config or GameConfig.headless()
        self.invalid_action_penalty = invalid_action_penalty
        self.game_over_penalty = game_over_penalty
        self._rng = random.Random()
        self._state: Optional[GameState] = None
        self._cached_actions: List[Placement] = []
        self._done = False

    @property
    def state(self) -> GameState:
        if self._state is None:
            self._state = GameState(config=self.config, rng=self._rng)
            self._state.start_session()
        return self._state

    def seed(self, seed: Optional[int]) -> None:
        """Seed the RNG used to deal pieces."""

        if seed is not None:
            self._rng.seed(seed)

    def action_space_n(self) -> int:
        return self.config.tray_size * self.config.height * self.config.width

    def encode(self, slot: int, row: int, col: int) -> int:
        return (slot * self.config.height + row) * self.config.width + col

    def decode(self, action: int) -> Tuple[int, int, int]:
        slot, cell = divmod(action, self.config.height * self.config.width)
        row, col = divmod(cell, self.config.width)
        return slot, row, col

    def reset(self, *, seed: Optional[int] = None) -> Tuple[Dict, Dict]:
        """Start a new session and return ``(observation, info)``."""

        self.seed(seed)
        self._state = GameState(config=self.config, rng=self._rng)
        self._state.start_session()
        self._done = self._state.game_over
        return self._observe()

    def _enumerate_placements(self) -> List[Placement]:
        state = self.state
        placements: List[Placement] = []
        for slot, piece in enumerate(state.tray):
            if piece is None:
                continue
            for row, col in legal_anchors(state.board, piece.key):
                placements.append(Placement(slot, row, col, self.encode(slot, row, col)))
        return placements

    def _observe(self) -> Tuple[Dict, Dict]:
        state = self.state
        idx_map = {key: i for i, key in enumerate(PIECE_KEYS)}
        tray = [idx_map[piece.key] if piece is not None else -1 for piece in state.tray]

        actions = self._enumerate_placements()
        self._cached_actions = actions
        mask = np.zeros(self.action_space_n(), dtype=bool)
        for placement in actions:
            mask[placement.action] = True

        obs = {
            "board": state.board.occupancy().astype(np.uint8),
            "tray": tray,
            "score": state.score,
        }
        info = {
            "action_mask": mask,
            "action_list": actions,
        }
        return obs, info

    def step(self, action: int) -> Tuple[Dict, float, bool, Dict]:
        """Apply ``action`` and return ``(obs, reward, done, info)``."""

        if self._done:
            obs, info = self._observe()
            return obs, 0.0, True, info

        if not self._cached_actions:
            self._observe()

        legal = {placement.action: placement for placement in self._cached_actions}
        placement = legal.get(int(action))
        if placement is None:
            obs, info = self._observe()
            return obs, float(self.invalid_action_penalty), False, info

        result = self.state.commit_placement(placement.slot, placement.row, placement.col)
        assert result is not None
        reward = float(result.score_delta)

        self._done = self.state.game_over
        if self._done:
            LOGGER.debug("Episode finished after %d moves, score %d", self.state.moves, self.state.score)
            reward += float(self.game_over_penalty)

        obs, info = self._observe()
        return obs, reward, self._done, info

    def legal_actions(self) -> List[Placement]:
        """Return the placements available in the current state."""

        if not self._cached_actions:
            self._observe()
        return list(self._cached_actions)

    def render_ascii(self) -> str:
        """Return a simple ASCII rendering of the current board."""

        return "\n".join(
            "".join("#" if v else "." for v in row) for row in self.state.board.occupancy()
        )
