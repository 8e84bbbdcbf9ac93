from __future__ import annotations

from typing import Dict, Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from jump61.core import DEFAULT_BOARD_SIZE, Board, ReadonlyBoard, Side
from jump61.features import BOARD_CHANNELS, build_board_tensor


class Jump61Env(gym.Env):
    metadata = {"render_modes": ["ansi"], "render_fps": 4}

    def __init__(
        self,
        size: int = DEFAULT_BOARD_SIZE,
        *,
        max_ply: int = 400,
        enforce_legal_actions: bool = True,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        self._size = size
        self._max_ply = max_ply
        self._enforce_legal = enforce_legal_actions
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=0.0, high=1.0, shape=(BOARD_CHANNELS, size, size), dtype=np.float32
        )
        self.action_space = spaces.Discrete(size * size)

        self._board = Board(size)
        self._ply = 0

    @property
    def board(self) -> ReadonlyBoard:
        return self._board.readonly_view()

    @property
    def ply(self) -> int:
        return self._ply

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        self._max_ply = options.get("max_ply", self._max_ply) if options else self._max_ply
        self._board.clear(self._size)
        self._ply = 0
        return self._build_observation(), self._build_info()

    def step(self, action_index: int):
        if not self.action_space.contains(action_index):
            raise ValueError(f"Action index {action_index} out of bounds.")
        if self._board.winner() is not None:
            raise ValueError("Game is already over; call reset().")

        side = self._board.side_to_move()
        legal_mask = self.legal_action_mask()
        if self._enforce_legal and not legal_mask[action_index]:
            raise ValueError("Illegal action provided and enforce_legal_actions=True.")

        self._board.add_spot(side, int(action_index))
        self._ply += 1

        winner = self._board.winner()
        reward = self._compute_reward(winner)
        terminated = winner is not None
        truncated = not terminated and self._ply >= self._max_ply

        return self._build_observation(), reward, terminated, truncated, self._build_info()

    def undo(self) -> None:
        if self._board.history_length() > 1:
            self._board.undo()
            self._ply = max(0, self._ply - 1)

    def legal_action_mask(self) -> np.ndarray:
        mask = np.zeros(self.action_space.n, dtype=np.int8)
        if self._board.winner() is None:
            for n in self._board.legal_moves(self._board.side_to_move()):
                mask[n] = 1
        return mask

    def render(self):
        if self.render_mode != "ansi":
            raise NotImplementedError("Only 'ansi' render mode is supported.")
        return self._board.display_string()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _build_observation(self) -> np.ndarray:
        return build_board_tensor(self._board)

    def _build_info(self) -> Dict[str, object]:
        return {
            "legal_action_mask": self.legal_action_mask(),
            "side_to_move": self._board.side_to_move(),
        }

    def _compute_reward(self, winner: Optional[Side]) -> float:
        if winner == Side.RED:
            return 1.0
        if winner == Side.BLUE:
            return -1.0
        return 0.0
