from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from jump61.core import DEFAULT_BOARD_SIZE, ReadonlyBoard, Side
from jump61.env import Jump61Env
from jump61.search import AlphaBetaSearch, SearchConfig


class Policy:
    """Policy interface producing move probabilities over legal squares."""

    def act(self, board: ReadonlyBoard, legal_mask: np.ndarray) -> np.ndarray:
        raise NotImplementedError


class RandomPolicy(Policy):
    def __init__(self, rng: Optional[np.random.Generator] = None) -> None:
        self.rng = rng or np.random.default_rng()

    def act(self, board: ReadonlyBoard, legal_mask: np.ndarray) -> np.ndarray:
        probs = np.zeros_like(legal_mask, dtype=np.float32)
        indices = np.flatnonzero(legal_mask)
        if len(indices) == 0:
            return probs
        probs[int(self.rng.choice(indices))] = 1.0
        return probs


class SearchPolicy(Policy):
    """Deterministic policy playing the alpha-beta search's move."""

    def __init__(self, config: Optional[SearchConfig] = None) -> None:
        self.search = AlphaBetaSearch(config)

    def act(self, board: ReadonlyBoard, legal_mask: np.ndarray) -> np.ndarray:
        probs = np.zeros_like(legal_mask, dtype=np.float32)
        move = self.search.choose_move(board, board.side_to_move())
        probs[move] = 1.0
        return probs


@dataclass
class EvaluationConfig:
    episodes: int = 10
    size: int = DEFAULT_BOARD_SIZE
    max_ply: int = 400
    depth: int = 2
    baseline: str = "random"
    seed: Optional[int] = None


@dataclass
class EvaluationResult:
    games_played: int
    red_wins: int
    blue_wins: int
    draws: int
    average_length: float

    def winrate_red(self) -> float:
        return self.red_wins / max(1, self.games_played)

    def winrate_blue(self) -> float:
        return self.blue_wins / max(1, self.games_played)


def evaluate_policies(
    policy_red: Policy,
    policy_blue: Policy,
    *,
    episodes: int,
    size: int = DEFAULT_BOARD_SIZE,
    max_ply: int = 400,
    rng: Optional[np.random.Generator] = None,
    env_factory: Optional[Callable[[], Jump61Env]] = None,
    on_episode: Optional[Callable[[int], None]] = None,
) -> EvaluationResult:
    rng = rng or np.random.default_rng()
    env_factory = env_factory or (lambda: Jump61Env(size, max_ply=max_ply))

    red_wins = 0
    blue_wins = 0
    draws = 0
    total_ply = 0

    for episode in range(episodes):
        env = env_factory()
        obs, info = env.reset()
        terminated = truncated = False

        while not (terminated or truncated):
            legal_mask = info["legal_action_mask"]
            policy = policy_red if info["side_to_move"] == Side.RED else policy_blue
            probs = policy.act(env.board, legal_mask)
            if probs.sum() <= 0:
                probs = legal_mask.astype(np.float32)
            probs = probs / probs.sum()
            action_index = int(rng.choice(len(probs), p=probs))
            obs, reward, terminated, truncated, info = env.step(action_index)

        total_ply += env.ply
        winner = env.board.winner()
        if winner == Side.RED:
            red_wins += 1
        elif winner == Side.BLUE:
            blue_wins += 1
        else:
            draws += 1
        if on_episode is not None:
            on_episode(episode)

    average_length = total_ply / max(1, episodes)
    return EvaluationResult(
        games_played=episodes,
        red_wins=red_wins,
        blue_wins=blue_wins,
        draws=draws,
        average_length=average_length,
    )
