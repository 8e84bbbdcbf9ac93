from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Union

from jump61.core import Board, ReadonlyBoard, Side

DEFAULT_DEPTH = 4
WIN_SCORE = math.inf
LOSS_SCORE = -math.inf

BoardLike = Union[Board, ReadonlyBoard]


class SearchError(ValueError):
    pass


@dataclass
class SearchConfig:
    depth: int = DEFAULT_DEPTH
    prune: bool = True


@dataclass
class SearchResult:
    move: int
    value: float
    nodes: int


def legal_moves(board: BoardLike, side: Side) -> List[int]:
    """Squares SIDE may play on BOARD, in ascending index order."""
    return [n for n in range(board.size * board.size) if board.is_legal(side, n)]


def static_eval(board: BoardLike) -> int:
    """Heuristic value of a leaf, relative to the side to move on it."""
    win_value = board.size * board.size
    return win_value - board.num_of_side(board.side_to_move())


class AlphaBetaSearch:
    """Fixed-depth minimax with alpha-beta pruning.

    The root ply always maximizes and plies alternate below it. The search
    explores a private copy of the board, applying each move and restoring
    the saved position before trying the next, so the caller's board is
    never touched.
    """

    def __init__(self, config: Optional[SearchConfig] = None) -> None:
        self.config = config or SearchConfig()
        self._nodes = 0

    # ------------------------------------------------------------------
    def search(self, board: BoardLike, side: Side) -> SearchResult:
        depth = self.config.depth
        if depth < 1:
            raise SearchError(f"Search depth must be at least 1, got {depth}.")
        if board.winner() is not None:
            raise SearchError("Cannot search a position that is already won.")
        if board.side_to_move() != side:
            raise SearchError(f"It is not {side.name}'s turn to move.")

        work = Board.copy_of(board)
        self._nodes = 1
        alpha, beta = LOSS_SCORE, WIN_SCORE
        best_move: Optional[int] = None
        best_value = LOSS_SCORE

        for move in legal_moves(work, side):
            saved = work.snapshot()
            work.add_spot(side, move)
            value = self._minimax(work, depth - 1, False, alpha, beta)
            work.restore(saved)
            # Strict comparison: the first of several equal moves is kept.
            if best_move is None or value > best_value:
                best_move = move
                best_value = value
            alpha = max(alpha, value)
            if self.config.prune and beta <= alpha:
                break

        if best_move is None:
            raise SearchError(f"{side.name} has no legal move.")
        return SearchResult(move=best_move, value=best_value, nodes=self._nodes)

    def choose_move(self, board: BoardLike, side: Side) -> int:
        return self.search(board, side).move

    def evaluate(self, board: BoardLike) -> float:
        """Value of BOARD for its side to move, searched to the configured depth."""
        work = Board.copy_of(board)
        self._nodes = 0
        return self._minimax(work, self.config.depth, True, LOSS_SCORE, WIN_SCORE)

    # ------------------------------------------------------------------
    def _minimax(self, board: Board, depth: int, maximizing: bool, alpha: float, beta: float) -> float:
        self._nodes += 1
        to_move = board.side_to_move()
        winner = board.winner()
        if winner is not None:
            return WIN_SCORE if winner == to_move else LOSS_SCORE
        if depth == 0:
            return static_eval(board)

        moves = legal_moves(board, to_move)
        if not moves:
            return static_eval(board)

        best = LOSS_SCORE if maximizing else WIN_SCORE
        for move in moves:
            saved = board.snapshot()
            board.add_spot(to_move, move)
            value = self._minimax(board, depth - 1, not maximizing, alpha, beta)
            board.restore(saved)
            if maximizing:
                best = max(best, value)
                alpha = max(alpha, value)
            else:
                best = min(best, value)
                beta = min(beta, value)
            if self.config.prune and beta <= alpha:
                break
        return best


def choose_move(board: BoardLike, side: Side, depth: int = DEFAULT_DEPTH) -> int:
    """Return the linear index of the move SIDE should play on BOARD."""
    return AlphaBetaSearch(SearchConfig(depth=depth)).choose_move(board, side)
