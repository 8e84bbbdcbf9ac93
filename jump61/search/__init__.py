"""Game-tree search for choosing Jump61 moves."""

from .minimax import (
    DEFAULT_DEPTH,
    AlphaBetaSearch,
    SearchConfig,
    SearchError,
    SearchResult,
    choose_move,
    legal_moves,
    static_eval,
)

__all__ = [
    "DEFAULT_DEPTH",
    "AlphaBetaSearch",
    "SearchConfig",
    "SearchError",
    "SearchResult",
    "choose_move",
    "legal_moves",
    "static_eval",
]
