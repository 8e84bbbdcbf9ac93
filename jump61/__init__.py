"""Jump61 rules engine and search AI."""

from . import core, env, evaluation, features, search
from .core import Board, BoardError, Cell, ReadonlyBoard, Side
from .env import Jump61Env
from .evaluation import EvaluationResult, RandomPolicy, SearchPolicy, evaluate_policies
from .features import BOARD_CHANNELS, build_board_tensor
from .search import AlphaBetaSearch, SearchConfig, SearchError, SearchResult, choose_move

__all__ = [
    "core",
    "env",
    "evaluation",
    "features",
    "search",
    "Board",
    "BoardError",
    "Cell",
    "ReadonlyBoard",
    "Side",
    "Jump61Env",
    "BOARD_CHANNELS",
    "build_board_tensor",
    "AlphaBetaSearch",
    "SearchConfig",
    "SearchError",
    "SearchResult",
    "choose_move",
    "EvaluationResult",
    "RandomPolicy",
    "SearchPolicy",
    "evaluate_policies",
]
