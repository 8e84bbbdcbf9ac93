"""Core game logic for Jump61."""

from .state import BoardState, Cell, Side
from .board import (
    DEFAULT_BOARD_SIZE,
    HISTORY_LIMIT,
    MAX_BOARD_SIZE,
    Board,
    BoardError,
    Position,
    ReadonlyBoard,
)

__all__ = [
    "Board",
    "BoardError",
    "BoardState",
    "Cell",
    "Side",
    "Position",
    "ReadonlyBoard",
    "DEFAULT_BOARD_SIZE",
    "HISTORY_LIMIT",
    "MAX_BOARD_SIZE",
]
