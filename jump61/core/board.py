from __future__ import annotations

from collections import deque
from typing import Callable, Deque, Iterator, List, Optional, Tuple, Union

import numpy as np

from .state import EMPTY_OWNER, BoardState, Cell, OwnerArray, Side, SpotArray, owner_from_value

MAX_BOARD_SIZE = 10
DEFAULT_BOARD_SIZE = 6
HISTORY_LIMIT = 1024
DELIMITER = "==="

Position = Union[int, Tuple[int, int]]
Notifier = Callable[["Board"], None]


class BoardError(ValueError):
    pass


def _nop(board: "Board") -> None:
    return None


def _check_size(size: int) -> None:
    if size <= 1:
        raise BoardError(f"Board size must be greater than 1, got {size}.")
    if size > MAX_BOARD_SIZE:
        raise BoardError(f"Board size must be at most {MAX_BOARD_SIZE}, got {size}.")


class Board:
    """State of a Jump61 game.

    Squares are addressed either by a linear index, numbering squares by rows
    from 0 to size*size - 1, or by a 1-based ``(row, col)`` pair. The side to
    move is derived from the number of spots on the board, so the grid is the
    only game state. Every completed move pushes the resulting stable
    position onto a bounded undo history whose last entry is the current one;
    a position edited with ``set`` is pushed when the next move starts.
    """

    def __init__(
        self,
        size: int = DEFAULT_BOARD_SIZE,
        *,
        history_limit: int = HISTORY_LIMIT,
        notifier: Optional[Notifier] = None,
    ) -> None:
        if history_limit < 1:
            raise BoardError("history_limit must be at least 1.")
        self._history_limit = history_limit
        self._notifier: Notifier = notifier or _nop
        self._readonly = ReadonlyBoard(self)
        self._reset(size)

    @classmethod
    def copy_of(cls, board: "Board") -> "Board":
        """Board with BOARD's contents, a fresh history and no notifier."""
        if isinstance(board, ReadonlyBoard):
            board = board._board
        copy = cls(board.size, history_limit=board._history_limit)
        copy._owners = board._owners.copy()
        copy._spots = board._spots.copy()
        copy._history.clear()
        copy._mark_undo()
        return copy

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def clear(self, size: int) -> None:
        self._reset(size)
        self._announce()

    def copy_from(self, board: "Board") -> None:
        """Copy BOARD's grid and undo history into this board."""
        self.restore(board.snapshot())

    def snapshot(self) -> BoardState:
        owners, spots = BoardState.freeze(self._owners, self._spots)
        return BoardState(owners=owners, spots=spots, history=tuple(self._history))

    def restore(self, state: BoardState) -> None:
        if state.size != self.size:
            self._set_geometry(state.size)
        self._owners = state.owners.copy()
        self._spots = state.spots.copy()
        self._history = deque(state.history, maxlen=self._history_limit)
        if not self._history:
            self._mark_undo()
        self._announce()

    def set_notifier(self, notifier: Optional[Notifier]) -> None:
        self._notifier = notifier or _nop
        self._announce()

    def readonly_view(self) -> "ReadonlyBoard":
        return self._readonly

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    @property
    def size(self) -> int:
        return self._size

    def exists(self, *pos: int) -> bool:
        if len(pos) == 2:
            row, col = pos
            return 1 <= row <= self._size and 1 <= col <= self._size
        if len(pos) == 1:
            return 0 <= pos[0] < self._size * self._size
        return False

    def index(self, pos: Position) -> int:
        """Return the linear index of POS, which is an index or (row, col)."""
        if isinstance(pos, tuple):
            row, col = pos
            if not self.exists(row, col):
                raise BoardError(f"No square at row {row}, column {col}.")
            return (row - 1) * self._size + (col - 1)
        n = int(pos)
        if not self.exists(n):
            raise BoardError(f"No square numbered {n}.")
        return n

    def row(self, pos: Position) -> int:
        return self.index(pos) // self._size + 1

    def col(self, pos: Position) -> int:
        return self.index(pos) % self._size + 1

    def move_string(self, pos: Position) -> str:
        return f"{self.row(pos)} {self.col(pos)}"

    def capacity(self, pos: Position) -> int:
        n = self.index(pos)
        return int(self._capacity.flat[n])

    def neighbors(self, pos: Position) -> List[int]:
        n = self.index(pos)
        return list(self._neighbor_table[n])

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get(self, pos: Position) -> Cell:
        n = self.index(pos)
        spots = int(self._spots.flat[n])
        if spots == 0:
            return Cell.EMPTY
        return Cell(owner_from_value(self._owners.flat[n]), spots)

    def cells(self) -> Iterator[Cell]:
        for n in range(self._size * self._size):
            yield self.get(n)

    def total_spots(self) -> int:
        return int(self._spots.sum())

    def side_to_move(self) -> Side:
        """Side that moves next. Once the game is won it says nothing about the result."""
        return Side.RED if ((self.total_spots() + self._size) & 1) == 0 else Side.BLUE

    def num_of_side(self, side: Side) -> int:
        return int(np.count_nonzero(self._owners == int(side)))

    def winner(self) -> Optional[Side]:
        for side in Side:
            if np.all(self._owners == int(side)):
                return side
        return None

    def is_legal(self, side: Side, pos: Position) -> bool:
        n = self.index(pos)
        if self.side_to_move() != side:
            return False
        return bool(self._owners.flat[n] != int(side.opposite()))

    def legal_moves(self, side: Side) -> List[int]:
        if self.side_to_move() != side:
            return []
        opponent = int(side.opposite())
        return [int(n) for n in np.flatnonzero(self._owners.ravel() != opponent)]

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def add_spot(self, side: Side, pos: Position) -> None:
        """Add a spot of SIDE at POS and resolve any resulting overflow."""
        n = self.index(pos)
        if not self.is_legal(side, n):
            raise BoardError(f"Illegal move for {side.name} at {self.move_string(n)}.")
        if not self._at_checkpoint():
            self._mark_undo()
        self._spots.flat[n] += 1
        self._owners.flat[n] = int(side)
        if self._spots.flat[n] > self._capacity.flat[n]:
            self._jump(side, n)
        self._mark_undo()
        self._announce()

    def set(self, pos: Position, spots: int, side: Optional[Side] = None) -> None:
        """Set POS to SPOTS spots of SIDE without overflow.

        The edit is not checkpointed on its own; the next move records the
        edited position before it is applied.
        """
        n = self.index(pos)
        if spots < 0:
            raise BoardError("Spot count cannot be negative.")
        if spots > 0 and side is None:
            raise BoardError("A non-empty square needs an owner.")
        self._spots.flat[n] = spots
        self._owners.flat[n] = EMPTY_OWNER if spots == 0 else int(side)
        self._announce()

    def undo(self) -> None:
        if len(self._history) <= 1:
            return
        self._history.pop()
        owners, spots = self._history[-1]
        self._owners = owners.copy()
        self._spots = spots.copy()
        self._announce()

    def history_length(self) -> int:
        return len(self._history)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def __str__(self) -> str:
        lines = [DELIMITER]
        for r in range(1, self._size + 1):
            tokens = " ".join(str(self.get((r, c))) for c in range(1, self._size + 1))
            lines.append(f"    {tokens}")
        lines.append(DELIMITER)
        return "\n".join(lines)

    def display_string(self) -> str:
        lines = []
        for r in range(1, self._size + 1):
            tokens = " ".join(str(self.get((r, c))) for c in range(1, self._size + 1))
            lines.append(f"{r:2d} {tokens}")
        footer = "  " + "".join(f"{c:3d}" for c in range(1, self._size + 1))
        lines.append(footer)
        return "\n".join(lines)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self._size == other._size
            and np.array_equal(self._owners, other._owners)
            and np.array_equal(self._spots, other._spots)
        )

    def __repr__(self) -> str:
        return f"Board(size={self._size}, to_move={self.side_to_move().name})\n{self}"

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _reset(self, size: int) -> None:
        _check_size(size)
        self._set_geometry(size)
        self._owners: OwnerArray = np.zeros((size, size), dtype=np.int8)
        self._spots: SpotArray = np.zeros((size, size), dtype=np.int16)
        self._history: Deque[Tuple[OwnerArray, SpotArray]] = deque(maxlen=self._history_limit)
        self._mark_undo()

    def _set_geometry(self, size: int) -> None:
        _check_size(size)
        self._size = size
        capacity = np.full((size, size), 4, dtype=np.int16)
        capacity[0, :] -= 1
        capacity[-1, :] -= 1
        capacity[:, 0] -= 1
        capacity[:, -1] -= 1
        self._capacity = capacity
        table = []
        for n in range(size * size):
            r, c = divmod(n, size)
            adjacent = []
            if c > 0:
                adjacent.append(n - 1)
            if c < size - 1:
                adjacent.append(n + 1)
            if r > 0:
                adjacent.append(n - size)
            if r < size - 1:
                adjacent.append(n + size)
            table.append(tuple(adjacent))
        self._neighbor_table: Tuple[Tuple[int, ...], ...] = tuple(table)

    def _mark_undo(self) -> None:
        self._history.append(BoardState.freeze(self._owners, self._spots))

    def _at_checkpoint(self) -> bool:
        owners, spots = self._history[-1]
        return np.array_equal(owners, self._owners) and np.array_equal(spots, self._spots)

    def _announce(self) -> None:
        self._notifier(self)

    def _jump(self, side: Side, start: int) -> None:
        """Resolve overflow, assuming START is the only over-full square."""
        queue: Deque[int] = deque([start])
        while queue:
            n = queue.popleft()
            capacity = int(self._capacity.flat[n])
            if self._spots.flat[n] <= capacity:
                continue
            for neighbor in self._neighbor_table[n]:
                self._spots.flat[neighbor] += 1
                self._owners.flat[neighbor] = int(side)
                queue.append(neighbor)
            if self.winner() == side:
                queue.clear()
                self._announce()
                return
            self._spots.flat[n] -= capacity
            if self._spots.flat[n] > capacity:
                queue.append(n)
            self._announce()


class ReadonlyBoard:
    """Query-only view of a Board, for observers that must not mutate it."""

    def __init__(self, board: Board) -> None:
        self._board = board

    @property
    def size(self) -> int:
        return self._board.size

    def exists(self, *pos: int) -> bool:
        return self._board.exists(*pos)

    def index(self, pos: Position) -> int:
        return self._board.index(pos)

    def row(self, pos: Position) -> int:
        return self._board.row(pos)

    def col(self, pos: Position) -> int:
        return self._board.col(pos)

    def move_string(self, pos: Position) -> str:
        return self._board.move_string(pos)

    def capacity(self, pos: Position) -> int:
        return self._board.capacity(pos)

    def neighbors(self, pos: Position) -> List[int]:
        return self._board.neighbors(pos)

    def get(self, pos: Position) -> Cell:
        return self._board.get(pos)

    def cells(self) -> Iterator[Cell]:
        return self._board.cells()

    def total_spots(self) -> int:
        return self._board.total_spots()

    def side_to_move(self) -> Side:
        return self._board.side_to_move()

    def num_of_side(self, side: Side) -> int:
        return self._board.num_of_side(side)

    def winner(self) -> Optional[Side]:
        return self._board.winner()

    def is_legal(self, side: Side, pos: Position) -> bool:
        return self._board.is_legal(side, pos)

    def legal_moves(self, side: Side) -> List[int]:
        return self._board.legal_moves(side)

    def snapshot(self) -> BoardState:
        return self._board.snapshot()

    def copy(self) -> Board:
        return Board.copy_of(self._board)

    def display_string(self) -> str:
        return self._board.display_string()

    def __str__(self) -> str:
        return str(self._board)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ReadonlyBoard):
            other = other._board
        return self._board == other
