from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

OwnerArray = NDArray[np.int8]
SpotArray = NDArray[np.int16]

EMPTY_OWNER = 0


class Side(IntEnum):
    RED = 1
    BLUE = 2

    def opposite(self) -> "Side":
        return Side.BLUE if self is Side.RED else Side.RED

    @property
    def marker(self) -> str:
        return "r" if self is Side.RED else "b"

    @classmethod
    def parse(cls, text: str) -> "Side":
        key = text.strip().lower()
        if key in ("red", "r"):
            return cls.RED
        if key in ("blue", "b"):
            return cls.BLUE
        raise ValueError(f"Unknown side: {text!r}")


def owner_from_value(value: int) -> Optional[Side]:
    return None if value == EMPTY_OWNER else Side(int(value))


@dataclass(frozen=True)
class Cell:
    owner: Optional[Side]
    spots: int

    EMPTY: ClassVar["Cell"]

    def __post_init__(self) -> None:
        if self.spots < 0:
            raise ValueError("Cell spot count cannot be negative.")
        if (self.spots == 0) != (self.owner is None):
            raise ValueError("A cell is owned exactly when it holds spots.")

    @property
    def marker(self) -> str:
        return "-" if self.owner is None else self.owner.marker

    def __str__(self) -> str:
        return f"{self.spots}{self.marker}"


Cell.EMPTY = Cell(None, 0)


@dataclass(frozen=True, eq=False)
class BoardState:
    """Frozen copy of a board: its grid plus its undo history."""

    owners: OwnerArray  # shape (N, N), 0 empty, otherwise Side value
    spots: SpotArray  # shape (N, N)
    history: Tuple[Tuple[OwnerArray, SpotArray], ...] = ()

    @staticmethod
    def freeze(owners: np.ndarray, spots: np.ndarray) -> Tuple[OwnerArray, SpotArray]:
        owners = owners.copy()
        spots = spots.copy()
        owners.setflags(write=False)
        spots.setflags(write=False)
        return owners, spots

    @property
    def size(self) -> int:
        return int(self.owners.shape[0])
