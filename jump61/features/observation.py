from __future__ import annotations

from typing import Optional, Union

import numpy as np

from jump61.core import Board, ReadonlyBoard, Side

BOARD_CHANNELS = 3  # own fill, opponent fill, side-to-move plane


def build_board_tensor(board: Union[Board, ReadonlyBoard], side: Optional[Side] = None) -> np.ndarray:
    """Return board tensor with shape (3, N, N) channel-first, seen by SIDE."""
    if side is None:
        side = board.side_to_move()
    size = board.size
    tensor = np.zeros((BOARD_CHANNELS, size, size), dtype=np.float32)
    for n in range(size * size):
        cell = board.get(n)
        if cell.owner is None:
            continue
        row, col = divmod(n, size)
        channel = 0 if cell.owner == side else 1
        tensor[channel, row, col] = min(1.0, cell.spots / board.capacity(n))
    if board.side_to_move() == side:
        tensor[2] = 1.0
    return tensor
