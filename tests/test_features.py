import numpy as np

from jump61.core import Board, Side
from jump61.features import BOARD_CHANNELS, build_board_tensor


def test_board_tensor_from_each_side():
    board = Board(2)
    board.add_spot(Side.RED, (1, 1))

    red_view = build_board_tensor(board, Side.RED)
    blue_view = build_board_tensor(board, Side.BLUE)

    assert red_view.shape == (BOARD_CHANNELS, 2, 2)
    assert red_view[0, 0, 0] == 0.5
    assert red_view[1].sum() == 0
    assert not red_view[2].any()
    assert blue_view[1, 0, 0] == 0.5
    assert np.all(blue_view[2] == 1.0)


def test_board_tensor_defaults_to_side_to_move():
    board = Board(3)
    board.set((2, 2), 3, Side.BLUE)
    board.set((1, 1), 1, Side.RED)
    tensor = build_board_tensor(board.readonly_view())

    assert board.side_to_move() == Side.BLUE
    assert tensor[0, 1, 1] == 0.75
    assert tensor[1, 0, 0] == 0.5
