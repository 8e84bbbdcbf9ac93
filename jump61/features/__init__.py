"""Feature extraction helpers for Jump61."""

from .observation import BOARD_CHANNELS, build_board_tensor

__all__ = ["BOARD_CHANNELS", "build_board_tensor"]
