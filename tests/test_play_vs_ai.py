import json
from pathlib import Path

from scripts.play_vs_ai import parse_move, replay_logged_game

from jump61 import Board


def create_sample_log(path: Path) -> None:
    moves = [
        {"move_index": 0, "actor": "human", "side": "red", "row": 1, "col": 1},
        {"move_index": 1, "actor": "ai", "side": "blue", "row": 2, "col": 2},
    ]
    log = {"metadata": {"size": 2}, "moves": moves}
    path.write_text(json.dumps(log))


def test_replay_logged_game(tmp_path):
    log_path = tmp_path / "game.json"
    create_sample_log(log_path)
    summary = replay_logged_game(log_path, verbose=False)
    assert summary["moves"] == 2
    assert summary["winner"] is None
    assert summary["board"] == "===\n    1r 0-\n    0- 1b\n==="


def test_parse_move():
    board = Board(3)
    assert parse_move(board, "2 3") == 5
    assert parse_move(board, "4 1") is None
    assert parse_move(board, "undo") is None
