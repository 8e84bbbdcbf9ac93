#!/usr/bin/env python3
"""Play Jump61 against the search AI via the console, with optional logging & replay."""

import argparse
import json
import sys
from pathlib import Path
from typing import Dict, List, Optional

from jump61 import AlphaBetaSearch, Board, SearchConfig, Side
from jump61.core import DEFAULT_BOARD_SIZE


def parse_move(board: Board, raw: str) -> Optional[int]:
    parts = raw.split()
    if len(parts) != 2 or not all(part.isdigit() for part in parts):
        return None
    row, col = int(parts[0]), int(parts[1])
    if not board.exists(row, col):
        return None
    return board.index((row, col))


def prompt_human_move(board: Board, side: Side) -> Optional[int]:
    """Read a move for SIDE; None means the human asked for an undo."""
    while True:
        raw = input(f"{side.name.lower()}> ").strip()
        if raw.lower() in {"q", "quit", "exit"}:
            print("Quitting.")
            sys.exit(0)
        if raw.lower() == "undo":
            return None
        move = parse_move(board, raw)
        if move is None:
            print("Enter a move as '<row> <col>'.")
            continue
        if not board.is_legal(side, move):
            print("Illegal move.")
            continue
        return move


def save_log(log: Dict, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(log, indent=2))
    print(f"Saved log to {path}.")


def replay_logged_game(log_path: Path, *, verbose: bool = True) -> Dict[str, object]:
    data = json.loads(log_path.read_text())
    size = data.get("metadata", {}).get("size", DEFAULT_BOARD_SIZE)
    moves = data.get("moves", [])
    board = Board(size)
    if verbose:
        print("Replaying logged game.")
        print(board.display_string())
    for entry in moves:
        side = Side.parse(entry["side"])
        board.add_spot(side, (entry["row"], entry["col"]))
        if verbose:
            actor = entry.get("actor", "unknown")
            print(f"{actor} ({side.name}) plays {entry['row']} {entry['col']}")
            print(board.display_string())
    winner = board.winner()
    summary = {
        "winner": winner.name if winner is not None else None,
        "moves": len(moves),
        "board": str(board),
    }
    if verbose:
        print(f"Result: {summary['winner'] or 'unfinished'}")
    return summary


def play_interactive(args: argparse.Namespace) -> None:
    board = Board(args.size)
    search = AlphaBetaSearch(SearchConfig(depth=args.depth))
    human_side = Side.parse(args.human_side)
    log_records: List[Dict] = []

    while board.winner() is None:
        side = board.side_to_move()
        print()
        print(board.display_string())

        if side == human_side:
            move = prompt_human_move(board, side)
            if move is None:
                # Undo the human's last move together with the AI's reply.
                for _ in range(2):
                    if board.history_length() > 1:
                        board.undo()
                        log_records.pop()
                continue
            actor = "human"
        else:
            move = search.choose_move(board, side)
            actor = "ai"
            print(f"AI ({side.name}) plays {board.move_string(move)}")

        log_records.append(
            {
                "move_index": len(log_records),
                "actor": actor,
                "side": side.name.lower(),
                "row": board.row(move),
                "col": board.col(move),
            }
        )
        board.add_spot(side, move)

    print("\nFinal board:")
    print(board.display_string())
    winner = board.winner()
    print(f"{winner.name} wins.")

    if args.log_file:
        metadata = {
            "size": args.size,
            "human_side": human_side.name.lower(),
            "depth": args.depth,
            "winner": winner.name.lower(),
        }
        save_log({"metadata": metadata, "moves": log_records}, Path(args.log_file))


def main() -> None:
    parser = argparse.ArgumentParser(description="Play Jump61 in the console against the AI.")
    parser.add_argument("--size", type=int, default=DEFAULT_BOARD_SIZE)
    parser.add_argument("--human-side", choices=["red", "blue"], default="red")
    parser.add_argument("--depth", type=int, default=4)
    parser.add_argument("--log-file", type=str)
    parser.add_argument("--replay-log", type=str, help="Replay a logged game and exit")
    parser.add_argument("--replay-quiet", action="store_true")
    args = parser.parse_args()

    if args.replay_log:
        replay_logged_game(Path(args.replay_log), verbose=not args.replay_quiet)
        return

    play_interactive(args)


if __name__ == "__main__":
    main()
