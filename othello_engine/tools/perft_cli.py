from __future__ import annotations

import argparse
from time import perf_counter
from typing import List, Optional

from othello_engine.engine.board import initial_board
from othello_engine.engine.notation import string_to_moves
from othello_engine.engine.perft import perft, play_moves


def add_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument("--depth", type=int, required=True)
    p.add_argument("--size", type=int, default=8)
    p.add_argument("--position", type=str, default=None, help="move sequence like d3c5f6, '--' for a pass")


def run(args: argparse.Namespace) -> int:
    b = initial_board(args.size)
    if args.position:
        b = play_moves(b, string_to_moves(args.position, args.size), args.size)
    t0 = perf_counter()
    n = perft(b, args.depth)
    dt = perf_counter() - t0
    print(f"perft(d={args.depth})={n} in {dt:.3f}s")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="othello-perft")
    add_arguments(p)
    return run(p.parse_args(argv))


if __name__ == "__main__":
    raise SystemExit(main())
