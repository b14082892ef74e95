from __future__ import annotations

from typing import Iterable, Optional

from .board import BoardState, initial_board
from .movegen import board_legal_mask, squares
from .notation import PASS_MOVE, PASS_NOTATION, notation_to_coord
from .rules import apply_move, apply_pass


def perft(board: BoardState, depth: int) -> int:
    """Count leaf positions reachable by exactly `depth` moves (passes not counted)."""
    if depth == 0:
        return 1
    total = 0
    for sq in squares(board_legal_mask(board)):
        total += perft(apply_move(board, sq), depth - 1)
    return total


def play_moves(board: Optional[BoardState], moves: Iterable[str | int], size: int = 8) -> BoardState:
    """Replay moves given as notation strings or square indices; '--'/-1 passes."""
    b = initial_board(size) if board is None else board
    for mv in moves:
        if mv == PASS_NOTATION or mv == PASS_MOVE:
            b = apply_pass(b)
            continue
        sq = notation_to_coord(mv, b.size) if isinstance(mv, str) else mv
        nb = apply_move(b, sq)
        if nb is b:
            raise ValueError(f"illegal move: {mv}")
        b = nb
    return b
