from __future__ import annotations

from enum import IntEnum
from typing import Tuple

from .board import BoardState, Side
from .movegen import board_legal_mask, flip_mask


class Outcome(IntEnum):
    DRAW = 0
    FIRST = 1
    SECOND = 2


def apply_move(board: BoardState, index: int) -> BoardState:
    """Play `index` for the side to move.

    An illegal index is not an error: the same board is returned unchanged,
    so callers detect rejection with ``result is board`` or ``==``.
    """
    if not 0 <= index < board.size * board.size:
        return board
    me, opp = board.me_opp()
    flips = flip_mask(me, opp, index, board.size)
    if flips == 0:
        return board
    me |= flips | (1 << index)
    opp &= ~flips
    if board.turn is Side.FIRST:
        return BoardState(board.size, me, opp, Side.SECOND)
    return BoardState(board.size, opp, me, Side.FIRST)


def apply_pass(board: BoardState) -> BoardState:
    return board.with_turn(board.turn.opponent)


def compute_score(board: BoardState) -> Tuple[int, int]:
    return board.first.bit_count(), board.second.bit_count()


def is_forced_end(board: BoardState) -> bool:
    """Board full, or one side wiped out. Independent of move availability."""
    if board.empty == 0:
        return True
    return board.first == 0 or board.second == 0


def is_double_pass(board: BoardState) -> bool:
    """Neither side has a legal move."""
    return board_legal_mask(board, Side.FIRST) == 0 and board_legal_mask(board, Side.SECOND) == 0


def winner_by_score(board: BoardState) -> Outcome:
    first, second = compute_score(board)
    if first > second:
        return Outcome.FIRST
    if second > first:
        return Outcome.SECOND
    return Outcome.DRAW
