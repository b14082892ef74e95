from __future__ import annotations

from functools import lru_cache
from typing import FrozenSet, List, Optional, Tuple

from .board import BoardState, Side, full_mask

# Compass directions as (row delta, col delta)
COMPASS = (
    (1, 0),    # N
    (-1, 0),   # S
    (0, 1),    # E
    (0, -1),   # W
    (1, 1),    # NE
    (1, -1),   # NW
    (-1, 1),   # SE
    (-1, -1),  # SW
)


@lru_cache(maxsize=None)
def direction_table(size: int) -> Tuple[Tuple[int, int], ...]:
    """Return (shift, mask) per direction for a size x size board.

    The mask is applied after shifting and removes bits that wrapped around a
    row edge as well as bits pushed past the last square.
    """
    full = full_mask(size)
    col0 = 0
    col_last = 0
    for r in range(size):
        col0 |= 1 << (r * size)
        col_last |= 1 << (r * size + size - 1)
    table = []
    for dr, dc in COMPASS:
        mask = full
        if dc == 1:
            mask &= ~col0
        elif dc == -1:
            mask &= ~col_last
        table.append((dr * size + dc, mask))
    return tuple(table)


def _shift(bb: int, d: int, mask: int) -> int:
    if d > 0:
        return (bb << d) & mask
    return (bb >> -d) & mask


def legal_moves_mask(me: int, opp: int, size: int) -> int:
    """Bitmask of squares where the side owning `me` may play."""
    empty = ~(me | opp) & full_mask(size)
    moves = 0
    for d, mask in direction_table(size):
        x = _shift(me, d, mask) & opp
        acc = 0
        while x:
            acc |= x
            x = _shift(x, d, mask) & opp
        moves |= _shift(acc, d, mask) & empty
    return moves


def flip_mask(me: int, opp: int, sq: int, size: int) -> int:
    """Discs flipped when the side owning `me` plays on `sq` (0 if illegal)."""
    move = 1 << sq
    if (me | opp) & move:
        return 0
    flips = 0
    for d, mask in direction_table(size):
        run = 0
        cur = _shift(move, d, mask) & opp
        while cur:
            run |= cur
            cur = _shift(cur, d, mask) & opp
        if run and _shift(run, d, mask) & me:
            flips |= run
    return flips


def squares(mask: int) -> List[int]:
    """Indices of set bits in ascending order."""
    out = []
    while mask:
        lsb = mask & -mask
        out.append(lsb.bit_length() - 1)
        mask ^= lsb
    return out


def _in_range(board: BoardState, index: int) -> bool:
    return 0 <= index < board.size * board.size


def is_legal(board: BoardState, index: int) -> bool:
    if not _in_range(board, index):
        return False
    me, opp = board.me_opp()
    return flip_mask(me, opp, index, board.size) != 0


def flip_set(board: BoardState, index: int) -> FrozenSet[int]:
    if not _in_range(board, index):
        return frozenset()
    me, opp = board.me_opp()
    return frozenset(squares(flip_mask(me, opp, index, board.size)))


def board_legal_mask(board: BoardState, side: Optional[Side] = None) -> int:
    me, opp = board.me_opp(side)
    return legal_moves_mask(me, opp, board.size)


def legal_moves(board: BoardState, side: Optional[Side] = None) -> List[int]:
    return squares(board_legal_mask(board, side))


def has_any_legal_move(board: BoardState, side: Side) -> bool:
    return board_legal_mask(board, side) != 0
