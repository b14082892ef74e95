from __future__ import annotations

from typing import List, Set

from .board import EMPTY, BoardState, Side
from .movegen import COMPASS

# Cell-by-cell reference move generator. Slow; used to cross-check the
# bitboard generator in tests.


def flips_ref(board: BoardState, index: int, side: Side | None = None) -> Set[int]:
    side = board.turn if side is None else side
    cells = board.cells
    n = board.size
    if cells[index] != EMPTY:
        return set()
    r0, c0 = divmod(index, n)
    out: Set[int] = set()
    for dr, dc in COMPASS:
        run = []
        r, c = r0 + dr, c0 + dc
        while 0 <= r < n and 0 <= c < n and cells[r * n + c] == side.opponent:
            run.append(r * n + c)
            r += dr
            c += dc
        if run and 0 <= r < n and 0 <= c < n and cells[r * n + c] == side:
            out.update(run)
    return out


def legal_moves_ref(board: BoardState, side: Side | None = None) -> List[int]:
    return [i for i in range(board.size * board.size) if flips_ref(board, i, side)]
