from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, List, Mapping, Tuple

from .board import BoardState, Side
from .movegen import legal_moves_mask

# Static linear evaluation: disc balance, positional table and mobility.

# Weights are a tuning choice. These defaults favour corners and mobility over
# raw disc count, which matters mostly near the end.
@dataclass(frozen=True)
class EvalWeights:
    disc: float = 1.0
    positional: float = 1.0
    mobility: float = 5.0
    # Positional table entries
    corner: int = 100
    x_square: int = -50
    c_square: int = -20
    edge: int = 10
    interior: int = 0

    @classmethod
    def from_config(cls, section: Mapping[str, Any] | None) -> "EvalWeights":
        if not section:
            return cls()
        known = {k: v for k, v in section.items() if k in cls.__dataclass_fields__}
        return cls(**known)


DEFAULT_WEIGHTS = EvalWeights()


@dataclass(frozen=True)
class _Regions:
    corners: int
    edges: int      # edge cells that are neither corners nor C-squares
    interior: int   # non-edge cells that are not X-squares
    # per corner: (corner bit, X-square mask, C-square mask)
    guarded: Tuple[Tuple[int, int, int], ...]


@lru_cache(maxsize=None)
def _regions(size: int) -> _Regions:
    last = size - 1
    corner_rc = [(0, 0), (0, last), (last, 0), (last, last)]
    taken = set()
    corners = 0
    for r, c in corner_rc:
        corners |= 1 << (r * size + c)
        taken.add((r, c))
    guarded = []
    for r, c in corner_rc:
        dr = 1 if r == 0 else -1
        dc = 1 if c == 0 else -1
        x_mask = c_mask = 0
        x = (r + dr, c + dc)
        if 0 <= x[0] < size and 0 <= x[1] < size and x not in taken:
            x_mask |= 1 << (x[0] * size + x[1])
            taken.add(x)
        for cr, cc in ((r + dr, c), (r, c + dc)):
            if 0 <= cr < size and 0 <= cc < size and (cr, cc) not in taken:
                c_mask |= 1 << (cr * size + cc)
                taken.add((cr, cc))
        guarded.append((1 << (r * size + c), x_mask, c_mask))
    edges = interior = 0
    for r in range(size):
        for c in range(size):
            if (r, c) in taken:
                continue
            bit = 1 << (r * size + c)
            if r in (0, last) or c in (0, last):
                edges |= bit
            else:
                interior |= bit
    return _Regions(corners, edges, interior, tuple(guarded))


def positional_table(size: int, weights: EvalWeights = DEFAULT_WEIGHTS) -> List[int]:
    """Per-cell weights assuming every corner is still empty."""
    reg = _regions(size)
    table = []
    for i in range(size * size):
        bit = 1 << i
        if reg.corners & bit:
            table.append(weights.corner)
        elif reg.edges & bit:
            table.append(weights.edge)
        elif reg.interior & bit:
            table.append(weights.interior)
        elif any(x & bit for _, x, _ in reg.guarded):
            table.append(weights.x_square)
        else:
            table.append(weights.c_square)
    return table


def positional_score(me: int, opp: int, size: int, weights: EvalWeights = DEFAULT_WEIGHTS) -> int:
    reg = _regions(size)

    def diff(mask: int) -> int:
        return (me & mask).bit_count() - (opp & mask).bit_count()

    score = weights.corner * diff(reg.corners)
    score += weights.edge * diff(reg.edges)
    score += weights.interior * diff(reg.interior)
    for corner, x_mask, c_mask in reg.guarded:
        if (me | opp) & corner:
            # Corner settled: neighbours weigh like ordinary cells
            score += weights.interior * diff(x_mask) + weights.edge * diff(c_mask)
        else:
            score += weights.x_square * diff(x_mask) + weights.c_square * diff(c_mask)
    return score


def eval_terms(board: BoardState, perspective: Side, weights: EvalWeights = DEFAULT_WEIGHTS) -> Dict[str, int]:
    """Raw feature differentials from `perspective`, before weighting."""
    me, opp = board.me_opp(perspective)
    return {
        "disc": me.bit_count() - opp.bit_count(),
        "positional": positional_score(me, opp, board.size, weights),
        "mobility": legal_moves_mask(me, opp, board.size).bit_count()
        - legal_moves_mask(opp, me, board.size).bit_count(),
    }


def evaluate(board: BoardState, perspective: Side, weights: EvalWeights = DEFAULT_WEIGHTS) -> float:
    # Higher is better for `perspective`
    terms = eval_terms(board, perspective, weights)
    score = 0.0
    score += weights.disc * terms["disc"]
    score += weights.positional * terms["positional"]
    score += weights.mobility * terms["mobility"]
    return score
