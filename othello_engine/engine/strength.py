from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..errors import InvalidDepth
from .board import BoardState
from .eval import DEFAULT_WEIGHTS, EvalWeights
from .search import ALPHABETA, GREEDY, Searcher, SearchLimits, SearchResult


@dataclass(frozen=True)
class StrengthProfile:
    strategy: str
    depth: int


# Difficulty level -> search knobs. Level 0 looks one ply ahead greedily,
# higher levels run alpha-beta to that many plies.
PROFILES = {
    0: StrengthProfile(GREEDY, 1),
    1: StrengthProfile(ALPHABETA, 1),
    2: StrengthProfile(ALPHABETA, 2),
    3: StrengthProfile(ALPHABETA, 3),
    4: StrengthProfile(ALPHABETA, 4),
    5: StrengthProfile(ALPHABETA, 5),
}

MIN_LEVEL = min(PROFILES)
MAX_LEVEL = max(PROFILES)


def profile_for_level(level: int) -> StrengthProfile:
    try:
        return PROFILES[int(level)]
    except KeyError:
        raise InvalidDepth(f"difficulty level must be {MIN_LEVEL}..{MAX_LEVEL}, got {level}") from None


def limits_for_level(level: int) -> SearchLimits:
    p = profile_for_level(level)
    return SearchLimits(strategy=p.strategy, max_depth=p.depth)


def search_for_level(board: BoardState, level: int, weights: EvalWeights = DEFAULT_WEIGHTS) -> SearchResult:
    return Searcher(weights).search(board, limits_for_level(level))


def select_move(board: BoardState, level: int, weights: EvalWeights = DEFAULT_WEIGHTS) -> Optional[int]:
    return search_for_level(board, level, weights).best_move
