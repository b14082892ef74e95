"""Board model, rules, evaluation and search"""

from .board import EMPTY, BoardState, Side, initial_board
from .movegen import flip_set, has_any_legal_move, is_legal, legal_moves
from .rules import (
    Outcome,
    apply_move,
    apply_pass,
    compute_score,
    is_double_pass,
    is_forced_end,
    winner_by_score,
)
from .eval import EvalWeights, evaluate
from .search import Searcher, SearchLimits, SearchResult, select_move_alphabeta, select_move_greedy
from .strength import select_move

__all__ = [
    'EMPTY',
    'BoardState',
    'Side',
    'initial_board',
    'is_legal',
    'flip_set',
    'has_any_legal_move',
    'legal_moves',
    'Outcome',
    'apply_move',
    'apply_pass',
    'compute_score',
    'is_forced_end',
    'is_double_pass',
    'winner_by_score',
    'EvalWeights',
    'evaluate',
    'Searcher',
    'SearchLimits',
    'SearchResult',
    'select_move_greedy',
    'select_move_alphabeta',
    'select_move',
]
