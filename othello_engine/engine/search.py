from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..errors import InvalidDepth
from .board import BoardState, Side
from .eval import DEFAULT_WEIGHTS, EvalWeights, evaluate
from .movegen import board_legal_mask, squares
from .rules import apply_move, apply_pass, is_forced_end

logger = logging.getLogger(__name__)

GREEDY = "greedy"
ALPHABETA = "alphabeta"


@dataclass
class SearchLimits:
    strategy: str = ALPHABETA
    max_depth: int = 3


@dataclass
class SearchResult:
    best_move: int | None
    score: float
    depth: int
    nodes: int
    time_ms: int
    pv: List[int] = field(default_factory=list)


class Searcher:
    """Greedy and alpha-beta move selection over immutable boards.

    Children are always visited in ascending square order and only a strictly
    better score replaces the current best, so ties resolve to the lowest
    square and results are reproducible.
    """

    def __init__(self, weights: EvalWeights = DEFAULT_WEIGHTS) -> None:
        self.weights = weights
        self.nodes = 0

    def search(self, board: BoardState, limits: SearchLimits) -> SearchResult:
        if limits.strategy == GREEDY:
            return self.greedy(board)
        if limits.strategy == ALPHABETA:
            return self.alphabeta(board, limits.max_depth)
        raise ValueError(f"unknown search strategy {limits.strategy!r}")

    def greedy(self, board: BoardState) -> SearchResult:
        start = time.perf_counter()
        self.nodes = 0
        side = board.turn
        best_move = None
        best_score = -math.inf
        for sq in squares(board_legal_mask(board)):
            self.nodes += 1
            score = evaluate(apply_move(board, sq), side, self.weights)
            if score > best_score:
                best_score = score
                best_move = sq
        return self._finish(board, best_move, best_score, 1, [best_move] if best_move is not None else [], start)

    def alphabeta(self, board: BoardState, depth: int) -> SearchResult:
        if depth < 1:
            raise InvalidDepth(f"search depth must be >= 1, got {depth}")
        start = time.perf_counter()
        self.nodes = 0
        root = board.turn
        best_move = None
        best_score = -math.inf
        best_line: List[int] = []
        alpha, beta = -math.inf, math.inf
        for sq in squares(board_legal_mask(board)):
            child = apply_move(board, sq)
            score, line = self._alphabeta(child, depth - 1, alpha, beta, root)
            if score > best_score:
                best_score = score
                best_move = sq
                best_line = [sq] + line
            alpha = max(alpha, best_score)
        return self._finish(board, best_move, best_score, depth, best_line, start)

    def _alphabeta(self, board: BoardState, depth: int, alpha: float, beta: float, root: Side) -> Tuple[float, List[int]]:
        self.nodes += 1
        if depth <= 0 or is_forced_end(board):
            return evaluate(board, root, self.weights), []

        mask = board_legal_mask(board)
        if mask == 0:
            passed = apply_pass(board)
            if board_legal_mask(passed) == 0:
                # Neither side can move: the game is over here
                return evaluate(board, root, self.weights), []
            # Forced pass keeps the remaining depth
            return self._alphabeta(passed, depth, alpha, beta, root)

        maximizing = board.turn == root
        best_line: List[int] = []
        if maximizing:
            value = -math.inf
            for sq in squares(mask):
                score, line = self._alphabeta(apply_move(board, sq), depth - 1, alpha, beta, root)
                if score > value:
                    value = score
                    best_line = [sq] + line
                alpha = max(alpha, value)
                if alpha >= beta:
                    break
        else:
            value = math.inf
            for sq in squares(mask):
                score, line = self._alphabeta(apply_move(board, sq), depth - 1, alpha, beta, root)
                if score < value:
                    value = score
                    best_line = [sq] + line
                beta = min(beta, value)
                if alpha >= beta:
                    break
        return value, best_line

    def _finish(self, board: BoardState, best_move: Optional[int], score: float, depth: int, pv: List[int], start: float) -> SearchResult:
        elapsed_ms = int((time.perf_counter() - start) * 1000)
        result = SearchResult(best_move, score, depth, self.nodes, elapsed_ms, pv)
        logger.debug(
            "search side=%s depth=%d best=%s score=%.1f nodes=%d time_ms=%d",
            board.turn.name, depth, best_move, score if best_move is not None else 0.0, self.nodes, elapsed_ms,
        )
        return result


def select_move_greedy(board: BoardState, weights: EvalWeights = DEFAULT_WEIGHTS) -> Optional[int]:
    return Searcher(weights).greedy(board).best_move


def select_move_alphabeta(board: BoardState, depth: int, weights: EvalWeights = DEFAULT_WEIGHTS) -> Optional[int]:
    return Searcher(weights).alphabeta(board, depth).best_move
