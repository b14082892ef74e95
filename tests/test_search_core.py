from __future__ import annotations

import math
import random

import pytest

from othello_engine.engine.board import BoardState, Side, initial_board
from othello_engine.engine.eval import evaluate
from othello_engine.engine.movegen import legal_moves
from othello_engine.engine.rules import apply_move, apply_pass, is_forced_end
from othello_engine.engine.search import (
    ALPHABETA,
    GREEDY,
    Searcher,
    SearchLimits,
    select_move_alphabeta,
    select_move_greedy,
)
from othello_engine.engine.strength import profile_for_level, select_move
from othello_engine.errors import InvalidDepth


def minimax_ref(board: BoardState, depth: int, root: Side) -> float:
    # Plain minimax without pruning, same pass rules as the searcher
    if depth == 0 or is_forced_end(board):
        return evaluate(board, root)
    moves = legal_moves(board)
    if not moves:
        passed = apply_pass(board)
        if not legal_moves(passed):
            return evaluate(board, root)
        return minimax_ref(passed, depth, root)
    scores = [minimax_ref(apply_move(board, sq), depth - 1, root) for sq in moves]
    return max(scores) if board.turn == root else min(scores)


def best_ref(board: BoardState, depth: int):
    best, best_score = None, -math.inf
    for sq in legal_moves(board):
        s = minimax_ref(apply_move(board, sq), depth - 1, board.turn)
        if s > best_score:
            best, best_score = sq, s
    return best, best_score


def sample_positions(count: int, seed: int, size: int = 8):
    rng = random.Random(seed)
    out = []
    while len(out) < count:
        b = initial_board(size)
        for _ in range(rng.randint(4, 30)):
            moves = legal_moves(b)
            if not moves:
                break
            b = apply_move(b, rng.choice(moves))
        if legal_moves(b):
            out.append(b)
    return out


def test_greedy_picks_lowest_index_on_ties():
    b = initial_board(8)
    scores = {sq: evaluate(apply_move(b, sq), Side.FIRST) for sq in legal_moves(b)}
    # the four openings are symmetric
    assert len(set(scores.values())) == 1
    assert select_move_greedy(b) == 19


def test_greedy_is_pure_and_maximizes():
    for b in sample_positions(10, seed=7):
        first = select_move_greedy(b)
        assert first == select_move_greedy(b)
        best = max(evaluate(apply_move(b, sq), b.turn) for sq in legal_moves(b))
        assert evaluate(apply_move(b, first), b.turn) == best
        assert first == min(sq for sq in legal_moves(b) if evaluate(apply_move(b, sq), b.turn) == best)


def test_greedy_takes_corner():
    b = BoardState.from_text([
        ".OOOOX..",
        "........",
        "........",
        "...OX...",
        "...XO...",
        "........",
        "........",
        "........",
    ])
    assert select_move_greedy(b) == 0


def test_alphabeta_depth_one_equals_greedy():
    for b in sample_positions(15, seed=11):
        assert select_move_alphabeta(b, 1) == select_move_greedy(b)


@pytest.mark.parametrize("depth", [2, 3])
def test_alphabeta_matches_plain_minimax(depth):
    for b in sample_positions(4, seed=100 + depth):
        res = Searcher().alphabeta(b, depth)
        move, score = best_ref(b, depth)
        assert res.best_move == move
        assert res.score == pytest.approx(score)


def test_alphabeta_ties_resolve_to_lowest_index():
    b = initial_board(8)
    for depth in (1, 2, 3):
        assert select_move_alphabeta(b, depth) == 19


def test_alphabeta_rejects_bad_depth():
    with pytest.raises(InvalidDepth):
        select_move_alphabeta(initial_board(8), 0)
    with pytest.raises(InvalidDepth):
        select_move_alphabeta(initial_board(8), -3)


def test_no_move_returns_none():
    # SECOND to move with nothing to capture
    b = BoardState.from_text(["XO......"] + ["........"] * 7, turn=Side.SECOND)
    assert legal_moves(b) == []
    assert select_move_greedy(b) is None
    assert select_move_alphabeta(b, 3) is None


def test_search_through_forced_pass_keeps_depth():
    # Either move leaves SECOND without a reply; the pass must not use up depth,
    # so both lines reach the same final position and c1 wins the tie.
    b = BoardState.from_text([
        "XO......",
        "........",
        "........",
        "........",
        "........",
        "........",
        "........",
        "XOO.....",
    ])
    assert legal_moves(b) == [2, 59]
    res = Searcher().alphabeta(b, 2)
    final = apply_move(apply_pass(apply_move(b, 2)), 59)
    assert res.best_move == 2
    assert res.pv == [2, 59]
    assert res.score == evaluate(final, Side.FIRST)
    assert best_ref(b, 2) == (2, res.score)


def test_search_does_not_mutate_input():
    b = sample_positions(1, seed=3)[0]
    snapshot = (b.first, b.second, b.turn)
    Searcher().alphabeta(b, 3)
    Searcher().greedy(b)
    assert (b.first, b.second, b.turn) == snapshot


def test_searcher_dispatch_and_result_fields():
    b = initial_board(8)
    s = Searcher()
    res = s.search(b, SearchLimits(strategy=ALPHABETA, max_depth=3))
    assert res.best_move == 19
    assert res.depth == 3
    assert res.nodes > 0
    assert res.pv[0] == 19 and len(res.pv) == 3
    g = s.search(b, SearchLimits(strategy=GREEDY))
    assert g.best_move == 19 and g.depth == 1
    with pytest.raises(ValueError):
        s.search(b, SearchLimits(strategy="mcts"))


def test_difficulty_levels():
    b = sample_positions(1, seed=5)[0]
    assert profile_for_level(0).strategy == GREEDY
    assert select_move(b, 0) == select_move_greedy(b)
    for level in (1, 2, 3):
        assert profile_for_level(level).depth == level
        assert select_move(b, level) == select_move_alphabeta(b, level)
    with pytest.raises(InvalidDepth):
        select_move(b, 6)
    with pytest.raises(InvalidDepth):
        profile_for_level(-1)
