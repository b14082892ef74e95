from __future__ import annotations

import random

from othello_engine.engine.board import EMPTY, BoardState, Side, initial_board
from othello_engine.engine.movegen import flip_set, is_legal, legal_moves
from othello_engine.engine.rules import (
    Outcome,
    apply_move,
    apply_pass,
    compute_score,
    is_double_pass,
    is_forced_end,
    winner_by_score,
)

EMPTY_ROW = "........"


def test_single_run_flip():
    b = BoardState.from_text(["XOOO...."] + [EMPTY_ROW] * 7)
    assert is_legal(b, 4)
    assert flip_set(b, 4) == frozenset({1, 2, 3})

    after = apply_move(b, 4)
    before_cells, after_cells = b.cells, after.cells
    changed = {i for i in range(64) if before_cells[i] != after_cells[i]}
    assert changed == {1, 2, 3, 4}
    assert all(after_cells[i] == Side.FIRST for i in range(5))
    assert after.turn is Side.SECOND


def test_multi_direction_flip_only_capped_runs():
    b = BoardState.from_text([
        "X.X.....",
        ".OO.....",
        "XO.O....",
        "........",
        "........",
        "........",
        "........",
        "........",
    ])
    # c3 (18) captures west, north and the diagonal; the eastern O (19) has no cap
    assert flip_set(b, 18) == frozenset({17, 10, 9})
    after = apply_move(b, 18)
    assert after.cell(19) == Side.SECOND


def test_illegal_move_is_noop():
    b = initial_board(8)
    for sq in (0, 27, 63, -5, 100):
        assert not is_legal(b, sq)
        after = apply_move(b, sq)
        assert after is b
        assert after == b


def test_pass_only_flips_turn():
    b = initial_board(8)
    p = apply_pass(b)
    assert p.turn is Side.SECOND
    assert p.cells == b.cells
    assert apply_pass(p) == b


def test_score_conservation_over_random_games():
    rng = random.Random(1234)
    for _ in range(20):
        b = initial_board(8)
        while True:
            first, second = compute_score(b)
            empties = sum(1 for c in b.cells if c == EMPTY)
            assert first + second + empties == 64
            moves = legal_moves(b)
            if moves:
                b = apply_move(b, rng.choice(moves))
            elif legal_moves(b, b.turn.opponent):
                b = apply_pass(b)
            else:
                break


def test_full_board_is_forced_end():
    b = BoardState.from_text(["XXXXXXXX"] * 5 + ["OOOOOOOO"] * 3)
    assert is_forced_end(b)
    assert compute_score(b) == (40, 24)
    assert winner_by_score(b) is Outcome.FIRST


def test_wipeout_is_forced_end():
    b = BoardState.from_text(["XX..", "....", "....", "...."], turn=Side.SECOND)
    assert is_forced_end(b)
    assert winner_by_score(b) is Outcome.FIRST


def test_open_board_is_not_forced_end():
    assert not is_forced_end(initial_board(8))


def test_winner_by_score_draw_and_second():
    assert winner_by_score(initial_board(8)) is Outcome.DRAW
    b = BoardState.from_text(["XO", "OO"])
    assert winner_by_score(b) is Outcome.SECOND


def test_double_pass_detection():
    rows = [".XXXXXXX"]
    for r in range(1, 8):
        rows.append("".join("X" if c in (0, r) else "O" for c in range(8)))
    b = BoardState.from_text(rows)
    assert not is_forced_end(b)
    assert is_double_pass(b)
    assert not is_double_pass(initial_board(8))
