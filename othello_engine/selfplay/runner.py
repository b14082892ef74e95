from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from multiprocessing import Pool
from typing import Iterator, List

from ..engine.board import Side
from ..engine.eval import DEFAULT_WEIGHTS, EvalWeights
from ..engine.movegen import legal_moves
from ..session.controller import GameController, SessionState

logger = logging.getLogger(__name__)

MAX_PLIES = 200


@dataclass
class GameRecord:
    seed: int
    winner: str       # FIRST, SECOND or DRAW
    end_reason: str
    first: int
    second: int
    plies: int
    record: str


def play_one(
    seed: int,
    first_level: int = 2,
    second_level: int = 2,
    size: int = 8,
    random_opening_plies: int = 4,
    weights: EvalWeights = DEFAULT_WEIGHTS,
) -> GameRecord:
    """Play one computer-vs-computer game.

    The first `random_opening_plies` moves are drawn at random from `seed`, so
    different seeds give different games between otherwise deterministic
    players.
    """
    rng = random.Random(seed)
    ctl = GameController(size=size, weights=weights)
    session = ctl.start(ctl.new_session(human_side=None, difficulty=first_level))
    while session.state is SessionState.IN_PROGRESS and len(session.history) < MAX_PLIES:
        if len(session.history) < random_opening_plies:
            session = ctl.play_move(session, rng.choice(legal_moves(session.board)))
            continue
        level = first_level if session.board.turn is Side.FIRST else second_level
        session = ctl.play_computer(session, level=level)
    if session.state is not SessionState.ENDED:
        logger.warning("game %d stopped after %d plies without ending", seed, len(session.history))
    first, second = session.score
    return GameRecord(
        seed=seed,
        winner=session.winner.name if session.winner is not None else "UNFINISHED",
        end_reason=session.end_reason.value if session.end_reason is not None else "max_plies",
        first=first,
        second=second,
        plies=len(session.history),
        record=session.record,
    )


def _play_one_entry(args_tuple):
    return play_one(*args_tuple)


def run_series(
    games: int,
    workers: int = 1,
    first_level: int = 2,
    second_level: int = 2,
    size: int = 8,
    random_opening_plies: int = 4,
    weights: EvalWeights = DEFAULT_WEIGHTS,
) -> Iterator[GameRecord]:
    jobs = [(s, first_level, second_level, size, random_opening_plies, weights) for s in range(games)]
    if workers <= 1:
        for job in jobs:
            yield _play_one_entry(job)
        return
    with Pool(processes=workers) as pool:
        yield from pool.imap_unordered(_play_one_entry, jobs)


def summarize(records: List[GameRecord]) -> dict:
    wins = {"FIRST": 0, "SECOND": 0, "DRAW": 0, "UNFINISHED": 0}
    reasons: dict = {}
    for rec in records:
        wins[rec.winner] = wins.get(rec.winner, 0) + 1
        reasons[rec.end_reason] = reasons.get(rec.end_reason, 0) + 1
    n = len(records)
    return {
        "games": n,
        "wins": wins,
        "end_reasons": reasons,
        "avg_plies": (sum(r.plies for r in records) / n) if n else 0.0,
        "avg_margin": (sum(r.first - r.second for r in records) / n) if n else 0.0,
    }
