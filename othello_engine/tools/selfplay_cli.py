"""Computer-vs-computer self-play runs"""

from __future__ import annotations

import argparse
import logging
import pathlib
from typing import List, Optional

import orjson

from ..selfplay.runner import run_series, summarize
from ..settings import load_settings

logger = logging.getLogger(__name__)


def add_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('--games', type=int, default=None, help='Number of games (default: from config)')
    parser.add_argument('--workers', type=int, default=None, help='Worker processes (default: from config)')
    parser.add_argument('--first-level', type=int, default=None, help='Difficulty level for the first side')
    parser.add_argument('--second-level', type=int, default=None, help='Difficulty level for the second side')
    parser.add_argument('--size', type=int, default=None, help='Board size')
    parser.add_argument('--random-plies', type=int, default=None, help='Random opening plies per game')
    parser.add_argument('--config', type=pathlib.Path, default=None, help='Config file to read')
    parser.add_argument('--output', type=pathlib.Path, default=None, help='Write game records as JSON')


def _pick(value, default):
    return default if value is None else value


def run(args: argparse.Namespace) -> int:
    settings = getattr(args, "settings", None) or load_settings(args.config)
    sp = settings.selfplay
    games = _pick(args.games, sp.games)
    first_level = _pick(args.first_level, sp.first_level)
    second_level = _pick(args.second_level, sp.second_level)
    logger.info("Self-play: %d games, levels %d vs %d", games, first_level, second_level)

    records = []
    for rec in run_series(
        games=games,
        workers=_pick(args.workers, sp.workers),
        first_level=first_level,
        second_level=second_level,
        size=_pick(args.size, settings.board_size),
        random_opening_plies=_pick(args.random_plies, sp.random_opening_plies),
        weights=settings.weights,
    ):
        records.append(rec)
        print(f"game {rec.seed}: {rec.winner} {rec.first}-{rec.second} ({rec.end_reason}, {rec.plies} plies)")

    records.sort(key=lambda r: r.seed)
    summary = summarize(records)
    print(
        f"{summary['games']} games: first {summary['wins']['FIRST']}, "
        f"second {summary['wins']['SECOND']}, draws {summary['wins']['DRAW']}, "
        f"avg plies {summary['avg_plies']:.1f}, avg margin {summary['avg_margin']:+.2f}"
    )
    if args.output:
        args.output.write_bytes(
            orjson.dumps({"summary": summary, "games": records}, option=orjson.OPT_INDENT_2)
        )
        logger.info("Results saved to %s", args.output)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="othello-selfplay", description="Run computer-vs-computer games")
    add_arguments(parser)
    return run(parser.parse_args(argv))


if __name__ == '__main__':
    raise SystemExit(main())
