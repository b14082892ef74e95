from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from othello_engine.logging_setup import set_level, setup_logging
from othello_engine.settings import load_settings

from . import diag, perft_cli, selfplay_cli


def _init_config(args: argparse.Namespace) -> int:
    created = diag.ensure_config()
    print(f"{'Created' if created else 'Found existing'} config at {diag.CONFIG_PATH}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="othello-engine")
    p.add_argument("--log-level", default=None, help="Override the configured log level")
    sub = p.add_subparsers(dest="command", required=True)

    perft_p = sub.add_parser("perft", help="Count leaf positions for move generator checks")
    perft_cli.add_arguments(perft_p)
    perft_p.set_defaults(func=perft_cli.run)

    sp = sub.add_parser("selfplay", help="Play computer-vs-computer games")
    selfplay_cli.add_arguments(sp)
    sp.set_defaults(func=selfplay_cli.run)

    init_p = sub.add_parser("init-config", help="Write the default config to the user directory")
    init_p.set_defaults(func=_init_config)

    args = p.parse_args(argv)
    # Initialize logging very early; overwrite log each run. Config errors
    # are logged after this point so they reach the log file.
    setup_logging(overwrite=True, level=args.log_level or "INFO")
    args.settings = load_settings(getattr(args, "config", None))
    if args.log_level is None:
        set_level(args.settings.log_level)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
