"""CLI utility for single-position influence analysis.

Usage:
    python -m chessheat.cli [<fen>] [--json] [--flip] [--square SQ]
        [--lenient] [--limit N]

Prints the net influence grid and the most contested squares, or JSON with
the placement and full attacker/defender breakdown when --json is given.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from chessheat.config import Settings
from chessheat.constants import parse_square_name
from chessheat.influence import compute_influence
from chessheat.position import PlacementError, decode_placement
from chessheat.report import describe_square, summarize

logger = logging.getLogger(__name__)


def _run(args: argparse.Namespace, settings: Settings) -> int:
    fen = args.fen or settings.default_fen
    strict = settings.strict_placement and not args.lenient
    try:
        board = decode_placement(fen, strict=strict)
    except PlacementError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    data = compute_influence(board)

    if args.square:
        try:
            row, col = parse_square_name(args.square)
        except ValueError:
            print(f"error: {args.square} is not a square", file=sys.stderr)
            return 2
        if args.json:
            json.dump(data.at(row, col).to_dict(), sys.stdout, indent=2)
            print()
        else:
            print(describe_square(board, data, row, col))
        return 0

    if args.json:
        result = {"placement": board.placement(), **data.to_dict()}
        json.dump(result, sys.stdout, indent=2)
        print()
    else:
        limit = args.limit if args.limit is not None else settings.contested_limit
        print(summarize(board, data, flipped=args.flip, limit=limit))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Square-by-square influence analysis of a chess position",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "fen", nargs="?",
        help="Position FEN or bare piece placement (default: starting position)",
    )
    parser.add_argument(
        "--json", action="store_true",
        help="Emit JSON instead of a text grid",
    )
    parser.add_argument(
        "--flip", action="store_true",
        help="Show the grid from Black's side",
    )
    parser.add_argument(
        "--square", metavar="SQ",
        help="Only show attackers and defenders of one square (e.g. e4)",
    )
    parser.add_argument(
        "--lenient", action="store_true",
        help="Truncate overlong ranks instead of rejecting them",
    )
    parser.add_argument(
        "--limit", type=int, default=None,
        help="Number of contested squares to list",
    )
    args = parser.parse_args(argv)

    settings = Settings()
    logging.basicConfig(level=settings.log_level.upper())
    logger.debug("Analyzing %s", args.fen or settings.default_fen)
    return _run(args, settings)


if __name__ == "__main__":
    sys.exit(main())
