from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

import uvicorn

from calendar_solver.engine.dates import InvalidDateError, parse_date, today
from calendar_solver.search.service import SolveService


LONG_HELP = (
    "Solve for a specified date, formatted like 2020-03-13. The date must "
    "exist in the proleptic Gregorian calendar, so the year is checked too "
    "(2023-02-29 is rejected). Defaults to today."
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="calendar-solver", description="Solver for the puzzle-a-day calendar puzzle"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=LOG_LEVELS,
        help="logging level (default: WARNING)",
    )
    sub = parser.add_subparsers(dest="command")

    solve = sub.add_parser("solve", help="solve for a date and print the board")
    solve.add_argument("-d", "--date", type=str, default=None, help=LONG_HELP)
    solve.add_argument(
        "--no-prune",
        action="store_true",
        help="disable unfillable-region pruning (slower)",
    )

    serve = sub.add_parser("serve", help="run the HTTP API")
    serve.add_argument("--host", type=str, default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8000)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level)

    if args.command == "serve":
        uvicorn.run(
            "calendar_solver.protocol.http.app:create_app",
            factory=True,
            host=args.host,
            port=args.port,
        )
        return 0

    # `solve` is the default command
    date_arg = getattr(args, "date", None)
    try:
        day = parse_date(date_arg) if date_arg else today()
    except InvalidDateError as e:
        print(str(e), file=sys.stderr)
        return 1

    res = SolveService().solve_date(day, prune=not getattr(args, "no_prune", False))
    print(res.game.render(), end="")
    print(f"date={day.isoformat()} outcome={res.outcome.value} nodes={res.nodes} time_ms={res.time_ms}")
    return 0 if res.solved else 1


if __name__ == "__main__":
    sys.exit(main())
