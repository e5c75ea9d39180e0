#!/usr/bin/env python3
# ruff: noqa: E402
from __future__ import annotations

import argparse
import datetime as dt
import os
import sys
import time

# Allow running this script directly via `python scripts/solve_year.py`
# by adding the repo root (which contains `calendar_solver/`) to sys.path.
REPO_ROOT = os.path.dirname(os.path.dirname(__file__))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from calendar_solver.search.service import SolveService


def main() -> None:
    parser = argparse.ArgumentParser(description="Solve every date of a year")
    parser.add_argument("--year", type=int, default=2024, help="Year (default: 2024, a leap year)")
    parser.add_argument("--no-prune", action="store_true", help="Disable region pruning")
    parser.add_argument("--quiet", action="store_true", help="Only print the totals")
    args = parser.parse_args()

    service = SolveService()
    day = dt.date(args.year, 1, 1)
    total_nodes = 0
    failures = []
    start = time.perf_counter()
    while day.year == args.year:
        res = service.solve_date(day, prune=not args.no_prune)
        total_nodes += res.nodes
        if not res.solved:
            failures.append(day)
        if not args.quiet:
            print(f"{day.isoformat()} outcome={res.outcome.value} nodes={res.nodes} time_ms={res.time_ms}")
        day += dt.timedelta(days=1)
    dt_s = time.perf_counter() - start

    print(
        f"dates={(dt.date(args.year, 12, 31) - dt.date(args.year, 1, 1)).days + 1} "
        f"unsolved={len(failures)} nodes={total_nodes} time_ms={int(dt_s * 1000)}"
    )
    if failures:
        sys.exit(1)


if __name__ == "__main__":
    main()
