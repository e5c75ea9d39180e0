from __future__ import annotations

import datetime as dt
import logging
import time
from dataclasses import dataclass

from calendar_solver.engine.dates import date_indices
from calendar_solver.engine.game import Game, Outcome
from calendar_solver.engine.piece import PLACEMENTS, PlacementTable


logger = logging.getLogger(__name__)


@dataclass
class SolveResult:
    game: Game
    outcome: Outcome
    nodes: int
    time_ms: int

    @property
    def solved(self) -> bool:
        return self.outcome is Outcome.SOLVED


class SolveService:
    """Runs the solver for a date and records how much work it took.

    The placement table is shared by every game the service creates.
    """

    def __init__(self, table: PlacementTable = PLACEMENTS) -> None:
        self.table = table

    def solve(self, month: int, day: int, *, prune: bool = True) -> SolveResult:
        """Solve for zero-based ``(month, day)``.

        Raises:
            ValueError: If ``month`` or ``day`` is out of range.
        """
        game = Game.for_date(month, day, table=self.table, prune=prune)
        start = time.perf_counter()
        outcome = game.solve()
        time_ms = int((time.perf_counter() - start) * 1000)

        logger.info(
            "solve",
            extra={
                "month0": month,
                "day0": day,
                "outcome": outcome.value,
                "nodes": game.nodes,
                "time_ms": time_ms,
            },
        )
        if outcome is Outcome.EXHAUSTED:
            logger.warning("no solution for month0=%d day0=%d", month, day)
        return SolveResult(game=game, outcome=outcome, nodes=game.nodes, time_ms=time_ms)

    def solve_date(self, day: dt.date, *, prune: bool = True) -> SolveResult:
        month0, day0 = date_indices(day)
        return self.solve(month0, day0, prune=prune)
