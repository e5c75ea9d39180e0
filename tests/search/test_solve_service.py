from __future__ import annotations

import datetime as dt

import pytest

from calendar_solver.engine.game import Outcome
from calendar_solver.engine.mask import Mask
from calendar_solver.engine.piece import ALL_PIECES
from calendar_solver.search.service import SolveService


def _assert_tiled(res) -> None:
    game = res.game
    assert res.outcome is Outcome.SOLVED
    assert res.solved
    assert game.occupied == Mask.FULL
    covered = Mask.BLANK
    for piece in ALL_PIECES:
        m = game.placed[piece]
        assert m.count() == piece.cell_count
        assert (covered & m).is_empty()
        covered = covered | m
    assert covered == ~(Mask.FRAME | game.date)


def test_solve_christmas() -> None:
    res = SolveService().solve_date(dt.date(2024, 12, 25))
    _assert_tiled(res)
    assert res.game.date == Mask.for_month(11) | Mask.for_day(24)
    assert res.nodes == res.game.nodes
    assert res.time_ms >= 0


@pytest.mark.parametrize(
    ("month", "day"),
    [(0, 0), (1, 28), (4, 15), (8, 7), (11, 30)],
)
def test_solve_sample_dates(month: int, day: int) -> None:
    _assert_tiled(SolveService().solve(month, day))


def test_solve_rejects_bad_indices() -> None:
    with pytest.raises(ValueError):
        SolveService().solve(12, 0)


@pytest.mark.slow
def test_solve_every_date_of_a_leap_year() -> None:
    service = SolveService()
    day = dt.date(2024, 1, 1)
    while day.year == 2024:
        _assert_tiled(service.solve_date(day))
        day += dt.timedelta(days=1)


@pytest.mark.slow
def test_pruning_reduces_nodes_vs_baseline() -> None:
    service = SolveService()
    res_base = service.solve(11, 24, prune=False)
    res_opt = service.solve(11, 24)
    _assert_tiled(res_base)
    _assert_tiled(res_opt)
    assert res_opt.nodes <= res_base.nodes
