from __future__ import annotations

import datetime as dt

import pytest

from calendar_solver.engine.dates import InvalidDateError, date_indices, parse_date


def test_parse_date() -> None:
    assert parse_date("2020-03-13") == dt.date(2020, 3, 13)
    assert parse_date("2024-12-25") == dt.date(2024, 12, 25)


def test_leap_day_checked_against_year() -> None:
    assert parse_date("2024-02-29") == dt.date(2024, 2, 29)
    with pytest.raises(InvalidDateError):
        parse_date("2023-02-29")


@pytest.mark.parametrize(
    "text",
    ["", "2020-13-01", "2020-04-31", "13/03/2020", "tomorrow", "2024-1-1", " 2024-12-25 ", "2024-12-25\n"],
)
def test_parse_date_rejects(text: str) -> None:
    with pytest.raises(InvalidDateError):
        parse_date(text)


def test_invalid_date_is_value_error() -> None:
    with pytest.raises(ValueError):
        parse_date("2020-00-10")


@pytest.mark.parametrize(
    ("day", "expected"),
    [
        (dt.date(2021, 1, 1), (0, 0)),
        (dt.date(2021, 12, 25), (11, 24)),
        (dt.date(2021, 12, 31), (11, 30)),
        (dt.date(2021, 7, 4), (6, 3)),
    ],
)
def test_date_indices(day: dt.date, expected: tuple[int, int]) -> None:
    assert date_indices(day) == expected
