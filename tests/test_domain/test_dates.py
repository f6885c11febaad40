"""
Tests for calendar utilities
"""
from datetime import date, datetime

import pytest

from neobudget.domain.dates import (
    parse_day, format_day, add_days, add_months, month_bounds,
    days_between, is_same_or_before, is_after, last_day_of_month,
)


def test_parse_day_iso():
    assert parse_day("2024-03-10") == date(2024, 3, 10)


def test_parse_day_without_zero_padding():
    assert parse_day("2024-3-5") == date(2024, 3, 5)


def test_parse_day_strips_whitespace():
    assert parse_day(" 2024-03-10 ") == date(2024, 3, 10)


@pytest.mark.parametrize("value", [
    None, "", "2024-03", "2024-03-10-01", "abc", "2024-03-1x",
    "2024-00-10", "2024-03-00", "0-01-01", "2023-02-30",
    "2024-03-10T10:00", 20240310,
    "２０２４-０３-１０", "٢٠٢٤-٠٣-١٠",
])
def test_parse_day_rejects_malformed(value):
    """Некорректные даты -> None, без исключений"""
    assert parse_day(value) is None


def test_parse_day_passes_through_dates():
    assert parse_day(date(2024, 1, 2)) == date(2024, 1, 2)
    assert parse_day(datetime(2024, 1, 2, 23, 59)) == date(2024, 1, 2)


def test_format_day():
    assert format_day(date(2024, 1, 5)) == "2024-01-05"


def test_add_days_rolls_over_month_and_year():
    assert add_days(date(2023, 12, 31), 1) == date(2024, 1, 1)
    assert add_days(date(2024, 2, 28), 1) == date(2024, 2, 29)
    assert add_days(date(2023, 2, 28), 1) == date(2023, 3, 1)


def test_add_months_clamps_to_month_end():
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)
    assert add_months(date(2024, 3, 31), 1) == date(2024, 4, 30)


def test_add_months_across_year_and_backwards():
    assert add_months(date(2024, 11, 30), 3) == date(2025, 2, 28)
    assert add_months(date(2024, 3, 31), -1) == date(2024, 2, 29)
    assert add_months(date(2024, 2, 29), 12) == date(2025, 2, 28)


def test_add_months_then_back_never_exceeds_clamp():
    there = add_months(date(2024, 1, 31), 1)
    back = add_months(there, -1)
    assert there == date(2024, 2, 29)
    assert back == date(2024, 1, 29)


def test_month_bounds():
    assert month_bounds(date(2024, 2, 14)) == (date(2024, 2, 1), date(2024, 2, 29))
    assert month_bounds(date(2023, 12, 31)) == (date(2023, 12, 1), date(2023, 12, 31))


def test_last_day_of_month():
    assert last_day_of_month(2024, 2) == 29
    assert last_day_of_month(2100, 2) == 28


def test_ordering_predicates():
    a, b = date(2024, 1, 1), date(2024, 1, 2)
    assert is_same_or_before(a, b)
    assert is_same_or_before(a, a)
    assert not is_after(a, a)
    assert is_after(b, a)
    assert days_between(a, b) == 1
