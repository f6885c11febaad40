"""
Tests for the recurrence date generator and policy parsing
"""
from datetime import date

from neobudget.domain.dates import days_between
from neobudget.domain.recurrence import (
    RecurrencePolicy, generate_occurrence_dates, recurrence_label,
    MODE_DAILY, MODE_EVERY_X_DAYS, MODE_WEEKLY, MODE_WEEKLY_SPECIFIC,
    MODE_EVERY_X_MONTHS, MODE_MONTHLY, MODE_YEARLY,
)


class TestGenerateOccurrenceDates:
    def test_daily_count_matches_day_span(self):
        start, end = date(2024, 1, 1), date(2024, 3, 15)
        dates = generate_occurrence_dates(RecurrencePolicy(mode=MODE_DAILY), start, end)
        assert len(dates) == days_between(start, end) + 1
        assert dates[0] == start
        assert dates[-1] == end

    def test_every_x_days(self):
        dates = generate_occurrence_dates(
            RecurrencePolicy(mode=MODE_EVERY_X_DAYS, interval=10),
            date(2024, 1, 1), date(2024, 1, 31),
        )
        assert dates == [date(2024, 1, 1), date(2024, 1, 11), date(2024, 1, 21), date(2024, 1, 31)]

    def test_weekly_keeps_start_weekday(self):
        dates = generate_occurrence_dates(
            RecurrencePolicy(mode=MODE_WEEKLY, interval=2),
            date(2024, 1, 1), date(2024, 2, 15),
        )
        assert dates == [date(2024, 1, 1), date(2024, 1, 15), date(2024, 1, 29), date(2024, 2, 12)]
        assert {d.weekday() for d in dates} == {0}

    def test_weekly_specific_two_weeks(self):
        """Пн + Ср, старт в понедельник, 14 дней -> 4 вхождения"""
        start = date(2024, 1, 1)  # Monday
        dates = generate_occurrence_dates(
            RecurrencePolicy(mode=MODE_WEEKLY_SPECIFIC, days_of_week=frozenset({1, 3})),
            start, date(2024, 1, 14),
        )
        assert dates == [date(2024, 1, 1), date(2024, 1, 3), date(2024, 1, 8), date(2024, 1, 10)]

    def test_weekly_specific_empty_days_yields_nothing(self):
        dates = generate_occurrence_dates(
            RecurrencePolicy(mode=MODE_WEEKLY_SPECIFIC),
            date(2024, 1, 1), date(2024, 12, 31),
        )
        assert dates == []

    def test_every_x_months(self):
        dates = generate_occurrence_dates(
            RecurrencePolicy(mode=MODE_EVERY_X_MONTHS, interval=3),
            date(2024, 1, 15), date(2024, 10, 20),
        )
        assert dates == [date(2024, 1, 15), date(2024, 4, 15), date(2024, 7, 15), date(2024, 10, 15)]

    def test_monthly_clamped_day_carries_forward(self):
        """31-е -> 29 фев -> дальше 29-е каждого месяца"""
        dates = generate_occurrence_dates(
            RecurrencePolicy(mode=MODE_MONTHLY),
            date(2024, 1, 31), date(2024, 5, 31),
        )
        assert dates == [
            date(2024, 1, 31), date(2024, 2, 29), date(2024, 3, 29),
            date(2024, 4, 29), date(2024, 5, 29),
        ]

    def test_every_x_months_clamped_day_carries_forward(self):
        dates = generate_occurrence_dates(
            RecurrencePolicy(mode=MODE_EVERY_X_MONTHS, interval=2),
            date(2023, 12, 31), date(2024, 6, 30),
        )
        assert dates == [date(2023, 12, 31), date(2024, 2, 29), date(2024, 4, 29), date(2024, 6, 29)]

    def test_monthly_ignores_interval(self):
        dates = generate_occurrence_dates(
            RecurrencePolicy(mode=MODE_MONTHLY, interval=4),
            date(2024, 1, 10), date(2024, 3, 10),
        )
        assert len(dates) == 3

    def test_yearly_leap_day(self):
        dates = generate_occurrence_dates(
            RecurrencePolicy(mode=MODE_YEARLY),
            date(2024, 2, 29), date(2028, 3, 1),
        )
        assert dates == [
            date(2024, 2, 29), date(2025, 2, 28), date(2026, 2, 28),
            date(2027, 2, 28), date(2028, 2, 28),
        ]

    def test_end_is_inclusive(self):
        dates = generate_occurrence_dates(
            RecurrencePolicy(mode=MODE_WEEKLY),
            date(2024, 1, 1), date(2024, 1, 8),
        )
        assert dates == [date(2024, 1, 1), date(2024, 1, 8)]

    def test_start_after_end_is_empty(self):
        assert generate_occurrence_dates(RecurrencePolicy(mode=MODE_DAILY), date(2024, 2, 1), date(2024, 1, 1)) == []


class TestRecurrencePolicy:
    def test_defaults(self):
        policy = RecurrencePolicy.from_dict(None)
        assert policy == RecurrencePolicy(mode=MODE_MONTHLY, interval=1, days_of_week=frozenset())

    def test_interval_coerced_to_at_least_one(self):
        assert RecurrencePolicy.from_dict({"mode": "everyXDays", "interval": 0}).interval == 1
        assert RecurrencePolicy.from_dict({"mode": "everyXDays", "interval": -5}).interval == 1
        assert RecurrencePolicy.from_dict({"mode": "everyXDays", "interval": 2.0}).interval == 2

    def test_non_numeric_interval_falls_back(self):
        assert RecurrencePolicy.from_dict({"mode": "weekly", "interval": "3"}).interval == 1
        assert RecurrencePolicy.from_dict({"mode": "weekly", "interval": None}).interval == 1

    def test_unknown_mode_falls_back_to_monthly(self):
        assert RecurrencePolicy.from_dict({"mode": "fortnightly"}).mode == MODE_MONTHLY
        assert RecurrencePolicy.from_dict({}).mode == MODE_MONTHLY

    def test_days_of_week_filtered(self):
        policy = RecurrencePolicy.from_dict({"mode": "weeklySpecific", "daysOfWeek": [0, 1, 8, "3", "x", 3]})
        assert policy.days_of_week == frozenset({1, 3})

    def test_legacy_frequency(self):
        assert RecurrencePolicy.from_legacy_frequency("quarterly") == RecurrencePolicy(mode=MODE_EVERY_X_MONTHS, interval=3)
        assert RecurrencePolicy.from_legacy_frequency("yearly").mode == MODE_YEARLY
        assert RecurrencePolicy.from_legacy_frequency("monthly").mode == MODE_MONTHLY
        assert RecurrencePolicy.from_legacy_frequency(None).mode == MODE_MONTHLY

    def test_to_dict_sorts_days(self):
        policy = RecurrencePolicy(mode=MODE_WEEKLY_SPECIFIC, days_of_week=frozenset({5, 1}))
        assert policy.to_dict() == {"mode": "weeklySpecific", "interval": 1, "daysOfWeek": [1, 5]}


def test_recurrence_labels():
    assert recurrence_label(RecurrencePolicy(mode=MODE_DAILY)) == "Every day"
    assert recurrence_label(RecurrencePolicy(mode=MODE_EVERY_X_DAYS, interval=5)) == "Every 5 days"
    assert recurrence_label(RecurrencePolicy(mode=MODE_WEEKLY)) == "Every week"
    assert recurrence_label(RecurrencePolicy(mode=MODE_WEEKLY, interval=2)) == "Every 2 weeks"
    assert recurrence_label(RecurrencePolicy(mode=MODE_WEEKLY_SPECIFIC)) == "Specific days"
    assert recurrence_label(
        RecurrencePolicy(mode=MODE_WEEKLY_SPECIFIC, days_of_week=frozenset({3, 1}))
    ) == "Every Mon, Wed"
    assert recurrence_label(RecurrencePolicy(mode=MODE_EVERY_X_MONTHS, interval=1)) == "Every month"
    assert recurrence_label(RecurrencePolicy(mode=MODE_EVERY_X_MONTHS, interval=3)) == "Every 3 months"
    assert recurrence_label(RecurrencePolicy(mode=MODE_YEARLY)) == "Every year"
    assert recurrence_label(RecurrencePolicy(mode=MODE_MONTHLY)) == "Monthly"
