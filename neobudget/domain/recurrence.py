"""
Deterministic recurrence occurrence generator.

Uses date only (no timezone). Every generator walks the inclusive window
[start, end] and returns dates in ascending order.

Modes:
- daily: every day
- everyXDays: every N days
- weekly: every N weeks, on the start date's weekday
- weeklySpecific: every listed weekday (Monday=1..Sunday=7)
- everyXMonths: every N months, day clamped to month length
- monthly: everyXMonths with N=1
- yearly: every 12 months, day clamped to month length
"""
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import FrozenSet

from neobudget.domain.dates import add_months


MODE_DAILY = "daily"
MODE_EVERY_X_DAYS = "everyXDays"
MODE_WEEKLY = "weekly"
MODE_WEEKLY_SPECIFIC = "weeklySpecific"
MODE_EVERY_X_MONTHS = "everyXMonths"
MODE_MONTHLY = "monthly"
MODE_YEARLY = "yearly"

VALID_MODES = frozenset({
    MODE_DAILY, MODE_EVERY_X_DAYS, MODE_WEEKLY, MODE_WEEKLY_SPECIFIC,
    MODE_EVERY_X_MONTHS, MODE_MONTHLY, MODE_YEARLY,
})
DEFAULT_MODE = MODE_MONTHLY

# Legacy rules stored a "frequency" string instead of a recurrence policy
LEGACY_FREQUENCY_MAP = {
    "quarterly": (MODE_EVERY_X_MONTHS, 3),
    "yearly": (MODE_YEARLY, 1),
}

WEEKDAY_LABELS = {1: "Mon", 2: "Tue", 3: "Wed", 4: "Thu", 5: "Fri", 6: "Sat", 7: "Sun"}


def _coerce_interval(value) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 1
    return max(1, int(value))


def _coerce_days(values) -> FrozenSet[int]:
    if not isinstance(values, (list, tuple, set, frozenset)):
        return frozenset()
    out: set[int] = set()
    for v in values:
        try:
            day = int(v)
        except (TypeError, ValueError):
            continue
        if 1 <= day <= 7:
            out.add(day)
    return frozenset(out)


@dataclass(frozen=True)
class RecurrencePolicy:
    mode: str = DEFAULT_MODE
    interval: int = 1
    days_of_week: FrozenSet[int] = field(default_factory=frozenset)  # weeklySpecific only

    @classmethod
    def from_dict(cls, raw) -> "RecurrencePolicy":
        """Build a policy from a stored dict; missing or unknown parts fall back to monthly/1/{}."""
        if not isinstance(raw, dict):
            return cls()
        mode = raw.get("mode")
        if mode not in VALID_MODES:
            mode = DEFAULT_MODE
        return cls(
            mode=mode,
            interval=_coerce_interval(raw.get("interval")),
            days_of_week=_coerce_days(raw.get("daysOfWeek")),
        )

    @classmethod
    def from_legacy_frequency(cls, frequency) -> "RecurrencePolicy":
        mode, interval = LEGACY_FREQUENCY_MAP.get(frequency, (DEFAULT_MODE, 1))
        return cls(mode=mode, interval=interval)

    def to_dict(self) -> dict:
        return {
            "mode": self.mode,
            "interval": self.interval,
            "daysOfWeek": sorted(self.days_of_week),
        }


def _step_days(start: date, end: date, step: int) -> list[date]:
    out: list[date] = []
    d = start
    while d <= end:
        out.append(d)
        d += timedelta(days=step)
    return out


def _step_months(start: date, end: date, step: int) -> list[date]:
    # Each step starts from the previous occurrence: a day clamped in a
    # short month stays clamped (Jan 31 -> Feb 29 -> Mar 29)
    out: list[date] = []
    d = start
    while d <= end:
        out.append(d)
        d = add_months(d, step)
    return out


def _weekly_specific(start: date, end: date, days_of_week: FrozenSet[int]) -> list[date]:
    if not days_of_week:
        return []
    out: list[date] = []
    d = start
    while d <= end:
        if d.isoweekday() in days_of_week:
            out.append(d)
        d += timedelta(days=1)
    return out


def generate_occurrence_dates(
    policy: RecurrencePolicy,
    start: date,
    end: date,
) -> list[date]:
    """Generate occurrence dates in [start, end] (inclusive).
    Deterministic, sorted ascending. Empty when start > end."""
    if start > end:
        return []

    interval = max(1, policy.interval)
    mode = policy.mode

    if mode == MODE_DAILY:
        return _step_days(start, end, 1)
    if mode == MODE_EVERY_X_DAYS:
        return _step_days(start, end, interval)
    if mode == MODE_WEEKLY:
        return _step_days(start, end, 7 * interval)
    if mode == MODE_WEEKLY_SPECIFIC:
        return _weekly_specific(start, end, policy.days_of_week)
    if mode == MODE_EVERY_X_MONTHS:
        return _step_months(start, end, interval)
    if mode == MODE_YEARLY:
        return _step_months(start, end, 12)
    return _step_months(start, end, 1)


def recurrence_label(policy: RecurrencePolicy) -> str:
    """Human-readable schedule, e.g. "Every 2 weeks" or "Every Mon, Wed"."""
    interval = max(1, policy.interval)
    mode = policy.mode

    if mode == MODE_DAILY:
        return "Every day"
    if mode == MODE_EVERY_X_DAYS:
        return f"Every {interval} days"
    if mode == MODE_WEEKLY:
        return "Every week" if interval == 1 else f"Every {interval} weeks"
    if mode == MODE_WEEKLY_SPECIFIC:
        if not policy.days_of_week:
            return "Specific days"
        labels = [WEEKDAY_LABELS[d] for d in sorted(policy.days_of_week)]
        return f"Every {', '.join(labels)}"
    if mode == MODE_EVERY_X_MONTHS:
        return "Every month" if interval == 1 else f"Every {interval} months"
    if mode == MODE_YEARLY:
        return "Every year"
    return "Monthly"
