"""Monthly liquidity series - running liquid balance for each day of one calendar month."""
from collections import defaultdict
from decimal import Decimal
from typing import Any, Dict, List, Optional

from neobudget.application.ledger import LedgerContext, SkippedRecord
from neobudget.application.occurrences import generate_recurring_occurrences
from neobudget.domain.dates import parse_day, month_bounds
from neobudget.domain.transaction import ACCOUNT_LIQUID


def get_monthly_series(
    ctx: LedgerContext,
    any_date_in_month,
    diagnostics: Optional[List[SkippedRecord]] = None,
) -> List[Dict[str, Any]]:
    """
    [{day, value}] for day 1..N of the month containing any_date_in_month.

    value is the liquid balance at the end of that day: the signed sum of
    all liquid transactions before the month, plus every liquid
    transaction of the month up to and including that day.
    """
    day = parse_day(any_date_in_month)
    if day is None:
        return []

    month_start, month_end = month_bounds(day)

    all_movs = ctx.dated_transactions(diagnostics) + generate_recurring_occurrences(ctx, month_end, diagnostics)
    liquid = [t for t in all_movs if t.account_type == ACCOUNT_LIQUID]

    starting_liquidity = sum(
        (t.signed_amount for t in liquid if t.date < month_start),
        Decimal("0"),
    )

    month_movs = sorted(
        (t for t in liquid if month_start <= t.date <= month_end),
        key=lambda t: t.date,
    )
    by_day: Dict[int, Decimal] = defaultdict(Decimal)
    for t in month_movs:
        by_day[t.date.day] += t.signed_amount

    series: List[Dict[str, Any]] = []
    current = starting_liquidity
    for n in range(1, month_end.day + 1):
        current += by_day.get(n, Decimal("0"))
        series.append({"day": n, "value": current})
    return series
