"""Category aggregator - net (income minus expense) per category as of a target date."""
from decimal import Decimal
from typing import Dict, List, Optional

from neobudget.application.ledger import LedgerContext, SkippedRecord
from neobudget.application.occurrences import generate_recurring_occurrences
from neobudget.domain.dates import parse_day


UNCATEGORIZED = "uncategorized"


def category_key(category: str) -> str:
    return (category or "").strip() or UNCATEGORIZED


def get_category_totals(
    ctx: LedgerContext,
    target,
    diagnostics: Optional[List[SkippedRecord]] = None,
) -> Dict[str, Decimal]:
    """
    {category: net} over real (<= target) and virtual (<= target) transactions.

    Keys keep first-encounter order; zero totals are kept.
    """
    target_day = parse_day(target)
    if target_day is None:
        return {}

    base = [t for t in ctx.dated_transactions(diagnostics) if t.date <= target_day]
    virtual = generate_recurring_occurrences(ctx, target_day, diagnostics)

    totals: Dict[str, Decimal] = {}
    for t in base + virtual:
        key = category_key(t.category)
        totals[key] = totals.get(key, Decimal("0")) + t.signed_amount
    return totals
