"""
Snapshot aggregator - scalar financial totals as of a target date.

Real transactions up to the target plus virtual occurrences of every
recurring rule are folded into balance, liquidity, invested, total and
the projected (after today, up to target) income/expense.
"""
from dataclasses import dataclass, asdict
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional
from zoneinfo import ZoneInfo

from neobudget.application.ledger import LedgerContext, SkippedRecord
from neobudget.application.occurrences import generate_recurring_occurrences
from neobudget.config import get_settings
from neobudget.domain.dates import parse_day
from neobudget.domain.transaction import TYPE_INCOME, ACCOUNT_LIQUID


ZERO = Decimal("0")


@dataclass(frozen=True)
class Snapshot:
    balance: Decimal
    liquidity: Decimal
    invested: Decimal
    total: Decimal
    projected_income: Decimal
    projected_expense: Decimal

    @classmethod
    def zero(cls) -> "Snapshot":
        return cls(ZERO, ZERO, ZERO, ZERO, ZERO, ZERO)

    def to_dict(self) -> Dict[str, Decimal]:
        return asdict(self)


def local_today() -> date:
    """Current day in the configured timezone."""
    return datetime.now(tz=ZoneInfo(get_settings().TIMEZONE)).date()


def get_snapshot(
    ctx: LedgerContext,
    target,
    today: date | None = None,
    diagnostics: Optional[List[SkippedRecord]] = None,
) -> Snapshot:
    """
    Totals as of target (inclusive).

    Args:
        ctx: ledger to aggregate
        target: date or "YYYY-MM-DD"; unparsable -> all-zero snapshot
        today: splits realized from projected amounts (default: local today)
        diagnostics: optional list collecting skipped records
    """
    target_day = parse_day(target)
    if target_day is None:
        return Snapshot.zero()
    today = today or local_today()

    base = [t for t in ctx.dated_transactions(diagnostics) if t.date <= target_day]
    virtual = generate_recurring_occurrences(ctx, target_day, diagnostics)

    total_income = ZERO
    total_expense = ZERO
    liquidity = ZERO
    invested = ZERO
    projected_income = ZERO
    projected_expense = ZERO

    for t in base + virtual:
        is_income = t.type == TYPE_INCOME
        if is_income:
            total_income += t.amount
        else:
            total_expense += t.amount

        if t.account_type == ACCOUNT_LIQUID:
            liquidity += t.signed_amount
        else:
            invested += t.signed_amount

        if today < t.date <= target_day:
            if is_income:
                projected_income += t.amount
            else:
                projected_expense += t.amount

    return Snapshot(
        balance=total_income - total_expense,
        liquidity=liquidity,
        invested=invested,
        total=liquidity + invested,
        projected_income=projected_income,
        projected_expense=projected_expense,
    )
