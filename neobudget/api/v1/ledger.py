"""
Ledger query endpoints (snapshot, monthly series, category totals, occurrences)

Query dates are plain strings: an unparsable date is not a 422, it yields
the empty/zero answer of the corresponding query.
"""
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from neobudget.api.deps import get_ledger_context
from neobudget.application.category_totals import get_category_totals
from neobudget.application.ledger import LedgerContext
from neobudget.application.monthly_series import get_monthly_series
from neobudget.application.occurrences import generate_recurring_occurrences
from neobudget.application.snapshot import get_snapshot, local_today
from neobudget.domain.dates import format_day


router = APIRouter(prefix="/api/v1/ledger", tags=["ledger"])


# === Response models ===

class SnapshotResponse(BaseModel):
    date: str
    balance: str  # Decimal as string
    liquidity: str
    invested: str
    total: str
    projected_income: str
    projected_expense: str


class SeriesPointResponse(BaseModel):
    day: int
    value: str  # Decimal as string


class CategoryTotalResponse(BaseModel):
    category: str
    total: str  # Decimal as string


class OccurrenceResponse(BaseModel):
    id: str
    rule_id: str
    type: str
    amount: str
    date: str
    category: str
    account_type: str
    note: str


def _target(date: str | None) -> str:
    """Default to today when the date parameter is omitted"""
    return date if date is not None else format_day(local_today())


# === Endpoints ===

@router.get("/snapshot", response_model=SnapshotResponse)
def snapshot(date: str | None = None, ctx: LedgerContext = Depends(get_ledger_context)):
    """Баланс, ликвидность, инвестиции и прогноз на дату"""
    target = _target(date)
    snap = get_snapshot(ctx, target)
    return SnapshotResponse(
        date=target,
        **{key: str(value) for key, value in snap.to_dict().items()},
    )


@router.get("/monthly-series", response_model=list[SeriesPointResponse])
def monthly_series(date: str | None = None, ctx: LedgerContext = Depends(get_ledger_context)):
    """Ликвидность по дням месяца (нарастающим итогом)"""
    return [
        SeriesPointResponse(day=point["day"], value=str(point["value"]))
        for point in get_monthly_series(ctx, _target(date))
    ]


@router.get("/categories", response_model=list[CategoryTotalResponse])
def categories(date: str | None = None, ctx: LedgerContext = Depends(get_ledger_context)):
    """Итоги по категориям на дату"""
    return [
        CategoryTotalResponse(category=category, total=str(total))
        for category, total in get_category_totals(ctx, _target(date)).items()
    ]


@router.get("/occurrences", response_model=list[OccurrenceResponse])
def occurrences(date: str | None = None, ctx: LedgerContext = Depends(get_ledger_context)):
    """Виртуальные операции всех повторяющихся правил до даты"""
    return [
        OccurrenceResponse(
            id=t.id,
            rule_id=t.rule_id,
            type=t.type,
            amount=str(t.amount),
            date=format_day(t.date),
            category=t.category,
            account_type=t.account_type,
            note=t.note,
        )
        for t in generate_recurring_occurrences(ctx, _target(date))
    ]
