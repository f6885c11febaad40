"""
Recurring rule API endpoints
"""
from datetime import date as date_type
from decimal import Decimal
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from neobudget.api.deps import get_db
from neobudget.application.ledger import LedgerValidationError
from neobudget.application.recurring import (
    CreateRecurringRuleUseCase, UpdateRecurringRuleUseCase, DeleteRecurringRuleUseCase,
)
from neobudget.domain.recurrence import RecurrencePolicy
from neobudget.infrastructure.db.models import RecurringRuleModel
from neobudget.infrastructure.ledger.repository import LedgerRepository, rule_from_row


router = APIRouter(prefix="/api/v1/recurring", tags=["recurring"])


# === Request/Response models ===

class RecurrenceModel(BaseModel):
    mode: str = "monthly"  # daily, everyXDays, weekly, weeklySpecific, everyXMonths, monthly, yearly
    interval: int = 1
    days_of_week: list[int] = Field(default_factory=list)  # Mon=1..Sun=7, weeklySpecific only

    def to_policy(self) -> RecurrencePolicy:
        return RecurrencePolicy.from_dict({
            "mode": self.mode,
            "interval": self.interval,
            "daysOfWeek": self.days_of_week,
        })


class CreateRecurringRuleRequest(BaseModel):
    type: str  # income | expense
    name: str
    amount: Decimal
    start_date: date_type
    end_date: date_type | None = None
    account_type: str = "liquid"
    category: str = ""
    recurrence: RecurrenceModel = Field(default_factory=RecurrenceModel)


class UpdateRecurringRuleRequest(BaseModel):
    type: str | None = None
    name: str | None = None
    amount: Decimal | None = None
    start_date: date_type | None = None
    end_date: date_type | None = None
    account_type: str | None = None
    category: str | None = None
    recurrence: RecurrenceModel | None = None


class RecurringRuleResponse(BaseModel):
    rule_id: str
    type: str
    name: str
    amount: str  # Decimal as string
    start_date: date_type
    end_date: date_type | None
    account_type: str
    category: str
    recurrence: RecurrenceModel
    label: str  # "Every 3 months"


def _to_response(row: RecurringRuleModel) -> RecurringRuleResponse:
    rule = rule_from_row(row)
    return RecurringRuleResponse(
        rule_id=row.rule_id,
        type=row.type,
        name=row.name,
        amount=str(row.amount),
        start_date=row.start_date,
        end_date=row.end_date,
        account_type=row.account_type,
        category=row.category,
        recurrence=RecurrenceModel(
            mode=rule.recurrence.mode,
            interval=rule.recurrence.interval,
            days_of_week=sorted(rule.recurrence.days_of_week),
        ),
        label=rule.label,
    )


def _get_or_404(db: Session, rule_id: str) -> RecurringRuleModel:
    row = LedgerRepository(db).get_rule(rule_id)
    if not row:
        raise HTTPException(status_code=404, detail="Recurring rule not found")
    return row


# === Endpoints ===

@router.post("/", response_model=RecurringRuleResponse)
def create_rule(req: CreateRecurringRuleRequest, db: Session = Depends(get_db)):
    """Создать повторяющееся правило"""
    rule_id = CreateRecurringRuleUseCase(db).execute(
        type=req.type,
        name=req.name,
        amount=req.amount,
        start_date=req.start_date,
        end_date=req.end_date,
        account_type=req.account_type,
        category=req.category,
        recurrence=req.recurrence.to_policy(),
    )
    return _to_response(_get_or_404(db, rule_id))


@router.get("/", response_model=list[RecurringRuleResponse])
def list_rules(type: str | None = None, db: Session = Depends(get_db)):
    """Список правил (опционально только income или expense)"""
    rows = LedgerRepository(db).list_rules()
    if type is not None:
        rows = [r for r in rows if r.type == type]
    return [_to_response(row) for row in rows]


@router.put("/{rule_id}", response_model=RecurringRuleResponse)
def update_rule(rule_id: str, req: UpdateRecurringRuleRequest, db: Session = Depends(get_db)):
    """Изменить правило"""
    _get_or_404(db, rule_id)
    changes = req.model_dump(exclude_unset=True, exclude={"recurrence"})
    if req.recurrence is not None:
        changes["recurrence"] = req.recurrence.to_policy()
    try:
        UpdateRecurringRuleUseCase(db).execute(rule_id, **changes)
    except LedgerValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _to_response(_get_or_404(db, rule_id))


@router.delete("/{rule_id}")
def delete_rule(rule_id: str, db: Session = Depends(get_db)):
    """Удалить правило"""
    try:
        DeleteRecurringRuleUseCase(db).execute(rule_id)
    except LedgerValidationError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True}
