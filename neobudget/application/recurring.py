"""
Recurring rule use cases - create, update and delete recurring income/expense rules
"""
import uuid
from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from neobudget.application.ledger import LedgerValidationError
from neobudget.domain.recurrence import RecurrencePolicy, MODE_WEEKLY_SPECIFIC
from neobudget.domain.transaction import (
    ACCOUNT_LIQUID, normalize_type, normalize_account_type, to_amount,
)
from neobudget.infrastructure.db.models import RecurringRuleModel
from neobudget.infrastructure.ledger.repository import LedgerRepository, format_days_of_week


def generate_rule_id() -> str:
    return f"R_{uuid.uuid4().hex}"


def apply_policy(row: RecurringRuleModel, policy: RecurrencePolicy) -> None:
    row.mode = policy.mode
    row.interval = policy.interval
    # Weekdays only mean something for weeklySpecific
    row.days_of_week = format_days_of_week(policy.days_of_week) if policy.mode == MODE_WEEKLY_SPECIFIC else ""


class CreateRecurringRuleUseCase:
    """
    Use case: Создать повторяющееся правило (регулярный доход/расход)

    Правило хранится как есть; виртуальные операции не сохраняются,
    а вычисляются при каждом запросе.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = LedgerRepository(db)

    def execute(
        self,
        type: str,
        name: str,
        amount: Decimal,
        start_date: date,
        recurrence: RecurrencePolicy | None = None,
        end_date: date | None = None,
        account_type: str = ACCOUNT_LIQUID,
        category: str = "",
        rule_id: str | None = None,
    ) -> str:
        if start_date is None:
            raise LedgerValidationError("Recurring rule start date is required")

        rule_id = rule_id or generate_rule_id()
        row = RecurringRuleModel(
            rule_id=rule_id,
            type=normalize_type(type),
            name=(name or "").strip(),
            amount=to_amount(amount),
            account_type=normalize_account_type(account_type),
            category=(category or "").strip(),
            start_date=start_date,
            end_date=end_date,
            position=self.repo.next_rule_position(),
        )
        apply_policy(row, recurrence or RecurrencePolicy())
        self.db.add(row)
        self.db.commit()
        return rule_id


class UpdateRecurringRuleUseCase:
    """Use case: Изменить повторяющееся правило."""

    allowed = ("type", "name", "amount", "account_type", "category", "start_date", "end_date", "recurrence")

    def __init__(self, db: Session):
        self.db = db
        self.repo = LedgerRepository(db)

    def execute(self, rule_id: str, **changes) -> None:
        row = self.repo.get_rule(rule_id)
        if not row:
            raise LedgerValidationError(f"Recurring rule {rule_id} not found")

        for key in self.allowed:
            if key not in changes:
                continue
            val = changes[key]
            if key == "recurrence":
                apply_policy(row, val or RecurrencePolicy())
                continue
            if key == "type":
                val = normalize_type(val)
            elif key == "account_type":
                val = normalize_account_type(val)
            elif key == "amount":
                val = to_amount(val)
            elif key == "start_date" and val is None:
                raise LedgerValidationError("Recurring rule start date is required")
            elif key in ("name", "category"):
                val = (val or "").strip()
            setattr(row, key, val)

        self.db.commit()


class DeleteRecurringRuleUseCase:
    """Use case: Удалить повторяющееся правило"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = LedgerRepository(db)

    def execute(self, rule_id: str) -> None:
        row = self.repo.get_rule(rule_id)
        if not row:
            raise LedgerValidationError(f"Recurring rule {rule_id} not found")
        self.db.delete(row)
        self.db.commit()
