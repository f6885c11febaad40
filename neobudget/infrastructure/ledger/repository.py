"""
Ledger repository - reads stored movements and rules into a LedgerContext
"""
from sqlalchemy import func
from sqlalchemy.orm import Session

from neobudget.application.ledger import LedgerContext
from neobudget.domain.recurrence import RecurrencePolicy
from neobudget.domain.recurring_rule import RecurringRule
from neobudget.domain.transaction import (
    Transaction, normalize_type, normalize_account_type, to_amount,
)
from neobudget.infrastructure.db.models import MovementModel, RecurringRuleModel


def parse_days_of_week(s: str | None) -> list[int]:
    """Parse comma-separated weekday string (e.g. '1,3,5') to list of ints."""
    if not s or not s.strip():
        return []
    out: list[int] = []
    for part in s.split(","):
        part = part.strip()
        if part.isdigit():
            out.append(int(part))
    return out


def format_days_of_week(days) -> str:
    return ",".join(str(d) for d in sorted(set(days or [])))


def movement_from_row(row: MovementModel) -> Transaction:
    return Transaction(
        id=row.movement_id,
        type=normalize_type(row.type),
        amount=to_amount(row.amount),
        date=row.date,
        category=row.category or "",
        account_type=normalize_account_type(row.account_type),
        note=row.note or "",
    )


def rule_from_row(row: RecurringRuleModel) -> RecurringRule:
    return RecurringRule(
        id=row.rule_id,
        type=normalize_type(row.type),
        name=row.name or "",
        amount=to_amount(row.amount),
        start_date=row.start_date,
        end_date=row.end_date,
        recurrence=RecurrencePolicy.from_dict({
            "mode": row.mode,
            "interval": row.interval,
            "daysOfWeek": parse_days_of_week(row.days_of_week),
        }),
        account_type=normalize_account_type(row.account_type),
        category=row.category or "",
    )


class LedgerRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_movements(self) -> list[MovementModel]:
        """Movements by date (for listing)."""
        return (
            self.db.query(MovementModel)
            .order_by(MovementModel.date, MovementModel.position, MovementModel.movement_id)
            .all()
        )

    def list_movements_in_order(self) -> list[MovementModel]:
        """Movements in insertion order."""
        return (
            self.db.query(MovementModel)
            .order_by(MovementModel.position, MovementModel.movement_id)
            .all()
        )

    def list_rules(self) -> list[RecurringRuleModel]:
        return (
            self.db.query(RecurringRuleModel)
            .order_by(RecurringRuleModel.position, RecurringRuleModel.rule_id)
            .all()
        )

    def next_movement_position(self) -> int:
        return (self.db.query(func.max(MovementModel.position)).scalar() or 0) + 1

    def next_rule_position(self) -> int:
        return (self.db.query(func.max(RecurringRuleModel.position)).scalar() or 0) + 1

    def get_movement(self, movement_id: str) -> MovementModel | None:
        return self.db.query(MovementModel).filter(
            MovementModel.movement_id == movement_id
        ).first()

    def get_rule(self, rule_id: str) -> RecurringRuleModel | None:
        return self.db.query(RecurringRuleModel).filter(
            RecurringRuleModel.rule_id == rule_id
        ).first()

    def load_context(self) -> LedgerContext:
        """Fresh read-only snapshot of the stored ledger (one per query), in insertion order."""
        return LedgerContext(
            transactions=tuple(movement_from_row(r) for r in self.list_movements_in_order()),
            rules=tuple(rule_from_row(r) for r in self.list_rules()),
        )
