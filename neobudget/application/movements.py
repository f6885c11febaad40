"""
Movement use cases - create, update and delete real transactions
"""
import uuid
from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from neobudget.application.ledger import LedgerValidationError
from neobudget.domain.transaction import (
    ACCOUNT_LIQUID, normalize_type, normalize_account_type, to_amount,
)
from neobudget.infrastructure.db.models import MovementModel
from neobudget.infrastructure.ledger.repository import LedgerRepository


def generate_movement_id() -> str:
    return f"M_{uuid.uuid4().hex}"


class CreateMovementUseCase:
    """Use case: Добавить движение (доход или расход)"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = LedgerRepository(db)

    def execute(
        self,
        type: str,
        amount: Decimal,
        date: date,
        category: str = "",
        account_type: str = ACCOUNT_LIQUID,
        note: str = "",
        movement_id: str | None = None,
    ) -> str:
        """
        Returns:
            movement_id созданной записи
        """
        if date is None:
            raise LedgerValidationError("Movement date is required")

        movement_id = movement_id or generate_movement_id()
        self.db.add(MovementModel(
            movement_id=movement_id,
            type=normalize_type(type),
            amount=to_amount(amount),
            date=date,
            category=(category or "").strip(),
            account_type=normalize_account_type(account_type),
            note=(note or "").strip(),
            position=self.repo.next_movement_position(),
        ))
        self.db.commit()
        return movement_id


class UpdateMovementUseCase:
    """Use case: Изменить существующее движение."""

    allowed = ("type", "amount", "date", "category", "account_type", "note")

    def __init__(self, db: Session):
        self.db = db
        self.repo = LedgerRepository(db)

    def execute(self, movement_id: str, **changes) -> None:
        row = self.repo.get_movement(movement_id)
        if not row:
            raise LedgerValidationError(f"Movement {movement_id} not found")

        for key in self.allowed:
            if key not in changes:
                continue
            val = changes[key]
            if key == "type":
                val = normalize_type(val)
            elif key == "account_type":
                val = normalize_account_type(val)
            elif key == "amount":
                val = to_amount(val)
            elif key == "date" and val is None:
                raise LedgerValidationError("Movement date is required")
            elif key in ("category", "note"):
                val = (val or "").strip()
            setattr(row, key, val)

        self.db.commit()


class DeleteMovementUseCase:
    """Use case: Удалить движение"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = LedgerRepository(db)

    def execute(self, movement_id: str) -> None:
        row = self.repo.get_movement(movement_id)
        if not row:
            raise LedgerValidationError(f"Movement {movement_id} not found")
        self.db.delete(row)
        self.db.commit()
