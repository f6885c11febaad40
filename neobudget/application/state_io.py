"""
Ledger state export / import / reset.

The exported document is the whole ledger:
    {"movements": [...], "recurring": [...]}
with camelCase record fields (accountType, startDate, endDate, daysOfWeek).
Import accepts the same shape, including old rules that still carry
"frequency" instead of "recurrence".
"""
import logging
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from neobudget.application.ledger import LedgerContext, LedgerValidationError, SkippedRecord, record_skip
from neobudget.application.movements import generate_movement_id
from neobudget.application.recurring import generate_rule_id, apply_policy
from neobudget.infrastructure.db.models import MovementModel, RecurringRuleModel
from neobudget.infrastructure.ledger.repository import LedgerRepository

logger = logging.getLogger(__name__)


class ExportStateUseCase:
    """Use case: Выгрузить всё состояние в JSON-совместимый dict"""

    def __init__(self, db: Session):
        self.db = db

    def execute(self) -> Dict[str, Any]:
        return LedgerRepository(self.db).load_context().to_state()


class ResetLedgerUseCase:
    """Use case: Полный сброс данных (движения + правила)"""

    def __init__(self, db: Session):
        self.db = db

    def execute(self) -> None:
        movements = self.db.query(MovementModel).delete()
        rules = self.db.query(RecurringRuleModel).delete()
        self.db.commit()
        logger.info("Ledger reset: deleted %d movement(s), %d rule(s)", movements, rules)


class ImportStateUseCase:
    """
    Use case: Импорт состояния из JSON

    Replaces every stored movement and rule with the payload's records.
    Records the queries would skip anyway (no usable date, unparsable
    rule start/end) are dropped and reported in the result.
    """

    def __init__(self, db: Session):
        self.db = db

    def execute(self, payload: Any) -> Dict[str, Any]:
        """
        Returns:
            {"movements": imported count, "recurring": imported count,
             "skipped": [SkippedRecord, ...]}
        """
        if not isinstance(payload, dict):
            raise LedgerValidationError("Import payload must be a JSON object")

        ctx = LedgerContext.from_state(payload)
        skipped: List[SkippedRecord] = []

        self.db.query(MovementModel).delete()
        self.db.query(RecurringRuleModel).delete()

        movements = 0
        seen: set[str] = set()
        for t in ctx.dated_transactions(skipped):
            movement_id = t.id or generate_movement_id()
            if movement_id in seen:
                record_skip(skipped, "transaction", movement_id, "duplicate id")
                continue
            seen.add(movement_id)
            movements += 1
            self.db.add(MovementModel(
                movement_id=movement_id,
                type=t.type,
                amount=t.amount,
                date=t.date,
                category=t.category.strip(),
                account_type=t.account_type,
                note=t.note.strip(),
                position=movements,
            ))

        rules = 0
        seen = set()
        for r in ctx.rules:
            if r.start_date is None:
                record_skip(skipped, "rule", r.id, "missing or unparsable startDate")
                continue
            if r.end_date_invalid:
                record_skip(skipped, "rule", r.id, "unparsable endDate")
                continue
            rule_id = r.id or generate_rule_id()
            if rule_id in seen:
                record_skip(skipped, "rule", rule_id, "duplicate id")
                continue
            seen.add(rule_id)
            rules += 1
            row = RecurringRuleModel(
                rule_id=rule_id,
                type=r.type,
                name=r.name.strip(),
                amount=r.amount,
                account_type=r.account_type,
                category=r.category.strip(),
                start_date=r.start_date,
                end_date=r.end_date,
                position=rules,
            )
            apply_policy(row, r.recurrence)
            self.db.add(row)

        self.db.commit()

        if skipped:
            logger.warning("Import dropped %d record(s) (no usable dates or duplicate ids)", len(skipped))
        logger.info("Imported %d movement(s), %d recurring rule(s)", movements, rules)
        return {"movements": movements, "recurring": rules, "skipped": skipped}
