"""
Ledger context - the read-only data a query runs against.

Queries never touch storage or globals: the caller builds a LedgerContext
(from the DB, from an exported JSON document, or by hand in tests) and
passes it to each query function.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from neobudget.domain.recurring_rule import RecurringRule
from neobudget.domain.transaction import Transaction

logger = logging.getLogger(__name__)


class LedgerValidationError(ValueError):
    """Ошибка операции с записями (неизвестный id, неверный формат импорта)"""
    pass


@dataclass(frozen=True)
class SkippedRecord:
    """One record left out of an aggregation, with the reason."""
    kind: str  # "transaction" | "rule"
    record_id: str
    reason: str


def record_skip(
    diagnostics: Optional[List[SkippedRecord]],
    kind: str,
    record_id: str,
    reason: str,
) -> None:
    logger.debug("Skipping %s %r: %s", kind, record_id, reason)
    if diagnostics is not None:
        diagnostics.append(SkippedRecord(kind=kind, record_id=record_id, reason=reason))


@dataclass(frozen=True)
class LedgerContext:
    transactions: Tuple[Transaction, ...] = ()
    rules: Tuple[RecurringRule, ...] = ()

    @classmethod
    def from_state(cls, state: Dict[str, Any]) -> "LedgerContext":
        """
        Build a context from an exported state document
        {"movements": [...], "recurring": [...]}.

        Non-dict entries and non-list sections are ignored.
        """
        if not isinstance(state, dict):
            return cls()
        movements = state.get("movements")
        recurring = state.get("recurring")
        if not isinstance(movements, list):
            movements = []
        if not isinstance(recurring, list):
            recurring = []
        return cls(
            transactions=tuple(Transaction.from_dict(m) for m in movements if isinstance(m, dict)),
            rules=tuple(RecurringRule.from_dict(r) for r in recurring if isinstance(r, dict)),
        )

    def to_state(self) -> Dict[str, Any]:
        return {
            "movements": [t.to_dict() for t in self.transactions],
            "recurring": [r.to_dict() for r in self.rules],
        }

    def dated_transactions(self, diagnostics: Optional[List[SkippedRecord]] = None) -> List[Transaction]:
        """Real transactions that carry a usable date."""
        out: List[Transaction] = []
        for t in self.transactions:
            if t.date is None:
                record_skip(diagnostics, "transaction", t.id, "missing or unparsable date")
                continue
            out.append(t)
        return out
