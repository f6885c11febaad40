"""
Transaction domain entity - one dated money movement, real or virtual
"""
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

from neobudget.domain.dates import parse_day, format_day


TYPE_INCOME = "income"
TYPE_EXPENSE = "expense"

ACCOUNT_LIQUID = "liquid"
ACCOUNT_INVESTED = "invested"

VIRTUAL_ID_PREFIX = "RGEN_"


def normalize_type(value) -> str:
    """Everything that is not an expense counts as income."""
    return TYPE_EXPENSE if value == TYPE_EXPENSE else TYPE_INCOME


def normalize_account_type(value) -> str:
    return ACCOUNT_INVESTED if value == ACCOUNT_INVESTED else ACCOUNT_LIQUID


def to_amount(value) -> Decimal:
    """Coerce a stored amount to Decimal; non-numeric values become 0."""
    if isinstance(value, Decimal):
        return value if value.is_finite() else Decimal("0")
    if isinstance(value, bool) or value is None:
        return Decimal("0")
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return Decimal("0")
    return amount if amount.is_finite() else Decimal("0")


def text_field(value) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def virtual_id(rule_id: str, day: date) -> str:
    return f"{VIRTUAL_ID_PREFIX}{rule_id}_{format_day(day)}"


@dataclass(frozen=True)
class Transaction:
    """
    Transaction (movement)

    Real transactions come from storage. Virtual ones are produced by
    expanding a RecurringRule and carry rule_id plus a synthetic id
    "RGEN_<rule_id>_<YYYY-MM-DD>".

    date is None when the stored value could not be parsed; such records
    are skipped by every aggregation.
    """
    id: str
    type: str  # income | expense
    amount: Decimal
    date: Optional[date]
    category: str = ""
    account_type: str = ACCOUNT_LIQUID  # liquid | invested
    note: str = ""
    rule_id: Optional[str] = None

    @property
    def is_virtual(self) -> bool:
        return self.rule_id is not None

    @property
    def signed_amount(self) -> Decimal:
        return self.amount if self.type == TYPE_INCOME else -self.amount

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Transaction":
        """Build from a stored record ({id, type, amount, date, category, accountType, note})."""
        return cls(
            id=str(raw.get("id") or ""),
            type=normalize_type(raw.get("type")),
            amount=to_amount(raw.get("amount")),
            date=parse_day(raw.get("date")),
            category=text_field(raw.get("category")),
            account_type=normalize_account_type(raw.get("accountType")),
            note=text_field(raw.get("note")),
        )

    def to_dict(self) -> Dict[str, Any]:
        payload = {
            "id": self.id,
            "type": self.type,
            "amount": str(self.amount),
            "date": format_day(self.date) if self.date else None,
            "category": self.category,
            "accountType": self.account_type,
            "note": self.note,
        }
        if self.rule_id is not None:
            payload["ruleId"] = self.rule_id
        return payload
