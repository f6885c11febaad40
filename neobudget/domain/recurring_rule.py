"""RecurringRule domain entity - a template that expands into virtual transactions"""
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional

from neobudget.domain.dates import parse_day, format_day
from neobudget.domain.recurrence import RecurrencePolicy, generate_occurrence_dates, recurrence_label
from neobudget.domain.transaction import (
    Transaction, ACCOUNT_LIQUID,
    normalize_type, normalize_account_type, to_amount, text_field, virtual_id,
)


@dataclass(frozen=True)
class RecurringRule:
    id: str
    type: str  # income | expense
    name: str
    amount: Decimal
    start_date: Optional[date]
    end_date: Optional[date] = None  # None = open-ended
    recurrence: RecurrencePolicy = field(default_factory=RecurrencePolicy)
    account_type: str = ACCOUNT_LIQUID
    category: str = ""
    # endDate was present but not parseable
    end_date_invalid: bool = False

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "RecurringRule":
        """
        Build a rule from a stored record.

        Old records carry "frequency" (monthly/quarterly/yearly) instead of
        "recurrence"; they are migrated on the fly.
        """
        recurrence_raw = raw.get("recurrence")
        if recurrence_raw:
            recurrence = RecurrencePolicy.from_dict(recurrence_raw)
        else:
            recurrence = RecurrencePolicy.from_legacy_frequency(raw.get("frequency"))

        end_raw = raw.get("endDate")
        end_date = parse_day(end_raw) if end_raw else None

        return cls(
            id=str(raw.get("id") or ""),
            type=normalize_type(raw.get("type")),
            name=text_field(raw.get("name")),
            amount=to_amount(raw.get("amount")),
            start_date=parse_day(raw.get("startDate")),
            end_date=end_date,
            recurrence=recurrence,
            account_type=normalize_account_type(raw.get("accountType")),
            category=text_field(raw.get("category")),
            end_date_invalid=bool(end_raw) and end_date is None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "name": self.name,
            "amount": str(self.amount),
            "accountType": self.account_type,
            "category": self.category,
            "startDate": format_day(self.start_date) if self.start_date else None,
            "endDate": format_day(self.end_date) if self.end_date else None,
            "recurrence": self.recurrence.to_dict(),
        }

    @property
    def label(self) -> str:
        return recurrence_label(self.recurrence)

    def effective_end(self, target: date) -> date:
        if self.end_date is not None and self.end_date < target:
            return self.end_date
        return target

    def expand(self, target: date) -> List[Transaction]:
        """
        Occurrences of this rule in [start_date, min(end_date, target)].

        A rule that starts after target contributes nothing.
        """
        if self.start_date is None or self.start_date > target:
            return []

        return [
            Transaction(
                id=virtual_id(self.id, d),
                type=self.type,
                amount=self.amount,
                date=d,
                category=self.category or self.name,
                account_type=self.account_type or ACCOUNT_LIQUID,
                note=self.name,
                rule_id=self.id,
            )
            for d in generate_occurrence_dates(self.recurrence, self.start_date, self.effective_end(target))
        ]
