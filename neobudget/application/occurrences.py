"""
Occurrence materializer - expands every recurring rule of a ledger up to a target date.

Pure function of (context, target): nothing is persisted, every call
re-walks each rule from its start date.
"""
from datetime import date
from typing import List, Optional

from neobudget.application.ledger import LedgerContext, SkippedRecord, record_skip
from neobudget.domain.dates import parse_day
from neobudget.domain.transaction import Transaction


def generate_recurring_occurrences(
    ctx: LedgerContext,
    target,
    diagnostics: Optional[List[SkippedRecord]] = None,
) -> List[Transaction]:
    """
    Virtual transactions of all rules with date <= target.

    Rule order is kept; within a rule occurrences are ascending by date.
    Rules with an unparsable start or end date are skipped.
    """
    target_day: date | None = parse_day(target)
    if target_day is None:
        return []

    occurrences: List[Transaction] = []
    for rule in ctx.rules:
        if rule.start_date is None:
            record_skip(diagnostics, "rule", rule.id, "missing or unparsable startDate")
            continue
        if rule.end_date_invalid:
            record_skip(diagnostics, "rule", rule.id, "unparsable endDate")
            continue
        occurrences.extend(rule.expand(target_day))
    return occurrences
