"""
FastAPI dependencies (DB session, ledger context)
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from neobudget.application.ledger import LedgerContext
from neobudget.infrastructure.db.session import get_db as _get_db
from neobudget.infrastructure.ledger.repository import LedgerRepository


# Re-export get_db для удобства
get_db = _get_db


def get_ledger_context(db: Session = Depends(get_db)) -> LedgerContext:
    """
    Read-only snapshot of the stored ledger for one request

    Usage:
        @router.get("/snapshot")
        def snapshot(ctx: LedgerContext = Depends(get_ledger_context)):
            ...
    """
    return LedgerRepository(db).load_context()
