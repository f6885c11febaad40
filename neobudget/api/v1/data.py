"""
Data endpoints: JSON export, import and full reset
"""
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from neobudget.api.deps import get_db
from neobudget.application.ledger import LedgerValidationError
from neobudget.application.state_io import ExportStateUseCase, ImportStateUseCase, ResetLedgerUseCase
from neobudget.config import get_settings


router = APIRouter(prefix="/api/v1/data", tags=["data"])


@router.get("/export")
def export_state(db: Session = Depends(get_db)):
    """Выгрузка всех движений и правил (скачивание JSON)"""
    settings = get_settings()
    return JSONResponse(
        content=ExportStateUseCase(db).execute(),
        headers={"Content-Disposition": f'attachment; filename="{settings.EXPORT_FILENAME}"'},
    )


@router.post("/import")
def import_state(payload: Any = Body(...), db: Session = Depends(get_db)):
    """Импорт (заменяет все текущие данные)"""
    try:
        result = ImportStateUseCase(db).execute(payload)
    except LedgerValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {
        "movements": result["movements"],
        "recurring": result["recurring"],
        "skipped": [
            {"kind": s.kind, "record_id": s.record_id, "reason": s.reason}
            for s in result["skipped"]
        ],
    }


@router.post("/reset")
def reset_state(db: Session = Depends(get_db)):
    """Полный сброс данных"""
    ResetLedgerUseCase(db).execute()
    return {"success": True}
