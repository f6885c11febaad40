"""
Movement API endpoints
"""
from datetime import date as date_type
from decimal import Decimal
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from neobudget.api.deps import get_db
from neobudget.application.ledger import LedgerValidationError
from neobudget.application.movements import (
    CreateMovementUseCase, UpdateMovementUseCase, DeleteMovementUseCase,
)
from neobudget.infrastructure.db.models import MovementModel
from neobudget.infrastructure.ledger.repository import LedgerRepository


router = APIRouter(prefix="/api/v1/movements", tags=["movements"])


# === Request/Response models ===

class CreateMovementRequest(BaseModel):
    type: str  # income | expense
    amount: Decimal
    date: date_type
    category: str = ""
    account_type: str = "liquid"  # liquid | invested
    note: str = ""


class UpdateMovementRequest(BaseModel):
    type: str | None = None
    amount: Decimal | None = None
    date: date_type | None = None
    category: str | None = None
    account_type: str | None = None
    note: str | None = None


class MovementResponse(BaseModel):
    movement_id: str
    type: str
    amount: str  # Decimal as string
    date: date_type
    category: str
    account_type: str
    note: str


def _to_response(row: MovementModel) -> MovementResponse:
    return MovementResponse(
        movement_id=row.movement_id,
        type=row.type,
        amount=str(row.amount),
        date=row.date,
        category=row.category,
        account_type=row.account_type,
        note=row.note,
    )


def _get_or_404(db: Session, movement_id: str) -> MovementModel:
    row = LedgerRepository(db).get_movement(movement_id)
    if not row:
        raise HTTPException(status_code=404, detail="Movement not found")
    return row


# === Endpoints ===

@router.post("/", response_model=MovementResponse)
def create_movement(req: CreateMovementRequest, db: Session = Depends(get_db)):
    """Добавить движение"""
    movement_id = CreateMovementUseCase(db).execute(
        type=req.type,
        amount=req.amount,
        date=req.date,
        category=req.category,
        account_type=req.account_type,
        note=req.note,
    )
    return _to_response(_get_or_404(db, movement_id))


@router.get("/", response_model=list[MovementResponse])
def list_movements(db: Session = Depends(get_db)):
    """Список движений (по дате)"""
    return [_to_response(row) for row in LedgerRepository(db).list_movements()]


@router.put("/{movement_id}", response_model=MovementResponse)
def update_movement(movement_id: str, req: UpdateMovementRequest, db: Session = Depends(get_db)):
    """Изменить движение"""
    _get_or_404(db, movement_id)
    changes = req.model_dump(exclude_unset=True)
    try:
        UpdateMovementUseCase(db).execute(movement_id, **changes)
    except LedgerValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _to_response(_get_or_404(db, movement_id))


@router.delete("/{movement_id}")
def delete_movement(movement_id: str, db: Session = Depends(get_db)):
    """Удалить движение"""
    try:
        DeleteMovementUseCase(db).execute(movement_id)
    except LedgerValidationError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True}
