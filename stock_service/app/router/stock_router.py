# app/router/stock_router.py
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from shared.core.auth import validate_current_token
from shared.core.config import settings
from shared.core.database import get_stock_db as get_db
from shared.core.exceptions import NotFoundError
from shared.core.schemas import UserToken
from shared.utils.enums import MovementDirection
from ..crud import stock_crud as crud
from ..schemas.stock_schemas import (
    StockMovementCreate,
    StockMovementOut,
    StockPositionCreate,
    StockPositionDetailOut,
    StockPositionOut,
)

router = APIRouter(prefix="/api/stock",
                   tags=["stock"], dependencies=[Depends(validate_current_token)])

LIMIT = Query(settings.DEFAULT_LIST_LIMIT, ge=1, le=settings.MAX_LIST_LIMIT)


@router.get("/", response_model=List[StockPositionDetailOut])
def list_stock(limit: int = LIMIT, db: Session = Depends(get_db)):
    return crud.list_positions(db, limit)


@router.post("/", response_model=StockPositionOut)
def initiate_stock(
    stock: StockPositionCreate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.initiate_stock(db, stock, current_user.actor)


# ---------------- Movements ----------------
# declared before /{product_id} so "movements" is never read as an id


@router.get("/movements", response_model=List[StockMovementOut])
def list_movements(
    limit: int = LIMIT,
    product_id: Optional[int] = None,
    db: Session = Depends(get_db)
):
    return crud.list_movements(db, limit, product_id=product_id)


@router.get("/movements/in", response_model=List[StockMovementOut])
def list_stock_in(
    limit: int = LIMIT,
    product_id: Optional[int] = None,
    db: Session = Depends(get_db)
):
    return crud.list_movements(db, limit, MovementDirection.IN, product_id)


@router.get("/movements/out", response_model=List[StockMovementOut])
def list_stock_out(
    limit: int = LIMIT,
    product_id: Optional[int] = None,
    db: Session = Depends(get_db)
):
    return crud.list_movements(db, limit, MovementDirection.OUT, product_id)


@router.post("/movements", response_model=StockMovementOut)
def apply_movement(
    movement: StockMovementCreate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.apply_movement(db, movement, current_user.actor)


@router.get("/{product_id}", response_model=StockPositionDetailOut)
def show_stock(product_id: int, db: Session = Depends(get_db)):
    position = crud.show_position(db, product_id)
    if position is None:
        raise NotFoundError(f"Stock not found for product {product_id}")
    return position
