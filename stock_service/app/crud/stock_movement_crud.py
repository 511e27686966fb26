# app/crud/stock_movement_crud.py
from decimal import Decimal
from typing import List, Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from shared.core.exceptions import ConstraintViolation, StoreError
from shared.utils.enums import MovementDirection
from ..models.stock import StockMovement


def insert_movement(db: Session, movement: StockMovement) -> StockMovement:
    try:
        db.add(movement)
        db.flush()
    except IntegrityError as e:
        raise ConstraintViolation(str(e.orig)) from e
    except SQLAlchemyError as e:
        raise StoreError(str(e)) from e
    return movement


def delete_movement(db: Session, movement_id: int) -> None:
    try:
        deleted = (
            db.query(StockMovement)
            .filter(StockMovement.id == movement_id)
            .delete(synchronize_session="fetch")
        )
    except SQLAlchemyError as e:
        raise StoreError(str(e)) from e
    if deleted != 1:
        raise StoreError(f"Stock movement {movement_id} was not deleted")


def list_movements(
    db: Session,
    limit: int = 100,
    direction: Optional[MovementDirection] = None,
    product_id: Optional[int] = None,
) -> List[StockMovement]:
    query = db.query(StockMovement)
    if direction == MovementDirection.IN:
        query = query.filter(StockMovement.quantity >= Decimal("0"))
    elif direction == MovementDirection.OUT:
        query = query.filter(StockMovement.quantity < Decimal("0"))
    if product_id is not None:
        query = query.filter(StockMovement.product_id == product_id)
    return (
        query.order_by(StockMovement.timestamp.desc(), StockMovement.id.desc())
        .limit(limit)
        .all()
    )
