# app/crud/stock_position_crud.py
from decimal import Decimal
from typing import List, Optional, Tuple
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session
from shared.core.exceptions import ConstraintViolation, NotFoundError, StoreError
from ..models.product import Product
from ..models.stock import StockPosition


def position_query(db: Session, product_id: int, for_update: bool = False) -> Query:
    query = db.query(StockPosition).filter(StockPosition.product_id == product_id)
    if for_update:
        # row lock held until the surrounding transaction ends
        query = query.with_for_update()
    return query


def get_position(db: Session, product_id: int, for_update: bool = False) -> Optional[StockPosition]:
    return position_query(db, product_id, for_update).first()


def insert_position(db: Session, position: StockPosition) -> StockPosition:
    try:
        db.add(position)
        db.flush()
    except IntegrityError as e:
        raise ConstraintViolation(str(e.orig)) from e
    except SQLAlchemyError as e:
        raise StoreError(str(e)) from e
    return position


def update_position(db: Session, product_id: int, quantity: Decimal, unit_price: Decimal) -> StockPosition:
    """
    Overwrite quantity and unit price of an existing position.

    Runs in a SAVEPOINT, so a failure leaves the outer transaction usable
    and nothing of this update visible.
    """
    position = get_position(db, product_id)
    if position is None:
        raise NotFoundError(f"Stock not initiated for product {product_id}")

    try:
        with db.begin_nested():
            position.quantity = quantity
            position.unit_price = unit_price
            db.flush()
    except IntegrityError as e:
        db.expire(position)
        raise ConstraintViolation(str(e.orig)) from e
    except SQLAlchemyError as e:
        db.expire(position)
        raise StoreError(str(e)) from e
    return position


def list_positions(db: Session, limit: int = 100) -> List[Tuple[StockPosition, Product]]:
    return (
        db.query(StockPosition, Product)
        .join(Product, Product.id == StockPosition.product_id)
        .order_by(StockPosition.product_id)
        .limit(limit)
        .all()
    )
