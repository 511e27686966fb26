# app/crud/stock_crud.py
"""
Inventory engine.

Stock positions are opened once per product and then only changed through
movements. A movement is written to the ledger first and the position second;
when the position update fails the ledger entry is deleted again (and audited
as a rollback) before the error is returned, so the ledger always sums up to
the position.

Every function works on the session it is given and owns its transaction:
it commits on success and rolls back on any error it raises.
"""
import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from shared.core.exceptions import (
    ConstraintViolation,
    InternalError,
    LedgerRollbackError,
    NotFoundError,
    SemanticError,
    StockError,
    StoreError,
)
from shared.utils.enums import AuditTable, DBOperation, MovementDirection
from ..models.product import Product
from ..models.stock import StockMovement, StockPosition
from ..schemas.stock_schemas import StockMovementCreate, StockPositionCreate, StockPositionDetailOut
from . import audit_log_crud, product_crud
from . import stock_movement_crud as ledger
from . import stock_position_crud as positions

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def _classify(error: StoreError, fallback: str) -> StockError:
    if isinstance(error, ConstraintViolation):
        return SemanticError(str(error))
    return InternalError(f"{fallback}: {error}")


def _require_positive_price(unit_price: Decimal) -> None:
    if unit_price <= ZERO:
        raise SemanticError("Unit price must be greater than zero")


def initiate_stock(db: Session, stock: StockPositionCreate, actor: str) -> StockPosition:
    try:
        if not product_crud.product_exists(db, stock.product_id):
            raise NotFoundError("Product not found")

        if positions.get_position(db, stock.product_id) is not None:
            raise SemanticError(
                f"Stock already initiated for product {stock.product_id}")

        _require_positive_price(stock.unit_price)

        if stock.quantity < ZERO:
            raise SemanticError("Quantity must not be negative")

        try:
            position = positions.insert_position(db, StockPosition(
                product_id=stock.product_id,
                quantity=stock.quantity,
                unit_price=stock.unit_price,
            ))
        except StoreError as e:
            raise _classify(e, "Stock initiation failed") from e

        audit_log_crud.record(
            db,
            AuditTable.STOCK,
            actor,
            DBOperation.INSERT,
            f"Stock initiated for product {position.product_id}",
        )
        db.commit()
    except StockError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        raise InternalError(f"Stock initiation failed: {e}") from e

    db.refresh(position)
    logger.info("Stock initiated for product %s by %s",
                position.product_id, actor)
    return position


def apply_movement(db: Session, movement: StockMovementCreate, actor: str) -> StockMovement:
    product_id = movement.product_id
    try:
        if not product_crud.product_exists(db, product_id):
            raise NotFoundError("Product not found")

        # Locks the position row: concurrent movements on the same product
        # queue here until this transaction ends. SQLite has no row locks and
        # queues them earlier, at BEGIN IMMEDIATE.
        current = positions.get_position(db, product_id, for_update=True)
        if current is None:
            raise NotFoundError(
                f"Stock not initiated for product {product_id}")

        _require_positive_price(movement.unit_price)

        if movement.freight_price is not None and movement.freight_price < ZERO:
            raise SemanticError("Freight price must not be negative")

        new_quantity = current.quantity + movement.quantity
        if new_quantity < ZERO:
            raise SemanticError(
                f"Movement would make stock negative; current stock: {current.quantity}")

        try:
            entry = ledger.insert_movement(db, StockMovement(
                product_id=product_id,
                document=movement.document,
                quantity=movement.quantity,
                unit_price=movement.unit_price,
                freight_price=movement.freight_price if movement.freight_price is not None else ZERO,
                timestamp=datetime.now(timezone.utc),
            ))
        except StoreError as e:
            raise _classify(e, "Stock movement failed") from e

        audit_log_crud.record(
            db,
            AuditTable.STOCK_MOVEMENT,
            actor,
            DBOperation.INSERT,
            f"Stock movement {entry.id}",
        )

        try:
            positions.update_position(
                db, product_id, new_quantity, movement.unit_price)
        except (StoreError, NotFoundError) as e:
            _rollback_movement(db, entry.id, actor)
            if isinstance(e, ConstraintViolation):
                raise SemanticError(str(e)) from e
            raise InternalError(f"Stock update failed: {e}") from e

        audit_log_crud.record(
            db,
            AuditTable.STOCK,
            actor,
            DBOperation.UPDATE,
            f"Stock updated for product {product_id}",
        )
        db.commit()
    except StockError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        raise InternalError(f"Stock movement failed: {e}") from e

    db.refresh(entry)
    logger.info("Stock movement %s applied to product %s by %s (new quantity %s)",
                entry.id, product_id, actor, new_quantity)
    return entry


def _rollback_movement(db: Session, movement_id: int, actor: str) -> None:
    """
    Compensating delete for a ledger entry whose position update failed.

    The delete and its audit entry are committed, so the failed attempt stays
    visible in the audit log. If the delete or its commit fails nothing is
    committed.
    """
    logger.warning("Rolling back stock movement %s", movement_id)
    try:
        ledger.delete_movement(db, movement_id)
        audit_log_crud.record(
            db,
            AuditTable.STOCK_MOVEMENT,
            actor,
            DBOperation.DELETE,
            f"Rollback of stock movement {movement_id}",
        )
        db.commit()
    except (StoreError, SQLAlchemyError) as e:
        db.rollback()
        logger.critical(
            "Rollback of stock movement %s failed, transaction aborted: %s", movement_id, e)
        raise LedgerRollbackError(
            f"Rollback of stock movement {movement_id} failed: {e}") from e


def get_position(db: Session, product_id: int) -> Optional[StockPosition]:
    # No catalog check: a position may outlive its product
    return positions.get_position(db, product_id)


def show_position(db: Session, product_id: int) -> Optional[StockPositionDetailOut]:
    position = positions.get_position(db, product_id)
    if position is None:
        return None
    product = product_crud.get_product(db, product_id)
    if product is None:
        return None
    return _to_detail(position, product)


def list_positions(db: Session, limit: int = 100) -> List[StockPositionDetailOut]:
    return [_to_detail(position, product)
            for position, product in positions.list_positions(db, limit)]


def list_movements(
    db: Session,
    limit: int = 100,
    direction: Optional[MovementDirection] = None,
    product_id: Optional[int] = None,
) -> List[StockMovement]:
    return ledger.list_movements(db, limit, direction, product_id)


def _to_detail(position: StockPosition, product: Product) -> StockPositionDetailOut:
    return StockPositionDetailOut(
        id=product.id,
        description=product.description,
        output_unit=product.output_unit,
        quantity=position.quantity,
        unit_price=position.unit_price,
    )
