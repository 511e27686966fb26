# app/crud/product_crud.py
from typing import List, Optional
from sqlalchemy.orm import Session
from shared.utils.enums import AuditTable, DBOperation
from ..models.product import Product
from ..schemas.product_schemas import ProductCreate
from . import audit_log_crud


def product_exists(db: Session, product_id: int) -> bool:
    return db.query(Product.id).filter(Product.id == product_id).first() is not None


def get_product(db: Session, product_id: int) -> Optional[Product]:
    return db.query(Product).filter(Product.id == product_id).first()


def list_products(db: Session, limit: int = 100) -> List[Product]:
    return db.query(Product).order_by(Product.id).limit(limit).all()


def create_product(db: Session, product: ProductCreate, actor: str) -> Product:
    db_product = Product(**product.model_dump())
    db.add(db_product)
    db.flush()
    audit_log_crud.record(
        db,
        AuditTable.PRODUCT,
        actor,
        DBOperation.INSERT,
        f"Product {db_product.id} created",
    )
    db.commit()
    db.refresh(db_product)
    return db_product
