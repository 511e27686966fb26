# app/router/product_router.py
from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from shared.core.auth import validate_current_token
from shared.core.config import settings
from shared.core.database import get_stock_db as get_db
from shared.core.exceptions import NotFoundError
from shared.core.schemas import UserToken
from ..crud import product_crud as crud
from ..schemas.product_schemas import ProductCreate, ProductOut

router = APIRouter(prefix="/api/products",
                   tags=["products"], dependencies=[Depends(validate_current_token)])


@router.get("/", response_model=List[ProductOut])
def read_products(
    limit: int = Query(settings.DEFAULT_LIST_LIMIT, ge=1, le=settings.MAX_LIST_LIMIT),
    db: Session = Depends(get_db)
):
    return crud.list_products(db, limit)


@router.get("/{product_id}", response_model=ProductOut)
def read_product(product_id: int, db: Session = Depends(get_db)):
    db_product = crud.get_product(db, product_id)
    if not db_product:
        raise NotFoundError("Product not found")
    return db_product


@router.post("/", response_model=ProductOut)
def create_product(
    product: ProductCreate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.create_product(db, product, current_user.actor)
