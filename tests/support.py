"""Base test case with an isolated in-memory database per test."""

from __future__ import annotations

import unittest
from decimal import Decimal

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from shared.core.database import Base, configure_sqlite
from stock_service.app import models  # noqa: F401
from stock_service.app.crud import product_crud, stock_crud
from stock_service.app.models.product import Product
from stock_service.app.schemas.product_schemas import ProductCreate
from stock_service.app.schemas.stock_schemas import StockMovementCreate, StockPositionCreate

ACTOR = "tester"


class StockTestCase(unittest.TestCase):
    """Creates the schema on a fresh SQLite engine for every test."""

    def setUp(self) -> None:
        self.engine = configure_sqlite(create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        ))
        Base.metadata.create_all(self.engine)
        self.SessionLocal = sessionmaker(autoflush=False, bind=self.engine)
        self.db = self.SessionLocal()

    def tearDown(self) -> None:
        self.db.close()
        Base.metadata.drop_all(self.engine)
        self.engine.dispose()

    def reloaded(self):
        """The test session with its identity map expired, so reads hit the database."""
        self.db.expire_all()
        return self.db

    def make_product(self, description: str = "Arroz 5kg", output_unit: str = "UN"):
        return product_crud.create_product(
            self.db, ProductCreate(description=description, output_unit=output_unit), ACTOR)

    def initiate(self, product_id: int, quantity: str = "100", unit_price: str = "1.50"):
        return stock_crud.initiate_stock(
            self.db,
            StockPositionCreate(
                product_id=product_id,
                quantity=Decimal(quantity),
                unit_price=Decimal(unit_price),
            ),
            ACTOR,
        )

    def move(self, product_id: int, quantity: str, unit_price: str = "2.00",
             freight_price: str | None = None, document: str = "NF-1"):
        return stock_crud.apply_movement(
            self.db,
            StockMovementCreate(
                product_id=product_id,
                document=document,
                quantity=Decimal(quantity),
                unit_price=Decimal(unit_price),
                freight_price=Decimal(freight_price) if freight_price is not None else None,
            ),
            ACTOR,
        )

    def add_product(self, product_id: int, description: str = "Feijão 1kg", output_unit: str = "UN"):
        """Catalog row with a fixed id, written straight to the table."""
        product = Product(id=product_id, description=description, output_unit=output_unit)
        self.db.add(product)
        self.db.commit()
        return product
