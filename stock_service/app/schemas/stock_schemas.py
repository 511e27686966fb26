from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional
from pydantic import BaseModel, Field

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel

# Sign rules are business rules checked by the stock engine, only precision is checked here
Quantity = Annotated[Decimal, Field(max_digits=14, decimal_places=3)]
Price = Annotated[Decimal, Field(max_digits=14, decimal_places=4)]


class StockPositionCreate(BaseModel):
    product_id: int
    quantity: Quantity
    unit_price: Price


class StockPositionOut(BaseModel):
    product_id: int
    quantity: Decimal
    unit_price: Decimal

    class Config:
        from_attributes = True


class StockPositionDetailOut(BaseModel):
    """Stock position joined with the product it belongs to."""
    id: int
    description: str
    output_unit: str
    quantity: Decimal
    unit_price: Decimal


class StockMovementCreate(EmptyStringModel):
    product_id: int
    document: str = Field(max_length=64)
    quantity: Quantity
    unit_price: Price
    freight_price: Optional[Price] = None


class StockMovementOut(BaseModel):
    id: int
    product_id: int
    document: str
    quantity: Decimal
    unit_price: Decimal
    freight_price: Decimal
    timestamp: datetime

    class Config:
        from_attributes = True
