# app/models/product.py
from sqlalchemy import Column, Integer, String
from shared.core.database import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    description = Column(String(200), nullable=False)
    # UN, KG, FD, L ... always upper case
    output_unit = Column(String(16), nullable=False)
