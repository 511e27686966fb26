from decimal import Decimal
from sqlalchemy import BigInteger, CheckConstraint, Column, ForeignKey, Integer, Numeric, String, TIMESTAMP
from sqlalchemy.orm import relationship
from sqlalchemy.types import TypeDecorator
from shared.core.database import Base


class ExactDecimal(TypeDecorator):
    """
    NUMERIC(precision, scale) that stays exact on every backend.

    SQLite keeps NUMERIC values as REAL, so there the value is stored as an
    integer count of 10**-scale units (1.5 at scale 3 is 1500). Sums, CHECK
    constraints and comparisons against zero work unchanged on those integers.
    """
    impl = Numeric
    cache_ok = True

    def __init__(self, precision: int, scale: int):
        super().__init__(precision, scale)
        self.precision = precision
        self.scale = scale

    def load_dialect_impl(self, dialect):
        if dialect.name == "sqlite":
            return dialect.type_descriptor(BigInteger())
        return dialect.type_descriptor(Numeric(self.precision, self.scale))

    def process_bind_param(self, value, dialect):
        if value is None or dialect.name != "sqlite":
            return value
        scaled = Decimal(value).scaleb(self.scale)
        if scaled != scaled.to_integral_value():
            raise ValueError(f"{value} has more than {self.scale} decimal places")
        return int(scaled)

    def process_result_value(self, value, dialect):
        if value is None or dialect.name != "sqlite":
            return value
        return Decimal(int(value)).scaleb(-self.scale)


QUANTITY = ExactDecimal(14, 3)
PRICE = ExactDecimal(14, 4)


class StockPosition(Base):
    """Current quantity and unit price on hand for one product."""
    __tablename__ = "stock_positions"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_stock_positions_quantity_non_negative"),
        CheckConstraint("unit_price > 0", name="ck_stock_positions_unit_price_positive"),
    )

    product_id = Column(Integer, ForeignKey("products.id"), primary_key=True)
    quantity = Column(QUANTITY, nullable=False, default=0)
    unit_price = Column(PRICE, nullable=False)

    product = relationship("Product")
    movements = relationship("StockMovement", back_populates="position")


class StockMovement(Base):
    """Ledger entry; positive quantity is stock-in, negative is stock-out."""
    __tablename__ = "stock_movements"
    __table_args__ = (
        CheckConstraint("unit_price > 0", name="ck_stock_movements_unit_price_positive"),
        CheckConstraint("freight_price >= 0", name="ck_stock_movements_freight_non_negative"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(Integer, ForeignKey("stock_positions.product_id"),
                        nullable=False, index=True)
    document = Column(String(64), nullable=False)
    quantity = Column(QUANTITY, nullable=False)
    unit_price = Column(PRICE, nullable=False)
    freight_price = Column(PRICE, nullable=False, default=0)
    timestamp = Column(TIMESTAMP(timezone=True), nullable=False, index=True)

    position = relationship("StockPosition", back_populates="movements")
