# Import all models to ensure they are registered with SQLAlchemy
from .product import Product
from .stock import StockPosition, StockMovement
from .audit_log import AuditLog
