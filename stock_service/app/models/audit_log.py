# app/models/audit_log.py
from sqlalchemy import Column, Integer, SmallInteger, String, TIMESTAMP
from sqlalchemy.types import TypeDecorator
from shared.core.database import Base
from shared.core.exceptions import StorageCorruptionError
from shared.utils.enums import DBOperation


class DBOperationType(TypeDecorator):
    """Stores DBOperation as SMALLINT and decodes it back on load."""
    impl = SmallInteger
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return int(DBOperation(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        try:
            return DBOperation(value)
        except ValueError:
            raise StorageCorruptionError(
                f"Unknown audit operation code {value!r}") from None


class AuditLog(Base):
    __tablename__ = "audit_log"

    id = Column(Integer, primary_key=True, autoincrement=True)
    table_name = Column(String(64), nullable=False)
    actor = Column(String(100), nullable=False)
    operation = Column(DBOperationType, nullable=False)
    timestamp = Column(TIMESTAMP(timezone=True), nullable=False, index=True)
    description = Column(String(255), nullable=True)
