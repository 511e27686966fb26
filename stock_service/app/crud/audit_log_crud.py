# app/crud/audit_log_crud.py
"""
Audit log sink.

Every successful state change records one entry. Recording is fire-and-forget
for callers: it runs in a SAVEPOINT so a failed audit insert never poisons the
caller's transaction, and the failure is logged instead of raised.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from shared.utils.enums import DBOperation
from ..models.audit_log import AuditLog

logger = logging.getLogger(__name__)


def record(
    db: Session,
    table_name: str,
    actor: str,
    operation: DBOperation,
    description: Optional[str] = None,
) -> Optional[int]:
    entry = AuditLog(
        table_name=getattr(table_name, "value", table_name),
        actor=actor,
        operation=operation,
        timestamp=datetime.now(timezone.utc),
        description=description,
    )
    try:
        with db.begin_nested():
            db.add(entry)
            db.flush()
    except SQLAlchemyError:
        logger.warning("Could not write audit entry for %s (%s): %s",
                       entry.table_name, operation.name, description, exc_info=True)
        return None
    return entry.id


def list_entries(db: Session, limit: int = 100) -> List[AuditLog]:
    return (
        db.query(AuditLog)
        .order_by(AuditLog.timestamp.desc(), AuditLog.id.desc())
        .limit(limit)
        .all()
    )
