# app/router/audit_log_router.py
from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from shared.core.auth import validate_current_token
from shared.core.config import settings
from shared.core.database import get_stock_db as get_db
from ..crud import audit_log_crud as crud
from ..schemas.audit_log_schemas import AuditLogOut

router = APIRouter(prefix="/api/audit-log",
                   tags=["audit_log"], dependencies=[Depends(validate_current_token)])


@router.get("/", response_model=List[AuditLogOut])
def read_audit_log(
    limit: int = Query(settings.DEFAULT_LIST_LIMIT, ge=1, le=settings.MAX_LIST_LIMIT),
    db: Session = Depends(get_db)
):
    return crud.list_entries(db, limit)
