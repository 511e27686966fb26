from datetime import datetime
from typing import Optional
from pydantic import BaseModel, field_serializer

from shared.utils.enums import DBOperation


class AuditLogOut(BaseModel):
    id: int
    table_name: str
    actor: str
    operation: DBOperation
    timestamp: datetime
    description: Optional[str] = None

    class Config:
        from_attributes = True

    @field_serializer("operation")
    def serialize_operation(self, operation: DBOperation) -> str:
        return operation.name.lower()
