from pydantic import BaseModel
from typing import Generic, Optional, TypeVar
from uuid import UUID

# Shared properties
T = TypeVar("T")


class UserToken(BaseModel):
    user_id: str
    org_id: Optional[UUID] = None
    name: Optional[str] = None  # used as the audit actor when present
    account_type: Optional[str] = None
    exp: Optional[int] = None

    @property
    def actor(self) -> str:
        return self.name or self.user_id


class JsonOutResult(BaseModel, Generic[T]):
    data: Optional[T] = None
    status: str
    status_code: str
    message: str
