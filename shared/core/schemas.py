from pydantic import BaseModel
from typing import Generic, Optional, TypeVar

from shared.utils.enums import AdminRole
from shared.wrappers.empty_string_model_wrapper import EmptyStringModel

# Shared properties
T = TypeVar("T")


class AdminToken(BaseModel):
    """Authenticated operator identity resolved from a bearer token."""
    admin_id: int
    session_id: str
    role: AdminRole
    email: Optional[str] = None
    exp: Optional[int] = None


class CommonQueryParams(EmptyStringModel):
    search: Optional[str] = None
    skip: Optional[int] = 0
    limit: Optional[int] = 50


class JsonOutResult(BaseModel, Generic[T]):
    data: Optional[T] = None
    status: str
    status_code: str
    message: str
