"""
Request envelope: the uniform body POSTed for every resource operation.
"""

from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field

DEFAULT_TENANT_ID = "ad88dd5d24ce4e2189a6ae7491c33e9d"
DEFAULT_USER_ID = "44faef681cd34e1c80b8520dd6aebad4"


class Operation:
    CREATE = "CREATE"
    READ = "READ"
    READALL = "READALL"
    UPDATE = "UPDATE"
    DELETE = "DELETE"

    @staticmethod
    def custom(name: str) -> str:
        """Custom operations are sent upper-cased, e.g. `add_member` -> `ADD_MEMBER`."""
        return name.upper()


class RequestData(BaseModel):
    fields: list[str] = []
    filters: Any = Field(default_factory=dict)
    id: Optional[UUID] = None
    resource: dict[str, Any] = Field(default_factory=dict)


class RequestContext(BaseModel):
    is_admin: bool = True
    operation: str = Operation.READALL
    request_id: str
    tenant_id: str = DEFAULT_TENANT_ID
    type: str = ""
    user_id: str = DEFAULT_USER_ID


class RequestBody(BaseModel):
    data: RequestData
    context: RequestContext
