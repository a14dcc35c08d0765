"""
Envelope builder: accumulates operation metadata and attributes, then
serializes the canonical request body.
"""

import uuid
from typing import Any, Optional, Union
from uuid import UUID

from sdncli.models.envelope import (
    DEFAULT_TENANT_ID,
    DEFAULT_USER_ID,
    Operation,
    RequestBody,
    RequestContext,
    RequestData,
)

REQUEST_ID_PREFIX = "req-sdncli-"


def new_request_id() -> str:
    return f"{REQUEST_ID_PREFIX}{uuid.uuid4()}"


class RequestEnvelope:
    """Chainable builder. Reusable: every build() gets a fresh request_id.

    >>> RequestEnvelope().set_type("network").set_operation("read").set_id(uid).build()
    """

    def __init__(self) -> None:
        self.operation: str = Operation.READALL
        self.resource_type: str = ""
        self.fields: list[str] = []
        self.filters: Any = {}
        self.target_id: Optional[UUID] = None
        self.attributes: dict[str, Any] = {}
        self._context: dict[str, Any] = {
            "is_admin": True,
            "tenant_id": DEFAULT_TENANT_ID,
            "user_id": DEFAULT_USER_ID,
        }

    def set_type(self, resource_type: str) -> "RequestEnvelope":
        self.resource_type = resource_type
        return self

    def set_operation(self, op: str) -> "RequestEnvelope":
        self.operation = op.upper()
        return self

    def set_id(self, identifier: Union[str, UUID]) -> "RequestEnvelope":
        self.target_id = identifier if isinstance(identifier, UUID) else UUID(identifier)
        # The backend reads the id from the resource payload, not data.id.
        self.attributes["id"] = str(self.target_id)
        return self

    def set_name(self, name: str) -> "RequestEnvelope":
        self.attributes["name"] = name
        return self

    def merge_attributes(self, fragment: dict[str, Any]) -> "RequestEnvelope":
        self.attributes.update(fragment)
        return self

    def set_fields(self, fields: list[str]) -> "RequestEnvelope":
        self.fields = list(fields)
        return self

    def set_filters(self, filters: Any) -> "RequestEnvelope":
        self.filters = filters
        return self

    def set_context(self, **overrides: Any) -> "RequestEnvelope":
        """Override is_admin, tenant_id or user_id."""
        for key in overrides:
            if key not in self._context:
                raise ValueError(f"Unknown context field: {key}")
        self._context.update(overrides)
        return self

    def build(self) -> dict[str, Any]:
        body = RequestBody(
            data=RequestData(
                fields=self.fields,
                filters=self.filters,
                id=self.target_id,
                resource=dict(self.attributes),
            ),
            context=RequestContext(
                operation=self.operation,
                request_id=new_request_id(),
                type=self.resource_type,
                **self._context,
            ),
        )
        payload = body.model_dump(mode="json")
        if self.target_id is None:
            del payload["data"]["id"]
        return payload
