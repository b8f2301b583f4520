"""Product DTOs for the Service Layer.

Framework-agnostic input schemas using Pydantic v2.  They are the
contract between the API layer and the Service layer.  DTOs are
immutable (``frozen=True``) and reject unknown keys.

- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: input for partial product updates; ``password``
  stays mandatory and ``status`` is validated exactly as on creation.

Fields are declared in the order the API reports violations: only the
first failing field is surfaced to the client (see ``first_error_message``).
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from modules.products.models import ProductStatus

REQUIRED_FIELD_MESSAGES = {
    "name": "Please enter the product name.",
    "description": "Please enter the product description.",
    "manager": "Please enter the product manager.",
    "password": "Please enter the password.",
}

STATUS_MESSAGE = "Product status must be one of [{}].".format(
    ", ".join(status.value for status in ProductStatus)
)

# Fields an update may change, in change-set order.
MUTABLE_FIELDS = ("name", "description", "manager", "status")


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    manager: str = Field(min_length=1)
    status: Optional[ProductStatus] = None
    password: str = Field(min_length=1)

    @field_validator("status", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        # Optional fields may be omitted, never sent as null.
        if value is None:
            raise PydanticCustomError("null_value", "Field may not be null.")
        return value


class UpdateProductDTO(BaseModel):
    """Immutable DTO for product update requests.

    Descriptive fields are optional; only truthy ones end up in the
    change-set.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    manager: Optional[str] = Field(default=None, min_length=1)
    status: Optional[ProductStatus] = None
    password: str = Field(min_length=1)

    @field_validator("name", "description", "manager", "status", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        if value is None:
            raise PydanticCustomError("null_value", "Field may not be null.")
        return value

    def change_set(self) -> Dict[str, Any]:
        """Return the document fields this request changes."""
        changes: Dict[str, Any] = {}
        for field in MUTABLE_FIELDS:
            value = getattr(self, field)
            if value:
                changes[field] = value.value if isinstance(value, ProductStatus) else value
        return changes


# ---------------------------------------------------------------------------
# Error reporting
# ---------------------------------------------------------------------------


def first_error_message(exc: ValidationError) -> str:
    """Render the first violation of ``exc`` as a client-facing message."""
    error = exc.errors()[0]
    if not error["loc"]:
        return error["msg"]

    field = ".".join(str(part) for part in error["loc"])
    if error["type"] == "missing" and field in REQUIRED_FIELD_MESSAGES:
        return REQUIRED_FIELD_MESSAGES[field]
    if field == "status":
        return STATUS_MESSAGE
    if error["type"] == "extra_forbidden":
        return f'"{field}" is not allowed.'
    if error["type"] in ("null_value", "string_type"):
        return f'"{field}" must be a string.'
    if error["type"] == "string_too_short":
        return f'"{field}" is not allowed to be empty.'
    return f'"{field}": {error["msg"]}'
