"""Product entity and sale status.

Products live in MongoDB, not in the Django ORM, so the entity is a plain
pydantic model.  The repository maps it to and from the stored document
(camelCase keys, ``_id`` as ``ObjectId``).

Business rules carried by the entity:
- ``status`` is one of ``ProductStatus``; new products start ``FOR_SALE``.
- ``password`` is ``None`` whenever the record was read with the password
  projected out (list/get/update).
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator


def _as_utc(value: datetime) -> datetime:
    # BSON dates carry no zone; naive values are UTC.
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class ProductStatus(str, Enum):
    FOR_SALE = "FOR_SALE"
    SOLD_OUT = "SOLD_OUT"


# Status values written by earlier releases of the catalog.
LEGACY_STATUS_VALUES = {"FOR SALE": ProductStatus.FOR_SALE}


class Product(BaseModel):
    """Catalog item with a per-record shared-secret password."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    name: str
    description: str
    manager: str
    status: ProductStatus = ProductStatus.FOR_SALE
    password: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @field_validator("status", mode="before")
    @classmethod
    def upgrade_legacy_status(cls, value: Any) -> Any:
        if isinstance(value, str):
            return LEGACY_STATUS_VALUES.get(value, value)
        return value

    # ------------------------------------------------------------------
    # Document mapping
    # ------------------------------------------------------------------

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> Product:
        return cls(
            id=str(doc["_id"]),
            name=doc["name"],
            description=doc["description"],
            manager=doc["manager"],
            status=doc.get("status", ProductStatus.FOR_SALE),
            password=doc.get("password"),
            created_at=_as_utc(doc["createdAt"]),
            updated_at=_as_utc(doc["updatedAt"]),
        )

    def to_document(self) -> Dict[str, Any]:
        """Build the document to insert; ``_id`` is left to the store."""
        return {
            "name": self.name,
            "description": self.description,
            "manager": self.manager,
            "status": self.status.value,
            "password": self.password,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    def password_matches(self, candidate: Optional[str]) -> bool:
        """Plain equality check; the password is a shared secret, not a credential."""
        return self.password is not None and candidate == self.password

    def __str__(self) -> str:
        return f"{self.id} - {self.name}"
