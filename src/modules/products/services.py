"""Product service layer (Use Cases).

Orchestrates the product workflow, delegating persistence to the injected
``IProductRepository``.  Every mutating use-case runs its checks in the
same order:

    schema validation -> uniqueness -> existence -> password -> merge

Business rules enforced here:
- Name must be unique at creation time.
- Update and delete require the product's shared-secret password.
- Password is never returned from list, get or update.

Check-then-act sequences are not transactional; the optional unique
index on ``name`` (see ``ensure_product_indexes``) closes the duplicate
creation race without changing the error callers see.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, List, Mapping, Optional, Type, TypeVar

import structlog
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from modules.products.dtos import CreateProductDTO, UpdateProductDTO, first_error_message
from modules.products.exceptions import (
    EmptyProductUpdate,
    InvalidProductPassword,
    ProductAlreadyExists,
    ProductNotFound,
    ProductValidationError,
)
from modules.products.models import Product, ProductStatus

if TYPE_CHECKING:
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

DTO = TypeVar("DTO", bound=BaseModel)

HIDDEN_FIELDS = ("password",)


def _now() -> datetime:
    # BSON dates keep milliseconds only.
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_product(self, payload: Mapping[str, Any]) -> Product:
        """Create a new product after enforcing uniqueness rules.

        The returned record still carries the password; callers decide
        whether to render it.

        Raises:
            ProductValidationError: if the payload fails the schema.
            ProductAlreadyExists: if the name is already taken.
        """
        dto = self._validate(CreateProductDTO, payload)
        log = logger.bind(name=dto.name)

        if self._repo.get_by_name(dto.name):
            log.warning("product.duplicate_name")
            raise ProductAlreadyExists()

        now = _now()
        product = Product(
            name=dto.name,
            description=dto.description,
            manager=dto.manager,
            password=dto.password,
            status=ProductStatus.FOR_SALE,
            created_at=now,
            updated_at=now,
        )
        product = self._repo.insert(product)
        log.info("product.created", product_id=product.id)
        return product

    def update_product(self, id: str, payload: Mapping[str, Any]) -> Product:
        """Apply a partial update guarded by the product password.

        ``updated_at`` is left as stored at creation.

        Raises:
            ProductValidationError: if the payload fails the schema.
            EmptyProductUpdate: if no mutable field is supplied.
            ProductNotFound: if the product does not exist.
            InvalidProductPassword: if the password does not match.
        """
        dto = self._validate(UpdateProductDTO, payload)
        changes = dto.change_set()
        if not changes:
            raise EmptyProductUpdate()

        log = logger.bind(product_id=id)
        self._authorize(id, dto.password, log)

        product = self._repo.update_fields(id, changes)
        if product is None:
            raise ProductNotFound()
        log.info("product.updated", fields=sorted(changes))
        return product

    def delete_product(self, id: str, password: Optional[str]) -> str:
        """Permanently delete a product guarded by its password.

        Raises:
            ProductNotFound: if the product does not exist.
            InvalidProductPassword: if the password does not match.
        """
        log = logger.bind(product_id=id)
        self._authorize(id, password, log)

        if not self._repo.delete_by_id(id):
            raise ProductNotFound()
        log.info("product.deleted")
        return id

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self) -> List[Product]:
        """Return every product, newest first, without passwords."""
        return self._repo.list_sorted_by_created_at_desc(exclude=HIDDEN_FIELDS)

    def get_product(self, id: str) -> Product:
        """Retrieve a single product by ID, without its password.

        Raises:
            InvalidProductId: if the id is malformed.
            ProductNotFound: if the product does not exist.
        """
        product = self._repo.get_by_id(id, exclude=HIDDEN_FIELDS)
        if not product:
            raise ProductNotFound()
        logger.info("product.retrieved", product_id=id)
        return product

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _validate(dto_class: Type[DTO], payload: Mapping[str, Any]) -> DTO:
        try:
            return dto_class.model_validate(payload)
        except PydanticValidationError as exc:
            raise ProductValidationError(first_error_message(exc)) from exc

    def _authorize(self, id: str, password: Optional[str], log: Any) -> Product:
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound()
        if not product.password_matches(password):
            log.warning("product.password_mismatch")
            raise InvalidProductPassword()
        return product
