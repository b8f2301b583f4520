"""Product domain exceptions.

Raised by the Service Layer (and, for malformed ids, the repository)
when business rules are violated.  Each exception carries the HTTP
status it maps to; ``modules.core.exceptions.api_exception_handler``
turns them into the ``{"errorMessage": ...}`` envelope.
"""

from __future__ import annotations

from modules.core.exceptions import DomainError


class ProductError(DomainError):
    """Base class for product workflow failures."""

    default_message = "Invalid product request."


class ProductValidationError(ProductError):
    """Request body failed schema validation (first violated field)."""


class ProductAlreadyExists(ProductError):
    """A product with the same name already exists."""

    default_message = "This product is already registered."


class ProductNotFound(ProductError):
    """No product exists with the requested id."""

    status_code = 404
    default_message = "Product not found."


class InvalidProductPassword(ProductError):
    """Supplied password does not match the stored one."""

    status_code = 401
    default_message = "Password does not match."


class EmptyProductUpdate(ProductError):
    """Update request carries no field to change."""

    default_message = "Please provide the product information to update."


class InvalidProductId(ProductError):
    """The id is not a well-formed store identifier."""

    default_message = "Invalid product id."
