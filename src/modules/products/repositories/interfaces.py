"""Product repository interface.

Extends ``IRepository[Product]`` with the look-ups required by the
product workflow: unique name on creation and the newest-first listing.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product resource.

    ``get_by_id`` raises ``InvalidProductId`` when the id is not a
    well-formed store identifier and returns ``None`` when it is
    well-formed but unknown.
    """

    @abstractmethod
    def get_by_id(self, id: str, exclude: Iterable[str] = ()) -> Optional[Product]:
        """Retrieve a product by id, with ``exclude`` fields omitted."""

    @abstractmethod
    def get_by_name(self, name: str) -> Optional[Product]:
        """Retrieve a product by its exact name."""

    @abstractmethod
    def update_fields(self, id: str, changes: Dict[str, Any]) -> Optional[Product]:
        """Apply ``changes`` and return the post-update record without password.

        Returns ``None`` if the product vanished in the meantime.
        """

    @abstractmethod
    def list_sorted_by_created_at_desc(
        self, exclude: Iterable[str] = ("password",)
    ) -> List[Product]:
        """List every product, newest first, with ``exclude`` fields omitted."""
