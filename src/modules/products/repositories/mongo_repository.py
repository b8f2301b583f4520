"""pymongo implementation of the Product repository.

Satisfies ``IProductRepository`` against the ``products`` collection.
Error handling follows the Null Object pattern for missing records:
methods return ``None`` instead of raising, and the Service Layer decides
how to translate a missing entity into an API response.  Malformed ids
and unique-index violations are translated into domain exceptions here,
since only the store knows its id format and index set.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

import structlog
from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from modules.products.exceptions import InvalidProductId, ProductAlreadyExists
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductMongoRepository(IProductRepository):
    """Concrete Product repository backed by a MongoDB collection."""

    collection_name = "products"

    def __init__(self, database: Database) -> None:
        self._collection: Collection = database[self.collection_name]

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_by_id(self, id: str, exclude: Iterable[str] = ()) -> Optional[Product]:
        doc = self._collection.find_one(
            {"_id": self._object_id(id)}, projection=self._projection(exclude)
        )
        return Product.from_document(doc) if doc else None

    def get_by_name(self, name: str) -> Optional[Product]:
        doc = self._collection.find_one({"name": name})
        return Product.from_document(doc) if doc else None

    def list_sorted_by_created_at_desc(
        self, exclude: Iterable[str] = ("password",)
    ) -> List[Product]:
        cursor = self._collection.find({}, projection=self._projection(exclude)).sort(
            "createdAt", DESCENDING
        )
        return [Product.from_document(doc) for doc in cursor]

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def insert(self, entity: Product) -> Product:
        try:
            result = self._collection.insert_one(entity.to_document())
        except DuplicateKeyError as exc:
            logger.warning("product.duplicate_key", name=entity.name)
            raise ProductAlreadyExists() from exc
        product_id = str(result.inserted_id)
        logger.info("product.inserted", product_id=product_id)
        return entity.model_copy(update={"id": product_id})

    def update_fields(self, id: str, changes: Dict[str, Any]) -> Optional[Product]:
        try:
            doc = self._collection.find_one_and_update(
                {"_id": self._object_id(id)},
                {"$set": changes},
                projection={"password": 0},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as exc:
            logger.warning("product.duplicate_key", product_id=id)
            raise ProductAlreadyExists() from exc
        if doc is None:
            return None
        logger.info("product.fields_updated", product_id=id, fields=sorted(changes))
        return Product.from_document(doc)

    def delete_by_id(self, id: str) -> bool:
        result = self._collection.delete_one({"_id": self._object_id(id)})
        if result.deleted_count:
            logger.info("product.removed", product_id=id)
        return result.deleted_count > 0

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------

    def ensure_indexes(self) -> List[str]:
        """Create the unique name index and the listing index.

        Idempotent: MongoDB ignores indexes that already exist with the
        same definition.
        """
        names = [
            self._collection.create_index(
                [("name", ASCENDING)], unique=True, name="name_unique"
            ),
            self._collection.create_index(
                [("createdAt", DESCENDING)], name="created_at_desc"
            ),
        ]
        logger.info("product.indexes_ensured", indexes=names)
        return names

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _object_id(id: str) -> ObjectId:
        if not ObjectId.is_valid(id):
            raise InvalidProductId()
        return ObjectId(id)

    @staticmethod
    def _projection(exclude: Iterable[str]) -> Optional[Dict[str, int]]:
        return {field: 0 for field in exclude} or None
