"""Product repositories package."""

from modules.core import mongo
from modules.products.repositories.interfaces import IProductRepository
from modules.products.repositories.mongo_repository import ProductMongoRepository


def get_product_repository() -> IProductRepository:
    """Build the repository over the process-wide MongoDB connection."""
    return ProductMongoRepository(mongo.get_database())


__all__ = ["IProductRepository", "ProductMongoRepository", "get_product_repository"]
