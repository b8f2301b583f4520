"""MongoDB connection provider.

One ``MongoClient`` per process, built lazily from settings.  The client
is thread-safe and owns its own connection pool, so Django worker threads
share it.  Repositories receive collections from here through the
factories in each module; nothing else should touch the client.
"""

from __future__ import annotations

from functools import lru_cache

import structlog
from django.conf import settings
from pymongo import MongoClient
from pymongo.database import Database

logger = structlog.get_logger(__name__)


@lru_cache(maxsize=1)
def get_client() -> MongoClient:
    client: MongoClient = MongoClient(
        settings.MONGODB_URL,
        serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS,
        tz_aware=True,
    )
    logger.info("mongo.client_created", database=settings.MONGODB_NAME)
    return client


def get_database() -> Database:
    """Return the configured product database."""
    return get_client()[settings.MONGODB_NAME]

