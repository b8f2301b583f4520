import mongomock
import pytest

from rest_framework.test import APIClient

TEST_DATABASE = "product_catalog_test"


@pytest.fixture()
def mongo_db(monkeypatch):
    """In-memory MongoDB database wired in place of the real connection."""
    client = mongomock.MongoClient()
    client.drop_database(TEST_DATABASE)
    database = client[TEST_DATABASE]
    monkeypatch.setattr("modules.core.mongo.get_database", lambda: database)
    yield database
    client.drop_database(TEST_DATABASE)


@pytest.fixture()
def api_client(mongo_db):
    """DRF APIClient for testing API endpoints against the in-memory store."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid
