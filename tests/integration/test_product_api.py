"""Integration tests for Product API endpoints.

Covers:
- CRUD operations via /api/products.
- Domain exception mapping (400, 401, 404) in the errorMessage envelope.
- Password never leaks from list/get/update.
- The end-to-end create/conflict/update/delete scenario.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from bson import ObjectId

pytestmark = pytest.mark.integration

BASE_URL = "/api/products"
MISSING_ID = "0123456789abcdef01234567"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


def _payload(**overrides):
    payload = {
        "name": "Widget Alpha",
        "description": "A fine widget",
        "manager": "Alice",
        "password": "s3cret",
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def sample_product(api_client):
    """A product created through the API; returns the creation body."""
    response = api_client.post(BASE_URL, _payload(), format="json")
    assert response.status_code == 201
    return response.json()["product"]


# ===========================================================================
# CREATE
# ===========================================================================


class TestProductCreate:
    def test_create_success(self, api_client):
        response = api_client.post(BASE_URL, _payload(), format="json")

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Product created successfully."
        product = body["product"]
        assert ObjectId.is_valid(product["id"])
        assert product["name"] == "Widget Alpha"
        assert product["status"] == "FOR_SALE"
        assert product["createdAt"] == product["updatedAt"]

    def test_create_echoes_password(self, api_client):
        response = api_client.post(BASE_URL, _payload(), format="json")
        assert response.json()["product"]["password"] == "s3cret"

    def test_create_with_trailing_slash(self, api_client):
        response = api_client.post(f"{BASE_URL}/", _payload(), format="json")
        assert response.status_code == 201

    def test_create_form_encoded(self, api_client):
        response = api_client.post(BASE_URL, _payload())
        assert response.status_code == 201
        assert response.json()["product"]["manager"] == "Alice"

    def test_create_duplicate_name_returns_400(self, api_client, sample_product):
        response = api_client.post(
            BASE_URL,
            _payload(description="Other", manager="Bob", password="other"),
            format="json",
        )
        assert response.status_code == 400
        assert response.json() == {"errorMessage": "This product is already registered."}

    def test_create_missing_field_returns_400(self, api_client):
        response = api_client.post(BASE_URL, {"name": "Incomplete"}, format="json")
        assert response.status_code == 400
        assert response.json() == {"errorMessage": "Please enter the product description."}

    def test_create_invalid_status_returns_400(self, api_client):
        response = api_client.post(BASE_URL, _payload(status="GONE"), format="json")
        assert response.status_code == 400
        assert "FOR_SALE, SOLD_OUT" in response.json()["errorMessage"]

    def test_create_null_status_returns_400(self, api_client):
        response = api_client.post(BASE_URL, _payload(status=None), format="json")
        assert response.status_code == 400
        assert "FOR_SALE, SOLD_OUT" in response.json()["errorMessage"]


# ===========================================================================
# LIST
# ===========================================================================


class TestProductList:
    def test_list_empty(self, api_client):
        response = api_client.get(BASE_URL)

        assert response.status_code == 200
        assert response.json() == {
            "message": "Product list retrieved successfully.",
            "data": [],
        }

    def test_list_newest_first_without_password(self, api_client, mongo_db):
        base = datetime(2024, 1, 15, tzinfo=timezone.utc)
        for offset, name in enumerate(["first", "second"]):
            created = base + timedelta(hours=offset)
            mongo_db.products.insert_one(
                {
                    "name": name,
                    "description": "d",
                    "manager": "m",
                    "status": "FOR_SALE",
                    "password": "p",
                    "createdAt": created,
                    "updatedAt": created,
                }
            )

        response = api_client.get(BASE_URL)

        data = response.json()["data"]
        assert [item["name"] for item in data] == ["second", "first"]
        assert all("password" not in item for item in data)

    def test_list_reads_legacy_status_value(self, api_client, mongo_db):
        created = datetime(2023, 6, 1, tzinfo=timezone.utc)
        mongo_db.products.insert_one(
            {
                "name": "legacy",
                "description": "d",
                "manager": "m",
                "status": "FOR SALE",
                "password": "p",
                "createdAt": created,
                "updatedAt": created,
            }
        )

        response = api_client.get(BASE_URL)

        assert response.status_code == 200
        assert response.json()["data"][0]["status"] == "FOR_SALE"


# ===========================================================================
# RETRIEVE
# ===========================================================================


class TestProductRetrieve:
    def test_retrieve_matches_created_record(self, api_client, sample_product):
        response = api_client.get(f"{BASE_URL}/{sample_product['id']}")

        assert response.status_code == 200
        data = response.json()["data"]
        expected = {k: v for k, v in sample_product.items() if k != "password"}
        assert data == expected

    def test_retrieve_not_found(self, api_client):
        response = api_client.get(f"{BASE_URL}/{MISSING_ID}")
        assert response.status_code == 404
        assert response.json() == {"errorMessage": "Product not found."}

    def test_retrieve_malformed_id(self, api_client):
        response = api_client.get(f"{BASE_URL}/not-an-id")
        assert response.status_code == 400
        assert response.json() == {"errorMessage": "Invalid product id."}


# ===========================================================================
# UPDATE
# ===========================================================================


class TestProductUpdate:
    def test_update_success(self, api_client, sample_product):
        response = api_client.put(
            f"{BASE_URL}/{sample_product['id']}",
            {"name": "Widget Beta", "password": "s3cret"},
            format="json",
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Product updated successfully."
        assert body["data"]["name"] == "Widget Beta"
        assert body["data"]["description"] == "A fine widget"
        assert "password" not in body["data"]

    def test_update_keeps_updated_at(self, api_client, sample_product):
        response = api_client.put(
            f"{BASE_URL}/{sample_product['id']}",
            {"manager": "Bob", "password": "s3cret"},
            format="json",
        )
        assert response.json()["data"]["updatedAt"] == sample_product["updatedAt"]

    def test_update_legacy_status_record(self, api_client, mongo_db):
        created = datetime(2023, 6, 1, tzinfo=timezone.utc)
        result = mongo_db.products.insert_one(
            {
                "name": "legacy",
                "description": "d",
                "manager": "m",
                "status": "FOR SALE",
                "password": "p",
                "createdAt": created,
                "updatedAt": created,
            }
        )

        response = api_client.put(
            f"{BASE_URL}/{result.inserted_id}", {"manager": "x", "password": "p"}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["data"]["manager"] == "x"
        assert response.json()["data"]["status"] == "FOR_SALE"

    def test_update_empty_change_set_returns_400(self, api_client, sample_product):
        response = api_client.put(
            f"{BASE_URL}/{sample_product['id']}", {"password": "s3cret"}, format="json"
        )
        assert response.status_code == 400
        assert response.json() == {
            "errorMessage": "Please provide the product information to update."
        }

    def test_update_without_password_returns_400(self, api_client, sample_product):
        response = api_client.put(
            f"{BASE_URL}/{sample_product['id']}", {"name": "X"}, format="json"
        )
        assert response.status_code == 400
        assert response.json() == {"errorMessage": "Please enter the password."}

    def test_update_not_found(self, api_client):
        response = api_client.put(
            f"{BASE_URL}/{MISSING_ID}", {"name": "Ghost", "password": "p"}, format="json"
        )
        assert response.status_code == 404

    def test_update_wrong_password_returns_401(self, api_client, sample_product):
        response = api_client.put(
            f"{BASE_URL}/{sample_product['id']}",
            {"name": "Hijacked", "password": "wrong"},
            format="json",
        )
        assert response.status_code == 401
        assert response.json() == {"errorMessage": "Password does not match."}

        unchanged = api_client.get(f"{BASE_URL}/{sample_product['id']}").json()["data"]
        assert unchanged["name"] == "Widget Alpha"

    def test_patch_not_allowed(self, api_client, sample_product):
        response = api_client.patch(
            f"{BASE_URL}/{sample_product['id']}",
            {"name": "X", "password": "s3cret"},
            format="json",
        )
        assert response.status_code == 405
        assert "errorMessage" in response.json()


# ===========================================================================
# DESTROY
# ===========================================================================


class TestProductDestroy:
    def test_destroy_success(self, api_client, sample_product, mongo_db):
        response = api_client.delete(
            f"{BASE_URL}/{sample_product['id']}", {"password": "s3cret"}, format="json"
        )

        assert response.status_code == 200
        assert response.json() == {
            "message": "Product deleted successfully.",
            "data": {"id": sample_product["id"]},
        }
        assert mongo_db.products.count_documents({}) == 0

    def test_destroy_wrong_password_returns_401(self, api_client, sample_product):
        response = api_client.delete(
            f"{BASE_URL}/{sample_product['id']}", {"password": "wrong"}, format="json"
        )
        assert response.status_code == 401

    def test_destroy_without_body_returns_401(self, api_client, sample_product):
        response = api_client.delete(f"{BASE_URL}/{sample_product['id']}")
        assert response.status_code == 401

    def test_destroy_not_found(self, api_client):
        response = api_client.delete(
            f"{BASE_URL}/{MISSING_ID}", {"password": "p"}, format="json"
        )
        assert response.status_code == 404


# ===========================================================================
# Scenario
# ===========================================================================


class TestProductLifecycle:
    def test_create_conflict_update_delete(self, api_client):
        created = api_client.post(
            BASE_URL,
            {"name": "A", "description": "d", "manager": "m", "password": "p"},
            format="json",
        )
        assert created.status_code == 201
        product = created.json()["product"]
        assert product["status"] == "FOR_SALE"
        url = f"{BASE_URL}/{product['id']}"

        conflict = api_client.post(
            BASE_URL,
            {"name": "A", "description": "d", "manager": "m", "password": "p"},
            format="json",
        )
        assert conflict.status_code == 400

        updated = api_client.put(url, {"status": "SOLD_OUT", "password": "p"}, format="json")
        assert updated.status_code == 200
        assert updated.json()["data"]["status"] == "SOLD_OUT"

        rejected = api_client.put(
            url, {"status": "SOLD_OUT", "password": "wrong"}, format="json"
        )
        assert rejected.status_code == 401

        deleted = api_client.delete(url, {"password": "p"}, format="json")
        assert deleted.status_code == 200

        assert api_client.get(url).status_code == 404
