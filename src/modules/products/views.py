"""Product API views.

Exposes the ``ProductService`` via HTTP using a DRF ViewSet.  Domain
exceptions propagate to ``modules.core.exceptions.api_exception_handler``,
which renders the ``{"errorMessage": ...}`` envelope; the view never
swallows exceptions.
"""

from __future__ import annotations

from typing import Any, Dict

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.products.repositories import get_product_repository
from modules.products.serializers import CreatedProductSerializer, ProductSerializer
from modules.products.services import ProductService


def _payload(request: Request) -> Any:
    """Return the request body as plain values (form bodies arrive as QueryDict)."""
    data = request.data
    return data.dict() if hasattr(data, "dict") else data


class ProductViewSet(ViewSet):
    """ViewSet for Product CRUD operations.

    Uses ``ProductService`` with the MongoDB repository (DIP).
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository=get_product_repository())

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/products"""
        products = self._service.list_products()
        return Response(
            {
                "message": "Product list retrieved successfully.",
                "data": ProductSerializer(products, many=True).data,
            }
        )

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/products/{pk}"""
        product = self._service.get_product(pk)
        return Response(
            {
                "message": "Product details retrieved successfully.",
                "data": ProductSerializer(product).data,
            }
        )

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/products"""
        product = self._service.create_product(_payload(request))
        return Response(
            {
                "message": "Product created successfully.",
                "product": CreatedProductSerializer(product).data,
            },
            status=status.HTTP_201_CREATED,
        )

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/products/{pk}"""
        product = self._service.update_product(pk, _payload(request))
        return Response(
            {
                "message": "Product updated successfully.",
                "data": ProductSerializer(product).data,
            }
        )

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/products/{pk}"""
        payload = _payload(request)
        password = payload.get("password") if isinstance(payload, dict) else None
        deleted_id = self._service.delete_product(pk, password)
        data: Dict[str, str] = {"id": deleted_id}
        return Response({"message": "Product deleted successfully.", "data": data})
