"""Product DRF serializers for API output.

The serializers operate at the Interface layer (API Views) and render
``Product`` entities with the camelCase keys clients already consume.
Input validation lives in ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers


class ProductSerializer(serializers.Serializer):
    """Read-only representation of a product, password excluded."""

    id = serializers.CharField(read_only=True)
    name = serializers.CharField(read_only=True)
    description = serializers.CharField(read_only=True)
    manager = serializers.CharField(read_only=True)
    status = serializers.CharField(source="status.value", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)


class CreatedProductSerializer(ProductSerializer):
    """Creation response: also echoes the stored password."""

    password = serializers.CharField(read_only=True)
