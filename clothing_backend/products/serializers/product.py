# products/serializers/product.py

"""
PRODUCT SERIALIZERS

- ProductSerializer: full catalog record (list + detail).
- ProductSummarySerializer: compact product embedded in cart lines.

Money is serialized as a 2dp string (server-owned, never float math).
"""

from rest_framework import serializers

from products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    sizes = serializers.ListField(source="size_list", child=serializers.CharField(), read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "price",
            "image",
            "category",
            "sizes",
            "stock",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields


class ProductSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Product
        fields = ["id", "name", "price", "image", "stock"]
        read_only_fields = fields
