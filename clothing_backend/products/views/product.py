# products/views/product.py

"""
PRODUCT VIEWSET (PUBLIC CATALOG)

Endpoints (AllowAny, read-only):
- GET /api/products/             filtered + paginated catalog, newest first
- GET /api/products/<id>/        product detail
- GET /api/products/categories/  ["All", ...categories in use]
- GET /api/products/sizes/       sizes in use, sorted as strings

Security hardening:
- Throttled under the "catalog" scope to reduce scraping.
"""

from django.core.exceptions import ValidationError as DjangoValidationError
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle

from common.exceptions import ProductNotFoundError
from products.choices import ALL_CATEGORIES, sort_categories
from products.filters import ProductFilter
from products.models import Product, ProductSize
from products.pagination import CatalogPagination
from products.serializers import ProductSerializer


@extend_schema_view(
    list=extend_schema(
        tags=["Catalog"],
        description="Filtered, paginated product catalog (newest first).",
    ),
    retrieve=extend_schema(
        tags=["Catalog"],
        responses={
            200: ProductSerializer,
            404: OpenApiResponse(description="Product not found"),
        },
    ),
)
class ProductViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = ProductSerializer
    permission_classes = [AllowAny]
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "catalog"
    filter_backends = [DjangoFilterBackend]
    filterset_class = ProductFilter
    pagination_class = CatalogPagination

    def get_queryset(self):
        return Product.objects.prefetch_related("sizes").order_by("-created_at", "id")

    def get_object(self):
        try:
            return self.get_queryset().get(pk=self.kwargs["pk"])
        except (Product.DoesNotExist, DjangoValidationError, ValueError):
            raise ProductNotFoundError()

    @extend_schema(tags=["Catalog"], responses={200: OpenApiResponse(description="List of facet values")})
    @action(detail=False, methods=["get"], url_path="categories", pagination_class=None)
    def categories(self, request):
        in_use = Product.objects.order_by().values_list("category", flat=True).distinct()
        return Response([ALL_CATEGORIES, *sort_categories(in_use)])

    @extend_schema(tags=["Catalog"], responses={200: OpenApiResponse(description="List of facet values")})
    @action(detail=False, methods=["get"], url_path="sizes", pagination_class=None)
    def sizes(self, request):
        in_use = ProductSize.objects.order_by().values_list("size", flat=True).distinct()
        return Response(sorted(in_use))
