# products/pagination.py

"""
CATALOG PAGINATION

Response shape (storefront contract):

    {
      "products": [...],
      "currentPage": 1,
      "totalPages": 3,
      "totalProducts": 21,
      "hasNextPage": true,
      "hasPrevPage": false
    }

Rules:
- page defaults to 1, limit to settings.CATALOG_PAGE_SIZE
- limit is clamped to settings.CATALOG_MAX_PAGE_SIZE
- totalPages = ceil(totalProducts / limit)  (0 when the result set is empty)
- a page past the end returns an empty list, not a 404
"""

from __future__ import annotations

import math

from django.conf import settings
from rest_framework import serializers
from rest_framework.pagination import BasePagination
from rest_framework.response import Response


def _positive_int(raw, *, name: str, default: int) -> int:
    if raw in (None, ""):
        return default
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        raise serializers.ValidationError({name: f"{name} must be a positive integer"})
    if value < 1:
        raise serializers.ValidationError({name: f"{name} must be a positive integer"})
    return value


class CatalogPagination(BasePagination):
    page_query_param = "page"
    limit_query_param = "limit"

    def paginate_queryset(self, queryset, request, view=None):
        self.page_number = _positive_int(
            request.query_params.get(self.page_query_param),
            name=self.page_query_param,
            default=1,
        )
        limit = _positive_int(
            request.query_params.get(self.limit_query_param),
            name=self.limit_query_param,
            default=int(settings.CATALOG_PAGE_SIZE),
        )
        self.limit = min(limit, int(settings.CATALOG_MAX_PAGE_SIZE))

        self.total = queryset.count()
        offset = (self.page_number - 1) * self.limit
        if offset >= self.total:
            return []
        return list(queryset[offset : offset + self.limit])

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit)

    def get_paginated_response(self, data):
        total_pages = self.total_pages
        return Response(
            {
                "products": data,
                "currentPage": self.page_number,
                "totalPages": total_pages,
                "totalProducts": self.total,
                "hasNextPage": self.page_number < total_pages,
                "hasPrevPage": self.page_number > 1,
            }
        )

    def get_paginated_response_schema(self, schema):
        return {
            "type": "object",
            "required": ["products", "currentPage", "totalPages", "totalProducts"],
            "properties": {
                "products": schema,
                "currentPage": {"type": "integer", "example": 1},
                "totalPages": {"type": "integer", "example": 3},
                "totalProducts": {"type": "integer", "example": 21},
                "hasNextPage": {"type": "boolean"},
                "hasPrevPage": {"type": "boolean"},
            },
        }

    def get_schema_operation_parameters(self, view):
        return [
            {
                "name": self.page_query_param,
                "required": False,
                "in": "query",
                "description": "1-based page number.",
                "schema": {"type": "integer", "minimum": 1},
            },
            {
                "name": self.limit_query_param,
                "required": False,
                "in": "query",
                "description": "Page size.",
                "schema": {"type": "integer", "minimum": 1},
            },
        ]
