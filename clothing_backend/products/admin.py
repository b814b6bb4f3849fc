# products/admin.py
"""
=====================================================
PATH: products/admin.py
=====================================================

Admin rules (catalog management):

- Products are created / edited here (catalog seeding or admin).
- Sizes are edited inline; the (product, size) pair is unique.
- Stock is editable for restocking; it can never go negative (DB constraint).
- Products are never hard-deleted from the admin: order items keep a
  reference for reporting (SET_NULL would silently lose it).
"""

from __future__ import annotations

from django.contrib import admin

from products.models import Product, ProductSize


class ProductSizeInline(admin.TabularInline):
    model = ProductSize
    extra = 0


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "price", "stock", "created_at")
    list_filter = ("category", "sizes__size")
    search_fields = ("name", "description")
    ordering = ("-created_at",)
    readonly_fields = ("id", "created_at", "updated_at")

    inlines = [ProductSizeInline]

    def has_delete_permission(self, request, obj=None):
        return False
