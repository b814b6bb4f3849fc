from django.contrib import admin

from .models import Cart, CartItem

# =====================================================
# CART ITEM INLINE (READ-ONLY)
# =====================================================


class CartItemInline(admin.TabularInline):
    model = CartItem
    extra = 0
    can_delete = False
    readonly_fields = (
        "product",
        "size",
        "quantity",
        "line_total",
        "created_at",
    )

    def has_add_permission(self, request, obj=None):
        return False


# =====================================================
# CART ADMIN
# =====================================================


@admin.register(Cart)
class CartAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "user",
        "created_at",
        "updated_at",
        "item_count",
        "subtotal_amount",
    )

    readonly_fields = (
        "id",
        "user",
        "created_at",
        "updated_at",
        "item_count",
        "subtotal_amount",
    )

    search_fields = ("user__email",)
    list_filter = ("created_at",)

    inlines = [CartItemInline]

    def has_add_permission(self, request):
        return False
