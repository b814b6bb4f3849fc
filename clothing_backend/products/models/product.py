# products/models/product.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from products.choices import Category, Size, sort_sizes


class Product(models.Model):
    """
    Represents a sellable catalog item.

    STOCK MODEL (IMPORTANT):
    - stock is a single integer counter per product (all sizes share it)
    - stock is never negative (DB check constraint)
    - stock is mutated ONLY by order conversion, through a guarded
      conditional decrement (see orders.services.checkout)

    PRICE:
    - price is the current selling price; orders copy it at purchase time.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=100, db_index=True)
    description = models.TextField(max_length=1000)

    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )

    image = models.URLField(max_length=500)

    category = models.CharField(max_length=32, choices=Category.choices, db_index=True)

    stock = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(stock__gte=0),
                name="product_stock_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="product_price_non_negative",
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.category})"

    def clean(self):
        self.name = (self.name or "").strip()
        if not self.name:
            raise ValidationError({"name": "Please enter product name"})

        if self.price is None or Decimal(self.price) < Decimal("0.00"):
            raise ValidationError({"price": "Price cannot be negative"})

    @property
    def size_list(self) -> list[str]:
        # Uses the prefetch cache when the queryset prefetched "sizes".
        return sort_sizes(s.size for s in self.sizes.all())

    def offers_size(self, size: str) -> bool:
        return size in self.size_list

    def set_sizes(self, sizes) -> None:
        """
        Replace the product's size set (subset of the closed Size enumeration).
        """
        wanted = set(sizes or [])
        unknown = wanted - set(Size.values)
        if unknown:
            raise ValidationError({"sizes": f"Unknown sizes: {', '.join(sorted(unknown))}"})

        self.sizes.exclude(size__in=wanted).delete()
        existing = set(self.sizes.values_list("size", flat=True))
        ProductSize.objects.bulk_create(
            [ProductSize(product=self, size=s) for s in sort_sizes(wanted - existing)]
        )


class ProductSize(models.Model):
    """
    One allowed size of a product.
    """

    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name="sizes",
    )
    size = models.CharField(max_length=8, choices=Size.choices)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["product", "size"],
                name="unique_size_per_product",
            )
        ]
        indexes = [
            models.Index(fields=["size"], name="product_size_idx"),
        ]

    def __str__(self):
        return f"{self.product.name} / {self.size}"
