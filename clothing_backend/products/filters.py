# products/filters.py

"""
CATALOG FILTERS (django-filter)

Query params (all optional, AND-combined):
- search    case-insensitive match on name OR description
- category  one of the closed categories; "All" means no filter
- size      products that offer this size
- minPrice  inclusive lower price bound
- maxPrice  inclusive upper price bound

Unknown category/size values or non-numeric prices fail validation (400).
"""

from django.db.models import Exists, OuterRef, Q
from django_filters import rest_framework as filters

from products.choices import ALL_CATEGORIES, Category, Size
from products.models import Product, ProductSize


class ProductFilter(filters.FilterSet):
    search = filters.CharFilter(method="filter_search")
    category = filters.ChoiceFilter(
        choices=[(ALL_CATEGORIES, ALL_CATEGORIES)] + list(Category.choices),
        method="filter_category",
    )
    size = filters.ChoiceFilter(choices=Size.choices, method="filter_size")
    minPrice = filters.NumberFilter(field_name="price", lookup_expr="gte")
    maxPrice = filters.NumberFilter(field_name="price", lookup_expr="lte")

    class Meta:
        model = Product
        fields = ["search", "category", "size", "minPrice", "maxPrice"]

    def filter_search(self, queryset, name, value):
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(Q(name__icontains=value) | Q(description__icontains=value))

    def filter_category(self, queryset, name, value):
        if not value or value == ALL_CATEGORIES:
            return queryset
        return queryset.filter(category=value)

    def filter_size(self, queryset, name, value):
        if not value:
            return queryset
        return queryset.filter(
            Exists(ProductSize.objects.filter(product=OuterRef("pk"), size=value))
        )
