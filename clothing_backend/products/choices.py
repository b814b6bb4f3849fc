# products/choices.py

"""
CATALOG FACETS (CLOSED ENUMERATIONS)

Category and Size are fixed sets; products may only use values listed here.
The declaration order is the display order used by facet endpoints.
"""

from django.db import models


class Category(models.TextChoices):
    MEN = "Men", "Men"
    WOMEN = "Women", "Women"
    KIDS = "Kids", "Kids"
    ACCESSORIES = "Accessories", "Accessories"


class Size(models.TextChoices):
    XS = "XS", "XS"
    S = "S", "S"
    M = "M", "M"
    L = "L", "L"
    XL = "XL", "XL"
    XXL = "XXL", "XXL"
    W28 = "28", "28"
    W30 = "30", "30"
    W32 = "32", "32"
    W34 = "34", "34"
    W36 = "36", "36"
    ONE_SIZE = "OS", "One Size"


ALL_CATEGORIES = "All"

SIZE_ORDER = {value: index for index, value in enumerate(Size.values)}
CATEGORY_ORDER = {value: index for index, value in enumerate(Category.values)}


def sort_sizes(values) -> list[str]:
    return sorted(set(values), key=lambda v: SIZE_ORDER.get(v, len(SIZE_ORDER)))


def sort_categories(values) -> list[str]:
    return sorted(set(values), key=lambda v: CATEGORY_ORDER.get(v, len(CATEGORY_ORDER)))
