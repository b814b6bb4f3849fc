# products/urls.py

"""
PRODUCTS URLS

Mounted at /api/products/:
    ""             list
    categories/    facet
    sizes/         facet
    <id>/          detail
"""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from products.views import ProductViewSet

router = SimpleRouter()
router.register(r"", ProductViewSet, basename="products")

urlpatterns = [
    path("", include(router.urls)),
]
