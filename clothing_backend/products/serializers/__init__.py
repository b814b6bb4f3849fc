from .product import ProductSerializer, ProductSummarySerializer

__all__ = ["ProductSerializer", "ProductSummarySerializer"]
