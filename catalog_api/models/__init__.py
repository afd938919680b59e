# Import all models for easy access
from .product import Product, ProductBase, PRODUCT_WRITE_FIELDS
from .product_collect import UserProductCollect

__all__ = [
    "Product", "ProductBase", "PRODUCT_WRITE_FIELDS",
    "UserProductCollect",
]
