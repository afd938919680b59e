# Export all DAO classes
from .base_dao import BaseDAO
from .product_dao import product_dao
from .product_collect_dao import product_collect_dao
from .product_query_builder import ProductFilterQuery, build_product_filter_query

__all__ = [
    "BaseDAO",
    "product_dao",
    "product_collect_dao",
    "ProductFilterQuery",
    "build_product_filter_query",
]
