from typing import Annotated
from fastapi import APIRouter, Depends, Query
from catalog_api.core.security import validate_request
from catalog_api.schemas.product_schemas import (
    MessageResponse,
    ProductFilters,
    ProductUpsertRequest,
    ProductUpsertResponse,
)
from catalog_api.services.product_service import product_service
import structlog

logger = structlog.get_logger()

router = APIRouter(prefix="/products", tags=["Products"])


@router.get("", response_model=None)
async def list_products(
    filters: Annotated[ProductFilters, Query()],
    current_user=Depends(validate_request)
):
    """List products, optionally filtered by category, shop, name and price range"""
    logger.info("List products", user_id=current_user.get("user_id"), **filters.model_dump(exclude_none=True))
    return await product_service.list_products(filters)


@router.get("/{product_id}", response_model=None)
async def get_product(
    product_id: str,
    current_user=Depends(validate_request)
):
    """Get a product with the caller's collect status"""
    return await product_service.get_product(product_id, current_user.get("user_id"))


@router.post("", response_model=ProductUpsertResponse)
async def upsert_product(
    product: ProductUpsertRequest,
    current_user=Depends(validate_request)
):
    """Create a product, or replace it when product_id names an existing row"""
    logger.info("Upsert product", user_id=current_user.get("user_id"), product_id=product.product_id)
    return await product_service.upsert_product(product)


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(
    product_id: str,
    current_user=Depends(validate_request)
):
    """Delete a product by id"""
    logger.info("Delete product", user_id=current_user.get("user_id"), product_id=product_id)
    return await product_service.delete_product(product_id)
