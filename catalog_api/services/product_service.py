from typing import Any, Dict, List
from fastapi import HTTPException, status
from catalog_api.core.database import get_db_session
from catalog_api.dao.product_dao import product_dao
from catalog_api.dao.product_collect_dao import product_collect_dao
from catalog_api.models.product import PRODUCT_WRITE_FIELDS
from catalog_api.schemas.product_schemas import (
    MessageResponse,
    ProductFilters,
    ProductUpsertRequest,
    ProductUpsertResponse,
)
import structlog

logger = structlog.get_logger()

PRODUCT_NOT_FOUND = "Product not found"


def storage_error(message: str, error: Exception) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"message": message, "error": str(error)},
    )


def product_not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=PRODUCT_NOT_FOUND)


class ProductService:
    """
    Service layer for the product catalog.

    Every public method opens its own session and closes it on all paths.
    Storage failures become 500 errors carrying the raw driver message;
    missing rows become 404s.
    """

    def __init__(self):
        self.product_dao = product_dao
        self.collect_dao = product_collect_dao

    async def list_products(self, filters: ProductFilters) -> List[Dict[str, Any]]:
        db = await get_db_session()
        try:
            products = await self.product_dao.list_filtered(db, filters)
            logger.info("Retrieved products", count=len(products))
            return products
        except Exception as e:
            logger.error("Error fetching products", error=str(e))
            raise storage_error("Error fetching products", e)
        finally:
            await db.close()

    async def get_product(self, product_id: str, user_id: str) -> Dict[str, Any]:
        """Fetch one product with the caller's collect marker ({} when not collected)."""
        db = await get_db_session()
        try:
            try:
                collect = await self.collect_dao.get_marker(db, product_id, user_id)
            except Exception as e:
                logger.error("Error fetching collection status", product_id=product_id, user_id=user_id, error=str(e))
                raise storage_error("Error fetching collection status", e)

            try:
                product = await self.product_dao.get_row(db, product_id)
            except Exception as e:
                logger.error("Error fetching product", product_id=product_id, error=str(e))
                raise storage_error("Error fetching product", e)

            if product is None:
                logger.warning("Product not found", product_id=product_id)
                raise product_not_found()

            product["collect"] = collect or {}
            return product
        finally:
            await db.close()

    async def upsert_product(self, product_in: ProductUpsertRequest) -> ProductUpsertResponse:
        """
        Update the product named by product_id if it exists, otherwise insert
        a new row with a store-generated id.

        The existence check and the write are separate statements, so two
        concurrent upserts of the same new id can both insert; the primary
        key is what keeps ids unique.
        """
        fields = product_in.model_dump(include=set(PRODUCT_WRITE_FIELDS))
        product_id = product_in.product_id

        db = await get_db_session()
        try:
            try:
                existing = await self.product_dao.get_row(db, product_id)
            except Exception as e:
                logger.error("Error checking product", product_id=product_id, error=str(e))
                raise storage_error("Error checking product", e)

            if existing is not None:
                try:
                    updated = await self.product_dao.replace(db, product_id, fields)
                except Exception as e:
                    logger.error("Error updating product", product_id=product_id, error=str(e))
                    raise storage_error("Error updating product", e)
                if not updated:
                    # Deleted between the existence check and the update
                    logger.warning("Product update matched no rows", product_id=product_id)
                logger.info("Product updated successfully", product_id=product_id)
                return ProductUpsertResponse(id=product_id, message="Product updated successfully")

            try:
                new_id = await self.product_dao.insert(db, fields)
            except Exception as e:
                logger.error("Error saving product", error=str(e))
                raise storage_error("Error saving product", e)
            logger.info("Product saved successfully", product_id=new_id)
            return ProductUpsertResponse(id=new_id, message="Product saved successfully")
        finally:
            await db.close()

    async def delete_product(self, product_id: str) -> MessageResponse:
        db = await get_db_session()
        try:
            try:
                deleted = await self.product_dao.delete_by_id(db, product_id)
            except Exception as e:
                logger.error("Error deleting product", product_id=product_id, error=str(e))
                raise storage_error("Error deleting product", e)

            if not deleted:
                logger.warning("Product not found", product_id=product_id)
                raise product_not_found()

            logger.info("Product deleted successfully", product_id=product_id)
            return MessageResponse(message="Product deleted successfully")
        finally:
            await db.close()


product_service = ProductService()
