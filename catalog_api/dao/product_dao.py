from typing import Any, Dict, List, Optional
from sqlalchemy import Numeric, bindparam, text
from sqlalchemy.ext.asyncio import AsyncSession
from catalog_api.dao.base_dao import BaseDAO
from catalog_api.dao.product_query_builder import PRICE_PARAMS, build_product_filter_query
from catalog_api.models.product import Product, PRODUCT_WRITE_FIELDS
import structlog

logger = structlog.get_logger()


class ProductDAO(BaseDAO[Product]):
    def __init__(self):
        super().__init__(Product, id_field="product_id")

    async def list_filtered(self, db: AsyncSession, filters: Any = None) -> List[Dict[str, Any]]:
        query = build_product_filter_query(filters)
        statement = text(query.statement)

        # Drivers without native decimals need price bounds converted
        price_params = [name for name in query.param_names if name in PRICE_PARAMS]
        if price_params:
            statement = statement.bindparams(
                *[bindparam(name, type_=Numeric(12, 2)) for name in price_params]
            )

        try:
            result = await db.execute(statement, query.bind_params)
            return [dict(row) for row in result.mappings().all()]
        except Exception as e:
            logger.error(
                "Error listing products",
                statement=query.statement,
                params=list(query.param_names),
                error=str(e),
            )
            raise

    async def replace(self, db: AsyncSession, product_id: Any, fields: dict) -> int:
        values = {name: fields.get(name) for name in PRODUCT_WRITE_FIELDS}
        return await self.update_by_id(db, product_id, values=values)

    async def insert(self, db: AsyncSession, fields: dict) -> Optional[int]:
        values = {name: fields.get(name) for name in PRODUCT_WRITE_FIELDS}
        product = await self.create(db, obj_in=values)
        return product.product_id


product_dao = ProductDAO()
