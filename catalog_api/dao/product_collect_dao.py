from typing import Any, Dict, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from catalog_api.dao.base_dao import BaseDAO, coerce_id
from catalog_api.models.product_collect import UserProductCollect
import structlog

logger = structlog.get_logger()


class ProductCollectDAO(BaseDAO[UserProductCollect]):
    def __init__(self):
        super().__init__(UserProductCollect)

    async def get_marker(self, db: AsyncSession, product_id: Any, user_id: str) -> Optional[Dict[str, Any]]:
        key = coerce_id(product_id)
        if key is None:
            return None
        try:
            result = await db.execute(
                select(self.table)
                .where(self.table.c.product_id == key)
                .where(self.table.c.user_id == str(user_id))
            )
            row = result.mappings().first()
            return dict(row) if row is not None else None
        except Exception as e:
            logger.error(
                "Error getting collection marker",
                product_id=str(product_id),
                user_id=str(user_id),
                error=str(e),
            )
            raise


product_collect_dao = ProductCollectDAO()
