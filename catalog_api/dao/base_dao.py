from typing import Any, Dict, Generic, TypeVar, Type, Optional
from sqlmodel import SQLModel
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

logger = structlog.get_logger()

ModelType = TypeVar("ModelType", bound=SQLModel)


def coerce_id(value: Any) -> Optional[int]:
    """Integer key for an opaque transport identifier, or None if it cannot name a row."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


class BaseDAO(Generic[ModelType]):
    def __init__(self, model: Type[ModelType], id_field: str = "id"):
        self.model = model
        self.table = model.__table__
        self.id_field = id_field
        self.id_column = self.table.c[id_field]

    async def create(self, db: AsyncSession, *, obj_in: dict) -> ModelType:
        try:
            db_obj = self.model(**obj_in)
            db.add(db_obj)
            await db.commit()
            await db.refresh(db_obj)
            logger.info(f"Created {self.model.__name__}", id=str(getattr(db_obj, self.id_field)))
            return db_obj
        except Exception as e:
            await db.rollback()
            logger.error(f"Error creating {self.model.__name__}", error=str(e))
            raise

    async def get_row(self, db: AsyncSession, id: Any) -> Optional[Dict[str, Any]]:
        key = coerce_id(id)
        if key is None:
            return None
        try:
            result = await db.execute(select(self.table).where(self.id_column == key))
            row = result.mappings().first()
            return dict(row) if row is not None else None
        except Exception as e:
            logger.error(f"Error getting {self.model.__name__} by id", id=str(id), error=str(e))
            raise

    async def update_by_id(self, db: AsyncSession, id: Any, *, values: dict) -> int:
        """Overwrite the given columns on one row. Returns the affected row count."""
        key = coerce_id(id)
        if key is None:
            return 0
        try:
            result = await db.execute(
                update(self.table).where(self.id_column == key).values(**values)
            )
            await db.commit()
            logger.info(f"Updated {self.model.__name__}", id=str(key), rowcount=result.rowcount)
            return result.rowcount
        except Exception as e:
            await db.rollback()
            logger.error(f"Error updating {self.model.__name__}", id=str(id), error=str(e))
            raise

    async def delete_by_id(self, db: AsyncSession, id: Any) -> int:
        key = coerce_id(id)
        if key is None:
            return 0
        try:
            result = await db.execute(delete(self.table).where(self.id_column == key))
            await db.commit()
            if result.rowcount:
                logger.info(f"Deleted {self.model.__name__}", id=str(key))
            return result.rowcount
        except Exception as e:
            await db.rollback()
            logger.error(f"Error deleting {self.model.__name__}", id=str(id), error=str(e))
            raise
