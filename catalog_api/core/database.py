from sqlmodel import SQLModel
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy import event, text
from catalog_api.core.config import settings
import logging

logger = logging.getLogger(__name__)

engine_options = {"echo": settings.log_level == "DEBUG", "future": True}
if not settings.is_sqlite:
    engine_options.update(
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,
    )

engine: AsyncEngine = create_async_engine(settings.database_url, **engine_options)


# Set search_path to the schema from settings after connecting
@event.listens_for(engine.sync_engine, "connect")
def set_search_path(dbapi_connection, connection_record):
    if engine.dialect.name != "postgresql":
        return
    logger.info("Setting search path to %s", settings.db_schema)
    cursor = dbapi_connection.cursor()
    cursor.execute(f"SET search_path TO {settings.db_schema}")
    cursor.close()


async_session_maker = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)


async def get_db_session() -> AsyncSession:
    """Open a session for one unit of work. Callers must close it."""
    return async_session_maker()


async def check_db_health() -> bool:
    db = await get_db_session()
    try:
        await db.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database health check failed: {type(e).__name__}: {e}")
        return False
    finally:
        await db.close()


async def create_db_and_tables():
    # Register table models on SQLModel.metadata
    from catalog_api import models  # noqa: F401

    logger.info("Creating database tables")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def close_db():
    await engine.dispose()
