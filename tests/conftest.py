"""
Pytest configuration and fixtures
"""

import asyncio
import os
from decimal import Decimal

# Settings are read at import time
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./.pytest_catalog.db"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel

from catalog_api.core import database
from catalog_api.core.config import settings
from catalog_api.main import app
from catalog_api.models import Product, UserProductCollect

WRITE_VERBS = ("INSERT", "UPDATE", "DELETE")


def _make_engine(tmp_path):
    # NullPool: every session opens its own connection on the running loop
    return create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}",
        poolclass=NullPool,
    )


async def _create_schema(engine):
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


def _record_statements(engine):
    recorded = []

    def _record(conn, cursor, statement, parameters, context, executemany):
        recorded.append(statement)

    event.listen(engine.sync_engine, "before_cursor_execute", _record)
    return recorded, lambda: event.remove(engine.sync_engine, "before_cursor_execute", _record)


def write_statements(recorded):
    return [s for s in recorded if s.lstrip().upper().startswith(WRITE_VERBS)]


def make_product(**overrides) -> Product:
    values = {
        "shop_id": "shop-1",
        "image_url": "https://img.example.com/mug.png",
        "name": "Mug",
        "price": Decimal("9.99"),
        "description": "Blue mug",
        "category_id": 3,
        "openid": "u1",
    }
    values.update(overrides)
    return Product(**values)


def make_marker(user_id: str, product_id: int) -> UserProductCollect:
    return UserProductCollect(user_id=user_id, product_id=product_id)


def make_token(user_id: str = "user-1", claim: str = "userId") -> str:
    return jwt.encode({claim: user_id}, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


async def add_rows(maker, rows):
    """Insert model rows; returns their primary keys"""
    async with maker() as session:
        session.add_all(rows)
        await session.commit()
        return [row.product_id if isinstance(row, Product) else row.id for row in rows]


# --- synchronous fixtures, for TestClient tests ---

@pytest.fixture
def db_engine(tmp_path):
    """A fresh file-backed SQLite database per test"""
    engine = _make_engine(tmp_path)
    asyncio.run(_create_schema(engine))
    return engine


@pytest.fixture
def session_maker(db_engine, monkeypatch):
    """Route every service session to the per-test database"""
    maker = sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    monkeypatch.setattr(database, "async_session_maker", maker)
    return maker


@pytest.fixture
def statements(db_engine):
    """SQL statements sent to the database, in execution order"""
    recorded, remove = _record_statements(db_engine)
    yield recorded
    remove()


@pytest.fixture
def seed(session_maker):
    def _run(*rows):
        return asyncio.run(add_rows(session_maker, list(rows)))

    return _run


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
def client(session_maker):
    return TestClient(app)


# --- async fixtures, for DAO tests ---

@pytest_asyncio.fixture
async def async_engine(tmp_path):
    engine = _make_engine(tmp_path)
    await _create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def async_session_maker(async_engine):
    return sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def async_statements(async_engine):
    recorded, remove = _record_statements(async_engine)
    yield recorded
    remove()
