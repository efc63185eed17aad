"""
conftest.py: заглушки env-переменных и общие фикстуры.

Переменные ставятся до импорта модулей проекта, иначе meatline.config
упадет на обязательных BOT_TOKEN / DATABASE_URL.
"""
import os

_DUMMY_VARS = {
    "BOT_TOKEN": "123456789:AAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA",
    "DATABASE_URL": "sqlite+aiosqlite:///:memory:",
    "ENV": "test",
    "JWT_SECRET": "test-secret-for-meatline-jwt-signing",
}

for _key, _val in _DUMMY_VARS.items():
    os.environ.setdefault(_key, _val)

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from meatline.models import Base, User, Product, RoleEnum, ProductUnitEnum  # noqa: E402


@pytest.fixture
async def engine():
    """Тестовая база данных в памяти"""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session(engine):
    factory = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


async def _add(session, obj):
    session.add(obj)
    await session.flush()
    return obj


@pytest.fixture
async def distributor(session):
    return await _add(session, User(
        telegram_id=333333333, role=RoleEnum.DISTRIBUTOR, name="Distribyutor Aziz",
        company_name="Aziz Trade", lang="uz", is_active=True,
    ))


@pytest.fixture
async def other_distributor(session):
    return await _add(session, User(
        telegram_id=444444444, role=RoleEnum.DISTRIBUTOR, name="Distribyutor Bobur",
        lang="uz", is_active=True,
    ))


@pytest.fixture
async def producer(session):
    return await _add(session, User(
        telegram_id=222222222, role=RoleEnum.PRODUCER, name="Ishlab chiqaruvchi",
        lang="uz", is_active=True,
    ))


@pytest.fixture
async def admin(session):
    return await _add(session, User(
        telegram_id=111111111, role=RoleEnum.ADMIN, name="Admin User", lang="uz", is_active=True,
    ))


@pytest.fixture
async def pending_user(session):
    return await _add(session, User(
        telegram_id=555555555, role=RoleEnum.DISTRIBUTOR, name="Yangi", lang="uz", is_active=False,
    ))


@pytest.fixture
async def sausage(session):
    return await _add(session, Product(
        code="KOLBASA-001", name="Doktorskaya kolbasa", unit=ProductUnitEnum.KG,
        base_recipe={"ingredients": [{"name": "Go'sht", "amount": 70, "unit": "kg"}], "yield": 100},
        production_parameters={"cookingTime": 120, "temperature": 75},
        is_active=True,
    ))


@pytest.fixture
async def sardelka(session):
    return await _add(session, Product(
        code="KOLBASA-002", name="Sardelka", unit=ProductUnitEnum.KG, is_active=True,
    ))


@pytest.fixture
async def archived_product(session):
    return await _add(session, Product(
        code="KOLBASA-099", name="Eski kolbasa", unit=ProductUnitEnum.PIECE, is_active=False,
    ))
