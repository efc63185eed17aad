# meatline/database/database.py
import logging
from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy import text

from meatline.models import Base
from meatline.config import config

logger = logging.getLogger(__name__)

# Engine создается при первом использовании
_engine = None
_session_factory = None


def get_engine():
    """Получить или создать engine"""
    global _engine
    if _engine is None:
        _engine = create_async_engine(
            config.DATABASE_URL,
            echo=False,
            future=True,
            pool_pre_ping=True,  # Проверка соединений
            pool_recycle=300     # Переподключение каждые 5 минут
        )
    return _engine


def get_session_factory():
    """Получить фабрику сессий"""
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(
            bind=get_engine(),
            expire_on_commit=False,
            class_=AsyncSession
        )
    return _session_factory


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    factory = get_session_factory()
    async with factory() as session:
        yield session


async def init_db():
    """Инициализация базы данных с проверками"""
    global _engine, _session_factory
    try:
        engine = get_engine()

        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("Database connection OK")

        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ready")

    except Exception:
        logger.exception("Database initialization failed")
        # Сбрасываем engine при ошибке
        if _engine:
            await _engine.dispose()
            _engine = None
            _session_factory = None
        raise


async def close_db():
    """Закрыть соединения с БД"""
    global _engine, _session_factory
    if _engine:
        await _engine.dispose()
        _engine = None
        _session_factory = None
