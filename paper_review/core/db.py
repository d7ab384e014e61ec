from typing import AsyncIterator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from paper_review.core.config import Settings
from paper_review.db.base import Base


def create_engine(settings: Settings) -> AsyncEngine:
    """Асинхронный движок"""
    return create_async_engine(settings.database_url, future=True, echo=settings.database_echo)


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker:
    """Фабрика сессий"""
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def init_models(engine: AsyncEngine) -> None:
    """Создание таблиц, если их ещё нет"""
    # импорт регистрирует модели в метаданных
    import paper_review.db.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# Функция для dependency injection в FastAPI
async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    async with request.app.state.sessionmaker() as session:
        yield session
