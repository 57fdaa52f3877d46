from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

# Базовый класс для моделей
Base = declarative_base()


def create_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Асинхронный движок с пулом соединений драйвера"""
    # pool_pre_ping отбрасывает соединения, закрытые сервером (MySQL wait_timeout)
    return create_async_engine(database_url, echo=echo, pool_pre_ping=True)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """Фабрика сессий; сессия берет соединение из пула и возвращает его при закрытии"""
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def ping(engine: AsyncEngine) -> None:
    """Проверка соединения с базой данных"""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def create_schema(engine: AsyncEngine) -> None:
    """Создание таблиц моделей, если их еще нет"""
    # Регистрация моделей в Base.metadata
    import snippetbox.db.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
