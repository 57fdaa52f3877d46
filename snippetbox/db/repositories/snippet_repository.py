import logging
from datetime import timedelta
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from snippetbox.core.errors import NotFoundError, StoreError
from snippetbox.db.models.snippet import SnippetModel
from snippetbox.domains.snippets.entities import Snippet, utcnow

logger = logging.getLogger(__name__)


class SnippetRepository:
    """
    Репозиторий для работы с заметками.

    Каждая операция открывает свою сессию в ``async with``: соединение
    возвращается в пул на любом пути выхода, а результаты запросов
    полностью считываются до закрытия сессии.
    """

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def insert(self, title: str, content: str, expires: int) -> int:
        """Создание новой заметки со сроком жизни expires дней, возвращает ее id"""
        if expires <= 0:
            raise ValueError("expires must be a positive number of days")

        created = utcnow()
        model = SnippetModel(
            title=title,
            content=content,
            created=created,
            expires=created + timedelta(days=expires),
        )
        try:
            async with self.session_factory() as session:
                session.add(model)
                await session.commit()
                logger.debug(f"Created snippet {model.id}")
                return model.id
        except (SQLAlchemyError, OverflowError, OSError) as e:
            raise StoreError(f"insert snippet: {e}") from e

    async def get(self, snippet_id: int) -> Snippet:
        """Получение активной заметки по id"""
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(SnippetModel).where(
                        SnippetModel.id == snippet_id,
                        SnippetModel.expires > utcnow(),
                    )
                )
                model = result.scalar_one_or_none()
        except (SQLAlchemyError, OverflowError, OSError) as e:
            raise StoreError(f"get snippet {snippet_id}: {e}") from e

        if model is None:
            raise NotFoundError()
        return self._to_domain(model)

    async def latest(self, limit: int = 10) -> List[Snippet]:
        """Получение последних активных заметок, новые первыми"""
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(SnippetModel)
                    .where(SnippetModel.expires > utcnow())
                    .order_by(SnippetModel.created.desc(), SnippetModel.id.desc())
                    .limit(limit)
                )
                models = result.scalars().all()
        except (SQLAlchemyError, OverflowError, OSError) as e:
            raise StoreError(f"latest snippets: {e}") from e

        return [self._to_domain(model) for model in models]

    def _to_domain(self, model: SnippetModel) -> Snippet:
        """Преобразование модели БД в доменную сущность"""
        return Snippet(
            id=model.id,
            title=model.title,
            content=model.content,
            created=model.created,
            expires=model.expires,
        )
