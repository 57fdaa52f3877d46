import logging
from dataclasses import dataclass

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine

from snippetbox.config import Settings
from snippetbox.core.templates import Renderer
from snippetbox.db.repositories.snippet_repository import SnippetRepository


@dataclass
class Application:
    """Зависимости обработчиков; создается один раз при запуске"""
    settings: Settings
    info_log: logging.Logger
    error_log: logging.Logger
    engine: AsyncEngine
    snippets: SnippetRepository
    renderer: Renderer


# Функция для dependency injection в FastAPI
def get_application(request: Request) -> Application:
    return request.app.state.application
