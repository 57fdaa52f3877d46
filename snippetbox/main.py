import argparse
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from snippetbox.api.http import PAGES, snippets_router
from snippetbox.config import Settings, get_settings
from snippetbox.core.application import Application
from snippetbox.core.db import create_engine, create_schema, create_session_factory, ping
from snippetbox.core.errors import ClientInputError, SnippetboxError
from snippetbox.core.helpers import client_error
from snippetbox.core.log import get_error_logger, get_info_logger, setup_logging
from snippetbox.core.templates import Renderer, new_template_cache
from snippetbox.db.repositories.snippet_repository import SnippetRepository


def build_application(settings: Settings) -> Application:
    """
    Сборка зависимостей. Кэш шаблонов строится здесь, до создания
    приложения, поэтому ни один запрос не обслуживается частичным кэшем.
    """
    info_log = get_info_logger()
    error_log = get_error_logger()

    template_cache = new_template_cache(settings.templates_dir)
    template_cache.require(PAGES)

    engine = create_engine(settings.database_url, echo=settings.debug_sql)
    return Application(
        settings=settings,
        info_log=info_log,
        error_log=error_log,
        engine=engine,
        snippets=SnippetRepository(create_session_factory(engine)),
        renderer=Renderer(template_cache, error_log),
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    application = build_application(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.create_schema:
            await create_schema(application.engine)
        await ping(application.engine)
        yield
        await application.engine.dispose()

    app = FastAPI(
        title="Snippetbox",
        description="Веб-приложение для обмена текстовыми заметками",
        version="1.0.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.application = application

    register_exception_handlers(app)

    # Каталоги не отдаются списком: StaticFiles без html=True отвечает 404
    app.mount("/static", StaticFiles(directory=str(settings.static_dir)), name="static")

    # Подключаем роутеры
    app.include_router(snippets_router)

    return app


def register_exception_handlers(app: FastAPI) -> None:
    """Ответы с общим текстом статуса вместо подробностей ошибки"""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return client_error(exc.status_code, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return client_error(status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(ClientInputError)
    async def client_input_handler(request: Request, exc: ClientInputError):
        return client_error(exc.status_code, headers=exc.headers)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="snippetbox", description="Snippetbox web server")
    parser.add_argument("--addr", default=None, help="Сетевой адрес веб-сервера (по умолчанию :4000)")
    parser.add_argument("--dsn", default=None, help="Источник данных SQLAlchemy для базы заметок")
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    setup_logging()
    info_log = get_info_logger()
    error_log = get_error_logger()

    try:
        settings = get_settings(addr=args.addr, database_url=args.dsn)
        app = create_app(settings)
    except (SnippetboxError, SQLAlchemyError, ValueError, RuntimeError) as e:
        error_log.critical(f"Не удалось запустить приложение: {e}")
        sys.exit(1)

    host, port = settings.bind()
    info_log.info(f"Запуск сервера на http://{host}:{port}")
    # uvicorn сам завершает процесс с ненулевым кодом, если адрес занят
    # или не прошел старт (например, база данных недоступна)
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
