"""
Pytest configuration and fixtures.
"""
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from snippetbox.config import Settings
from snippetbox.core.db import create_engine, create_schema, create_session_factory
from snippetbox.db.repositories.snippet_repository import SnippetRepository
from snippetbox.main import create_app


@pytest.fixture
def database_url(tmp_path):
    """Временная БД SQLite в файле: соединения пула видят одни и те же данные"""
    return f"sqlite+aiosqlite:///{tmp_path / 'snippetbox.db'}"


@pytest_asyncio.fixture
async def engine(database_url):
    engine = create_engine(database_url)
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def repository(engine):
    return SnippetRepository(create_session_factory(engine))


@pytest.fixture
def settings(database_url):
    return Settings(database_url=database_url, create_schema=True)


@pytest.fixture
def client(settings):
    """Test client fixture; lifespan создает схему и проверяет соединение"""
    app = create_app(settings)
    with TestClient(app) as client:
        yield client


LAYOUT = """<html><body>{% block main %}{% endblock %}{% include "footer.partial.html" %}</body></html>"""
FOOTER = """<footer>{{ current_year }}</footer>"""
PAGE = """{% extends "base.layout.html" %}{% block main %}<h1>{{ snippet.title }}</h1>{% endblock %}"""


@pytest.fixture
def template_dir(tmp_path):
    """Минимальный каталог шаблонов: макет, фрагмент и страница"""
    directory = tmp_path / "templates"
    directory.mkdir()
    (directory / "base.layout.html").write_text(LAYOUT, encoding="utf-8")
    (directory / "footer.partial.html").write_text(FOOTER, encoding="utf-8")
    (directory / "show.page.html").write_text(PAGE, encoding="utf-8")
    return directory
