"""
Тесты настроек и точки входа.
"""
import pytest
from pydantic import ValidationError

from snippetbox.config import PACKAGE_DIR, Settings, get_settings
from snippetbox.main import main, parse_args


def test_defaults(monkeypatch):
    monkeypatch.delenv("SNIPPETBOX_ADDR", raising=False)
    settings = Settings()

    assert settings.addr == ":4000"
    assert settings.bind() == ("0.0.0.0", 4000)
    assert settings.templates_dir == PACKAGE_DIR / "templates"
    assert settings.create_schema is False


def test_env_prefix(monkeypatch):
    monkeypatch.setenv("SNIPPETBOX_ADDR", "127.0.0.1:8080")
    monkeypatch.setenv("SNIPPETBOX_DATABASE_URL", "sqlite+aiosqlite:///env.db")

    settings = get_settings()

    assert settings.bind() == ("127.0.0.1", 8080)
    assert settings.database_url == "sqlite+aiosqlite:///env.db"


def test_overrides_take_precedence(monkeypatch):
    monkeypatch.setenv("SNIPPETBOX_ADDR", "127.0.0.1:8080")

    settings = get_settings(addr=":9000", database_url=None)

    assert settings.addr == ":9000"
    assert settings.database_url.startswith("mysql+aiomysql://")


@pytest.mark.parametrize("addr", ["4000", "localhost:", "host:port"])
def test_invalid_addr(addr):
    with pytest.raises(ValidationError):
        Settings(addr=addr)


def test_parse_args():
    args = parse_args(["--addr", ":5000", "--dsn", "sqlite+aiosqlite:///x.db"])

    assert args.addr == ":5000"
    assert args.dsn == "sqlite+aiosqlite:///x.db"
    assert parse_args([]).addr is None


def test_main_exits_on_template_failure(tmp_path, monkeypatch):
    """Ошибка построения кэша шаблонов завершает процесс с ненулевым кодом"""
    monkeypatch.setenv("SNIPPETBOX_TEMPLATES_DIR", str(tmp_path / "missing"))

    with pytest.raises(SystemExit) as exc_info:
        main(["--dsn", f"sqlite+aiosqlite:///{tmp_path / 'db.sqlite'}"])

    assert exc_info.value.code == 1
