from typing import Dict, Optional


class SnippetboxError(Exception):
    """Базовое исключение приложения"""


class NotFoundError(SnippetboxError):
    """Запись отсутствует, истекла или маршрут не найден"""

    def __init__(self, message: str = "no matching record found"):
        super().__init__(message)


class ClientInputError(SnippetboxError):
    """Ошибка на стороне клиента (неверный метод, некорректная форма)"""

    def __init__(
        self,
        status_code: int = 400,
        headers: Optional[Dict[str, str]] = None,
        message: str = "",
    ):
        super().__init__(message or f"client error {status_code}")
        self.status_code = status_code
        self.headers = headers or {}


class InternalFailure(SnippetboxError):
    """Внутренний сбой: хранилище, шаблоны, ввод-вывод"""


class StoreError(InternalFailure):
    """Сбой при работе с базой данных"""


class TemplateCacheError(InternalFailure):
    """Кэш шаблонов не удалось построить при запуске"""


class TemplateNotFoundError(InternalFailure):
    """Запрошенный шаблон отсутствует в кэше"""


class TemplateRenderError(InternalFailure):
    """Ошибка выполнения шаблона"""
