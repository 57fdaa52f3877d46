import logging
import traceback
from http import HTTPStatus
from typing import Dict, Optional

from fastapi import status
from fastapi.responses import PlainTextResponse

from snippetbox.core.log import get_error_logger


def server_error(exc: BaseException, logger: Optional[logging.Logger] = None) -> PlainTextResponse:
    """
    Запись сообщения и трассировки стека в лог ошибок и ответ 500.

    stacklevel=2: в записи лога указывается место вызова хелпера
    (обработчик), а не сам хелпер. Подробности ошибки клиенту не отдаются.
    """
    logger = logger or get_error_logger()
    trace = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    logger.error("%s\n%s", exc, trace, stacklevel=2)
    return client_error(status.HTTP_500_INTERNAL_SERVER_ERROR)


def client_error(status_code: int, headers: Optional[Dict[str, str]] = None) -> PlainTextResponse:
    """Ответ с кодом состояния и его стандартным текстом"""
    return PlainTextResponse(HTTPStatus(status_code).phrase, status_code=status_code, headers=headers)


def not_found() -> PlainTextResponse:
    """Ответ 404 без записи в лог"""
    return client_error(status.HTTP_404_NOT_FOUND)
