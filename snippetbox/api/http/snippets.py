import re
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import RedirectResponse
from pydantic import ValidationError

from snippetbox.core.application import Application, get_application
from snippetbox.core.errors import ClientInputError, InternalFailure, NotFoundError
from snippetbox.core.helpers import not_found, server_error
from snippetbox.domains.snippets.entities import TemplateData, utcnow
from snippetbox.domains.snippets.schemas import SnippetCreate

HOME_PAGE = "home.page.html"
SHOW_PAGE = "show.page.html"

# Страницы, которые обязаны быть в кэше шаблонов к моменту запуска
PAGES = (HOME_PAGE, SHOW_PAGE)

# Диапазон столбца Integer (id) в БД
MAX_ID = 2**31 - 1
ID_PATTERN = re.compile(r"[+-]?[0-9]+")

router = APIRouter(tags=["snippets"])


def new_template_data(**kwargs) -> TemplateData:
    return TemplateData(current_year=utcnow().year, **kwargs)


def parse_id(value: str) -> Optional[int]:
    """
    Идентификатор из строки запроса.

    Принимаются только ASCII-цифры с необязательным знаком; None для
    нечислового значения и для id вне диапазона 1..MAX_ID.
    """
    if not value.isascii() or not ID_PATTERN.fullmatch(value):
        return None
    snippet_id = int(value)
    return snippet_id if 0 < snippet_id <= MAX_ID else None


@router.get("/")
async def home(application: Application = Depends(get_application)):
    """Главная страница: последние активные заметки"""
    try:
        snippets = await application.snippets.latest()
        return application.renderer.render(HOME_PAGE, new_template_data(snippets=snippets))
    except InternalFailure as e:
        return server_error(e, application.error_log)


@router.get("/record")
async def show_snippet(
    raw_id: str = Query("", alias="id"),
    application: Application = Depends(get_application),
):
    """Страница одной заметки"""
    snippet_id = parse_id(raw_id)
    if snippet_id is None:
        return not_found()

    try:
        snippet = await application.snippets.get(snippet_id)
        return application.renderer.render(SHOW_PAGE, new_template_data(snippet=snippet))
    except NotFoundError:
        return not_found()
    except InternalFailure as e:
        return server_error(e, application.error_log)


@router.post("/record/create")
async def create_snippet(request: Request, application: Application = Depends(get_application)):
    """Создание заметки из формы и переадресация на ее страницу"""
    form = await request.form()
    try:
        snippet_data = SnippetCreate(
            title=form.get("title", ""),
            content=form.get("content", ""),
            expires=form.get("expires", 7),
        )
    except ValidationError as e:
        raise ClientInputError(status.HTTP_400_BAD_REQUEST, message=str(e)) from e

    try:
        snippet_id = await application.snippets.insert(
            snippet_data.title, snippet_data.content, snippet_data.expires
        )
    except InternalFailure as e:
        return server_error(e, application.error_log)

    application.info_log.info(f"Создана заметка {snippet_id}")
    return RedirectResponse(f"/record?id={snippet_id}", status_code=status.HTTP_303_SEE_OTHER)
