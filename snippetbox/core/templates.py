"""
Кэш шаблонов и отрисовка страниц.

Кэш строится один раз при запуске: каждая страница (``*.page.html``)
компилируется вместе со всеми общими макетами (``*.layout.html``) и
фрагментами (``*.partial.html``) из того же каталога. После запуска кэш
только читается, поэтому изменения шаблонов на диске требуют перезапуска.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, Iterator, Optional, Union

from fastapi.responses import StreamingResponse
from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateError, meta

from snippetbox.core.errors import TemplateCacheError, TemplateNotFoundError, TemplateRenderError
from snippetbox.core.log import get_error_logger
from snippetbox.domains.snippets.entities import TemplateData

PAGE_SUFFIX = ".page.html"
LAYOUT_SUFFIX = ".layout.html"
PARTIAL_SUFFIX = ".partial.html"


def human_date(value: Optional[datetime]) -> str:
    """Дата в удобном для чтения виде: 02 Jan 2006 at 15:04"""
    if value is None:
        return ""
    return value.strftime("%d %b %Y at %H:%M")


class TemplateCache:
    """Скомпилированные шаблоны страниц по имени файла страницы"""

    def __init__(self, templates: Dict[str, Template]):
        self._templates = dict(templates)

    def get(self, name: str) -> Template:
        try:
            return self._templates[name]
        except KeyError:
            raise TemplateNotFoundError(f"the template {name} does not exist") from None

    def require(self, names: Iterable[str]) -> None:
        """Самопроверка при запуске: все нужные обработчикам страницы есть в кэше"""
        missing = sorted(set(names) - set(self._templates))
        if missing:
            raise TemplateCacheError(f"missing page templates: {', '.join(missing)}")

    def __contains__(self, name: object) -> bool:
        return name in self._templates


def create_environment(directory: Union[str, Path]) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(directory)),
        autoescape=True,
        undefined=StrictUndefined,
        auto_reload=False,
        cache_size=-1,
    )
    env.filters["human_date"] = human_date
    return env


def new_template_cache(directory: Union[str, Path]) -> TemplateCache:
    """
    Построение кэша шаблонов.

    Любая ошибка (нет каталога, нет страниц или макета, синтаксическая
    ошибка, ссылка на несуществующий фрагмент) прерывает построение
    целиком: частично заполненный кэш не возвращается.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise TemplateCacheError(f"template directory {directory} does not exist")

    pages = sorted(directory.glob(f"*{PAGE_SUFFIX}"))
    layouts = sorted(directory.glob(f"*{LAYOUT_SUFFIX}"))
    partials = sorted(directory.glob(f"*{PARTIAL_SUFFIX}"))

    if not pages:
        raise TemplateCacheError(f"no page templates in {directory}")
    if not layouts:
        raise TemplateCacheError(f"no layout templates in {directory}")

    env = create_environment(directory)
    shared = {path.name for path in layouts + partials}
    cache: Dict[str, Template] = {}

    try:
        # Макеты и фрагменты попадают в кэш окружения и связываются со страницами
        for path in layouts + partials:
            _check_references(env, path, shared)
            env.get_template(path.name)

        for path in pages:
            _check_references(env, path, shared)
            cache[path.name] = env.get_template(path.name)
    except (TemplateError, OSError, UnicodeDecodeError) as e:
        raise TemplateCacheError(f"failed to compile templates in {directory}: {e}") from e

    return TemplateCache(cache)


def _check_references(env: Environment, path: Path, shared: Iterable[str]) -> None:
    source = path.read_text(encoding="utf-8")
    referenced = meta.find_referenced_templates(env.parse(source, name=path.name))
    # None означает имя, вычисляемое во время выполнения; проверить его нельзя
    missing = sorted(name for name in referenced if name is not None and name not in shared)
    if missing:
        raise TemplateCacheError(f"{path.name} references unknown templates: {', '.join(missing)}")


class Renderer:
    """Отрисовка страниц из кэша шаблонов"""

    def __init__(self, cache: TemplateCache, error_log: Optional[logging.Logger] = None):
        self.cache = cache
        self.error_log = error_log or get_error_logger()

    def stream(self, name: str, data: TemplateData) -> Iterator[str]:
        """
        Итератор фрагментов страницы.

        Первый фрагмент вычисляется сразу: ошибка до вывода первых байт
        поднимается как TemplateRenderError и превращается в ответ 500.
        Ошибка после этого только записывается в лог, а страница у клиента
        остается обрезанной: отправленные байты уже не вернуть.
        """
        template = self.cache.get(name)
        chunks = template.generate(data.context())
        try:
            first = next(chunks, "")
        except Exception as e:
            raise TemplateRenderError(f"render {name}: {e}") from e
        return self._continue(name, first, chunks)

    def render(self, name: str, data: TemplateData, status_code: int = 200) -> StreamingResponse:
        return StreamingResponse(
            self.stream(name, data),
            status_code=status_code,
            media_type="text/html",
        )

    def _continue(self, name: str, first: str, chunks: Iterator[str]) -> Iterator[str]:
        yield first
        try:
            yield from chunks
        except Exception:
            self.error_log.exception(f"rendering of {name} aborted after output was sent")
