from dataclasses import dataclass, fields
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


def utcnow() -> datetime:
    """Текущее время UTC без tzinfo (так даты хранятся в БД)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


@dataclass
class Snippet:
    """Сущность заметки"""
    id: int
    title: str
    content: str
    created: datetime
    expires: datetime


@dataclass
class TemplateData:
    """Данные для одной отрисовки страницы"""
    snippet: Optional[Snippet] = None
    snippets: Optional[List[Snippet]] = None
    current_year: Optional[int] = None

    def context(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
