from snippetbox.domains.snippets.entities import Snippet, TemplateData, utcnow
from snippetbox.domains.snippets.schemas import ALLOWED_EXPIRES, SnippetCreate

__all__ = [
    "Snippet", "TemplateData", "utcnow",
    "ALLOWED_EXPIRES", "SnippetCreate",
]
