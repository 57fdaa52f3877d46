from snippetbox.api.http.snippets import PAGES, router as snippets_router

__all__ = [
    "PAGES",
    "snippets_router",
]
