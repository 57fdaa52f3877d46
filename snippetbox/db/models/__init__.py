from snippetbox.db.models.snippet import SnippetModel

__all__ = [
    "SnippetModel",
]
