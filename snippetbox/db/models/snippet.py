from sqlalchemy import Column, DateTime, Index, Integer, String, Text

from snippetbox.core.db import Base


class SnippetModel(Base):
    __tablename__ = "snippets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(100), nullable=False)
    content = Column(Text, nullable=False)
    created = Column(DateTime, nullable=False)
    expires = Column(DateTime, nullable=False)

    __table_args__ = (Index("idx_snippets_created", "created"),)
