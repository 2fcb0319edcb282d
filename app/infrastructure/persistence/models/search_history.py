"""Search analytics ORM models. Append-only query history and per-term popularity rows."""

from datetime import datetime
from typing import Any

from sqlalchemy import Connection, DateTime, Index, Integer, String, Text, event, text
from sqlalchemy.orm import Mapped, Mapper, mapped_column

from app.infrastructure.persistence.database import Base
from app.shared.utils.generators import generate_cuid


class SearchHistory(Base):
    """One executed search: literal query text, who ran it, how many hits. No update/delete."""

    __tablename__ = "search_history"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=generate_cuid)
    query: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    results_count: Mapped[int] = mapped_column(
        Integer, nullable=False, server_default=text("0")
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=text("now()"), nullable=False
    )

    __table_args__ = (
        Index("ix_search_history_query", "query"),
        Index("ix_search_history_created_at", "created_at"),
    )


class SearchPopularTerm(Base):
    """One occurrence of a normalized query term (length >= 3). Counted by GROUP BY term."""

    __tablename__ = "search_popular_terms"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=generate_cuid)
    term: Mapped[str] = mapped_column(String(255), nullable=False)
    user_id: Mapped[str | None] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=text("now()"), nullable=False
    )

    __table_args__ = (
        Index("ix_search_popular_terms_term", "term"),
        Index("ix_search_popular_terms_created_at", "created_at"),
    )


@event.listens_for(SearchHistory, "before_update")
@event.listens_for(SearchPopularTerm, "before_update")
def _prevent_search_analytics_updates(
    _mapper: Mapper[Any], _connection: Connection, _target: Any
) -> None:
    """Search analytics rows are append-only; updates are forbidden."""
    raise ValueError("Search analytics rows are immutable and cannot be updated.")
