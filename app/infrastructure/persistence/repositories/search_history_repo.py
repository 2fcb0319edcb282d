"""Search history and term popularity repository. Append-only; implements ISearchHistoryRepository.

Reads are grouped by literal text and ordered by frequency. Every SQLAlchemy
failure is re-raised as PersistenceException so callers can log it without
depending on SQLAlchemy.
"""

from __future__ import annotations

from sqlalchemy import Select, distinct, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.dtos.search import SearchSummary
from app.domain.exceptions import PersistenceException
from app.infrastructure.persistence.models.search_history import (
    SearchHistory,
    SearchPopularTerm,
)
from app.shared.utils.datetime import days_ago, ensure_utc
from app.shared.utils.generators import generate_cuid

_LIKE_ESCAPE = "\\"


def contains_pattern(value: str) -> str:
    """ILIKE pattern matching value as a literal substring (escapes %, _ and backslash)."""
    escaped = (
        value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    )
    return f"%{escaped}%"


class SearchHistoryRepository:
    """Append-only store of executed searches and their terms."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def add_query(
        self,
        query: str,
        user_id: str | None,
        results_count: int,
        terms: list[str],
    ) -> None:
        """Insert one history row plus one popularity row per term, in one transaction."""
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    session.add(
                        SearchHistory(
                            id=generate_cuid(),
                            query=query,
                            user_id=user_id,
                            results_count=results_count,
                        )
                    )
                    session.add_all(
                        SearchPopularTerm(id=generate_cuid(), term=term, user_id=user_id)
                        for term in terms
                    )
        except SQLAlchemyError as e:
            raise PersistenceException("add_query") from e

    async def _scalars(self, operation: str, stmt: Select) -> list[str]:
        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                return [row[0] for row in result.all()]
        except SQLAlchemyError as e:
            raise PersistenceException(operation) from e

    async def top_history_queries(self, pattern: str, limit: int) -> list[str]:
        """Past queries containing pattern (case-insensitive), most frequent first."""
        count = func.count(SearchHistory.id)
        stmt = (
            select(SearchHistory.query, count)
            .where(SearchHistory.query.ilike(contains_pattern(pattern), escape=_LIKE_ESCAPE))
            .group_by(SearchHistory.query)
            .order_by(count.desc(), SearchHistory.query)
            .limit(limit)
        )
        return await self._scalars("top_history_queries", stmt)

    async def top_terms_matching(self, pattern: str, limit: int) -> list[str]:
        """Popular terms containing pattern (case-insensitive), most frequent first."""
        count = func.count(SearchPopularTerm.id)
        stmt = (
            select(SearchPopularTerm.term, count)
            .where(SearchPopularTerm.term.ilike(contains_pattern(pattern), escape=_LIKE_ESCAPE))
            .group_by(SearchPopularTerm.term)
            .order_by(count.desc(), SearchPopularTerm.term)
            .limit(limit)
        )
        return await self._scalars("top_terms_matching", stmt)

    async def top_terms_since(self, days: int, limit: int) -> list[str]:
        """Most frequent terms recorded in the trailing `days` days."""
        count = func.count(SearchPopularTerm.id)
        stmt = (
            select(SearchPopularTerm.term, count)
            .where(SearchPopularTerm.created_at > days_ago(days))
            .group_by(SearchPopularTerm.term)
            .order_by(count.desc(), SearchPopularTerm.term)
            .limit(limit)
        )
        return await self._scalars("top_terms_since", stmt)

    async def summary_since(self, days: int) -> SearchSummary:
        """Totals over the trailing window: searches, distinct users, mean hits, latest search."""
        stmt = select(
            func.count(SearchHistory.id),
            func.count(distinct(SearchHistory.user_id)),
            func.avg(SearchHistory.results_count),
            func.max(SearchHistory.created_at),
        ).where(SearchHistory.created_at > days_ago(days))
        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                total, unique_users, avg_results, last_search = result.one()
        except SQLAlchemyError as e:
            raise PersistenceException("summary_since") from e
        return SearchSummary(
            total_searches=int(total or 0),
            unique_users=int(unique_users or 0),
            avg_results=round(float(avg_results), 2) if avg_results is not None else None,
            last_search=ensure_utc(last_search),
        )
