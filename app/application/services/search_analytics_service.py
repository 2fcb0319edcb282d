"""Best-effort search analytics: query history and per-term popularity.

Writes never block or fail a search. record_in_background() keeps a strong
reference to each task until it finishes; drain() waits for the stragglers
at shutdown.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from app.application.services.query_normalizer import extract_terms

if TYPE_CHECKING:
    from app.application.interfaces.repositories import ISearchHistoryRepository

logger = logging.getLogger(__name__)


class AnalyticsRecorder:
    """IAnalyticsRecorder implementation over ISearchHistoryRepository."""

    def __init__(self, history_repo: ISearchHistoryRepository) -> None:
        self.history_repo = history_repo
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def record(self, query: str, user_id: str | None, results_count: int) -> None:
        """Append the query and its terms (length >= 3). Logs and returns on failure."""
        terms = extract_terms(query)
        try:
            await self.history_repo.add_query(
                query=query,
                user_id=user_id,
                results_count=results_count,
                terms=terms,
            )
        except Exception:
            logger.exception("Failed to record search analytics for %r", query)
            return
        logger.debug("Recorded search %r (%d terms, %d results)", query, len(terms), results_count)

    def record_in_background(
        self, query: str, user_id: str | None, results_count: int
    ) -> None:
        """Schedule record() on the running loop without awaiting it."""
        task = asyncio.create_task(self.record(query, user_id, results_count))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def drain(self) -> None:
        """Wait for every scheduled record() to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
