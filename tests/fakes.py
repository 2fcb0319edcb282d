"""In-memory fakes for the cache backend, entity adapters and history store."""

import json
from collections import Counter
from collections.abc import Iterable
from datetime import UTC, datetime, timedelta
from typing import Any

from app.application.dtos.search import AdapterOutcome, SearchResult, SearchSummary
from app.domain.enums import EntityType
from app.domain.exceptions import PersistenceException
from app.shared.utils.datetime import utc_now


def make_result(
    entity_type: EntityType,
    record_id: str,
    relevance: float,
    title: str | None = None,
    timestamp: datetime | None = None,
) -> SearchResult:
    return SearchResult(
        id=record_id,
        type=entity_type,
        title=title or f"{entity_type.value} {record_id}",
        relevance=relevance,
        url=f"/{entity_type.value}/{record_id}",
        description=None,
        metadata={"source": entity_type.value},
        timestamp=timestamp,
    )


class InMemoryCache:
    """CacheProtocol backend over a dict of JSON strings (same round trip as Redis); records TTLs."""

    def __init__(self) -> None:
        self.data: dict[str, str] = {}
        self.ttls: dict[str, int] = {}

    def is_available(self) -> bool:
        return True

    async def get(self, key: str) -> Any | None:
        raw = self.data.get(key)
        return json.loads(raw) if raw is not None else None

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        self.data[key] = json.dumps(value)
        self.ttls[key] = ttl
        return True


class FakeAdapter:
    """Adapter stand-in: returns canned results, raises, or degrades on demand."""

    def __init__(
        self,
        entity_type: EntityType,
        results: Iterable[SearchResult] = (),
        *,
        raises: Exception | None = None,
        degraded: bool = False,
    ) -> None:
        self.entity_type = entity_type
        self.results = sorted(results, key=lambda r: r.relevance, reverse=True)
        self.raises = raises
        self.degraded = degraded
        self.calls: list[dict[str, Any]] = []

    async def search_outcome(
        self,
        query: str,
        filters: dict[str, Any],
        user_id: str | None = None,
        include_archived: bool = False,
    ) -> AdapterOutcome:
        self.calls.append(
            {
                "query": query,
                "filters": filters,
                "user_id": user_id,
                "include_archived": include_archived,
            }
        )
        if self.raises is not None:
            raise self.raises
        if self.degraded:
            return AdapterOutcome(self.entity_type, [], degraded=True, error="timeout")
        return AdapterOutcome(self.entity_type, list(self.results))

    async def search(
        self,
        query: str,
        filters: dict[str, Any],
        user_id: str | None = None,
        include_archived: bool = False,
    ) -> list[SearchResult]:
        outcome = await self.search_outcome(query, filters, user_id, include_archived)
        return outcome.results


class FakeHistoryRepository:
    """ISearchHistoryRepository over lists; ordering mirrors GROUP BY ... ORDER BY count DESC."""

    def __init__(self) -> None:
        self.queries: list[tuple[str, str | None, int, datetime]] = []
        self.terms: list[tuple[str, str | None, datetime]] = []
        self.fail = False

    def _check(self) -> None:
        if self.fail:
            raise PersistenceException("fake")

    @staticmethod
    def _ranked(values: Iterable[str], limit: int) -> list[str]:
        counts = Counter(values)
        return [value for value, _ in sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))][
            :limit
        ]

    async def add_query(
        self, query: str, user_id: str | None, results_count: int, terms: list[str]
    ) -> None:
        self._check()
        now = utc_now()
        self.queries.append((query, user_id, results_count, now))
        self.terms.extend((term, user_id, now) for term in terms)

    async def top_history_queries(self, pattern: str, limit: int) -> list[str]:
        self._check()
        needle = pattern.lower()
        return self._ranked((q for q, *_ in self.queries if needle in q.lower()), limit)

    async def top_terms_matching(self, pattern: str, limit: int) -> list[str]:
        self._check()
        needle = pattern.lower()
        return self._ranked((t for t, *_ in self.terms if needle in t.lower()), limit)

    async def top_terms_since(self, days: int, limit: int) -> list[str]:
        self._check()
        since = utc_now() - timedelta(days=days)
        return self._ranked((t for t, _, at in self.terms if at > since), limit)

    async def summary_since(self, days: int) -> SearchSummary:
        self._check()
        since = utc_now() - timedelta(days=days)
        rows = [row for row in self.queries if row[3] > since]
        if not rows:
            return SearchSummary()
        return SearchSummary(
            total_searches=len(rows),
            unique_users=len({user for _, user, _, _ in rows if user is not None}),
            avg_results=round(sum(count for _, _, count, _ in rows) / len(rows), 2),
            last_search=max(at for *_, at in rows),
        )


def sample_adapters() -> list[FakeAdapter]:
    """Cases, clients and documents with overlapping relevance ranges."""
    base = datetime(2025, 1, 1, tzinfo=UTC)
    return [
        FakeAdapter(
            EntityType.CASES,
            [
                make_result(EntityType.CASES, f"c{i}", 0.9 - i * 0.1, timestamp=base + timedelta(days=i))
                for i in range(6)
            ],
        ),
        FakeAdapter(
            EntityType.CLIENTS,
            [
                make_result(EntityType.CLIENTS, f"k{i}", 0.85 - i * 0.1, timestamp=base + timedelta(hours=i))
                for i in range(5)
            ],
        ),
        FakeAdapter(
            EntityType.DOCUMENTS,
            [make_result(EntityType.DOCUMENTS, f"d{i}", 0.5 - i * 0.05) for i in range(4)],
        ),
    ]
