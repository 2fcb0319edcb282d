"""DTOs for unified search (no dependency on ORM or HTTP schemas).

SearchOptions, SearchResult, SearchStats and SearchResponse are transient,
built per request. to_dict()/from_dict() use the camelCase wire names so the
cached payload is the same shape the API returns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from app.domain.enums import EntityType, SortBy, SortOrder


@dataclass(frozen=True)
class SearchOptions:
    """One logical search request. entities empty means all entity types."""

    query: str
    entities: frozenset[EntityType] = frozenset()
    filters: dict[str, Any] = field(default_factory=dict)
    sort_by: SortBy = SortBy.RELEVANCE
    sort_order: SortOrder = SortOrder.DESC
    page: int = 1
    limit: int = 50
    user_id: str | None = None
    include_archived: bool = False

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class SearchResult:
    """Single hit from one entity store.

    relevance is on the entity's own scale and is not comparable across
    entity types.
    """

    id: str
    type: EntityType
    title: str
    relevance: float
    url: str
    description: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "title": self.title,
            "description": self.description,
            "relevance": self.relevance,
            "metadata": self.metadata,
            "url": self.url,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SearchResult:
        timestamp = data.get("timestamp")
        return cls(
            id=data["id"],
            type=EntityType(data["type"]),
            title=data["title"],
            description=data.get("description"),
            relevance=float(data["relevance"]),
            metadata=data.get("metadata") or {},
            url=data["url"],
            timestamp=datetime.fromisoformat(timestamp) if timestamp else None,
        )


@dataclass
class SearchStats:
    """Aggregate statistics for one search (totals, timing, autocomplete)."""

    total_results: int
    results_by_entity: dict[EntityType, int]
    query_time: int
    suggestions: list[str] = field(default_factory=list)
    popular_terms: list[str] = field(default_factory=list)
    degraded_entities: list[EntityType] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalResults": self.total_results,
            "resultsByEntity": {
                entity.value: count for entity, count in self.results_by_entity.items()
            },
            "queryTime": self.query_time,
            "suggestions": list(self.suggestions),
            "popularTerms": list(self.popular_terms),
            "degradedEntities": [entity.value for entity in self.degraded_entities],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SearchStats:
        return cls(
            total_results=int(data["totalResults"]),
            results_by_entity={
                EntityType(name): int(count)
                for name, count in data["resultsByEntity"].items()
            },
            query_time=int(data["queryTime"]),
            suggestions=list(data.get("suggestions") or []),
            popular_terms=list(data.get("popularTerms") or []),
            degraded_entities=[
                EntityType(name) for name in data.get("degradedEntities") or []
            ],
        )


@dataclass
class SearchResponse:
    """Page of merged results plus stats."""

    results: list[SearchResult]
    stats: SearchStats

    def to_dict(self) -> dict[str, Any]:
        return {
            "results": [r.to_dict() for r in self.results],
            "stats": self.stats.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SearchResponse:
        return cls(
            results=[SearchResult.from_dict(r) for r in data["results"]],
            stats=SearchStats.from_dict(data["stats"]),
        )


@dataclass(frozen=True)
class AdapterOutcome:
    """What one entity adapter produced, including whether it degraded."""

    entity_type: EntityType
    results: list[SearchResult]
    degraded: bool = False
    error: str | None = None


@dataclass(frozen=True)
class AggregatedResults:
    """Merged, sorted, paginated output of the aggregator (before autocomplete)."""

    page: list[SearchResult]
    results_by_entity: dict[EntityType, int]
    degraded_entities: list[EntityType]
    query_time: int

    @property
    def total_results(self) -> int:
        return sum(self.results_by_entity.values())


@dataclass
class SearchSummary:
    """Search usage over the trailing window (total, unique users, averages)."""

    total_searches: int = 0
    unique_users: int = 0
    avg_results: float | None = None
    last_search: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalSearches": self.total_searches,
            "uniqueUsers": self.unique_users,
            "avgResults": self.avg_results,
            "lastSearch": self.last_search.isoformat() if self.last_search else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SearchSummary:
        last_search = data.get("lastSearch")
        return cls(
            total_searches=int(data.get("totalSearches") or 0),
            unique_users=int(data.get("uniqueUsers") or 0),
            avg_results=data.get("avgResults"),
            last_search=datetime.fromisoformat(last_search) if last_search else None,
        )
