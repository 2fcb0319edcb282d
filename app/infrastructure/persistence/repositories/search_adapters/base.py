"""Base class for per-entity full-text search adapters.

Each adapter describes its store declaratively (searchable document
expression, columns, joins, archival and ownership conditions, allow-listed
filters) and maps rows to SearchResult. The base class builds one
parameterized PostgreSQL statement using ts_rank / plainto_tsquery, runs it
on its own session under a timeout with one retry for transient errors, and
turns every failure into an empty, degraded outcome.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, ClassVar

from sqlalchemy import TextClause, text
from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.dtos.search import AdapterOutcome, SearchResult
from app.domain.enums import EntityType
from app.domain.exceptions import AdapterException
from app.shared.telemetry.tracing import add_span_attributes, set_span_error, traced
from app.shared.utils.datetime import ensure_utc
from app.shared.utils.serialization import json_safe_metadata

logger = logging.getLogger(__name__)

TS_CONFIG = "english"


def as_text(value: Any) -> str:
    """Accept scalar values only; lists and objects cannot bind to one text parameter."""
    if isinstance(value, (list, tuple, set, dict)):
        raise ValueError(f"not a scalar: {value!r}")
    return str(value).strip()


def as_bool(value: Any) -> bool:
    """Accept real booleans and the usual query-string spellings."""
    if isinstance(value, bool):
        return value
    lowered = str(value).strip().lower()
    if lowered in ("true", "1", "yes"):
        return True
    if lowered in ("false", "0", "no"):
        return False
    raise ValueError(f"not a boolean: {value!r}")


def as_date(value: Any) -> date:
    """Accept date, datetime or an ISO-8601 date string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip()[:10])


@dataclass(frozen=True)
class FilterSpec:
    """Allow-listed filter: SQL condition with one bound parameter and a value converter."""

    condition: str
    param: str
    convert: Callable[[Any], Any] = as_text


def is_transient(error: Exception) -> bool:
    """True for connection-level failures worth one retry."""
    if isinstance(error, (OperationalError, InterfaceError)):
        return True
    return isinstance(error, DBAPIError) and bool(error.connection_invalidated)


def full_name(first: str | None, last: str | None) -> str:
    return f"{first or ''} {last or ''}".strip()


def money(amount: Any) -> str:
    if amount is None:
        return "$0.00"
    try:
        return f"${Decimal(str(amount)):.2f}"
    except InvalidOperation:
        return f"${amount}"


class EntitySearchAdapter(ABC):
    """Full-text search over one entity store. Never raises from search()/search_outcome().

    Subclasses set:
        entity_type: Which EntityType this adapter serves.
        document: SQL expression concatenating the searchable fields.
        columns: SELECT list (without relevance).
        source: FROM clause including joins.
        order_key: Unique column used as tie-breaker after relevance.
        scope_condition: Always applied (e.g. users must be active).
        active_condition: Applied unless include_archived (excludes archived rows).
        owner_condition: Applied when user_id is given; uses :user_id.
        filter_specs: filter key -> FilterSpec; other keys are ignored.
    """

    entity_type: ClassVar[EntityType]
    document: ClassVar[str]
    columns: ClassVar[str]
    source: ClassVar[str]
    order_key: ClassVar[str]
    scope_condition: ClassVar[str | None] = None
    active_condition: ClassVar[str | None] = None
    owner_condition: ClassVar[str | None] = None
    filter_specs: ClassVar[dict[str, FilterSpec]] = {}

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        timeout_seconds: float = 2.0,
        retries: int = 1,
    ) -> None:
        self.session_factory = session_factory
        self.timeout_seconds = timeout_seconds
        self.retries = retries

    def build_statement(
        self,
        query: str,
        filters: Mapping[str, Any],
        user_id: str | None = None,
        include_archived: bool = False,
    ) -> tuple[TextClause, dict[str, Any]]:
        """Build the parameterized ranking statement and its bind parameters.

        Raises:
            AdapterException: If an allow-listed filter value cannot be converted.
        """
        tsvector = f"to_tsvector('{TS_CONFIG}', {self.document})"
        tsquery = f"plainto_tsquery('{TS_CONFIG}', :q)"
        conditions = [f"{tsvector} @@ {tsquery}"]
        params: dict[str, Any] = {"q": query}

        if self.scope_condition:
            conditions.append(self.scope_condition)
        if self.active_condition and not include_archived:
            conditions.append(self.active_condition)
        if user_id and self.owner_condition:
            conditions.append(self.owner_condition)
            params["user_id"] = user_id

        for key, spec in self.filter_specs.items():
            value = filters.get(key)
            if value is None or value == "":
                continue
            try:
                params[spec.param] = spec.convert(value)
            except (TypeError, ValueError) as e:
                raise AdapterException(
                    self.entity_type.value, f"Invalid value for filter {key!r}: {value!r}"
                ) from e
            conditions.append(spec.condition)

        where = "\n  AND ".join(conditions)
        sql = (
            f"SELECT {self.columns},\n"
            f"  ts_rank({tsvector}, {tsquery}) AS relevance\n"
            f"FROM {self.source}\n"
            f"WHERE {where}\n"
            f"ORDER BY relevance DESC, {self.order_key}"
        )
        return text(sql), params

    @abstractmethod
    def to_result(self, row: Mapping[str, Any]) -> SearchResult:
        """Map one row (with relevance column) to a SearchResult."""

    def make_result(
        self,
        row: Mapping[str, Any],
        *,
        title: str,
        description: str | None,
        metadata: dict[str, Any],
        path: str,
    ) -> SearchResult:
        """Shared construction: id, relevance, timestamp and url conventions."""
        record_id = str(row["id"])
        timestamp = row.get("updated_at") or row.get("created_at")
        return SearchResult(
            id=record_id,
            type=self.entity_type,
            title=title or "",
            description=description,
            relevance=max(float(row.get("relevance") or 0.0), 0.0),
            metadata=json_safe_metadata(metadata),
            url=f"/{path}/{record_id}",
            timestamp=ensure_utc(timestamp) if isinstance(timestamp, datetime) else None,
        )

    async def _fetch(self, statement: TextClause, params: dict[str, Any]) -> list[SearchResult]:
        async with self.session_factory() as session:
            result = await session.execute(statement, params)
            rows = result.mappings().all()
        return [self.to_result(row) for row in rows]

    async def _fetch_with_retry(
        self, statement: TextClause, params: dict[str, Any]
    ) -> list[SearchResult]:
        attempt = 0
        while True:
            try:
                return await self._fetch(statement, params)
            except DBAPIError as e:
                if attempt >= self.retries or not is_transient(e):
                    raise
                attempt += 1
                logger.warning(
                    "Transient error searching %s (attempt %d/%d): %s",
                    self.entity_type.value,
                    attempt,
                    self.retries + 1,
                    e,
                )

    @traced("search.adapter")
    async def search_outcome(
        self,
        query: str,
        filters: Mapping[str, Any],
        user_id: str | None = None,
        include_archived: bool = False,
    ) -> AdapterOutcome:
        """Run the entity search under its own timeout; failures become a degraded outcome."""
        add_span_attributes(**{"search.entity_type": self.entity_type.value})
        try:
            statement, params = self.build_statement(
                query, filters, user_id=user_id, include_archived=include_archived
            )
            results = await asyncio.wait_for(
                self._fetch_with_retry(statement, params),
                timeout=self.timeout_seconds,
            )
        except TimeoutError as e:
            logger.warning(
                "Search adapter %s timed out after %ss",
                self.entity_type.value,
                self.timeout_seconds,
            )
            set_span_error(e)
            return AdapterOutcome(self.entity_type, [], degraded=True, error="timeout")
        except Exception as e:
            logger.exception("Search adapter %s failed", self.entity_type.value)
            set_span_error(e)
            return AdapterOutcome(self.entity_type, [], degraded=True, error=str(e))
        add_span_attributes(**{"search.result_count": len(results)})
        return AdapterOutcome(self.entity_type, results)

    async def search(
        self,
        query: str,
        filters: Mapping[str, Any],
        user_id: str | None = None,
        include_archived: bool = False,
    ) -> list[SearchResult]:
        """Return matches sorted by local relevance descending; [] on any failure."""
        outcome = await self.search_outcome(
            query, filters, user_id=user_id, include_archived=include_archived
        )
        return outcome.results
