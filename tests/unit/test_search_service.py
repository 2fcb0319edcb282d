"""SearchService: validation, caching, degradation and analytics end to end (in-memory)."""

import pytest

from app.application.dtos.search import SearchOptions
from app.application.services.search_analytics_service import AnalyticsRecorder
from app.application.use_cases.search import SearchService
from app.domain.enums import EntityType
from app.domain.exceptions import InvalidQueryException, ValidationException
from app.infrastructure.cache.keys import search_results_key
from tests.fakes import FakeAdapter, FakeHistoryRepository, InMemoryCache

CASES_AND_CLIENTS = frozenset({EntityType.CASES, EntityType.CLIENTS})


@pytest.mark.parametrize("query", ["a", " a ", "", "  "])
async def test_short_query_is_rejected(search_service: SearchService, query: str) -> None:
    with pytest.raises(InvalidQueryException):
        await search_service.search(SearchOptions(query=query))


@pytest.mark.parametrize(
    ("page", "limit", "field"),
    [(0, 10, "page"), (1, 0, "limit"), (1, 101, "limit")],
)
async def test_page_and_limit_bounds(
    search_service: SearchService, page: int, limit: int, field: str
) -> None:
    with pytest.raises(ValidationException) as exc_info:
        await search_service.search(SearchOptions(query="contract", page=page, limit=limit))
    assert exc_info.value.details["field"] == field


async def test_contract_search_over_cases_and_clients(search_service: SearchService) -> None:
    response = await search_service.search(
        SearchOptions(query="contract", entities=CASES_AND_CLIENTS, limit=5)
    )
    assert len(response.results) == 5
    assert {r.type for r in response.results} <= CASES_AND_CLIENTS
    assert response.stats.results_by_entity == {EntityType.CASES: 6, EntityType.CLIENTS: 5}
    assert response.stats.total_results == 11
    assert response.stats.query_time >= 0
    assert response.stats.degraded_entities == []
    scores = [r.relevance for r in response.results]
    assert scores == sorted(scores, reverse=True)


async def test_query_is_normalized_for_adapters(
    search_service: SearchService, adapters: list[FakeAdapter]
) -> None:
    await search_service.search(
        SearchOptions(query="  Contract, Review!  ", entities=frozenset({EntityType.CASES}))
    )
    assert adapters[0].calls[0]["query"] == "contract review"


async def test_identical_search_is_served_from_cache(
    search_service: SearchService, adapters: list[FakeAdapter], memory_cache: InMemoryCache
) -> None:
    options = SearchOptions(query="contract", entities=CASES_AND_CLIENTS, limit=5)
    first = await search_service.search(options)
    second = await search_service.search(
        SearchOptions(
            query="contract ",
            entities=frozenset({EntityType.CLIENTS, EntityType.CASES}),
            limit=5,
        )
    )
    assert second == first
    assert len(adapters[0].calls) == 1
    assert len(adapters[1].calls) == 1
    assert memory_cache.ttls[search_results_key(options)] == 300


async def test_failing_documents_adapter_degrades(
    search_service: SearchService, adapters: list[FakeAdapter], memory_cache: InMemoryCache
) -> None:
    adapters[2].raises = RuntimeError("documents store down")
    options = SearchOptions(
        query="contract",
        entities=frozenset({EntityType.CASES, EntityType.CLIENTS, EntityType.DOCUMENTS}),
    )
    response = await search_service.search(options)
    assert response.stats.results_by_entity[EntityType.DOCUMENTS] == 0
    assert response.stats.results_by_entity[EntityType.CASES] == 6
    assert response.stats.degraded_entities == [EntityType.DOCUMENTS]
    assert all(r.type is not EntityType.DOCUMENTS for r in response.results)
    # Responses with degraded entities are never cached.
    assert search_results_key(options) not in memory_cache.data


async def test_search_records_analytics_in_background(
    search_service: SearchService,
    recorder: AnalyticsRecorder,
    history_repo: FakeHistoryRepository,
) -> None:
    options = SearchOptions(query="Contract dispute", entities=CASES_AND_CLIENTS, user_id="u1")
    await search_service.search(options)
    await search_service.search(options)
    await recorder.drain()
    assert [(q, u, n) for q, u, n, _ in history_repo.queries] == [
        ("Contract dispute", "u1", 11),
        ("Contract dispute", "u1", 11),
    ]


async def test_search_survives_history_store_failure(
    search_service: SearchService,
    recorder: AnalyticsRecorder,
    history_repo: FakeHistoryRepository,
) -> None:
    history_repo.fail = True
    response = await search_service.search(
        SearchOptions(query="contract", entities=CASES_AND_CLIENTS)
    )
    await recorder.drain()
    assert response.stats.suggestions == []
    assert response.stats.popular_terms == []
    assert response.stats.total_results == 11


async def test_logged_query_feeds_popular_terms_and_suggestions(
    search_service: SearchService,
) -> None:
    await search_service.log_query("contract review", "u1", 12)
    popular = await search_service.popular_terms()
    assert "contract" in popular
    assert "review" in popular
    assert await search_service.suggest("contr") == ["contract review", "contract"]
    summary = await search_service.search_summary()
    assert summary.total_searches == 1
    assert summary.avg_results == 12


async def test_suggestions_are_attached_to_the_response(search_service: SearchService) -> None:
    await search_service.log_query("contract review", "u1", 12)
    response = await search_service.search(
        SearchOptions(query="contract", entities=CASES_AND_CLIENTS)
    )
    assert response.stats.suggestions == ["contract review", "contract"]
    assert response.stats.popular_terms == ["contract", "review"]
