"""Search endpoints over HTTP (ASGI transport, in-memory service)."""

import json

from httpx import AsyncClient

from app.application.services.search_analytics_service import AnalyticsRecorder

BASE = "/api/v1/search"


async def test_get_search_returns_camel_case_stats(client: AsyncClient) -> None:
    response = await client.get(BASE, params={"q": "contract", "entities": "cases,clients", "limit": 5})
    assert response.status_code == 200
    body = response.json()
    assert len(body["results"]) == 5
    stats = body["stats"]
    assert stats["totalResults"] == 11
    assert stats["resultsByEntity"] == {"cases": 6, "clients": 5}
    assert stats["queryTime"] >= 0
    assert stats["degradedEntities"] == []
    assert {"suggestions", "popularTerms"} <= set(stats)
    first = body["results"][0]
    assert first["type"] == "cases"
    assert first["url"] == "/cases/c0"
    assert first["timestamp"].startswith("2025-01-01T00:00:00")


async def test_get_search_sort_and_paging_params(client: AsyncClient) -> None:
    response = await client.get(
        BASE,
        params={
            "q": "contract",
            "entities": "cases",
            "sortBy": "date",
            "sortOrder": "asc",
            "page": 2,
            "limit": 2,
        },
    )
    assert response.status_code == 200
    assert [r["id"] for r in response.json()["results"]] == ["c2", "c3"]


async def test_all_entities_by_default_reports_unavailable_stores(client: AsyncClient) -> None:
    response = await client.get(BASE, params={"q": "contract"})
    assert response.status_code == 200
    stats = response.json()["stats"]
    assert set(stats["resultsByEntity"]) == {
        "cases",
        "clients",
        "documents",
        "users",
        "expenses",
        "articles",
        "tasks",
        "invoices",
        "time_entries",
    }
    assert stats["totalResults"] == 15
    assert "invoices" in stats["degradedEntities"]


async def test_short_query_is_a_400(client: AsyncClient) -> None:
    response = await client.get(BASE, params={"q": " a "})
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "VALIDATION_ERROR"
    assert body["details"]["field"] == "query"


async def test_missing_query_is_a_422(client: AsyncClient) -> None:
    response = await client.get(BASE)
    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_limit_out_of_range_is_a_400(client: AsyncClient) -> None:
    response = await client.get(BASE, params={"q": "contract", "limit": 101})
    assert response.status_code == 400
    assert response.json()["details"]["field"] == "limit"


async def test_unknown_entity_is_a_400(client: AsyncClient) -> None:
    response = await client.get(BASE, params={"q": "contract", "entities": "cases,planets"})
    assert response.status_code == 400
    assert response.json()["details"]["field"] == "entities"


async def test_malformed_filters_are_a_400(client: AsyncClient) -> None:
    for raw in ("{not json", "[1, 2]"):
        response = await client.get(BASE, params={"q": "contract", "filters": raw})
        assert response.status_code == 400
        assert response.json()["details"]["field"] == "filters"


async def test_filters_reach_the_adapters(client: AsyncClient, adapters) -> None:
    response = await client.get(
        BASE,
        params={"q": "contract", "entities": "cases", "filters": json.dumps({"status": "open"})},
    )
    assert response.status_code == 200
    assert adapters[0].calls[0]["filters"] == {"status": "open"}


async def test_post_search_accepts_camel_case_body(client: AsyncClient, adapters) -> None:
    response = await client.post(
        BASE,
        json={
            "query": "contract",
            "entities": ["clients"],
            "filters": {"type": "company"},
            "sortBy": "title",
            "sortOrder": "asc",
            "limit": 3,
            "userId": "u1",
            "includeArchived": True,
        },
    )
    assert response.status_code == 200
    body = response.json()
    assert [r["id"] for r in body["results"]] == ["k0", "k1", "k2"]
    assert body["stats"]["resultsByEntity"] == {"clients": 5}
    assert adapters[1].calls[0] == {
        "query": "contract",
        "filters": {"type": "company"},
        "user_id": "u1",
        "include_archived": True,
    }


async def test_post_search_rejects_unknown_entity(client: AsyncClient) -> None:
    response = await client.post(BASE, json={"query": "contract", "entities": ["planets"]})
    assert response.status_code == 422


async def test_log_then_suggestions_popular_and_statistics(client: AsyncClient) -> None:
    response = await client.post(
        f"{BASE}/log", json={"query": "contract review", "userId": "u1", "resultsCount": 12}
    )
    assert response.status_code == 202
    assert response.json() == {"status": "accepted"}

    response = await client.get(f"{BASE}/suggestions", params={"q": "contr"})
    assert response.status_code == 200
    assert response.json() == {"suggestions": ["contract review", "contract"]}

    response = await client.get(f"{BASE}/popular")
    assert response.status_code == 200
    assert response.json() == {"popularTerms": ["contract", "review"]}

    response = await client.get(f"{BASE}/statistics")
    assert response.status_code == 200
    stats = response.json()
    assert stats["totalSearches"] == 1
    assert stats["uniqueUsers"] == 1
    assert stats["avgResults"] == 12
    assert stats["lastSearch"] is not None


async def test_blank_suggestions_query_returns_empty_list(client: AsyncClient) -> None:
    response = await client.get(f"{BASE}/suggestions")
    assert response.status_code == 200
    assert response.json() == {"suggestions": []}


async def test_popular_limit_bounds(client: AsyncClient) -> None:
    assert (await client.get(f"{BASE}/popular", params={"limit": 21})).status_code == 422
    assert (await client.get(f"{BASE}/popular", params={"limit": 0})).status_code == 422
    assert (await client.get(f"{BASE}/popular", params={"limit": 20})).status_code == 200


async def test_log_rejects_negative_results_count(client: AsyncClient) -> None:
    response = await client.post(f"{BASE}/log", json={"query": "contract", "resultsCount": -1})
    assert response.status_code == 422


async def test_search_is_recorded(client: AsyncClient, recorder: AnalyticsRecorder, history_repo) -> None:
    await client.get(BASE, params={"q": "lease renewal", "entities": "documents", "userId": "u9"})
    await recorder.drain()
    assert [(q, u, n) for q, u, n, _ in history_repo.queries] == [("lease renewal", "u9", 4)]


async def test_request_id_is_echoed_or_generated(client: AsyncClient) -> None:
    response = await client.get(
        f"{BASE}/suggestions", params={"q": "ca"}, headers={"X-Request-ID": "abc-123"}
    )
    assert response.headers["x-request-id"] == "abc-123"
    response = await client.get(
        f"{BASE}/suggestions", params={"q": "ca"}, headers={"X-Request-ID": "bad id!"}
    )
    generated = response.headers["x-request-id"]
    assert generated != "bad id!"
    assert len(generated) == 32
