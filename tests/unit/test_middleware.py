"""Raw ASGI middleware: request ID binding and request timeout."""

import asyncio
import json
import logging

from app.middleware.request_id import RequestIDMiddleware, sanitize_request_id
from app.middleware.timeout import TimeoutMiddleware
from app.shared.context import get_request_id
from app.shared.telemetry.logging import RequestIDFilter


def _scope(headers=None) -> dict:
    return {"type": "http", "method": "GET", "path": "/api/v1/search", "headers": headers or []}


async def _receive() -> dict:
    return {"type": "http.request", "body": b"", "more_body": False}


def test_sanitize_request_id() -> None:
    assert sanitize_request_id("abc_DEF-123") == "abc_DEF-123"
    assert sanitize_request_id("  padded  ") == "padded"
    assert len(sanitize_request_id("x" * 65)) == 32
    assert len(sanitize_request_id(None)) == 32
    assert sanitize_request_id("inject\r\nX-Evil: 1") != "inject\r\nX-Evil: 1"


async def test_request_id_is_bound_for_the_request_only() -> None:
    seen: dict = {}
    sent: list[dict] = []

    async def inner(scope, receive, send):
        seen["context"] = get_request_id()
        seen["state"] = scope["state"]["request_id"]
        await send({"type": "http.response.start", "status": 200, "headers": [(b"x-request-id", b"old")]})
        await send({"type": "http.response.body", "body": b"{}"})

    async def send(message):
        sent.append(message)

    middleware = RequestIDMiddleware(inner)
    await middleware(_scope([(b"x-request-id", b"req-1")]), _receive, send)

    assert seen == {"context": "req-1", "state": "req-1"}
    assert sent[0]["headers"] == [(b"x-request-id", b"req-1")]
    assert get_request_id() is None


def test_log_records_carry_request_id() -> None:
    record = logging.LogRecord("app", logging.INFO, __file__, 1, "msg", None, None)
    assert RequestIDFilter().filter(record) is True
    assert record.request_id == "-"


async def test_timeout_returns_504_before_response_starts() -> None:
    sent: list[dict] = []

    async def slow(scope, receive, send):
        await asyncio.sleep(1)

    async def send(message):
        sent.append(message)

    scope = _scope()
    scope["state"] = {"request_id": "req-2"}
    await TimeoutMiddleware(slow, timeout_seconds=0.01)(scope, _receive, send)

    assert sent[0]["status"] == 504
    body = json.loads(sent[1]["body"])
    assert body["error"] == "GATEWAY_TIMEOUT"
    assert body["details"]["request_id"] == "req-2"


async def test_timeout_after_response_started_sends_nothing_more() -> None:
    sent: list[dict] = []

    async def streaming(scope, receive, send):
        await send({"type": "http.response.start", "status": 200, "headers": []})
        await asyncio.sleep(1)

    async def send(message):
        sent.append(message)

    await TimeoutMiddleware(streaming, timeout_seconds=0.01)(_scope(), _receive, send)
    assert [m["type"] for m in sent] == ["http.response.start"]
