"""Testes da rota de postback."""

from __future__ import annotations

import gzip
import json
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from starlette.requests import Request

from api.routes.postback import router as postback_route
from utils.errors import DeliveryExhausted, DeliveryFailed, MalformedPayload


def _build_request(*, body: bytes = b"", headers: dict[str, str] | None = None) -> Request:
    header_items = headers or {}
    raw_headers = [(k.lower().encode("utf-8"), v.encode("utf-8")) for k, v in header_items.items()]
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "POST",
        "path": "/postback/corr-1",
        "raw_path": b"/postback/corr-1",
        "query_string": b"",
        "headers": raw_headers,
    }
    sent = False

    async def _receive() -> dict[str, object]:
        nonlocal sent
        if sent:
            return {"type": "http.request", "body": b"", "more_body": False}
        sent = True
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, _receive)


@pytest.fixture
def processor(monkeypatch: pytest.MonkeyPatch) -> AsyncMock:
    fake = AsyncMock()
    monkeypatch.setattr(postback_route, "get_postback_processor", lambda: fake)
    return fake


def _payload(response) -> dict:
    return json.loads(response.body.decode("utf-8"))


@pytest.mark.asyncio
async def test_postback_success(processor: AsyncMock) -> None:
    processor.execute.return_value = SimpleNamespace(message="Postback received and processed")
    raw = gzip.compress(b'{"tasks": []}')
    request = _build_request(body=raw, headers={"Content-Encoding": "gzip"})

    response = await postback_route.receive_postback("corr-1", request)

    assert response.status_code == 200
    assert _payload(response) == {"success": True, "message": "Postback received and processed"}
    task_id, body, headers = processor.execute.await_args.args
    assert task_id == "corr-1"
    assert body == raw
    assert headers["content-encoding"] == "gzip"


@pytest.mark.asyncio
async def test_postback_empty_items_message(processor: AsyncMock) -> None:
    processor.execute.return_value = SimpleNamespace(
        message="Postback received but no items to process"
    )

    response = await postback_route.receive_postback("corr-1", _build_request(body=b"{}"))

    assert response.status_code == 200
    assert _payload(response)["message"] == "Postback received but no items to process"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        MalformedPayload("Missing required data: location_code or keyword"),
        DeliveryFailed("Webhook forwarding failed for chunk 2: 500", chunk_index=2),
        DeliveryExhausted("Too many requests, even after retries"),
    ],
)
async def test_postback_failures_are_500(processor: AsyncMock, error: Exception) -> None:
    processor.execute.side_effect = error

    response = await postback_route.receive_postback("corr-1", _build_request(body=b"{}"))

    assert response.status_code == 500
    assert _payload(response) == {"success": False, "error": str(error)}


@pytest.mark.asyncio
async def test_postback_unexpected_error_is_500(processor: AsyncMock) -> None:
    processor.execute.side_effect = KeyError("boom")

    response = await postback_route.receive_postback("corr-1", _build_request(body=b"{}"))

    assert response.status_code == 500
    assert _payload(response) == {"success": False, "error": "Internal server error"}
