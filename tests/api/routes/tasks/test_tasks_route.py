"""Testes da rota de submissão de tarefas."""

from __future__ import annotations

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from starlette.requests import Request

from api.routes.tasks import router as tasks_route
from app.protocols.models import SubmissionResult
from utils.errors import InvalidRequest, RateLimited, RedisConnectionError, Unauthorized


def _build_request(
    *,
    body: bytes = b"",
    headers: dict[str, str] | None = None,
    client: tuple[str, int] | None = ("10.0.0.5", 1234),
) -> Request:
    header_items = headers or {}
    raw_headers = [(k.lower().encode("utf-8"), v.encode("utf-8")) for k, v in header_items.items()]
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "POST",
        "path": "/tasks",
        "raw_path": b"/tasks",
        "query_string": b"",
        "headers": raw_headers,
        "client": client,
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
def submitter(monkeypatch: pytest.MonkeyPatch) -> AsyncMock:
    fake = AsyncMock()
    monkeypatch.setattr(tasks_route, "get_task_submitter", lambda: fake)
    monkeypatch.setattr(
        tasks_route,
        "get_relay_settings",
        lambda: SimpleNamespace(credential_header="authentication"),
    )
    return fake


def _payload(response) -> dict:
    return json.loads(response.body.decode("utf-8"))


@pytest.mark.asyncio
async def test_submit_success(submitter: AsyncMock) -> None:
    submitter.submit.return_value = SubmissionResult(task_id="task-1", correlation_id="corr-1")
    request = _build_request(
        body=b'[{"keyword": "k"}]',
        headers={"Authentication": "tok", "X-Forwarded-For": "203.0.113.9, 10.0.0.1"},
    )

    response = await tasks_route.submit_task(request)

    assert response.status_code == 200
    assert _payload(response) == {"success": True, "taskId": "task-1", "correlationId": "corr-1"}
    submitter.submit.assert_awaited_once_with([{"keyword": "k"}], "tok", "203.0.113.9")


@pytest.mark.asyncio
async def test_submit_uses_peer_address_and_bearer(submitter: AsyncMock) -> None:
    submitter.submit.return_value = SubmissionResult(task_id="t", correlation_id="c")
    request = _build_request(body=b"[]", headers={"Authorization": "Bearer tok"})

    await tasks_route.submit_task(request)

    submitter.submit.assert_awaited_once_with([], "tok", "10.0.0.5")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("error", "status_code"),
    [
        (Unauthorized("Unauthorized: Invalid or missing token"), 401),
        (RateLimited("Rate limit exceeded. Please try again later."), 429),
        (InvalidRequest("body data not correct"), 400),
    ],
)
async def test_submit_maps_relay_errors(
    submitter: AsyncMock,
    error: Exception,
    status_code: int,
) -> None:
    submitter.submit.side_effect = error

    response = await tasks_route.submit_task(_build_request(body=b"{}"))

    assert response.status_code == status_code
    assert _payload(response) == {"success": False, "error": str(error)}


@pytest.mark.asyncio
async def test_submit_store_failure_is_500(submitter: AsyncMock) -> None:
    submitter.submit.side_effect = RedisConnectionError("down")

    response = await tasks_route.submit_task(_build_request(body=b"[]"))

    assert response.status_code == 500
    assert _payload(response)["success"] is False


@pytest.mark.asyncio
async def test_invalid_json_is_passed_as_none(submitter: AsyncMock) -> None:
    submitter.submit.side_effect = InvalidRequest("body data not correct")

    response = await tasks_route.submit_task(_build_request(body=b"{oops"))

    assert response.status_code == 400
    assert submitter.submit.await_args.args[0] is None


@pytest.mark.asyncio
async def test_submit_unexpected_error_is_500(submitter: AsyncMock) -> None:
    submitter.submit.side_effect = KeyError("boom")

    response = await tasks_route.submit_task(_build_request(body=b"[]"))

    assert response.status_code == 500
    assert _payload(response) == {"success": False, "error": "Internal server error"}
