from __future__ import annotations

import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from adkrest.infrastructure.http.middleware import REQUEST_ID_HEADER, request_logging_middleware


@pytest.fixture
def http_records(caplog: pytest.LogCaptureFixture):
    target_logger = logging.getLogger("adkrest.http")
    original_propagate = target_logger.propagate
    target_logger.propagate = False
    target_logger.addHandler(caplog.handler)
    target_logger.setLevel(logging.INFO)
    caplog.set_level(logging.INFO)
    try:
        yield caplog
    finally:
        target_logger.removeHandler(caplog.handler)
        target_logger.propagate = original_propagate


def _app() -> FastAPI:
    app = FastAPI()
    app.middleware("http")(request_logging_middleware)

    @app.patch("/apps/{app_name}/users/{user_id}/sessions/{session_id}")
    async def patch() -> dict[str, bool]:
        return {"ok": True}

    return app


def test_request_logging_middleware_logs_request_and_truncated_body(http_records) -> None:
    client = TestClient(_app())
    body = "y" * 2000

    response = client.patch(
        "/apps/a/users/u/sessions/s",
        params=[("q", "1"), ("q", "2")],
        content=body,
        headers={REQUEST_ID_HEADER: "req-123"},
    )

    assert response.status_code == 200
    assert response.headers[REQUEST_ID_HEADER] == "req-123"

    records = [record for record in http_records.records if record.name == "adkrest.http"]
    received = next(record for record in records if record.msg == "request_received")
    completed = next(record for record in records if record.msg == "request_completed")

    assert received.data["request_id"] == "req-123"
    assert received.data["method"] == "PATCH"
    assert received.data["path"] == "/apps/a/users/u/sessions/s"
    assert received.data["query_params"] == [("q", "1"), ("q", "2")]
    assert received.data["request_line"] == "PATCH /apps/a/users/u/sessions/s?q=1&q=2"
    assert received.data["body"].startswith("y" * 1024)
    assert received.data["body"].endswith("... (truncated)")

    assert completed.data["status_code"] == 200
    assert completed.data["request_id"] == "req-123"
    assert "body" not in completed.data


def test_request_logging_middleware_generates_request_id(http_records) -> None:
    client = TestClient(_app())

    response = client.patch("/apps/a/users/u/sessions/s", json={})

    generated = response.headers[REQUEST_ID_HEADER]
    assert len(generated) == 32
    completed = next(record for record in http_records.records if record.msg == "request_completed")
    assert completed.data["request_id"] == generated


def test_request_logging_middleware_logs_failed_request(http_records) -> None:
    app = FastAPI()
    app.middleware("http")(request_logging_middleware)

    @app.get("/apps/{app_name}/users/{user_id}/sessions/{session_id}")
    async def explode() -> dict[str, bool]:
        raise RuntimeError("boom")

    client = TestClient(app)

    with pytest.raises(RuntimeError, match="boom"):
        client.get("/apps/a/users/u/sessions/s", headers={REQUEST_ID_HEADER: "req-err"})

    failed = next(record for record in http_records.records if record.msg == "request_failed")
    assert failed.levelno == logging.ERROR
    assert failed.exc_info is not None
    assert failed.data["method"] == "GET"
    assert failed.data["path"] == "/apps/a/users/u/sessions/s"
    assert failed.data["request_id"] == "req-err"
    assert not any(record.msg == "request_completed" for record in http_records.records)
