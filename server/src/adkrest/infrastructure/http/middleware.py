from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any
from uuid import uuid4

from fastapi import Request
from opentelemetry import context

from adkrest.infrastructure.observability.tracing import attach_baggage

logger = logging.getLogger("adkrest.http")

REQUEST_ID_HEADER = "x-request-id"


async def request_logging_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Any]],
) -> Any:
    request_id = request.headers.get(REQUEST_ID_HEADER, uuid4().hex)
    fields: dict[str, Any] = {
        "request_id": request_id,
        "request_line": _format_request_line(request),
        "method": request.method,
        "path": request.url.path,
        "query_params": list(request.query_params.multi_items()),
    }

    body_bytes = await request.body()
    logger.info("request_received", extra={"data": {**fields, "body": _truncate_body(body_bytes)}})

    token = attach_baggage({"request_id": request_id})
    start = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        logger.exception("request_failed", extra={"data": fields})
        raise
    finally:
        context.detach(token)

    response.headers[REQUEST_ID_HEADER] = request_id
    logger.info(
        "request_completed",
        extra={
            "data": {
                **fields,
                "status_code": response.status_code,
                "duration_ms": round((time.perf_counter() - start) * 1000, 2),
            },
        },
    )
    return response


def _format_request_line(request: Request) -> str:
    query = request.url.query
    if query:
        return f"{request.method} {request.url.path}?{query}"
    return f"{request.method} {request.url.path}"


def _truncate_body(body: bytes, limit: int = 1024) -> str:
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError:
        return f"<binary data: {len(body)} bytes>"
    if len(text) <= limit:
        return text
    return text[:limit] + "... (truncated)"
