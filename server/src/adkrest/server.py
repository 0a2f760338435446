"""Entrypoint for running the session API under uvicorn."""

from __future__ import annotations

import argparse
import logging
from collections.abc import AsyncIterator, Callable, Sequence
from contextlib import asynccontextmanager

from fastapi import FastAPI

from adkrest.infrastructure.http.middleware import request_logging_middleware
from adkrest.infrastructure.http.routes import SessionRouteDeps, add_session_routes
from adkrest.infrastructure.observability.logging import configure_logging
from adkrest.infrastructure.observability.tracing import configure_tracing
from adkrest.runtime.bootstrap import build_route_deps
from adkrest.runtime.settings import Settings

logger = logging.getLogger("adkrest")

_EXTRA_LOGGERS = {
    "adkrest.http": {"level": "INFO"},
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    del app
    logger.info("adkrest starting up")
    yield
    logger.info("adkrest shutting down")


def create_app(dependency_provider: Callable[[], SessionRouteDeps]) -> FastAPI:
    app = FastAPI(title="ADK REST Sessions", version="0.1.0", lifespan=lifespan)
    app.middleware("http")(request_logging_middleware)
    add_session_routes(app, dependency_provider)

    @app.get("/healthz", tags=["health"], description="Session service health check.")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="ADK REST session service.")
    parser.add_argument("--host", default=None, help="Override ADKREST_HOST.")
    parser.add_argument("--port", type=int, default=None, help="Override ADKREST_PORT.")
    args = parser.parse_args(list(argv) if argv is not None else None)

    settings = Settings.load()
    configure_logging(
        root_default=settings.observability.log_level,
        extra_loggers=_EXTRA_LOGGERS,
        json_output=settings.observability.log_json,
    )
    configure_tracing(service_name="adkrest")

    deps = build_route_deps(settings)
    app = create_app(lambda: deps)

    import uvicorn

    host = args.host or settings.host
    port = args.port or settings.port
    logger.info("starting uvicorn on %s:%s", host, port)
    uvicorn.run(app, host=host, port=port, log_config=None)


if __name__ == "__main__":  # pragma: no cover
    main()
