"""Runtime wiring for the session service."""

from __future__ import annotations

import importlib
import logging

from adkrest.application.ports.session_store import SessionStorePort
from adkrest.infrastructure.http.routes import SessionRouteDeps
from adkrest.runtime.settings import Settings

logger = logging.getLogger("adkrest.runtime")


def load_session_store(import_path: str) -> SessionStorePort:
    """Instantiate the store named by ``module:factory``."""
    module_name, sep, attribute = import_path.partition(":")
    if not sep or not module_name or not attribute:
        raise RuntimeError(f"session store must be given as 'module:factory', got {import_path!r}")

    module = importlib.import_module(module_name)
    try:
        factory = getattr(module, attribute)
    except AttributeError as exc:
        raise RuntimeError(f"module {module_name!r} has no attribute {attribute!r}") from exc
    if not callable(factory):
        raise RuntimeError(f"session store factory {import_path!r} is not callable")

    store: SessionStorePort = factory()
    logger.info("loaded session store", extra={"data": {"factory": import_path}})
    return store


def build_route_deps(settings: Settings) -> SessionRouteDeps:
    if not settings.session_store:
        raise RuntimeError("ADKREST_SESSION_STORE must name a session store factory")
    return SessionRouteDeps(store=load_session_store(settings.session_store))


__all__ = ["build_route_deps", "load_session_store"]
