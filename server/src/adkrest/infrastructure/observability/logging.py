"""Logging setup for the session service (formatter, filters, dictConfig builder)."""

from __future__ import annotations

import json
import logging
import os
import time
import traceback
from collections.abc import Mapping
from dataclasses import asdict, is_dataclass
from logging.config import dictConfig
from typing import Any

from opentelemetry import baggage, trace

_PACKAGE_LOGGER_ROOT = "adkrest"


def _level(env_var: str, default: str) -> str:
    return os.getenv(env_var, default).upper()


def _in_managed_runtime() -> bool:
    # Cloud Run and Kubernetes ingest JSON lines as structured payloads.
    return bool(os.getenv("K_SERVICE") or os.getenv("KUBERNETES_SERVICE_HOST"))


def _structured_payload(record: logging.LogRecord) -> dict[str, Any]:
    record_dict = record.__dict__
    payload: dict[str, Any] = {
        "message": record.getMessage(),
        "severity": record.levelname,
        "logger": record.name,
        "timestamp": (
            f"{time.strftime('%Y-%m-%dT%H:%M:%S', time.gmtime(record.created))}"
            f".{int(record.msecs):03d}Z"
        ),
    }
    if record_dict.get("data"):
        payload["data"] = _sanitize_for_json(record_dict["data"])
    if record.exc_info:
        payload["exception"] = "".join(traceback.format_exception(*record.exc_info)).rstrip("\n")

    json_fields = record_dict.get("json_fields")
    if isinstance(json_fields, Mapping):
        for key, value in _sanitize_for_json(json_fields).items():
            if key in payload:
                payload.setdefault("json_fields", {})[key] = value
            else:
                payload[key] = value
    return payload


class ExtrasFormatter(logging.Formatter):
    """Append structured ``data`` payloads, or emit JSON lines when asked to."""

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        *,
        json_output: bool = False,
    ) -> None:
        super().__init__(fmt, datefmt)
        self._json_output = json_output

    def format(self, record: logging.LogRecord) -> str:
        if self._json_output or _in_managed_runtime():
            return json.dumps(_structured_payload(record), sort_keys=True, separators=(",", ":"))

        formatted = super().format(record)
        record_data = record.__dict__.get("data")
        if record_data:
            try:
                encoded = json.dumps(record_data, sort_keys=True, separators=(",", ":"))
            except TypeError:
                encoded = json.dumps(_sanitize_for_json(record_data), sort_keys=True, separators=(",", ":"))
            return f"{formatted} | data={encoded}"
        return formatted


class OtelContextLogFilter(logging.Filter):
    """Copy the active trace/span ids and baggage into ``json_fields``."""

    def filter(self, record: logging.LogRecord) -> bool:
        otel: dict[str, Any] = {}
        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            otel["trace_id"] = f"{span_context.trace_id:032x}"
            otel["span_id"] = f"{span_context.span_id:016x}"

        baggage_values = baggage.get_all()
        if baggage_values:
            otel["baggage"] = {key: str(value) for key, value in baggage_values.items()}

        if not otel:
            return True

        record_dict = record.__dict__
        existing = record_dict.get("json_fields")
        json_fields = dict(existing) if isinstance(existing, Mapping) else {}
        json_fields["otel"] = otel
        record_dict["json_fields"] = json_fields
        return True


def build_log_config(
    *,
    root_level_env: str = "LOG_LEVEL",
    root_default: str = "INFO",
    extra_loggers: Mapping[str, dict[str, Any]] | None = None,
    json_output: bool = False,
) -> dict[str, Any]:
    """Return a dictConfig-compatible logging configuration."""

    loggers: dict[str, dict[str, Any]] = {
        "uvicorn": {"level": _level("UVICORN_LOG_LEVEL", "INFO"), "handlers": ["console"], "propagate": False},
        "uvicorn.error": {
            "level": _level("UVICORN_LOG_LEVEL", "INFO"),
            "handlers": ["console"],
            "propagate": False,
        },
        "uvicorn.access": {
            "level": _level("UVICORN_ACCESS_LOG_LEVEL", "WARNING"),
            "handlers": ["console"],
            "propagate": False,
        },
        "httpx": {"level": _level("HTTPX_LOG_LEVEL", "WARNING"), "handlers": ["console"], "propagate": False},
    }
    loggers.update(extra_loggers or {})
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {
                "()": ExtrasFormatter,
                "fmt": "%(asctime)s %(levelname)s %(name)s: %(message)s",
                "datefmt": "%Y-%m-%dT%H:%M:%S",
                "json_output": json_output,
            }
        },
        "filters": {"otel_context": {"()": OtelContextLogFilter}},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "console",
                "stream": "ext://sys.stdout",
                "filters": ["otel_context"],
            }
        },
        "root": {"level": _level(root_level_env, root_default), "handlers": ["console"]},
        "loggers": loggers,
    }


def configure_logging(
    *,
    root_level_env: str = "LOG_LEVEL",
    root_default: str = "INFO",
    extra_loggers: Mapping[str, dict[str, Any]] | None = None,
    json_output: bool = False,
) -> None:
    """Apply the service logging config."""
    dictConfig(
        build_log_config(
            root_level_env=root_level_env,
            root_default=root_default,
            extra_loggers=extra_loggers,
            json_output=json_output,
        )
    )
    logging.getLogger(_PACKAGE_LOGGER_ROOT).debug(
        "configured logging",
        extra={"data": {"json_output": json_output}},
    )


def _sanitize_for_json(value: Any, depth: int = 10) -> Any:
    """Return a JSON-serializable copy; fall back to ``str`` for unknowns."""

    if depth <= 0:
        return "<depth_exceeded>"
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, (bytes, bytearray)):
        return f"<bytes len={len(value)}>"
    if is_dataclass(value) and not isinstance(value, type):
        return _sanitize_for_json(asdict(value), depth - 1)
    if isinstance(value, Mapping):
        return {str(key): _sanitize_for_json(item, depth - 1) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_sanitize_for_json(item, depth - 1) for item in value]
    return str(value)


__all__ = ["ExtrasFormatter", "OtelContextLogFilter", "build_log_config", "configure_logging"]
