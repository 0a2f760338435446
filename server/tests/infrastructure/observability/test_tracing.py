from __future__ import annotations

import pytest
from opentelemetry import baggage, context, trace

from adkrest.infrastructure.observability import tracing as tracing_module
from adkrest.infrastructure.observability.tracing import attach_baggage, configure_tracing

_ENDPOINT_VARS = ("OTEL_EXPORTER_OTLP_ENDPOINT", "OTEL_EXPORTER_OTLP_TRACES_ENDPOINT")


@pytest.fixture(autouse=True)
def _fresh_tracing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(tracing_module, "_TRACING_CONFIGURED", False)
    for name in (*_ENDPOINT_VARS, "OTEL_TRACES_EXPORTER", "OTEL_SERVICE_NAME"):
        monkeypatch.delenv(name, raising=False)


def test_configure_tracing_is_noop_without_endpoint(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(trace, "set_tracer_provider", _fail_if_called)

    configure_tracing(service_name="adkrest")

    assert tracing_module._TRACING_CONFIGURED is True


def test_configure_tracing_respects_exporter_none(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OTEL_TRACES_EXPORTER", "none")
    monkeypatch.setenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://collector:4318")
    monkeypatch.setattr(trace, "set_tracer_provider", _fail_if_called)

    configure_tracing(service_name="adkrest")

    assert tracing_module._TRACING_CONFIGURED is True


def test_configure_tracing_requires_endpoint_when_exporter_requested(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OTEL_TRACES_EXPORTER", "otlp")

    with pytest.raises(RuntimeError, match="OTLP endpoint missing"):
        configure_tracing(service_name="adkrest")

    assert tracing_module._TRACING_CONFIGURED is False


def test_configure_tracing_runs_once(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(tracing_module, "_TRACING_CONFIGURED", True)
    monkeypatch.setenv("OTEL_TRACES_EXPORTER", "otlp")

    configure_tracing(service_name="adkrest")


def test_attach_baggage_sets_entries_until_detached() -> None:
    token = attach_baggage({"request_id": "req-1"})
    try:
        assert baggage.get_baggage("request_id") == "req-1"
    finally:
        context.detach(token)

    assert baggage.get_baggage("request_id") is None


def _fail_if_called(*_args: object, **_kwargs: object) -> None:
    raise AssertionError("tracer provider must not be installed")
