from __future__ import annotations

from adkrest.runtime.settings import Settings


def test_settings_loads_from_environment(monkeypatch) -> None:
    """Settings loads from environment variables."""
    monkeypatch.setenv("ADKREST_PORT", "9100")
    monkeypatch.setenv("ADKREST_SESSION_STORE", "stores.memory:create_store")
    monkeypatch.setenv("LOG_JSON", "true")

    settings = Settings.load()

    assert settings.port == 9100
    assert settings.session_store == "stores.memory:create_store"
    assert settings.observability.log_json is True


def test_settings_defaults(monkeypatch) -> None:
    for name in ("ADKREST_HOST", "ADKREST_PORT", "ADKREST_SESSION_STORE", "LOG_LEVEL", "LOG_JSON"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.host == "127.0.0.1"
    assert settings.port == 8000
    assert settings.session_store is None
    assert settings.observability.log_level == "INFO"
