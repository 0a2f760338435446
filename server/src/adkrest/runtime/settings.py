"""Configuration for the session service runtime."""

from __future__ import annotations

import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from adkrest.config.observability import ObservabilitySettings


class Settings(BaseSettings):
    """Session service configuration resolved from the environment."""

    model_config = SettingsConfigDict(
        env_prefix="",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # --- Server ---
    host: str = Field(default="127.0.0.1", alias="ADKREST_HOST")
    port: int = Field(default=8000, alias="ADKREST_PORT")

    # --- Store ---
    # "package.module:factory"; the factory takes no arguments and returns a SessionStorePort.
    session_store: str | None = Field(default=None, alias="ADKREST_SESSION_STORE")

    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def load(cls) -> Settings:
        instance = cls()
        logger = logging.getLogger("adkrest.settings")
        logger.info("session service settings loaded: %r", instance)
        return instance


__all__ = ["Settings"]
