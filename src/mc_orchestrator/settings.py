"""
mc_orchestrator.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (client secret).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    - Strict env-driven configuration (prefix `MC_`)
    - Defaults safe for local dev
    - Single settings object injected across layers
    """

    model_config = SettingsConfigDict(env_prefix="MC_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "mc-orchestrator"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Registered application credentials
    client_id: str = "xxxxx"
    client_secret: str = Field(default="xxxxx", repr=False)
    application_url: str = "http://localhost:8080/mobile_connect"

    # Discovery endpoint and the callback it redirects back to after operator selection.
    discovery_url: str = "xxxxx"
    discovery_redirect_url: str = "http://localhost:8080/mobileconnect/discovery_redirect"

    # Sessions
    session_cookie_name: str = "mc_session"
    session_max_age_seconds: int = Field(default=4 * 60 * 60, ge=60)
    session_cookie_secure: bool = False


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Client credentials are copied into each session's AuthConfig on first use; a
# settings change only affects sessions created afterwards.
