"""
mc_orchestrator.flow.session_config

Per-session Mobile Connect configuration.

Responsibilities:
- Define `AuthConfig` and the session handle contract it is stored behind.
- Create the config exactly once per session (double-checked, session-scoped lock).
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Protocol

from mc_orchestrator.settings import Settings

SESSION_KEY = "mobileconnect:auth_config"


class SessionMutex(Protocol):
    def __enter__(self) -> Any: ...

    def __exit__(self, *exc_info: Any) -> Any: ...


class SessionHandle(Protocol):
    """
    What the flow needs from a browser session: one keyed slot and a mutex
    scoped to this session only.
    """

    @property
    def mutex(self) -> SessionMutex: ...

    def get(self, key: str, default: Any = None) -> Any: ...

    def __setitem__(self, key: str, value: Any) -> None: ...


@dataclass(frozen=True, slots=True)
class AuthConfig:
    client_id: str
    client_secret: str = field(repr=False)
    application_url: str
    discovery_url: str
    discovery_redirect_url: str
    authorization_state: str
    authorization_nonce: str


def generate_unique_string(prefix: str) -> str:
    return f"{prefix}{uuid.uuid4().hex}"


class SessionConfigStore:
    def __init__(self, *, settings: Settings, key: str = SESSION_KEY) -> None:
        self._settings = settings
        self._key = key

    def get_or_create(self, session: SessionHandle) -> AuthConfig:
        config = session.get(self._key)
        if config is not None:
            return config

        with session.mutex:
            # Another request on the same session may have won the race.
            config = session.get(self._key)
            if config is None:
                config = self._new_config()
                session[self._key] = config
        return config

    def _new_config(self) -> AuthConfig:
        s = self._settings
        return AuthConfig(
            client_id=s.client_id,
            client_secret=s.client_secret,
            application_url=s.application_url,
            discovery_url=s.discovery_url,
            discovery_redirect_url=s.discovery_redirect_url,
            authorization_state=generate_unique_string("state_"),
            authorization_nonce=generate_unique_string("nonce_"),
        )


# --- Module Notes -----------------------------------------------------------
# The mutex is held only around check-and-create; backend calls happen after the
# config is returned, so a slow operator never blocks other requests on the session.
