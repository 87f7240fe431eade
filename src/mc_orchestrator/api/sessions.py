"""
mc_orchestrator.api.sessions

Server-side browser sessions.

Responsibilities:
- Keep session data in process memory, keyed by an http-only cookie.
- Give each session its own mutex (used by `SessionConfigStore`).
- Expire sessions that have been idle longer than the configured max age.
"""

from __future__ import annotations

import secrets
import threading
import time
from collections.abc import Callable
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from mc_orchestrator.observability.logging import get_logger

log = get_logger(__name__)


class ServerSession:
    def __init__(self, session_id: str, *, now: float) -> None:
        self.session_id = session_id
        self.last_seen = now
        self._data: dict[str, Any] = {}
        self._mutex = threading.Lock()

    @property
    def mutex(self) -> threading.Lock:
        return self._mutex

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def __setitem__(self, key: str, value: Any) -> None:
        self._data[key] = value


class InMemorySessionStore:
    def __init__(
        self,
        *,
        max_age_seconds: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._max_age = max_age_seconds
        self._clock = clock
        self._sessions: dict[str, ServerSession] = {}
        # Guards the session table only; per-session data has its own mutex.
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def load(self, session_id: str | None) -> ServerSession:
        now = self._clock()
        with self._lock:
            self._evict_expired(now)
            session = self._sessions.get(session_id) if session_id else None
            if session is None:
                session = ServerSession(secrets.token_urlsafe(32), now=now)
                self._sessions[session.session_id] = session
            session.last_seen = now
            return session

    def _evict_expired(self, now: float) -> None:
        expired = [
            sid for sid, s in self._sessions.items() if now - s.last_seen > self._max_age
        ]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            log.debug("sessions_expired", count=len(expired))


class SessionMiddleware(BaseHTTPMiddleware):
    """
    Attaches a `ServerSession` to requests under `paths`. Other requests
    (health checks, static assets) pass through without creating a session.
    """

    def __init__(
        self,
        app,
        *,
        store: InMemorySessionStore,
        cookie_name: str,
        max_age_seconds: int,
        secure: bool,
        paths: tuple[str, ...],
    ) -> None:
        super().__init__(app)
        self._store = store
        self._cookie_name = cookie_name
        self._max_age = max_age_seconds
        self._secure = secure
        self._paths = paths

    async def dispatch(self, request: Request, call_next) -> Response:
        if not request.url.path.startswith(self._paths):
            return await call_next(request)

        session = self._store.load(request.cookies.get(self._cookie_name))
        request.state.session = session
        response: Response = await call_next(request)
        response.set_cookie(
            self._cookie_name,
            session.session_id,
            max_age=self._max_age,
            httponly=True,
            secure=self._secure,
            samesite="lax",
        )
        return response


# --- Module Notes -----------------------------------------------------------
# A multi-process deployment needs a shared store; only `load` and the
# `ServerSession` surface (get / item assignment / mutex) have to be reimplemented.
