"""
tests.test_sessions

In-memory session substrate.

Responsibilities:
- Verify idle sessions expire and take their AuthConfig with them.
- Verify active sessions are kept alive by use.
"""

from __future__ import annotations

from mc_orchestrator.api.sessions import InMemorySessionStore
from mc_orchestrator.flow.session_config import SESSION_KEY, SessionConfigStore


class _Clock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_known_session_id_returns_the_same_session() -> None:
    store = InMemorySessionStore(max_age_seconds=60, clock=_Clock())

    first = store.load(None)

    assert store.load(first.session_id) is first
    assert len(store) == 1


def test_unknown_session_id_gets_a_fresh_id() -> None:
    store = InMemorySessionStore(max_age_seconds=60, clock=_Clock())

    session = store.load("forged-id")

    assert session.session_id != "forged-id"


def test_idle_session_expires_with_its_config(config_store: SessionConfigStore) -> None:
    clock = _Clock()
    store = InMemorySessionStore(max_age_seconds=60, clock=clock)
    old = store.load(None)
    config_store.get_or_create(old)
    assert old.get(SESSION_KEY) is not None

    clock.now += 61
    fresh = store.load(old.session_id)

    assert fresh is not old
    assert fresh.session_id != old.session_id
    assert fresh.get(SESSION_KEY) is None
    assert len(store) == 1


def test_recent_use_keeps_a_session_alive() -> None:
    clock = _Clock()
    store = InMemorySessionStore(max_age_seconds=60, clock=clock)
    session = store.load(None)

    for _ in range(3):
        clock.now += 45
        assert store.load(session.session_id) is session


def test_expiry_only_touches_idle_sessions() -> None:
    clock = _Clock()
    store = InMemorySessionStore(max_age_seconds=60, clock=clock)
    idle = store.load(None)
    clock.now += 30
    active = store.load(None)

    clock.now += 40
    store.load(active.session_id)

    assert len(store) == 1
    assert store.load(active.session_id) is active
    assert store.load(idle.session_id) is not idle
