"""
tests.conftest

Shared fixtures for flow and API tests.

Responsibilities:
- Provide a scripted Auth Backend double that records every call.
- Provide settings, sessions and flow requests wired for tests.
"""

from __future__ import annotations

from typing import Any

import pytest

from mc_orchestrator.api.sessions import ServerSession
from mc_orchestrator.backends.contracts import FlowRequest
from mc_orchestrator.flow.orchestrator import FlowOrchestrator
from mc_orchestrator.flow.session_config import AuthConfig, SessionConfigStore
from mc_orchestrator.settings import Settings


class ScriptedBackend:
    """
    Implements both backend contracts. Every call returns `outcome`, or raises it
    when it is an exception.
    """

    def __init__(self, outcome: Any = None) -> None:
        self.outcome = outcome
        self.calls: list[tuple[str, AuthConfig, FlowRequest]] = []

    def _respond(self, step: str, config: AuthConfig, request: FlowRequest) -> Any:
        self.calls.append((step, config, request))
        if isinstance(self.outcome, BaseException):
            raise self.outcome
        return self.outcome

    def begin_discovery(self, config: AuthConfig, request: FlowRequest) -> Any:
        return self._respond("begin_discovery", config, request)

    def complete_discovery_redirect(self, config: AuthConfig, request: FlowRequest) -> Any:
        return self._respond("complete_discovery_redirect", config, request)

    def begin_authorization(self, config: AuthConfig, request: FlowRequest) -> Any:
        return self._respond("begin_authorization", config, request)

    def complete_authorization_redirect(self, config: AuthConfig, request: FlowRequest) -> Any:
        return self._respond("complete_authorization_redirect", config, request)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        env="test",
        client_id="test-client",
        client_secret="test-secret",
        discovery_url="https://discovery.example/v2/discovery",
    )


@pytest.fixture
def config_store(settings: Settings) -> SessionConfigStore:
    return SessionConfigStore(settings=settings)


@pytest.fixture
def session() -> ServerSession:
    return ServerSession("session-1", now=0.0)


@pytest.fixture
def flow(session: ServerSession) -> FlowRequest:
    return FlowRequest(session=session, query_params={"mcc_mnc": "901_01"})


@pytest.fixture
def backend() -> ScriptedBackend:
    return ScriptedBackend()


@pytest.fixture
def orchestrator(config_store: SessionConfigStore, backend: ScriptedBackend) -> FlowOrchestrator:
    return FlowOrchestrator(config_store=config_store, discovery=backend, authorization=backend)
