"""
mc_orchestrator.backends.contracts

Contracts between the orchestrator and the Auth Backend.

Responsibilities:
- Describe an inbound flow event independently of the HTTP framework.
- Declare the discovery and authorization backend interfaces.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol

from mc_orchestrator.flow.session_config import AuthConfig, SessionHandle
from mc_orchestrator.flow.status import FlowStatus


@dataclass(frozen=True, slots=True)
class FlowRequest:
    """
    Framework-neutral view of the request that triggered a flow step.
    Backends may keep discovery state in `session` between steps.
    """

    session: SessionHandle
    query_params: Mapping[str, str] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)
    cookies: Mapping[str, str] = field(default_factory=dict)
    client_host: str | None = None


class DiscoveryBackend(Protocol):
    def begin_discovery(self, config: AuthConfig, request: FlowRequest) -> FlowStatus:
        """Identify the user's operator, or ask for operator selection."""
        ...

    def complete_discovery_redirect(self, config: AuthConfig, request: FlowRequest) -> FlowStatus:
        """Resolve the operator chosen on the operator selection page."""
        ...


class AuthorizationBackend(Protocol):
    def begin_authorization(self, config: AuthConfig, request: FlowRequest) -> FlowStatus:
        """Build the operator authorization URL for the identified operator."""
        ...

    def complete_authorization_redirect(
        self, config: AuthConfig, request: FlowRequest
    ) -> FlowStatus:
        """Validate the operator callback and exchange the code for tokens."""
        ...


# --- Module Notes -----------------------------------------------------------
# Calls are synchronous and may block; timeouts/retries are the backend's concern and
# surface here as `Failed` statuses or `DiscoveryError`/`AuthorizationError`.
