"""
mc_orchestrator.backends.unconfigured

Backend used when the application is started without operator clients.

Responsibilities:
- Satisfy both backend contracts.
- Report every call as a failure so the flow renders an error instead of crashing.
"""

from __future__ import annotations

from mc_orchestrator.backends.contracts import FlowRequest
from mc_orchestrator.flow.errors import AuthorizationError, DiscoveryError
from mc_orchestrator.flow.session_config import AuthConfig
from mc_orchestrator.flow.status import FlowStatus

NOT_CONFIGURED = "backend_not_configured"


class UnconfiguredBackend:
    def begin_discovery(self, config: AuthConfig, request: FlowRequest) -> FlowStatus:
        raise DiscoveryError(
            "No discovery backend is configured", error_code=NOT_CONFIGURED, uri=config.discovery_url
        )

    def complete_discovery_redirect(self, config: AuthConfig, request: FlowRequest) -> FlowStatus:
        raise DiscoveryError(
            "No discovery backend is configured", error_code=NOT_CONFIGURED, uri=config.discovery_url
        )

    def begin_authorization(self, config: AuthConfig, request: FlowRequest) -> FlowStatus:
        raise AuthorizationError("No authorization backend is configured", error_code=NOT_CONFIGURED)

    def complete_authorization_redirect(
        self, config: AuthConfig, request: FlowRequest
    ) -> FlowStatus:
        raise AuthorizationError("No authorization backend is configured", error_code=NOT_CONFIGURED)
