"""
mc_orchestrator.flow.orchestrator

The Mobile Connect flow state machine.

Responsibilities:
- Load or lazily create the session's `AuthConfig`.
- Delegate each step to the injected discovery/authorization backend.
- Turn whatever the backend returns (or raises) into a `FlowStatus`.
- Render JSON for script callers and page descriptors for browser redirects.
"""

from __future__ import annotations

from collections.abc import Callable

from mc_orchestrator.backends.contracts import AuthorizationBackend, DiscoveryBackend, FlowRequest
from mc_orchestrator.flow.errors import SERVER_ERROR, UNEXPECTED_STATUS, BackendError
from mc_orchestrator.flow.interpreter import classify
from mc_orchestrator.flow.renderer import (
    PageDescriptor,
    ResponseJson,
    json_error,
    json_outcome,
    log_discovery_result,
    log_failure,
    log_outcome,
    render_page,
)
from mc_orchestrator.flow.session_config import AuthConfig, SessionConfigStore
from mc_orchestrator.flow.status import (
    AuthorizationReady,
    AuthorizationRequired,
    Complete,
    DiscoveryRequired,
    Failed,
    FlowStatus,
    OperatorSelectionRequired,
    coerce_status,
)
from mc_orchestrator.observability.logging import get_logger

log = get_logger(__name__)

BackendCall = Callable[[AuthConfig, FlowRequest], FlowStatus]


class FlowOrchestrator:
    def __init__(
        self,
        *,
        config_store: SessionConfigStore,
        discovery: DiscoveryBackend,
        authorization: AuthorizationBackend,
    ) -> None:
        self._configs = config_store
        self._discovery = discovery
        self._authorization = authorization

    def start_discovery(self, request: FlowRequest) -> ResponseJson:
        """
        First call of a fresh login: either the operator is already known and
        authorization can start, or the user has to pick one.
        """

        status = self._call("start_discovery", self._discovery.begin_discovery, request)

        if isinstance(status, OperatorSelectionRequired):
            log.debug("operator_unknown", url=status.redirect_url)
            return json_outcome("operator_selection", url=status.redirect_url)
        if isinstance(status, (AuthorizationRequired, AuthorizationReady)):
            log.debug("operator_identified")
            log_discovery_result(status.discovery_result)
            return json_outcome("start_authorization")
        return self._json_failure(status)

    def discovery_redirect(self, request: FlowRequest) -> PageDescriptor:
        """
        Callback from the operator selection service; the chosen operator is
        encoded in the query string.
        """

        status = self._call(
            "discovery_redirect", self._discovery.complete_discovery_redirect, request
        )

        if isinstance(status, Failed):
            log_failure(status)
        elif isinstance(status, DiscoveryRequired):
            log.debug("operator_not_identified")
        elif isinstance(status, (AuthorizationRequired, AuthorizationReady)):
            log.debug("operator_identified")
            log_discovery_result(status.discovery_result)
        else:
            log.warning("unexpected_status", step="discovery_redirect", status=type(status).__name__)
        return render_page(status)

    def start_authorization(self, request: FlowRequest) -> ResponseJson:
        status = self._call(
            "start_authorization", self._authorization.begin_authorization, request
        )

        if isinstance(status, DiscoveryRequired):
            log.debug("operator_not_identified")
            return json_outcome("start_discovery")
        if isinstance(status, AuthorizationRequired):
            log.debug("authorization_url", url=status.redirect_url)
            log_discovery_result(status.discovery_result)
            return json_outcome("authorization", url=status.redirect_url)
        # AuthorizationReady carries no URL, so the script would have nowhere to go.
        return self._json_failure(status)

    def authorization_redirect(self, request: FlowRequest) -> PageDescriptor:
        """
        Callback from the operator after the user authenticated; the token
        exchange happens inside the backend call.
        """

        status = self._call(
            "authorization_redirect",
            self._authorization.complete_authorization_redirect,
            request,
        )

        if isinstance(status, Failed):
            log.debug("authorization_failed")
            log_failure(status)
        elif isinstance(status, DiscoveryRequired):
            log.debug("operator_not_identified")
        elif isinstance(status, Complete):
            log.info("authorization_complete")
            log_outcome(status)
        else:
            log.warning(
                "unexpected_status", step="authorization_redirect", status=type(status).__name__
            )
        return render_page(status)

    def _call(self, step: str, call: BackendCall, request: FlowRequest) -> FlowStatus:
        config = self._configs.get_or_create(request.session)
        try:
            raw = call(config, request)
        except BackendError as e:
            status: FlowStatus = Failed(
                error_code=e.error_code or SERVER_ERROR,
                error_description=e.message,
                cause=e.detail(),
            )
        except Exception as e:
            # Includes timeouts raised by the backend's transport.
            log.exception("backend_call_raised", step=step)
            status = Failed(error_code=SERVER_ERROR, error_description=str(e) or type(e).__name__)
        else:
            status = coerce_status(raw)

        log.info("flow_status", step=step, next_action=classify(status).value)
        return status

    def _json_failure(self, status: FlowStatus) -> ResponseJson:
        if not isinstance(status, Failed):
            status = Failed(
                error_code=UNEXPECTED_STATUS,
                error_description=f"Unexpected status {type(status).__name__}",
            )
        log_failure(status)
        return json_error(status.error_code, status.error_description)


# --- Module Notes -----------------------------------------------------------
# Exceptions raised outside the backend call (e.g. by the session substrate) are not
# caught here; the HTTP layer converts them into the generic error outputs.
