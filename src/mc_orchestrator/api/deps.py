"""
mc_orchestrator.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for the orchestrator and the session.
- Adapt Starlette requests into framework-neutral `FlowRequest` values.
"""

from __future__ import annotations

from fastapi import Depends, Request

from mc_orchestrator.api.sessions import ServerSession
from mc_orchestrator.backends.contracts import FlowRequest
from mc_orchestrator.flow.orchestrator import FlowOrchestrator


def orchestrator_from_app(request: Request) -> FlowOrchestrator:
    # Built once in `mc_orchestrator.api.app.create_app`.
    return request.app.state.orchestrator  # type: ignore[attr-defined]


def session_dep(request: Request) -> ServerSession:
    # Attached by `SessionMiddleware` before routing.
    return request.state.session


def flow_request(
    request: Request,
    session: ServerSession = Depends(session_dep),
) -> FlowRequest:
    return FlowRequest(
        session=session,
        query_params=dict(request.query_params),
        headers=dict(request.headers),
        cookies=dict(request.cookies),
        client_host=request.client.host if request.client else None,
    )
