"""
mc_orchestrator.api.routers.mobile_connect

Mobile Connect endpoints.

Responsibilities:
- Expose the four flow entry points plus the error page.
- Return JSON to the in-page script and HTML pages to browser redirects.
- Act as the last-resort boundary: no exception leaves these handlers.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from fastapi.templating import Jinja2Templates
from starlette.responses import Response

from mc_orchestrator.api.deps import flow_request, orchestrator_from_app
from mc_orchestrator.backends.contracts import FlowRequest
from mc_orchestrator.flow.errors import INTERNAL_ERROR
from mc_orchestrator.flow.orchestrator import FlowOrchestrator
from mc_orchestrator.flow.renderer import PageDescriptor, ResponseJson, error_page, json_error
from mc_orchestrator.observability.logging import get_logger

log = get_logger(__name__)

router = APIRouter(tags=["mobile-connect"])
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

PAGE_HEADER = "x-mobileconnect-page"
INTERNAL_ERROR_DESCRIPTION = "An unexpected error occurred"
_METHODS = ["GET", "POST"]


@router.api_route("/mobileconnect/start_discovery", methods=_METHODS)
def start_discovery(
    flow: FlowRequest = Depends(flow_request),
    orchestrator: FlowOrchestrator = Depends(orchestrator_from_app),
) -> JSONResponse:
    return _json(lambda: orchestrator.start_discovery(flow))


@router.api_route("/mobileconnect/discovery_redirect", methods=_METHODS)
def discovery_redirect(
    request: Request,
    flow: FlowRequest = Depends(flow_request),
    orchestrator: FlowOrchestrator = Depends(orchestrator_from_app),
) -> Response:
    return _page(request, lambda: orchestrator.discovery_redirect(flow))


@router.api_route("/mobileconnect/start_authorization", methods=_METHODS)
def start_authorization(
    flow: FlowRequest = Depends(flow_request),
    orchestrator: FlowOrchestrator = Depends(orchestrator_from_app),
) -> JSONResponse:
    return _json(lambda: orchestrator.start_authorization(flow))


@router.api_route("/mobile_connect", methods=_METHODS)
def authorization_redirect(
    request: Request,
    flow: FlowRequest = Depends(flow_request),
    orchestrator: FlowOrchestrator = Depends(orchestrator_from_app),
) -> Response:
    return _page(request, lambda: orchestrator.authorization_redirect(flow))


@router.api_route("/mobileconnect/mobile_connect_error", methods=_METHODS)
def mobile_connect_error(
    request: Request,
    error: str | None = None,
    error_description: str | None = None,
) -> Response:
    return _page(request, lambda: error_page(error, error_description))


def _json(produce: Callable[[], ResponseJson]) -> JSONResponse:
    try:
        body = produce()
    except Exception:
        log.exception(
            "uncaught_exception",
            error=INTERNAL_ERROR,
            error_description=INTERNAL_ERROR_DESCRIPTION,
        )
        body = json_error(INTERNAL_ERROR, INTERNAL_ERROR_DESCRIPTION)
    return JSONResponse(content=body.to_payload())


def _page(request: Request, produce: Callable[[], PageDescriptor]) -> Response:
    try:
        descriptor = produce()
    except Exception:
        log.exception(
            "uncaught_exception",
            error=INTERNAL_ERROR,
            error_description=INTERNAL_ERROR_DESCRIPTION,
        )
        descriptor = error_page(INTERNAL_ERROR, INTERNAL_ERROR_DESCRIPTION)
    return templates.TemplateResponse(
        request,
        f"{descriptor.page.value}.html",
        {
            "page": descriptor.page.value,
            "error": descriptor.error,
            "error_description": descriptor.error_description,
        },
        headers={PAGE_HEADER: descriptor.page.value},
    )


# --- Module Notes -----------------------------------------------------------
# Handlers are sync on purpose: backend calls block, and FastAPI runs sync handlers
# in its threadpool so concurrent sessions never wait on each other.
