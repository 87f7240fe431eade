"""
mc_orchestrator.flow.renderer

Rendering of flow statuses for the two kinds of callers.

Responsibilities:
- Build the JSON payload returned to the in-page script (`ResponseJson`).
- Build page descriptors returned to browser redirects (`PageDescriptor`).
- Emit diagnostic log lines for discovery results, completed flows and failures.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel

from mc_orchestrator.flow.errors import SERVER_ERROR, FailureDetail
from mc_orchestrator.flow.interpreter import Page, page_for
from mc_orchestrator.flow.status import Complete, DiscoveryResult, Failed, FlowStatus
from mc_orchestrator.observability.logging import get_logger

log = get_logger(__name__)

Outcome = Literal[
    "operator_selection",
    "start_authorization",
    "start_discovery",
    "authorization",
    "error",
]


class ResponseJson(BaseModel):
    outcome: Outcome
    url: str | None = None
    error: str | None = None
    error_description: str | None = None

    def to_payload(self) -> dict[str, str]:
        return self.model_dump(exclude_none=True)


@dataclass(frozen=True, slots=True)
class PageDescriptor:
    page: Page
    error: str | None = None
    error_description: str | None = None


def json_outcome(outcome: Outcome, *, url: str | None = None) -> ResponseJson:
    return ResponseJson(outcome=outcome, url=url)


def json_error(error: str | None, error_description: str | None) -> ResponseJson:
    return ResponseJson(
        outcome="error",
        error=error or SERVER_ERROR,
        error_description=error_description or "",
    )


def error_page(error: str | None, error_description: str | None) -> PageDescriptor:
    return PageDescriptor(
        page=Page.error,
        error=error or SERVER_ERROR,
        error_description=error_description or "",
    )


def render_page(status: FlowStatus | object) -> PageDescriptor:
    page = page_for(status)
    if page is not Page.error:
        return PageDescriptor(page=page)
    if isinstance(status, Failed):
        return error_page(status.error_code, status.error_description)
    return error_page(SERVER_ERROR, f"No page for status {type(status).__name__}")


# --- Diagnostics -------------------------------------------------------------


def log_discovery_result(result: DiscoveryResult | None) -> None:
    if result is None:
        log.debug("discovery_result_missing")
        return
    log.debug("discovery_result", cached=result.cached, response_code=result.response_code)
    _log_headers("discovery_response_header", result.headers)
    log.debug("serving_operator", serving_operator=result.serving_operator)


def log_outcome(status: Complete) -> None:
    auth = status.authorization_result
    if auth is not None:
        log.debug("authorization_result", code=auth.code, state=auth.state)

    token = status.token_result
    if token is None:
        log.debug("token_result_missing")
        return
    log.debug("token_response", response_code=token.response_code)
    _log_headers("token_response_header", token.headers)

    data = token.response_data
    if data is None:
        return
    received = data.time_received.isoformat() if data.time_received is not None else None
    log.debug("token_received", time_received=received)
    if data.parsed_id_token is not None:
        log.debug(
            "id_token",
            nonce=data.parsed_id_token.nonce,
            pcr=data.parsed_id_token.pcr,
        )


def log_failure(status: Failed) -> None:
    # Logged code matches the one `json_error` / `error_page` render.
    log.debug(
        "flow_failed",
        error=status.error_code or SERVER_ERROR,
        error_description=status.error_description or "",
    )
    cause = status.cause
    if not isinstance(cause, FailureDetail):
        return
    log.debug(
        "flow_failure_detail",
        phase=cause.phase.value,
        message=cause.message,
        uri=cause.uri,
        response_code=cause.response_code,
        contents=cause.contents,
    )
    _log_headers("flow_failure_header", cause.headers)


def _log_headers(event: str, headers: Iterable[tuple[str, str]] | None) -> None:
    for name, value in headers or ():
        log.debug(event, name=name, value=value)
