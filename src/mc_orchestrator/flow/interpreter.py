"""
mc_orchestrator.flow.interpreter

Pure mapping from a `FlowStatus` to what the caller should do next.

Responsibilities:
- Classify a status into a `NextAction`.
- Map a status onto one of the four page tokens used by redirect endpoints.
"""

from __future__ import annotations

import enum

from mc_orchestrator.flow.status import (
    AuthorizationReady,
    AuthorizationRequired,
    Complete,
    DiscoveryRequired,
    FlowStatus,
    OperatorSelectionRequired,
)


class NextAction(enum.StrEnum):
    operator_selection = "operator_selection"
    start_discovery = "start_discovery"
    start_authorization = "start_authorization"
    authorization = "authorization"
    complete = "complete"
    error = "error"


class Page(enum.StrEnum):
    authorized = "authorized"
    request_discovery = "request_discovery"
    request_authorization = "request_authorization"
    error = "error"


def classify(status: FlowStatus | object) -> NextAction:
    # Order mirrors `page_for`: completion first, failures and unknowns last.
    if isinstance(status, Complete):
        return NextAction.complete
    if isinstance(status, DiscoveryRequired):
        return NextAction.start_discovery
    if isinstance(status, AuthorizationRequired):
        return NextAction.authorization
    if isinstance(status, AuthorizationReady):
        return NextAction.start_authorization
    if isinstance(status, OperatorSelectionRequired):
        return NextAction.operator_selection
    return NextAction.error


def page_for(status: FlowStatus | object) -> Page:
    """
    Shared page rule for both redirect endpoints.

    `Complete` wins over everything else, then `DiscoveryRequired`, then the
    authorization-in-progress states. `Failed`, `OperatorSelectionRequired` and
    anything unrecognized resolve to the error page.
    """

    if isinstance(status, Complete):
        return Page.authorized
    if isinstance(status, DiscoveryRequired):
        return Page.request_discovery
    if isinstance(status, (AuthorizationRequired, AuthorizationReady)):
        return Page.request_authorization
    return Page.error
