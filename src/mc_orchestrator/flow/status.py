"""
mc_orchestrator.flow.status

Typed results produced by the Auth Backend.

Responsibilities:
- Define the closed `FlowStatus` union and the payloads its variants carry.
- Coerce arbitrary backend return values into exactly one variant.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, TypeAlias

from mc_orchestrator.flow.errors import UNRECOGNIZED_STATUS, FailureDetail

Headers: TypeAlias = tuple[tuple[str, str], ...]


@dataclass(frozen=True, slots=True)
class DiscoveryResult:
    """
    Outcome of operator discovery, possibly served from a cache.
    `response_code` and `headers` are only known for a live response.
    """

    cached: bool = False
    response_code: int | None = None
    headers: Headers = ()
    payload: Mapping[str, Any] = field(default_factory=dict)

    @property
    def serving_operator(self) -> str | None:
        response = self.payload.get("response") if isinstance(self.payload, Mapping) else None
        if not isinstance(response, Mapping):
            return None
        operator = response.get("serving_operator")
        return None if operator is None else str(operator)


@dataclass(frozen=True, slots=True)
class AuthorizationResult:
    code: str | None = None
    state: str | None = None


@dataclass(frozen=True, slots=True)
class ParsedIdToken:
    nonce: str | None = None
    pcr: str | None = None


@dataclass(frozen=True, slots=True)
class TokenResponseData:
    time_received: datetime | None = None
    parsed_id_token: ParsedIdToken | None = None
    access_token: str | None = field(default=None, repr=False)
    token_type: str | None = None
    expires_in: int | None = None


@dataclass(frozen=True, slots=True)
class TokenResult:
    response_code: int
    headers: Headers = ()
    response_data: TokenResponseData | None = None


@dataclass(frozen=True, slots=True)
class OperatorSelectionRequired:
    # The operator is unknown; the user picks one at `redirect_url`.
    redirect_url: str


@dataclass(frozen=True, slots=True)
class DiscoveryRequired:
    # The operator identity is missing or stale; discovery starts over.
    pass


@dataclass(frozen=True, slots=True)
class AuthorizationRequired:
    redirect_url: str
    discovery_result: DiscoveryResult


@dataclass(frozen=True, slots=True)
class AuthorizationReady:
    discovery_result: DiscoveryResult


@dataclass(frozen=True, slots=True)
class Complete:
    token_result: TokenResult
    authorization_result: AuthorizationResult | None = None


@dataclass(frozen=True, slots=True)
class Failed:
    error_code: str
    error_description: str
    cause: FailureDetail | None = None


FlowStatus: TypeAlias = (
    OperatorSelectionRequired
    | DiscoveryRequired
    | AuthorizationRequired
    | AuthorizationReady
    | Complete
    | Failed
)

REDIRECT_STATUS_TYPES: tuple[type, ...] = (OperatorSelectionRequired, AuthorizationRequired)

FLOW_STATUS_TYPES: tuple[type, ...] = (
    OperatorSelectionRequired,
    DiscoveryRequired,
    AuthorizationRequired,
    AuthorizationReady,
    Complete,
    Failed,
)


def coerce_status(value: object) -> FlowStatus:
    """
    Return `value` if it is a usable `FlowStatus` variant, otherwise a `Failed` status.
    Backends are opaque collaborators; anything they return must resolve to
    exactly one variant before interpretation. A redirect variant without a
    redirect URL cannot be acted on and is treated as unrecognized.
    """

    if not isinstance(value, FLOW_STATUS_TYPES):
        return Failed(
            error_code=UNRECOGNIZED_STATUS,
            error_description=f"Backend returned an unrecognized status: {type(value).__name__}",
        )
    if isinstance(value, REDIRECT_STATUS_TYPES):
        url = value.redirect_url
        if not isinstance(url, str) or not url.strip():
            return Failed(
                error_code=UNRECOGNIZED_STATUS,
                error_description=f"Backend returned {type(value).__name__} without a redirect URL",
            )
    return value  # type: ignore[return-value]


# --- Module Notes -----------------------------------------------------------
# Variants are dispatched by type (see `flow.interpreter`). Subclasses of a variant
# are treated as that variant, which keeps the precedence rules well-defined.
