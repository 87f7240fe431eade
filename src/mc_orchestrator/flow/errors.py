"""
mc_orchestrator.flow.errors

Failure taxonomy for the Mobile Connect flow.

Responsibilities:
- Describe backend failures with a single `FailureDetail` record.
- Provide the exceptions backends raise during discovery and authorization.
- Name the error codes produced by the orchestrator itself.
"""

from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass

SERVER_ERROR = "server_error"
UNRECOGNIZED_STATUS = "unrecognized_status"
UNEXPECTED_STATUS = "unexpected_status"
INTERNAL_ERROR = "internal_error"


class FailurePhase(enum.StrEnum):
    discovery = "discovery"
    authorization = "authorization"


@dataclass(frozen=True, slots=True)
class FailureDetail:
    """
    Transport metadata describing why a backend call failed.

    Both phases expose the same shape; fields the backend could not observe
    (e.g. no HTTP response on a timeout) stay `None`/empty.
    """

    phase: FailurePhase
    message: str
    uri: str | None = None
    response_code: int | None = None
    contents: str | None = None
    headers: tuple[tuple[str, str], ...] = ()


class BackendError(Exception):
    """
    Raised by an Auth Backend when a call cannot produce a flow status.
    The orchestrator converts it into a `Failed` status carrying `detail()`.
    """

    phase: FailurePhase

    def __init__(
        self,
        message: str,
        *,
        error_code: str = SERVER_ERROR,
        uri: str | None = None,
        response_code: int | None = None,
        contents: str | None = None,
        headers: Sequence[tuple[str, str]] = (),
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.uri = uri
        self.response_code = response_code
        self.contents = contents
        self.headers = tuple(headers)

    def detail(self) -> FailureDetail:
        return FailureDetail(
            phase=self.phase,
            message=self.message,
            uri=self.uri,
            response_code=self.response_code,
            contents=self.contents,
            headers=self.headers,
        )


class DiscoveryError(BackendError):
    phase = FailurePhase.discovery


class AuthorizationError(BackendError):
    phase = FailurePhase.authorization


# --- Module Notes -----------------------------------------------------------
# Unrecognized statuses and uncaught faults have no exception type of their own:
# they are reported through `UNRECOGNIZED_STATUS` / `INTERNAL_ERROR` codes on the
# regular error outputs.
