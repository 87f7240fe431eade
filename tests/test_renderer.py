"""
tests.test_renderer

JSON/page rendering and diagnostic log lines.

Responsibilities:
- Verify payload shapes and error defaults.
- Verify diagnostics tolerate absent optional fields and log transport metadata.
"""

from __future__ import annotations

from datetime import UTC, datetime

from structlog.testing import capture_logs

from mc_orchestrator.flow.errors import SERVER_ERROR, FailureDetail, FailurePhase
from mc_orchestrator.flow.renderer import (
    json_error,
    json_outcome,
    log_discovery_result,
    log_failure,
    log_outcome,
)
from mc_orchestrator.flow.status import (
    AuthorizationResult,
    Complete,
    DiscoveryResult,
    Failed,
    ParsedIdToken,
    TokenResponseData,
    TokenResult,
)


def _events(logs: list[dict], name: str) -> list[dict]:
    return [e for e in logs if e["event"] == name]


def test_json_payload_omits_absent_fields() -> None:
    assert json_outcome("start_authorization").to_payload() == {"outcome": "start_authorization"}
    assert json_outcome("operator_selection", url="https://op.example/select").to_payload() == {
        "outcome": "operator_selection",
        "url": "https://op.example/select",
    }


def test_json_error_always_has_a_code() -> None:
    payload = json_error("", None).to_payload()

    assert payload == {"outcome": "error", "error": SERVER_ERROR, "error_description": ""}


def test_discovery_result_logging_tolerates_missing_fields() -> None:
    with capture_logs() as logs:
        log_discovery_result(DiscoveryResult(cached=True, payload={}))
        log_discovery_result(DiscoveryResult(payload={"response": "not-a-mapping"}))
        log_discovery_result(None)

    operators = _events(logs, "serving_operator")
    assert [e["serving_operator"] for e in operators] == [None, None]
    assert _events(logs, "discovery_result")[0]["cached"] is True
    assert _events(logs, "discovery_result_missing")


def test_discovery_result_logs_headers_and_operator() -> None:
    result = DiscoveryResult(
        response_code=200,
        headers=(("Content-Type", "application/json"), ("X-Trace", "t-1")),
        payload={"response": {"serving_operator": "Example Operator"}},
    )
    with capture_logs() as logs:
        log_discovery_result(result)

    headers = _events(logs, "discovery_response_header")
    assert [(h["name"], h["value"]) for h in headers] == [
        ("Content-Type", "application/json"),
        ("X-Trace", "t-1"),
    ]
    assert _events(logs, "serving_operator")[0]["serving_operator"] == "Example Operator"
    assert _events(logs, "discovery_result")[0]["response_code"] == 200


def test_outcome_logging_includes_token_details() -> None:
    status = Complete(
        authorization_result=AuthorizationResult(code="code-1", state="state_1"),
        token_result=TokenResult(
            response_code=200,
            headers=(("Cache-Control", "no-store"),),
            response_data=TokenResponseData(
                time_received=datetime(2026, 10, 19, 12, 0, tzinfo=UTC),
                parsed_id_token=ParsedIdToken(nonce="nonce_xyz", pcr="abc123"),
                access_token="secret-token",
            ),
        ),
    )
    with capture_logs() as logs:
        log_outcome(status)

    assert _events(logs, "authorization_result")[0]["code"] == "code-1"
    assert _events(logs, "token_response")[0]["response_code"] == 200
    assert _events(logs, "token_received")[0]["time_received"] == "2026-10-19T12:00:00+00:00"
    id_token = _events(logs, "id_token")[0]
    assert id_token["pcr"] == "abc123"
    assert id_token["nonce"] == "nonce_xyz"
    assert all("secret-token" not in str(e) for e in logs)


def test_outcome_logging_without_optional_parts() -> None:
    with capture_logs() as logs:
        log_outcome(Complete(token_result=TokenResult(response_code=200)))

    assert not _events(logs, "authorization_result")
    assert not _events(logs, "id_token")
    assert _events(logs, "token_response")


def test_failure_logging_includes_transport_metadata() -> None:
    status = Failed(
        "invalid_request",
        "discovery rejected",
        cause=FailureDetail(
            phase=FailurePhase.discovery,
            message="HTTP 400",
            uri="https://discovery.example/v2/discovery",
            response_code=400,
            contents='{"error": "invalid_request"}',
            headers=(("Content-Type", "application/json"),),
        ),
    )
    with capture_logs() as logs:
        log_failure(status)

    failed = _events(logs, "flow_failed")[0]
    assert failed["error"] == "invalid_request"
    assert failed["error_description"] == "discovery rejected"
    detail = _events(logs, "flow_failure_detail")[0]
    assert detail["phase"] == "discovery"
    assert detail["uri"] == "https://discovery.example/v2/discovery"
    assert detail["response_code"] == 400
    assert detail["contents"] == '{"error": "invalid_request"}'
    assert _events(logs, "flow_failure_header")[0]["name"] == "Content-Type"


def test_failure_logging_without_cause() -> None:
    with capture_logs() as logs:
        log_failure(Failed("timeout", "operator did not answer"))

    assert _events(logs, "flow_failed")
    assert not _events(logs, "flow_failure_detail")


def test_failure_logging_uses_the_rendered_error_code() -> None:
    status = Failed("", "")

    with capture_logs() as logs:
        log_failure(status)

    failed = _events(logs, "flow_failed")[0]
    assert failed["error"] == SERVER_ERROR == json_error(status.error_code, None).error
    assert failed["error_description"] == ""
