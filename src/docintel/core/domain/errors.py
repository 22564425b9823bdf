"""Domain-specific exception types for docintel."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

PHASE_INITIATE = "initiate"
PHASE_POLL = "poll"

_PHASE_PREFIX = {
    PHASE_INITIATE: "failed to initiate analysis",
    PHASE_POLL: "failed to poll for result",
}


@dataclass
class DocintelError(Exception):
    """Base exception for docintel domain errors."""

    message: str
    code: str = "docintel_error"
    details: Dict[str, Any] | None = None
    status_code: int | None = None

    def __post_init__(self) -> None:
        super().__init__(self.message)
        if self.details is None:
            self.details = {}


def _with_phase(message: str, phase: str | None) -> str:
    prefix = _PHASE_PREFIX.get(phase or "")
    return f"{prefix}: {message}" if prefix else message


class _PhaseError(DocintelError):
    """Error raised from one of the two analysis phases."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        phase: str | None = None,
        status_code: int | None = None,
        details: Dict[str, Any] | None = None,
    ) -> None:
        details = dict(details or {})
        if phase:
            details.setdefault("phase", phase)
        self.phase = phase
        super().__init__(
            message=_with_phase(message, phase),
            code=code,
            details=details,
            status_code=status_code,
        )


class InvalidInputError(DocintelError):
    """Error raised when an analysis request is malformed."""

    def __init__(self, message: str, *, details: Dict[str, Any] | None = None) -> None:
        super().__init__(message=message, code="invalid_input", details=details)


class ConfigError(DocintelError):
    """Error raised for configuration failures."""

    def __init__(self, message: str, *, details: Dict[str, Any] | None = None) -> None:
        super().__init__(message=message, code="config_error", details=details)


class ToolError(DocintelError):
    """Error raised for unexpected tool invocation failures."""

    def __init__(
        self,
        message: str,
        *,
        tool_name: str | None = None,
        details: Dict[str, Any] | None = None,
    ) -> None:
        details = dict(details or {})
        if tool_name:
            details.setdefault("tool_name", tool_name)
        self.tool_name = tool_name
        super().__init__(message=message, code="tool_error", details=details)


class TransportError(_PhaseError):
    """Network-level failure while talking to the analysis service."""

    def __init__(
        self,
        message: str,
        *,
        phase: str | None = None,
        details: Dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message, code="transport_failure", phase=phase, details=details
        )


class UnexpectedStatusError(_PhaseError):
    """The service answered with an HTTP status other than the expected one."""

    def __init__(
        self,
        status: int,
        *,
        phase: str,
        body: str | None = None,
    ) -> None:
        if phase == PHASE_POLL:
            message = f"unexpected status code during polling: {status}"
        else:
            message = f"unexpected status code: {status}, body: {body or ''}"
        details: Dict[str, Any] = {"http_status": status}
        if body is not None:
            details["body"] = body
        self.http_status = status
        self.body = body
        super().__init__(
            message,
            code="unexpected_status",
            phase=phase,
            status_code=status,
            details=details,
        )


class MissingJobHandleError(_PhaseError):
    """A 202 response arrived without an Operation-Location header."""

    def __init__(self) -> None:
        super().__init__(
            "Operation-Location header not found",
            code="missing_job_handle",
            phase=PHASE_INITIATE,
        )


class InvalidResponseError(_PhaseError):
    """A poll response body could not be decoded as a status envelope."""

    def __init__(self, message: str, *, details: Dict[str, Any] | None = None) -> None:
        super().__init__(
            message, code="invalid_response", phase=PHASE_POLL, details=details
        )


class JobFailedError(_PhaseError):
    """The remote analysis job reported terminal failure."""

    def __init__(self, *, service_error: Dict[str, Any] | None = None) -> None:
        details: Dict[str, Any] = {}
        if service_error:
            details["service_error"] = service_error
        self.service_error = service_error
        super().__init__(
            "analysis failed", code="job_failed", phase=PHASE_POLL, details=details
        )


class UnknownJobStatusError(_PhaseError):
    """The remote job reported a status outside the known set."""

    def __init__(self, status: str) -> None:
        self.status = status
        super().__init__(
            f"unknown status: {status}",
            code="unknown_job_status",
            phase=PHASE_POLL,
            details={"status": status},
        )


class PollingTimedOutError(_PhaseError):
    """The attempt ceiling was reached while the job stayed non-terminal."""

    def __init__(self, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(
            "polling timed out",
            code="polling_timed_out",
            phase=PHASE_POLL,
            details={"attempts": attempts},
        )


class AnalysisCancelledError(_PhaseError):
    """The caller's cancellation signal fired during an analysis."""

    def __init__(self, *, phase: str | None = None) -> None:
        super().__init__("analysis cancelled", code="cancelled", phase=phase)


def tool_error_payload(
    error: DocintelError, extra: Dict[str, Any] | None = None
) -> Dict[str, Any]:
    """Convert a DocintelError into a standardized tool response payload."""
    payload = {
        "success": False,
        "error": str(error),
        "error_type": type(error).__name__,
        "code": error.code,
        "details": error.details or {},
    }
    if extra:
        payload.update(extra)
    return payload
