"""
Exception hierarchy for the relay pipeline.

All exceptions inherit from RelayError, so the orchestrator can turn any
pipeline failure into a terminal response with a single except clause.
"""

from __future__ import annotations

from messages_relay.core.error_types import ErrorType


class RelayError(Exception):
    """Base exception for all relay errors."""

    error_type: ErrorType = ErrorType.UNEXPECTED_ERROR


class MissingCredentialError(RelayError):
    """Raised when no API key can be resolved for the outbound request.

    Attributes:
        reason: Which resolution path came up empty
    """

    error_type = ErrorType.AUTH_ERROR

    def __init__(self, reason: str = "no credential in request headers or configuration") -> None:
        self.reason = reason
        super().__init__(f"Missing API key: {reason}")


class UpstreamUnavailableError(RelayError):
    """Raised when the backend cannot be reached at the transport level.

    HTTP error statuses from the backend are not errors for the relay;
    only failures to obtain any response end up here.

    Attributes:
        target_url: The backend endpoint that was being contacted
    """

    error_type = ErrorType.UPSTREAM_ERROR

    def __init__(self, target_url: str, cause: Exception) -> None:
        self.target_url = target_url
        super().__init__(f"Cannot reach {target_url}: {type(cause).__name__}: {cause}")
