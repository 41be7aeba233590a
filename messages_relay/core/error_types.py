"""Error type enumeration for Messages Relay.

Provides type-safe error categorization for logs and terminal responses.
"""

from enum import Enum


class ErrorType(str, Enum):
    """Error type categories.

    Only ``MALFORMED_PAYLOAD`` is non-fatal: the request is still forwarded.
    Every other category ends the exchange with a local response.
    """

    # Client errors
    AUTH_ERROR = "auth_error"  # No credential could be resolved
    NOT_FOUND = "not_found"  # Unknown path
    METHOD_NOT_ALLOWED = "method_not_allowed"  # Wrong method on the messages route
    MALFORMED_PAYLOAD = "malformed_payload"  # Body is not a JSON object

    # Upstream errors
    UPSTREAM_ERROR = "upstream_error"  # Backend unreachable (connect, DNS, timeout)

    # Catch-all
    UNEXPECTED_ERROR = "unexpected_error"  # Unhandled/unexpected error
