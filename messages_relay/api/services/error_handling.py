"""Terminal error responses for the relay.

Every locally generated failure is a short plain-text body with the CORS
block attached. Details go to the log only, never to the client.
"""

import logging
from dataclasses import dataclass

from fastapi.responses import PlainTextResponse

from messages_relay.api.services.cors import cors_headers
from messages_relay.core.error_types import ErrorType
from messages_relay.core.exceptions import RelayError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ErrorResponseBuilder:
    """Centralized builder for the relay's plain-text error responses."""

    @staticmethod
    def unauthorized(message: str = "Missing API Key") -> PlainTextResponse:
        return PlainTextResponse(message, status_code=401, headers=cors_headers())

    @staticmethod
    def not_found(message: str = "Not Found") -> PlainTextResponse:
        return PlainTextResponse(message, status_code=404, headers=cors_headers())

    @staticmethod
    def method_not_allowed(message: str = "Method Not Allowed") -> PlainTextResponse:
        return PlainTextResponse(message, status_code=405, headers=cors_headers())

    @staticmethod
    def internal_error(message: str = "Internal Server Error") -> PlainTextResponse:
        return PlainTextResponse(message, status_code=500, headers=cors_headers())

    @classmethod
    def from_error(cls, error: Exception) -> PlainTextResponse:
        """Map an exception raised by the pipeline to its terminal response.

        Args:
            error: A RelayError subclass, or any unexpected exception

        Returns:
            401 for credential failures, otherwise the generic 500
        """
        error_type = error.error_type if isinstance(error, RelayError) else ErrorType.UNEXPECTED_ERROR

        if error_type is ErrorType.AUTH_ERROR:
            logger.error(f"Missing API Key in request ({error})")
            return cls.unauthorized()

        logger.error(f"Proxy error ({error_type.value}): {error!r}", exc_info=error)
        return cls.internal_error()
