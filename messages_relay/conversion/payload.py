"""Payload inspection for inbound Messages API bodies."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from messages_relay.core.error_types import ErrorType

logger = logging.getLogger(__name__)


def _reject_constant(token: str) -> Any:
    # NaN and Infinity are not JSON; treat them as a parse failure
    raise ValueError(f"Invalid JSON constant: {token}")


@dataclass(frozen=True)
class PayloadView:
    """Read-only view over the fields the relay branches on.

    ``data`` holds the parsed JSON object, or None when the body could not be
    parsed into one. The raw body is never touched by inspection.
    """

    model: str | None = None
    stream: bool = False
    has_metadata: bool = False
    data: dict[str, Any] | None = None

    @property
    def parsed(self) -> bool:
        return self.data is not None


def inspect_payload(raw_body: bytes) -> PayloadView:
    """Parse ``raw_body`` and extract model, stream flag and metadata presence.

    A body that is not valid JSON, or is JSON but not an object, yields an
    empty view instead of an error so the request can still be forwarded.
    """
    try:
        data = json.loads(raw_body, parse_constant=_reject_constant)
    except (ValueError, UnicodeDecodeError, RecursionError) as e:
        logger.error(f"Failed to parse request body JSON ({ErrorType.MALFORMED_PAYLOAD.value}): {e}")
        return PayloadView()

    if not isinstance(data, dict):
        logger.error(
            f"Request body is JSON {type(data).__name__}, not an object "
            f"({ErrorType.MALFORMED_PAYLOAD.value})"
        )
        return PayloadView()

    model = data.get("model")
    view = PayloadView(
        model=model if isinstance(model, str) else None,
        stream=data.get("stream") is True,
        has_metadata="metadata" in data,
        data=data,
    )
    logger.info(f"Detected model: {view.model or 'not specified'}, stream: {view.stream}")
    return view
