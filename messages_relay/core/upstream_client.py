"""HTTP client for the configured backend.

The relay never converts payloads, so this client only dispatches the
rewritten request and hands back the backend response in one of two shapes:
fully buffered, or as a one-shot stream of raw bytes for event streams.
"""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator, Mapping
from dataclasses import dataclass
from typing import Union

import httpx

from messages_relay.core.exceptions import UpstreamUnavailableError

logger = logging.getLogger(__name__)

STREAMING_CONTENT_TYPES = ("text/event-stream", "text/stream")

# Framing headers the ASGI server recomputes for the relayed response
HOP_BY_HOP_HEADERS = frozenset({"connection", "keep-alive", "transfer-encoding"})


@dataclass(frozen=True)
class OutboundRequest:
    """A fully rewritten request, ready to dispatch."""

    url: str
    headers: Mapping[str, str]
    body: bytes
    method: str = "POST"


@dataclass(frozen=True)
class BufferedBody:
    data: bytes


@dataclass(frozen=True)
class StreamBody:
    """Forward-only backend body.

    ``chunks`` can be iterated exactly once; exhausting or closing it
    releases the backend connection.
    """

    chunks: AsyncIterator[bytes]


@dataclass(frozen=True)
class BackendResponse:
    status_code: int
    reason_phrase: str
    headers: list[tuple[str, str]]
    body: Union[BufferedBody, StreamBody]

    @property
    def is_stream(self) -> bool:
        return isinstance(self.body, StreamBody)


def is_streaming_content_type(content_type: str | None) -> bool:
    if not content_type:
        return False
    content_type = content_type.lower()
    return any(marker in content_type for marker in STREAMING_CONTENT_TYPES)


def relayable_headers(headers: httpx.Headers) -> list[tuple[str, str]]:
    """Backend headers to copy onto the client response, repeats included."""
    return [(key, value) for key, value in headers.multi_items() if key.lower() not in HOP_BY_HOP_HEADERS]


async def _raw_chunks(response: httpx.Response) -> AsyncIterator[bytes]:
    try:
        async for chunk in response.aiter_raw():
            yield chunk
    finally:
        await response.aclose()
        logger.debug("Backend stream closed")


class UpstreamClient:
    """Client for the single backend endpoint."""

    def __init__(
        self,
        target_url: str,
        connect_timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.target_url = target_url
        # Only connecting is bounded; streams stay open until either side closes
        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(None, connect=connect_timeout),
            transport=transport,
        )

    async def send(self, outbound: OutboundRequest) -> BackendResponse:
        """Dispatch ``outbound`` and wrap the backend response.

        Non-2xx statuses are returned like any other response.

        Raises:
            UpstreamUnavailableError: If no response could be obtained.
        """
        start_time = time.time()
        request = self.client.build_request(
            outbound.method,
            outbound.url,
            headers=dict(outbound.headers),
            content=outbound.body,
        )

        try:
            response = await self.client.send(request, stream=True)
        except httpx.TransportError as e:
            raise UpstreamUnavailableError(outbound.url, e) from e

        headers = relayable_headers(response.headers)

        if is_streaming_content_type(response.headers.get("content-type")):
            logger.debug("Returning streaming response")
            return BackendResponse(
                status_code=response.status_code,
                reason_phrase=response.reason_phrase,
                headers=headers,
                body=StreamBody(_raw_chunks(response)),
            )

        try:
            data = b"".join([chunk async for chunk in response.aiter_raw()])
        except httpx.TransportError as e:
            raise UpstreamUnavailableError(outbound.url, e) from e
        finally:
            await response.aclose()

        duration_ms = (time.time() - start_time) * 1000
        logger.debug(f"Response body length: {len(data)} bytes ({duration_ms:.0f}ms)")
        return BackendResponse(
            status_code=response.status_code,
            reason_phrase=response.reason_phrase,
            headers=headers,
            body=BufferedBody(data),
        )

    async def aclose(self) -> None:
        await self.client.aclose()
