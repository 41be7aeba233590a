"""Request orchestrator for the messages relay.

This module provides the RelayOrchestrator class, which sequences the
rewrite steps for one inbound request and relays the backend response.
"""

import logging
import uuid
from enum import Enum

from fastapi import Request
from fastapi.responses import Response

from messages_relay.api.context.request_context import IncomingRequest
from messages_relay.api.services.credentials import resolve_api_key
from messages_relay.api.services.error_handling import ErrorResponseBuilder
from messages_relay.api.services.streaming import relay_response
from messages_relay.conversion.headers import transform_headers
from messages_relay.conversion.payload import inspect_payload
from messages_relay.conversion.session_metadata import augment_metadata
from messages_relay.core.config import RelayConfig
from messages_relay.core.logging import request_id_context
from messages_relay.core.upstream_client import OutboundRequest, UpstreamClient

logger = logging.getLogger(__name__)


class RelayStage(str, Enum):
    """Progress of a single request through the pipeline."""

    ADMITTED = "admitted"
    CREDENTIAL_RESOLVED = "credential_resolved"
    BODY_READ = "body_read"
    INSPECTED = "inspected"
    HEADERS_BUILT = "headers_built"
    DISPATCHED = "dispatched"
    RELAYED = "relayed"


class RelayOrchestrator:
    """Orchestrates one admitted POST to the messages route.

    Steps, in order:
    1. Resolve the API key (before touching the body)
    2. Read the body once
    3. Inspect the payload and inject session metadata if needed
    4. Build the outbound headers
    5. Dispatch to the backend and relay the response

    Any failure ends the request with exactly one local error response;
    nothing is retried.
    """

    def __init__(self, config: RelayConfig, upstream: UpstreamClient) -> None:
        self.config = config
        self.upstream = upstream
        self.logger = logging.getLogger(f"{__name__}.RelayOrchestrator")

    async def handle(self, http_request: Request) -> Response:
        """Run the pipeline for ``http_request`` and return the client response."""
        request_id = str(uuid.uuid4())
        with request_id_context(request_id):
            stage = RelayStage.ADMITTED
            try:
                incoming = IncomingRequest.from_http_request(http_request)

                api_key = resolve_api_key(incoming.headers, self.config)
                stage = RelayStage.CREDENTIAL_RESOLVED

                incoming = incoming.with_body(await http_request.body())
                stage = RelayStage.BODY_READ
                self.logger.debug(f"Request body length: {len(incoming.body)} bytes")

                payload = inspect_payload(incoming.body)
                body = augment_metadata(
                    payload.data,
                    incoming.body,
                    payload.has_metadata,
                    self.config.default_user_id,
                )
                stage = RelayStage.INSPECTED

                headers = transform_headers(incoming.headers, api_key, payload.model, payload.stream)
                outbound = OutboundRequest(
                    url=self.config.target_api_url,
                    headers=headers.as_dict(),
                    body=body,
                )
                stage = RelayStage.HEADERS_BUILT

                self.logger.info(f"Proxying request to: {outbound.url}")
                backend = await self.upstream.send(outbound)
                stage = RelayStage.DISPATCHED
                self.logger.info(f"Response status: {backend.status_code} {backend.reason_phrase}")

                response = relay_response(backend)
                stage = RelayStage.RELAYED
                return response
            except Exception as e:
                self.logger.debug(f"Request failed after stage: {stage.value}")
                return ErrorResponseBuilder.from_error(e)

