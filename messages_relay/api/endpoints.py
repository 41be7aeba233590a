import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from messages_relay.api.orchestrator.request_orchestrator import RelayOrchestrator
from messages_relay.api.services.cors import cors_headers
from messages_relay.api.services.error_handling import ErrorResponseBuilder

logger = logging.getLogger(__name__)

router = APIRouter()

MESSAGES_PATH = "/v1/messages"
NOT_ALLOWED_METHODS = ["GET", "HEAD", "PUT", "PATCH", "DELETE", "TRACE", "CONNECT"]
ALL_METHODS = ["POST", "OPTIONS", *NOT_ALLOWED_METHODS]


def get_orchestrator(request: Request) -> RelayOrchestrator:
    return request.app.state.orchestrator


@router.post(MESSAGES_PATH)
async def create_message(
    http_request: Request,
    orchestrator: RelayOrchestrator = Depends(get_orchestrator),
) -> Response:
    return await orchestrator.handle(http_request)


@router.options(MESSAGES_PATH)
async def preflight_messages() -> Response:
    return Response(status_code=200, headers=cors_headers())


@router.api_route(MESSAGES_PATH, methods=NOT_ALLOWED_METHODS)
async def messages_method_not_allowed(http_request: Request) -> Response:
    logger.debug(f"Method not allowed: {http_request.method} {MESSAGES_PATH}")
    return ErrorResponseBuilder.method_not_allowed()


# Must stay last: matches every path not routed above
@router.api_route("/{path:path}", methods=ALL_METHODS)
async def unsupported_path(path: str) -> Response:
    logger.debug(f"Unsupported path: /{path}")
    return ErrorResponseBuilder.not_found()
