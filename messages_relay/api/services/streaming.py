from __future__ import annotations

from collections.abc import Iterable

from fastapi.responses import Response, StreamingResponse

from messages_relay.api.services.cors import apply_cors
from messages_relay.core.upstream_client import BackendResponse, StreamBody


def copy_backend_headers(response: Response, headers: Iterable[tuple[str, str]]) -> None:
    """Copy backend headers verbatim, keeping repeated fields.

    The first occurrence of a name replaces anything the response class set
    on its own (content-length for buffered bodies).
    """
    seen: set[str] = set()
    for key, value in headers:
        name = key.lower()
        if name in seen:
            response.headers.append(key, value)
        else:
            response.headers[key] = value
            seen.add(name)


def relay_response(backend: BackendResponse) -> Response:
    """Turn a backend response into the client response.

    Streamed bodies are passed through chunk by chunk as the client reads
    them; buffered bodies are emitted in one piece.
    """
    if isinstance(backend.body, StreamBody):
        response: Response = StreamingResponse(backend.body.chunks, status_code=backend.status_code)
    else:
        response = Response(content=backend.body.data, status_code=backend.status_code)

    copy_backend_headers(response, backend.headers)
    return apply_cors(response)
