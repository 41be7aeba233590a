from starlette.responses import Response

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "*",
}


def cors_headers() -> dict[str, str]:
    # Centralize the CORS header contract used on every response.
    return dict(CORS_HEADERS)


def apply_cors(response: Response) -> Response:
    """Set the CORS block on ``response``, replacing same-named headers."""
    for key, value in CORS_HEADERS.items():
        response.headers[key] = value
    return response
