"""Per-request data carried through the relay pipeline."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import Any


def normalize_headers(items: Iterable[tuple[str, str]]) -> dict[str, str]:
    """Lowercase header names; for repeated names the first value wins."""
    headers: dict[str, str] = {}
    for key, value in items:
        headers.setdefault(key.lower(), value)
    return headers


@dataclass(frozen=True)
class IncomingRequest:
    """Immutable snapshot of the client request.

    Header names are lowercased once here so the rest of the pipeline can
    use plain dict lookups. ``body`` stays None until the orchestrator has
    read it, which happens only after a credential was resolved.
    """

    method: str
    path: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None

    @classmethod
    def from_http_request(cls, http_request: Any) -> IncomingRequest:
        """Build from a FastAPI/Starlette ``Request`` without reading the body."""
        return cls(
            method=http_request.method,
            path=http_request.url.path,
            headers=normalize_headers(http_request.headers.items()),
        )

    def with_body(self, body: bytes) -> IncomingRequest:
        return replace(self, body=body)
