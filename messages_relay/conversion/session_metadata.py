"""Synthetic session metadata for requests that carry none."""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any

logger = logging.getLogger(__name__)


def build_session_user_id(user_id: str, session_id: str | None = None) -> str:
    """Return ``user_<user_id>_account__session_<uuid4>``."""
    session = session_id or str(uuid.uuid4())
    return f"user_{user_id}_account__session_{session}"


def augment_metadata(
    data: dict[str, Any] | None,
    raw_body: bytes,
    has_metadata: bool,
    default_user_id: str,
) -> bytes:
    """Return the body to forward, adding ``metadata.user_id`` when needed.

    The original bytes are returned unchanged when the body was not a JSON
    object, when it already has a ``metadata`` field, or when no default
    user id is configured. ``data`` itself is never mutated.
    """
    if data is None or has_metadata or not default_user_id:
        return raw_body

    user_id = build_session_user_id(default_user_id)
    augmented = dict(data)
    augmented["metadata"] = {"user_id": user_id}
    logger.debug(f"Injected session metadata user_id: {user_id}")

    return json.dumps(augmented, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
