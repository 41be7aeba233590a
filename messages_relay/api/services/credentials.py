"""API key resolution for outbound requests."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from messages_relay.core.config import RelayConfig
from messages_relay.core.exceptions import MissingCredentialError
from messages_relay.core.logging import mask_secret

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def extract_client_api_key(headers: Mapping[str, str]) -> str | None:
    """Read the key from ``authorization`` or, failing that, ``x-api-key``.

    ``headers`` must have lowercase names. A ``Bearer `` prefix is stripped.
    A non-empty ``authorization`` shadows ``x-api-key`` even when only the
    bare prefix is present; that case counts as no client key.
    """
    raw_value = headers.get("authorization") or headers.get("x-api-key")
    if not raw_value:
        return None
    if raw_value.startswith(BEARER_PREFIX):
        raw_value = raw_value[len(BEARER_PREFIX):]
    return raw_value or None


def resolve_api_key(headers: Mapping[str, str], config: RelayConfig) -> str:
    """Resolve the credential to send to the backend.

    With ``force_default_api_key`` set, client headers are ignored and the
    configured default key is used unconditionally.

    Raises:
        MissingCredentialError: If no non-empty key can be resolved.
    """
    if config.force_default_api_key:
        if not config.default_api_key:
            logger.error("FORCE_DEFAULT_API_KEY is enabled but DEFAULT_API_KEY is not set")
            raise MissingCredentialError("forced default API key is not configured")
        logger.debug(f"Using forced default API key: {mask_secret(config.default_api_key)}")
        return config.default_api_key

    api_key = extract_client_api_key(headers)
    if api_key:
        logger.debug(f"Using client API key: {mask_secret(api_key)}")
        return api_key

    if config.default_api_key:
        logger.debug("Using default API key from configuration")
        return config.default_api_key

    raise MissingCredentialError()
