"""Outbound header construction for the backend.

The backend expects requests that look like they come from the official
CLI client, so the inbound header set is replaced wholesale by a fixed
client fingerprint. Only ``anthropic-version`` is negotiated from the
inbound request.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)

DEFAULT_ANTHROPIC_VERSION = "2023-06-01"

# Substring identifying the lightweight model family
FAST_TIER_MODEL_TOKEN = "haiku"

NARROW_BETA_FEATURES = ("fine-grained-tool-streaming-2025-05-14",)
BROAD_BETA_FEATURES = (
    "claude-code-20250219",
    "context-1m-2025-08-07",
    "interleaved-thinking-2025-05-14",
    "fine-grained-tool-streaming-2025-05-14",
)

STREAM_HELPER_METHOD = "stream"

CLIENT_IDENTITY_HEADERS: tuple[tuple[str, str], ...] = (
    ("User-Agent", "claude-cli/1.0.86 (external, cli)"),
    ("Accept", "application/json"),
    ("Accept-Encoding", "gzip, deflate, br, zstd"),
    ("Content-Type", "application/json"),
    ("anthropic-dangerous-direct-browser-access", "true"),
)

CLIENT_PLATFORM_HEADERS: tuple[tuple[str, str], ...] = (
    ("x-app", "cli"),
    ("x-stainless-arch", "x64"),
    ("x-stainless-lang", "js"),
    ("x-stainless-os", "Windows"),
    ("x-stainless-package-version", "0.55.1"),
    ("x-stainless-retry-count", "0"),
    ("x-stainless-runtime", "node"),
    ("x-stainless-runtime-version", "v24.3.0"),
    ("x-stainless-timeout", "60"),
)


class ModelClass(str, Enum):
    FAST_TIER = "fast_tier"
    STANDARD_TIER = "standard_tier"

    @property
    def beta_features(self) -> str:
        features = NARROW_BETA_FEATURES if self is ModelClass.FAST_TIER else BROAD_BETA_FEATURES
        return ",".join(features)


def classify_model(model: str | None) -> ModelClass:
    """Classify a model id; an unknown or missing model is standard tier."""
    if model and FAST_TIER_MODEL_TOKEN in model:
        return ModelClass.FAST_TIER
    return ModelClass.STANDARD_TIER


@dataclass(frozen=True)
class OutboundHeaders:
    """The variable part of the outbound header set.

    ``stream_helper`` is None for non-streaming requests, in which case the
    header is left out entirely rather than sent with a false value.
    """

    anthropic_version: str
    authorization: str
    anthropic_beta: str
    stream_helper: str | None = None

    def as_dict(self) -> dict[str, str]:
        headers = dict(CLIENT_IDENTITY_HEADERS)
        headers["anthropic-version"] = self.anthropic_version
        headers["authorization"] = self.authorization
        headers.update(CLIENT_PLATFORM_HEADERS)
        if self.stream_helper is not None:
            headers["x-stainless-helper-method"] = self.stream_helper
        headers["anthropic-beta"] = self.anthropic_beta
        return headers


def transform_headers(
    inbound_headers: Mapping[str, str],
    api_key: str,
    model: str | None = None,
    is_stream: bool = False,
) -> OutboundHeaders:
    """Build the outbound header set for one request.

    Args:
        inbound_headers: Client headers with lowercase keys.
        api_key: The resolved credential.
        model: Model id from the payload, if any.
        is_stream: Whether the payload asked for a streamed response.
    """
    model_class = classify_model(model)
    logger.debug(f"Using {model_class.value} beta features for model: {model or 'unknown'}")
    if is_stream:
        logger.debug("Adding stream helper method header")

    return OutboundHeaders(
        anthropic_version=inbound_headers.get("anthropic-version") or DEFAULT_ANTHROPIC_VERSION,
        authorization=f"Bearer {api_key}",
        anthropic_beta=model_class.beta_features,
        stream_helper=STREAM_HELPER_METHOD if is_stream else None,
    )
