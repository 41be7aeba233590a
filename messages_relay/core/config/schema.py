"""Declarative schema for environment variable configuration.

Every setting the relay reads from the environment is declared here once,
with its default, type and validation rule. The loader in
``validation.py`` coerces and checks raw values against these specs.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

VALID_LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


def _first_word(value: str) -> str:
    # Values copied from shell snippets sometimes carry trailing comments
    parts = value.split()
    return parts[0] if parts else ""


@dataclass(frozen=True)
class EnvVarSpec:
    """Specification for a single environment variable.

    Attributes:
        name: Environment variable name (e.g., "PORT", "LOG_LEVEL")
        default: Default value if env var not set
        type_hint: Type for validation (int, str, float, bool)
        description: Human-readable description for docs
        validator: Optional custom validation function
        coerce: Optional function to convert string to target type
    """

    name: str
    default: Any
    type_hint: type
    description: str
    validator: Callable[[Any], bool] | None = None
    coerce: Callable[[str], Any] | None = None


class ConfigSchema:
    """Registry of all configuration environment variables."""

    # === Server Settings ===

    HOST = EnvVarSpec(
        name="HOST",
        default="0.0.0.0",
        type_hint=str,
        description="Server host address to bind to",
    )

    PORT = EnvVarSpec(
        name="PORT",
        default=3000,
        type_hint=int,
        description="Server port number",
        validator=lambda x: 1 <= x <= 65535,
    )

    LOG_LEVEL = EnvVarSpec(
        name="LOG_LEVEL",
        default="info",
        type_hint=str,
        description="Logging level (debug, info, warning, error, critical)",
        validator=lambda x: x in VALID_LOG_LEVELS,
        coerce=lambda raw: _first_word(raw).lower(),
    )

    # === Upstream Settings ===

    TARGET_API_URL = EnvVarSpec(
        name="TARGET_API_URL",
        default="https://api.packycode.com/v1/messages?beta=true",
        type_hint=str,
        description="Backend endpoint every request is forwarded to",
        validator=lambda x: x.startswith(("http://", "https://")),
    )

    STREAMING_CONNECT_TIMEOUT_SECONDS = EnvVarSpec(
        name="STREAMING_CONNECT_TIMEOUT_SECONDS",
        default=30.0,
        type_hint=float,
        description="Connect timeout for backend requests (reads are unbounded)",
        validator=lambda x: x > 0,
    )

    # === Credential Settings ===

    DEFAULT_API_KEY = EnvVarSpec(
        name="DEFAULT_API_KEY",
        default="",
        type_hint=str,
        description="Fallback API key used when a request carries none",
    )

    FORCE_DEFAULT_API_KEY = EnvVarSpec(
        name="FORCE_DEFAULT_API_KEY",
        default=False,
        type_hint=bool,
        description="Always use DEFAULT_API_KEY and ignore client credentials",
    )

    # === Session Metadata ===

    DEFAULT_USER_ID = EnvVarSpec(
        name="DEFAULT_USER_ID",
        default="",
        type_hint=str,
        description="User id for synthetic metadata.user_id (empty disables injection)",
    )

    @classmethod
    def all_specs(cls) -> dict[str, EnvVarSpec]:
        """Get all environment variable specifications.

        Returns:
            Dictionary mapping spec names to EnvVarSpec objects
        """
        return {
            name: getattr(cls, name)
            for name in dir(cls)
            if isinstance(getattr(cls, name), EnvVarSpec)
        }
