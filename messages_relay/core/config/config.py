"""Immutable relay configuration.

The configuration is read from the environment exactly once, at startup, and
then handed explicitly to every component that needs it. Nothing in the
request path reads ``os.environ``.
"""

from dataclasses import dataclass

from messages_relay.core.config.schema import ConfigSchema
from messages_relay.core.config.validation import load_env_var
from messages_relay.core.logging import mask_secret


@dataclass(frozen=True)
class RelayConfig:
    """All settings the relay needs, loaded once per process."""

    target_api_url: str = ConfigSchema.TARGET_API_URL.default
    host: str = ConfigSchema.HOST.default
    port: int = ConfigSchema.PORT.default
    log_level: str = ConfigSchema.LOG_LEVEL.default
    default_api_key: str = ""
    default_user_id: str = ""
    force_default_api_key: bool = False
    connect_timeout: float = ConfigSchema.STREAMING_CONNECT_TIMEOUT_SECONDS.default

    @classmethod
    def load(cls) -> "RelayConfig":
        """Build the configuration from environment variables.

        Raises:
            ConfigError: On the first variable that fails coercion or validation.
        """
        return cls(
            target_api_url=load_env_var(ConfigSchema.TARGET_API_URL),
            host=load_env_var(ConfigSchema.HOST),
            port=load_env_var(ConfigSchema.PORT),
            log_level=load_env_var(ConfigSchema.LOG_LEVEL),
            default_api_key=load_env_var(ConfigSchema.DEFAULT_API_KEY).strip(),
            default_user_id=load_env_var(ConfigSchema.DEFAULT_USER_ID).strip(),
            force_default_api_key=load_env_var(ConfigSchema.FORCE_DEFAULT_API_KEY),
            connect_timeout=load_env_var(ConfigSchema.STREAMING_CONNECT_TIMEOUT_SECONDS),
        )

    @property
    def api_key_hint(self) -> str:
        return mask_secret(self.default_api_key)

    @property
    def metadata_injection_enabled(self) -> bool:
        return bool(self.default_user_id)
