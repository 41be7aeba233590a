"""Configuration package for Messages Relay."""

from messages_relay.core.config.config import RelayConfig
from messages_relay.core.config.schema import ConfigSchema, EnvVarSpec
from messages_relay.core.config.validation import ConfigError, load_env_var, validate_all

__all__ = [
    "ConfigError",
    "ConfigSchema",
    "EnvVarSpec",
    "RelayConfig",
    "load_env_var",
    "validate_all",
]
