"""Configuration management.

Modules:
    settings: Config file loading/validation and the per-invocation NotifyConfig
"""

from claude_notify.config.settings import (
    CONFIG_FILE,
    CONFIG_SCHEMA,
    DEFAULT_CONFIG,
    NotifyConfig,
    get_config_path,
    load_config,
    validate_config,
)

__all__ = [
    "CONFIG_FILE",
    "CONFIG_SCHEMA",
    "DEFAULT_CONFIG",
    "NotifyConfig",
    "get_config_path",
    "load_config",
    "validate_config",
]
