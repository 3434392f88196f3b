"""Configuration management for claude-notify.

Settings come from two places: an optional JSON file for values that rarely
change (application identity, log location, backend order) and the command
line for per-invocation values. ``NotifyConfig`` merges both once at startup
and is then passed explicitly to every stage.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple

from claude_notify.errors import ConfigError
from claude_notify.notify.backends import BACKEND_NAMES, DEFAULT_APP_ID

# File paths
CONFIG_FILE = Path.home() / ".claude" / ".notify_config.json"
CONFIG_ENV_VAR = "CLAUDE_NOTIFY_CONFIG"

# Default configuration values
DEFAULT_CONFIG = {
    "app_id": DEFAULT_APP_ID,
    "log_path": None,
    "backends": None,  # None = platform default chain
    "backend_timeout_seconds": 10,
    "balloon_timeout_ms": 5000,
}

# Config schema for validation
# Format: key -> (expected_types, validator_func or None)
# validator_func takes value and returns (is_valid, error_message)
ValidatorFunc = Callable[[Any], Tuple[bool, str]]


def _validate_backends(value: list) -> Tuple[bool, str]:
    if not value:
        return False, "must list at least one backend"
    unknown = [v for v in value if v not in BACKEND_NAMES]
    if unknown:
        return False, (
            f"has unknown backend(s) {', '.join(map(str, unknown))}; "
            f"choose from: {', '.join(BACKEND_NAMES)}"
        )
    return True, ""


CONFIG_SCHEMA: dict[str, tuple[tuple, Optional[ValidatorFunc]]] = {
    "app_id": (
        (str,),
        lambda v: (True, "") if v.strip() else (False, "must be a non-empty string"),
    ),
    "log_path": ((str, type(None)), None),
    "backends": ((list, type(None)), _validate_backends),
    "backend_timeout_seconds": (
        (int, float),
        lambda v: (True, "") if 1 <= v <= 120 else (False, "must be between 1 and 120"),
    ),
    "balloon_timeout_ms": (
        (int,),
        lambda v: (True, "") if v > 0 else (False, "must be a positive integer"),
    ),
}


def get_config_path() -> Path:
    """Return the config file location, honoring CLAUDE_NOTIFY_CONFIG."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return CONFIG_FILE


def validate_config(config: dict) -> List[str]:
    """Validate configuration against schema.

    Args:
        config: Configuration dictionary to validate.

    Returns:
        List of validation error messages. Empty list if valid.
    """
    errors = []

    for key in config:
        if key not in CONFIG_SCHEMA:
            errors.append(f"Unknown config key: '{key}'")

    for key, (expected_types, validator) in CONFIG_SCHEMA.items():
        if key not in config:
            continue

        value = config[key]

        # bool is an int subclass; never accept it for numeric settings
        if not isinstance(value, expected_types) or (
            isinstance(value, bool) and bool not in expected_types
        ):
            type_names = " or ".join(t.__name__ for t in expected_types)
            errors.append(
                f"'{key}' has invalid type: expected {type_names}, got {type(value).__name__}"
            )
            continue

        if validator and value is not None:
            is_valid, error_msg = validator(value)
            if not is_valid:
                errors.append(f"'{key}' {error_msg}")

    return errors


def load_config(config_file: Optional[Path] = None) -> dict:
    """Load configuration from file.

    Args:
        config_file: Optional path to config file. Defaults to get_config_path().

    Returns:
        Configuration dictionary merged with defaults.

    Raises:
        ConfigError: If the file is unreadable, not a JSON object, or invalid.
    """
    if config_file is None:
        config_file = get_config_path()

    if not config_file.exists():
        return DEFAULT_CONFIG.copy()

    try:
        with open(config_file, encoding="utf-8") as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config file {config_file} is not valid JSON", details=str(e))
    except OSError as e:
        raise ConfigError(f"Cannot read config file {config_file}", details=str(e))

    if not isinstance(config, dict):
        raise ConfigError(f"Config file {config_file} must contain a JSON object")

    errors = validate_config(config)
    if errors:
        raise ConfigError(
            f"Config file {config_file} has {len(errors)} error(s)",
            details="; ".join(errors),
        )

    return {**DEFAULT_CONFIG, **config}


@dataclass
class NotifyConfig:
    """Settings for one invocation, built once at process entry."""

    title: str = ""
    message: str = ""
    payload: str = ""
    log_path: Optional[str] = None
    app_id: str = DEFAULT_APP_ID
    backends: Optional[List[str]] = None
    backend_timeout_seconds: float = 10
    balloon_timeout_ms: int = 5000
    quiet: bool = False
    dry_run: bool = False

    @classmethod
    def from_sources(cls, args: Any, file_config: Optional[dict] = None) -> "NotifyConfig":
        """Merge parsed CLI arguments over file configuration.

        Args:
            args: argparse Namespace (or any object with the CLI attributes).
            file_config: Result of load_config(); defaults when None.

        Returns:
            The effective configuration.
        """
        file_config = {**DEFAULT_CONFIG, **(file_config or {})}

        backends = getattr(args, "backend", None) or file_config["backends"]
        return cls(
            title=getattr(args, "title", None) or "",
            message=getattr(args, "message", None) or "",
            payload=getattr(args, "payload", None) or "",
            log_path=getattr(args, "log_path", None) or file_config["log_path"],
            app_id=file_config["app_id"],
            backends=list(backends) if backends else None,
            backend_timeout_seconds=file_config["backend_timeout_seconds"],
            balloon_timeout_ms=file_config["balloon_timeout_ms"],
            quiet=bool(getattr(args, "quiet", False)),
            dry_run=bool(getattr(args, "dry_run", False)),
        )


__all__ = [
    "CONFIG_FILE",
    "CONFIG_ENV_VAR",
    "CONFIG_SCHEMA",
    "DEFAULT_APP_ID",
    "DEFAULT_CONFIG",
    "NotifyConfig",
    "get_config_path",
    "load_config",
    "validate_config",
]
