"""Configuration utilities for servdesk."""

import logging
import os
from pathlib import Path
from typing import List, Optional, Tuple

from dotenv import load_dotenv

from ..exceptions import ConfigurationError
from .constants import (
    API_PATH_PREFIX,
    DEFAULT_GATEWAY_URL,
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    ENV_VAR_DEFINITIONS,
    SERVDESK_CONFIG_DIR,
    SESSION_FILENAME,
)

_env_loaded = False


def load_environment() -> None:
    """Load .env files once: user config directory first, then the CWD."""
    global _env_loaded
    if _env_loaded:
        return

    user_config = SERVDESK_CONFIG_DIR / ".env"
    if user_config.exists():
        load_dotenv(user_config)

    load_dotenv()
    _env_loaded = True


def validate_env_var(name: str, value: Optional[str]) -> Tuple[bool, Optional[str]]:
    """Validate a single environment variable value.

    Args:
        name: The environment variable name.
        value: The current value (or None if not set).

    Returns:
        Tuple of (is_valid, error_message).
    """
    if name not in ENV_VAR_DEFINITIONS:
        return True, None

    valid_values = ENV_VAR_DEFINITIONS[name].get("valid_values")
    if value is None or valid_values is None:
        return True, None

    if value.lower() not in [v.lower() for v in valid_values]:
        return False, f"Invalid value '{value}' for {name}. Valid values: {valid_values}"

    return True, None


def validate_all_env_vars() -> List[str]:
    """Validate all servdesk environment variables.

    Returns:
        List of error messages (empty if all valid).
    """
    errors = []
    for name in ENV_VAR_DEFINITIONS:
        is_valid, error = validate_env_var(name, os.environ.get(name))
        if not is_valid:
            errors.append(error)
    return errors


def get_env_var(name: str, validate: bool = True) -> Optional[str]:
    """Get an environment variable, falling back to its documented default.

    Raises:
        ConfigurationError: If validation is requested and the value is invalid.
    """
    load_environment()
    value = os.environ.get(name)

    if validate:
        is_valid, error = validate_env_var(name, value)
        if not is_valid:
            raise ConfigurationError(error or "Invalid environment variable", setting=name)

    if value is None and name in ENV_VAR_DEFINITIONS:
        return ENV_VAR_DEFINITIONS[name].get("default")
    return value


def get_gateway_url() -> str:
    """Base URL of the API gateway, without a trailing slash."""
    return (get_env_var("SERVDESK_GATEWAY_URL") or DEFAULT_GATEWAY_URL).rstrip("/")


def get_api_base() -> str:
    """Gateway URL with exactly one ``/api`` suffix."""
    gateway = get_gateway_url()
    if gateway.endswith(API_PATH_PREFIX):
        return gateway
    return f"{gateway}{API_PATH_PREFIX}"



def get_http_timeout() -> float:
    """Request timeout in seconds for backend calls."""
    raw = get_env_var("SERVDESK_HTTP_TIMEOUT")
    if raw is None:
        return DEFAULT_HTTP_TIMEOUT_SECONDS
    try:
        timeout = float(raw)
    except ValueError:
        raise ConfigurationError(
            f"SERVDESK_HTTP_TIMEOUT must be a number, got '{raw}'",
            setting="SERVDESK_HTTP_TIMEOUT",
        ) from None
    if timeout <= 0:
        raise ConfigurationError(
            "SERVDESK_HTTP_TIMEOUT must be positive", setting="SERVDESK_HTTP_TIMEOUT"
        )
    return timeout


def get_session_path() -> Path:
    """Session file location, respecting SERVDESK_SESSION_FILE.

    Tests point SERVDESK_SESSION_FILE at a temp file so they never touch the
    real session.
    """
    override = get_env_var("SERVDESK_SESSION_FILE")
    if override:
        return Path(override)
    return SERVDESK_CONFIG_DIR / SESSION_FILENAME


def get_log_level() -> int:
    """Numeric level for servdesk loggers from SERVDESK_LOG_LEVEL."""
    name = (get_env_var("SERVDESK_LOG_LEVEL", validate=False) or "INFO").upper()
    return getattr(logging, name, logging.INFO)
