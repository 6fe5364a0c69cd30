"""
Centralized constants for servdesk.

Timing, page sizes and environment variable definitions live here so the
palette, the backend clients and the CLI agree on them.
"""

from pathlib import Path

# =============================================================================
# PATHS
# =============================================================================

SERVDESK_CONFIG_DIR = Path.home() / ".config" / "servdesk"
SESSION_FILENAME = "session.json"

# =============================================================================
# COMMAND PALETTE
# =============================================================================

PALETTE_DEBOUNCE_SECONDS = 0.25  # Quiet window before a query is considered stable
PALETTE_REMOTE_PAGE_SIZE = 5  # Records requested per remote source
PALETTE_REMOTE_PAGE = 0  # Backend pages are zero-based

# Roles allowed to see customer/device records in palette search.
PALETTE_ENTITY_ROLES = frozenset(
    {
        "MANAGER",
        "STAFF",
        "SUPPORT_TEAM",
        "TECH_LEAD",
        "LEAD_TECH",
        "TECHNICIAN",
        "ADMIN",
        "SUPER_ADMIN",
    }
)

# =============================================================================
# BACKEND GATEWAY
# =============================================================================

DEFAULT_GATEWAY_URL = "http://localhost:8080"
DEFAULT_HTTP_TIMEOUT_SECONDS = 10.0
API_PATH_PREFIX = "/api"

# =============================================================================
# ENVIRONMENT VARIABLES
# =============================================================================

ENV_VAR_DEFINITIONS = {
    "SERVDESK_GATEWAY_URL": {
        "description": "Base URL of the API gateway",
        "default": DEFAULT_GATEWAY_URL,
        "valid_values": None,
    },
    "SERVDESK_HTTP_TIMEOUT": {
        "description": "Timeout in seconds for backend requests",
        "default": str(DEFAULT_HTTP_TIMEOUT_SECONDS),
        "valid_values": None,
    },
    "SERVDESK_SESSION_FILE": {
        "description": "Path of the session file (overrides the config dir)",
        "default": None,
        "valid_values": None,
    },
    "SERVDESK_LOG_LEVEL": {
        "description": "Log level for servdesk loggers",
        "default": "INFO",
        "valid_values": ["DEBUG", "INFO", "WARNING", "ERROR"],
    },
}
