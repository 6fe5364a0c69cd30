"""Logging utilities for servdesk.

Modules use the standard pattern:

    import logging
    logger = logging.getLogger(__name__)

and leave handler configuration to the entry points. The console TUI owns
the terminal, so everything here writes to rotating files under the config
directory instead of stderr.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from servdesk.config.constants import SERVDESK_CONFIG_DIR

# Max log file size: 5MB, keep 2 backups
_MAX_LOG_BYTES = 5 * 1024 * 1024
_BACKUP_COUNT = 2
_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _rotating_handler(log_file: Path) -> RotatingFileHandler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(log_file, maxBytes=_MAX_LOG_BYTES, backupCount=_BACKUP_COUNT)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def get_logger(name: str, level: int = logging.INFO, log_dir: Optional[Path] = None) -> logging.Logger:
    """Get a logger that writes to servdesk.log, configuring it on first use."""
    logger = logging.getLogger(name)

    if not logger.handlers:
        try:
            logger.addHandler(_rotating_handler((log_dir or SERVDESK_CONFIG_DIR) / "servdesk.log"))
        except OSError as e:
            logger.warning(f"Could not open servdesk.log: {e}")
    logger.setLevel(level)

    return logger


def setup_tui_logging(
    module_name: str,
    level: int = logging.INFO,
    log_dir: Optional[Path] = None,
) -> logging.Logger:
    """
    Set up logging while the Textual console is running.

    The root logger is set to WARNING to keep httpx and textual quiet;
    servdesk.* loggers go through at ``level``.

    Returns:
        The logger for ``module_name``.
    """
    try:
        if not logging.getLogger().handlers:
            handler = _rotating_handler((log_dir or SERVDESK_CONFIG_DIR) / "tui_debug.log")
            logging.basicConfig(level=logging.WARNING, handlers=[handler])

        logging.getLogger("servdesk").setLevel(level)
        return logging.getLogger(module_name)

    except OSError as e:
        # Logging is what failed, so stderr is the only place left to say so
        import sys

        print(f"Warning: TUI logging setup failed: {e}", file=sys.stderr)
        return logging.getLogger(module_name)
