"""
Profile context logger.

Provides logging interface for the GitHub profile context with automatic [github] prefix.
All profile modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[github]"


def _log_info(message: str) -> None:
    """Log info message with [github] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [github] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [github] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [github] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
