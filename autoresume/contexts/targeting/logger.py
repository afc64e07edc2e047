"""
Targeting context logger.

Provides logging interface for the LLM targeting context with automatic [llm] prefix.
"""

from loguru import logger

CONTEXT_PREFIX = "[llm]"


def _log_info(message: str) -> None:
    """Log info message with [llm] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [llm] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [llm] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
