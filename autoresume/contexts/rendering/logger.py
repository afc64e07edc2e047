"""
Rendering context logger.

Messages from LaTeX compilation carry the [render] prefix. Rendering modules
import these helpers instead of loguru directly.
"""

from typing import Callable, List

from loguru import logger

from autoresume.utils.logger import log_block

CONTEXT_PREFIX = "[render]"

MAX_LOGGED_ERRORS = 5
MAX_LOGGED_WARNINGS = 3


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def _log_first(label: str, entries: List[str], limit: int, log: Callable[[str], None]) -> None:
    """Log up to limit numbered entries and a count of the rest."""
    for i, entry in enumerate(entries[:limit], 1):
        log(f"  {label} {i}: {entry}")
    if len(entries) > limit:
        log(f"  ... and {len(entries) - limit} more")


def log_compilation_start(compiler: str, num_passes: int, working_dir) -> None:
    _log_info(f"Compiling resume with {compiler} ({num_passes} pass{'es' if num_passes != 1 else ''})")
    _log_debug(f"  Working directory: {working_dir}")


def log_compilation_result(result, elapsed_time: float) -> None:
    """
    Summarize a CompilationResult.

    Failures list the first errors and dump the engine's stdout/stderr into
    the run log; warnings are counted on the console and listed at DEBUG.
    """
    if result.success:
        pages = "" if result.page_count is None else f", {result.page_count} page(s)"
        _log_success(f"PDF ready: {len(result.pdf_bytes or b'')} bytes{pages} ({elapsed_time:.2f}s)")
    else:
        _log_error(f"Compilation failed with {len(result.errors)} error(s) ({elapsed_time:.2f}s)")
        _log_first("Error", result.errors, MAX_LOGGED_ERRORS, _log_error)

    if result.warnings:
        _log_warning(f"{len(result.warnings)} LaTeX warning(s)")
        _log_first("Warning", result.warnings, MAX_LOGGED_WARNINGS, _log_debug)

    if not result.success:
        if result.stdout:
            log_block("ENGINE STDOUT", result.stdout)
        if result.stderr:
            log_block("ENGINE STDERR", result.stderr)
