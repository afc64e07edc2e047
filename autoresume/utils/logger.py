"""
Run-level logger setup.

Every CLI invocation gets its own directory under LOGS_PATH holding a DEBUG
file log, while the console shows the level chosen with --verbosity.
Console output goes to stderr so typer's stdout stays clean for results.
Context-specific wrappers are defined in contexts/{context}/logger.py.
"""

import sys
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv
from loguru import logger

from autoresume.utils.timestamp import now

load_dotenv()

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"
RULE = "=" * 80

LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def new_run_dir(base_dir: Path, prefix: str = "run") -> Path:
    """Directory name for one run, e.g. outs/logs/run_20251114_123456."""
    return Path(base_dir) / f"{prefix}_{now()}"


def setup_logger(
    context_name: str,
    log_dir: Path,
    console_level: str = "INFO",
    extra_provenance: Optional[Dict[str, object]] = None,
    level_colors: dict = {},
) -> Path:
    """
    Route loguru output to a run log file and the console.

    Args:
        context_name: Log file stem (e.g., "autoresume" -> autoresume.log)
        log_dir: Directory for this run, created if missing
        console_level: Minimum console level (e.g., "DEBUG", "WARNING")
        extra_provenance: Extra key-value pairs written to the provenance header
        level_colors: Console color overrides (e.g., {"INFO": "<cyan>"})

    Returns:
        Path to the log file

    Example:
        log_file = setup_logger(
            context_name="autoresume",
            log_dir=new_run_dir(Path("outs/logs")),
            console_level="DEBUG",
            extra_provenance={"LaTeX compiler": "tectonic"},
        )
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{context_name}.log"

    # Drop loguru's default stderr sink (and any sink from a previous run)
    logger.remove()

    for level_name, color in {**LEVEL_COLORS, **level_colors}.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=console_level.upper(), colorize=True)

    log_provenance(extra_provenance)
    return log_file


def log_provenance(extra_context: Optional[Dict[str, object]] = None) -> None:
    """
    Write the provenance header (script, arguments, directory, Python) at DEBUG.

    Keeps the console quiet while every run log records how it was produced.
    """
    provenance = {
        "Script": sys.argv[0],
        "Command": " ".join(sys.argv),
        "Working directory": Path.cwd(),
        "Python": sys.version.split()[0],
        **(extra_context or {}),
    }

    logger.debug(RULE)
    for key, value in provenance.items():
        logger.debug(f"{key}: {value}")
    logger.debug(RULE)


def log_block(title: str, body: str) -> None:
    """Log multi-line tool output verbatim, framed by rules, at DEBUG."""
    # raw=True skips the line format so every output line is kept as-is
    logger.opt(raw=True).debug(f"\n{RULE}\n{title}:\n{RULE}\n{body}\n")
