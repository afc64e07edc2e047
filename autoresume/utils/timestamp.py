"""Timestamp formatting utilities."""

from datetime import datetime, timezone
from typing import Optional


def now() -> str:
    """Current local time as a filesystem-safe stamp (e.g., "20251114_123456")."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def parse_github_timestamp(iso_timestamp: str) -> Optional[datetime]:
    """
    Parse a GitHub API timestamp (e.g., "2024-03-01T12:00:00Z") into an aware datetime.

    Returns None when the value is empty or malformed.
    """
    if not iso_timestamp:
        return None
    try:
        dt = datetime.fromisoformat(iso_timestamp.replace("Z", "+00:00"))
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def format_timestamp(iso_timestamp: str, relative: bool = False, reference: datetime = None) -> str:
    """
    Format ISO 8601 timestamp to readable format.

    Args:
        iso_timestamp: ISO 8601 formatted timestamp string
        relative: If True, show relative time (e.g., "3mo ago")
                 If False, show the calendar date (e.g., "2025-11-13")
        reference: Point in time to measure relative age from (default: now)

    Returns:
        Human-readable timestamp, or the original string if it cannot be parsed

    Examples:
        format_timestamp("2025-11-13T18:45:40Z")
        # "2025-11-13"

        format_timestamp("2025-11-13T18:45:40Z", relative=True)
        # "2d ago"
    """
    dt = parse_github_timestamp(iso_timestamp)
    if dt is None:
        return iso_timestamp

    if relative:
        return _format_relative_time(dt, reference)
    return dt.strftime("%Y-%m-%d")


def _format_relative_time(dt: datetime, reference: datetime = None) -> str:
    """
    Format datetime as compact relative age.

    Repository activity is measured in days to years, so the units are:
    - Days: "5d ago"
    - Months: "3mo ago"
    - Years: "2y ago"
    """
    reference = reference or datetime.now(timezone.utc)
    days = (reference - dt).days

    if days < 0:
        return "in the future"
    if days < 31:
        return f"{days}d ago"
    if days < 365:
        return f"{days // 30}mo ago"
    return f"{days // 365}y ago"
