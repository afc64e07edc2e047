"""
Text processing utilities for formatting and display.
"""

import re
from typing import List

URL_SCHEME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")


def strip_url(url: str) -> str:
    """
    Strip scheme, leading "www." and trailing slashes for display.

    Example:
        >>> strip_url("https://www.linkedin.com/in/jane/")
        'linkedin.com/in/jane'
    """
    display = URL_SCHEME_PATTERN.sub("", url.strip())
    if display.startswith("www."):
        display = display[len("www."):]
    return display.rstrip("/")


def split_csv(text: str) -> List[str]:
    """Split comma-separated user input into trimmed tokens (empty tokens preserved)."""
    return [token.strip() for token in text.split(",")]


def truncate(text: str, limit: int = 200) -> str:
    """Truncate text to limit characters, marking the cut with an ellipsis."""
    return text[:limit] + "..." if len(text) > limit else text
