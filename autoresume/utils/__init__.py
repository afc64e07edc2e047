"""
Shared utilities for auto-resume.

Common functionality used across contexts:
- Configuration loading
- Logging setup
- LLM provider and response parsing
- Text, timestamp and PDF helpers
"""

from autoresume.utils.timestamp import now

__all__ = ["now"]
