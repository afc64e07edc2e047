"""Custom exceptions for the resume pipeline with diagnostic context."""

from typing import List, Optional

from autoresume.utils.text_processing import truncate

MAX_EXCERPT_LENGTH = 500


class AutoResumeError(Exception):
    """Base class for errors that abort a pipeline run."""


class ConfigError(AutoResumeError):
    """Raised when the configuration file is missing, malformed or incomplete."""


class JobSourceError(AutoResumeError):
    """Raised when the job posting cannot be fetched or read."""


class GitHubAPIError(AutoResumeError):
    """
    Raised when the repository listing request fails.

    Attributes:
        status_code: HTTP status returned by GitHub
        url: Request URL that failed
    """

    def __init__(self, message: str, status_code: Optional[int] = None, url: Optional[str] = None):
        self.status_code = status_code
        self.url = url

        parts = [message]
        if status_code is not None:
            parts.append(f"(status {status_code})")
        if url:
            parts.append(f"at {url}")

        super().__init__(" ".join(parts))


class LLMResponseError(AutoResumeError):
    """
    Raised when an LLM call fails or returns an unusable payload.

    Attributes:
        message: Error description
        status_code: HTTP status of the response, if any
        excerpt: Leading part of the raw response body or text
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        excerpt: Optional[str] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.excerpt = excerpt

        parts = [message]

        if status_code is not None:
            parts.append(f"\nStatus: {status_code}")

        if excerpt:
            parts.append(f"\nResponse excerpt:\n{truncate(excerpt, MAX_EXCERPT_LENGTH)}")

        super().__init__("\n".join(parts))


class CompilationError(AutoResumeError):
    """
    Raised when LaTeX compilation does not produce a PDF.

    Attributes:
        errors: Errors parsed from the engine's log output
    """

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        self.message = message
        self.errors = list(errors or [])

        parts = [message]
        for i, err in enumerate(self.errors[:10], 1):
            parts.append(f"  Error {i}: {err}")
        if len(self.errors) > 10:
            parts.append(f"  ... and {len(self.errors) - 10} more errors")

        super().__init__("\n".join(parts))
