"""
Resume agent: the three structured LLM calls of a run.

Each call is one attempt of (request + JSON extraction + shape parsing),
retried as a whole with exponential backoff on transport errors and
malformed responses. After the last attempt the error propagates as an
LLMResponseError.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, TypeVar

import httpx

from autoresume.contexts.intake.job_description import PLACEHOLDER_TITLE, JobDescription
from autoresume.contexts.profile.repository import RepositoryRecord
from autoresume.contexts.targeting.logger import _log_debug, _log_info, _log_success
from autoresume.contexts.targeting.prompts import (
    JOB_DESCRIPTION_SCHEMA,
    RANKING_SCHEMA,
    RESUME_CONTENT_SCHEMA,
    SYSTEM_PROMPT,
    build_clean_job_prompt,
    build_ranking_prompt,
    build_resume_prompt,
)
from autoresume.contexts.targeting.resume_content import ResumeContent
from autoresume.contexts.templating.language import ResumeLanguage
from autoresume.exceptions import LLMResponseError
from autoresume.utils.config import DEFAULT_MAX_RETRIES, ResumeConfig
from autoresume.utils.llm import BASE_DELAY, LLMProvider, extract_json_object, retry_with_backoff

RETRYABLE_EXCEPTIONS = (httpx.HTTPError, LLMResponseError)

T = TypeVar("T")


@dataclass(frozen=True)
class RankedRepository:
    """LLM recommendation; ranks are not guaranteed unique or contiguous."""

    rank: int
    name: str
    reasoning: str


def parse_ranked_repositories(data: Dict[str, Any]) -> List[RankedRepository]:
    """
    Keep well-formed ranking entries, dropping the rest silently.

    An entry needs an integer rank, a string name and a string reasoning.
    A missing or non-list "ranked_repositories" yields an empty list.
    """
    entries = data.get("ranked_repositories")
    if not isinstance(entries, list):
        return []

    ranked = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        rank = entry.get("rank")
        name = entry.get("name")
        reasoning = entry.get("reasoning")
        # bool is an int subclass
        if not isinstance(rank, int) or isinstance(rank, bool) or rank < 0:
            continue
        if not isinstance(name, str) or not isinstance(reasoning, str):
            continue
        ranked.append(RankedRepository(rank=rank, name=name, reasoning=reasoning))
    return ranked


def job_description_from_dict(data: Dict[str, Any]) -> JobDescription:
    """Missing or non-string fields fall back to placeholders."""

    def _text(key: str, default: Optional[str]) -> Optional[str]:
        value = data.get(key)
        return value if isinstance(value, str) else default

    return JobDescription(
        title=_text("title", PLACEHOLDER_TITLE),
        company=_text("company", None),
        description=_text("description", ""),
        requirements=_text("requirements", ""),
    )


class ResumeAgent:
    """
    Orchestrates job clean-up, repository ranking and resume content generation.

    Args:
        provider: Structured-output LLM provider
        max_retries: Total attempts per call
        base_delay: Initial backoff delay in seconds
    """

    def __init__(self, provider: LLMProvider, max_retries: int = DEFAULT_MAX_RETRIES, base_delay: float = BASE_DELAY):
        self.provider = provider
        self.max_retries = max_retries
        self.base_delay = base_delay

    async def _structured_call(
        self,
        system_prompt: Optional[str],
        user_prompt: str,
        schema: Dict[str, Any],
        parse: Callable[[Dict[str, Any]], T],
        error_message: str,
    ) -> T:
        async def _attempt() -> T:
            response = await self.provider.complete(system_prompt, user_prompt, schema)
            _log_debug(
                f"Response from {response.model}: {len(response.content)} chars "
                f"({response.input_tokens} in / {response.output_tokens} out tokens)"
            )
            return parse(extract_json_object(response.content))

        try:
            return await retry_with_backoff(
                _attempt,
                retryable_exceptions=RETRYABLE_EXCEPTIONS,
                error_message=error_message,
                max_attempts=self.max_retries,
                base_delay=self.base_delay,
            )
        except httpx.HTTPError as e:
            raise LLMResponseError(f"{error_message}: {type(e).__name__}: {e}") from e

    async def clean_job_description(self, raw_content: str) -> JobDescription:
        """Normalize raw HTML or text into a JobDescription."""
        _log_info(f"Cleaning job description using LLM (max retries: {self.max_retries})")
        _log_debug(f"Job description content length: {len(raw_content)}")

        job = await self._structured_call(
            None,
            build_clean_job_prompt(raw_content),
            JOB_DESCRIPTION_SCHEMA,
            job_description_from_dict,
            "Job clean-up call failed",
        )
        _log_success(f"Job description cleaned: {job.title} at {job.company_or('unknown company')}")
        return job

    async def rank_repositories(
        self,
        repos: List[RepositoryRecord],
        job: JobDescription,
        reference: datetime = None,
    ) -> List[RankedRepository]:
        """Ask the LLM for the repositories best suited to the job."""
        _log_debug(f"Evaluating {len(repos)} repositories")
        prompt = build_ranking_prompt(repos, job, reference)
        _log_debug(f"Ranking prompt length: {len(prompt)} characters")

        ranked = await self._structured_call(
            None,
            prompt,
            RANKING_SCHEMA,
            parse_ranked_repositories,
            "Repository ranking call failed",
        )
        _log_info(f"Ranked {len(ranked)} repositories")
        return ranked

    async def generate_resume_content(
        self,
        resume_config: ResumeConfig,
        job: JobDescription,
        repos: List[RepositoryRecord],
        language: ResumeLanguage,
        reference: datetime = None,
    ) -> ResumeContent:
        """
        Generate tailored resume sections.

        Raises:
            LLMResponseError: If every attempt returns unusable content
        """
        _log_info(f"Generating resume content in {language.display_name} from {len(repos)} repositories")
        prompt = build_resume_prompt(resume_config, job, repos, language.display_name, reference)
        _log_debug(f"Resume prompt length: {len(prompt)} characters")

        content = await self._structured_call(
            SYSTEM_PROMPT,
            prompt,
            RESUME_CONTENT_SCHEMA,
            ResumeContent.from_dict,
            "Resume content call failed",
        )
        _log_success(
            f"Generated resume content: {len(content.skills_by_category)} skill categories, "
            f"{len(content.projects)} projects, {len(content.experience)} experience entries, "
            f"{len(content.education)} education entries"
        )
        return content
