"""
Unit tests for the resume agent and ranking response parsing.
"""

import asyncio
import json
from datetime import datetime, timezone

import httpx
import pytest
from conftest import FakeProvider, make_repo

from autoresume.contexts.intake.job_description import JobDescription
from autoresume.contexts.targeting.agent import (
    RankedRepository,
    ResumeAgent,
    job_description_from_dict,
    parse_ranked_repositories,
)
from autoresume.contexts.targeting.prompts import NO_EDUCATION_CONTEXT, RANKING_SCHEMA, SYSTEM_PROMPT
from autoresume.contexts.templating.language import ResumeLanguage
from autoresume.exceptions import LLMResponseError

REFERENCE = datetime(2025, 1, 1, tzinfo=timezone.utc)

RESUME_JSON = json.dumps(
    {
        "skills_by_category": [{"category": "Back-end", "items": ["Python", "Go"]}],
        "projects": [{"title": "Alpha (Python)", "link": "https://github.com/jane/alpha", "items": ["REST API"]}],
        "education": [],
        "experience": [],
    }
)


@pytest.fixture
def job():
    return JobDescription(title="Backend Engineer", company=None, description="Build APIs", requirements="Python")


@pytest.mark.unit
class TestParseRankedRepositories:
    """Tests for parse_ranked_repositories()."""

    def test_drops_malformed_entries(self):
        """Entries missing rank, name or reasoning (or mistyped) are dropped; the rest are kept."""
        data = {
            "ranked_repositories": [
                {"rank": 1, "name": "alpha", "reasoning": "Relevant API work"},
                {"rank": 2, "reasoning": "No name"},
                {"rank": "3", "name": "gamma", "reasoning": "String rank"},
                {"rank": 4, "name": "delta"},
                {"rank": True, "name": "epsilon", "reasoning": "Bool rank"},
                "not an object",
                {"rank": 6, "name": "zeta", "reasoning": "Also fine"},
            ]
        }

        assert parse_ranked_repositories(data) == [
            RankedRepository(rank=1, name="alpha", reasoning="Relevant API work"),
            RankedRepository(rank=6, name="zeta", reasoning="Also fine"),
        ]

    def test_missing_array(self):
        assert parse_ranked_repositories({}) == []
        assert parse_ranked_repositories({"ranked_repositories": "nope"}) == []

    def test_duplicate_ranks_kept(self):
        """Ranks are not required to be unique."""
        data = {
            "ranked_repositories": [
                {"rank": 1, "name": "a", "reasoning": "x"},
                {"rank": 1, "name": "b", "reasoning": "y"},
            ]
        }

        assert [entry.name for entry in parse_ranked_repositories(data)] == ["a", "b"]


@pytest.mark.unit
class TestJobDescriptionFromDict:
    """Tests for clean-up response fallbacks."""

    def test_all_fields(self):
        job = job_description_from_dict(
            {"title": "SRE", "company": "Acme", "description": "Run things", "requirements": "Linux"}
        )

        assert job == JobDescription(title="SRE", company="Acme", description="Run things", requirements="Linux")

    def test_placeholders(self):
        job = job_description_from_dict({"company": None})

        assert job.title == "Job Title"
        assert job.company is None
        assert job.description == ""
        assert job.requirements == ""


@pytest.mark.unit
class TestResumeAgent:
    """Tests for ResumeAgent calls against a fake provider."""

    def test_clean_job_description(self):
        provider = FakeProvider(['{"title": "Data Engineer", "description": "Pipelines", "requirements": "SQL"}'])
        agent = ResumeAgent(provider, max_retries=3, base_delay=0)

        job = asyncio.run(agent.clean_job_description("<html>raw</html>"))

        assert job.title == "Data Engineer"
        assert job.company is None
        assert "<html>raw</html>" in provider.calls[0][1]

    def test_rank_retries_malformed_response(self, job):
        """A malformed response is retried and the next valid one is used."""
        provider = FakeProvider(
            [
                "no json here",
                '{"ranked_repositories": [{"rank": 1, "name": "alpha", "reasoning": "Fits"}]}',
            ]
        )
        agent = ResumeAgent(provider, max_retries=3, base_delay=0)

        ranked = asyncio.run(agent.rank_repositories([make_repo("alpha")], job, reference=REFERENCE))

        assert ranked == [RankedRepository(rank=1, name="alpha", reasoning="Fits")]
        assert len(provider.calls) == 2
        assert provider.calls[0][2] == RANKING_SCHEMA
        assert "the target company" in provider.calls[0][1]

    def test_rank_retries_transport_errors(self, job):
        provider = FakeProvider(
            [
                httpx.ConnectError("down"),
                '{"ranked_repositories": []}',
            ]
        )
        agent = ResumeAgent(provider, max_retries=2, base_delay=0)

        assert asyncio.run(agent.rank_repositories([], job)) == []
        assert len(provider.calls) == 2

    def test_transport_error_after_last_attempt_is_llm_error(self, job):
        """A Gemini outage surfaces as LLMResponseError once every attempt fails."""
        provider = FakeProvider([httpx.ConnectError("down"), httpx.ReadTimeout("slow")])
        agent = ResumeAgent(provider, max_retries=2, base_delay=0)

        with pytest.raises(LLMResponseError, match="Repository ranking call failed: ReadTimeout") as exc_info:
            asyncio.run(agent.rank_repositories([], job))

        assert isinstance(exc_info.value.__cause__, httpx.ReadTimeout)
        assert len(provider.calls) == 2

    def test_generate_resume_content(self, job, resume_config):
        provider = FakeProvider([RESUME_JSON])
        agent = ResumeAgent(provider, max_retries=1, base_delay=0)

        content = asyncio.run(
            agent.generate_resume_content(
                resume_config, job, [make_repo("alpha", readme="# Alpha")], ResumeLanguage.PORTUGUESE, REFERENCE
            )
        )

        system_prompt, user_prompt, _ = provider.calls[0]
        assert system_prompt == SYSTEM_PROMPT
        assert "Output language: Portuguese" in user_prompt
        assert NO_EDUCATION_CONTEXT in user_prompt
        assert "README:\n```\n# Alpha\n```" in user_prompt
        assert content.projects[0].title == "Alpha (Python)"

    def test_generate_strict_parse_exhausts_retries(self, job, resume_config):
        """Content missing a required section fails every attempt, then propagates."""
        incomplete = '{"skills_by_category": [], "projects": [], "education": []}'
        provider = FakeProvider([incomplete, incomplete, incomplete])
        agent = ResumeAgent(provider, max_retries=3, base_delay=0)

        with pytest.raises(LLMResponseError, match="experience"):
            asyncio.run(agent.generate_resume_content(resume_config, job, [], ResumeLanguage.ENGLISH))

        assert len(provider.calls) == 3
