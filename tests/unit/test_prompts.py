"""
Unit tests for prompt building and repository digests.
"""

from dataclasses import replace
from datetime import datetime, timezone

import pytest
from conftest import make_repo

from autoresume.contexts.intake.job_description import JobDescription
from autoresume.contexts.targeting.prompts import (
    NO_SKILLS_CONTEXT,
    build_clean_job_prompt,
    build_ranking_prompt,
    build_resume_prompt,
    format_repository_details,
    format_repository_line,
)

REFERENCE = datetime(2025, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def repo():
    return make_repo(
        "api-server",
        stargazers_count=12,
        forks_count=3,
        size=2048,
        created_at="2021-03-01T10:00:00Z",
        pushed_at="2024-12-22T10:00:00Z",
        languages={"Shell": 100, "Python": 300},
        readme="# API server",
        commits=150,
        description="Invoice API",
    )


@pytest.mark.unit
class TestRepositoryLine:
    """Tests for format_repository_line()."""

    def test_full_line(self, repo):
        line = format_repository_line(repo, REFERENCE)

        assert line == (
            "- api-server [Python (75.0%), Shell (25.0%)] "
            "(created: 2021-03-01, last updated: 2024-12-22 (9d ago), "
            "stars: 12, forks: 3, size: 2048, commits: 150, importance: 62) [HAS_README]  "
            "https://github.com/jane/api-server"
        )

    def test_minimal_repository(self):
        """Missing dates, languages and README are rendered explicitly."""
        line = format_repository_line(make_repo("bare"), REFERENCE)

        assert "[Unknown]" in line
        assert "created: unknown, last updated: unknown" in line
        assert "[HAS_README]" not in line

    def test_details_include_readme_and_about(self, repo):
        details = format_repository_details([repo, make_repo("bare")], REFERENCE)

        assert "\n  About: Invoice API" in details
        assert "\n  README:\n```\n# API server\n```" in details
        assert details.count("README:") == 1


@pytest.mark.unit
class TestPromptBuilders:
    """Tests for the three prompt builders."""

    def test_clean_job_prompt_embeds_content(self):
        prompt = build_clean_job_prompt("<div>Hiring</div>")

        assert prompt.endswith("Content to process:\n<div>Hiring</div>")
        assert '"requirements": "Key technical requirements and qualifications"' in prompt

    def test_ranking_prompt(self, repo):
        job = JobDescription(title="Backend Engineer", description="Build APIs", requirements="Python", company="Acme")

        prompt = build_ranking_prompt([repo], job, REFERENCE)

        assert "BEST 10 repositories" in prompt
        assert "a Backend Engineer role at Acme" in prompt
        assert "Relevance to job requirements: Build APIs" in prompt
        assert "- api-server [Python (75.0%)" in prompt

    def test_resume_prompt_context_fallbacks(self, resume_config, repo):
        job = JobDescription(title="Backend Engineer", description="Build APIs", requirements="Python")

        prompt = build_resume_prompt(resume_config, job, [repo], "English", REFERENCE)

        assert "Create tailored resume content for Jane Doe." in prompt
        assert "Company: Unknown Company" in prompt
        assert f"Skills: {NO_SKILLS_CONTEXT}" in prompt
        assert prompt.endswith("Output language: English.")

    def test_resume_prompt_uses_context(self, resume_config):
        config = replace(resume_config, skills_context="Python, Go, Kubernetes")
        job = JobDescription(title="SRE", description="Keep it up", requirements="Linux", company="Globex")

        prompt = build_resume_prompt(config, job, [], "Portuguese", REFERENCE)

        assert "Skills: Python, Go, Kubernetes" in prompt
        assert "Company: Globex" in prompt
