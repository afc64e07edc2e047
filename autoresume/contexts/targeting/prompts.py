"""
Prompt templates and response schemas for the three structured LLM calls.

- Job clean-up: raw HTML/text -> JobDescription fields
- Repository ranking: repository digest + job -> ranked_repositories
- Resume content: candidate context + selected repositories -> resume sections
"""

from datetime import datetime
from typing import List, Optional

from autoresume.contexts.intake.job_description import JobDescription
from autoresume.contexts.profile.repository import RepositoryRecord
from autoresume.utils.config import ResumeConfig
from autoresume.utils.timestamp import format_timestamp

RANKING_LIMIT = 10

NO_EDUCATION_CONTEXT = "User has not provided specific education details"
NO_EXPERIENCE_CONTEXT = "User has not provided specific experience details"
NO_SKILLS_CONTEXT = "User has not provided specific skill details"

# =============================================================================
# PROMPT TEMPLATES
# =============================================================================

CLEAN_JOB_PROMPT_TEMPLATE = """\
Extract and clean the job description from the following content. \
If it's HTML, convert to plain text. If it's already plain text, clean it up.

IMPORTANT: Respond ONLY with valid JSON in this format:
{{
  "title": "Job Title",
  "company": "Company Name",
  "description": "Clean job description with key responsibilities",
  "requirements": "Key technical requirements and qualifications"
}}

Content to process:
{content}"""

RANKING_PROMPT_TEMPLATE = """\
Rank and select the BEST {limit} repositories from this candidate's GitHub profile that would be \
most impressive for a resume targeting a {job_title} role at {job_company}.

CRITERIA:
- Recent activity (prefer repos updated in last 2 years)
- Maintenance status (avoid abandoned projects)
- Language diversity (vary the tech stack)
- Relevance to job requirements: {job_description}
- Project maturity (complete, not WIP)
- Star count and forks (community engagement)

REPOSITORIES:
{repositories}

Respond ONLY with valid JSON in this exact format:
{{
  "ranked_repositories": [
    {{
      "rank": 1,
      "name": "project-name",
      "reasoning": "Why this is a good choice for the resume"
    }},
    ...
  ]
}}"""

SYSTEM_PROMPT = """\
You are an expert technical recruiter and resume writer. You write concise, truthful,
achievement-oriented resume content tailored to a specific job posting.

Rules:
- Use only facts present in the candidate context and the repository data. Never invent
  employers, degrees, dates or metrics.
- Prefer concrete technologies and outcomes over generic claims.
- Keep every bullet to a single line; start bullets with a strong action verb.
- Use **double asterisks** to emphasize key technologies and `backticks` for code
  identifiers. Do not use any other markup and never emit LaTeX.
- Write all content in the requested output language.
- Respond ONLY with JSON matching the provided schema."""

RESUME_PROMPT_TEMPLATE = """\
Create tailored resume content for {candidate_name}.

TARGET JOB:
Title: {job_title}
Company: {job_company}
Description:
{job_description}

CANDIDATE CONTEXT:
Education: {education_context}
Experience: {experience_context}
Skills: {skills_context}

GITHUB REPOSITORIES (selected by the candidate):
{repositories}

INSTRUCTIONS:
- skills_by_category: group the candidate's skills that matter for this job into 3-6 categories
  (e.g. Back-end, Front-end, DevOps, Data).
- projects: one entry per repository above, title formatted as "Project Name (Technology/Language)",
  link set to the repository URL, and a single brief line (max 15 words) describing its core purpose
  or key feature.
- education and experience: rewrite the candidate context into entries whose accomplishments
  highlight what is relevant to the job. Return empty lists when no context was provided.
- Output language: {language}."""

# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

JOB_DESCRIPTION_SCHEMA = {
    "type": "object",
    "properties": {
        "title": {"type": "string", "description": "Job title/position name"},
        "company": {"type": "string", "description": "Company name (can be null if not found)"},
        "description": {
            "type": "string",
            "description": "Clean job description with key responsibilities",
        },
        "requirements": {
            "type": "string",
            "description": "Key technical requirements and qualifications",
        },
    },
    "required": ["title", "description", "requirements"],
}

RANKING_SCHEMA = {
    "type": "object",
    "properties": {
        "ranked_repositories": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "rank": {"type": "integer"},
                    "name": {"type": "string"},
                    "reasoning": {"type": "string"},
                },
                "required": ["rank", "name", "reasoning"],
            },
        }
    },
    "required": ["ranked_repositories"],
}

_STRING_LIST = {"type": "array", "items": {"type": "string"}}

RESUME_CONTENT_SCHEMA = {
    "type": "object",
    "properties": {
        "skills_by_category": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "category": {
                        "type": "string",
                        "description": "Technical skill category (e.g., Back-end, Front-end)",
                    },
                    "items": {**_STRING_LIST, "description": "List of specific skills in this category"},
                },
                "required": ["category", "items"],
            },
        },
        "projects": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "title": {
                        "type": "string",
                        "description": "Project name in format: 'Project Name (Technology/Language)'",
                    },
                    "link": {"type": "string", "description": "GitHub repository URL"},
                    "items": {
                        **_STRING_LIST,
                        "description": "Single brief line (max 15 words) describing core purpose or key feature",
                    },
                },
                "required": ["title", "link", "items"],
            },
        },
        "education": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "institution": {"type": "string"},
                    "degree": {"type": "string"},
                    "location": {"type": "string"},
                    "date": {"type": "string"},
                    "accomplishments": _STRING_LIST,
                },
                "required": ["institution", "degree", "location", "date", "accomplishments"],
            },
        },
        "experience": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "company": {"type": "string"},
                    "position": {"type": "string"},
                    "location": {"type": "string"},
                    "date": {"type": "string"},
                    "accomplishments": _STRING_LIST,
                },
                "required": ["company", "position", "location", "date", "accomplishments"],
            },
        },
    },
    "required": ["skills_by_category", "projects", "education", "experience"],
}

# =============================================================================
# PROMPT BUILDERS
# =============================================================================


def _last_updated(repo: RepositoryRecord, reference: Optional[datetime]) -> str:
    if not repo.pushed_at:
        return "unknown"
    relative = format_timestamp(repo.pushed_at, relative=True, reference=reference)
    return f"{format_timestamp(repo.pushed_at)} ({relative})"


def format_repository_line(repo: RepositoryRecord, reference: datetime = None) -> str:
    """
    One digest line per repository.

    Example:
        - api-server [Python (90.0%), Shell (10.0%)] (created: 2021-03-01, last updated:
          2024-05-02 (3mo ago), stars: 12, forks: 3, size: 2048, commits: 150,
          importance: 62) [HAS_README]  https://github.com/jane/api-server
    """
    readme_flag = " [HAS_README]" if repo.readme is not None else ""
    created = format_timestamp(repo.created_at) if repo.created_at else "unknown"
    return (
        f"- {repo.name} [{repo.language_breakdown()}] "
        f"(created: {created}, last updated: {_last_updated(repo, reference)}, "
        f"stars: {repo.stargazers_count}, forks: {repo.forks_count}, size: {repo.size}, "
        f"commits: {repo.commits}, importance: {repo.importance_score}){readme_flag}  {repo.html_url}"
    )


def format_repository_digest(repos: List[RepositoryRecord], reference: datetime = None) -> str:
    return "\n".join(format_repository_line(repo, reference) for repo in repos)


def format_repository_details(repos: List[RepositoryRecord], reference: datetime = None) -> str:
    """Digest lines followed by the fenced README of each repository that has one."""
    blocks = []
    for repo in repos:
        block = format_repository_line(repo, reference)
        if repo.description:
            block += f"\n  About: {repo.description}"
        if repo.readme is not None:
            block += f"\n  README:\n```\n{repo.readme}\n```"
        blocks.append(block)
    return "\n".join(blocks)


def build_clean_job_prompt(raw_content: str) -> str:
    return CLEAN_JOB_PROMPT_TEMPLATE.format(content=raw_content)


def build_ranking_prompt(
    repos: List[RepositoryRecord],
    job: JobDescription,
    reference: datetime = None,
) -> str:
    return RANKING_PROMPT_TEMPLATE.format(
        limit=RANKING_LIMIT,
        job_title=job.title,
        job_company=job.company_or("the target company"),
        job_description=job.description,
        repositories=format_repository_digest(repos, reference),
    )


def build_resume_prompt(
    resume_config: ResumeConfig,
    job: JobDescription,
    repos: List[RepositoryRecord],
    language_name: str,
    reference: datetime = None,
) -> str:
    """
    Build the content-generation user prompt.

    Args:
        resume_config: Candidate identity and free-text context
        job: Normalized job posting
        repos: Repositories chosen by the operator
        language_name: Output language name (e.g., "English", "Portuguese")
        reference: Reference time for relative ages (defaults to now)
    """
    return RESUME_PROMPT_TEMPLATE.format(
        candidate_name=resume_config.full_name,
        job_title=job.title,
        job_company=job.company_or("Unknown Company"),
        job_description=job.description,
        education_context=resume_config.education_context or NO_EDUCATION_CONTEXT,
        experience_context=resume_config.experience_context or NO_EXPERIENCE_CONTEXT,
        skills_context=resume_config.skills_context or NO_SKILLS_CONTEXT,
        repositories=format_repository_details(repos, reference),
        language=language_name,
    )
