"""
Structured resume content produced by the LLM and its mapping onto resume items.

Parsing is strict: every field declared required by RESUME_CONTENT_SCHEMA must
be present with the right type, otherwise LLMResponseError is raised so the
whole generation call can be retried.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Tuple

from autoresume.exceptions import LLMResponseError
from autoresume.utils.config import ResumeConfig, ResumeItem

PROJECT_LOCATION = "GitHub"


def _require_str(data: Dict[str, Any], key: str, context: str) -> str:
    value = data.get(key) if isinstance(data, dict) else None
    if not isinstance(value, str):
        raise LLMResponseError(f"Resume content field '{context}.{key}' is missing or not a string")
    return value


def _require_str_list(data: Dict[str, Any], key: str, context: str) -> Tuple[str, ...]:
    value = data.get(key) if isinstance(data, dict) else None
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise LLMResponseError(f"Resume content field '{context}.{key}' is missing or not a list of strings")
    return tuple(value)


def _require_list(data: Dict[str, Any], key: str) -> List[Any]:
    value = data.get(key)
    if not isinstance(value, list):
        raise LLMResponseError(f"Resume content field '{key}' is missing or not a list")
    return value


@dataclass(frozen=True)
class SkillCategory:
    category: str
    items: Tuple[str, ...]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SkillCategory":
        return cls(
            category=_require_str(data, "category", "skills_by_category"),
            items=_require_str_list(data, "items", "skills_by_category"),
        )


@dataclass(frozen=True)
class ProjectEntry:
    title: str
    link: str
    items: Tuple[str, ...]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectEntry":
        return cls(
            title=_require_str(data, "title", "projects"),
            link=_require_str(data, "link", "projects"),
            items=_require_str_list(data, "items", "projects"),
        )


@dataclass(frozen=True)
class EducationEntry:
    institution: str
    degree: str
    location: str
    date: str
    accomplishments: Tuple[str, ...]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EducationEntry":
        return cls(
            institution=_require_str(data, "institution", "education"),
            degree=_require_str(data, "degree", "education"),
            location=_require_str(data, "location", "education"),
            date=_require_str(data, "date", "education"),
            accomplishments=_require_str_list(data, "accomplishments", "education"),
        )


@dataclass(frozen=True)
class ExperienceEntry:
    company: str
    position: str
    location: str
    date: str
    accomplishments: Tuple[str, ...]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExperienceEntry":
        return cls(
            company=_require_str(data, "company", "experience"),
            position=_require_str(data, "position", "experience"),
            location=_require_str(data, "location", "experience"),
            date=_require_str(data, "date", "experience"),
            accomplishments=_require_str_list(data, "accomplishments", "experience"),
        )


@dataclass(frozen=True)
class ResumeContent:
    """
    LLM-generated resume sections.

    Attributes:
        skills_by_category: Skill groups, rendered as one bullet per category
        projects: One entry per selected repository
        education: Rewritten education entries
        experience: Rewritten experience entries
    """

    skills_by_category: Tuple[SkillCategory, ...]
    projects: Tuple[ProjectEntry, ...]
    education: Tuple[EducationEntry, ...]
    experience: Tuple[ExperienceEntry, ...]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResumeContent":
        """
        Strictly parse the LLM JSON object.

        Raises:
            LLMResponseError: If any required field is missing or has the wrong type
        """
        return cls(
            skills_by_category=tuple(
                SkillCategory.from_dict(item) for item in _require_list(data, "skills_by_category")
            ),
            projects=tuple(ProjectEntry.from_dict(item) for item in _require_list(data, "projects")),
            education=tuple(EducationEntry.from_dict(item) for item in _require_list(data, "education")),
            experience=tuple(ExperienceEntry.from_dict(item) for item in _require_list(data, "experience")),
        )


@dataclass(frozen=True)
class ResumeSections:
    """Resume items per section, ready to replace the configured baseline."""

    skills: Tuple[ResumeItem, ...] = field(default_factory=tuple)
    experience: Tuple[ResumeItem, ...] = field(default_factory=tuple)
    projects: Tuple[ResumeItem, ...] = field(default_factory=tuple)
    education: Tuple[ResumeItem, ...] = field(default_factory=tuple)


def resume_content_to_sections(content: ResumeContent) -> ResumeSections:
    """
    Map LLM content onto uniform resume items.

    Skills collapse into a single item with one "**Category**: a, b" bullet
    per category. Projects link to their repository with location "GitHub".
    Education and experience use institution/company as title and
    degree/position as description.
    """
    skills: Tuple[ResumeItem, ...] = ()
    if content.skills_by_category:
        skills = (
            ResumeItem(
                items=tuple(
                    f"**{category.category}**: {', '.join(category.items)}"
                    for category in content.skills_by_category
                )
            ),
        )

    projects = tuple(
        ResumeItem(title=project.title, location=PROJECT_LOCATION, link=project.link, items=project.items)
        for project in content.projects
    )

    education = tuple(
        ResumeItem(
            title=entry.institution,
            date=entry.date,
            location=entry.location,
            description=entry.degree,
            items=entry.accomplishments,
        )
        for entry in content.education
    )

    experience = tuple(
        ResumeItem(
            title=entry.company,
            date=entry.date,
            location=entry.location,
            description=entry.position,
            items=entry.accomplishments,
        )
        for entry in content.experience
    )

    return ResumeSections(skills=skills, experience=experience, projects=projects, education=education)


def apply_sections(resume_config: ResumeConfig, sections: ResumeSections) -> ResumeConfig:
    """
    Return a copy of resume_config with generated sections swapped in.

    A section is replaced wholesale only when the LLM produced at least one
    entry for it; otherwise the configured baseline is kept.
    """
    overrides = {
        name: getattr(sections, name)
        for name in ("skills", "experience", "projects", "education")
        if getattr(sections, name)
    }
    return replace(resume_config, **overrides)
