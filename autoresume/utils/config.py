"""
Configuration loading for resume generation.

The configuration is a YAML file loaded with OmegaConf (so values may use
interpolations such as ``${oc.env:GEMINI_API_KEY}``) and converted into frozen
dataclasses. It is loaded once per run and passed explicitly to every
component; nothing mutates it afterwards. Stages that need a modified copy
(e.g. replacing baseline resume sections with LLM output) use
``dataclasses.replace``.

Example config.yaml:

    resume:
      full_name: Jane Doe
      city: Lisbon
      country: Portugal
      email: jane@example.com
      github: https://github.com/janedoe
      experience_context: "Backend engineer at Acme since 2021"
      education:
        - title: University of Lisbon
          description: BSc Computer Science
          date: 2016 -- 2020
          location: Lisbon
          items: []
    github:
      username: janedoe
      token: ${oc.env:GITHUB_TOKEN,null}
    llm:
      model: gemini-2.0-flash-exp
      max_retries: 3
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from dotenv import load_dotenv
from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException

from autoresume.exceptions import ConfigError

load_dotenv()

DEFAULT_LLM_MODEL = "gemini-2.0-flash-exp"
DEFAULT_LLM_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models"
DEFAULT_MAX_RETRIES = 3
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_OUTPUT_TOKENS = 8192

# Environment fallbacks for credentials left out of the config file
ENV_GITHUB_TOKEN = "GITHUB_TOKEN"
ENV_LLM_API_KEY = "GEMINI_API_KEY"

RESUME_SECTIONS = ("education", "skills", "experience", "projects")


@dataclass(frozen=True)
class ResumeItem:
    """
    Uniform bullet block used for every resume section.

    Attributes:
        title: Bold heading (institution, company, project name)
        date: Date or date range shown next to the description
        location: Location shown right-aligned next to the title
        description: Italic line under the title (degree, position)
        link: URL the location is hyperlinked to
        items: Ordered bullet strings (may contain **bold** and `code` spans)
    """

    title: Optional[str] = None
    date: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    link: Optional[str] = None
    items: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResumeItem":
        if not isinstance(data, dict):
            raise ConfigError(f"Resume item must be a mapping, got: {data!r}")
        items = data.get("items") or []
        if not isinstance(items, list):
            raise ConfigError(f"Resume item 'items' must be a list, got: {items!r}")
        return cls(
            title=_optional_str(data.get("title")),
            date=_optional_str(data.get("date")),
            location=_optional_str(data.get("location")),
            description=_optional_str(data.get("description")),
            link=_optional_str(data.get("link")),
            items=tuple(str(item) for item in items),
        )


@dataclass(frozen=True)
class ResumeConfig:
    """Candidate identity, contact fields and baseline resume sections."""

    full_name: str
    country: str
    city: str
    email: Optional[str] = None
    phone: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    site: Optional[str] = None
    education: Tuple[ResumeItem, ...] = ()
    skills: Tuple[ResumeItem, ...] = ()
    experience: Tuple[ResumeItem, ...] = ()
    projects: Tuple[ResumeItem, ...] = ()
    education_context: Optional[str] = None
    experience_context: Optional[str] = None
    skills_context: Optional[str] = None


@dataclass(frozen=True)
class GithubConfig:
    username: str
    token: Optional[str] = None


@dataclass(frozen=True)
class LLMConfig:
    api_key: Optional[str] = None
    model: str = DEFAULT_LLM_MODEL
    endpoint: str = DEFAULT_LLM_ENDPOINT
    max_retries: int = DEFAULT_MAX_RETRIES
    temperature: float = DEFAULT_TEMPERATURE
    max_output_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS


@dataclass(frozen=True)
class AppConfig:
    resume: ResumeConfig
    github: GithubConfig
    llm: LLMConfig = field(default_factory=LLMConfig)


def _optional_str(value: Any) -> Optional[str]:
    """Normalize optional scalar config values: None and blank strings become None."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _required_str(section: Dict[str, Any], key: str, section_name: str) -> str:
    value = _optional_str(section.get(key))
    if value is None:
        raise ConfigError(f"Missing required config field: {section_name}.{key}")
    return value


def _section(data: Dict[str, Any], name: str, required: bool = True) -> Dict[str, Any]:
    section = data.get(name)
    if section is None:
        if required:
            raise ConfigError(f"Missing required config section: '{name}'")
        return {}
    if not isinstance(section, dict):
        raise ConfigError(f"Config section '{name}' must be a mapping")
    return section


def _resume_items(section: Dict[str, Any], key: str) -> Tuple[ResumeItem, ...]:
    raw_items = section.get(key) or []
    if not isinstance(raw_items, list):
        raise ConfigError(f"Config field resume.{key} must be a list of items")
    return tuple(ResumeItem.from_dict(item) for item in raw_items)


def build_config(data: Dict[str, Any]) -> AppConfig:
    """
    Build an AppConfig from a plain dict (e.g., the resolved YAML content).

    Credentials missing from the dict fall back to the GITHUB_TOKEN and
    GEMINI_API_KEY environment variables.

    Raises:
        ConfigError: If a required section or field is missing or malformed
    """
    resume = _section(data, "resume")
    github = _section(data, "github")
    llm = _section(data, "llm", required=False)

    resume_config = ResumeConfig(
        full_name=_required_str(resume, "full_name", "resume"),
        country=_required_str(resume, "country", "resume"),
        city=_required_str(resume, "city", "resume"),
        email=_optional_str(resume.get("email")),
        phone=_optional_str(resume.get("phone")),
        linkedin=_optional_str(resume.get("linkedin")),
        github=_optional_str(resume.get("github")),
        site=_optional_str(resume.get("site")),
        education=_resume_items(resume, "education"),
        skills=_resume_items(resume, "skills"),
        experience=_resume_items(resume, "experience"),
        projects=_resume_items(resume, "projects"),
        education_context=_optional_str(resume.get("education_context")),
        experience_context=_optional_str(resume.get("experience_context")),
        skills_context=_optional_str(resume.get("skills_context")),
    )

    github_config = GithubConfig(
        username=_required_str(github, "username", "github"),
        token=_optional_str(github.get("token")) or _optional_str(os.getenv(ENV_GITHUB_TOKEN)),
    )

    try:
        llm_config = LLMConfig(
            api_key=_optional_str(llm.get("api_key")) or _optional_str(os.getenv(ENV_LLM_API_KEY)),
            model=_optional_str(llm.get("model")) or DEFAULT_LLM_MODEL,
            endpoint=_optional_str(llm.get("endpoint")) or DEFAULT_LLM_ENDPOINT,
            max_retries=int(llm.get("max_retries", DEFAULT_MAX_RETRIES)),
            temperature=float(llm.get("temperature", DEFAULT_TEMPERATURE)),
            max_output_tokens=int(llm.get("max_output_tokens", DEFAULT_MAX_OUTPUT_TOKENS)),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid numeric value in config section 'llm': {e}") from e

    if llm_config.max_retries < 1:
        raise ConfigError("Config field llm.max_retries must be at least 1")

    return AppConfig(resume=resume_config, github=github_config, llm=llm_config)


def load_config(config_path: Path) -> AppConfig:
    """
    Load the YAML configuration file.

    Args:
        config_path: Path to the YAML config file

    Returns:
        Frozen AppConfig shared read-only by the whole run

    Raises:
        ConfigError: If the file is missing, cannot be resolved, or is incomplete
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        loaded = OmegaConf.load(config_path)
        if not isinstance(loaded, DictConfig):
            raise ConfigError(f"Config file must contain a mapping at root level: {config_path}")
        data = OmegaConf.to_container(loaded, resolve=True)
    except OmegaConfBaseException as e:
        raise ConfigError(f"Failed to resolve config file {config_path}: {e}") from e

    return build_config(data)


def require_llm_api_key(config: AppConfig) -> str:
    """Return the LLM API key or fail before any network activity."""
    if not config.llm.api_key:
        raise ConfigError(
            f"LLM API key not configured: set llm.api_key in the config file "
            f"or the {ENV_LLM_API_KEY} environment variable"
        )
    return config.llm.api_key
