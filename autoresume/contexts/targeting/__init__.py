"""
Targeting Context

Responsibilities:
- LLM job description clean-up
- Repository ranking against the target job
- Interactive repository selection
- Tailored resume content generation

Owns:
- Prompt templates and response schemas
- RankedRepository and ResumeContent data structures
- Mapping of generated content onto resume sections

Never:
- Talks to GitHub directly (receives RepositoryRecord lists)
- Produces LaTeX (hands ResumeSections to the templating context)
"""

from autoresume.contexts.targeting.agent import RankedRepository, ResumeAgent, parse_ranked_repositories
from autoresume.contexts.targeting.resume_content import (
    ResumeContent,
    ResumeSections,
    apply_sections,
    resume_content_to_sections,
)
from autoresume.contexts.targeting.selector import (
    RepositorySelector,
    SelectionState,
    TerminalConsole,
    select_repositories,
)

__all__ = [
    "RankedRepository",
    "RepositorySelector",
    "ResumeAgent",
    "ResumeContent",
    "ResumeSections",
    "SelectionState",
    "TerminalConsole",
    "apply_sections",
    "parse_ranked_repositories",
    "resume_content_to_sections",
    "select_repositories",
]
