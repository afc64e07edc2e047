"""Job description data structure consumed by ranking and content generation prompts."""

from dataclasses import dataclass
from typing import Optional

PLACEHOLDER_TITLE = "Job Title"
FILE_JOB_TITLE = "Job Description"
UNKNOWN_POSITION_TITLE = "Unknown Position"


@dataclass
class JobDescription:
    """
    Normalized job posting.

    Attributes:
        title: Position name
        company: Hiring company, None when unknown
        description: Responsibilities and general description
        requirements: Technical requirements and qualifications
    """

    title: str
    description: str
    requirements: str
    company: Optional[str] = None

    @classmethod
    def from_text(cls, text: str) -> "JobDescription":
        """Wrap unstructured posting text; the whole text serves as description and requirements."""
        return cls(title=FILE_JOB_TITLE, description=text, requirements=text)

    def company_or(self, fallback: str) -> str:
        return self.company if self.company else fallback
