"""Output languages and their localized section headers."""

from enum import Enum
from typing import Dict


class ResumeLanguage(Enum):
    ENGLISH = "en"
    PORTUGUESE = "pt"

    @classmethod
    def from_code(cls, code: str) -> "ResumeLanguage":
        """
        Resolve a language code case-insensitively.

        "pt", "pt-br" and "portuguese" select Portuguese; anything else
        (including "en", "en-us", "english" and unknown codes) selects English.
        """
        normalized = (code or "").strip().lower()
        if normalized in ("pt", "pt-br", "portuguese"):
            return cls.PORTUGUESE
        return cls.ENGLISH

    @property
    def display_name(self) -> str:
        return "Portuguese" if self is ResumeLanguage.PORTUGUESE else "English"

    @property
    def headers(self) -> Dict[str, str]:
        return SECTION_HEADERS[self]


SECTION_HEADERS = {
    ResumeLanguage.ENGLISH: {
        "education": "Education",
        "skills": "Technical Skills",
        "experience": "Professional Experience",
        "projects": "Key Projects",
    },
    ResumeLanguage.PORTUGUESE: {
        "education": "Educação",
        "skills": "Habilidades Técnicas",
        "experience": "Experiência Profissional",
        "projects": "Projetos e Performance",
    },
}
