"""
Templating Context

Responsibilities:
- Assemble the LaTeX resume document from the resume configuration
- Escape free text for LaTeX (including **bold** and `code` spans)
- Localize section headers

Owns:
- resume.tex.jinja template
- ResumeLanguage and section header translations

Never:
- Compiles LaTeX (rendering context's job)
- Calls the LLM or GitHub
"""

from autoresume.contexts.templating.assembler import LatexResumeAssembler, render_item
from autoresume.contexts.templating.escaping import escape_latex
from autoresume.contexts.templating.language import ResumeLanguage

__all__ = ["LatexResumeAssembler", "ResumeLanguage", "escape_latex", "render_item"]
