"""
LaTeX Resume Assembler

Renders the resume configuration (baseline sections or the LLM-generated
replacements) into a complete LaTeX document using the fixed
resume.tex.jinja template.
"""

import os
from pathlib import Path
from typing import List, Sequence

from dotenv import load_dotenv
from jinja2 import Environment, FileSystemLoader, StrictUndefined

from autoresume.contexts.templating.escaping import escape_latex, escape_plain
from autoresume.contexts.templating.language import ResumeLanguage
from autoresume.contexts.templating.logger import _log_debug, _log_info
from autoresume.utils.config import RESUME_SECTIONS, ResumeConfig, ResumeItem
from autoresume.utils.text_processing import strip_url

load_dotenv()
TEMPLATING_CONTEXT_PATH = Path(os.getenv("TEMPLATING_CONTEXT_PATH", Path(__file__).parent))

RESUME_TEMPLATE_NAME = "resume.tex.jinja"
CONTACT_SEPARATOR = r"\ $|$ \ "
ITEMIZE_BEGIN = r"\begin{itemize}[noitemsep,topsep=0pt,leftmargin=*]"
ITEMIZE_END = r"\end{itemize}"


def build_environment(template_dir: Path) -> Environment:
    return Environment(
        loader=FileSystemLoader(str(template_dir)),
        # Catches silent failures
        undefined=StrictUndefined,
        # Custom delimiters to avoid LaTeX brace conflicts
        variable_start_string="<<<",
        variable_end_string=">>>",
        block_start_string="<%%",
        block_end_string="%%>",
        comment_start_string="<#",
        comment_end_string="#>",
        # Preserve whitespace (important for LaTeX)
        trim_blocks=False,
        lstrip_blocks=False,
        keep_trailing_newline=True,
    )


def render_item(item: ResumeItem) -> str:
    """
    Render one resume item block.

    Layout:
        \\noindent \\textbf{Title} \\hfill Location \\\\
        \\textit{Description} \\hfill Date
        \\begin{itemize}[...]
            \\item Bullet
        \\end{itemize}

    Every line is optional; the itemize is omitted when there are no bullets.
    """
    lines = []

    if item.title is not None:
        title = rf"\noindent \textbf{{{escape_latex(item.title)}}}"
        if item.location is not None:
            if item.link is not None:
                title += rf" \hfill \href{{{item.link}}}{{{escape_latex(item.location)}}}"
            else:
                title += rf" \hfill {escape_latex(item.location)}"
        if item.description is not None:
            title += r" \\"
        lines.append(title)

    if item.description is not None:
        description = rf"\textit{{{escape_latex(item.description)}}}"
        if item.date is not None:
            description += rf" \hfill {escape_latex(item.date)}"
        lines.append(description)

    if item.items:
        lines.append(ITEMIZE_BEGIN)
        lines.extend(f"    \\item {escape_latex(bullet)}" for bullet in item.items)
        lines.append(ITEMIZE_END)

    return "\n".join(lines) + "\n"


def render_items(items: Sequence[ResumeItem]) -> str:
    return "\n".join(render_item(item) for item in items)


class LatexResumeAssembler:
    """
    Assembles the final LaTeX document.

    Args:
        config: Resume configuration whose sections are rendered
        language: Output language for section headers
        template_dir: Directory containing resume.tex.jinja

    Example:
        assembler = LatexResumeAssembler(config.resume, ResumeLanguage.ENGLISH)
        tex_source = assembler.assemble()
    """

    def __init__(
        self,
        config: ResumeConfig,
        language: ResumeLanguage = ResumeLanguage.ENGLISH,
        template_dir: Path = None,
    ):
        self.config = config
        self.language = language
        self.env = build_environment(template_dir or TEMPLATING_CONTEXT_PATH / "template")

    def contact_entries(self) -> List[str]:
        """Contact fields in display order: email, phone, LinkedIn, GitHub, site."""
        entries = []
        if self.config.email:
            entries.append(rf"\href{{mailto:{self.config.email}}}{{{escape_plain(self.config.email)}}}")
        if self.config.phone:
            entries.append(escape_plain(self.config.phone))
        for url in (self.config.linkedin, self.config.github, self.config.site):
            if url:
                entries.append(rf"\href{{{url}}}{{{escape_plain(strip_url(url))}}}")
        return entries

    def header(self) -> str:
        """Contact line continuation: each present field preceded by the separator."""
        return " ".join(f"{CONTACT_SEPARATOR} {entry}" for entry in self.contact_entries())

    def sections(self) -> List[dict]:
        headers = self.language.headers
        rendered = []
        for name in RESUME_SECTIONS:
            items = getattr(self.config, name)
            if not items:
                _log_debug(f"Section '{name}' is empty, skipping")
                continue
            rendered.append({"title": headers[name], "body": render_items(items)})
        return rendered

    def assemble(self) -> str:
        """Render the complete LaTeX document."""
        template = self.env.get_template(RESUME_TEMPLATE_NAME)
        sections = self.sections()
        tex_source = template.render(
            name=escape_latex(self.config.full_name),
            city=escape_latex(self.config.city),
            country=escape_latex(self.config.country),
            header=self.header(),
            sections=sections,
        )
        _log_info(
            f"Assembled LaTeX resume ({self.language.display_name}, "
            f"{len(sections)} sections, {len(tex_source)} chars)"
        )
        return tex_source
