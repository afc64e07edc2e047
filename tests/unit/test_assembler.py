"""
Unit tests for LaTeX resume assembly.
"""

from dataclasses import replace

import pytest

from autoresume.contexts.templating.assembler import LatexResumeAssembler, render_item, render_items
from autoresume.contexts.templating.language import ResumeLanguage
from autoresume.utils.config import ResumeItem


@pytest.mark.unit
class TestRenderItem:
    """Tests for render_item()."""

    def test_full_item(self):
        item = ResumeItem(
            title="Alpha (Python)",
            location="GitHub",
            link="https://github.com/jane/alpha",
            description="Invoice API",
            date="2023",
            items=("Built **REST** endpoints", "100% test coverage"),
        )

        assert render_item(item) == (
            "\\noindent \\textbf{Alpha (Python)} \\hfill \\href{https://github.com/jane/alpha}{GitHub} \\\\\n"
            "\\textit{Invoice API} \\hfill 2023\n"
            "\\begin{itemize}[noitemsep,topsep=0pt,leftmargin=*]\n"
            "    \\item Built \\textbf{REST} endpoints\n"
            "    \\item 100\\% test coverage\n"
            "\\end{itemize}\n"
        )

    def test_title_only(self):
        """No description means no line break after the title and no itemize."""
        assert render_item(ResumeItem(title="Acme", location="Remote")) == (
            "\\noindent \\textbf{Acme} \\hfill Remote\n"
        )

    def test_items_only(self):
        """Skills items have bullets without a heading."""
        rendered = render_item(ResumeItem(items=("**Back-end**: Python, Go",)))

        assert rendered == (
            "\\begin{itemize}[noitemsep,topsep=0pt,leftmargin=*]\n"
            "    \\item \\textbf{Back-end}: Python, Go\n"
            "\\end{itemize}\n"
        )

    def test_empty_item(self):
        assert render_item(ResumeItem()) == "\n"

    def test_render_items_separated_by_blank_line(self):
        rendered = render_items([ResumeItem(title="A"), ResumeItem(title="B")])

        assert rendered == "\\noindent \\textbf{A}\n\n\\noindent \\textbf{B}\n"


@pytest.mark.unit
class TestLanguage:
    """Tests for ResumeLanguage."""

    @pytest.mark.parametrize(
        "code, language",
        [
            ("pt", ResumeLanguage.PORTUGUESE),
            ("PT-BR", ResumeLanguage.PORTUGUESE),
            ("portuguese", ResumeLanguage.PORTUGUESE),
            ("en", ResumeLanguage.ENGLISH),
            ("english", ResumeLanguage.ENGLISH),
            ("fr", ResumeLanguage.ENGLISH),
            ("", ResumeLanguage.ENGLISH),
        ],
    )
    def test_from_code(self, code, language):
        assert ResumeLanguage.from_code(code) is language

    def test_headers(self):
        assert ResumeLanguage.ENGLISH.headers["projects"] == "Key Projects"
        assert ResumeLanguage.PORTUGUESE.headers["experience"] == "Experiência Profissional"


@pytest.mark.unit
class TestLatexResumeAssembler:
    """Tests for LatexResumeAssembler."""

    def test_header_contact_entries(self, resume_config):
        config = replace(resume_config, phone="+351 900", linkedin="https://www.linkedin.com/in/jane_doe/")

        header = LatexResumeAssembler(config).header()

        assert header == (
            r"\ $|$ \ \href{mailto:jane@example.com}{jane@example.com} "
            r"\ $|$ \ +351 900 "
            r"\ $|$ \ \href{https://www.linkedin.com/in/jane_doe/}{linkedin.com/in/jane\_doe} "
            r"\ $|$ \ \href{https://github.com/jane}{github.com/jane}"
        )

    def test_no_contact_fields(self, resume_config):
        config = replace(resume_config, email=None, github=None)

        assert LatexResumeAssembler(config).header() == ""

    def test_document_structure(self, resume_config):
        config = replace(
            resume_config,
            skills=(ResumeItem(items=("**Back-end**: Python",)),),
            projects=(ResumeItem(title="Alpha", location="GitHub", link="https://github.com/jane/alpha"),),
        )

        tex = LatexResumeAssembler(config, ResumeLanguage.ENGLISH).assemble()

        assert tex.startswith("\\documentclass[letterpaper,11pt]{article}")
        assert tex.rstrip().endswith("\\end{document}")
        assert "\\textbf{Jane Doe}" in tex
        assert "Lisbon, Portugal \\ $|$ \\ " in tex
        assert "\\section*{Technical Skills}" in tex
        assert "\\section*{Key Projects}" in tex
        assert tex.index("Technical Skills") < tex.index("Key Projects")

    def test_empty_sections_omitted(self, resume_config):
        """Sections without items produce no heading."""
        config = replace(resume_config, education=(ResumeItem(title="University of Lisbon"),))

        tex = LatexResumeAssembler(config, ResumeLanguage.PORTUGUESE).assemble()

        assert "\\section*{Educação}" in tex
        assert "Habilidades Técnicas" not in tex
        assert "Experiência Profissional" not in tex
        assert "Projetos e Performance" not in tex

    def test_name_is_escaped(self, resume_config):
        config = replace(resume_config, full_name="Jane_Doe & Co")

        assert "\\textbf{Jane\\_Doe \\& Co}" in LatexResumeAssembler(config).assemble()
