"""
LaTeX to PDF compilation.

The assembled source never touches the working directory: it is written
into a throwaway directory, the engine runs there, and only the PDF bytes
and the parsed diagnostics come back. tectonic resolves references in a
single invocation; pdflatex, xelatex and lualatex are run once per pass.
"""

import os
import re
import subprocess
import tempfile
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from dotenv import load_dotenv

from autoresume.contexts.rendering.logger import (
    _log_debug,
    log_compilation_result,
    log_compilation_start,
)
from autoresume.exceptions import CompilationError
from autoresume.utils.pdf_processing import page_count

load_dotenv()

LATEX_COMPILER = os.getenv("LATEX_COMPILER", "tectonic")
TEX_FILENAME = "resume.tex"

PDFLATEX_FAMILY = ("pdflatex", "xelatex", "lualatex")

# "! Missing $ inserted." style errors
BANG_ERROR = re.compile(r"^! (.+)$", re.MULTILINE)
# Fatal messages that are not always reported on a "!" line
FATAL_MESSAGES = [
    re.compile(r"(Undefined control sequence.*?)$", re.MULTILINE),
    re.compile(r"(File ended while scanning use of.*?)$", re.MULTILINE),
    re.compile(r"(Emergency stop.*?)$", re.MULTILINE),
]
WARNINGS = [
    re.compile(r"LaTeX Warning: (.+)"),
    re.compile(r"Package \w+ Warning: (.+)"),
    re.compile(r"Overfull \\hbox \((.+)\)"),
    re.compile(r"Underfull \\hbox \((.+)\)"),
]


@dataclass
class CompilationResult:
    """
    Outcome of one compile_latex() call.

    Attributes:
        success: PDF produced and no errors in the engine log
        pdf_bytes: PDF content on success
        stdout: Engine stdout of every pass, joined
        stderr: Engine stderr of every pass, joined
        errors: Errors parsed from the log (or a synthetic one)
        warnings: Warnings parsed from the log
        page_count: Page count of the PDF, when readable
    """

    success: bool
    pdf_bytes: Optional[bytes] = None
    stdout: str = ""
    stderr: str = ""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    page_count: Optional[int] = None


def _parse_latex_log(log_content: str) -> Tuple[List[str], List[str]]:
    """Collect (errors, warnings) from an engine log, errors deduplicated."""
    errors = [match.strip() for match in BANG_ERROR.findall(log_content)]

    for pattern in FATAL_MESSAGES:
        match = pattern.search(log_content)
        if match and match.group(1) not in errors:
            errors.append(match.group(1))

    warnings = [match.strip() for pattern in WARNINGS for match in pattern.findall(log_content)]
    return errors, warnings


def build_command(compiler: str, tex_name: str) -> List[str]:
    """
    Engine command line for one run.

    Raises:
        ValueError: If the engine is not supported
    """
    engine = Path(compiler).name
    if engine == "tectonic":
        return [compiler, "--keep-logs", tex_name]
    if engine in PDFLATEX_FAMILY:
        return [compiler, "-interaction=nonstopmode", "-file-line-error", tex_name]
    raise ValueError(f"Unsupported LaTeX compiler: {compiler}")


def _run_passes(command: List[str], compile_dir: Path, passes: int) -> Tuple[List[str], List[str]]:
    """
    Run the engine up to `passes` times, stopping at the first non-zero exit.

    Raises:
        FileNotFoundError: If the engine executable does not exist
    """
    stdout, stderr = [], []
    for pass_num in range(1, passes + 1):
        _log_debug(f"Pass {pass_num}/{passes}: {' '.join(command)}")
        completed = subprocess.run(
            command,
            cwd=compile_dir,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
        stdout.append(completed.stdout)
        stderr.append(completed.stderr)
        if completed.returncode != 0:
            _log_debug(f"Engine exited with status {completed.returncode}")
            break
    return stdout, stderr


def compile_latex(
    tex_source: str,
    compiler: str = LATEX_COMPILER,
    num_passes: int = 2,
) -> CompilationResult:
    """
    Compile LaTeX source to PDF in a temporary directory.

    Success is judged on the artifacts rather than the exit status: a PDF
    with no logged errors counts as success, and a missing PDF is always a
    failure.

    Args:
        tex_source: Complete LaTeX document
        compiler: Engine executable (tectonic, pdflatex, xelatex, lualatex)
        num_passes: Passes for pdflatex-family engines (tectonic always runs once)
    """
    try:
        command = build_command(compiler, TEX_FILENAME)
    except ValueError as e:
        return CompilationResult(success=False, errors=[str(e)])

    passes = 1 if Path(compiler).name == "tectonic" else max(1, num_passes)
    start_time = time.time()

    with tempfile.TemporaryDirectory(prefix="autoresume_") as tmp:
        compile_dir = Path(tmp)
        tex_file = compile_dir / TEX_FILENAME
        tex_file.write_text(tex_source, encoding="utf-8")
        log_compilation_start(compiler, passes, compile_dir)

        try:
            stdout, stderr = _run_passes(command, compile_dir, passes)
        except FileNotFoundError:
            return CompilationResult(
                success=False,
                errors=[f"LaTeX compiler not found: {compiler} (set LATEX_COMPILER or install it)"],
            )

        errors, warnings = [], []
        log_file = tex_file.with_suffix(".log")
        if log_file.exists():
            # Engine logs may contain non-UTF-8 font metadata
            errors, warnings = _parse_latex_log(log_file.read_text(encoding="latin-1"))

        pdf_file = tex_file.with_suffix(".pdf")
        pdf_bytes = pdf_file.read_bytes() if pdf_file.exists() else None

    if pdf_bytes is None and not errors:
        errors.append("PDF file was not generated")
    success = pdf_bytes is not None and not errors

    compilation = CompilationResult(
        success=success,
        pdf_bytes=pdf_bytes if success else None,
        stdout="\n".join(stdout),
        stderr="\n".join(stderr),
        errors=errors,
        warnings=warnings,
        page_count=page_count(pdf_bytes) if success else None,
    )
    log_compilation_result(compilation, time.time() - start_time)
    return compilation


def render_pdf(tex_source: str, compiler: str = LATEX_COMPILER, num_passes: int = 2) -> bytes:
    """
    Compile LaTeX source and return the PDF bytes.

    Raises:
        CompilationError: If compilation fails, carrying the engine diagnostics
    """
    result = compile_latex(tex_source, compiler=compiler, num_passes=num_passes)
    if not result.success:
        raise CompilationError(f"LaTeX compilation failed with {compiler}", errors=result.errors)
    return result.pdf_bytes
