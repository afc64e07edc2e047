"""
Resume generation pipeline.

One sequential asyncio run: scrape the GitHub profile, obtain and normalize
the job posting, rank and select repositories, generate tailored content,
assemble LaTeX, optionally let the operator edit it, and compile the PDF.
"""

import asyncio
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

import httpx
import typer
from dotenv import load_dotenv
from loguru import logger

from autoresume import __version__
from autoresume.contexts.intake import get_raw_job_text, heuristic_job_description
from autoresume.contexts.profile import GitHubClient, ReadmeCache, RepositoryRecord
from autoresume.contexts.rendering import render_pdf
from autoresume.contexts.rendering.compiler import LATEX_COMPILER
from autoresume.contexts.targeting import (
    ResumeAgent,
    TerminalConsole,
    apply_sections,
    resume_content_to_sections,
    select_repositories,
)
from autoresume.contexts.targeting.selector import Console
from autoresume.contexts.templating import LatexResumeAssembler, ResumeLanguage
from autoresume.utils.config import AppConfig, require_llm_api_key
from autoresume.utils.llm import GeminiProvider, LLMProvider
from autoresume.utils.logger import new_run_dir, setup_logger

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

HTTP_TIMEOUT_SECONDS = 30.0
EDIT_PROMPT = "Would you like to edit the generated LaTeX source before compiling? (y/N): "


@dataclass
class PipelineOptions:
    """
    Per-run options coming from the command line.

    Attributes:
        output: Destination PDF path
        language: Output language
        job_url: Job posting URL (takes priority over job_file)
        job_file: Local job description file
        save_tex: Also write the final LaTeX next to the PDF
        clean_job: Normalize the posting with the LLM (heuristic parsing otherwise)
        edit: Offer to edit the LaTeX before compiling
    """

    output: Path
    language: ResumeLanguage = ResumeLanguage.PORTUGUESE
    job_url: Optional[str] = None
    job_file: Optional[Path] = None
    save_tex: bool = False
    clean_job: bool = True
    edit: bool = True


def start_run_logging(verbosity: str = "INFO", command: str = "generate") -> Path:
    """Create LOGS_PATH/run_<timestamp>/ and route loguru output there and to the console."""
    return setup_logger(
        context_name="autoresume",
        log_dir=new_run_dir(LOGS_PATH),
        console_level=verbosity,
        extra_provenance={
            "auto-resume version": __version__,
            "Command": command,
            "LaTeX compiler": LATEX_COMPILER,
        },
    )


def open_in_editor(tex_source: str) -> str:
    """Open the source in $EDITOR; an unsaved session keeps the original text."""
    edited = typer.edit(tex_source, extension=".tex")
    return tex_source if edited is None else edited


def confirm_edit(
    tex_source: str,
    console: Console,
    editor: Callable[[str], str] = open_in_editor,
) -> str:
    """
    Ask whether to edit the LaTeX source.

    "y"/"yes" opens the editor, "n"/"no"/empty keeps the source, anything
    else re-prompts.
    """
    while True:
        answer = console.prompt(EDIT_PROMPT).strip().lower()
        if answer in ("y", "yes"):
            return editor(tex_source)
        if answer in ("n", "no", ""):
            return tex_source
        console.echo("Invalid input. Please enter 'y' or 'n'.", "red")


def build_provider(config: AppConfig, client: httpx.AsyncClient = None) -> LLMProvider:
    return GeminiProvider(
        api_key=require_llm_api_key(config),
        model=config.llm.model,
        endpoint=config.llm.endpoint,
        temperature=config.llm.temperature,
        max_output_tokens=config.llm.max_output_tokens,
        client=client,
    )


async def scrape_repositories(
    config: AppConfig,
    client: httpx.AsyncClient = None,
    cache: ReadmeCache = None,
) -> List[RepositoryRecord]:
    async with GitHubClient(config.github, cache=cache, client=client) as github:
        return await github.scrape_profile()


async def run_pipeline(
    config: AppConfig,
    options: PipelineOptions,
    client: httpx.AsyncClient = None,
    provider: LLMProvider = None,
    console: Console = None,
    cache: ReadmeCache = None,
    editor: Callable[[str], str] = open_in_editor,
    renderer: Callable[[str], bytes] = render_pdf,
) -> Path:
    """
    Run the full generation pipeline and write the PDF.

    Args:
        config: Loaded application configuration
        options: Per-run options
        client: Shared HTTP client (created for the run when omitted)
        provider: LLM provider (Gemini when omitted)
        console: Operator console for selection and edit prompts
        cache: README cache
        editor: Callable that returns the edited LaTeX source
        renderer: Callable compiling LaTeX source to PDF bytes

    Returns:
        Path of the written PDF

    Raises:
        ConfigError: If the LLM API key is missing (checked before any network call)
        GitHubAPIError: If the repository listing fails
        JobSourceError: If the job posting cannot be obtained
        LLMResponseError: If an LLM call fails after all retries
        CompilationError: If LaTeX compilation fails
    """
    if client is None:
        async with httpx.AsyncClient(timeout=HTTP_TIMEOUT_SECONDS) as owned:
            return await run_pipeline(
                config,
                options,
                client=owned,
                provider=provider,
                console=console,
                cache=cache,
                editor=editor,
                renderer=renderer,
            )

    logger.info(f"Starting auto-resume v{__version__}")
    require_llm_api_key(config)
    console = console or TerminalConsole()

    agent = ResumeAgent(provider or build_provider(config, client), max_retries=config.llm.max_retries)

    repos = await scrape_repositories(config, client=client, cache=cache)

    raw_job = await get_raw_job_text(options.job_url, options.job_file, client=client)
    logger.debug(f"Job description loaded ({len(raw_job)} chars)")
    if options.clean_job:
        job = await agent.clean_job_description(raw_job)
    else:
        logger.info("Skipping LLM job clean-up, using heuristic parsing")
        job = heuristic_job_description(raw_job)
    logger.info(f"Target job: {job.title} at {job.company_or('unknown company')}")

    ranked = await agent.rank_repositories(repos, job)
    selected = select_repositories(ranked, repos, console)
    logger.info(f"Using {len(selected)} selected repositories for resume generation")

    content = await agent.generate_resume_content(config.resume, job, selected, options.language)
    resume_config = apply_sections(config.resume, resume_content_to_sections(content))

    tex_source = LatexResumeAssembler(resume_config, options.language).assemble()
    if options.edit:
        tex_source = confirm_edit(tex_source, console, editor)

    output = Path(options.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    if options.save_tex:
        tex_path = output.with_suffix(".tex")
        tex_path.write_text(tex_source, encoding="utf-8")
        logger.info(f"Saved LaTeX source to {tex_path}")

    logger.info("Compiling LaTeX to PDF")
    pdf_bytes = await asyncio.to_thread(renderer, tex_source)
    output.write_bytes(pdf_bytes)
    logger.success(f"Generated resume at {output}")
    return output
