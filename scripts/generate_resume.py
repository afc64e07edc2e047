#!/usr/bin/env python3
"""
Resume Generation CLI

Generates a job-tailored LaTeX/PDF resume from a GitHub profile.

Commands:
    generate - Run the full pipeline (scrape, rank, select, generate, compile)
    repos    - List the profile's repositories with their importance scores

Examples:\n

    generate_resume.py generate                                    # Generic job, Portuguese

    generate_resume.py generate -j https://example.com/jobs/42 -l en

    generate_resume.py generate --job-file job.txt --save-tex --no-edit

    generate_resume.py repos -c config.yaml                        # Inspect repositories
"""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from autoresume.contexts.templating import ResumeLanguage
from autoresume.exceptions import AutoResumeError
from autoresume.pipeline import PipelineOptions, run_pipeline, scrape_repositories, start_run_logging
from autoresume.utils.config import load_config

load_dotenv()

app = typer.Typer(
    help="Generate job-tailored LaTeX resumes from a GitHub profile",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("generate")
def generate_command(
    config_path: Annotated[
        Path,
        typer.Option("--config", "-c", help="Path to the YAML configuration file"),
    ] = Path("config.yaml"),
    job_url: Annotated[
        Optional[str],
        typer.Option("--job-url", "-j", help="URL of the job posting"),
    ] = None,
    job_file: Annotated[
        Optional[Path],
        typer.Option("--job-file", help="Local file with the job description (ignored with --job-url)"),
    ] = None,
    language: Annotated[
        str,
        typer.Option("--language", "-l", help="Resume language: en or pt"),
    ] = "pt",
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Output PDF path"),
    ] = Path("resume.pdf"),
    verbosity: Annotated[
        str,
        typer.Option("--verbosity", "-v", help="Console log level (DEBUG, INFO, WARNING, ...)"),
    ] = "INFO",
    save_tex: Annotated[
        bool,
        typer.Option("--save-tex", help="Also save the LaTeX source next to the PDF"),
    ] = False,
    no_clean: Annotated[
        bool,
        typer.Option("--no-clean", help="Skip the LLM job description clean-up (heuristic parsing)"),
    ] = False,
    no_edit: Annotated[
        bool,
        typer.Option("--no-edit", help="Do not offer to edit the LaTeX source before compiling"),
    ] = False,
):
    """
    Generate a tailored resume PDF.

    The job posting comes from --job-url, else --job-file, else a built-in
    generic software engineering posting.

    Examples:\n

        $ generate_resume.py generate -j https://example.com/jobs/42 -l en

        $ generate_resume.py generate --job-file job.txt -o out/resume.pdf --save-tex
    """
    log_file = start_run_logging(verbosity, command="generate")
    resume_language = ResumeLanguage.from_code(language)

    typer.secho("\nGenerating resume", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"Language: {resume_language.display_name}")
    typer.echo(f"Output: {output}")
    typer.echo("")

    options = PipelineOptions(
        output=output,
        language=resume_language,
        job_url=job_url,
        job_file=job_file,
        save_tex=save_tex,
        clean_job=not no_clean,
        edit=not no_edit,
    )

    try:
        config = load_config(config_path)
        pdf_path = asyncio.run(run_pipeline(config, options))
    except AutoResumeError as e:
        typer.secho(f"\n✗ {e}\n", fg=typer.colors.RED, err=True)
        typer.echo(f"  Log: {log_file}")
        raise typer.Exit(code=1)

    typer.secho(f"\n✓ Resume generated: {pdf_path}", fg=typer.colors.GREEN, bold=True)
    if save_tex:
        typer.echo(f"  LaTeX: {pdf_path.with_suffix('.tex')}")
    typer.echo(f"  Log: {log_file}")
    typer.echo("")


@app.command("repos")
def repos_command(
    config_path: Annotated[
        Path,
        typer.Option("--config", "-c", help="Path to the YAML configuration file"),
    ] = Path("config.yaml"),
    limit: Annotated[
        int,
        typer.Option("--limit", "-n", help="Number of repositories to show", min=1),
    ] = 20,
    verbosity: Annotated[
        str,
        typer.Option("--verbosity", "-v", help="Console log level"),
    ] = "WARNING",
):
    """
    List the profile's repositories ordered by importance score.

    Examples:\n

        $ generate_resume.py repos

        $ generate_resume.py repos -n 50 -v DEBUG
    """
    start_run_logging(verbosity, command="repos")

    try:
        config = load_config(config_path)
        repos = asyncio.run(scrape_repositories(config))
    except AutoResumeError as e:
        typer.secho(f"\n✗ {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"\n{len(repos)} repositories for {config.github.username}\n", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"{'Name':<35} {'Score':>6} {'Stars':>6} {'Forks':>6} {'Commits':>8}  README")
    typer.echo("-" * 78)
    for repo in repos[:limit]:
        readme = "yes" if repo.readme is not None else "-"
        typer.echo(
            f"{repo.name[:35]:<35} {repo.importance_score:>6} {repo.stargazers_count:>6} "
            f"{repo.forks_count:>6} {repo.commits:>8}  {readme}"
        )
    if len(repos) > limit:
        typer.echo(f"... and {len(repos) - limit} more")
    typer.echo("")


if __name__ == "__main__":
    app()
