"""
Interactive repository selection.

An explicit state machine driven by a Console: the operator picks ranked
repositories by number, optionally adds more by name, and the selection is
resolved against the full repository list. TerminalConsole talks to the
terminal through typer; tests drive the machine with a scripted console.
"""

from enum import Enum, auto
from typing import List, Optional, Protocol

import typer

from autoresume.contexts.profile.repository import RepositoryRecord
from autoresume.contexts.targeting.agent import RankedRepository
from autoresume.contexts.targeting.logger import _log_info
from autoresume.utils.text_processing import split_csv

DEFAULT_SELECTION_SIZE = 5
DEFAULT_MAX_SUGGESTIONS = 10
MAX_SIMILAR_NAMES = 3
MAX_AVAILABLE_NAMES = 5

SELECTION_PROMPT = "Enter repository numbers to include (comma-separated, e.g., '1,2,3'): "
ADD_MORE_PROMPT = "Add more repositories manually? (y/n): "
MANUAL_NAMES_PROMPT = "Enter repository name(s) (comma-separated, or press Enter to finish): "


class SelectionState(Enum):
    AWAIT_SELECTION = auto()
    AWAIT_CONFIRM_ADD_MORE = auto()
    AWAIT_MANUAL_NAMES = auto()
    DONE = auto()


class Console(Protocol):
    def prompt(self, text: str) -> str: ...

    def echo(self, text: str, color: Optional[str] = None) -> None: ...


class TerminalConsole:
    """Console backed by typer prompts and colored output."""

    def prompt(self, text: str) -> str:
        return typer.prompt(text, default="", show_default=False, prompt_suffix="")

    def echo(self, text: str, color: Optional[str] = None) -> None:
        typer.secho(text, fg=color)


def stars_for_rank(rank: int) -> str:
    """Top ranks get the most stars: 5 for ranks 1-2, 4 for 3-4, down to 1."""
    return "★" * max(1, 5 - (rank - 1) // 2)


class RepositorySelector:
    """
    Selection state machine.

    Args:
        ranked: LLM ranking, in the order it was returned
        all_repos: Every repository of the profile
        console: Input/output channel
        max_suggestions: Number of ranked entries shown
    """

    def __init__(
        self,
        ranked: List[RankedRepository],
        all_repos: List[RepositoryRecord],
        console: Console,
        max_suggestions: int = DEFAULT_MAX_SUGGESTIONS,
    ):
        self.ranked = ranked
        self.all_repos = all_repos
        self.console = console
        self.max_suggestions = max_suggestions
        self.selected: List[RepositoryRecord] = []
        self.state = SelectionState.AWAIT_SELECTION

    # --- Lookups ---

    def _find_repo(self, name: str) -> Optional[RepositoryRecord]:
        return next((repo for repo in self.all_repos if repo.name == name), None)

    def _find_ranked(self, rank: int) -> Optional[RankedRepository]:
        return next((entry for entry in self.ranked if entry.rank == rank), None)

    def _is_selected(self, repo: RepositoryRecord) -> bool:
        return any(existing.name == repo.name for existing in self.selected)

    def _similar_names(self, name: str) -> List[str]:
        needle = name.lower()
        similar = [
            repo.name
            for repo in self.all_repos
            if needle in repo.name.lower() or repo.name.lower() in needle
        ]
        return similar[:MAX_SIMILAR_NAMES]

    # --- Output ---

    def show_ranking(self) -> None:
        self.console.echo("\n=== Repository Selection ===", "cyan")
        self.console.echo("Select repositories to include in your resume (top 10 recommended):\n", "cyan")
        for entry in self.ranked[: self.max_suggestions]:
            self.console.echo(f"{entry.rank}. [{stars_for_rank(entry.rank)}] {entry.name}")
            self.console.echo(f"   {entry.reasoning}\n")

    # --- State handlers ---

    def _default_selection(self) -> List[RepositoryRecord]:
        selection: List[RepositoryRecord] = []
        for entry in self.ranked[:DEFAULT_SELECTION_SIZE]:
            repo = self._find_repo(entry.name)
            if repo is not None and repo not in selection:
                selection.append(repo)
        return selection

    def _parse_batch(self, raw: str) -> Optional[List[RepositoryRecord]]:
        """Resolve a comma-separated rank list; None when any token is invalid."""
        batch: List[RepositoryRecord] = []
        for token in split_csv(raw):
            try:
                rank = int(token)
            except ValueError:
                self.console.echo(f"Invalid input: '{token}'. Please enter numbers separated by commas.", "red")
                return None

            entry = self._find_ranked(rank)
            if entry is None:
                self.console.echo(f"Invalid rank: {rank}. Please try again.", "red")
                return None

            repo = self._find_repo(entry.name)
            if repo is not None and not any(existing.name == repo.name for existing in batch):
                batch.append(repo)
        return batch

    def _handle_selection(self, raw: str) -> SelectionState:
        if not raw:
            self.console.echo("No repositories selected. Using top 5 by default.", "yellow")
            self.selected = self._default_selection()
            return SelectionState.DONE

        batch = self._parse_batch(raw)
        if batch is None:
            return SelectionState.AWAIT_SELECTION
        if not batch:
            self.console.echo("None of the selected repositories were found in your profile.", "red")
            return SelectionState.AWAIT_SELECTION

        self.selected = batch
        _log_info(f"Selected {len(batch)} repositories for resume")
        return SelectionState.AWAIT_CONFIRM_ADD_MORE

    def _handle_confirm(self, raw: str) -> SelectionState:
        answer = raw.lower()
        if answer in ("y", "yes"):
            self.console.echo("\nAdd repositories by name (e.g., 'repo-name'):", "cyan")
            return SelectionState.AWAIT_MANUAL_NAMES
        if answer in ("n", "no"):
            return SelectionState.DONE
        self.console.echo("Please enter 'y' or 'n'.", "red")
        return SelectionState.AWAIT_CONFIRM_ADD_MORE

    def _report_not_found(self, name: str) -> None:
        self.console.echo(f"✗ Not found in profile: {name}", "red")
        similar = self._similar_names(name)
        if similar:
            self.console.echo("  → Did you mean:", "cyan")
            for candidate in similar:
                self.console.echo(f"    • {candidate}", "cyan")
            return

        self.console.echo("  → No similar repos found. Available repos in your profile:", "cyan")
        for repo in self.all_repos[:MAX_AVAILABLE_NAMES]:
            self.console.echo(f"    • {repo.name}", "cyan")
        if len(self.all_repos) > MAX_AVAILABLE_NAMES:
            self.console.echo(f"    • and {len(self.all_repos) - MAX_AVAILABLE_NAMES} more...", "cyan")

    def _handle_manual_names(self, raw: str) -> SelectionState:
        if not raw:
            return SelectionState.DONE

        for name in split_csv(raw):
            if not name:
                continue
            repo = self._find_repo(name)
            if repo is None:
                self._report_not_found(name)
            elif self._is_selected(repo):
                self.console.echo(f"⊘ Already selected: {name}", "yellow")
            else:
                self.selected.append(repo)
                self.console.echo(f"✓ Added: {name}", "green")
        return SelectionState.AWAIT_MANUAL_NAMES

    # --- Driver ---

    def run(self) -> List[RepositoryRecord]:
        """Drive the state machine until DONE and return the selection in pick order."""
        self.show_ranking()

        prompts = {
            SelectionState.AWAIT_SELECTION: (SELECTION_PROMPT, self._handle_selection),
            SelectionState.AWAIT_CONFIRM_ADD_MORE: (ADD_MORE_PROMPT, self._handle_confirm),
            SelectionState.AWAIT_MANUAL_NAMES: (MANUAL_NAMES_PROMPT, self._handle_manual_names),
        }

        while self.state is not SelectionState.DONE:
            text, handler = prompts[self.state]
            self.state = handler(self.console.prompt(text).strip())

        _log_info(f"Final selection: {len(self.selected)} repositories for resume")
        return list(self.selected)


def select_repositories(
    ranked: List[RankedRepository],
    all_repos: List[RepositoryRecord],
    console: Console = None,
    max_suggestions: int = DEFAULT_MAX_SUGGESTIONS,
) -> List[RepositoryRecord]:
    """Run an interactive selection on the terminal (or on the given console)."""
    selector = RepositorySelector(ranked, all_repos, console or TerminalConsole(), max_suggestions)
    return selector.run()
