"""
Unit tests for the interactive repository selector, driven by a scripted console.
"""

import pytest
from conftest import ScriptedConsole, make_repo

from autoresume.contexts.targeting.agent import RankedRepository
from autoresume.contexts.targeting.selector import (
    ADD_MORE_PROMPT,
    MANUAL_NAMES_PROMPT,
    SELECTION_PROMPT,
    RepositorySelector,
    SelectionState,
    select_repositories,
    stars_for_rank,
)


def ranked(*names):
    return [RankedRepository(rank=i, name=name, reasoning=f"Why {name}") for i, name in enumerate(names, 1)]


def names(repos):
    return [repo.name for repo in repos]


@pytest.fixture
def all_repos():
    return [make_repo(name) for name in ["alpha", "beta", "delta", "epsilon", "zeta", "eta", "theta"]]


@pytest.mark.unit
class TestStars:
    """Tests for the rank star indicator."""

    @pytest.mark.parametrize("rank, stars", [(1, 5), (2, 5), (3, 4), (4, 4), (9, 1), (10, 1), (25, 1)])
    def test_stars_for_rank(self, rank, stars):
        assert stars_for_rank(rank) == "★" * stars


@pytest.mark.unit
class TestDefaultSelection:
    """Tests for empty input at the first prompt."""

    def test_first_five_skipping_unknown(self, all_repos):
        """Empty input takes the first 5 ranked entries that exist in the profile."""
        console = ScriptedConsole([""])

        selected = select_repositories(
            ranked("alpha", "beta", "gamma", "delta", "epsilon", "zeta"), all_repos, console
        )

        assert names(selected) == ["alpha", "beta", "delta", "epsilon"]
        assert console.prompts == [SELECTION_PROMPT]
        assert "No repositories selected. Using top 5 by default." in console.messages

    def test_ranking_listing(self, all_repos):
        """Ranked entries are shown with stars and reasoning, capped at max_suggestions."""
        console = ScriptedConsole([""])

        select_repositories(ranked("alpha", "beta", "delta"), all_repos, console, max_suggestions=2)

        assert "1. [★★★★★] alpha" in console.messages
        assert "   Why beta\n" in console.messages
        assert not any("delta" in message for message in console.messages)


@pytest.mark.unit
class TestRankSelection:
    """Tests for comma-separated rank input."""

    def test_invalid_token_rejects_batch(self, all_repos):
        """'1,x,3' is rejected as a whole and the prompt repeats."""
        console = ScriptedConsole(["1,x,3", "2", "n"])

        selected = select_repositories(ranked("alpha", "beta", "delta"), all_repos, console)

        assert names(selected) == ["beta"]
        assert "Invalid input: 'x'. Please enter numbers separated by commas." in console.messages
        assert console.prompts == [SELECTION_PROMPT, SELECTION_PROMPT, ADD_MORE_PROMPT]

    def test_unknown_rank_rejects_batch(self, all_repos):
        console = ScriptedConsole(["1,99", "1", "no"])

        selected = select_repositories(ranked("alpha", "beta"), all_repos, console)

        assert names(selected) == ["alpha"]
        assert "Invalid rank: 99. Please try again." in console.messages

    def test_order_and_duplicates(self, all_repos):
        """Selection keeps pick order and appends repeated ranks once."""
        console = ScriptedConsole(["3, 1, 3", "n"])

        selected = select_repositories(ranked("alpha", "beta", "delta"), all_repos, console)

        assert names(selected) == ["delta", "alpha"]

    def test_batch_without_known_repositories_reprompts(self, all_repos):
        """Ranks pointing only at names missing from the profile do not end selection."""
        console = ScriptedConsole(["2", "1", "n"])

        selected = select_repositories(ranked("alpha", "ghost"), all_repos, console)

        assert names(selected) == ["alpha"]
        assert console.prompts[:2] == [SELECTION_PROMPT, SELECTION_PROMPT]

    def test_confirm_reprompts_on_other_input(self, all_repos):
        console = ScriptedConsole(["1", "maybe", "N"])

        selected = select_repositories(ranked("alpha"), all_repos, console)

        assert names(selected) == ["alpha"]
        assert "Please enter 'y' or 'n'." in console.messages
        assert console.prompts == [SELECTION_PROMPT, ADD_MORE_PROMPT, ADD_MORE_PROMPT]


@pytest.mark.unit
class TestManualNames:
    """Tests for adding repositories by name."""

    def test_add_by_name(self, all_repos):
        console = ScriptedConsole(["1", "y", "zeta, theta", ""])

        selected = select_repositories(ranked("alpha"), all_repos, console)

        assert names(selected) == ["alpha", "zeta", "theta"]
        assert "✓ Added: zeta" in console.messages
        assert console.prompts[-2:] == [MANUAL_NAMES_PROMPT, MANUAL_NAMES_PROMPT]

    def test_already_selected(self, all_repos):
        console = ScriptedConsole(["1", "yes", "alpha", ""])

        selected = select_repositories(ranked("alpha"), all_repos, console)

        assert names(selected) == ["alpha"]
        assert "⊘ Already selected: alpha" in console.messages

    def test_did_you_mean(self, all_repos):
        """Unknown names get up to three case-insensitive containment suggestions."""
        console = ScriptedConsole(["1", "y", "ETA", ""])

        select_repositories(ranked("alpha"), all_repos, console)

        assert "✗ Not found in profile: ETA" in console.messages
        assert "  → Did you mean:" in console.messages
        suggestions = [message.strip() for message in console.messages if message.startswith("    • ")]
        assert suggestions == ["• beta", "• zeta", "• eta"]

    def test_suggestion_matches_longer_input(self, all_repos):
        """A profile name contained in the typed name is also suggested."""
        console = ScriptedConsole(["1", "y", "beta-service", ""])

        select_repositories(ranked("alpha"), all_repos, console)

        assert "    • beta" in console.messages

    def test_no_similar_lists_available(self, all_repos):
        console = ScriptedConsole(["1", "y", "xyz", ""])

        select_repositories(ranked("alpha"), all_repos, console)

        assert "  → No similar repos found. Available repos in your profile:" in console.messages
        assert "    • alpha" in console.messages
        assert "    • zeta" in console.messages
        assert "    • eta" not in console.messages
        assert "    • and 2 more..." in console.messages


@pytest.mark.unit
class TestStateMachine:
    """Tests for RepositorySelector state transitions."""

    def test_initial_state(self, all_repos):
        selector = RepositorySelector(ranked("alpha"), all_repos, ScriptedConsole([]))

        assert selector.state is SelectionState.AWAIT_SELECTION

    def test_ends_in_done(self, all_repos):
        selector = RepositorySelector(ranked("alpha"), all_repos, ScriptedConsole(["1", "n"]))
        selector.run()

        assert selector.state is SelectionState.DONE
