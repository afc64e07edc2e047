"""
Unit tests for repository records and importance scoring.
"""

import pytest
from conftest import make_repo

from autoresume.contexts.profile.repository import RepositoryRecord, importance_score


@pytest.mark.unit
class TestImportanceScore:
    """Tests for importance_score()."""

    def test_archived_scores_zero(self):
        """Archived repositories score 0 regardless of popularity."""
        assert importance_score(stars=500, forks=50, size=5000, archived=True) == 0

    def test_fork_scores_zero(self):
        """Forked repositories score 0 regardless of popularity."""
        assert importance_score(stars=500, forks=50, size=5000, fork=True) == 0

    def test_caps_applied(self):
        """Stars are capped at 1000 before weighting."""
        assert importance_score(stars=2000, forks=50, size=5000) == 3150

    def test_all_caps(self):
        """Stars, forks and size are each capped."""
        assert importance_score(stars=5000, forks=500, size=50000) == 1000 * 3 + 100 * 2 + 100

    def test_size_integer_division(self):
        """Size contributes one point per 100 KB, rounded down."""
        assert importance_score(stars=0, forks=0, size=199) == 1

    def test_empty_repository(self):
        assert importance_score(stars=0, forks=0, size=0) == 0


@pytest.mark.unit
class TestRepositoryRecord:
    """Tests for RepositoryRecord construction and helpers."""

    def test_from_api(self):
        """Listing payload fields map onto the record."""
        record = RepositoryRecord.from_api(
            {
                "name": "alpha",
                "url": "https://api.github.com/repos/jane/alpha",
                "html_url": "https://github.com/jane/alpha",
                "stargazers_count": 10,
                "forks_count": 2,
                "size": 300,
                "created_at": "2020-01-01T00:00:00Z",
                "pushed_at": "2024-01-01T00:00:00Z",
                "archived": False,
                "fork": False,
                "description": "Alpha service",
            }
        )

        assert record.name == "alpha"
        assert record.importance_score == 10 * 3 + 2 * 2 + 3
        assert record.description == "Alpha service"
        assert record.readme is None
        assert record.commits == 0
        assert record.languages == {}

    def test_from_api_null_counts(self):
        """Null counters are treated as zero."""
        record = RepositoryRecord.from_api(
            {"name": "x", "url": "u", "stargazers_count": None, "forks_count": None, "size": None}
        )

        assert record.importance_score == 0
        assert record.html_url == "u"

    def test_with_metadata_returns_copy(self):
        """Enrichment leaves the original record untouched."""
        record = make_repo("alpha")
        enriched = record.with_metadata(readme="# Alpha", commits=12, languages={"Python": 10})

        assert enriched.readme == "# Alpha"
        assert enriched.commits == 12
        assert record.readme is None
        assert record.commits == 0

    def test_language_breakdown_sorted(self):
        """Languages are listed by share, largest first."""
        record = make_repo("alpha", languages={"Shell": 100, "Python": 300})

        assert record.language_breakdown() == "Python (75.0%), Shell (25.0%)"

    def test_language_breakdown_rounding(self):
        record = make_repo("alpha", languages={"Go": 2, "C": 1})

        assert record.language_breakdown() == "Go (66.67%), C (33.33%)"

    def test_language_breakdown_unknown(self):
        assert make_repo("alpha").language_breakdown() == "Unknown"
