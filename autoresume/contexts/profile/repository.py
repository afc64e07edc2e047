"""
Repository data structure and importance scoring.

A RepositoryRecord is built once from the GitHub listing payload and then
enriched (README, commit count, languages) with dataclasses.replace; it is
never mutated.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

# Caps applied before weighting so a single viral repository cannot dominate
STAR_CAP = 1000
FORK_CAP = 100
SIZE_CAP = 10000

STAR_WEIGHT = 3
FORK_WEIGHT = 2
SIZE_DIVISOR = 100


def importance_score(
    stars: int,
    forks: int,
    size: int,
    archived: bool = False,
    fork: bool = False,
) -> int:
    """
    Heuristic popularity/size score used to order repositories.

    Archived and forked repositories score 0. Otherwise:
    min(stars, 1000) * 3 + min(forks, 100) * 2 + min(size, 10000) // 100

    Example:
        >>> importance_score(stars=2000, forks=50, size=5000)
        3150
    """
    if archived or fork:
        return 0

    return (
        min(stars, STAR_CAP) * STAR_WEIGHT
        + min(forks, FORK_CAP) * FORK_WEIGHT
        + min(size, SIZE_CAP) // SIZE_DIVISOR
    )


@dataclass(frozen=True)
class RepositoryRecord:
    """
    One repository of the profile with the metadata used for ranking and prompting.

    Attributes:
        name: Repository name (without owner)
        url: REST API URL (base for /readme, /commits, /languages)
        html_url: Browser URL, used as the project link on the resume
        stargazers_count: Star count
        forks_count: Fork count
        size: Repository size in KB as reported by GitHub
        created_at: ISO 8601 creation timestamp
        pushed_at: ISO 8601 last push timestamp
        archived: Whether the repository is archived
        fork: Whether the repository is a fork
        description: GitHub "about" text
        languages: Byte count per language
        readme: Decoded README text, None when absent
        commits: Commit count, 0 when unknown
    """

    name: str
    url: str
    html_url: str
    stargazers_count: int = 0
    forks_count: int = 0
    size: int = 0
    created_at: str = ""
    pushed_at: str = ""
    archived: bool = False
    fork: bool = False
    description: Optional[str] = None
    languages: Dict[str, int] = field(default_factory=dict)
    readme: Optional[str] = None
    commits: int = 0

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "RepositoryRecord":
        """
        Build a record from one item of the GitHub repository listing.

        Raises:
            KeyError: If the item has no "name" or "url"
        """
        return cls(
            name=data["name"],
            url=data["url"],
            html_url=data.get("html_url") or data["url"],
            stargazers_count=int(data.get("stargazers_count") or 0),
            forks_count=int(data.get("forks_count") or 0),
            size=int(data.get("size") or 0),
            created_at=data.get("created_at") or "",
            pushed_at=data.get("pushed_at") or "",
            archived=bool(data.get("archived", False)),
            fork=bool(data.get("fork", False)),
            description=data.get("description"),
        )

    @property
    def importance_score(self) -> int:
        return importance_score(
            stars=self.stargazers_count,
            forks=self.forks_count,
            size=self.size,
            archived=self.archived,
            fork=self.fork,
        )

    def with_metadata(
        self,
        readme: Optional[str],
        commits: int,
        languages: Dict[str, int],
    ) -> "RepositoryRecord":
        """Return a copy enriched with the per-repository lookups."""
        return replace(self, readme=readme, commits=commits, languages=dict(languages))

    def language_breakdown(self) -> str:
        """
        Format language shares as "Python (80.5%), Shell (19.5%)".

        Returns "Unknown" when no language data is available.
        """
        total = sum(self.languages.values())
        if not self.languages or total == 0:
            return "Unknown"

        ranked = sorted(self.languages.items(), key=lambda item: item[1], reverse=True)
        return ", ".join(
            f"{language} ({round(byte_count / total * 100, 2)}%)" for language, byte_count in ranked
        )
