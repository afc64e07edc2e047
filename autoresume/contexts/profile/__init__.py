"""
Profile Context

Responsibilities:
- Lists a GitHub user's repositories and scores them by importance
- Enriches repositories with README, commit count and language breakdown
- Caches README bodies on disk across runs

Owns: GitHub API access, RepositoryRecord, README cache
Never: Decides which repositories go on the resume
"""

from autoresume.contexts.profile.github_client import GitHubClient
from autoresume.contexts.profile.readme_cache import ReadmeCache
from autoresume.contexts.profile.repository import RepositoryRecord, importance_score

__all__ = ["GitHubClient", "ReadmeCache", "RepositoryRecord", "importance_score"]
