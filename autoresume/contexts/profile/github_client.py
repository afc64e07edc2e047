"""
GitHub REST client.

Lists a user's repositories and enriches each one with its README, commit
count and language breakdown. Only the repository listing may fail the run;
every per-repository lookup degrades to None / 0 / {} on error.
"""

import asyncio
import base64
import binascii
import re
from typing import Dict, List, Optional

import httpx

from autoresume.contexts.profile.logger import _log_debug, _log_info, _log_success, _log_warning
from autoresume.contexts.profile.readme_cache import ReadmeCache
from autoresume.contexts.profile.repository import RepositoryRecord
from autoresume.exceptions import GitHubAPIError
from autoresume.utils.config import GithubConfig

GITHUB_API_BASE_URL = "https://api.github.com"
GITHUB_API_ACCEPT_HEADER = "application/vnd.github+json"
GITHUB_USER_AGENT = "auto-resume-app"
GITHUB_REPOS_PER_PAGE = 100
GITHUB_REQUEST_TIMEOUT_SECONDS = 30.0
DEFAULT_MAX_CONCURRENCY = 8

USER_REPOS_ENDPOINT_TEMPLATE = "/users/{username}/repos?per_page={per_page}&page={page}"
LINK_NEXT_PAGE_PATTERN = r"rel=\"next\""
LINK_LAST_PAGE_PATTERN = r"[?&]page=(\d+)[^>]*>;\s*rel=\"last\""


def has_next_page(link_header: Optional[str]) -> bool:
    """True when a Link header advertises a following page."""
    if not link_header:
        return False
    return re.search(LINK_NEXT_PAGE_PATTERN, link_header) is not None


def parse_last_page(link_header: Optional[str]) -> int:
    """
    Parse the page number of the rel="last" entry of a Link header.

    Returns zero when the header is absent or has no last-page reference.
    """
    if not link_header:
        return 0
    match = re.search(LINK_LAST_PAGE_PATTERN, link_header)
    if not match:
        return 0
    return int(match.group(1))


class GitHubClient:
    """
    Async GitHub API client bound to one profile.

    Use as an async context manager; an injected httpx.AsyncClient is used
    as-is and left open for the caller to close.

    Example:
        async with GitHubClient(config.github) as github:
            repos = await github.scrape_profile()
    """

    def __init__(
        self,
        config: GithubConfig,
        cache: ReadmeCache = None,
        client: httpx.AsyncClient = None,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    ):
        self.config = config
        self.cache = cache or ReadmeCache()
        self.max_concurrency = max_concurrency
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> "GitHubClient":
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=GITHUB_REQUEST_TIMEOUT_SECONDS)
        return self

    async def __aexit__(self, *exc_info) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    def headers(self) -> Dict[str, str]:
        headers = {"Accept": GITHUB_API_ACCEPT_HEADER, "User-Agent": GITHUB_USER_AGENT}
        if self.config.token:
            headers["Authorization"] = f"token {self.config.token}"
        return headers

    async def _get(self, url: str) -> httpx.Response:
        if self._client is None:
            raise RuntimeError("GitHubClient must be used as an async context manager")
        return await self._client.get(url, headers=self.headers())

    # --- Repository listing ---

    async def list_repositories(self) -> List[RepositoryRecord]:
        """
        Fetch every non-fork repository of the user, sorted by importance (descending).

        Pages through the listing until a response no longer advertises a
        next page in its Link header.

        Raises:
            GitHubAPIError: If any listing request fails
        """
        repositories: List[RepositoryRecord] = []
        page = 1

        while True:
            url = GITHUB_API_BASE_URL + USER_REPOS_ENDPOINT_TEMPLATE.format(
                username=self.config.username, per_page=GITHUB_REPOS_PER_PAGE, page=page
            )
            try:
                response = await self._get(url)
            except httpx.HTTPError as e:
                raise GitHubAPIError(f"Failed to list repositories: {e}", url=url) from e

            if response.status_code != 200:
                raise GitHubAPIError(
                    "Failed to list repositories", status_code=response.status_code, url=url
                )

            try:
                data = response.json()
                if not isinstance(data, list):
                    raise TypeError(f"expected a list, got {type(data).__name__}")
                page_repos = [RepositoryRecord.from_api(item) for item in data if not item.get("fork")]
            except (ValueError, KeyError, TypeError, AttributeError) as e:
                raise GitHubAPIError(f"Unexpected repository listing payload ({e})", url=url) from e

            _log_debug(f"Page {page}: found {len(data)} repositories")
            repositories.extend(page_repos)

            if not has_next_page(response.headers.get("link")):
                break
            page += 1

        repositories.sort(key=lambda repo: repo.importance_score, reverse=True)
        _log_info(f"Found {len(repositories)} original repositories for {self.config.username}")
        return repositories

    # --- Per-repository lookups ---

    async def get_readme(self, repo: RepositoryRecord) -> Optional[str]:
        """Fetch and decode the repository README; None when absent or undecodable."""
        response = await self._get(f"{repo.url}/readme")
        if response.status_code != 200:
            return None

        content = response.json().get("content")
        if not content:
            return None

        try:
            decoded = base64.b64decode(content.replace("\n", "").replace("\r", ""), validate=True)
        except (binascii.Error, ValueError):
            _log_debug(f"Undecodable README content for {repo.name}")
            return None

        _log_debug(f"Found README for repo: {repo.name}")
        return decoded.decode("utf-8", errors="replace")

    async def get_commit_count(self, repo: RepositoryRecord) -> int:
        """
        Commit count from the Link header of a one-commit-per-page request.

        A missing header (including single-commit repositories) reads as 0.
        """
        response = await self._get(f"{repo.url}/commits?per_page=1")
        if response.status_code != 200:
            return 0
        return parse_last_page(response.headers.get("link"))

    async def get_languages(self, repo: RepositoryRecord) -> Dict[str, int]:
        response = await self._get(f"{repo.url}/languages")
        if response.status_code != 200:
            return {}

        languages = response.json()
        if not isinstance(languages, dict):
            return {}
        return {str(language): int(count) for language, count in languages.items()}

    async def _cached_readme(self, repo: RepositoryRecord) -> Optional[str]:
        cached = self.cache.get(repo.name)
        if cached is not None:
            return cached

        readme = await self.get_readme(repo)
        if readme is not None:
            try:
                self.cache.put(repo.name, readme)
            except OSError as e:
                _log_warning(f"Could not cache README for {repo.name}: {e}")
        return readme

    async def enrich_repository(self, repo: RepositoryRecord) -> RepositoryRecord:
        """
        Attach README, commit count and languages to a repository.

        Each lookup fails independently and degrades to an empty value.
        """
        readme, commits, languages = await asyncio.gather(
            self._cached_readme(repo),
            self.get_commit_count(repo),
            self.get_languages(repo),
            return_exceptions=True,
        )

        if isinstance(readme, Exception):
            _log_debug(f"README lookup failed for {repo.name}: {readme!r}")
            readme = None
        if isinstance(commits, Exception):
            _log_debug(f"Commit count lookup failed for {repo.name}: {commits!r}")
            commits = 0
        if isinstance(languages, Exception):
            _log_debug(f"Language lookup failed for {repo.name}: {languages!r}")
            languages = {}

        return repo.with_metadata(readme=readme, commits=commits, languages=languages)

    async def scrape_profile(self) -> List[RepositoryRecord]:
        """
        List repositories and enrich them concurrently.

        One task per repository, bounded by max_concurrency. The result keeps
        the importance order of the listing regardless of completion order.
        """
        repositories = await self.list_repositories()
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def _bounded(repo: RepositoryRecord) -> RepositoryRecord:
            async with semaphore:
                return await self.enrich_repository(repo)

        # gather returns results positionally, matching the sorted input
        enriched = await asyncio.gather(*(_bounded(repo) for repo in repositories))

        with_readme = sum(1 for repo in enriched if repo.readme is not None)
        _log_success(f"Collected metadata for {len(enriched)} repositories ({with_readme} with README)")
        return list(enriched)
