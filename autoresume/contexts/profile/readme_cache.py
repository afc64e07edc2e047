"""
File-backed README cache.

One markdown file per repository, keyed by repository name. Entries never
expire: once a README is cached it is reused on every later run. There is no
locking; concurrent runs writing the same key simply overwrite each other.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from autoresume.contexts.profile.logger import _log_debug, _log_info

load_dotenv()
README_CACHE_PATH = Path(os.getenv("README_CACHE_PATH", ".readme-cache"))


def cache_key(repo_name: str) -> str:
    """Convert a repository name (possibly "owner/name") into a file-safe slug."""
    return repo_name.replace("/", "-")


class ReadmeCache:
    """Flat-file key/value store for README bodies."""

    def __init__(self, cache_dir: Path = None):
        self.cache_dir = Path(cache_dir) if cache_dir is not None else README_CACHE_PATH

    def _ensure_dir(self) -> None:
        if not self.cache_dir.exists():
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            _log_info(f"Created README cache directory: {self.cache_dir}")

    def path_for(self, repo_name: str) -> Path:
        return self.cache_dir / f"{cache_key(repo_name)}.md"

    def get(self, repo_name: str) -> Optional[str]:
        """Return the cached README, or None on a miss or unreadable entry."""
        cache_file = self.path_for(repo_name)
        if not cache_file.exists():
            return None
        try:
            content = cache_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            _log_debug(f"Failed to read cached README for {repo_name}: {e}")
            return None
        _log_debug(f"Loaded README from cache: {repo_name}")
        return content

    def put(self, repo_name: str, content: str) -> None:
        self._ensure_dir()
        self.path_for(repo_name).write_text(content, encoding="utf-8")
        _log_debug(f"Cached README for: {repo_name}")
