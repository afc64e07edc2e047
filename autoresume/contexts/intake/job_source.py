"""
Job posting sources.

Raw posting text comes from a URL (HTML), a local file, or a built-in generic
template, in that priority order. The raw text is normally normalized by the
LLM clean-up step; parse_job_html() is the heuristic alternative used when
that step is skipped.
"""

import re
from pathlib import Path
from typing import Optional

import httpx
from bs4 import BeautifulSoup

from autoresume.contexts.intake.job_description import UNKNOWN_POSITION_TITLE, JobDescription
from autoresume.contexts.intake.logger import _log_debug, _log_info
from autoresume.exceptions import JobSourceError

BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
}
FETCH_TIMEOUT_SECONDS = 20.0

REQUIREMENTS_PATTERN = re.compile(
    r"\b(requirements|qualifications|skills|must-haves?)\b[:\s]*(.+)", re.IGNORECASE | re.DOTALL
)
MIN_REQUIREMENTS_LENGTH = 100
MAX_REQUIREMENTS_LENGTH = 5000
COMPANY_CLASS_PATTERN = re.compile(r"company", re.IGNORECASE)
NON_CONTENT_TAGS = ["script", "style", "noscript", "template"]

GENERIC_JOB_TEMPLATE = """\
Software Engineer

We are looking for a software engineer to design, build and maintain reliable
software systems. You will work across the stack with a collaborative team,
own features from design to production, and help improve code quality,
testing and delivery practices.

Responsibilities:
- Design, implement and test new features and services
- Maintain and improve existing codebases and infrastructure
- Review code and share knowledge with teammates
- Collaborate with product and design to ship user-facing improvements

Requirements:
- Solid experience with at least one general-purpose programming language
- Familiarity with version control, automated testing and CI/CD
- Understanding of data structures, APIs and databases
- Clear written and verbal communication
- Open-source contributions are a plus
"""


async def fetch_job_posting(url: str, client: httpx.AsyncClient = None) -> str:
    """
    Download a job posting page.

    Raises:
        JobSourceError: On transport failure or a non-success status
    """
    _log_info(f"Fetching job description from: {url}")
    try:
        if client is not None:
            response = await client.get(url, headers=BROWSER_HEADERS, follow_redirects=True)
        else:
            async with httpx.AsyncClient(follow_redirects=True, timeout=FETCH_TIMEOUT_SECONDS) as owned:
                response = await owned.get(url, headers=BROWSER_HEADERS)
    except httpx.HTTPError as e:
        raise JobSourceError(f"Failed to fetch job posting from {url}: {e}") from e

    if response.status_code != 200:
        raise JobSourceError(f"Failed to fetch job posting from {url} (HTTP {response.status_code})")

    _log_debug(f"Fetched {len(response.text)} characters of HTML")
    return response.text


def read_job_file(path: Path) -> str:
    """
    Read a job description from a local file.

    Raises:
        JobSourceError: If the file does not exist or cannot be read
    """
    path = Path(path)
    _log_info(f"Reading job description from file: {path}")
    if not path.exists():
        raise JobSourceError(f"Job description file not found: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise JobSourceError(f"Failed to read job description file {path}: {e}") from e


async def get_raw_job_text(
    job_url: Optional[str] = None,
    job_file: Optional[Path] = None,
    client: httpx.AsyncClient = None,
) -> str:
    """Resolve the job posting text: URL first, then file, then the generic template."""
    if job_url:
        return await fetch_job_posting(job_url, client=client)
    if job_file:
        return read_job_file(job_file)

    _log_info("No job URL or file given, using the generic job template")
    return GENERIC_JOB_TEMPLATE


def looks_like_html(text: str) -> bool:
    return bool(re.search(r"<(html|body|div|p|h1|meta|title)\b", text, re.IGNORECASE))


def _meta_content(soup: BeautifulSoup, prop: str) -> Optional[str]:
    tag = soup.find("meta", attrs={"property": prop})
    if tag and tag.get("content"):
        return tag["content"].strip()
    return None


def _extract_title(soup: BeautifulSoup) -> str:
    h1 = soup.find("h1")
    if h1 and h1.get_text(strip=True):
        return h1.get_text(strip=True)

    og_title = _meta_content(soup, "og:title")
    if og_title:
        return og_title

    if soup.title and soup.title.get_text(strip=True):
        return soup.title.get_text(strip=True)

    return UNKNOWN_POSITION_TITLE


def _extract_company(soup: BeautifulSoup) -> Optional[str]:
    site_name = _meta_content(soup, "og:site_name")
    if site_name:
        return site_name

    element = soup.find(class_=COMPANY_CLASS_PATTERN)
    if element and element.get_text(strip=True):
        return element.get_text(strip=True)
    return None


def _extract_requirements(text: str) -> Optional[str]:
    match = REQUIREMENTS_PATTERN.search(text)
    if not match:
        return None
    requirements = match.group(2).strip()
    if len(requirements) < MIN_REQUIREMENTS_LENGTH:
        return None
    return requirements[:MAX_REQUIREMENTS_LENGTH]


def parse_job_html(html: str) -> JobDescription:
    """
    Heuristically extract a JobDescription from a posting page.

    Title: first <h1>, then og:title, then <title>.
    Company: og:site_name, then the first element whose class mentions "company".
    Requirements: text after the first requirements-like heading (at least
    100 characters), otherwise the full description.
    """
    soup = BeautifulSoup(html, "html.parser")

    title = _extract_title(soup)
    company = _extract_company(soup)

    for tag in soup(NON_CONTENT_TAGS):
        tag.decompose()

    content = soup.body or soup
    description = content.get_text(separator="\n", strip=True)
    requirements = _extract_requirements(description) or description

    return JobDescription(
        title=title,
        company=company,
        description=description,
        requirements=requirements,
    )


def job_from_text(text: str) -> JobDescription:
    """Plain posting text: titled "Job Description", description and requirements both the text."""
    return JobDescription.from_text(text)


def heuristic_job_description(raw: str) -> JobDescription:
    """JobDescription for raw posting text without the LLM clean-up step."""
    if looks_like_html(raw):
        return parse_job_html(raw)
    return job_from_text(raw)
