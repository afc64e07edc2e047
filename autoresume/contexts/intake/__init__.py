"""
Intake Context

Responsibilities:
- Obtain the raw job posting (URL, local file, or generic template)
- Heuristic parsing of posting HTML when the LLM clean-up is skipped

Owns:
- JobDescription data structure
- Generic job template

Never:
- Calls the LLM (clean-up belongs to the targeting context)
- Touches resume configuration
"""

from autoresume.contexts.intake.job_description import JobDescription
from autoresume.contexts.intake.job_source import (
    GENERIC_JOB_TEMPLATE,
    fetch_job_posting,
    get_raw_job_text,
    heuristic_job_description,
    job_from_text,
    parse_job_html,
    read_job_file,
)

__all__ = [
    "GENERIC_JOB_TEMPLATE",
    "JobDescription",
    "fetch_job_posting",
    "get_raw_job_text",
    "heuristic_job_description",
    "job_from_text",
    "parse_job_html",
    "read_job_file",
]
