"""
auto-resume - GitHub-driven, job-tailored LaTeX resume generation

Scrapes a GitHub profile, asks an LLM to rank repositories against a job
posting, lets the operator pick the projects, generates tailored resume
content and compiles it to PDF.

Architecture:
- Profile Context: GitHub repository scraping and README caching
- Intake Context: Job posting ingestion
- Targeting Context: LLM ranking, selection and content generation
- Templating Context: LaTeX assembly
- Rendering Context: PDF compilation
"""

__version__ = "0.1.0"
