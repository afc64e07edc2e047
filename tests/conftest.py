"""Shared fixtures and fakes for the auto-resume test suite."""

from typing import List, Optional

import pytest
from loguru import logger

from autoresume.contexts.profile.repository import RepositoryRecord
from autoresume.utils.config import AppConfig, GithubConfig, LLMConfig, ResumeConfig
from autoresume.utils.llm import LLMProvider, LLMResponse


def make_repo(name: str, **overrides) -> RepositoryRecord:
    """RepositoryRecord with API/browser URLs derived from the name."""
    fields = {
        "url": f"https://api.github.com/repos/jane/{name}",
        "html_url": f"https://github.com/jane/{name}",
    }
    fields.update(overrides)
    return RepositoryRecord(name=name, **fields)


class FakeProvider(LLMProvider):
    """Replays canned responses; Exception entries are raised instead."""

    name = "fake"
    model = "fake-model"

    def __init__(self, responses: List):
        self.responses = list(responses)
        self.calls = []

    async def complete(self, system_prompt: Optional[str], user_prompt: str, response_schema: dict) -> LLMResponse:
        self.calls.append((system_prompt, user_prompt, response_schema))
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return LLMResponse(content=item, model=self.model, input_tokens=10, output_tokens=20)


class ScriptedConsole:
    """Console that answers prompts from a script and records everything shown."""

    def __init__(self, answers: List[str]):
        self.answers = list(answers)
        self.prompts = []
        self.messages = []

    def prompt(self, text: str) -> str:
        self.prompts.append(text)
        return self.answers.pop(0)

    def echo(self, text: str, color: Optional[str] = None) -> None:
        self.messages.append(text)


@pytest.fixture
def resume_config() -> ResumeConfig:
    return ResumeConfig(
        full_name="Jane Doe",
        country="Portugal",
        city="Lisbon",
        email="jane@example.com",
        github="https://github.com/jane",
    )


@pytest.fixture
def app_config(resume_config) -> AppConfig:
    return AppConfig(
        resume=resume_config,
        github=GithubConfig(username="jane"),
        llm=LLMConfig(api_key="test-key"),
    )


@pytest.fixture(autouse=True)
def _reset_loguru():
    """Drop sinks added by setup_logger so they never outlive a test."""
    yield
    logger.remove()
