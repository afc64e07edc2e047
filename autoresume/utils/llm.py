"""
LLM provider abstraction and response parsing utilities.

Provides a provider interface for structured-output LLM calls, an async
exponential backoff helper, and the JSON extraction convention shared by
every structured call.
"""

import asyncio
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple, Type, TypeVar

import httpx
from loguru import logger

from autoresume.exceptions import LLMResponseError

# Retry configuration
MAX_RETRIES = 3
BASE_DELAY = 1.0

REQUEST_TIMEOUT_SECONDS = 120.0

T = TypeVar("T")


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]],
    retryable_exceptions: Tuple[Type[Exception], ...],
    error_message: str,
    max_attempts: int = MAX_RETRIES,
    base_delay: float = BASE_DELAY,
) -> T:
    """
    Await operation with exponential backoff retry on specific exceptions.

    Args:
        operation: Zero-argument coroutine function performing one attempt
        retryable_exceptions: Exception types that trigger a retry
        error_message: Message prefix for retry logging (e.g., "Ranking call failed")
        max_attempts: Total number of attempts before the last error propagates
        base_delay: Delay before the second attempt; doubles on each retry

    Raises:
        ValueError: If max_attempts is less than 1
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

    for attempt in range(max_attempts):
        try:
            return await operation()
        except retryable_exceptions as e:
            if attempt == max_attempts - 1:
                raise
            delay = base_delay * (2**attempt)
            logger.warning(
                f"{error_message}: {str(e).splitlines()[0] if str(e) else type(e).__name__}; "
                f"retrying in {delay:.1f}s (attempt {attempt + 1}/{max_attempts})"
            )
            await asyncio.sleep(delay)


# --- LLM Provider Classes ---


@dataclass
class LLMResponse:
    """Response from an LLM provider."""

    content: str
    model: str
    input_tokens: int
    output_tokens: int


class LLMProvider(ABC):
    """
    Abstract base for structured-output LLM providers.

    Subclasses implement complete(), which performs exactly one request and
    raises LLMResponseError (or an httpx error) on failure. Retrying is the
    caller's responsibility so that response parsing can be retried together
    with the request.
    """

    name: str
    model: str

    @abstractmethod
    async def complete(
        self,
        system_prompt: Optional[str],
        user_prompt: str,
        response_schema: Dict[str, Any],
    ) -> LLMResponse:
        """Make a single API call constrained to response_schema."""


class GeminiProvider(LLMProvider):
    """Google Gemini generateContent REST provider with JSON-schema structured output."""

    def __init__(
        self,
        api_key: str,
        model: str,
        endpoint: str,
        temperature: float = 0.7,
        max_output_tokens: int = 8192,
        client: httpx.AsyncClient = None,
    ):
        if not api_key:
            raise ValueError("Gemini API key is required")

        self.api_key = api_key
        self.model = model
        self.name = f"gemini/{model}"
        self.endpoint = endpoint.rstrip("/")
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        self._client = client

    def url(self) -> str:
        return f"{self.endpoint}/{self.model}:generateContent?key={self.api_key}"

    def build_body(
        self,
        system_prompt: Optional[str],
        user_prompt: str,
        response_schema: Dict[str, Any],
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": user_prompt}]}],
            "generationConfig": {
                "temperature": self.temperature,
                "maxOutputTokens": self.max_output_tokens,
                "responseMimeType": "application/json",
                "responseJsonSchema": response_schema,
            },
        }
        if system_prompt:
            body["systemInstruction"] = {"parts": [{"text": system_prompt}]}
        return body

    async def complete(
        self,
        system_prompt: Optional[str],
        user_prompt: str,
        response_schema: Dict[str, Any],
    ) -> LLMResponse:
        body = self.build_body(system_prompt, user_prompt, response_schema)
        logger.debug(f"Sending request to {self.name} (prompt length: {len(user_prompt)} chars)")

        if self._client is not None:
            response = await self._client.post(self.url(), json=body, timeout=REQUEST_TIMEOUT_SECONDS)
        else:
            async with httpx.AsyncClient() as client:
                response = await client.post(self.url(), json=body, timeout=REQUEST_TIMEOUT_SECONDS)

        if response.status_code != 200:
            raise LLMResponseError(
                f"Gemini API request failed for model {self.model}",
                status_code=response.status_code,
                excerpt=response.text[:500],
            )

        try:
            data = response.json()
        except ValueError as e:
            raise LLMResponseError(
                "Gemini API returned a non-JSON body",
                status_code=response.status_code,
                excerpt=response.text[:500],
            ) from e

        text = extract_candidate_text(data)
        if text is None:
            raise LLMResponseError(
                "Invalid Gemini API response structure: no candidate text",
                status_code=response.status_code,
                excerpt=response.text[:500],
            )

        usage = data.get("usageMetadata") or {}
        return LLMResponse(
            content=text,
            model=self.model,
            input_tokens=int(usage.get("promptTokenCount", 0)),
            output_tokens=int(usage.get("candidatesTokenCount", 0)),
        )


# --- Response Parsing Utilities ---


def extract_candidate_text(data: Any) -> Optional[str]:
    """Return candidates[0].content.parts[0].text from a generateContent response, or None."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) else None


def extract_json_object(text: str) -> Dict[str, Any]:
    """
    Parse the JSON object embedded in an LLM response.

    Takes the substring from the first "{" to the last "}" so that leading or
    trailing prose (and markdown fences) are tolerated.

    Raises:
        LLMResponseError: If no object delimiters are present, the slice is not
            valid JSON, or the parsed value is not an object
    """
    trimmed = text.strip()
    start = trimmed.find("{")
    end = trimmed.rfind("}")
    if start == -1:
        raise LLMResponseError("No JSON object found in LLM response", excerpt=trimmed[:500])
    if end < start:
        raise LLMResponseError("Malformed JSON in LLM response", excerpt=trimmed[:500])

    json_str = trimmed[start : end + 1]
    try:
        result = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise LLMResponseError(f"Failed to parse LLM response as JSON: {e}", excerpt=json_str[:500]) from e

    if not isinstance(result, dict):
        raise LLMResponseError("LLM response JSON is not an object", excerpt=json_str[:500])
    return result
