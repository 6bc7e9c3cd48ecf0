"""Chat-completion adapters that turn a narrative prompt into Markdown."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional


class BaseLLMAdapter(ABC):
    """One-call text generation interface used by the narrative service."""

    @abstractmethod
    def generate(self, prompt: str) -> str:
        """Return the model's Markdown reply to *prompt*; may raise."""


class OpenAILLMAdapter(BaseLLMAdapter):
    """OpenAI-compatible chat completion with a single user message.

    The SDK client is built on the first request, so constructing the
    adapter never touches the network or the API key. With no key given
    the SDK falls back to its own OPENAI_API_KEY lookup.
    """

    TEMPERATURE: float = 0.2

    def __init__(
        self,
        model: str = "gpt-4o-mini",
        max_tokens: int = 512,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
    ) -> None:
        self._model = model
        self._max_tokens = max_tokens
        self._client_options: dict[str, Any] = {}
        if api_key:
            self._client_options["api_key"] = api_key
        if base_url:
            self._client_options["base_url"] = base_url
        self._client: Any = None

    def generate(self, prompt: str) -> str:
        completion = self._get_client().chat.completions.create(
            model=self._model,
            messages=[{"role": "user", "content": prompt}],
            temperature=self.TEMPERATURE,
            max_tokens=self._max_tokens,
        )
        if not completion.choices:
            return ""
        return completion.choices[0].message.content or ""

    def _get_client(self) -> Any:
        if self._client is None:
            from openai import OpenAI

            self._client = OpenAI(**self._client_options)
        return self._client


_MOCK_NARRATIVE = """\
### Operational Overview
Mock commentary for testing purposes. Average flow, pressure and
temperature are within the ranges supplied in the prompt.

### Safety
No real assessment - this is a test fixture.

### Equipment Mix
Verify integration with the analytics pipeline.
"""


class MockLLMAdapter(BaseLLMAdapter):
    """Offline adapter: always answers with the same three-section Markdown."""

    def generate(self, prompt: str) -> str:
        return _MOCK_NARRATIVE
