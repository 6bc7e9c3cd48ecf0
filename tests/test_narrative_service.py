"""
tests/test_narrative_service.py

Pytest unit tests for NarrativeService, the prompt builder and adapter
selection. No network access: only mock and in-test adapters are used.
"""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from app.config import LLMSettings
from app.services.analysis_pipeline import AnalysisPipeline
from app.services.narrative_service import (
    EMPTY_NARRATIVE_MESSAGE,
    FALLBACK_NARRATIVE_MESSAGE,
    NarrativeService,
    build_llm_adapter,
)
from app.services.sample_data import generate_sample_csv
from llm_synthesis.adapter import BaseLLMAdapter, MockLLMAdapter, OpenAILLMAdapter
from llm_synthesis.prompt_builder import NarrativePromptBuilder


class _RecordingAdapter(BaseLLMAdapter):
    def __init__(self, reply: str = "  ### Overview\nAll nominal.  ") -> None:
        self.prompts: list[str] = []
        self._reply = reply

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self._reply


class _FailingAdapter(BaseLLMAdapter):
    def generate(self, prompt: str) -> str:
        raise RuntimeError("invalid api key")


@pytest.fixture(scope="module")
def result():
    return AnalysisPipeline().analyze(generate_sample_csv(), file_name="sample.csv")


class TestNarrativeService:
    def test_mock_adapter(self, result) -> None:
        text = NarrativeService(adapter=MockLLMAdapter()).generate(result)
        assert text.startswith("### Operational Overview")
        assert text == text.strip()

    def test_reply_is_stripped(self, result) -> None:
        text = NarrativeService(adapter=_RecordingAdapter()).generate(result)
        assert text == "### Overview\nAll nominal."

    def test_failure_returns_fallback(self, result) -> None:
        assert NarrativeService(adapter=_FailingAdapter()).generate(result) == FALLBACK_NARRATIVE_MESSAGE

    def test_blank_reply(self, result) -> None:
        text = NarrativeService(adapter=_RecordingAdapter(reply="   ")).generate(result)
        assert text == EMPTY_NARRATIVE_MESSAGE

    def test_prompt_contains_summary(self, result) -> None:
        adapter = _RecordingAdapter()
        NarrativeService(adapter=adapter).generate(result)
        prompt = adapter.prompts[0]
        assert "Dataset Name: sample.csv" in prompt
        assert "Total Equipment Count: 9" in prompt
        assert "Average Flowrate: 199.56 m3/h" in prompt
        assert "- Pump: 3" in prompt

    def test_result_is_not_modified(self, result) -> None:
        before = result.summary
        NarrativeService(adapter=_FailingAdapter()).generate(result)
        assert result.summary is before


class TestPromptBuilder:
    def test_empty_distribution(self) -> None:
        empty = AnalysisPipeline().analyze("")
        prompt = NarrativePromptBuilder().build_prompt(
            summary=empty.summary,
            file_name=empty.file_name,
            uploaded_at=empty.uploaded_at,
        )
        assert "- (none)" in prompt


class TestAdapterSelection:
    def test_mock_setting(self) -> None:
        assert isinstance(build_llm_adapter(LLMSettings(adapter="mock")), MockLLMAdapter)

    def test_openai_setting_builds_without_network(self) -> None:
        adapter = build_llm_adapter(LLMSettings(adapter="openai", api_key="sk-test"))
        assert isinstance(adapter, OpenAILLMAdapter)


class _FakeCompletions:
    def __init__(self, content: str | None) -> None:
        self.calls: list[dict] = []
        self._content = content

    def create(self, **kwargs):
        self.calls.append(kwargs)
        message = SimpleNamespace(content=self._content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class TestOpenAIAdapter:
    def _adapter(self, content: str | None) -> tuple[OpenAILLMAdapter, _FakeCompletions]:
        completions = _FakeCompletions(content)
        adapter = OpenAILLMAdapter(model="gpt-test", max_tokens=64)
        adapter._client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
        return adapter, completions

    def test_request_shape(self) -> None:
        adapter, completions = self._adapter("### Overview")
        assert adapter.generate("hello") == "### Overview"
        call = completions.calls[0]
        assert call["model"] == "gpt-test"
        assert call["max_tokens"] == 64
        assert call["temperature"] == 0.2
        assert call["messages"] == [{"role": "user", "content": "hello"}]

    def test_missing_content_is_empty_text(self) -> None:
        adapter, _ = self._adapter(None)
        assert adapter.generate("hello") == ""
