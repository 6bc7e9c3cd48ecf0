"""
app/services/narrative_service.py

Free-text commentary for an analysed dataset.

The narrative is produced by an external LLM and is strictly optional:
any adapter failure is logged and replaced with a fixed fallback message,
so callers always receive a string and the structured AnalysisResult is
never affected.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from app.config import LLMSettings, get_llm_settings
from app.domain.equipment import AnalysisResult
from llm_synthesis.adapter import BaseLLMAdapter, MockLLMAdapter, OpenAILLMAdapter
from llm_synthesis.prompt_builder import NarrativePromptBuilder

logger = logging.getLogger(__name__)

EMPTY_NARRATIVE_MESSAGE = "No analysis generated."
FALLBACK_NARRATIVE_MESSAGE = (
    "Error generating analysis. Please check your API key configuration."
)


def build_llm_adapter(settings: LLMSettings) -> BaseLLMAdapter:
    """
    Construct the adapter selected by LLM_ADAPTER.
    """

    if settings.adapter == "mock":
        return MockLLMAdapter()
    return OpenAILLMAdapter(
        model=settings.model,
        max_tokens=settings.max_tokens,
        api_key=settings.api_key,
        base_url=settings.base_url,
    )


class NarrativeService:
    """
    Generates Markdown commentary from a result's summary.

    The adapter is created lazily on first use, so a missing SDK or API
    key only surfaces as fallback text on the narrative path.
    """

    def __init__(
        self,
        *,
        adapter: BaseLLMAdapter | None = None,
        settings: LLMSettings | None = None,
        prompt_builder: NarrativePromptBuilder | None = None,
    ) -> None:
        self._adapter = adapter
        self._settings = settings
        self._prompt_builder = prompt_builder or NarrativePromptBuilder()

    def generate(self, result: AnalysisResult) -> str:
        prompt = self._prompt_builder.build_prompt(
            summary=result.summary,
            file_name=result.file_name,
            uploaded_at=result.uploaded_at,
        )
        try:
            text = self._get_adapter().generate(prompt)
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "Narrative generation failed result_id=%s file=%r: %s",
                result.id,
                result.file_name,
                exc,
            )
            return FALLBACK_NARRATIVE_MESSAGE

        if not text or not text.strip():
            return EMPTY_NARRATIVE_MESSAGE
        logger.info("Narrative generated result_id=%s chars=%d", result.id, len(text))
        return text.strip()

    def _get_adapter(self) -> BaseLLMAdapter:
        if self._adapter is None:
            self._adapter = build_llm_adapter(self._settings or get_llm_settings())
        return self._adapter


@lru_cache(maxsize=1)
def get_narrative_service() -> NarrativeService:
    """
    Return a cached narrative service instance.
    """

    return NarrativeService()
