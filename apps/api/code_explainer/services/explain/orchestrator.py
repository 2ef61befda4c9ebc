from __future__ import annotations

from typing import Callable, Optional

from loguru import logger

from code_explainer.services.explain.heuristic import summarize
from code_explainer.services.explain.models import (
    CodeSample,
    ExplanationResult,
    PromptDocument,
    SourceMode,
)
from code_explainer.services.explain.prompts import build_prompt, build_review_prompt
from code_explainer.services.llm.base import ChatBackend, Err, LLMRateLimitError, Ok
from code_explainer.services.llm.provider import get_chat_backend

HEURISTIC_ONLY_NOTE = "heuristic mode (no credential configured)"
FALLBACK_NOTE = "heuristic fallback after backend error"


class ExplanationOrchestrator:
    """
    Per-request flow:
    no backend configured -> heuristic (note)
    backend Ok(text)       -> ai, text verbatim
    backend Err / raise    -> heuristic (fallback note), error logged only
    One attempt, never a retry.
    """

    def __init__(self, backend_factory: Callable[[], Optional[ChatBackend]] = get_chat_backend):
        self.backend_factory = backend_factory

    async def explain(self, sample: CodeSample, question: Optional[str] = None) -> ExplanationResult:
        return await self._run(sample, build_prompt(sample, question))

    async def review(self, sample: CodeSample) -> ExplanationResult:
        return await self._run(sample, build_review_prompt(sample))

    async def _run(self, sample: CodeSample, prompt: PromptDocument) -> ExplanationResult:
        try:
            backend = self.backend_factory()
        except Exception as e:
            return self._fallback(sample, e)

        if backend is None:
            logger.info("No AI backend configured; using heuristic summary")
            return ExplanationResult(
                body=summarize(sample).body,
                source_mode=SourceMode.HEURISTIC,
                note=HEURISTIC_ONLY_NOTE,
            )

        try:
            outcome = await backend.generate(prompt)
        except Exception as e:
            return self._fallback(sample, e)

        if isinstance(outcome, Ok):
            logger.info(f"Explanation generated by {backend.name} ({len(outcome.value)} chars)")
            return ExplanationResult(body=outcome.value, source_mode=SourceMode.AI)
        if isinstance(outcome, Err):
            return self._fallback(sample, outcome.error)
        return self._fallback(sample, TypeError(f"unexpected backend result {type(outcome).__name__}"))

    def _fallback(self, sample: CodeSample, error: Exception) -> ExplanationResult:
        if isinstance(error, LLMRateLimitError):
            logger.warning(f"AI backend rate limited, falling back to heuristic: {error}")
        else:
            logger.warning(f"AI backend failed, falling back to heuristic: {type(error).__name__}: {error}")
        return ExplanationResult(
            body=summarize(sample).body,
            source_mode=SourceMode.HEURISTIC,
            note=FALLBACK_NOTE,
        )
