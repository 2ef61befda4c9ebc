from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from code_explainer.core.config import settings
from code_explainer.services.explain.models import PromptDocument

T = TypeVar("T")


class LLMResponseError(Exception):
    pass


class LLMRateLimitError(Exception):
    """Backend refused the call for quota or rate reasons (HTTP 429)."""


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: Exception


BackendResult = Union[Ok[str], Err]


class ChatBackend:
    """
    Base for generative backends.
    Subclasses implement `_complete`; `generate` never raises, it returns Ok(text) or Err(exc).
    """

    name = "base"

    def __init__(
        self,
        temperature: float | None = None,
        max_output_tokens: int | None = None,
        timeout: float | None = None,
    ) -> None:
        self.temperature = settings.LLM_TEMPERATURE if temperature is None else temperature
        self.max_output_tokens = max_output_tokens or settings.LLM_MAX_OUTPUT_TOKENS
        self.timeout = timeout or settings.LLM_TIMEOUT_SECONDS

    async def _complete(self, prompt: PromptDocument) -> str:
        raise NotImplementedError

    async def generate(self, prompt: PromptDocument) -> BackendResult:
        try:
            text = await asyncio.wait_for(self._complete(prompt), timeout=self.timeout)
        except asyncio.TimeoutError:
            return Err(LLMResponseError(f"{self.name} timed out after {self.timeout}s"))
        except Exception as e:
            return Err(e)

        text = (text or "").strip()
        if not text:
            return Err(LLMResponseError(f"{self.name} returned an empty response"))
        return Ok(text)
