from __future__ import annotations
from typing import Optional
from google import genai
from google.genai import types
from google.genai.errors import ClientError

from code_explainer.core.config import settings
from code_explainer.services.explain.models import PromptDocument
from code_explainer.services.llm.base import ChatBackend, LLMRateLimitError


class GeminiChatLLM(ChatBackend):
    name = "gemini"

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        key = api_key or settings.GEMINI_API_KEY
        if not key:
            raise RuntimeError("GEMINI_API_KEY is not set")
        self.client = genai.Client(api_key=key)
        self.model = model or settings.GEMINI_CHAT_MODEL

    async def _complete(self, prompt: PromptDocument) -> str:
        config = types.GenerateContentConfig(
            system_instruction=prompt.system_instruction,
            temperature=self.temperature,
            max_output_tokens=self.max_output_tokens,
        )
        try:
            res = await self.client.aio.models.generate_content(
                model=self.model,
                contents=prompt.user_prompt,
                config=config,
            )
        except ClientError as e:
            # 429 quota/rate-limit
            if getattr(e, "code", None) == 429:
                raise LLMRateLimitError(str(e)) from e
            raise
        return res.text or ""
