from __future__ import annotations
import httpx

from code_explainer.services.explain.models import PromptDocument
from code_explainer.services.llm.base import ChatBackend, LLMRateLimitError, LLMResponseError

class OllamaLLM(ChatBackend):
    name = "ollama"

    def __init__(
        self,
        model: str = "qwen2.5-coder:7b-instruct",
        base_url: str = "http://localhost:11434",
        transport: httpx.AsyncBaseTransport | None = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.model = model
        self.url = f"{base_url.rstrip('/')}/api/generate"
        self.transport = transport

    async def _complete(self, prompt: PromptDocument) -> str:
        payload = {
            "model": self.model,
            "system": prompt.system_instruction,
            "prompt": prompt.user_prompt,
            "stream": False,
            "options": {
                "temperature": self.temperature,
                "num_predict": self.max_output_tokens,
            },
        }

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            r = await client.post(self.url, json=payload)
            if r.status_code == 429:
                raise LLMRateLimitError(f"ollama rate limited: {r.text}")
            r.raise_for_status()
            data = r.json()

        if not isinstance(data, dict):
            raise LLMResponseError("ollama returned a non-object response")
        return data.get("response") or ""
