from __future__ import annotations

from typing import Optional

from code_explainer.core.config import Settings, settings
from code_explainer.services.llm.base import ChatBackend
from code_explainer.services.llm.gemini_chat import GeminiChatLLM
from code_explainer.services.llm.ollama_llm import OllamaLLM

PROVIDERS = ("gemini", "ollama")


def configured_provider(cfg: Settings = settings) -> Optional[str]:
    """
    Name of the usable AI provider, or None for heuristic-only mode.
    gemini needs an API key; ollama needs a base URL.
    """
    provider = (cfg.LLM_PROVIDER or "gemini").lower()
    if provider not in PROVIDERS:
        provider = "gemini"

    if provider == "ollama":
        return provider if cfg.OLLAMA_BASE_URL else None
    return provider if cfg.GEMINI_API_KEY else None


def get_chat_backend(cfg: Settings = settings) -> Optional[ChatBackend]:
    provider = configured_provider(cfg)
    if provider is None:
        return None

    tuning = {
        "temperature": cfg.LLM_TEMPERATURE,
        "max_output_tokens": cfg.LLM_MAX_OUTPUT_TOKENS,
        "timeout": cfg.LLM_TIMEOUT_SECONDS,
    }
    if provider == "ollama":
        return OllamaLLM(model=cfg.OLLAMA_MODEL, base_url=cfg.OLLAMA_BASE_URL, **tuning)
    return GeminiChatLLM(api_key=cfg.GEMINI_API_KEY, model=cfg.GEMINI_CHAT_MODEL, **tuning)
