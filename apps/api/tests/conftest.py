"""Shared test setup: no real model credentials, no .env leakage."""

import os

# Cleared at import time so Settings() never sees a real key from the shell.
for _var in ("GEMINI_API_KEY", "GOOGLE_GENERATIVE_AI_API_KEY", "OLLAMA_BASE_URL", "GITHUB_TOKEN"):
    os.environ.pop(_var, None)
os.environ["LLM_PROVIDER"] = "gemini"

from typing import Callable, Dict, List

import httpx
import pytest

from code_explainer.services.ingestion.github_client import GitHubClient


def json_transport(routes: Dict[str, httpx.Response], seen: List[httpx.Request] | None = None) -> httpx.MockTransport:
    """MockTransport keyed by "host/path"; unknown routes answer 404."""

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        key = f"{request.url.host}{request.url.path}"
        if key in routes:
            return routes[key]
        return httpx.Response(404, json={"message": "Not Found"})

    return httpx.MockTransport(handler)


@pytest.fixture
def make_github() -> Callable[..., GitHubClient]:
    def _make(routes: Dict[str, httpx.Response], seen: List[httpx.Request] | None = None, token: str | None = None):
        return GitHubClient(token=token, transport=json_transport(routes, seen), timeout=5)

    return _make
