from __future__ import annotations

from typing import Any, Optional

from loguru import logger

from code_explainer.schemas.github import FileContentResponse
from code_explainer.services.analysis.language import detect_language_from_path
from code_explainer.services.ingestion.github_client import GitHubAPIError, GitHubClient
from code_explainer.utils.repo_url import parse_github_url

DEFAULT_REF = "main"


def _looks_binary(text: str) -> bool:
    return "\x00" in text  # null byte check


async def _download_chain(gh: GitHubClient, *urls: str) -> str:
    """Try each download URL once, in order; re-raise the last failure."""
    last: Optional[GitHubAPIError] = None
    for u in urls:
        try:
            return await gh.get_text(u)
        except GitHubAPIError as e:
            logger.info(f"Download failed ({e.status_code}) for {u}; trying next source")
            last = e
    raise last or GitHubAPIError("File content unavailable", 404)


def _inline_content(data: Any, gh: GitHubClient) -> Optional[str]:
    if isinstance(data, dict) and data.get("encoding") == "base64" and data.get("content"):
        return gh.decode_blob_content(data).decode("utf-8", errors="replace")
    return None


async def fetch_file_content(
    url: str,
    path: str,
    token: Optional[str] = None,
    gh: Optional[GitHubClient] = None,
) -> FileContentResponse:
    """
    Text of one repository file plus its detected language.

    Sources, each tried once: contents API (inline base64) -> its download_url
    -> raw.githubusercontent.com. When the API itself fails and the raw mirror
    fails too, the API's status and message are raised.
    """
    if not path or not path.strip():
        raise ValueError("Missing path")

    ref = parse_github_url(url)
    branch = ref.branch or DEFAULT_REF
    gh = gh or GitHubClient(token=token)
    raw = gh.raw_url(ref.owner, ref.repo, branch, path)

    try:
        data = await gh.get_contents(ref.owner, ref.repo, path, branch)
    except GitHubAPIError as api_error:
        logger.info(f"Contents API failed ({api_error.status_code}) for {path}; trying raw mirror")
        try:
            content = await gh.get_text(raw)
        except GitHubAPIError:
            raise api_error
    else:
        content = _inline_content(data, gh)
        if content is None:
            download_url = data.get("download_url") if isinstance(data, dict) else None
            urls = [download_url, raw] if download_url else [raw]
            content = await _download_chain(gh, *urls)

    if _looks_binary(content):
        raise GitHubAPIError("Binary files cannot be explained", 415)

    language = detect_language_from_path(path, content)
    return FileContentResponse(content=content, language=language.value)
