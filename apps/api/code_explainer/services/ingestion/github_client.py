from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import quote
import httpx
from loguru import logger

from code_explainer.core.config import settings

USER_AGENT = "code-explainer-api/0.1"


class GitHubAPIError(Exception):
    def __init__(self, message: str, status_code: int = 502) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass
class GitHubRateLimit:
    remaining: Optional[int]
    reset_epoch: Optional[int]


class GitHubClient:
    def __init__(
        self,
        token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.base = "https://api.github.com"
        self.raw_base = "https://raw.githubusercontent.com"
        self.token = token or getattr(settings, "GITHUB_TOKEN", None)
        self.transport = transport
        self.timeout = timeout or settings.GITHUB_TIMEOUT_SECONDS

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": USER_AGENT,
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport, follow_redirects=True)

    def _rate_limit(self, resp: httpx.Response) -> GitHubRateLimit:
        def _to_int(v: Optional[str]) -> Optional[int]:
            try:
                return int(v) if v is not None else None
            except ValueError:
                return None

        remaining = _to_int(resp.headers.get("x-ratelimit-remaining"))
        reset = _to_int(resp.headers.get("x-ratelimit-reset"))
        return GitHubRateLimit(remaining=remaining, reset_epoch=reset)

    @staticmethod
    def _message(resp: httpx.Response, default: str) -> str:
        try:
            body = resp.json()
        except ValueError:
            return default
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return default

    def _raise_for_status(self, resp: httpx.Response, default: str) -> None:
        if resp.status_code in (403, 429):
            rl = self._rate_limit(resp)
            logger.warning(
                f"GitHub rate limit or forbidden. status={resp.status_code} "
                f"remaining={rl.remaining} reset={rl.reset_epoch}"
            )
        if resp.status_code >= 400:
            raise GitHubAPIError(self._message(resp, f"{default} ({resp.status_code})"), resp.status_code)

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None, error: str = "GitHub API error") -> Any:
        url = f"{self.base}{path}"
        async with self._client() as client:
            resp = await client.get(url, headers=self._headers(), params=params)
        self._raise_for_status(resp, error)
        try:
            return resp.json()
        except ValueError as e:
            raise GitHubAPIError(f"{error} (malformed response)", 502) from e

    async def get_text(self, url: str) -> str:
        """Plain download (download_url or raw mirror); no API headers."""
        async with self._client() as client:
            resp = await client.get(url, headers={"User-Agent": USER_AGENT})
        if resp.status_code >= 400:
            raise GitHubAPIError(f"Failed to download file ({resp.status_code})", resp.status_code)
        return resp.text

    async def get_repo(self, owner: str, repo: str) -> Dict[str, Any]:
        return await self._get(f"/repos/{owner}/{repo}", error="Repo not found or API error")

    async def get_tree(self, owner: str, repo: str, ref: str) -> Dict[str, Any]:
        # recursive=1 returns the full tree in one call
        return await self._get(
            f"/repos/{owner}/{repo}/git/trees/{quote(ref, safe='')}",
            params={"recursive": "1"},
            error="Tree fetch failed",
        )

    async def get_contents(self, owner: str, repo: str, path: str, ref: str) -> Any:
        return await self._get(
            f"/repos/{owner}/{repo}/contents/{quote(path)}",
            params={"ref": ref},
            error="Failed to fetch file",
        )

    def raw_url(self, owner: str, repo: str, ref: str, path: str) -> str:
        # raw mirror expects an unescaped path
        return f"{self.raw_base}/{owner}/{repo}/{ref}/{path}"

    @staticmethod
    def decode_blob_content(blob_json: dict) -> bytes:
        # GitHub returns base64 with newlines sometimes
        enc = blob_json.get("encoding")
        content = blob_json.get("content", "")
        if enc != "base64":
            return content.encode("utf-8", errors="ignore")
        content = content.replace("\n", "")
        try:
            return base64.b64decode(content)
        except binascii.Error as e:
            raise GitHubAPIError("Malformed base64 content from GitHub", 502) from e
