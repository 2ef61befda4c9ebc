from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

GITHUB_HOSTS = ("github.com", "www.github.com")
BRANCH_MARKERS = ("tree", "blob")


@dataclass(frozen=True)
class GitHubRepoRef:
    owner: str
    repo: str
    branch: Optional[str] = None


def _with_scheme(raw: str) -> str:
    s = raw.strip()
    if s.startswith("git@github.com:"):
        return "https://github.com/" + s[len("git@github.com:"):]
    if "://" in s:
        return s
    if s.lower().startswith(GITHUB_HOSTS):
        return "https://" + s
    # bare "owner/repo"
    return "https://github.com/" + s.lstrip("/")


def parse_github_url(raw: str) -> GitHubRepoRef:
    """
    Accepts:
    - https://github.com/<owner>/<repo>[.git]
    - https://github.com/<owner>/<repo>/tree/<branch>/... (branch taken from the URL)
    - github.com/<owner>/<repo>, <owner>/<repo>, git@github.com:<owner>/<repo>.git
    """
    if not raw or not raw.strip():
        raise ValueError("Missing repository URL")

    u = urlparse(_with_scheme(raw))
    host = (u.netloc or "").lower()
    if host not in GITHUB_HOSTS:
        raise ValueError("Not a GitHub URL")

    parts = [p for p in (u.path or "").split("/") if p]
    if len(parts) < 2:
        raise ValueError("Invalid GitHub repo URL (missing owner/repo)")

    owner, repo = parts[0], parts[1]
    if repo.endswith(".git"):
        repo = repo[:-4]
    if not repo:
        raise ValueError("Invalid GitHub repo URL (missing owner/repo)")

    branch = None
    if len(parts) >= 4 and parts[2] in BRANCH_MARKERS:
        branch = parts[3]

    return GitHubRepoRef(owner=owner, repo=repo, branch=branch)
