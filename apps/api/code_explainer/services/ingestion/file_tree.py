from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Union

from loguru import logger

from code_explainer.schemas.github import RepoTreeResponse, TreeNode
from code_explainer.services.ingestion.github_client import GitHubClient
from code_explainer.utils.repo_url import parse_github_url

TreeItem = Union[str, Dict[str, Any]]


def _item_path_and_type(item: TreeItem) -> tuple[str, str]:
    # plain strings are treated as files
    if isinstance(item, str):
        return item, "blob"
    return item.get("path") or "", item.get("type") or "blob"


def _sort_key(node: TreeNode) -> tuple:
    return (0 if node.type == "dir" else 1, node.name.lower(), node.name)


def build_tree(items: Iterable[TreeItem]) -> List[TreeNode]:
    """
    Turn GitHub's flat recursive listing into a nested tree.
    Directories come before files at every level, then names in order.
    """
    root: Dict[str, Dict[str, Any]] = {}

    for item in items:
        path, kind = _item_path_and_type(item)
        segments = [s for s in path.split("/") if s]
        current = root
        for i, seg in enumerate(segments):
            is_last = i == len(segments) - 1
            if seg not in current:
                current[seg] = {
                    "name": seg,
                    "path": "/".join(segments[: i + 1]),
                    "type": ("file" if kind == "blob" else "dir") if is_last else "dir",
                    "children": {},
                }
            elif not is_last:
                current[seg]["type"] = "dir"
            current = current[seg]["children"]

    def to_nodes(node_map: Dict[str, Dict[str, Any]]) -> List[TreeNode]:
        nodes = [
            TreeNode(
                name=n["name"],
                path=n["path"],
                type=n["type"],
                children=to_nodes(n["children"]) if n["type"] == "dir" else None,
            )
            for n in node_map.values()
        ]
        return sorted(nodes, key=_sort_key)

    return to_nodes(root)


async def fetch_repo_tree(url: str, token: Optional[str] = None, gh: Optional[GitHubClient] = None) -> RepoTreeResponse:
    """
    Resolve a repo URL to owner/repo/branch and its full file tree.
    A /tree/<branch> segment in the URL wins over the repo's default branch.
    Raises GitHubAPIError (with the upstream status) or ValueError for bad URLs.
    """
    ref = parse_github_url(url)
    gh = gh or GitHubClient(token=token)

    repo_info = await gh.get_repo(ref.owner, ref.repo)
    branch = ref.branch or repo_info.get("default_branch") or "main"

    tree = await gh.get_tree(ref.owner, ref.repo, branch)
    items: List[Dict[str, Any]] = tree.get("tree", [])
    if tree.get("truncated"):
        logger.warning(f"GitHub tree for {ref.owner}/{ref.repo}@{branch} was truncated")

    logger.info(f"Fetched tree {ref.owner}/{ref.repo}@{branch}: {len(items)} entries")
    return RepoTreeResponse(owner=ref.owner, repo=ref.repo, branch=branch, tree=build_tree(items))
