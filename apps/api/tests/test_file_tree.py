"""Tests for building and fetching repository trees."""

from __future__ import annotations

import httpx
import pytest

from code_explainer.services.ingestion.file_tree import build_tree, fetch_repo_tree
from code_explainer.services.ingestion.github_client import GitHubAPIError

TREE_ITEMS = [
    {"path": "README.md", "type": "blob"},
    {"path": "src", "type": "tree"},
    {"path": "src/main.py", "type": "blob"},
    {"path": "src/utils", "type": "tree"},
    {"path": "src/utils/io.py", "type": "blob"},
    {"path": "docs", "type": "tree"},
    {"path": "Dockerfile", "type": "blob"},
]


class TestBuildTree:
    def test_flat_paths_become_nested(self):
        tree = build_tree(["a/b.txt", "a/c/d.txt"])
        assert len(tree) == 1
        a = tree[0]
        assert (a.name, a.type, a.path) == ("a", "dir", "a")
        assert [(n.name, n.type) for n in a.children] == [("c", "dir"), ("b.txt", "file")]
        c = a.children[0]
        assert [(n.name, n.type, n.path) for n in c.children] == [("d.txt", "file", "a/c/d.txt")]
        assert c.children[0].children is None

    def test_dirs_first_then_names(self):
        tree = build_tree(TREE_ITEMS)
        assert [n.name for n in tree] == ["docs", "src", "Dockerfile", "README.md"]
        src = tree[1]
        assert [n.name for n in src.children] == ["utils", "main.py"]

    def test_empty_tree_entry_is_dir_with_no_children(self):
        docs = build_tree(TREE_ITEMS)[0]
        assert docs.type == "dir"
        assert docs.children == []

    def test_empty_listing(self):
        assert build_tree([]) == []


class TestFetchRepoTree:
    @pytest.mark.asyncio
    async def test_default_branch_used(self, make_github):
        seen: list[httpx.Request] = []
        gh = make_github(
            {
                "api.github.com/repos/octo/hello": httpx.Response(200, json={"default_branch": "develop"}),
                "api.github.com/repos/octo/hello/git/trees/develop": httpx.Response(200, json={"tree": TREE_ITEMS}),
            },
            seen,
        )
        result = await fetch_repo_tree("https://github.com/octo/hello", gh=gh)

        assert (result.owner, result.repo, result.branch) == ("octo", "hello", "develop")
        assert [n.name for n in result.tree][:2] == ["docs", "src"]
        assert seen[1].url.params["recursive"] == "1"

    @pytest.mark.asyncio
    async def test_branch_from_url_wins(self, make_github):
        gh = make_github(
            {
                "api.github.com/repos/octo/hello": httpx.Response(200, json={"default_branch": "main"}),
                "api.github.com/repos/octo/hello/git/trees/feature": httpx.Response(
                    200, json={"tree": [{"path": "x.py", "type": "blob"}]}
                ),
            }
        )
        result = await fetch_repo_tree("https://github.com/octo/hello/tree/feature", gh=gh)
        assert result.branch == "feature"
        assert [n.path for n in result.tree] == ["x.py"]

    @pytest.mark.asyncio
    async def test_missing_default_branch_falls_back_to_main(self, make_github):
        gh = make_github(
            {
                "api.github.com/repos/octo/hello": httpx.Response(200, json={}),
                "api.github.com/repos/octo/hello/git/trees/main": httpx.Response(200, json={"tree": []}),
            }
        )
        result = await fetch_repo_tree("octo/hello", gh=gh)
        assert result.branch == "main"

    @pytest.mark.asyncio
    async def test_repo_not_found_carries_status_and_message(self, make_github):
        gh = make_github({})
        with pytest.raises(GitHubAPIError) as exc:
            await fetch_repo_tree("https://github.com/octo/missing", gh=gh)
        assert exc.value.status_code == 404
        assert exc.value.message == "Not Found"

    @pytest.mark.asyncio
    async def test_tree_failure_without_message(self, make_github):
        gh = make_github(
            {
                "api.github.com/repos/octo/hello": httpx.Response(200, json={"default_branch": "main"}),
                "api.github.com/repos/octo/hello/git/trees/main": httpx.Response(409, text="conflict"),
            }
        )
        with pytest.raises(GitHubAPIError) as exc:
            await fetch_repo_tree("https://github.com/octo/hello", gh=gh)
        assert exc.value.status_code == 409
        assert exc.value.message == "Tree fetch failed (409)"

    @pytest.mark.asyncio
    async def test_token_sent_as_bearer(self, make_github):
        seen: list[httpx.Request] = []
        gh = make_github(
            {
                "api.github.com/repos/octo/hello": httpx.Response(200, json={"default_branch": "main"}),
                "api.github.com/repos/octo/hello/git/trees/main": httpx.Response(200, json={"tree": []}),
            },
            seen,
            token="secret",
        )
        await fetch_repo_tree("octo/hello", gh=gh)
        assert all(r.headers["Authorization"] == "Bearer secret" for r in seen)

    @pytest.mark.asyncio
    async def test_non_json_answer_is_upstream_error(self, make_github):
        gh = make_github({"api.github.com/repos/octo/hello": httpx.Response(200, text="<html>oops</html>")})
        with pytest.raises(GitHubAPIError) as exc:
            await fetch_repo_tree("https://github.com/octo/hello", gh=gh)
        assert exc.value.status_code == 502
        assert exc.value.message == "Repo not found or API error (malformed response)"
