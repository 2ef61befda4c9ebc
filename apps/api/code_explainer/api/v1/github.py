from typing import Optional

from fastapi import APIRouter, Header, HTTPException, Query

from code_explainer.schemas.explain import ErrorResponse
from code_explainer.schemas.github import FileContentResponse, GitHubErrorResponse, RepoTreeResponse
from code_explainer.services.ingestion.file_content import fetch_file_content
from code_explainer.services.ingestion.file_tree import fetch_repo_tree

router = APIRouter(prefix="/github", tags=["github"])

ERRORS = {400: {"model": ErrorResponse}, 404: {"model": GitHubErrorResponse}, 502: {"model": GitHubErrorResponse}}

@router.get("/tree", response_model=RepoTreeResponse, response_model_exclude_none=True, responses=ERRORS)
async def repo_tree(
    url: Optional[str] = Query(default=None),
    x_github_token: Optional[str] = Header(default=None),
):
    if not url:
        raise HTTPException(status_code=400, detail="Missing url")
    try:
        return await fetch_repo_tree(url, token=x_github_token)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/file", response_model=FileContentResponse, responses=ERRORS)
async def repo_file(
    url: Optional[str] = Query(default=None),
    path: Optional[str] = Query(default=None),
    x_github_token: Optional[str] = Header(default=None),
):
    if not url or not path:
        raise HTTPException(status_code=400, detail="Missing url or path")
    try:
        return await fetch_file_content(url, path, token=x_github_token)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
