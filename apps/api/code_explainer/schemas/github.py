from __future__ import annotations

from pydantic import BaseModel
from typing import List, Literal, Optional

class TreeNode(BaseModel):
    name: str
    path: str
    type: Literal["file", "dir"]
    children: Optional[List["TreeNode"]] = None

class RepoTreeResponse(BaseModel):
    owner: str
    repo: str
    branch: str
    tree: List[TreeNode]

class FileContentResponse(BaseModel):
    content: str
    language: str

class GitHubErrorResponse(BaseModel):
    error: str
    status: int
