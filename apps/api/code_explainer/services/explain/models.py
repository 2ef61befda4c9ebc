from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SourceMode(str, Enum):
    AI = "ai"
    HEURISTIC = "heuristic"


@dataclass(frozen=True)
class CodeSample:
    text: str
    declared_language: Optional[str] = None
    path: Optional[str] = None


@dataclass(frozen=True)
class ExplanationResult:
    body: str
    source_mode: SourceMode
    note: Optional[str] = None


@dataclass(frozen=True)
class PromptDocument:
    system_instruction: str
    user_prompt: str
