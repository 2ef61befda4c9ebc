from __future__ import annotations

import re
from enum import Enum
from typing import Dict, List, Optional, Tuple


class Language(str, Enum):
    C = "c"
    CPP = "cpp"
    JAVA = "java"
    PYTHON = "python"
    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    TSX = "tsx"
    JSX = "jsx"
    JSON = "json"
    MARKDOWN = "markdown"
    BASH = "bash"
    YAML = "yaml"
    TEXT = "text"
    UNKNOWN = "unknown"


EXTENSION_LANGUAGES: Dict[str, Language] = {
    ".java": Language.JAVA,
    ".py": Language.PYTHON,
    ".c": Language.C,
    ".h": Language.C,
    ".cpp": Language.CPP,
    ".cc": Language.CPP,
    ".cxx": Language.CPP,
    ".hpp": Language.CPP,
    ".hh": Language.CPP,
    ".hxx": Language.CPP,
    ".js": Language.JAVASCRIPT,
    ".ts": Language.TYPESCRIPT,
    ".tsx": Language.TSX,
    ".jsx": Language.JSX,
    ".json": Language.JSON,
    ".md": Language.MARKDOWN,
}

# syntax-highlighting only; never used for detection
HIGHLIGHT_EXTRAS: Dict[str, Language] = {
    ".sh": Language.BASH,
    ".yml": Language.YAML,
    ".yaml": Language.YAML,
}

C_HINTS = ["#include", "printf", "scanf", "malloc", "int main", "char *", "->"]
CPP_HINTS = [
    "#include <iostream",
    "std::",
    "using namespace std",
    "cout <<",
    "cin >>",
    "template<",
    "vector<",
    "map<",
]
JAVA_HINTS = ["public class", "System.out.println", "import java.", "public static void main", "@Override"]
PYTHON_HINTS = ["def ", "import ", "print(", "self", "class ", "async def", "from "]

# order doubles as tie-break priority
HINT_SETS: List[Tuple[Language, List[str]]] = [
    (Language.CPP, CPP_HINTS),
    (Language.C, C_HINTS),
    (Language.JAVA, JAVA_HINTS),
    (Language.PYTHON, PYTHON_HINTS),
]

CPP_CONTENT = re.compile(r"\bstd::|#include\s*<iostream>|cout\s*<<|cin\s*>>|template\s*<")
INCLUDE_LINE = re.compile(r"^\s*#include", re.MULTILINE)
JAVA_IMPORT_LINE = re.compile(r"^\s*import java\.", re.MULTILINE)
PYTHON_DEF_LINE = re.compile(r"^\s*def\s+\w+\(", re.MULTILINE)
PYTHON_CLASS_LINE = re.compile(r"^\s*class\s+\w+:", re.MULTILINE)


def language_from_extension(path: Optional[str]) -> Optional[Language]:
    if not path:
        return None
    p = path.lower()
    for ext, lang in EXTENSION_LANGUAGES.items():
        if p.endswith(ext):
            return lang
    return None


def score_hints(text: str) -> Dict[Language, int]:
    lower = text.lower()
    return {
        lang: sum(1 for h in hints if h.lower() in lower)
        for lang, hints in HINT_SETS
    }


def detect_language(text: str, path: Optional[str] = None) -> Language:
    """
    Guess the language of a snippet.
    A known file extension wins outright; otherwise C / C++ / Java / Python
    hint lists are scored and ties resolve cpp > c > java > python.
    """
    by_ext = language_from_extension(path)
    if by_ext is not None:
        return by_ext

    scores = score_hints(text or "")
    best = max(scores.values())
    if best == 0:
        return Language.UNKNOWN

    for lang, _ in HINT_SETS:
        if scores[lang] == best:
            return lang
    return Language.UNKNOWN


def detect_language_from_path(path: str, content: str) -> Language:
    """Language for a fetched repository file: extension, then content sniffing."""
    by_ext = language_from_extension(path)
    if by_ext is not None:
        return by_ext

    if CPP_CONTENT.search(content.lower()):
        return Language.CPP
    if INCLUDE_LINE.search(content):
        return Language.C
    if JAVA_IMPORT_LINE.search(content) or "public class " in content:
        return Language.JAVA
    if PYTHON_DEF_LINE.search(content) or PYTHON_CLASS_LINE.search(content):
        return Language.PYTHON
    return Language.TEXT


def highlight_language(path: Optional[str]) -> Language:
    by_ext = language_from_extension(path)
    if by_ext is not None:
        return by_ext
    p = (path or "").lower()
    for ext, lang in HIGHLIGHT_EXTRAS.items():
        if p.endswith(ext):
            return lang
    return Language.TEXT
