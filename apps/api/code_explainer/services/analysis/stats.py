from __future__ import annotations

import re
from dataclasses import dataclass

# -----------------------------
# Regex patterns (best-effort, not a parser)
# -----------------------------

LINE_BREAK = re.compile(r"\r?\n")
COMMENT_LINE = re.compile(r"^\s*(//|#|/\*|\*)")
FUNCTION_LIKE = re.compile(r"\b[A-Za-z_]\w*\s*\(")
CLASS_DECL = re.compile(r"\bclass\s+[A-Za-z_]\w*")
IMPORT_KEYWORD = re.compile(r"\bimport\b|#include\b|\busing\b")


@dataclass(frozen=True)
class CodeStatistics:
    line_count: int
    comment_line_count: int
    function_like_count: int
    class_count: int
    import_count: int


def compute_statistics(text: str) -> CodeStatistics:
    """
    Structural counts for a piece of code.

    - lines split on \\n or \\r\\n; a trailing empty line counts
    - comment lines start (after whitespace) with //, #, /* or *
    - function-like = identifier followed by '(' (calls and if/while included)
    - block comments are not tracked across lines
    """
    lines = LINE_BREAK.split(text)
    return CodeStatistics(
        line_count=len(lines),
        comment_line_count=sum(1 for line in lines if COMMENT_LINE.match(line)),
        function_like_count=len(FUNCTION_LIKE.findall(text)),
        class_count=len(CLASS_DECL.findall(text)),
        import_count=len(IMPORT_KEYWORD.findall(text)),
    )
