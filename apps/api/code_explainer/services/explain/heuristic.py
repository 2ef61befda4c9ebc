from __future__ import annotations

import re
from typing import List

from code_explainer.services.analysis.language import Language, detect_language
from code_explainer.services.analysis.stats import CodeStatistics, compute_statistics
from code_explainer.services.explain.models import CodeSample, ExplanationResult, SourceMode

JAVA_CLASS = re.compile(r"\bpublic\s+class\b")
INCLUDE_LINE = re.compile(r"^\s*#include", re.MULTILINE)
PYTHON_DEF = re.compile(r"\bdef\s+\w+\(")

LIKELY_DOES = {
    "c": [
        "- **C Program:** Look for `main()` function as entry point",
        "- **Memory Management:** Check for `malloc/free` calls",
        "- **I/O Operations:** Uses `printf/scanf` for input/output",
    ],
    "java": [
        "- **Java Application:** Contains classes and methods",
        "- **Entry Point:** Look for `public static void main`",
        "- **Object-Oriented:** Uses classes and objects",
    ],
    "python": [
        "- **Python Script:** Contains function definitions",
        '- **Entry Point:** Look for `if __name__ == "__main__":`',
        "- **Dynamic:** Uses Python's flexible syntax",
    ],
    "other": [
        "- **General Code:** Analyze function names and structure",
        "- **Data Flow:** Trace inputs to outputs",
        "- **Logic:** Identify loops and conditionals",
    ],
}

NEXT_STEPS = [
    "- **Analyze Functions:** Understand what each function does",
    "- **Trace Execution:** Follow the program flow step by step",
    "- **Test with Data:** Try different inputs to see outputs",
    "- **Check Edge Cases:** Consider boundary conditions",
]


def classify_content(text: str) -> str:
    """Fallback classifier when nothing else names the language."""
    if JAVA_CLASS.search(text):
        return Language.JAVA.value
    if INCLUDE_LINE.search(text):
        return Language.C.value
    if PYTHON_DEF.search(text):
        return Language.PYTHON.value
    return Language.TEXT.value


def resolve_language(sample: CodeSample) -> str:
    if sample.declared_language:
        return sample.declared_language
    detected = detect_language(sample.text, sample.path)
    if detected != Language.UNKNOWN:
        return detected.value
    return classify_content(sample.text)


def _branch(language: str) -> str:
    lang = language.lower()
    if lang in ("c", "java", "python"):
        return lang
    return "other"


def _run_snippet(language: str, path: str | None) -> List[str]:
    lang = language.lower()
    if lang == "c":
        cmds = [f"gcc {path or 'file.c'} -o app", "./app"]
    elif lang == "cpp":
        cmds = [f"g++ {path or 'file.cpp'} -o app", "./app"]
    elif lang == "java":
        target = path[: -len(".java")] if path and path.endswith(".java") else (path or "File")
        cmds = [f"javac {path or 'File.java'}", f"java {target}"]
    elif lang == "python":
        cmds = [f"python {path or 'script.py'}"]
    else:
        cmds = ["# Refer to project documentation"]
    return ["```bash", *cmds, "```"]


def render_summary(language: str, stats: CodeStatistics, path: str | None = None) -> str:
    subject = f"file (`{path}`)" if path else "snippet"
    lines = [
        "## Code Overview",
        f"This {language.upper()} {subject} contains **{stats.line_count} lines** of code.",
        "",
        "## Quick Stats",
        f"- **Functions/Methods:** {stats.function_like_count}",
        f"- **Classes:** {stats.class_count}",
        f"- **Imports/Includes:** {stats.import_count}",
        f"- **Comment Lines:** {stats.comment_line_count}",
        "",
        "## What It Likely Does",
        *LIKELY_DOES[_branch(language)],
        "",
        "## How to Run",
        *_run_snippet(language, path),
        "",
        "## Next Steps",
        *NEXT_STEPS,
    ]
    return "\n".join(lines)


def summarize(sample: CodeSample) -> ExplanationResult:
    """
    Explanation built from static text statistics only.
    Last-resort path: must not raise for any input, including "".
    """
    text = sample.text if isinstance(sample.text, str) else ""
    sample = CodeSample(text=text, declared_language=sample.declared_language, path=sample.path)

    language = resolve_language(sample)
    stats = compute_statistics(text)
    body = render_summary(language, stats, sample.path)
    return ExplanationResult(body=body, source_mode=SourceMode.HEURISTIC)
