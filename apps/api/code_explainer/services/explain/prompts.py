from __future__ import annotations

from typing import List, Optional

from code_explainer.services.analysis.language import Language, highlight_language
from code_explainer.services.explain.models import CodeSample, PromptDocument

INITIAL_SYSTEM = (
    "You are an expert code tutor. Explain code in an engaging, educational way with examples, "
    "test cases, and practical insights. Use markdown formatting, bullet points, and code examples. "
    "Make it beginner-friendly but comprehensive."
)

FOLLOW_UP_SYSTEM = (
    "You are an expert code tutor. Answer the specific question about the provided code with clear "
    "explanations, examples, and practical insights. Use markdown formatting for better readability."
)

REVIEW_SYSTEM = (
    "You are a senior software engineer performing a code review. "
    "Follow the RESPONSE FORMAT exactly and do not add sections."
)


def _fence_tag(sample: CodeSample) -> str:
    lang = sample.declared_language or highlight_language(sample.path).value
    if lang in (Language.UNKNOWN.value, Language.TEXT.value):
        return ""
    return lang


def _fence(sample: CodeSample) -> str:
    return f"```{_fence_tag(sample)}\n{sample.text}\n```"


def _file_line(path: Optional[str]) -> List[str]:
    return [f"File: `{path}`"] if path else []


def _run_hint(language: Optional[str]) -> str:
    if language == "java":
        return "- Compilation and execution steps"
    if language == "python":
        return "- How to execute the script"
    if language in ("c", "cpp"):
        return "- Compilation commands and execution"
    return "- Execution instructions"


def build_initial_prompt(sample: CodeSample) -> str:
    lang = sample.declared_language
    parts = [
        f"Analyze and explain the following {lang or 'source'} code in an engaging, educational way.",
        *_file_line(sample.path),
        "",
        "Please provide a comprehensive explanation that includes:",
        "",
        "## What This Code Does",
        "- High-level purpose and functionality",
        "- Main objectives and use cases",
        "",
        "## Key Components",
        "- Important functions, classes, and variables",
        "- How different parts work together",
        "",
        "## Step-by-Step Breakdown",
        "- Logical flow and execution order",
        "- Important algorithms or patterns used",
        "",
        "## Example Usage & Test Cases",
        "- Provide realistic input/output examples",
        "- Show what happens with different inputs",
        "- Include edge cases if relevant",
        "",
        "## Important Notes",
        "- Potential issues or gotchas",
        "- Best practices and improvements",
        "",
        "## How to Run",
        _run_hint(lang),
        "",
        "**Code:**",
        _fence(sample),
        "",
        "Make the explanation beginner-friendly but comprehensive, with practical examples and clear formatting.",
    ]
    return "\n".join(parts)


def build_follow_up_prompt(sample: CodeSample, question: str) -> str:
    lang = sample.declared_language
    parts = [
        f"Here's the {lang or 'source'} code for reference:",
        *_file_line(sample.path),
        "",
        _fence(sample),
        "",
        f"**Question:** {question}",
        "",
        "Please provide a detailed answer that includes:",
        "- Direct answer to the question",
        "- Relevant code examples or snippets",
        "- Practical implications or use cases",
        "- Any related concepts that would be helpful",
        "",
        "Use clear formatting with markdown, code blocks, and examples where helpful.",
        "Reference specific line numbers or code sections when relevant.",
    ]
    return "\n".join(parts)


def build_prompt(sample: CodeSample, question: Optional[str] = None) -> PromptDocument:
    if question:
        return PromptDocument(
            system_instruction=FOLLOW_UP_SYSTEM,
            user_prompt=build_follow_up_prompt(sample, question),
        )
    return PromptDocument(
        system_instruction=INITIAL_SYSTEM,
        user_prompt=build_initial_prompt(sample),
    )


def build_review_prompt(sample: CodeSample) -> PromptDocument:
    lang = sample.declared_language
    file_line = f"\nFILE:\n{sample.path}\n" if sample.path else ""
    user_prompt = f"""Review the following {lang or 'source'} code.
{file_line}
CODE:
{_fence(sample)}

RESPONSE FORMAT (follow strictly):
Wrap the whole answer in a single ```markdown fenced block containing exactly two sections:

## Analysis
- What the code does and how it is structured.
- Bugs, risky constructs, and edge cases it misses.

## Recommendations
- Concrete, prioritized changes, each tied to the code it affects.

FORMATTING RULES:
- Do not use bold or italic emphasis.
- Every list item starts with "- ". No numbered lists, no other bullet characters.
- Wrap every technical term, identifier, and file name in backticks.
- No text before or after the fenced block.
"""
    return PromptDocument(system_instruction=REVIEW_SYSTEM, user_prompt=user_prompt)
