"""Tests for prompt templates."""

from __future__ import annotations

from code_explainer.services.explain.models import CodeSample
from code_explainer.services.explain.prompts import (
    FOLLOW_UP_SYSTEM,
    INITIAL_SYSTEM,
    REVIEW_SYSTEM,
    build_prompt,
    build_review_prompt,
)

CODE = "def add(a, b):\n    return a + b"


class TestInitialPrompt:
    def test_six_sections_and_fenced_code(self):
        doc = build_prompt(CodeSample(text=CODE, declared_language="python", path="calc.py"))
        assert doc.system_instruction == INITIAL_SYSTEM
        for heading in [
            "## What This Code Does",
            "## Key Components",
            "## Step-by-Step Breakdown",
            "## Example Usage & Test Cases",
            "## Important Notes",
            "## How to Run",
        ]:
            assert heading in doc.user_prompt
        assert f"```python\n{CODE}\n```" in doc.user_prompt
        assert "File: `calc.py`" in doc.user_prompt
        assert "- How to execute the script" in doc.user_prompt

    def test_path_line_omitted_when_absent(self):
        doc = build_prompt(CodeSample(text=CODE))
        assert "File:" not in doc.user_prompt
        assert "the following source code" in doc.user_prompt

    def test_unknown_language_gets_empty_fence_tag(self):
        doc = build_prompt(CodeSample(text="???"))
        assert "```\n???\n```" in doc.user_prompt
        assert "- Execution instructions" in doc.user_prompt

    def test_fence_tag_from_path_when_not_declared(self):
        doc = build_prompt(CodeSample(text="echo hi", path="run.sh"))
        assert "```bash\necho hi\n```" in doc.user_prompt

    def test_compiled_languages_hint(self):
        doc = build_prompt(CodeSample(text="int main(){}", declared_language="cpp"))
        assert "- Compilation commands and execution" in doc.user_prompt

    def test_deterministic(self):
        sample = CodeSample(text=CODE, declared_language="python")
        assert build_prompt(sample) == build_prompt(sample)


class TestFollowUpPrompt:
    def test_question_selects_follow_up_template(self):
        doc = build_prompt(CodeSample(text=CODE, declared_language="python"), question="What does add return?")
        assert doc.system_instruction == FOLLOW_UP_SYSTEM
        assert "**Question:** What does add return?" in doc.user_prompt
        assert "Reference specific line numbers" in doc.user_prompt
        assert "## What This Code Does" not in doc.user_prompt

    def test_code_precedes_question(self):
        doc = build_prompt(CodeSample(text=CODE, path="calc.py"), question="Why?")
        prompt = doc.user_prompt
        assert prompt.index("File: `calc.py`") < prompt.index(CODE) < prompt.index("**Question:** Why?")

    def test_empty_question_uses_initial_template(self):
        doc = build_prompt(CodeSample(text=CODE), question="")
        assert doc.system_instruction == INITIAL_SYSTEM


class TestReviewPrompt:
    def test_two_section_contract(self):
        doc = build_review_prompt(CodeSample(text=CODE, declared_language="python", path="calc.py"))
        assert doc.system_instruction == REVIEW_SYSTEM
        assert "## Analysis" in doc.user_prompt
        assert "## Recommendations" in doc.user_prompt
        assert "```markdown" in doc.user_prompt
        assert "Do not use bold or italic emphasis." in doc.user_prompt
        assert 'starts with "- "' in doc.user_prompt
        assert "backticks" in doc.user_prompt
        assert "calc.py" in doc.user_prompt

    def test_no_file_block_without_path(self):
        doc = build_review_prompt(CodeSample(text=CODE))
        assert "FILE:" not in doc.user_prompt
