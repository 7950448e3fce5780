"""Prompt templates for claudecode."""

from dataclasses import dataclass
from pathlib import Path

EXPLAIN_SELECTION_PROMPT = "Explain what this code does and how it works"
EXPLAIN_FUNCTION_PROMPT = "Explain what this function does and how it works"


@dataclass
class TestFramework:
    """How tests look for a filetype."""

    __test__ = False  # not a pytest class

    name: str
    file_pattern: str
    imports: str = ""


TEST_FRAMEWORKS = {
    "python": TestFramework(
        name="pytest",
        file_pattern="test_*.py or *_test.py",
        imports="import pytest\nfrom unittest.mock import Mock, patch\n",
    ),
    "go": TestFramework(
        name="Go testing package",
        file_pattern="*_test.go",
        imports='import (\n\t"testing"\n)',
    ),
    "javascript": TestFramework(
        name="Jest",
        file_pattern="*.test.js or *.spec.js",
        imports="// Jest framework",
    ),
    "typescript": TestFramework(
        name="Jest",
        file_pattern="*.test.ts or *.spec.ts",
        imports="// Jest framework",
    ),
}

GENERIC_FRAMEWORK = TestFramework(name="standard testing framework", file_pattern="test files")


def get_test_framework(filetype: str) -> TestFramework:
    return TEST_FRAMEWORKS.get(filetype, GENERIC_FRAMEWORK)


def suggest_test_path(source: Path, filetype: str) -> Path:
    """Where a test file for ``source`` conventionally lives."""
    stem, suffix = source.stem, source.suffix
    if filetype == "python":
        name = f"test_{stem}.py"
    elif filetype == "go":
        name = f"{stem}_test.go"
    elif filetype in ("javascript", "typescript"):
        name = f"{stem}.test{suffix}"
    else:
        name = f"test_{source.name}"
    return source.with_name(name)


def build_test_prompt(filetype: str, framework: TestFramework, filename: str) -> str:
    return (
        f"The file under test is {filename}.\n"
        f"Generate comprehensive unit tests for this {filetype} file using {framework.name}.\n\n"
        "Requirements:\n"
        "- Test all public functions, methods, and classes\n"
        "- Include edge cases, error conditions, and boundary testing\n"
        "- Use proper mocking for dependencies and external calls\n"
        f"- Follow {filetype} best practices and conventions\n"
        "- Use descriptive test names that explain what is being tested\n"
        "- Group related tests logically\n"
        "- Include setup/teardown where appropriate\n\n"
        f"The tests should be ready to run in a {filetype} file following "
        f"{framework.file_pattern} naming convention.\n"
        "Provide complete, runnable test code with all necessary imports."
    )


def build_generate_prompt(description: str, filetype: str) -> str:
    language = filetype or "the same language as the surrounding code"
    return (
        f"Write a {language} function: {description}\n\n"
        "It will be inserted into the file shown below, so match its style "
        "and reuse its imports and helpers.\n"
        "Return only the function inside a single fenced code block."
    )


def build_docs_prompt(filetype: str) -> str:
    language = filetype or "this"
    return (
        f"Add documentation to this {language} code: docstrings or doc comments "
        "in the idiomatic style of the language, plus short inline comments "
        "where the logic is not obvious.\n"
        "Do not change behavior. Return the full documented code in a single "
        "fenced code block."
    )
