"""Tests for code block extraction from assistant replies."""

import pytest

from claudecode.parsers import extract_code_blocks, iter_code_blocks
from claudecode.parsers.code_blocks import find_unfenced_code, iter_fenced_blocks


class TestFencedBlocks:
    """Test fenced ``` region extraction."""

    def test_single_block_with_language_tag(self):
        """The example reply yields exactly the inner function."""
        text = "Here:\n```go\nfunc f() {}\n```\nDone"

        assert extract_code_blocks(text) == ["func f() {}"]

    def test_language_tag_captured(self):
        blocks = list(iter_fenced_blocks("```python\nx = 1\n```"))

        assert len(blocks) == 1
        assert blocks[0].language == "python"
        assert blocks[0].text == "x = 1"

    def test_block_without_language_tag(self):
        blocks = list(iter_fenced_blocks("```\nx = 1\n```"))

        assert blocks[0].language == ""
        assert blocks[0].text == "x = 1"

    @pytest.mark.parametrize("count", [1, 2, 3, 5])
    def test_n_blocks_in_order(self, count):
        """N well-formed regions give N candidates in source order."""
        bodies = [f"def f{i}():\n    return {i}" for i in range(count)]
        text = "\n\nSome prose.\n\n".join(f"```python\n{body}\n```" for body in bodies)

        assert extract_code_blocks(text) == bodies

    def test_multiline_body_kept_exactly(self):
        body = "class A:\n\n    def m(self):\n        pass"
        text = f"Intro\n```python\n{body}\n```\nOutro"

        assert extract_code_blocks(text) == [body]

    def test_trailing_blank_line_inside_fence_kept(self):
        text = "```\na\n\n```"

        assert extract_code_blocks(text) == ["a\n"]

    def test_empty_block(self):
        assert extract_code_blocks("```\n```") == [""]

    def test_fenced_blocks_suppress_fallback(self):
        """Keyword lines outside fences are ignored when fences exist."""
        text = "def outside():\n    pass\n\n```js\nlet x = 1;\n```"

        assert extract_code_blocks(text) == ["let x = 1;"]

    def test_unclosed_fence_is_not_a_block(self):
        blocks = list(iter_fenced_blocks("```python\ndef f():\n    pass\n"))

        assert blocks == []

    def test_inline_backticks_are_not_fences(self):
        assert extract_code_blocks("Use ```x``` then\ncode```") == []

    def test_indented_fence(self):
        text = "1. Replace it:\n   ```python\n   x = 1\n   ```\n"

        assert extract_code_blocks(text) == ["   x = 1"]


class TestUnfencedFallback:
    """Test heuristic detection when no fences are present."""

    def test_starts_at_first_keyword_line(self):
        text = "Sure, here you go:\ndef add(a, b):\n    return a + b"

        assert extract_code_blocks(text) == ["def add(a, b):\n    return a + b"]

    def test_stops_at_first_non_word_leading_line(self):
        text = "\n".join([
            "Try this:",
            "function greet(name) {",
            "  return name",
            "}",
            "  more",
        ])

        # "}" does not start with a word character
        assert extract_code_blocks(text) == ["function greet(name) {\n  return name"]

    def test_blank_lines_retained(self):
        text = "class A:\n    x = 1\n\n    y = 2\n- bullet"

        assert extract_code_blocks(text) == ["class A:\n    x = 1\n\n    y = 2"]

    def test_prose_after_code_kept_if_word_leading(self):
        """Only non-word-leading lines end the region; prose is a known limitation."""
        text = "def f():\n    pass\nThat is all."

        assert extract_code_blocks(text) == ["def f():\n    pass\nThat is all."]

    def test_indented_keyword_line_starts_region(self):
        text = "Example:\n    public void run() {\n        go();"

        assert extract_code_blocks(text) == ["    public void run() {\n        go();"]

    def test_keyword_must_be_whole_word(self):
        """'iffy' and 'format' are not statement keywords."""
        assert extract_code_blocks("iffy wording\nformat this") == []

    def test_keywords_case_sensitive(self):
        assert extract_code_blocks("If you want, For example") == []

    def test_no_code_returns_empty(self):
        assert extract_code_blocks("Nothing to see here.\nJust words.") == []
        assert find_unfenced_code("") is None

    def test_single_fallback_candidate(self):
        text = "def a():\n    pass\n# comment\ndef b():\n    pass"

        blocks = list(iter_code_blocks(text))

        assert len(blocks) == 1
        assert blocks[0].text == "def a():\n    pass"

    def test_empty_input(self):
        assert extract_code_blocks("") == []
