#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for content type detection."""

from itertools import combinations

import pytest

from mdmindmap.analysis import ContentAnalysis, detect_content_type
from mdmindmap.constants import CONTENT_TYPE_PRIORITY

# One unambiguous sample per content type, in detector priority order
SAMPLES = {
    "table": "| Name | Age |",
    "list": "- first\n- second",
    "code": "run `make test` first",
    "image": "![diagram](diagram.png)",
    "link": "[docs](https://example.com/docs)",
    "math": "$x^2 + y^2$",
    "complex": "**bold** and *italic*",
    "text": "plain words only",
}

PAIRS = list(combinations(CONTENT_TYPE_PRIORITY, 2))


@pytest.mark.unit
class TestDetectSingleTypes:
    """Test each content type in isolation."""

    @pytest.mark.parametrize("content_type", CONTENT_TYPE_PRIORITY)
    def test_sample_detected(self, content_type) -> None:
        """Test each sample is detected as its own type."""
        assert detect_content_type(SAMPLES[content_type]).type == content_type

    def test_table_with_separator(self) -> None:
        """Test a full pipe table is detected with row-major cells."""
        result = detect_content_type("| Name | Age |\n|------|-----|\n| John | 30 |")
        assert result.type == "table"
        assert [element["content"] for element in result.elements] == ["Name", "Age", "John", "30"]

    def test_table_without_leading_pipe(self) -> None:
        """Test a bare pipe-separated line counts as a table."""
        result = detect_content_type("Name | Age | City")
        assert result.type == "table"
        assert len(result.elements) == 3

    def test_single_cell_rows_need_separator(self) -> None:
        """Test one-cell pipe rows only form a table with a separator row."""
        assert detect_content_type("| Incomplete table\n| Missing separator").type == "text"
        assert detect_content_type("| Name\n|------|").type == "table"

    def test_bare_rule_is_not_a_table(self) -> None:
        """Test a horizontal rule without pipes is not a separator row."""
        assert detect_content_type("---").type == "text"

    def test_single_list_item_is_not_a_list(self) -> None:
        """Test one bullet line does not count as a list."""
        assert detect_content_type("- Single item").type == "text"
        assert detect_content_type("* Bullet point").type == "text"

    def test_ordered_list(self) -> None:
        """Test numbered lines are detected as a list."""
        result = detect_content_type("1. First\n2. Second\n3. Third")
        assert result.type == "list"
        assert [element["content"] for element in result.elements] == ["First", "Second", "Third"]

    def test_fenced_code(self) -> None:
        """Test fenced blocks are detected as code with their language."""
        result = detect_content_type("```javascript\nfunction test() {\n  return true;\n}\n```")
        assert result.type == "code"
        assert result.elements[0]["language"] == "javascript"
        assert "function test()" in result.elements[0]["content"]

    def test_pipes_inside_fence_stay_code(self) -> None:
        """Test table-like lines inside a fence do not make the content a table."""
        result = detect_content_type("```sh\ncat log | grep error | wc -l\n```")
        assert result.type == "code"

    def test_bullets_inside_fence_stay_code(self) -> None:
        """Test list-like lines inside a fence do not make the content a list."""
        result = detect_content_type("```yaml\n- one\n- two\n```")
        assert result.type == "code"

    def test_complex_elements(self) -> None:
        """Test complex content reports its inline spans."""
        result = detect_content_type("**Bold** then *italic* then ~~gone~~")
        assert result.type == "complex"
        assert [element["type"] for element in result.elements] == ["bold", "italic", "strikethrough"]

    def test_single_marker_is_text(self) -> None:
        """Test one emphasis span alone is plain text."""
        assert detect_content_type("Only **one** marker").type == "text"

    def test_text_elements(self) -> None:
        """Test plain text yields one text element with its length."""
        result = detect_content_type("Hello world")
        assert result == ContentAnalysis("text", [{"type": "text", "content": "Hello world", "length": 11}])


@pytest.mark.unit
class TestDetectPrecedence:
    """Golden pairwise precedence matrix for mixed content."""

    @pytest.mark.parametrize("higher,lower", PAIRS, ids=[f"{a}-over-{b}" for a, b in PAIRS])
    def test_higher_priority_wins(self, higher, lower) -> None:
        """Test the higher-priority type wins with the samples in either order."""
        assert detect_content_type(f"{SAMPLES[higher]}\n{SAMPLES[lower]}").type == higher
        assert detect_content_type(f"{SAMPLES[lower]}\n{SAMPLES[higher]}").type == higher

    def test_image_is_not_a_link(self) -> None:
        """Test image syntax does not count as a link."""
        result = detect_content_type("![alt](pic.png)")
        assert result.type == "image"
        assert result.elements == [{"type": "image", "alt": "alt", "src": "pic.png", "index": 0}]


@pytest.mark.unit
class TestDetectEdgeCases:
    """Test empty input and hints."""

    @pytest.mark.parametrize("content", ["", None, "   ", "\n\n"])
    def test_empty_content(self, content) -> None:
        """Test empty content is text with no elements."""
        result = detect_content_type(content)
        assert result == ContentAnalysis("text", [])
        assert result.to_dict() == {"type": "text", "elements": []}

    def test_code_hint_short_circuits(self) -> None:
        """Test a code hint skips detection even for table-like content."""
        result = detect_content_type("a | b | c", hint="code")
        assert result.type == "code"
        assert result.elements == [{"type": "code-block", "content": "a | b | c", "language": None}]

    def test_unknown_hint_is_ignored(self) -> None:
        """Test an unrecognized hint falls back to detection."""
        assert detect_content_type("- a\n- b", hint="diagram").type == "list"

    def test_result_is_immutable(self) -> None:
        """Test detection results cannot be reassigned."""
        result = detect_content_type("text")
        with pytest.raises(AttributeError):
            result.type = "table"  # type: ignore[misc]
