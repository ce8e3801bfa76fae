#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdmindmap/analysis/detector.py
"""Content type detection.

A block of markdown can match several content types at once (a table row
containing a link, a list item with inline code). Detection therefore runs a
fixed priority order and the first matching type wins:

1. ``table`` - a pipe row with two or more cells, or a pipe row together
   with a header separator row
2. ``list`` - two or more bullet or numbered lines
3. ``code`` - a code fence or an inline backtick span
4. ``image`` - ``![alt](src)``
5. ``link`` - ``[text](url)`` not preceded by ``!``
6. ``math`` - ``$formula$``
7. ``complex`` - two or more bold, italic or strikethrough spans
8. ``text`` - everything else

Table and list checks ignore lines inside fenced code blocks, so a code body
that happens to contain pipes or dashes is still detected as code.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from mdmindmap.analysis.extractor import (
    Element,
    extract_elements,
    is_fence_line,
    is_table_separator,
    iter_unfenced_lines,
    split_table_row,
)
from mdmindmap.constants import (
    BOLD_PATTERN,
    CONTENT_TYPE_PRIORITY,
    IMAGE_PATTERN,
    INLINE_CODE_PATTERN,
    ITALIC_PATTERN,
    LINK_PATTERN,
    LIST_LINE_PATTERN,
    MATH_PATTERN,
    MIN_COMPLEX_MARKERS,
    MIN_LIST_ITEMS,
    STRIKETHROUGH_PATTERN,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContentAnalysis:
    """Result of content type detection.

    Parameters
    ----------
    type : str
        Detected content type tag
    elements : list of dict
        Element records extracted for that type

    """

    type: str
    elements: list[Element] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the plain ``{"type", "elements"}`` mapping."""
        return {"type": self.type, "elements": list(self.elements)}


def _is_table(lines: list[str]) -> bool:
    has_pipe_row = False
    has_separator = False
    for line in lines:
        if "|" not in line:
            continue
        if is_table_separator(line):
            has_separator = True
            continue
        if len(split_table_row(line)) >= 2:
            return True
        has_pipe_row = True
    return has_pipe_row and has_separator


def _is_list(lines: list[str]) -> bool:
    return sum(1 for line in lines if LIST_LINE_PATTERN.match(line)) >= MIN_LIST_ITEMS


def _is_code(content: str, lines: list[str]) -> bool:
    return any(is_fence_line(line) for line in lines) or INLINE_CODE_PATTERN.search(content) is not None


def _count_inline_markers(content: str) -> int:
    return sum(
        len(pattern.findall(content)) for pattern in (BOLD_PATTERN, ITALIC_PATTERN, STRIKETHROUGH_PATTERN)
    )


def _matches(content_type: str, content: str, all_lines: list[str], unfenced: list[str]) -> bool:
    checks: dict[str, Callable[[], bool]] = {
        "table": lambda: _is_table(unfenced),
        "list": lambda: _is_list(unfenced),
        "code": lambda: _is_code(content, all_lines),
        "image": lambda: IMAGE_PATTERN.search(content) is not None,
        "link": lambda: LINK_PATTERN.search(content) is not None,
        "math": lambda: MATH_PATTERN.search(content) is not None,
        "complex": lambda: _count_inline_markers(content) >= MIN_COMPLEX_MARKERS,
        "text": lambda: True,
    }
    return checks[content_type]()


def detect_content_type(content: Optional[str], hint: Optional[str] = None) -> ContentAnalysis:
    """Classify a block of markdown and extract its elements.

    Parameters
    ----------
    content : str or None
        Markdown block to classify; may span several lines
    hint : str, optional
        Known content type. A recognized hint skips detection and goes
        straight to that type's extractor.

    Returns
    -------
    ContentAnalysis
        Detected type and its element records. Empty or missing content
        yields ``ContentAnalysis("text", [])``.

    Examples
    --------
        >>> detect_content_type("| Name | Age |\\n|---|---|").type
        'table'
        >>> detect_content_type("Just a sentence.").type
        'text'

    """
    if not content or not isinstance(content, str) or not content.strip():
        return ContentAnalysis("text", [])

    if hint is not None:
        if hint in CONTENT_TYPE_PRIORITY:
            return ContentAnalysis(hint, extract_elements(content, hint))
        logger.debug("Ignoring unknown content type hint %r", hint)

    all_lines = content.split("\n")
    unfenced = list(iter_unfenced_lines(all_lines))

    for content_type in CONTENT_TYPE_PRIORITY:
        if _matches(content_type, content, all_lines, unfenced):
            elements = extract_elements(content, content_type)
            if content_type == "complex" and not elements:
                # Regex markers the parser does not treat as emphasis
                continue
            return ContentAnalysis(content_type, elements)

    return ContentAnalysis("text", extract_elements(content, "text"))


__all__ = [
    "ContentAnalysis",
    "detect_content_type",
]
