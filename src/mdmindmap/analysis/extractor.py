#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdmindmap/analysis/extractor.py
"""Type-specific element extraction.

Given a block of content and its content type, the extractor produces the
ordered element records stored on tree nodes. Records are plain dictionaries
so that they serialize unchanged:

==========  ============================================================
Type        Record
==========  ============================================================
table       ``{"type": "cell", "content", "index"}`` per cell, row-major
list        ``{"type": "list-item", "content", "indent", "index"}``
code        one ``{"type": "code-block", "content", "language"}``
image       ``{"type": "image", "alt", "src", "index"}``
link        ``{"type": "link", "text", "url", "index"}``
math        ``{"type": "formula", "content", "index"}``
complex     ``bold`` / ``italic`` / ``strikethrough`` / ``inline-code`` /
            ``link`` records with ``content`` and ``index``
text        one ``{"type": "text", "content", "length"}``
==========  ============================================================

Inline spans of complex content are parsed with mistune so emphasis nesting
and escaping follow CommonMark rather than ad hoc regular expressions.

"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING, Any, Callable, Iterator, Optional, Sequence, Union

from mdmindmap.constants import (
    FENCE_MARKER,
    IMAGE_PATTERN,
    LINK_PATTERN,
    LIST_INDENT_WIDTH,
    LIST_LINE_PATTERN,
    MATH_PATTERN,
    TABLE_SEPARATOR_PATTERN,
)

if TYPE_CHECKING:
    import mistune

logger = logging.getLogger(__name__)

Element = dict[str, Any]

# mistune inline token type -> element record type
_INLINE_ELEMENT_TYPES: dict[str, str] = {
    "strong": "bold",
    "emphasis": "italic",
    "strikethrough": "strikethrough",
    "codespan": "inline-code",
    "link": "link",
}


# ----------------------------------------------------------------------
# Line helpers shared with the detector, builder and expander
# ----------------------------------------------------------------------


def is_fence_line(line: str) -> bool:
    """Return True for a code fence line (opening or closing)."""
    return line.strip().startswith(FENCE_MARKER)


def fence_language(line: str) -> Optional[str]:
    """Return the language named on an opening fence line, or None."""
    info = line.strip()[len(FENCE_MARKER) :].strip()
    if not info:
        return None
    return info.split(maxsplit=1)[0]


def split_table_row(line: str) -> list[str]:
    """Split a pipe-delimited row into its non-empty, trimmed cells."""
    return [cell.strip() for cell in line.split("|") if cell.strip()]


def is_table_separator(line: str) -> bool:
    """Return True for a header separator row such as ``|---|:---:|``."""
    return "|" in line and TABLE_SEPARATOR_PATTERN.match(line) is not None


def is_table_line(line: str) -> bool:
    """Return True for a row of a pipe table: two or more cells, or a separator."""
    if "|" not in line:
        return False
    return is_table_separator(line) or len(split_table_row(line)) >= 2


def list_item_indent(whitespace: str) -> int:
    """Return the nesting indent for a list marker's leading whitespace.

    Inconsistent indentation (tabs, or a width that is not a multiple of the
    indent step) is treated as indent zero.
    """
    if "\t" in whitespace or len(whitespace) % LIST_INDENT_WIDTH:
        return 0
    return len(whitespace)


def iter_unfenced_lines(lines: Sequence[str]) -> Iterator[str]:
    """Yield the lines that are outside fenced code blocks.

    An unterminated fence hides everything after it.
    """
    in_fence = False
    for line in lines:
        if is_fence_line(line):
            in_fence = not in_fence
            continue
        if not in_fence:
            yield line


# ----------------------------------------------------------------------
# Extractors
# ----------------------------------------------------------------------


def _extract_table(content: str, language: Optional[str] = None) -> list[Element]:
    elements: list[Element] = []
    for line in content.split("\n"):
        if "|" not in line or is_table_separator(line):
            continue
        for cell in split_table_row(line):
            elements.append({"type": "cell", "content": cell, "index": len(elements)})
    return elements


def _extract_list(content: str, language: Optional[str] = None) -> list[Element]:
    elements: list[Element] = []
    for line in content.split("\n"):
        match = LIST_LINE_PATTERN.match(line)
        if not match:
            continue
        elements.append(
            {
                "type": "list-item",
                "content": (match.group(2) or "").strip(),
                "indent": list_item_indent(match.group(1)),
                "index": len(elements),
            }
        )
    return elements


def _extract_code(content: str, language: Optional[str] = None) -> list[Element]:
    lines = content.split("\n")
    for start, line in enumerate(lines):
        if not is_fence_line(line):
            continue
        body: list[str] = []
        for body_line in lines[start + 1 :]:
            if is_fence_line(body_line):
                break
            body.append(body_line)
        code = "".join(f"{body_line}\n" for body_line in body)
        return [{"type": "code-block", "content": code, "language": fence_language(line) or language}]
    return [{"type": "code-block", "content": content, "language": language}]


def _extract_images(content: str, language: Optional[str] = None) -> list[Element]:
    return [
        {"type": "image", "alt": match.group(1), "src": match.group(2), "index": index}
        for index, match in enumerate(IMAGE_PATTERN.finditer(content))
    ]


def _extract_links(content: str, language: Optional[str] = None) -> list[Element]:
    return [
        {"type": "link", "text": match.group(1), "url": match.group(2), "index": index}
        for index, match in enumerate(LINK_PATTERN.finditer(content))
    ]


def _extract_math(content: str, language: Optional[str] = None) -> list[Element]:
    return [
        {"type": "formula", "content": match.group(1), "index": index}
        for index, match in enumerate(MATH_PATTERN.finditer(content))
    ]


@lru_cache(maxsize=1)
def _inline_parser() -> mistune.Markdown:
    """Return a token-producing mistune parser with strikethrough support."""
    import mistune

    return mistune.create_markdown(renderer=None, plugins=["strikethrough"])


def _token_text(token: dict[str, Any]) -> str:
    """Concatenate the raw text below an inline token."""
    if "raw" in token and not token.get("children"):
        return str(token.get("raw", ""))
    parts: list[str] = []
    stack = list(reversed(token.get("children") or []))
    while stack:
        child = stack.pop()
        if not isinstance(child, dict):
            continue
        if child.get("children"):
            stack.extend(reversed(child["children"]))
        else:
            parts.append(str(child.get("raw", "")))
    return "".join(parts)


def _extract_complex(content: str, language: Optional[str] = None) -> list[Element]:
    tokens, _state = _inline_parser().parse(content)
    if not isinstance(tokens, list):
        return []

    elements: list[Element] = []
    stack: list[Any] = list(reversed(tokens))
    while stack:
        token = stack.pop()
        if not isinstance(token, dict):
            continue
        element_type = _INLINE_ELEMENT_TYPES.get(token.get("type", ""))
        if element_type is not None:
            element: Element = {"type": element_type, "content": _token_text(token), "index": len(elements)}
            if element_type == "link":
                attrs = token.get("attrs", {})
                element["url"] = attrs.get("url", "") if isinstance(attrs, dict) else ""
            elements.append(element)
        children = token.get("children")
        if isinstance(children, list):
            stack.extend(reversed(children))
    return elements


def _extract_text(content: str, language: Optional[str] = None) -> list[Element]:
    return [{"type": "text", "content": content, "length": len(content)}]


_EXTRACTORS: dict[str, Callable[[str, Optional[str]], list[Element]]] = {
    "table": _extract_table,
    "list": _extract_list,
    "code": _extract_code,
    "image": _extract_images,
    "link": _extract_links,
    "math": _extract_math,
    "complex": _extract_complex,
    "text": _extract_text,
}


def extract_elements(
    content: Union[str, Sequence[str], None],
    content_type: str,
    language: Optional[str] = None,
) -> list[Element]:
    """Extract structured element records from content of a known type.

    Parameters
    ----------
    content : str, sequence of str, or None
        Content to extract from. A pre-split sequence is taken as table
        cells for ``"table"`` and joined with newlines for other types.
    content_type : str
        Content type tag; unknown tags fall back to text extraction
    language : str, optional
        Language for code content when no fence info string supplies one

    Returns
    -------
    list of dict
        Element records in document order; empty for empty or invalid input

    Examples
    --------
        >>> extract_elements("Name | Age", "table")
        [{'type': 'cell', 'content': 'Name', 'index': 0}, {'type': 'cell', 'content': 'Age', 'index': 1}]

    """
    if content is None:
        return []

    if isinstance(content, (list, tuple)):
        parts = [str(part) for part in content if part is not None]
        if content_type == "table":
            cells = [part.strip() for part in parts if part.strip()]
            return [{"type": "cell", "content": cell, "index": index} for index, cell in enumerate(cells)]
        content = "\n".join(parts)

    if not isinstance(content, str) or not content.strip():
        return []

    extractor = _EXTRACTORS.get(content_type)
    if extractor is None:
        logger.debug("Unknown content type %r, extracting as text", content_type)
        extractor = _extract_text
    return extractor(content, language)


__all__ = [
    "Element",
    "extract_elements",
    "fence_language",
    "is_fence_line",
    "is_table_line",
    "is_table_separator",
    "iter_unfenced_lines",
    "list_item_indent",
    "split_table_row",
]
