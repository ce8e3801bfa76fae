#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdmindmap/builder.py
"""Markdown to tree builder.

This module turns raw markdown into a header-nested :class:`TreeNode` tree in
a single pass over the input lines. Headers open and close sections on a
stack whose bottom is the synthetic level-0 root; every other block becomes
a content node attached to the innermost open header.

Blocks recognized, in the order they are tried on each line:

- Fenced code (```` ``` ```` up to the matching fence, or to end of input)
- ATX headers (``#`` to ``######`` followed by whitespace and text)
- List items (``-``, ``*``, ``+`` or ``N.`` markers), one node per line
- Pipe tables (consecutive pipe-delimited rows, separators included, up to
  a blank line or a line that opens one of the blocks above)
- Paragraph lines, classified by :func:`detect_content_type`

Blank lines only separate blocks and never produce nodes.

"""

from __future__ import annotations

import logging
from typing import Optional

from mdmindmap.analysis.detector import detect_content_type
from mdmindmap.analysis.extractor import (
    extract_elements,
    fence_language,
    is_fence_line,
    is_table_line,
    is_table_separator,
    list_item_indent,
    split_table_row,
)
from mdmindmap.constants import (
    HEADER_PATTERN,
    LIST_INDENT_WIDTH,
    ORDERED_ITEM_PATTERN,
    ROOT_TEXT,
    UNORDERED_ITEM_PATTERN,
)
from mdmindmap.exceptions import ConfigurationError, InvalidArgumentError
from mdmindmap.tree.node import TreeNode

logger = logging.getLogger(__name__)


class TreeBuilder:
    """Build a mindmap tree from markdown text.

    Parameters
    ----------
    node_class : type, default TreeNode
        Node class to instantiate; must be :class:`TreeNode` or a subclass

    Raises
    ------
    ConfigurationError
        If ``node_class`` is missing or is not a TreeNode subclass

    Examples
    --------
        >>> root = TreeBuilder().build("# Title\\n- one\\n- two")
        >>> [child.text for child in root.children[0].children]
        ['one', 'two']

    """

    def __init__(self, node_class: Optional[type[TreeNode]] = TreeNode):
        """Initialize the builder with the node class to instantiate."""
        if node_class is None or not isinstance(node_class, type) or not issubclass(node_class, TreeNode):
            raise ConfigurationError(
                "TreeNode class is required but not available",
                node_class=node_class,
            )
        self.node_class = node_class

    def build(self, markdown: str) -> TreeNode:
        """Parse ``markdown`` into a new tree.

        Parameters
        ----------
        markdown : str
            Markdown source; the empty string yields a childless root

        Returns
        -------
        TreeNode
            The level-0 root

        Raises
        ------
        InvalidArgumentError
            If ``markdown`` is None or not a string

        """
        if markdown is None or not isinstance(markdown, str):
            raise InvalidArgumentError(
                f"markdown must be a string, got {type(markdown).__name__}",
                parameter_name="markdown",
                parameter_value=markdown,
            )

        lines = markdown.replace("\r\n", "\n").replace("\r", "\n").split("\n")
        root = self.node_class(ROOT_TEXT, 0)
        stack: list[TreeNode] = [root]

        index = 0
        while index < len(lines):
            line = lines[index]
            if not line.strip():
                index += 1
                continue

            if is_fence_line(line):
                index = self._add_code_block(lines, index, stack[-1])
                continue

            header = HEADER_PATTERN.match(line)
            if header:
                self._open_header(len(header.group(1)), header.group(2).strip(), stack)
                index += 1
                continue

            if self._add_list_item(line, stack[-1]):
                index += 1
                continue

            if is_table_line(line):
                index = self._add_table(lines, index, stack[-1])
                continue

            self._add_paragraph(line, stack[-1])
            index += 1

        logger.debug("Built tree with %d top-level children from %d lines", len(root.children), len(lines))
        return root

    # ------------------------------------------------------------------
    # Block handlers
    # ------------------------------------------------------------------

    def _open_header(self, level: int, text: str, stack: list[TreeNode]) -> None:
        node = self.node_class(text, level, "header")
        node.type = "header"
        while len(stack) > 1 and stack[-1].level >= level:
            stack.pop()
        stack[-1].add_child(node)
        stack.append(node)

    def _add_code_block(self, lines: list[str], start: int, parent: TreeNode) -> int:
        """Consume a fenced block and return the index of the next unread line."""
        language = fence_language(lines[start])
        body: list[str] = []
        index = start + 1
        closed = False
        while index < len(lines):
            if is_fence_line(lines[index]):
                closed = True
                break
            body.append(lines[index])
            index += 1

        if not closed:
            logger.debug("Unterminated code fence at line %d consumed to end of input", start + 1)

        content = "".join(f"{line}\n" for line in body)
        node = self.node_class(f"Code: {language or 'text'}", parent.level + 1)
        node.set_content_data("code", [{"type": "code-block", "content": content, "language": language}])
        node.language = language
        node.content = content
        node.source = "\n".join(lines[start : index + 1] if closed else lines[start:])
        parent.add_child(node)
        return index + 1 if closed else index

    def _add_list_item(self, line: str, parent: TreeNode) -> bool:
        match = UNORDERED_ITEM_PATTERN.match(line)
        list_type = "unordered"
        if match is None:
            match = ORDERED_ITEM_PATTERN.match(line)
            list_type = "ordered"
        if match is None:
            return False

        text = match.groups()[-1].strip()
        if not text:
            return False

        indent = list_item_indent(match.group(1))
        node = self.node_class(text, parent.level + 1 + indent // LIST_INDENT_WIDTH)
        node.set_content_data("list-item", extract_elements(line, "list"))
        node.list_type = list_type
        node.source = line.rstrip()
        parent.add_child(node)
        return True

    def _add_table(self, lines: list[str], start: int, parent: TreeNode) -> int:
        """Group consecutive table rows into one node and return the next index."""
        index = start
        while index < len(lines) and lines[index].strip() and is_table_line(lines[index]):
            if index > start and _opens_other_block(lines[index]):
                break
            index += 1
        block = lines[start:index]

        rows = [split_table_row(line) for line in block if not is_table_separator(line)]
        if not rows:
            for line in block:
                self._add_paragraph(line, parent)
            return index

        node = self.node_class(f"Table: {' | '.join(rows[0][:2])}", parent.level + 1)
        source = "\n".join(line.rstrip() for line in block)
        node.set_content_data("table", extract_elements(source, "table"))
        node.cells = [cell for row in rows for cell in row]
        node.headers = rows[0]
        node.rows = rows[1:]
        node.source = source
        parent.add_child(node)
        return index

    def _add_paragraph(self, line: str, parent: TreeNode) -> None:
        text = line.strip()
        analysis = detect_content_type(text)
        if analysis.type == "math" and analysis.elements:
            formula = analysis.elements[0]["content"]
            node = self.node_class(f"Math: {formula}", parent.level + 1)
            node.formula = formula
        elif analysis.type == "code" and analysis.elements:
            node = self.node_class(text, parent.level + 1)
            node.content = analysis.elements[0]["content"]
            node.language = analysis.elements[0]["language"]
        else:
            node = self.node_class(text, parent.level + 1)
        node.set_content_data(analysis.type, analysis.elements)
        node.source = text
        parent.add_child(node)


def _opens_other_block(line: str) -> bool:
    """Return True for lines the builder tries before table rows."""
    return bool(
        is_fence_line(line)
        or HEADER_PATTERN.match(line)
        or UNORDERED_ITEM_PATTERN.match(line)
        or ORDERED_ITEM_PATTERN.match(line)
    )


__all__ = [
    "TreeBuilder",
]
