#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdmindmap/transforms/filter.py
"""Mindmap filter: collapse non-structural content into leaf detail.

A mindmap shows the header outline of a document. Filtering keeps every
header node and folds the remaining content into the ``detail`` string of the
deepest headers:

- A *filter-leaf* is a node without header children. Its non-header children
  are rendered back to markdown, newline-joined into ``detail`` and removed.
- A node with at least one header child discards its non-header children.
  Their content is lost, not promoted.
- The root never receives ``detail``.

Nodes are processed bottom-up with an explicit post-order walk, and the tree
is mutated in place.

Examples
--------
    >>> from mdmindmap.builder import TreeBuilder
    >>> root = TreeBuilder().build("# Title\\nIntro\\n- a\\n- b")
    >>> filter_tree_for_mindmap(root).children[0].detail
    'Intro\\n- a\\n- b'

"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from mdmindmap.constants import FENCE_MARKER
from mdmindmap.options import FilterOptions
from mdmindmap.tree.node import TreeNode
from mdmindmap.tree.utils import iter_postorder

logger = logging.getLogger(__name__)


def _table_markdown(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    lines = [f"| {' | '.join(headers)} |", f"|{'|'.join('---' for _ in headers)}|"]
    lines.extend(f"| {' | '.join(row)} |" for row in rows)
    return "\n".join(lines)


def render_node_markdown(node: TreeNode) -> str:
    """Render a content node back to markdown.

    The node's original ``source`` is used when the builder recorded one;
    otherwise a markdown form is synthesized from the type-specific fields.

    Parameters
    ----------
    node : TreeNode
        Content node to render

    Returns
    -------
    str
        Markdown text; may be empty for nodes without content

    """
    if node.source:
        return node.source

    node_type = node.type
    if node_type == "list-item":
        marker = "1." if node.list_type == "ordered" else "-"
        return f"{marker} {node.text}"
    if node_type == "list" and node.items:
        if node.list_type == "ordered":
            return "\n".join(f"{number}. {item}" for number, item in enumerate(node.items, start=1))
        return "\n".join(f"- {item}" for item in node.items)
    if node_type == "code":
        body = node.content or ""
        if body and not body.endswith("\n"):
            body += "\n"
        return f"{FENCE_MARKER}{node.language or ''}\n{body}{FENCE_MARKER}"
    if node_type == "table":
        if node.headers:
            return _table_markdown(node.headers, node.rows or [])
        if node.cells:
            return f"| {' | '.join(node.cells)} |"
    if node_type == "math" and node.formula:
        return f"${node.formula}$"
    if node.detail:
        return node.detail
    return node.text


def _collapse_leaf(node: TreeNode, include_types: Optional[tuple[str, ...]]) -> int:
    """Fold a filter-leaf's children into its detail and return how many were removed."""
    removed = node.detach_children()
    kept = [child for child in removed if include_types is None or child.type in include_types]
    rendered = [render_node_markdown(child) for child in kept]
    node.detail = "\n".join(text for text in rendered if text)
    return len(removed)


def _prune_content(node: TreeNode) -> int:
    """Drop a structural node's non-header children and return how many were removed."""
    removed = 0
    for child in node.detach_children():
        if child.type == "header":
            node.add_child(child)
        else:
            removed += 1
    node.detail = ""
    return removed


def filter_tree_for_mindmap(
    root: TreeNode,
    include_types: Optional[Sequence[str]] = None,
    *,
    options: Optional[FilterOptions] = None,
) -> TreeNode:
    """Collapse a built tree into its header outline with leaf detail.

    Parameters
    ----------
    root : TreeNode
        Root of a tree produced by the builder; mutated in place
    include_types : sequence of str, optional
        When given, only non-header children of these types contribute to a
        leaf's detail. Header children are always kept.
    options : FilterOptions, optional
        Filter options; an explicit ``include_types`` overrides its value

    Returns
    -------
    TreeNode
        The same ``root``

    Raises
    ------
    ValidationError
        If ``include_types`` is a bare string

    """
    if options is None:
        options = FilterOptions(include_types=include_types)  # type: ignore[arg-type]
    elif include_types is not None:
        options = options.create_updated(include_types=include_types)
    types = options.include_types

    removed = 0
    for node in iter_postorder(root):
        if node is not root and node.type != "header":
            continue
        has_header_child = any(child.type == "header" for child in node.children)
        if node is root or has_header_child:
            removed += _prune_content(node)
        else:
            removed += _collapse_leaf(node, types)

    logger.debug("Mindmap filter removed %d content nodes", removed)
    return root


__all__ = [
    "filter_tree_for_mindmap",
    "render_node_markdown",
]
