#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdmindmap/transforms/expansion.py
"""Content expander: turn complex leaf detail back into typed child nodes.

After filtering, a leaf may carry a ``detail`` string holding a table, a
fenced code block or a list. Expansion scans that string for such sub-blocks
and replaces the string with one child node per sub-block, ordered by a fixed
precedence (tables, then code, then lists).

Candidates
----------
:func:`extract_content_for_expansion` returns dictionaries of the form::

    {"type": "table", "data": {"headers": [...], "rows": [[...]]},
     "nodeText": "Table: Name | Age", "priority": 1}
    {"type": "code", "data": {"language": "python", "content": "..."},
     "nodeText": "Code: python", "priority": 2}
    {"type": "list", "data": {"items": [...], "ordered": False},
     "nodeText": "List (3 items)", "priority": 3}

Fenced code is located first and its lines are excluded from table and list
scanning. Malformed input never raises; it simply yields fewer candidates.

"""

from __future__ import annotations

import logging
from typing import Any, Optional

from mdmindmap.analysis.complexity import analyze_leaf_for_expansion
from mdmindmap.analysis.extractor import (
    extract_elements,
    fence_language,
    is_fence_line,
    is_table_line,
    is_table_separator,
    split_table_row,
)
from mdmindmap.constants import EXPANSION_PRIORITY, LIST_LINE_PATTERN, ORDERED_ITEM_PATTERN
from mdmindmap.options import ExpansionOptions
from mdmindmap.tree.node import TreeNode
from mdmindmap.tree.utils import iter_nodes_with_depth

logger = logging.getLogger(__name__)

ExpansionCandidate = dict[str, Any]


def _candidate(candidate_type: str, data: dict[str, Any], node_text: str) -> ExpansionCandidate:
    return {
        "type": candidate_type,
        "data": data,
        "nodeText": node_text,
        "priority": EXPANSION_PRIORITY[candidate_type],
    }


def _scan_code_blocks(lines: list[str]) -> tuple[list[ExpansionCandidate], set[int]]:
    """Find fenced blocks; return their candidates and the line indexes they cover."""
    candidates: list[ExpansionCandidate] = []
    covered: set[int] = set()
    index = 0
    while index < len(lines):
        if not is_fence_line(lines[index]):
            index += 1
            continue
        start = index
        language = fence_language(lines[start])
        index += 1
        while index < len(lines) and not is_fence_line(lines[index]):
            index += 1
        covered.update(range(start, min(index, len(lines) - 1) + 1))

        body = lines[start + 1 : index]
        if any(line.strip() for line in body):
            content = "".join(f"{line}\n" for line in body)
            candidates.append(
                _candidate("code", {"language": language, "content": content}, f"Code: {language or 'text'}")
            )
        index += 1
    return candidates, covered


def _table_candidate(block: list[str]) -> Optional[ExpansionCandidate]:
    rows = [split_table_row(line) for line in block if not is_table_separator(line)]
    rows = [row for row in rows if row]
    if not rows or sum(len(row) for row in rows) < 2:
        return None
    headers = rows[0]
    return _candidate("table", {"headers": headers, "rows": rows[1:]}, f"Table: {' | '.join(headers[:2])}")


def _list_candidate(block: list[str]) -> Optional[ExpansionCandidate]:
    items: list[str] = []
    for line in block:
        match = LIST_LINE_PATTERN.match(line)
        if match and (match.group(2) or "").strip():
            items.append(match.group(2).strip())
    if len(items) < 2:
        return None
    ordered = ORDERED_ITEM_PATTERN.match(block[0]) is not None
    return _candidate("list", {"items": items, "ordered": ordered}, f"List ({len(items)} items)")


def extract_content_for_expansion(detail: Optional[str]) -> list[ExpansionCandidate]:
    """Find the tables, code blocks and lists embedded in a detail string.

    Parameters
    ----------
    detail : str or None
        Aggregated leaf markdown

    Returns
    -------
    list of dict
        Expansion candidates sorted by priority (table, code, list); within
        one type they keep document order. Empty for empty input.

    """
    if not detail or not isinstance(detail, str):
        return []

    lines = detail.split("\n")
    candidates, covered = _scan_code_blocks(lines)

    index = 0
    while index < len(lines):
        line = lines[index]
        if index in covered or not line.strip():
            index += 1
            continue

        if is_table_line(line):
            start = index
            while index < len(lines) and index not in covered and is_table_line(lines[index]):
                index += 1
            table = _table_candidate(lines[start:index])
            if table is not None:
                candidates.append(table)
            continue

        if LIST_LINE_PATTERN.match(line):
            start = index
            while index < len(lines) and index not in covered and LIST_LINE_PATTERN.match(lines[index]):
                index += 1
            items = _list_candidate(lines[start:index])
            if items is not None:
                candidates.append(items)
            continue

        index += 1

    candidates.sort(key=lambda candidate: candidate["priority"])
    return candidates


def _build_child(leaf: TreeNode, candidate: ExpansionCandidate) -> TreeNode:
    """Create the typed child node for one expansion candidate."""
    node_class = type(leaf)
    data = candidate["data"]
    child = node_class(candidate["nodeText"], leaf.level + 1)

    if candidate["type"] == "table":
        cells = [cell for row in [data["headers"], *data["rows"]] for cell in row]
        child.set_content_data("table", extract_elements(cells, "table"))
        child.headers = list(data["headers"])
        child.rows = [list(row) for row in data["rows"]]
        child.cells = cells
    elif candidate["type"] == "code":
        child.set_content_data(
            "code", [{"type": "code-block", "content": data["content"], "language": data["language"]}]
        )
        child.language = data["language"]
        child.content = data["content"]
    else:
        child.set_content_data(
            "list",
            [
                {"type": "list-item", "content": item, "indent": 0, "index": index}
                for index, item in enumerate(data["items"])
            ],
        )
        child.list_type = "ordered" if data["ordered"] else "unordered"
        child.items = list(data["items"])
    return child


def expand_complex_content(
    root: TreeNode,
    options: Optional[ExpansionOptions] = None,
    **kwargs: Any,
) -> TreeNode:
    """Expand qualifying leaf detail into typed child nodes.

    A leaf (no children, non-empty ``detail``) is expanded when its depth
    below ``root`` is less than ``max_expansion_depth``, its complexity
    exceeds ``min_complexity_threshold`` and its detected content type is in
    ``enabled_types``. Each candidate found in the detail becomes a child, in
    priority order, and the detail is cleared. A qualifying leaf that yields
    no candidates keeps its detail.

    Parameters
    ----------
    root : TreeNode
        Tree to expand; mutated in place
    options : ExpansionOptions, optional
        Expansion configuration; defaults apply when omitted
    **kwargs
        Individual option overrides applied with ``create_updated``

    Returns
    -------
    TreeNode
        The same ``root``

    """
    options = options or ExpansionOptions()
    if kwargs:
        options = options.create_updated(**kwargs)

    enabled = options.enabled_types
    walk_depth = None if options.max_expansion_depth is None else options.max_expansion_depth - 1

    stats = {"nodesProcessed": 0, "nodesExpanded": 0, "elementsCreated": 0}
    if walk_depth is None or walk_depth >= 0:
        for node, _depth in iter_nodes_with_depth(root, max_depth=walk_depth):
            if node.children or not node.detail:
                continue
            stats["nodesProcessed"] += 1

            analysis = analyze_leaf_for_expansion(node, options.min_complexity_threshold)
            if not analysis["shouldExpand"]:
                continue
            if enabled is not None and analysis["contentType"] not in enabled:
                continue

            candidates = extract_content_for_expansion(node.detail)
            if enabled is not None:
                candidates = [candidate for candidate in candidates if candidate["type"] in enabled]
            if not candidates:
                logger.debug("Leaf %r qualified for expansion but held no expandable blocks", node.text)
                continue

            for candidate in candidates:
                node.add_child(_build_child(node, candidate))
            node.detail = ""
            stats["nodesExpanded"] += 1
            stats["elementsCreated"] += len(candidates)

    if options.enable_expansion_logging:
        processed = stats["nodesProcessed"]
        rate = stats["nodesExpanded"] / processed * 100 if processed else 0.0
        logger.info(
            "Dynamic Expansion Stats: nodesProcessed=%d nodesExpanded=%d elementsCreated=%d expansionRate=%.1f%%",
            processed,
            stats["nodesExpanded"],
            stats["elementsCreated"],
            rate,
        )
    return root


__all__ = [
    "ExpansionCandidate",
    "extract_content_for_expansion",
    "expand_complex_content",
]
