#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdmindmap/analysis/complexity.py
"""Complexity scoring for detected content.

Scores are in ``[0, 1]`` and only meaningful relative to each other: tables
and code outrank lists, lists outrank inline decoration, and plain text stays
lowest however long it is. Each type uses a base score, an increment per unit
(cell, line, item, span) and a cap; see ``COMPLEXITY_WEIGHTS``.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Union

from mdmindmap.analysis.detector import ContentAnalysis, detect_content_type
from mdmindmap.constants import COMPLEXITY_WEIGHTS, DEFAULT_COMPLEXITY_SCORE, DEFAULT_COMPLEXITY_THRESHOLD

logger = logging.getLogger(__name__)


def _weighted(content_type: str, units: float) -> float:
    base, increment, cap = COMPLEXITY_WEIGHTS[content_type]
    return min(cap, base + increment * units)


def _code_lines(elements: list[dict[str, Any]]) -> int:
    content = str(elements[0].get("content") or "")
    return len(content.rstrip("\n").split("\n")) if content else 0


def calculate_content_complexity(
    analysis: Union[ContentAnalysis, Mapping[str, Any], None],
) -> float:
    """Score a detection result.

    Parameters
    ----------
    analysis : ContentAnalysis, Mapping or None
        Detection result, either as returned by :func:`detect_content_type`
        or as its ``{"type", "elements"}`` mapping

    Returns
    -------
    float
        Score in ``[0, 1]``; 0 when there is nothing to score

    """
    if analysis is None:
        return 0.0
    if isinstance(analysis, ContentAnalysis):
        content_type, elements = analysis.type, analysis.elements
    elif isinstance(analysis, Mapping):
        content_type, elements = analysis.get("type"), analysis.get("elements")
    else:
        return 0.0

    if not elements:
        return 0.0

    if content_type == "table":
        score = _weighted("table", len(elements))
    elif content_type == "code":
        score = _weighted("code", _code_lines(elements))
    elif content_type == "list":
        score = _weighted("list", len(elements))
    elif content_type == "complex":
        variety = len({element.get("type") for element in elements})
        score = _weighted("complex", len(elements) + variety)
    elif content_type in ("math", "image", "link"):
        score = _weighted(content_type, len(elements))
    elif content_type == "text":
        score = _weighted("text", int(elements[0].get("length") or 0))
    else:
        score = DEFAULT_COMPLEXITY_SCORE

    return max(0.0, min(1.0, score))


def analyze_leaf_for_expansion(
    node: Any,
    threshold: float = DEFAULT_COMPLEXITY_THRESHOLD,
) -> dict[str, Any]:
    """Decide whether a leaf's detail is complex enough to expand.

    Parameters
    ----------
    node : TreeNode, str or None
        The leaf whose ``detail`` is analyzed, or the detail string itself
    threshold : float, default 0.3
        Complexity the detail must exceed

    Returns
    -------
    dict
        ``{"shouldExpand": False, "reason": "no_content"}`` for empty detail,
        otherwise ``shouldExpand``, ``contentType``, ``complexity`` and a
        ``reason`` of ``"complex_content"`` or ``"simple_content"``

    """
    detail = node if isinstance(node, str) or node is None else getattr(node, "detail", None)
    if not detail or not isinstance(detail, str) or not detail.strip():
        return {"shouldExpand": False, "reason": "no_content"}

    analysis = detect_content_type(detail)
    complexity = calculate_content_complexity(analysis)
    should_expand = complexity > threshold
    logger.debug("Leaf detail classified as %s (complexity %.3f)", analysis.type, complexity)
    return {
        "shouldExpand": should_expand,
        "contentType": analysis.type,
        "complexity": complexity,
        "reason": "complex_content" if should_expand else "simple_content",
    }


__all__ = [
    "calculate_content_complexity",
    "analyze_leaf_for_expansion",
]
