#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the mdmindmap library.

This module centralizes the magic numbers, regular expressions and default
configuration values used across the pipeline.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Markdown Syntax Patterns - Block and inline regular expressions
3. Content Classification - Detector priority and expansion priority tables
4. Complexity Scoring - Base scores, increments and caps per content type
5. Pipeline Defaults - Default option values
"""

from __future__ import annotations

import re
from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

ContentType = Literal[
    "text",
    "header",
    "code",
    "table",
    "list",
    "list-item",
    "image",
    "link",
    "math",
    "complex",
]
ListType = Literal["ordered", "unordered"]
AnalysisDepth = Literal["surface", "moderate", "deep"]

# =============================================================================
# Markdown Syntax Patterns
# =============================================================================

ROOT_TEXT = "Root"
MAX_HEADER_LEVEL = 6
FENCE_MARKER = "```"

HEADER_PATTERN = re.compile(rf"^(#{{1,{MAX_HEADER_LEVEL}}})\s+(.+)$")
DEEP_HEADER_PATTERN = re.compile(rf"^#{{{MAX_HEADER_LEVEL + 1},}}")
UNORDERED_ITEM_PATTERN = re.compile(r"^(\s*)[-*+]\s+(.*)$")
ORDERED_ITEM_PATTERN = re.compile(r"^(\s*)(\d+)\.\s+(.*)$")
LIST_LINE_PATTERN = re.compile(r"^(\s*)(?:[-*+]|\d+\.)(?:\s+(.*))?$")
TABLE_SEPARATOR_PATTERN = re.compile(r"^\s*\|?\s*:?-{2,}:?\s*(\|\s*:?-{2,}:?\s*)*\|?\s*$")
INLINE_CODE_PATTERN = re.compile(r"`([^`\n]+)`")
IMAGE_PATTERN = re.compile(r"!\[([^\]]*)\]\(([^)\s]*)\)")
LINK_PATTERN = re.compile(r"(?<!!)\[([^\]]+)\]\(([^)\s]*)\)")
MATH_PATTERN = re.compile(r"\$([^$\n]+?)\$")
BOLD_PATTERN = re.compile(r"(\*\*|__)(?=\S)(.+?)(?<=\S)\1")
ITALIC_PATTERN = re.compile(r"(?<![*_])([*_])(?=[^\s*_])(.+?)(?<=[^\s*_])\1(?![*_])")
STRIKETHROUGH_PATTERN = re.compile(r"~~(?=\S)(.+?)(?<=\S)~~")

# Spaces per nesting step for list items
LIST_INDENT_WIDTH = 2

# =============================================================================
# Content Classification
# =============================================================================

# First match wins; documented order for mixed content
CONTENT_TYPE_PRIORITY: tuple[ContentType, ...] = (
    "table",
    "list",
    "code",
    "image",
    "link",
    "math",
    "complex",
    "text",
)

# Minimum number of bullet/numbered lines before content counts as a list
MIN_LIST_ITEMS = 2

# Minimum number of distinct inline markers before content counts as complex
MIN_COMPLEX_MARKERS = 2

# Content types with expandable element records
EXPANDABLE_CONTENT_TYPES = frozenset({"table", "list", "complex", "code", "math"})

# Lower sorts first when a detail string holds several sub-blocks
EXPANSION_PRIORITY: dict[str, int] = {
    "table": 1,
    "code": 2,
    "list": 3,
}

# =============================================================================
# Complexity Scoring
# =============================================================================

# (base, increment per unit, cap) per content type
COMPLEXITY_WEIGHTS: dict[str, tuple[float, float, float]] = {
    "table": (0.8, 0.01, 1.0),
    "code": (0.6, 0.02, 0.9),
    "list": (0.3, 0.1, 0.8),
    "complex": (0.3, 0.05, 0.8),
    "math": (0.3, 0.05, 0.6),
    "image": (0.25, 0.05, 0.6),
    "link": (0.2, 0.05, 0.6),
    "text": (0.1, 0.001, 0.25),
}
DEFAULT_COMPLEXITY_SCORE = 0.1

# Score above which a node counts as complex in pipeline statistics
COMPLEX_NODE_THRESHOLD = 0.5

# =============================================================================
# Pipeline Defaults
# =============================================================================

DEFAULT_COMPLEXITY_THRESHOLD = 0.3
DEFAULT_ANALYSIS_DEPTH: AnalysisDepth = "moderate"
ANALYSIS_DEPTH_LIMITS: dict[str, int | None] = {
    "surface": 2,
    "moderate": 4,
    "deep": None,
}
DEFAULT_FILTER_FOR_MINDMAP = False
DEFAULT_EXPAND_COMPLEX_CONTENT = False
DEFAULT_ENABLE_CONTENT_ANALYSIS = False
DEFAULT_INCLUDE_ANALYSIS_METRICS = False
DEFAULT_CACHE_ANALYSIS_RESULTS = True
DEFAULT_ENABLE_EXPANSION_LOGGING = False

DETAIL_ANALYSIS_KEY = "detailAnalysis"
