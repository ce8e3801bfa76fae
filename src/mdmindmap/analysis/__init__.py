#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Content analysis: type detection, element extraction and complexity scoring."""

from mdmindmap.analysis.complexity import analyze_leaf_for_expansion, calculate_content_complexity
from mdmindmap.analysis.detector import ContentAnalysis, detect_content_type
from mdmindmap.analysis.extractor import extract_elements

__all__ = [
    "ContentAnalysis",
    "detect_content_type",
    "extract_elements",
    "calculate_content_complexity",
    "analyze_leaf_for_expansion",
]
