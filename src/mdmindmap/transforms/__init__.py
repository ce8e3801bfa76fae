#  Copyright (c) 2025 Tom Villani, Ph.D.
"""In-place tree transforms: mindmap filtering and complex content expansion."""

from mdmindmap.transforms.expansion import expand_complex_content, extract_content_for_expansion
from mdmindmap.transforms.filter import filter_tree_for_mindmap, render_node_markdown

__all__ = [
    "filter_tree_for_mindmap",
    "render_node_markdown",
    "extract_content_for_expansion",
    "expand_complex_content",
]
