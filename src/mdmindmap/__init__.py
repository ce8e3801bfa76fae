#  Copyright (c) 2025 Tom Villani, Ph.D.
"""mdmindmap - Turn markdown documents into mindmap trees.

mdmindmap parses free-form markdown into a header-nested tree of
:class:`TreeNode` objects, classifies every block of content (tables, code,
lists, images, links, math, inline formatting, text), and can reshape the
tree for mindmap display.

Pipeline
--------
1. **Build** - headers nest under a synthetic root; other blocks become typed
   content nodes
2. **Filter** - content folds into the ``detail`` string of the deepest
   headers, leaving a clean outline
3. **Expand** - leaf detail holding tables, code or lists is turned back into
   typed child nodes when it is complex enough
4. **Analyze** - detail content type and complexity are recorded in node
   metadata, with per-run caching

Rendering and layout are left to the caller; they only read node fields or
write the ``x``/``y`` scratch coordinates.

Examples
--------
Parse and filter a document:

    >>> from mdmindmap import parse_markdown_to_tree
    >>> root = parse_markdown_to_tree("# Chapter\\n## Section\\nBody", filter_for_mindmap=True)
    >>> root.children[0].children[0].detail
    'Body'

Classify a snippet:

    >>> from mdmindmap import detect_content_type
    >>> detect_content_type("- a\\n- b").type
    'list'

Serialize:

    >>> from mdmindmap import tree_to_json
    >>> json_text = tree_to_json(root)

"""

__version__ = "1.0.0"

from mdmindmap.analysis import (
    ContentAnalysis,
    analyze_leaf_for_expansion,
    calculate_content_complexity,
    detect_content_type,
    extract_elements,
)
from mdmindmap.api import parse_markdown_to_tree
from mdmindmap.builder import TreeBuilder
from mdmindmap.exceptions import (
    ConfigurationError,
    InvalidArgumentError,
    InvalidNodeError,
    MindmapError,
    ValidationError,
)
from mdmindmap.logging_utils import configure_logging
from mdmindmap.options import AnalysisOptions, ExpansionOptions, FilterOptions, PipelineOptions
from mdmindmap.pipeline import (
    AnalysisCache,
    enhance_tree_with_content_analysis,
    get_parsing_stats,
    get_pipeline_stats,
)
from mdmindmap.transforms import (
    expand_complex_content,
    extract_content_for_expansion,
    filter_tree_for_mindmap,
)
from mdmindmap.tree import TreeNode, json_to_tree, tree_to_dict, tree_to_json
from mdmindmap.validation import validate_markdown

__all__ = [
    "__version__",
    # Entry point
    "parse_markdown_to_tree",
    "TreeBuilder",
    # Tree
    "TreeNode",
    "tree_to_dict",
    "tree_to_json",
    "json_to_tree",
    # Analysis
    "ContentAnalysis",
    "detect_content_type",
    "extract_elements",
    "calculate_content_complexity",
    "analyze_leaf_for_expansion",
    # Transforms
    "filter_tree_for_mindmap",
    "extract_content_for_expansion",
    "expand_complex_content",
    # Orchestration
    "AnalysisCache",
    "enhance_tree_with_content_analysis",
    "get_pipeline_stats",
    "get_parsing_stats",
    "validate_markdown",
    # Options
    "PipelineOptions",
    "FilterOptions",
    "ExpansionOptions",
    "AnalysisOptions",
    # Exceptions
    "MindmapError",
    "ValidationError",
    "InvalidArgumentError",
    "ConfigurationError",
    "InvalidNodeError",
    # Logging
    "configure_logging",
]
