#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdmindmap/api.py
"""High-level entry point for the markdown-to-mindmap pipeline.

:func:`parse_markdown_to_tree` runs the stages in a fixed order:

1. Build the header-nested tree (:class:`~mdmindmap.builder.TreeBuilder`)
2. Filter non-structural content into leaf detail (``filter_for_mindmap``)
3. Expand complex leaf detail into typed children (``expand_complex_content``)
4. Attach detail analysis metadata (``enable_content_analysis``)

Stages 2 to 4 are off by default and each mutates the tree built in stage 1.

"""

from __future__ import annotations

import logging
from typing import Any, Optional

from mdmindmap.builder import TreeBuilder
from mdmindmap.options import PipelineOptions
from mdmindmap.pipeline import enhance_tree_with_content_analysis, get_pipeline_stats
from mdmindmap.transforms.expansion import expand_complex_content
from mdmindmap.transforms.filter import filter_tree_for_mindmap
from mdmindmap.tree.node import TreeNode

logger = logging.getLogger(__name__)


def parse_markdown_to_tree(
    markdown: str,
    options: Optional[PipelineOptions] = None,
    *,
    node_class: Optional[type[TreeNode]] = TreeNode,
    **kwargs: Any,
) -> TreeNode:
    """Parse markdown into a mindmap tree.

    Parameters
    ----------
    markdown : str
        Markdown source. The empty string yields a childless root.
    options : PipelineOptions, optional
        Pipeline configuration; defaults apply when omitted
    node_class : type, default TreeNode
        Node class to instantiate
    **kwargs
        Individual :class:`PipelineOptions` overrides, e.g.
        ``filter_for_mindmap=True``

    Returns
    -------
    TreeNode
        Level-0 root of the resulting tree

    Raises
    ------
    InvalidArgumentError
        If ``markdown`` is None or not a string, or a keyword is not an option
    ConfigurationError
        If ``node_class`` is missing or not a TreeNode subclass
    ValidationError
        If an option value is out of range

    Examples
    --------
    Build the full header outline with leaf detail:

        >>> root = parse_markdown_to_tree("# Title\\nSome text", filter_for_mindmap=True)
        >>> root.children[0].detail
        'Some text'

    """
    options = options or PipelineOptions()
    if kwargs:
        options = options.create_updated(**kwargs)

    root = TreeBuilder(node_class=node_class).build(markdown)

    if options.filter_for_mindmap:
        filter_tree_for_mindmap(root, options=options.filter_options())

    if options.expand_complex_content:
        expand_complex_content(root, options.expansion_options())

    if options.enable_content_analysis:
        enhance_tree_with_content_analysis(root, options.analysis_options())
        if options.include_analysis_metrics:
            logger.info("Pipeline statistics: %s", get_pipeline_stats(root))

    return root


__all__ = [
    "parse_markdown_to_tree",
]
