#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tree data model for mdmindmap.

This package holds the :class:`TreeNode` class, its JSON serialization, and
the explicit-stack traversal helpers shared by every pipeline stage.
"""

from mdmindmap.tree.node import TreeNode, generate_node_id
from mdmindmap.tree.serialization import dict_to_tree, json_to_tree, tree_to_dict, tree_to_json
from mdmindmap.tree.utils import count_nodes, iter_nodes, iter_nodes_with_depth, iter_postorder, max_depth

__all__ = [
    "TreeNode",
    "generate_node_id",
    "tree_to_dict",
    "dict_to_tree",
    "tree_to_json",
    "json_to_tree",
    "iter_nodes",
    "iter_nodes_with_depth",
    "iter_postorder",
    "count_nodes",
    "max_depth",
]
