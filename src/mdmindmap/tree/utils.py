#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdmindmap/tree/utils.py
"""Traversal helpers for mindmap trees.

All walks use an explicit stack so that deeply nested documents never hit
the interpreter recursion limit. Pre-order walks yield nodes in document
order (a parent before its children, siblings left to right).

Functions
---------
iter_nodes : Pre-order walk over a subtree
iter_nodes_with_depth : Pre-order walk yielding ``(node, depth)`` pairs
iter_postorder : Post-order walk (children before their parent)
count_nodes : Number of nodes in a subtree
max_depth : Depth of the deepest node below a root

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from mdmindmap.tree.node import TreeNode


def iter_nodes_with_depth(root: TreeNode, max_depth: int | None = None) -> Iterator[tuple[TreeNode, int]]:
    """Walk a subtree in pre-order, yielding each node with its depth.

    Parameters
    ----------
    root : TreeNode
        Start of the walk; yielded with depth 0
    max_depth : int or None, default None
        Nodes deeper than this are neither yielded nor descended into.
        ``None`` walks the whole subtree.

    Yields
    ------
    tuple of (TreeNode, int)
        Each visited node and its distance from ``root``

    Notes
    -----
    Children are snapshotted when their parent is visited, so callers may
    append children to the node they just received without disturbing the
    walk. Appended children are not visited.

    """
    stack: list[tuple[TreeNode, int]] = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        children = list(node.children)
        yield node, depth
        if max_depth is not None and depth >= max_depth:
            continue
        for child in reversed(children):
            stack.append((child, depth + 1))


def iter_nodes(root: TreeNode) -> Iterator[TreeNode]:
    """Walk a subtree in pre-order (document order)."""
    for node, _depth in iter_nodes_with_depth(root):
        yield node


def iter_postorder(root: TreeNode) -> Iterator[TreeNode]:
    """Walk a subtree in post-order, so every child precedes its parent.

    Parameters
    ----------
    root : TreeNode
        Subtree root; yielded last

    Yields
    ------
    TreeNode
        Nodes with all descendants already yielded

    """
    stack: list[tuple[TreeNode, bool]] = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        if expanded:
            yield node
            continue
        stack.append((node, True))
        for child in reversed(node.children):
            stack.append((child, False))


def count_nodes(root: TreeNode) -> int:
    """Return the number of nodes in the subtree, including ``root``."""
    return sum(1 for _ in iter_nodes(root))


def max_depth(root: TreeNode) -> int:
    """Return the depth of the deepest node below ``root`` (0 for a lone root)."""
    return max((depth for _node, depth in iter_nodes_with_depth(root)), default=0)


__all__ = [
    "iter_nodes",
    "iter_nodes_with_depth",
    "iter_postorder",
    "count_nodes",
    "max_depth",
]
