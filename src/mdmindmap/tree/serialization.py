#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdmindmap/tree/serialization.py
"""JSON serialization and deserialization for mindmap trees.

The serialized form is the plain-object mirror consumed by renderers and
layout engines, so its keys keep their established camelCase spelling
(``contentType``, ``listType``).

The JSON format preserves:
- ``id``, ``text``, ``detail``, ``level``, ``type``, ``contentType``
- ``elements``, ``collapsed`` and ``metadata``
- Type-specific fields (``language``, ``content``, ``formula``, ``listType``,
  ``cells``, ``headers``, ``rows``, ``items``, ``source``) when set
- Child order, recursively

Layout scratch coordinates (``x``, ``y``) and parent references are not
serialized; parent references are rebuilt on load.

Examples
--------
Round trip a parsed document:

    >>> from mdmindmap import parse_markdown_to_tree
    >>> from mdmindmap.tree.serialization import tree_to_json, json_to_tree
    >>> root = parse_markdown_to_tree("# Title\\nBody text")
    >>> restored = json_to_tree(tree_to_json(root))
    >>> restored.children[0].text
    'Title'

"""

from __future__ import annotations

import copy
import json
from typing import TYPE_CHECKING, Any, Mapping

from mdmindmap.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from mdmindmap.tree.node import TreeNode

# Attribute name -> serialized key for optional type-specific fields
_OPTIONAL_FIELDS: tuple[tuple[str, str], ...] = (
    ("language", "language"),
    ("content", "content"),
    ("formula", "formula"),
    ("list_type", "listType"),
    ("cells", "cells"),
    ("headers", "headers"),
    ("rows", "rows"),
    ("items", "items"),
    ("source", "source"),
)


def _serialize_node(node: TreeNode) -> dict[str, Any]:
    """Serialize a single node without its children."""
    result: dict[str, Any] = {
        "id": node.id,
        "text": node.text,
        "detail": node.detail,
        "level": node.level,
        "type": node.type,
        "contentType": node.content_type,
        "elements": copy.deepcopy(node.elements),
        "collapsed": node.collapsed,
        "metadata": copy.deepcopy(node.metadata),
    }
    for attribute, key in _OPTIONAL_FIELDS:
        value = getattr(node, attribute)
        if value is not None:
            result[key] = copy.deepcopy(value)
    result["children"] = []
    return result


def tree_to_dict(root: TreeNode) -> dict[str, Any]:
    """Convert a subtree to a nested dictionary.

    Parameters
    ----------
    root : TreeNode
        Subtree root to serialize

    Returns
    -------
    dict
        JSON-compatible dictionary; ``elements`` and ``metadata`` are deep
        copies, so mutating the result never touches the tree

    """
    result = _serialize_node(root)
    stack: list[tuple[TreeNode, dict[str, Any]]] = [(root, result)]
    while stack:
        node, data = stack.pop()
        for child in node.children:
            child_data = _serialize_node(child)
            data["children"].append(child_data)
            stack.append((child, child_data))
    return result


def _deserialize_node(data: Mapping[str, Any], node_class: type[TreeNode]) -> TreeNode:
    """Build a single node (without children) from its serialized form."""
    if not isinstance(data, Mapping):
        raise InvalidArgumentError(
            "Invalid JSON data for TreeNode deserialization",
            parameter_name="data",
            parameter_value=data,
        )

    node = node_class(
        data.get("text") or "",
        data.get("level") or 0,
        data.get("contentType") or data.get("type") or "text",
        copy.deepcopy(data.get("elements") or []),
    )
    if data.get("id"):
        node.id = data["id"]
    node.detail = data.get("detail") or ""
    node.type = data.get("type") or data.get("contentType") or "text"
    node.collapsed = bool(data.get("collapsed", False))
    node.metadata = copy.deepcopy(data.get("metadata") or {})
    for attribute, key in _OPTIONAL_FIELDS:
        if data.get(key) is not None:
            setattr(node, attribute, copy.deepcopy(data[key]))
    return node


def dict_to_tree(data: Mapping[str, Any], node_class: type[TreeNode] | None = None) -> TreeNode:
    """Rebuild a subtree from :func:`tree_to_dict` output.

    Parameters
    ----------
    data : Mapping
        Serialized node, as produced by :func:`tree_to_dict`
    node_class : type, optional
        TreeNode subclass to instantiate; defaults to TreeNode

    Returns
    -------
    TreeNode
        Root of the rebuilt subtree with parent references restored

    Raises
    ------
    InvalidArgumentError
        If ``data`` or any nested child is not a mapping

    """
    if node_class is None:
        from mdmindmap.tree.node import TreeNode

        node_class = TreeNode

    root = _deserialize_node(data, node_class)
    stack: list[tuple[Mapping[str, Any], TreeNode]] = [(data, root)]
    while stack:
        node_data, node = stack.pop()
        children = node_data.get("children")
        if not isinstance(children, list):
            continue
        for child_data in children:
            child = _deserialize_node(child_data, node_class)
            node.add_child(child)
            stack.append((child_data, child))
    return root


def tree_to_json(root: TreeNode, indent: int | None = None) -> str:
    """Serialize a subtree to a JSON string.

    Parameters
    ----------
    root : TreeNode
        Subtree root to serialize
    indent : int or None, default None
        Passed through to :func:`json.dumps`

    Returns
    -------
    str
        JSON document

    """
    return json.dumps(tree_to_dict(root), indent=indent, ensure_ascii=False)


def json_to_tree(json_str: str, node_class: type[TreeNode] | None = None) -> TreeNode:
    """Rebuild a subtree from a JSON string produced by :func:`tree_to_json`.

    Raises
    ------
    InvalidArgumentError
        If the string is not valid JSON or does not describe a node

    """
    try:
        data = json.loads(json_str)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(
            f"Invalid JSON for tree deserialization: {e}",
            parameter_name="json_str",
            original_error=e,
        ) from e
    return dict_to_tree(data, node_class=node_class)


__all__ = [
    "tree_to_dict",
    "dict_to_tree",
    "tree_to_json",
    "json_to_tree",
]
