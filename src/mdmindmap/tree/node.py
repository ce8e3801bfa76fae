#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdmindmap/tree/node.py
"""Tree node class for mindmap document representation.

A parsed document is a tree of :class:`TreeNode` objects under a synthetic
level-0 root. Header nodes carry the document's structure; every other node
holds one classified block of content (a paragraph line, a list item, a
fenced code block, a table, ...).

Ownership
---------
Children are exclusively owned by their parent and kept in document order.
``parent`` is a non-owning back-reference that only :meth:`TreeNode.add_child`,
:meth:`TreeNode.remove_child` and :meth:`TreeNode.detach_children` write. The pipeline stages (filter,
expander, analysis orchestrator) mutate nodes in place and never share a node
between two parents.

"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Optional

from mdmindmap.constants import EXPANDABLE_CONTENT_TYPES
from mdmindmap.exceptions import InvalidNodeError
from mdmindmap.tree.utils import count_nodes, iter_nodes


def generate_node_id() -> str:
    """Return a fresh node identifier."""
    return f"node_{uuid.uuid4().hex[:12]}"


@dataclass(eq=False)
class TreeNode:
    """A single node of the mindmap tree.

    Parameters
    ----------
    text : str
        Display title of the node
    level : int, default 0
        0 for the synthetic root, 1-6 for headers; content nodes sit one
        level below the node that owns them
    content_type : str, default "text"
        Current content classification
    elements : list of dict or None, default None
        Structured element records extracted from the node's content

    Attributes
    ----------
    detail : str
        Aggregated markdown for filter-leaves; empty on every other node
    type : str
        Legacy single-type tag, ``"text"`` until the builder or
        :meth:`set_content_data` assigns one
    children : list of TreeNode
        Owned child nodes in document order
    parent : TreeNode or None
        Non-owning back-reference to the owning node
    id : str
        Unique identifier generated at construction
    collapsed : bool
        UI scratch flag; the pipeline never changes it
    metadata : dict
        Free-form metadata; the analysis orchestrator stores
        ``metadata["detailAnalysis"]`` here
    x, y : float
        Layout scratch coordinates written by external layout engines
    language, content : str or None
        Code nodes: fence language and code body
    formula : str or None
        Math nodes: the formula between ``$`` delimiters
    list_type : {"ordered", "unordered"} or None
        List and list-item nodes
    cells, headers : list of str or None
        Table nodes: all cells row-major, and the first row
    rows : list of list of str or None
        Table nodes: data rows after the header row
    items : list of str or None
        Expanded list nodes: the item texts
    source : str or None
        Original markdown of the block this node was built from

    """

    text: str
    level: int = 0
    content_type: str = "text"
    elements: list[dict[str, Any]] | None = None

    detail: str = field(default="", init=False)
    type: str = field(default="text", init=False)
    children: list[TreeNode] = field(default_factory=list, init=False, repr=False)
    parent: Optional[TreeNode] = field(default=None, init=False, repr=False)
    id: str = field(default_factory=generate_node_id, init=False)
    collapsed: bool = field(default=False, init=False, repr=False)
    metadata: dict[str, Any] = field(default_factory=dict, init=False, repr=False)
    x: float = field(default=0.0, init=False, repr=False)
    y: float = field(default=0.0, init=False, repr=False)

    language: Optional[str] = field(default=None, init=False, repr=False)
    content: Optional[str] = field(default=None, init=False, repr=False)
    formula: Optional[str] = field(default=None, init=False, repr=False)
    list_type: Optional[str] = field(default=None, init=False, repr=False)
    cells: Optional[list[str]] = field(default=None, init=False, repr=False)
    headers: Optional[list[str]] = field(default=None, init=False, repr=False)
    rows: Optional[list[list[str]]] = field(default=None, init=False, repr=False)
    items: Optional[list[str]] = field(default=None, init=False, repr=False)
    source: Optional[str] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        """Normalize the elements list."""
        if self.elements is None:
            self.elements = []

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    def add_child(self, node: TreeNode) -> None:
        """Append ``node`` as the last child and set its parent reference.

        Raises
        ------
        InvalidNodeError
            If ``node`` is not a TreeNode

        """
        if not isinstance(node, TreeNode):
            raise InvalidNodeError(type(node))
        node.parent = self
        self.children.append(node)

    def remove_child(self, node: TreeNode) -> None:
        """Detach ``node`` if it is a child of this node; otherwise do nothing."""
        for index, child in enumerate(self.children):
            if child is node:
                del self.children[index]
                node.parent = None
                return

    def detach_children(self) -> list[TreeNode]:
        """Remove and return all children, clearing their parent references."""
        detached = self.children
        self.children = []
        for child in detached:
            child.parent = None
        return detached

    def is_root(self) -> bool:
        """Return True when the node has no parent."""
        return self.parent is None

    def get_path(self) -> list[TreeNode]:
        """Return the nodes from just below the root down to this node."""
        path: list[TreeNode] = []
        current: Optional[TreeNode] = self
        while current is not None and current.parent is not None:
            path.append(current)
            current = current.parent
        path.reverse()
        return path

    def get_all_descendants(self) -> list[TreeNode]:
        """Return every descendant in document order, excluding this node."""
        descendants = iter_nodes(self)
        next(descendants)
        return list(descendants)

    def get_node_count(self) -> int:
        """Return the number of nodes in this subtree, including this node."""
        return count_nodes(self)

    def find_by_type(self, node_type: str) -> list[TreeNode]:
        """Return all nodes in the subtree whose legacy ``type`` matches."""
        return [node for node in iter_nodes(self) if node.type == node_type]

    def find_by_content_type(self, content_type: str) -> list[TreeNode]:
        """Return all nodes in the subtree whose ``content_type`` matches."""
        return [node for node in iter_nodes(self) if node.content_type == content_type]

    def toggle_collapse(self) -> None:
        """Flip the UI collapse flag."""
        self.collapsed = not self.collapsed

    def get_visible_children(self) -> list[TreeNode]:
        """Return the children, or an empty list while collapsed."""
        return [] if self.collapsed else self.children

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------

    def set_content_data(self, content_type: str, elements: list[dict[str, Any]] | None) -> None:
        """Set the classification and elements, keeping the legacy type in sync."""
        self.content_type = content_type
        self.elements = elements or []
        self.type = content_type

    def has_expandable_content(self) -> bool:
        """Return True when the node holds element records worth expanding."""
        return bool(self.elements) and self.content_type in EXPANDABLE_CONTENT_TYPES

    def expand_content(self) -> list[TreeNode]:
        """Turn each element record into a child node.

        Returns
        -------
        list of TreeNode
            The children created, in element order. Empty when the node has
            no expandable content.

        """
        created: list[TreeNode] = []
        if not self.has_expandable_content():
            return created

        child_level = self.level + 1
        for element in self.elements or []:
            element_type = element.get("type")
            if element_type == "cell":
                child = TreeNode(element.get("content", ""), child_level, "text")
            elif element_type == "list-item":
                child = TreeNode(element.get("content", ""), child_level, "list-item")
            elif element_type == "code-block":
                child = TreeNode(f"Code: {element.get('language') or 'text'}", child_level, "code", [element])
                child.content = element.get("content")
                child.language = element.get("language")
            elif element_type == "image":
                child = TreeNode(f"Image: {element.get('alt', '')}", child_level, "image", [element])
            elif element_type == "link":
                child = TreeNode(element.get("text", ""), child_level, "link", [element])
            elif element_type == "formula":
                child = TreeNode(f"Math: {element.get('content', '')}", child_level, "math", [element])
                child.formula = element.get("content")
            else:
                child = TreeNode(element.get("content") or "Unknown Element", child_level, "text")
            self.add_child(child)
            created.append(child)
        return created

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize this subtree to a plain, JSON-compatible dictionary."""
        from mdmindmap.tree.serialization import tree_to_dict

        return tree_to_dict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TreeNode:
        """Rebuild a subtree from the output of :meth:`to_dict`.

        Raises
        ------
        InvalidArgumentError
            If ``data`` is not a mapping

        """
        from mdmindmap.tree.serialization import dict_to_tree

        return dict_to_tree(data, node_class=cls)


__all__ = [
    "TreeNode",
    "generate_node_id",
]
