#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the TreeNode class."""

import pytest

from mdmindmap.exceptions import InvalidNodeError
from mdmindmap.tree import TreeNode, count_nodes, iter_nodes, iter_nodes_with_depth, iter_postorder, max_depth


def _chain(depth: int) -> TreeNode:
    root = TreeNode("Root", 0)
    current = root
    for level in range(1, depth + 1):
        child = TreeNode(f"Level {level}", level)
        current.add_child(child)
        current = child
    return root


@pytest.mark.unit
class TestTreeNodeConstruction:
    """Test TreeNode defaults."""

    def test_defaults(self) -> None:
        """Test a new node has empty detail, no children and text type."""
        node = TreeNode("Title", 1)

        assert node.text == "Title"
        assert node.level == 1
        assert node.detail == ""
        assert node.type == "text"
        assert node.content_type == "text"
        assert node.elements == []
        assert node.children == []
        assert node.parent is None
        assert node.collapsed is False
        assert node.metadata == {}

    def test_ids_are_unique(self) -> None:
        """Test every node gets its own identifier."""
        ids = {TreeNode("x").id for _ in range(200)}
        assert len(ids) == 200
        assert all(node_id.startswith("node_") for node_id in ids)

    def test_elements_argument_is_kept(self) -> None:
        """Test elements passed at construction are stored."""
        elements = [{"type": "cell", "content": "A", "index": 0}]
        node = TreeNode("Table", 2, "table", elements)
        assert node.content_type == "table"
        assert node.elements == elements

    def test_mutable_defaults_not_shared(self) -> None:
        """Test two nodes never share children or metadata containers."""
        first, second = TreeNode("a"), TreeNode("b")
        first.metadata["k"] = 1
        first.add_child(TreeNode("c"))
        assert second.metadata == {}
        assert second.children == []


@pytest.mark.unit
class TestTreeNodeStructure:
    """Test child management and navigation."""

    def test_add_child_sets_parent(self) -> None:
        """Test add_child appends and sets the back-reference."""
        parent, child = TreeNode("p"), TreeNode("c")
        parent.add_child(child)
        assert parent.children == [child]
        assert child.parent is parent

    def test_add_child_rejects_non_nodes(self) -> None:
        """Test add_child raises for objects that are not nodes."""
        parent = TreeNode("p")
        with pytest.raises(InvalidNodeError) as exc_info:
            parent.add_child("not a node")  # type: ignore[arg-type]
        assert isinstance(exc_info.value, TypeError)
        assert "str" in str(exc_info.value)

    def test_remove_child(self) -> None:
        """Test remove_child detaches only the given child."""
        parent = TreeNode("p")
        first, second = TreeNode("1"), TreeNode("2")
        parent.add_child(first)
        parent.add_child(second)

        parent.remove_child(first)

        assert parent.children == [second]
        assert first.parent is None

    def test_remove_unknown_child_is_noop(self) -> None:
        """Test removing a node that is not a child changes nothing."""
        parent = TreeNode("p")
        parent.add_child(TreeNode("1"))
        parent.remove_child(TreeNode("other"))
        assert len(parent.children) == 1

    def test_detach_children(self) -> None:
        """Test detach_children empties the node and clears back-references."""
        parent = TreeNode("p")
        children = [TreeNode(str(i)) for i in range(3)]
        for child in children:
            parent.add_child(child)

        detached = parent.detach_children()

        assert detached == children
        assert parent.children == []
        assert all(child.parent is None for child in children)

    def test_get_path_excludes_root(self) -> None:
        """Test get_path lists nodes from below the root down to the node."""
        root = _chain(3)
        leaf = root.children[0].children[0].children[0]
        assert [node.text for node in leaf.get_path()] == ["Level 1", "Level 2", "Level 3"]
        assert root.get_path() == []

    def test_is_root(self) -> None:
        """Test only parentless nodes are roots."""
        root = _chain(1)
        assert root.is_root()
        assert not root.children[0].is_root()

    def test_descendants_and_count(self) -> None:
        """Test descendant listing and node counting."""
        root = _chain(4)
        assert [node.text for node in root.get_all_descendants()] == [f"Level {i}" for i in range(1, 5)]
        assert root.get_node_count() == 5

    def test_find_by_type_and_content_type(self) -> None:
        """Test searching the subtree by legacy type and content type."""
        root = TreeNode("Root", 0)
        code = TreeNode("Code: python", 1)
        code.set_content_data("code", [])
        root.add_child(code)
        root.add_child(TreeNode("plain", 1))

        assert root.find_by_type("code") == [code]
        assert root.find_by_content_type("code") == [code]
        assert len(root.find_by_type("text")) == 2

    def test_toggle_collapse_hides_children(self) -> None:
        """Test collapsed nodes report no visible children."""
        root = _chain(2)
        root.toggle_collapse()
        assert root.collapsed is True
        assert root.get_visible_children() == []
        root.toggle_collapse()
        assert root.get_visible_children() == root.children


@pytest.mark.unit
class TestTreeNodeContent:
    """Test content data handling and element expansion."""

    def test_set_content_data_syncs_type(self) -> None:
        """Test set_content_data updates content_type, elements and legacy type."""
        node = TreeNode("x")
        node.set_content_data("list", [{"type": "list-item", "content": "a", "indent": 0, "index": 0}])
        assert node.content_type == "list"
        assert node.type == "list"
        assert len(node.elements) == 1

    def test_set_content_data_none_elements(self) -> None:
        """Test None elements become an empty list."""
        node = TreeNode("x")
        node.set_content_data("text", None)
        assert node.elements == []

    def test_has_expandable_content(self) -> None:
        """Test only expandable types with elements report expandable content."""
        table = TreeNode("t", 1, "table", [{"type": "cell", "content": "A", "index": 0}])
        empty_table = TreeNode("t", 1, "table", [])
        text = TreeNode("t", 1, "text", [{"type": "text", "content": "x", "length": 1}])

        assert table.has_expandable_content()
        assert not empty_table.has_expandable_content()
        assert not text.has_expandable_content()

    def test_expand_content_creates_typed_children(self) -> None:
        """Test each element record becomes a child one level down."""
        node = TreeNode("Mixed", 2, "complex")
        node.elements = [
            {"type": "cell", "content": "Name", "index": 0},
            {"type": "list-item", "content": "Item", "indent": 0, "index": 1},
            {"type": "code-block", "content": "x = 1\n", "language": "python"},
            {"type": "formula", "content": "a^2", "index": 0},
            {"type": "link", "text": "Docs", "url": "https://example.com", "index": 0},
        ]

        created = node.expand_content()

        assert [child.content_type for child in created] == ["text", "list-item", "code", "math", "link"]
        assert all(child.level == 3 for child in created)
        assert all(child.parent is node for child in created)
        assert created[2].text == "Code: python"
        assert created[2].content == "x = 1\n"
        assert created[3].formula == "a^2"
        assert created[4].text == "Docs"

    def test_expand_content_without_elements(self) -> None:
        """Test nodes without expandable content create nothing."""
        assert TreeNode("plain").expand_content() == []


@pytest.mark.unit
class TestTreeTraversal:
    """Test explicit-stack traversal helpers."""

    def test_preorder_is_document_order(self) -> None:
        """Test pre-order walks parents before children, siblings left to right."""
        root = TreeNode("Root", 0)
        a, b = TreeNode("a", 1), TreeNode("b", 1)
        a.add_child(TreeNode("a1", 2))
        root.add_child(a)
        root.add_child(b)

        assert [node.text for node in iter_nodes(root)] == ["Root", "a", "a1", "b"]

    def test_postorder_visits_children_first(self) -> None:
        """Test post-order yields every child before its parent."""
        root = TreeNode("Root", 0)
        a = TreeNode("a", 1)
        a.add_child(TreeNode("a1", 2))
        root.add_child(a)
        root.add_child(TreeNode("b", 1))

        assert [node.text for node in iter_postorder(root)] == ["a1", "a", "b", "Root"]

    def test_depth_bound(self) -> None:
        """Test max_depth stops the walk below the bound."""
        root = _chain(5)
        visited = [depth for _node, depth in iter_nodes_with_depth(root, max_depth=2)]
        assert visited == [0, 1, 2]

    def test_children_added_during_walk_are_not_visited(self) -> None:
        """Test the walk uses the children present when a node is visited."""
        root = _chain(1)
        seen = []
        for node, _depth in iter_nodes_with_depth(root):
            seen.append(node.text)
            if node.text == "Level 1":
                node.add_child(TreeNode("late", 2))
        assert seen == ["Root", "Level 1"]

    def test_deep_chain_does_not_recurse(self) -> None:
        """Test very deep trees are walked without hitting the recursion limit."""
        root = _chain(5000)
        assert count_nodes(root) == 5001
        assert max_depth(root) == 5000

    def test_lone_root_depth(self) -> None:
        """Test a lone root has depth zero."""
        assert max_depth(TreeNode("Root", 0)) == 0
