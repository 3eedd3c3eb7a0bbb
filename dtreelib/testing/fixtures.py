"""Test fixtures for dtreelib consumers.

These fixtures provide controlled access to internal state for testing purposes
without exposing implementation details as part of the public API.
"""

from typing import Any, Dict, List

from ..core.handle import DT


class TreeTestHelper:
    """Public test fixture for structural verification.

    This class provides a stable testing interface for checking the tree
    invariants (parent/child agreement, distinct children, registry
    agreement) without reaching into node internals. It's designed for
    use in test suites of projects that build trees with dtreelib.

    Example:
        helper = TreeTestHelper(tree)
        assert helper.check_invariants() == []
        assert helper.get_summary()['registered'] == tree.tree_len()
    """

    def __init__(self, tree: DT):
        """Initialize with any handle of the tree to inspect.

        Args:
            tree: Handle to a node of the tree; checks start at its root
        """
        self._root = tree.root()

    def _nodes(self):
        return list(self._root._node.walk())

    def check_invariants(self) -> List[str]:
        """Check the structural invariants of the whole tree.

        Returns:
            List of problems found (empty if the tree is consistent)
        """
        problems = []
        nodes = self._nodes()

        for node in nodes:
            seen = set()
            for child in node.children:
                if child is node:
                    problems.append(f"{node!r} lists itself as a child")
                if id(child) in seen:
                    problems.append(f"{node!r} lists {child!r} twice")
                seen.add(id(child))
                if child.parent is not node:
                    problems.append(f"{child!r} does not point back to {node!r}")

            if node is not self._root._node:
                parent = node.parent
                if parent is None or node not in parent.children:
                    problems.append(f"{node!r} is not listed by its parent")

        registry = self._root._node.registry
        if registry is not None:
            for node in nodes:
                if node.registry is not registry:
                    problems.append(f"{node!r} does not share the tree registry")
                if registry.lookup(node.id) is not node:
                    problems.append(f"id {node.id!r} does not resolve to {node!r}")
            if registry.size() != len(nodes):
                problems.append(
                    f"registry holds {registry.size()} ids for {len(nodes)} nodes"
                )

        return problems

    def get_summary(self) -> Dict[str, Any]:
        """Returns high-level tree state for testing.

        Returns:
            Dictionary containing:
            - total_nodes: Nodes reachable from the root
            - registered: Live ids in the registry (0 when not indexed)
            - borrowed: Nodes currently holding a read or write borrow
            - indexed: Whether the tree has a registry
        """
        nodes = self._nodes()
        registry = self._root._node.registry
        return {
            'total_nodes': len(nodes),
            'registered': registry.size() if registry is not None else 0,
            'borrowed': sum(1 for node in nodes if node.borrow.is_borrowed),
            'indexed': registry is not None,
        }
