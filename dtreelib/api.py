"""High-level API for dtreelib.

This module provides simple, functional interfaces for common decision
tree operations. These functions wrap the DT and Traverse objects for
ease of use in simple cases.
"""

from collections import deque
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional

from .core.handle import DT, OperatorLike
from .core.traverse import Traverse


def build(tree: DT, *children: DT) -> DT:
    """Append every child to ``tree`` in order.

    Example:
        >>> root = build(DT.init("start"), DT.new("a", 1), DT.new("b", 2))
        >>> root.child_len()
        2

    Returns:
        The tree handle passed in
    """
    return tree.extend(children)


def decide(tree: DT,
           values: Iterable[Any],
           operator: Optional[OperatorLike] = None) -> DT:
    """Walk the tree driven by a sequence of input values.

    Advances once per value and stops at the first value that selects no
    child.

    Args:
        tree: Node to start from
        values: Input values, one per edge
        operator: Operator for CALLER trees (omit for PER_EDGE trees)

    Returns:
        The last node reached (``tree`` itself if nothing matched)
    """
    cursor = Traverse.start(tree)
    for _ in cursor.run(values, operator):
        pass
    return cursor.current()


def iter_nodes(tree: DT, strategy: str = "dfs_pre") -> Iterator[DT]:
    """Iterate over a node and all of its descendants.

    Args:
        tree: Starting node
        strategy: ``"dfs_pre"`` (parent before children) or ``"bfs"``
            (level by level)

    Yields:
        DT handles

    Raises:
        ValueError: If strategy name is not recognized
    """
    strategies = {
        'dfs_pre': _iter_depth_first,
        'depth_first_pre': _iter_depth_first,
        'bfs': _iter_breadth_first,
        'breadth_first': _iter_breadth_first,
    }

    strategy_lower = strategy.lower()
    if strategy_lower not in strategies:
        raise ValueError(
            f"Unknown traversal strategy: {strategy}. "
            f"Choose from: {', '.join(strategies.keys())}"
        )

    return strategies[strategy_lower](tree)


def _iter_depth_first(tree: DT) -> Iterator[DT]:
    stack = [tree]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children()))


def _iter_breadth_first(tree: DT) -> Iterator[DT]:
    queue = deque([tree])
    while queue:
        node = queue.popleft()
        yield node
        queue.extend(node.children())


def count_nodes(tree: DT) -> int:
    """Count a node and all of its descendants."""
    return sum(1 for _ in iter_nodes(tree))


def find_nodes(tree: DT, predicate: Callable[[DT], bool]) -> List[DT]:
    """Find all nodes in the subtree matching ``predicate``.

    Example:
        heavy = find_nodes(root, lambda n: n.decision is not None and n.decision > 10)
    """
    return [node for node in iter_nodes(tree) if predicate(node)]


def get_leaf_nodes(tree: DT) -> List[DT]:
    """Get all nodes without children."""
    return find_nodes(tree, lambda node: not node.has_children())


def get_tree_stats(tree: DT) -> Dict[str, Any]:
    """Get statistics about a subtree.

    Returns:
        Dictionary with:
        - total_nodes: Nodes in the subtree, ``tree`` included
        - leaf_nodes: Nodes without children
        - max_depth: Longest path below ``tree`` in edges
        - max_children: Largest number of children of any node
        - undecided_nodes: Nodes without a decision value
    """
    stats = {
        'total_nodes': 0,
        'leaf_nodes': 0,
        'max_depth': 0,
        'max_children': 0,
        'undecided_nodes': 0,
    }

    stack = [(tree, 0)]
    while stack:
        node, depth = stack.pop()
        stats['total_nodes'] += 1
        stats['max_depth'] = max(stats['max_depth'], depth)
        child_len = node.child_len()
        stats['max_children'] = max(stats['max_children'], child_len)
        if child_len == 0:
            stats['leaf_nodes'] += 1
        if node.decision is None:
            stats['undecided_nodes'] += 1
        for child in node.children():
            stack.append((child, depth + 1))

    return stats
