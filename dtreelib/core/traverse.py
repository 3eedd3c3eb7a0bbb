"""Decision traversal for dtreelib.

A Traverse is a cursor into a tree. Each call to ``advance`` compares an
input value against the decision values of the current node's children
and moves one edge down to the selected child. When no child qualifies
the cursor stays where it is and ``advance`` returns None.

Where the operator comes from depends on the tree's OperatorBinding:
CALLER trees take it as an argument to every ``advance`` call, PER_EDGE
trees use the operator stored on each child.
"""

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional

from ..config import TreeConfig, DEFAULT_CONFIG
from .errors import OperatorBindingError
from .handle import DT, OperatorLike
from .node import _Node
from .operators import (
    Operator,
    check_comparable,
    compare,
    create_operator,
    max_index,
    median_order,
    min_index,
)

logger = logging.getLogger(__name__)


class Traverse:
    """Cursor that walks a decision tree one edge at a time.

    Example:
        cursor = Traverse.start(tree)
        if cursor.advance(5, Operator.LESS) is not None:
            print(cursor.current().data)
    """

    def __init__(self, origin: DT) -> None:
        """Initialize the cursor at ``origin``.

        Args:
            origin: Handle the traversal starts from (any node, not only the root)
        """
        if not isinstance(origin, DT):
            raise TypeError(f"Traverse needs a DT handle, got {type(origin).__name__}")
        self._origin = origin
        self._current = origin
        self._path: List[DT] = [origin]

    @classmethod
    def start(cls, handle: DT) -> 'Traverse':
        """Create a cursor positioned at ``handle``."""
        return cls(handle)

    def current(self) -> DT:
        return self._current

    def origin(self) -> DT:
        return self._origin

    def path(self) -> List[DT]:
        """Handles visited since the start, origin first."""
        return list(self._path)

    def reset(self) -> None:
        """Move the cursor back to where it started."""
        self._current = self._origin
        self._path = [self._origin]

    def advance(self, value: Any, operator: Optional[OperatorLike] = None) -> Optional[DT]:
        """Move to the child selected by ``value``.

        Args:
            value: Input compared against the children's decisions
            operator: Operator to apply to every child (CALLER trees only)

        Returns:
            Handle to the new position, or None if no child qualifies
            (the cursor does not move)

        Raises:
            OperatorBindingError: If ``operator`` is given on a PER_EDGE
                tree, or missing on a CALLER tree
            IncomparableDecisionError: If decision values cannot be ordered
        """
        node = self._current._node
        config = node.config or DEFAULT_CONFIG

        if config.per_edge_operators:
            if operator is not None:
                raise OperatorBindingError("This tree binds operators per edge; advance takes no operator")
            selected = _select_per_edge(node, value)
        else:
            if operator is None:
                raise OperatorBindingError("This tree takes operators from the caller; pass one to advance")
            selected = _select(node, value, create_operator(operator), config)

        if selected is None:
            logger.debug("No child of %r matches %r", node, value)
            return None

        handle = DT(selected)
        self._current = handle
        self._path.append(handle)
        logger.debug("Advanced to %r with %r", selected, value)
        return handle

    def run(self, values: Iterable[Any], operator: Optional[OperatorLike] = None) -> Iterator[DT]:
        """Advance once per value, yielding each new position.

        Stops at the first value that selects no child.
        """
        for value in values:
            handle = self.advance(value, operator)
            if handle is None:
                return
            yield handle

    def __repr__(self) -> str:
        return f"Traverse(current={self._current!r}, steps={len(self._path) - 1})"


def _decided(children: List[_Node]) -> List[_Node]:
    return [child for child in children if child.decision is not None]


def _select(node: _Node, value: Any, op: Operator, config: TreeConfig) -> Optional[_Node]:
    """Pick the child selected by ``value <op> decision`` in CALLER mode."""
    children = node.children
    if not children:
        return None

    if not op.is_aggregate:
        # First match wins, in insertion order
        for child in children:
            if child.decision is None:
                continue
            if op.test(value, child.decision):
                return child
        return None

    decided = _decided(children)
    if not decided:
        return None
    decisions = [child.decision for child in decided]
    check_comparable(value)

    if op is Operator.MIN:
        target = decided[min_index(decisions)]
        return target if compare(value, target.decision) < 0 else None

    if op is Operator.MAX:
        target = decided[max_index(decisions)]
        return target if compare(value, target.decision) > 0 else None

    ordered = [decided[i] for i in median_order(decisions)]
    if config.reorder_on_median:
        _reorder(node, ordered)
    target = ordered[len(ordered) // 2]
    return target if compare(value, target.decision) == 0 else None


def _reorder(node: _Node, ordered: List[_Node]) -> None:
    """Store children sorted by decision; undecided children go last."""
    undecided = [child for child in node.children if child.decision is None]
    with node.borrow.exclusive("node being reordered"):
        node.children[:] = ordered + undecided
    logger.debug("Sorted %d children of %r by decision", len(ordered), node)


def _select_per_edge(node: _Node, value: Any) -> Optional[_Node]:
    """Pick the first child whose own operator accepts ``value``.

    Aggregate operators are judged against the decided siblings, which
    are never reordered here so the scan order stays stable.
    """
    children = node.children
    if not children:
        return None

    aggregates: Dict[Operator, _Node] = {}

    def aggregate(op: Operator) -> _Node:
        if op not in aggregates:
            decided = _decided(children)
            decisions = [child.decision for child in decided]
            if op is Operator.MIN:
                aggregates[op] = decided[min_index(decisions)]
            elif op is Operator.MAX:
                aggregates[op] = decided[max_index(decisions)]
            else:
                order = median_order(decisions)
                aggregates[op] = decided[order[len(order) // 2]]
        return aggregates[op]

    for child in children:
        if child.decision is None:
            continue
        op = child.op
        if op is None:
            raise OperatorBindingError(f"{child!r} has no operator in a per-edge tree")

        if not op.is_aggregate:
            if op.test(value, child.decision):
                return child
            continue

        if aggregate(op) is not child:
            continue
        check_comparable(value)
        order = compare(value, child.decision)
        if (op is Operator.MIN and order < 0) or \
                (op is Operator.MAX and order > 0) or \
                (op is Operator.MEDIAN and order == 0):
            return child

    return None
