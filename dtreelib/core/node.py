"""Node storage for dtreelib.

_Node is the storage unit behind every DT handle. It is intentionally a
plain record: all behaviour lives on the handle. Children are owned
through the ``children`` list; the parent and latest-child links are weak
references so the object graph never contains an ownership cycle.
"""

import weakref
from typing import Any, List, Optional

from ..config import TreeConfig
from .borrow import BorrowState
from .operators import Operator
from .registry import Registry


class _Node:
    """One element of a decision tree."""

    __slots__ = [
        "id",
        "data",
        "decision",
        "op",
        "children",
        "_parent",
        "_latest_child",
        "registry",
        "config",
        "borrow",
        "__weakref__",
    ]

    def __init__(self,
                 data: Any = None,
                 decision: Any = None,
                 op: Optional[Operator] = None,
                 node_id: Optional[str] = None,
                 config: Optional[TreeConfig] = None) -> None:
        self.id = node_id
        self.data = data
        self.decision = decision
        self.op = op
        self.children: List["_Node"] = []
        self._parent: Optional[weakref.ref] = None
        self._latest_child: Optional[weakref.ref] = None
        self.registry: Optional[Registry] = None
        # None until the node joins a tree created by DT.init
        self.config = config
        self.borrow = BorrowState()

    @property
    def parent(self) -> Optional["_Node"]:
        """Resolve the parent link, None at the root or once the parent is gone."""
        return self._parent() if self._parent is not None else None

    @parent.setter
    def parent(self, node: Optional["_Node"]) -> None:
        self._parent = weakref.ref(node) if node is not None else None

    @property
    def latest_child(self) -> Optional["_Node"]:
        return self._latest_child() if self._latest_child is not None else None

    @latest_child.setter
    def latest_child(self, node: Optional["_Node"]) -> None:
        self._latest_child = weakref.ref(node) if node is not None else None

    def walk(self):
        """Yield this node and all descendants, pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def __repr__(self) -> str:
        return f"_Node(id={self.id!r}, data={self.data!r}, decision={self.decision!r})"
