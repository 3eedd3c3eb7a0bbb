"""DT - the public handle to a decision tree node.

A DT is a cheap, shareable reference to one node. Cloning a handle shares
the node rather than copying it, and two handles compare equal only when
they refer to the same node. All tree operations (construction, append,
payload access and navigation) are methods on the handle.

Example:
    >>> tree = DT.init("start").add("low", 1).add("high", 10)
    >>> tree.child_len()
    2
    >>> tree.last().data
    'high'
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterable, Iterator, List, Optional, Union

from ..config import TreeConfig, DEFAULT_CONFIG
from .borrow import WriteGuard
from .errors import (
    AlreadyAttachedError,
    ConfigurationError,
    CycleError,
    DuplicateIdError,
    IndexingError,
    MissingIdError,
    OperatorBindingError,
    SelfAppendError,
)
from .node import _Node
from .operators import Operator, create_operator
from .registry import Registry

logger = logging.getLogger(__name__)

OperatorLike = Union[Operator, str]


class DT:
    """Shared handle to one node of a decision tree.

    Trees are built top-down: create a root with ``DT.init`` (or a
    detached node with ``DT.new``), then ``append``/``add`` children.
    Every mutating call returns the handle it was called on so calls
    chain; ``latest_child()`` gives the node appended last.
    """

    __slots__ = ("_node",)

    def __init__(self, node: _Node) -> None:
        self._node = node

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def new(cls,
            data: Any,
            decision: Any,
            op: Optional[OperatorLike] = None,
            id: Optional[str] = None) -> 'DT':
        """Create a detached node with no parent and no children.

        The node is checked against a tree's configuration when it is
        appended, not here.

        Args:
            data: Payload carried by the node
            decision: Value compared against during traversal
            op: Per-edge operator (only for PER_EDGE trees)
            id: Unique id (only for indexed trees)
        """
        if op is not None:
            op = create_operator(op)
        return cls(_Node(data, decision, op, id))

    @classmethod
    def init(cls, root_data: Any = None, config: Optional[TreeConfig] = None) -> 'DT':
        """Create the root of a new tree.

        For indexed configurations the root is a sentinel registered under
        ``config.root_id`` in a fresh Registry.

        Args:
            root_data: Optional payload for the root
            config: Tree configuration (defaults to TreeConfig())

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        config = config or DEFAULT_CONFIG
        errors = config.validate()
        if errors:
            raise ConfigurationError(f"Invalid configuration: {'; '.join(errors)}")

        if config.indexed:
            node = _Node(root_data, None, None, config.root_id, config)
            node.registry = Registry()
            node.registry.insert(config.root_id, node)
        else:
            node = _Node(root_data, None, None, None, config)

        logger.debug("Created tree root (indexed=%s, binding=%s)",
                     config.indexed, config.operator_binding.value)
        return cls(node)

    @classmethod
    def create_root(cls, config: Optional[TreeConfig] = None) -> 'DT':
        """Create the sentinel root of an indexed tree.

        Raises:
            ConfigurationError: If ``config`` is not indexed
        """
        config = config or TreeConfig.indexed_tree()
        if not config.indexed:
            raise ConfigurationError("create_root requires an indexed configuration")
        return cls.init(None, config)

    def clone(self) -> 'DT':
        """Return another handle to the same node."""
        return DT(self._node)

    __copy__ = clone

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def append(self, child: 'DT') -> 'DT':
        """Link a detached node (and its subtree) under this node.

        Nothing is linked or registered when a check fails.

        Args:
            child: Handle to a node that has no parent

        Returns:
            self, so calls can be chained

        Raises:
            SelfAppendError: If child is this node
            AlreadyAttachedError: If child already has a parent
            CycleError: If child is an ancestor of this node
            MissingIdError: If the tree is indexed and a node has no id
            IndexingError: If the tree is not indexed and a node has an id
            DuplicateIdError: If an id is already in use in this tree
            OperatorBindingError: If a node's operator does not fit the
                tree's operator binding
            BorrowError: If either node is currently borrowed
        """
        if not isinstance(child, DT):
            raise TypeError(f"Can only append DT handles, got {type(child).__name__}")

        parent, node = self._node, child._node
        if parent is node:
            raise SelfAppendError("Not legal to append to itself")
        if node.parent is not None:
            raise AlreadyAttachedError(f"{child!r} already has a parent")
        ancestor = parent.parent
        while ancestor is not None:
            if ancestor is node:
                raise CycleError(f"{child!r} is an ancestor of {self!r}")
            ancestor = ancestor.parent

        with parent.borrow.exclusive("parent node"), node.borrow.exclusive("child node"):
            subtree = list(node.walk())
            self._check_subtree(subtree)

            if parent.registry is not None:
                for member in subtree:
                    parent.registry.insert(member.id, member)
            for member in subtree:
                member.registry = parent.registry
                member.config = parent.config

            node.parent = parent
            parent.children.append(node)
            parent.latest_child = node

        logger.debug("Appended %r under %r (%d node(s))", node, parent, len(subtree))
        return self

    def add(self,
            data: Any,
            decision: Any,
            op: Optional[OperatorLike] = None,
            id: Optional[str] = None) -> 'DT':
        """Create a new child and append it; returns self."""
        return self.append(DT.new(data, decision, op=op, id=id))

    def extend(self, children: Iterable['DT']) -> 'DT':
        """Append each child in order; returns self."""
        for child in children:
            self.append(child)
        return self

    def _check_subtree(self, subtree: List[_Node]) -> None:
        """Validate every node of an incoming subtree against this tree."""
        parent = self._node
        config = parent.config
        if config is None:
            # Detached parent: checks are deferred until the tree is bound
            return

        if config.indexed:
            seen = set()
            for member in subtree:
                if member.id is None:
                    raise MissingIdError(f"{member!r} needs an id to join an indexed tree")
                if member.id in seen or parent.registry.contains(member.id):
                    raise DuplicateIdError(f"Id {member.id!r} is already registered in this tree")
                seen.add(member.id)
        else:
            for member in subtree:
                if member.id is not None:
                    raise IndexingError(
                        f"{member!r} has an id but the tree is not indexed"
                    )

        for member in subtree:
            if config.per_edge_operators and member.op is None:
                raise OperatorBindingError(
                    f"{member!r} needs an operator: the tree binds operators per edge"
                )
            if not config.per_edge_operators and member.op is not None:
                raise OperatorBindingError(
                    f"{member!r} has an operator but the tree takes operators from the caller"
                )

    # ------------------------------------------------------------------
    # Payload
    # ------------------------------------------------------------------

    @contextmanager
    def read(self) -> Iterator[Any]:
        """Borrow the payload for reading.

        Any number of reads may overlap; a read fails while the node is
        being written.

        Raises:
            BorrowError: If the node is mutably borrowed
        """
        node = self._node
        with node.borrow.shared(repr(self)):
            yield node.data

    @contextmanager
    def write(self) -> Iterator[WriteGuard]:
        """Borrow the payload exclusively for writing.

        Yields a WriteGuard whose ``value`` can be read and assigned.

        Raises:
            BorrowError: If the node is borrowed in any mode
        """
        node = self._node
        with node.borrow.exclusive(repr(self)):
            guard = WriteGuard(node)
            try:
                yield guard
            finally:
                guard.close()

    @property
    def data(self) -> Any:
        """The payload, read under a short shared borrow."""
        with self.read() as data:
            return data

    @property
    def decision(self) -> Any:
        return self._node.decision

    @property
    def op(self) -> Optional[Operator]:
        return self._node.op

    @property
    def id(self) -> Optional[str]:
        return self._node.id

    @property
    def config(self) -> TreeConfig:
        """Configuration of the tree this node belongs to."""
        return self._node.config or DEFAULT_CONFIG

    @property
    def is_indexed(self) -> bool:
        return self._node.registry is not None

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def parent(self) -> Optional['DT']:
        return _wrap(self._node.parent)

    def root(self) -> 'DT':
        """Return the top of the tree.

        Indexed trees resolve the root sentinel by id; otherwise the
        parent links are walked.
        """
        node = self._node
        if node.registry is not None:
            found = node.registry.lookup(node.config.root_id)
            if found is not None:
                return DT(found)
        while node.parent is not None:
            node = node.parent
        return DT(node)

    def back(self, steps: int = 1) -> Optional['DT']:
        """Walk ``steps`` parent links up.

        Returns:
            The ancestor, or None if the root is passed first
        """
        if steps < 0:
            raise ValueError("steps cannot be negative")
        node = self._node
        for _ in range(steps):
            node = node.parent
            if node is None:
                return None
        return DT(node)

    def forward_first(self, steps: int = 1) -> Optional['DT']:
        """Walk ``steps`` edges down, always taking the first child."""
        return self._forward(steps, 0)

    def forward_last(self, steps: int = 1) -> Optional['DT']:
        """Walk ``steps`` edges down, always taking the last child."""
        return self._forward(steps, -1)

    def _forward(self, steps: int, index: int) -> Optional['DT']:
        if steps < 0:
            raise ValueError("steps cannot be negative")
        node = self._node
        for _ in range(steps):
            if not node.children:
                return None
            node = node.children[index]
        return DT(node)

    def first(self) -> Optional['DT']:
        return self.child(0)

    def last(self) -> Optional['DT']:
        children = self._node.children
        return DT(children[-1]) if children else None

    def child(self, index: int) -> Optional['DT']:
        """Child at ``index`` or None; negative indices are out of range."""
        children = self._node.children
        if 0 <= index < len(children):
            return DT(children[index])
        return None

    def children(self) -> List['DT']:
        return [DT(node) for node in self._node.children]

    def latest_child(self) -> Optional['DT']:
        """The child appended most recently, if any."""
        return _wrap(self._node.latest_child)

    def child_len(self) -> int:
        """Number of direct children."""
        return len(self._node.children)

    def tree_len(self) -> int:
        """Number of nodes in the whole tree.

        Indexed trees answer from the registry; other trees are counted
        from the root.
        """
        if self._node.registry is not None:
            return self._node.registry.size()
        return sum(1 for _ in self.root()._node.walk())

    def find(self, id: str) -> Optional['DT']:
        """Look up a node of this tree by id.

        Raises:
            IndexingError: If the tree is not indexed
        """
        return _wrap(self._registry().lookup(id))

    def contains(self, id: str) -> bool:
        """Check whether ``id`` belongs to a live node of this tree.

        Raises:
            IndexingError: If the tree is not indexed
        """
        return self._registry().contains(id)

    def _registry(self) -> Registry:
        registry = self._node.registry
        if registry is None:
            raise IndexingError("Id lookup requires an indexed tree")
        return registry

    def has_children(self) -> bool:
        return bool(self._node.children)

    def has_parent(self) -> bool:
        return self._node.parent is not None

    def is_root(self) -> bool:
        return self._node.parent is None

    def depth(self) -> int:
        """Number of parent links between this node and the root."""
        depth = 0
        node = self._node.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        """Handles are equal when they refer to the same node."""
        if not isinstance(other, DT):
            return NotImplemented
        return self._node is other._node

    def __hash__(self) -> int:
        return hash(id(self._node))

    def __str__(self) -> str:
        return str(self._node.data)

    def __repr__(self) -> str:
        node = self._node
        if node.id is not None:
            return f"DT(id={node.id!r}, data={node.data!r}, decision={node.decision!r})"
        return f"DT(data={node.data!r}, decision={node.decision!r})"


def _wrap(node: Optional[_Node]) -> Optional[DT]:
    return DT(node) if node is not None else None
