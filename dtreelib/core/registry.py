"""Id registry for indexed decision trees.

The Registry maps ids to nodes without owning them. One instance is
shared by every node of an indexed tree, so any handle can resolve any
id in O(1) without walking from the root. Entries disappear on their
own once the node they point to has been garbage collected.
"""

import logging
import weakref
from typing import Iterator, List

from .errors import DuplicateIdError

logger = logging.getLogger(__name__)


class Registry:
    """Weak id -> node map shared by one tree."""

    def __init__(self) -> None:
        self._nodes: "weakref.WeakValueDictionary[str, object]" = weakref.WeakValueDictionary()

    def insert(self, node_id: str, node) -> None:
        """Register a node under an id.

        Args:
            node_id: Unique id within this tree
            node: Node to register (kept as a weak reference)

        Raises:
            DuplicateIdError: If a live node is already registered under node_id
        """
        existing = self._nodes.get(node_id)
        if existing is not None:
            raise DuplicateIdError(f"Id {node_id!r} is already registered in this tree")
        self._nodes[node_id] = node
        logger.debug("Registered node id %r (%d live ids)", node_id, len(self._nodes))

    def lookup(self, node_id: str):
        """Resolve an id.

        Returns:
            The node, or None if the id was never inserted or its node is gone
        """
        return self._nodes.get(node_id)

    def contains(self, node_id: str) -> bool:
        return self.lookup(node_id) is not None

    def size(self) -> int:
        """Number of ids whose node is still alive."""
        return len(self._nodes)

    def ids(self) -> List[str]:
        return list(self._nodes.keys())

    def __contains__(self, node_id: object) -> bool:
        return isinstance(node_id, str) and self.contains(node_id)

    def __len__(self) -> int:
        return self.size()

    def __iter__(self) -> Iterator[str]:
        return iter(self.ids())

    def __repr__(self) -> str:
        return f"Registry(size={self.size()})"
