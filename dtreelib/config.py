"""Configuration system for dtreelib.

This module defines how users specify the shape of a decision tree:
whether nodes are indexed by id, and where traversal operators come from.
One TreeConfig instance is shared by every node of a tree.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List


class OperatorBinding(Enum):
    """Where the comparison operator used by traversal comes from.

    A tree uses exactly one binding mode; mixing them is rejected.
    """
    CALLER = "caller"       # Operator passed to every Traverse.advance call
    PER_EDGE = "per_edge"   # Operator stored on each child at append time


@dataclass(frozen=True)
class TreeConfig:
    """Complete configuration for a decision tree.

    This is the primary way users choose between the tree variants.
    DT.init validates the configuration before creating the root.
    """

    # Id registry
    indexed: bool = False           # Nodes carry unique ids, lookup by id
    root_id: str = "root"           # Reserved id of the indexed root sentinel

    # Traversal
    operator_binding: OperatorBinding = OperatorBinding.CALLER
    reorder_on_median: bool = True  # MEDIAN sorts children in place

    # Convenience constructors for common configurations

    @classmethod
    def indexed_tree(cls, root_id: str = "root") -> 'TreeConfig':
        """Create config for an id-indexed tree.

        Args:
            root_id: Id reserved for the root sentinel

        Returns:
            TreeConfig with the registry enabled
        """
        return cls(indexed=True, root_id=root_id)

    @classmethod
    def per_edge(cls, indexed: bool = False) -> 'TreeConfig':
        """Create config where each child stores its own operator.

        Args:
            indexed: Whether nodes are also indexed by id

        Returns:
            TreeConfig using per-edge operator binding
        """
        return cls(indexed=indexed, operator_binding=OperatorBinding.PER_EDGE)

    @property
    def per_edge_operators(self) -> bool:
        return self.operator_binding is OperatorBinding.PER_EDGE

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.operator_binding, OperatorBinding):
            errors.append("operator_binding must be an OperatorBinding")

        if self.indexed:
            if not isinstance(self.root_id, str):
                errors.append("root_id must be a string")
            elif not self.root_id:
                errors.append("root_id cannot be empty")

        return errors


DEFAULT_CONFIG = TreeConfig()
