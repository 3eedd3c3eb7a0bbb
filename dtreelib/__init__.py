"""dtreelib - Generic Decision Tree Library.

dtreelib provides a mutable, multi-child decision tree: nodes carry a
payload and a decision value, link both downward and upward, can be
looked up by id, and are walked by comparing input values against the
children's decisions.

Quick start:
━━━━━━━━━━━━━━━━━━━━━━━━━━
    from dtreelib import DT, Traverse, Operator

    tree = DT.init("start").add("small", 10).add("large", 100)
    cursor = Traverse.start(tree)
    cursor.advance(50, Operator.LESS)   # -> handle to "large"
━━━━━━━━━━━━━━━━━━━━━━━━━━
"""

import logging

__version__ = "0.1.0"

from .config import TreeConfig, OperatorBinding
from .core import (
    DT,
    Traverse,
    Operator,
    create_operator,
    Registry,
    WriteGuard,
    ContractViolation,
    ConfigurationError,
    SelfAppendError,
    AlreadyAttachedError,
    CycleError,
    DuplicateIdError,
    MissingIdError,
    IndexingError,
    OperatorBindingError,
    BorrowError,
    IncomparableDecisionError,
)
from .api import (
    build,
    decide,
    iter_nodes,
    count_nodes,
    find_nodes,
    get_leaf_nodes,
    get_tree_stats,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    # Core
    "DT",
    "Traverse",
    "Operator",
    "create_operator",
    "Registry",
    "WriteGuard",
    # Config
    "TreeConfig",
    "OperatorBinding",
    # Errors
    "ContractViolation",
    "ConfigurationError",
    "SelfAppendError",
    "AlreadyAttachedError",
    "CycleError",
    "DuplicateIdError",
    "MissingIdError",
    "IndexingError",
    "OperatorBindingError",
    "BorrowError",
    "IncomparableDecisionError",
    # API
    "build",
    "decide",
    "iter_nodes",
    "count_nodes",
    "find_nodes",
    "get_leaf_nodes",
    "get_tree_stats",
]
