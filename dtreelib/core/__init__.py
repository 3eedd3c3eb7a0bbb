"""Core components of dtreelib.

This package contains the node storage, the DT handle, the id registry,
the borrow discipline and the traversal cursor.
"""

from .errors import (
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
from .operators import Operator, create_operator
from .borrow import BorrowState, WriteGuard
from .registry import Registry
from .handle import DT
from .traverse import Traverse

__all__ = [
    "DT",
    "Traverse",
    "Operator",
    "create_operator",
    "Registry",
    "BorrowState",
    "WriteGuard",
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
]
