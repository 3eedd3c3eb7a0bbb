"""Exception hierarchy for dtreelib.

Every exception here signals a programming error in the calling code
(a broken contract), never a transient condition. Expected absence
(no child at an index, no parent at the root, unknown id, no matching
child during traversal) is reported by returning None instead.
"""


class ContractViolation(Exception):
    """Base class for all contract violations raised by dtreelib."""
    pass


class ConfigurationError(ContractViolation):
    """Raised when a TreeConfig fails validation."""
    pass


class SelfAppendError(ContractViolation):
    """Raised when a node is appended as a child of itself."""
    pass


class AlreadyAttachedError(ContractViolation):
    """Raised when a node that already has a parent is appended again."""
    pass


class CycleError(ContractViolation):
    """Raised when an ancestor is appended beneath one of its descendants."""
    pass


class DuplicateIdError(ContractViolation):
    """Raised when an id is inserted twice into the same registry."""
    pass


class MissingIdError(ContractViolation):
    """Raised when a node without an id is appended to an indexed tree."""
    pass


class IndexingError(ContractViolation):
    """Raised when id-based operations are used on a non-indexed tree."""
    pass


class OperatorBindingError(ContractViolation):
    """Raised when caller-supplied and per-edge operators are mixed."""
    pass


class BorrowError(ContractViolation):
    """Raised when a read or write conflicts with an outstanding borrow."""
    pass


class IncomparableDecisionError(ContractViolation):
    """Raised when two decision values have no defined ordering."""
    pass
