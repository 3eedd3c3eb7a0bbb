"""Comparison operators for decision traversal.

An operator decides whether an input value selects a child, based on the
child's decision value. Scan operators (EQUAL, GREATER, ...) test one
child at a time; aggregate operators (MIN, MAX, MEDIAN) need the whole
sibling set.
"""

import operator as _op
from enum import Enum
from functools import cmp_to_key
from typing import Any, Callable, Dict, List

from .errors import IncomparableDecisionError


class Operator(Enum):
    """Rule for selecting the next child during traversal."""
    EQUAL = "=="
    GREATER = ">"
    GREATER_EQUAL = ">="
    LESS = "<"
    LESS_EQUAL = "<="
    MIN = "min"
    MAX = "max"
    MEDIAN = "median"

    @property
    def is_aggregate(self) -> bool:
        """True for operators that compare against the sibling set."""
        return self in _AGGREGATES

    def test(self, value: Any, decision: Any) -> bool:
        """Check ``value <op> decision`` for a scan operator.

        Args:
            value: Input value driving the traversal
            decision: Decision value stored on the candidate child

        Returns:
            True if the child is selected

        Raises:
            ValueError: If called on an aggregate operator
            IncomparableDecisionError: If the two values cannot be compared
        """
        if self.is_aggregate:
            raise ValueError(f"{self.name} is an aggregate operator and needs the sibling set")
        try:
            return bool(_SCAN_FUNCS[self](value, decision))
        except TypeError as e:
            raise IncomparableDecisionError(
                f"Cannot compare {value!r} {self.value} {decision!r}"
            ) from e


_SCAN_FUNCS: Dict[Operator, Callable[[Any, Any], Any]] = {
    Operator.EQUAL: _op.eq,
    Operator.GREATER: _op.gt,
    Operator.GREATER_EQUAL: _op.ge,
    Operator.LESS: _op.lt,
    Operator.LESS_EQUAL: _op.le,
}

_AGGREGATES = frozenset({Operator.MIN, Operator.MAX, Operator.MEDIAN})


def compare(a: Any, b: Any) -> int:
    """Three-way comparison that refuses to guess.

    Returns:
        -1, 0 or 1

    Raises:
        IncomparableDecisionError: If neither ``a < b``, ``a == b`` nor
            ``a > b`` holds (NaN and friends), or comparison is unsupported
    """
    try:
        if a < b:
            return -1
        if a > b:
            return 1
        if a == b:
            return 0
    except TypeError as e:
        raise IncomparableDecisionError(f"Cannot compare {a!r} and {b!r}") from e
    raise IncomparableDecisionError(f"{a!r} and {b!r} are unordered")


def check_comparable(value: Any) -> None:
    """Reject values that are not equal to themselves (e.g. NaN)."""
    try:
        reflexive = value == value
    except TypeError as e:
        raise IncomparableDecisionError(f"{value!r} does not support comparison") from e
    if not reflexive:
        raise IncomparableDecisionError(f"{value!r} is not comparable with itself")


def min_index(decisions: List[Any]) -> int:
    """Index of the smallest decision, the first one on ties."""
    best = 0
    check_comparable(decisions[0])
    for i in range(1, len(decisions)):
        check_comparable(decisions[i])
        if compare(decisions[i], decisions[best]) < 0:
            best = i
    return best


def max_index(decisions: List[Any]) -> int:
    """Index of the largest decision, the first one on ties."""
    best = 0
    check_comparable(decisions[0])
    for i in range(1, len(decisions)):
        check_comparable(decisions[i])
        if compare(decisions[i], decisions[best]) > 0:
            best = i
    return best


def median_order(decisions: List[Any]) -> List[int]:
    """Stable ascending order of ``decisions`` as a list of indices."""
    for decision in decisions:
        check_comparable(decision)
    return sorted(range(len(decisions)), key=cmp_to_key(lambda i, j: compare(decisions[i], decisions[j])))


def create_operator(name) -> Operator:
    """Create an Operator from its name or symbol.

    Args:
        name: Operator instance, enum name (``"less_equal"``) or
            symbol (``"<="``), case-insensitive

    Returns:
        Operator

    Raises:
        ValueError: If the name is not recognized
    """
    if isinstance(name, Operator):
        return name

    operators = {}
    for member in Operator:
        operators[member.name.lower()] = member
        operators[member.value] = member
    operators.update({
        'eq': Operator.EQUAL,
        '=': Operator.EQUAL,
        'gt': Operator.GREATER,
        'ge': Operator.GREATER_EQUAL,
        'lt': Operator.LESS,
        'le': Operator.LESS_EQUAL,
    })

    name_lower = str(name).lower()
    if name_lower not in operators:
        raise ValueError(
            f"Unknown operator: {name}. "
            f"Choose from: {', '.join(operators.keys())}"
        )

    return operators[name_lower]
