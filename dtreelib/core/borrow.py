"""Run-time borrow discipline for node payloads.

Each node owns a BorrowState. Any number of readers may hold a node at
once, or exactly one writer, never both. A conflicting request raises
BorrowError immediately instead of waiting: the library is single
threaded, so a conflict can only come from the caller's own code.
"""

from contextlib import contextmanager
from typing import Any, Iterator

from .errors import BorrowError


class BorrowState:
    """Reader count plus writer flag for one node."""

    __slots__ = ("readers", "writing")

    def __init__(self) -> None:
        self.readers = 0
        self.writing = False

    @property
    def is_borrowed(self) -> bool:
        return self.writing or self.readers > 0

    def acquire_read(self, what: str = "node") -> None:
        if self.writing:
            raise BorrowError(f"{what} is already mutably borrowed")
        self.readers += 1

    def release_read(self) -> None:
        self.readers -= 1

    def acquire_write(self, what: str = "node") -> None:
        if self.writing:
            raise BorrowError(f"{what} is already mutably borrowed")
        if self.readers:
            raise BorrowError(f"{what} is already borrowed by {self.readers} reader(s)")
        self.writing = True

    def release_write(self) -> None:
        self.writing = False

    @contextmanager
    def shared(self, what: str = "node") -> Iterator[None]:
        """Hold a shared borrow for the duration of the block."""
        self.acquire_read(what)
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def exclusive(self, what: str = "node") -> Iterator[None]:
        """Hold the exclusive borrow for the duration of the block."""
        self.acquire_write(what)
        try:
            yield
        finally:
            self.release_write()

    def __repr__(self) -> str:
        return f"BorrowState(readers={self.readers}, writing={self.writing})"


class WriteGuard:
    """Mutable view of a node payload handed out by ``DT.write()``.

    Assign to ``value`` to replace the payload; mutable payloads can also
    be changed in place through ``value``. The guard is only valid inside
    its ``with`` block.

    Example:
        with node.write() as guard:
            guard.value = guard.value + 1
    """

    __slots__ = ("_node", "_active")

    def __init__(self, node) -> None:
        self._node = node
        self._active = True

    def _check(self) -> None:
        if not self._active:
            raise BorrowError("write guard used outside of its scope")

    @property
    def value(self) -> Any:
        self._check()
        return self._node.data

    @value.setter
    def value(self, new_value: Any) -> None:
        self._check()
        self._node.data = new_value

    def get(self) -> Any:
        return self.value

    def set(self, new_value: Any) -> None:
        self.value = new_value

    def close(self) -> None:
        self._active = False
