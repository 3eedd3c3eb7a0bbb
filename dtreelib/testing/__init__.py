"""Testing utilities for dtreelib consumers."""

from .fixtures import TreeTestHelper

__all__ = ['TreeTestHelper']
