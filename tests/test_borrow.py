"""Tests for the payload borrow discipline.

Many readers or one writer per node; conflicts raise BorrowError instead
of corrupting state.
"""

import pytest

from dtreelib import DT, BorrowError
from dtreelib.core.borrow import BorrowState


class TestBorrowState:
    def test_fresh_state(self):
        state = BorrowState()
        assert not state.is_borrowed

    def test_shared_scopes_nest(self):
        state = BorrowState()
        with state.shared():
            with state.shared():
                assert state.readers == 2
        assert state.readers == 0

    def test_exclusive_blocks_everything(self):
        state = BorrowState()
        with state.exclusive():
            assert state.is_borrowed
            with pytest.raises(BorrowError):
                state.acquire_read()
            with pytest.raises(BorrowError):
                state.acquire_write()
        assert not state.is_borrowed

    def test_release_on_error(self):
        state = BorrowState()
        with pytest.raises(RuntimeError):
            with state.exclusive():
                raise RuntimeError("boom")
        assert not state.is_borrowed


class TestReadWrite:
    def test_read_yields_payload(self):
        node = DT.new({"k": 1}, 0)
        with node.read() as data:
            assert data == {"k": 1}

    def test_reads_overlap(self):
        node = DT.new("shared", 0)
        alias = node.clone()

        with node.read() as first, alias.read() as second:
            assert first == second == "shared"
            assert node.data == "shared"

    def test_write_replaces_payload(self):
        node = DT.new(1, 0)

        with node.write() as guard:
            guard.value = guard.value + 41

        assert node.data == 42

    def test_write_in_place(self):
        node = DT.new([], 0)

        with node.write() as guard:
            guard.value.append("item")
            guard.set(guard.get() + ["more"])

        assert node.data == ["item", "more"]

    def test_write_while_reading_fails(self):
        node = DT.new("data", 0)

        with node.read():
            with pytest.raises(BorrowError):
                with node.write():
                    pass

        with node.write() as guard:
            guard.value = "ok"
        assert node.data == "ok"

    def test_read_while_writing_fails(self):
        node = DT.new("data", 0)

        with node.write():
            with pytest.raises(BorrowError):
                with node.read():
                    pass
            with pytest.raises(BorrowError):
                node.data

    def test_conflict_through_alias(self):
        """Borrows belong to the node, not to the handle."""
        node = DT.new("data", 0)
        alias = node.clone()

        with node.write():
            with pytest.raises(BorrowError):
                with alias.write():
                    pass

    def test_other_nodes_unaffected(self):
        a = DT.new("a", 0)
        b = DT.new("b", 1)

        with a.write():
            with b.write() as guard:
                guard.value = "B"
        assert b.data == "B"

    def test_guard_expires(self):
        node = DT.new("data", 0)

        with node.write() as guard:
            pass

        with pytest.raises(BorrowError):
            guard.value = "late"
        with pytest.raises(BorrowError):
            guard.value

    def test_append_while_parent_read_fails(self):
        root = DT.init("root")

        with root.read():
            with pytest.raises(BorrowError):
                root.add("child", 1)

        assert root.child_len() == 0
        root.add("child", 1)
        assert root.child_len() == 1

    def test_append_while_child_written_fails(self):
        root = DT.init("root")
        child = DT.new("child", 1)

        with child.write():
            with pytest.raises(BorrowError):
                root.append(child)

        assert not child.has_parent()
