"""
Tests for the reference-semantics stack (stack_ref.py)
"""

import pytest

from models import EmptyStackError
from stack_ref import Stack


class TestStack:

    def test_push_pop_scenario(self):
        s = Stack()
        assert s.push(10) is None
        s.push(20)

        assert s.pop() == 20
        assert s.length() == 1

    def test_pop_order(self):
        s = Stack()
        for v in range(5):
            s.push(v)
        assert [s.pop() for _ in range(5)] == [4, 3, 2, 1, 0]
        assert s.is_empty()

    def test_pop_empty_raises_without_mutation(self):
        s = Stack()
        with pytest.raises(EmptyStackError):
            s.pop()
        assert s.length() == 0
        assert s.to_list() == []

    def test_initial_items_are_copied(self):
        source = [1, 2, 3]
        s = Stack(source)
        s.push(4)

        assert source == [1, 2, 3]
        assert s.to_list() == [1, 2, 3, 4]
        assert s.peek() == 4

    def test_peek_empty_raises(self):
        with pytest.raises(EmptyStackError):
            Stack().peek()

    def test_size_and_len(self):
        s = Stack(["a", "b"])
        assert s.size() == 2
        assert len(s) == 2

    def test_clear(self):
        s = Stack([1, 2])
        s.clear()
        assert s.is_empty()

    def test_max_size_drops_oldest(self):
        s = Stack(max_size=3)
        for v in range(5):
            s.push(v)
        assert s.to_list() == [2, 3, 4]

    def test_max_size_applies_to_initial_items(self):
        s = Stack([1, 2, 3, 4], max_size=2)
        assert s.to_list() == [3, 4]

    def test_invalid_max_size(self):
        with pytest.raises(ValueError):
            Stack(max_size=0)

    def test_same_identity_across_operations(self):
        s = Stack()
        alias = s
        s.push("x")
        assert alias.pop() == "x"
        assert s.is_empty()
