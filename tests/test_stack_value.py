"""
Tests for the value-semantics stack (stack_value.py)
"""

import pytest

from models import EmptyStackError
from stack_value import ValueStack, is_empty, length, peek, pop, push


class TestValueStack:

    def test_push_returns_new_stack(self):
        s = ValueStack()
        s1 = push(s, 10)
        s2 = push(s1, 20)

        assert s.items == ()
        assert s1.items == (10,)
        assert s2.items == (10, 20)

    def test_pop_scenario(self):
        s2 = push(push(ValueStack(), 10), 20)
        value, s3 = pop(s2)

        assert value == 20
        assert s3.items == (10,)
        # input untouched
        assert s2.items == (10, 20)

    def test_pop_order_and_lengths(self):
        values = ["a", "b", "c", "d"]
        s = ValueStack()
        for v in values:
            s = push(s, v)

        popped = []
        while not is_empty(s):
            v, s = pop(s)
            popped.append(v)
            assert length(s) == len(values) - len(popped)

        assert popped == list(reversed(values))

    @pytest.mark.parametrize("items", [(), (1,), (1, 2, 3)])
    def test_push_increments_length(self, items):
        s = ValueStack.of(items)
        assert length(push(s, 99)) == length(s) + 1

    @pytest.mark.parametrize("items", [(), ("x",), (None, 0, [1])])
    def test_push_then_pop_is_identity(self, items):
        s = ValueStack.of(items)
        assert pop(push(s, "v")) == ("v", s)

    def test_pop_empty_raises(self):
        s = ValueStack()
        with pytest.raises(EmptyStackError):
            pop(s)
        assert s.items == ()

    def test_empty_stack_error_is_index_error(self):
        with pytest.raises(IndexError):
            pop(ValueStack())

    def test_peek(self):
        s = ValueStack.of([1, 2, 3])
        assert peek(s) == 3
        assert length(s) == 3
        with pytest.raises(EmptyStackError):
            peek(ValueStack())

    def test_of_uses_last_element_as_top(self):
        s = ValueStack.of(iter([1, 2, 3]))
        assert s.items == (1, 2, 3)
        assert pop(s).value == 3

    def test_list_input_is_frozen_to_tuple(self):
        source = [1, 2]
        s = ValueStack(source)
        source.append(3)
        assert s.items == (1, 2)

    def test_frozen(self):
        s = ValueStack.of([1])
        with pytest.raises(AttributeError):
            s.items = (2,)

    def test_equal_stacks_hash_equal(self):
        assert ValueStack.of([1, 2]) == push(ValueStack.of([1]), 2)
        assert hash(ValueStack.of([1, 2])) == hash(ValueStack((1, 2)))

    def test_pop_result_fields(self):
        result = pop(ValueStack.of(["a", "b"]))
        assert result.value == "b"
        assert result.stack == ValueStack.of(["a"])
