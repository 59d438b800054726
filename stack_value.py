from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterable, Tuple, TypeVar

from models import EmptyStackError, PopResult

T = TypeVar("T")


@dataclass(frozen=True)
class ValueStack(Generic[T]):
    """
    Stack（LIFO）値セマンティクス版

    中身は tuple で持ち、変更操作は常に新しい ValueStack を返す。
    呼び出し側は戻り値を受け取り直す必要がある（状態のスレッディング）:

        s = push(s, 10)
        value, s = pop(s)
    """

    items: Tuple[T, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))

    @classmethod
    def of(cls, items: Iterable[T]) -> "ValueStack[T]":
        # 最後の要素が頂上
        return cls(tuple(items))

    def __len__(self) -> int:
        return len(self.items)


# -------------------------
# 操作（入力は変更しない）
# -------------------------
def push(stack: ValueStack[T], value: T) -> ValueStack[T]:
    return ValueStack(stack.items + (value,))


def pop(stack: ValueStack[T]) -> PopResult:
    """
    頂上の値と、それを取り除いた新しいスタックを返す
    空なら EmptyStackError（新しいスタックは作られない）
    """
    if not stack.items:
        raise EmptyStackError()
    return PopResult(stack.items[-1], ValueStack(stack.items[:-1]))


def peek(stack: ValueStack[T]) -> T:
    if not stack.items:
        raise EmptyStackError("peek from empty stack")
    return stack.items[-1]


def length(stack: ValueStack[T]) -> int:
    return len(stack.items)


def is_empty(stack: ValueStack[T]) -> bool:
    return length(stack) == 0
