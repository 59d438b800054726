from __future__ import annotations

from typing import Generic, Iterable, List, Optional, TypeVar

from models import EmptyStackError

T = TypeVar("T")


class Stack(Generic[T]):
    """
    Stack（LIFO）参照セマンティクス版
    push: O(1)
    pop : O(1)

    ※ 操作はこのオブジェクト自体を書き換える（参照透過ではない）
      複数スレッドから同じインスタンスを触る場合は呼び出し側でロックすること
    """

    def __init__(
        self,
        items: Optional[Iterable[T]] = None,
        max_size: Optional[int] = None,
    ) -> None:
        if max_size is not None and max_size <= 0:
            raise ValueError("max_size must be > 0")
        self._data: List[T] = list(items) if items is not None else []
        self.max_size = max_size
        self._trim()

    def push(self, item: T) -> None:
        self._data.append(item)
        self._trim()

    def pop(self) -> T:
        if not self._data:
            raise EmptyStackError()
        return self._data.pop()

    def peek(self) -> T:
        if not self._data:
            raise EmptyStackError("peek from empty stack")
        return self._data[-1]

    def length(self) -> int:
        return len(self._data)

    def size(self) -> int:
        return self.length()

    def is_empty(self) -> bool:
        return self.length() == 0

    def clear(self) -> None:
        self._data.clear()

    def to_list(self) -> List[T]:
        # 底 → 頂上 の順
        return list(self._data)

    def _trim(self) -> None:
        # max_size 指定時は古いもの（底）から捨てる
        if self.max_size is None:
            return
        overflow = len(self._data) - self.max_size
        if overflow > 0:
            del self._data[:overflow]

    def __len__(self) -> int:
        return self.length()

    def __repr__(self) -> str:
        return f"Stack({self._data!r})"
