from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, NamedTuple, Optional


class EmptyStackError(IndexError):
    """空のスタックに pop / peek したときのエラー"""

    def __init__(self, message: str = "pop from empty stack") -> None:
        super().__init__(message)


class Semantics(Enum):
    VALUE = "VALUE"          # 操作ごとに新しいスタックを返す
    REFERENCE = "REFERENCE"  # その場で書き換える


class PopResult(NamedTuple):
    """
    値セマンティクスの pop の戻り値
    value, stack = pop(stack) のように分解して受け取れる
    """
    value: Any
    stack: Any  # ValueStack[T]


@dataclass
class StackOp:
    """
    直前操作を取り消すための記録
    """
    op_type: str             # "CREATE" / "PUSH" / "POP" / "DROP"
    stack_name: str
    value: Any = None        # REFERENCE の POP で取り出した値
    previous: Any = None     # VALUE の直前スナップショット / DROP 前のスタック
    semantics: Optional[Semantics] = None
