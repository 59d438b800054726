from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Iterable, List, Tuple, Union

import stack_value
from models import EmptyStackError, Semantics, StackOp
from stack_ref import Stack
from stack_value import ValueStack

logger = logging.getLogger(__name__)

AnyStack = Union[ValueStack[Any], Stack[Any]]


class WorkspaceError(ValueError):
    """名前の重複・上限超過など、ワークスペースとして受け付けられない操作"""


class UnknownStackError(KeyError):
    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"スタックが存在しません: {self.name}"


class StackWorkspace:
    """
    名前付きスタックの管理

    - VALUE    : ValueStack の最新スナップショットを保持し、操作のたびに差し替える
    - REFERENCE: Stack をその場で書き換える
    - Undo     : Stack（LIFO）に StackOp を積む

    公開メソッドはすべて 1 本のロックの下で実行する。
    """

    def __init__(self, max_stacks: int = 100, undo_limit: int = 50) -> None:
        if max_stacks <= 0:
            raise ValueError("max_stacks must be > 0")
        self.max_stacks = max_stacks
        self._stacks: Dict[str, AnyStack] = {}
        self._semantics: Dict[str, Semantics] = {}
        self.undo_stack: Stack[StackOp] = Stack(max_size=undo_limit)
        self._lock = threading.Lock()

    # -------------------------
    # 生成・削除
    # -------------------------
    def create(
        self,
        name: str,
        semantics: Union[Semantics, str] = Semantics.REFERENCE,
        items: Iterable[Any] = (),
    ) -> Dict[str, Any]:
        name = (name or "").strip()
        if not name:
            raise WorkspaceError("スタック名を指定してください")
        semantics = self._parse_semantics(semantics)

        with self._lock:
            if name in self._stacks:
                logger.warning("create rejected: %s already exists", name)
                raise WorkspaceError(f"同名のスタックがすでに存在します: {name}")
            if len(self._stacks) >= self.max_stacks:
                logger.warning("create rejected: limit %d reached", self.max_stacks)
                raise WorkspaceError(f"スタック数の上限（{self.max_stacks}）に達しています")

            if semantics is Semantics.VALUE:
                stack: AnyStack = ValueStack.of(items)
            else:
                stack = Stack(items)
            self._stacks[name] = stack
            self._semantics[name] = semantics

            self.undo_stack.push(StackOp(op_type="CREATE", stack_name=name))
            logger.info("created %s stack %s (%d items)", semantics.value, name, len(stack))
            return self._describe(name)

    def drop(self, name: str) -> None:
        with self._lock:
            stack = self._get(name)
            semantics = self._semantics.pop(name)
            del self._stacks[name]

            self.undo_stack.push(
                StackOp(op_type="DROP", stack_name=name, previous=stack, semantics=semantics)
            )
            logger.info("dropped stack %s", name)

    # -------------------------
    # スタック操作
    # -------------------------
    def push(self, name: str, value: Any) -> int:
        with self._lock:
            stack = self._get(name)
            if isinstance(stack, ValueStack):
                # 戻り値で置き換える（入力は変わらない）
                self._stacks[name] = stack_value.push(stack, value)
                op = StackOp(op_type="PUSH", stack_name=name, previous=stack)
            else:
                stack.push(value)
                op = StackOp(op_type="PUSH", stack_name=name)
            self.undo_stack.push(op)

            n = len(self._stacks[name])
            logger.info("push %s -> length %d", name, n)
            return n

    def pop(self, name: str) -> Tuple[Any, int]:
        """
        頂上の値と、取り出した後の要素数を返す
        要素数も同じロックの中で数える
        """
        with self._lock:
            stack = self._get(name)
            try:
                if isinstance(stack, ValueStack):
                    value, self._stacks[name] = stack_value.pop(stack)
                    op = StackOp(op_type="POP", stack_name=name, previous=stack)
                else:
                    value = stack.pop()
                    op = StackOp(op_type="POP", stack_name=name, value=value)
            except EmptyStackError:
                logger.warning("pop rejected: %s is empty", name)
                raise
            self.undo_stack.push(op)

            n = len(self._stacks[name])
            logger.info("pop %s -> length %d", name, n)
            return value, n

    def peek(self, name: str) -> Any:
        with self._lock:
            stack = self._get(name)
            if isinstance(stack, ValueStack):
                return stack_value.peek(stack)
            return stack.peek()

    def length(self, name: str) -> int:
        with self._lock:
            return len(self._get(name))

    def items(self, name: str) -> List[Any]:
        with self._lock:
            return self._items(self._get(name))

    # -------------------------
    # 表示用
    # -------------------------
    def describe(self, name: str) -> Dict[str, Any]:
        with self._lock:
            return self._describe(name)

    def list_stacks(self) -> List[Dict[str, Any]]:
        with self._lock:
            return [
                {
                    "name": name,
                    "semantics": self._semantics[name].value,
                    "length": len(stack),
                }
                for name, stack in sorted(self._stacks.items())
            ]

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._stacks

    # -------------------------
    # Undo（直前1操作だけ取り消す）
    # -------------------------
    def undo_last(self) -> Tuple[bool, str]:
        with self._lock:
            if self.undo_stack.is_empty():
                return False, "Undoできる操作がありません"
            op = self.undo_stack.pop()
            ok, msg = self._undo(op)
            if ok:
                logger.info("undo %s %s", op.op_type, op.stack_name)
            else:
                logger.warning("undo %s %s failed: %s", op.op_type, op.stack_name, msg)
            return ok, msg

    def _undo(self, op: StackOp) -> Tuple[bool, str]:
        name = op.stack_name

        # ---- 生成の取り消し ----
        if op.op_type == "CREATE":
            if name not in self._stacks:
                return False, "スタックがすでに存在しないためUndoできません"
            del self._stacks[name]
            del self._semantics[name]
            return True, f"Undo: スタックの生成を取り消しました（{name}）"

        # ---- 削除の取り消し ----
        if op.op_type == "DROP":
            if name in self._stacks:
                return False, "同名のスタックが再作成されているためUndoできません"
            self._stacks[name] = op.previous
            self._semantics[name] = op.semantics
            return True, f"Undo: スタックの削除を取り消しました（{name}）"

        stack = self._stacks.get(name)
        if stack is None:
            return False, "スタックが見つかりません"

        # ---- VALUE: 直前のスナップショットに戻すだけ ----
        if isinstance(stack, ValueStack):
            if op.op_type in ("PUSH", "POP"):
                self._stacks[name] = op.previous
                return True, f"Undo: {op.op_type} を取り消しました（{name}）"
            return False, "未対応のUndo操作です"

        # ---- REFERENCE: 逆操作をその場で行う ----
        if op.op_type == "PUSH":
            if stack.is_empty():
                return False, "スタックが空のためUndoできません"
            stack.pop()
            return True, f"Undo: PUSH を取り消しました（{name}）"

        if op.op_type == "POP":
            stack.push(op.value)
            return True, f"Undo: POP を取り消しました（{name}）"

        return False, "未対応のUndo操作です"

    # -------------------------
    # 内部
    # -------------------------
    def _get(self, name: str) -> AnyStack:
        stack = self._stacks.get(name)
        if stack is None:
            raise UnknownStackError(name)
        return stack

    def _describe(self, name: str) -> Dict[str, Any]:
        stack = self._get(name)
        return {
            "name": name,
            "semantics": self._semantics[name].value,
            "length": len(stack),
            "items": self._items(stack),
        }

    @staticmethod
    def _items(stack: AnyStack) -> List[Any]:
        if isinstance(stack, ValueStack):
            return list(stack.items)
        return stack.to_list()

    @staticmethod
    def _parse_semantics(semantics: Union[Semantics, str]) -> Semantics:
        if isinstance(semantics, Semantics):
            return semantics
        try:
            return Semantics(str(semantics).upper())
        except ValueError:
            raise WorkspaceError(f"不明なセマンティクスです: {semantics}") from None
