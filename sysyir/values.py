"""Values, their use lists and users holding operands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from .types import Type


@dataclass(frozen=True)
class Use:
    """One use of a value: the user and the operand slot it occupies."""

    user: "User"
    arg_no: int


class Value:
    """Anything that can appear as an operand in the IR."""

    def __init__(self, type: "Type", name: str = "") -> None:
        self.type = type
        self.name = name
        self.use_list: List[Use] = []

    def add_use(self, user: "User", arg_no: int) -> None:
        self.use_list.append(Use(user, arg_no))

    def remove_use(self, user: "User") -> None:
        """Drop every use whose user is ``user``."""
        self.use_list = [use for use in self.use_list if use.user is not user]

    def replace_all_use_with(self, new_val: "Value") -> None:
        """Point every recorded use at ``new_val`` instead."""
        for use in list(self.use_list):
            use.user.set_operand(use.arg_no, new_val)

    def set_name(self, name: str) -> bool:
        """Set the name only if none is set yet; return whether it was set."""
        if self.name:
            return False
        self.name = name
        return True

    def as_operand(self) -> str:
        """How the value is referred to when used as an operand."""
        return f"%{self.name}"

    def print(self) -> str:
        return self.as_operand()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name or '?'}>"


class User(Value):
    """A value that refers to other values through operands."""

    def __init__(self, type: "Type", name: str = "", num_ops: int = 0) -> None:
        super().__init__(type, name)
        self.operands: List[Optional[Value]] = [None] * num_ops

    def get_operand(self, index: int) -> Optional[Value]:
        return self.operands[index]

    def set_operand(self, index: int, value: Value) -> None:
        self.operands[index] = value
        value.add_use(self, index)

    def add_operand(self, value: Value) -> None:
        index = len(self.operands)
        self.operands.append(value)
        value.add_use(self, index)

    @property
    def num_operands(self) -> int:
        return len(self.operands)

    def remove_use_of_ops(self) -> None:
        """Remove this user from the use lists of all its operands."""
        for op in self.operands:
            if op is not None:
                op.remove_use(self)

    def remove_operands(self, first: int, last: int) -> None:
        """Remove operands ``first`` through ``last`` inclusive."""
        for op in self.operands[first:last + 1]:
            if op is not None:
                op.remove_use(self)
        del self.operands[first:last + 1]


def print_as_op(value: Value, print_ty: bool) -> str:
    """Render a value as an operand, optionally prefixed with its type."""
    prefix = f"{value.type.print()} " if print_ty else ""
    return prefix + value.as_operand()