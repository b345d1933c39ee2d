"""Global variables of an IR module."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from .types import PointerType
from .values import User

if TYPE_CHECKING:
    from .constants import Constant
    from .module import Module
    from .types import Type


class GlobalVariable(User):
    """A module-level variable; its value is the address of its storage."""

    def __init__(self, name: str, module: "Module", type: "Type",
                 is_const: bool = False, init_val: Optional["Constant"] = None) -> None:
        super().__init__(type, name, 1 if init_val is not None else 0)
        self.is_const = is_const
        self.init_val = init_val
        self.module = module
        module.add_global_variable(self)
        if init_val is not None:
            self.set_operand(0, init_val)

    @staticmethod
    def create(name: str, module: "Module", type: "Type", is_const: bool = False,
               init_val: Optional["Constant"] = None) -> "GlobalVariable":
        """Create a global holding a value of ``type``; its own type is a pointer to it."""
        return GlobalVariable(name, module, PointerType.get(type), is_const, init_val)

    def as_operand(self) -> str:
        return f"@{self.name}"

    def print(self) -> str:
        if self.init_val is None:
            raise ValueError(f"global variable @{self.name} has no initialiser")
        kind = "constant" if self.is_const else "global"
        elem_ty = self.type.pointer_element_type.print()
        return f"{self.as_operand()} = {kind} {elem_ty} {self.init_val.print()}"