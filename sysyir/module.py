"""The IR module: owner of types, constants, globals and functions."""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

from .opcodes import OpID, op_name
from .types import ArrayType, FloatType, IntegerType, PointerType, Type, TypeID


class Module:
    """A translation unit of IR."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self.file_name = ""
        self.types: List[Type] = []
        self.constants: List[Any] = []
        self.functions: List[Any] = []
        self.global_variables: List[Any] = []
        self._pointer_map: Dict[Type, PointerType] = {}
        self._array_map: Dict[Tuple[Type, int], ArrayType] = {}
        self.void_type = Type(TypeID.VOID, self)
        self.label_type = Type(TypeID.LABEL, self)
        self.int1_type = IntegerType(1, self)
        self.int32_type = IntegerType(32, self)
        self.float_type = FloatType(self)

    def add_type(self, ty: Type) -> None:
        self.types.append(ty)

    def add_constant(self, constant: Any) -> None:
        self.constants.append(constant)

    def pointer_type(self, contained: Type) -> PointerType:
        """Unique pointer type to ``contained``."""
        if contained not in self._pointer_map:
            self._pointer_map[contained] = PointerType(contained)
        return self._pointer_map[contained]

    def array_type(self, contained: Type, num_elements: int) -> ArrayType:
        """Unique array type of ``num_elements`` elements of ``contained``."""
        key = (contained, num_elements)
        if key not in self._array_map:
            self._array_map[key] = ArrayType(contained, num_elements)
        return self._array_map[key]

    def int32_ptr_type(self) -> PointerType:
        return self.pointer_type(self.int32_type)

    def float_ptr_type(self) -> PointerType:
        return self.pointer_type(self.float_type)

    def add_function(self, function: Any) -> None:
        self.functions.append(function)

    def add_global_variable(self, variable: Any) -> None:
        self.global_variables.append(variable)

    def get_instr_op_name(self, op: OpID) -> str:
        return op_name(op)

    def set_print_name(self) -> None:
        """Give every unnamed value in every function a printable name."""
        for function in self.functions:
            function.set_instr_name()

    def print(self) -> str:
        parts = [g.print() + "\n" for g in self.global_variables]
        parts.extend(f.print() + "\n" for f in self.functions)
        return "".join(parts)