"""Constant values: integers, floats, arrays and zero initialisers."""

from __future__ import annotations

import math
import struct
from typing import TYPE_CHECKING, Iterable, List

from .values import User

if TYPE_CHECKING:
    from .module import Module
    from .types import ArrayType, Type


def _to_int32(value: int) -> int:
    return ((int(value) + 2**31) % 2**32) - 2**31


def _to_float32(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


class Constant(User):
    """A constant, registered with its module on creation."""

    def __init__(self, type: "Type", module: "Module", num_ops: int = 0) -> None:
        super().__init__(type, "", num_ops)
        self.module = module
        module.add_constant(self)

    def as_operand(self) -> str:
        return self.print()


class ConstantInt(Constant):
    """A 32-bit or 1-bit integer constant."""

    def __init__(self, type: "Type", value: int, module: "Module") -> None:
        self.value = _to_int32(value)
        super().__init__(type, module)

    @staticmethod
    def create(value: int, module: "Module") -> "ConstantInt":
        return ConstantInt(module.int32_type, value, module)

    @staticmethod
    def create_bool(value: bool, module: "Module") -> "ConstantInt":
        return ConstantInt(module.int1_type, 1 if value else 0, module)

    def print(self) -> str:
        if self.type.is_integer_type() and self.type.num_bits == 1:
            return "false" if self.value == 0 else "true"
        return str(self.value)


class ConstantFloat(Constant):
    """A single-precision float constant."""

    def __init__(self, type: "Type", value: float, module: "Module") -> None:
        self.value = _to_float32(value)
        super().__init__(type, module)

    @staticmethod
    def create(value: float, module: "Module") -> "ConstantFloat":
        return ConstantFloat(module.float_type, value, module)

    def print(self) -> str:
        """Hex bit pattern of the value widened to double precision."""
        (bits,) = struct.unpack("<Q", struct.pack("<d", self.value))
        return f"0x{bits:x}"


class ConstantArray(Constant):
    """A constant array whose elements are constants."""

    def __init__(self, array_type: "ArrayType", elements: Iterable[Constant],
                 module: "Module") -> None:
        elements = list(elements)
        super().__init__(array_type, module, len(elements))
        for index, element in enumerate(elements):
            self.set_operand(index, element)
        self.const_array: List[Constant] = elements

    @staticmethod
    def create(array_type: "ArrayType", elements: Iterable[Constant],
               module: "Module") -> "ConstantArray":
        return ConstantArray(array_type, elements, module)

    def element_value(self, index: int) -> Constant:
        return self.const_array[index]

    def __len__(self) -> int:
        return len(self.const_array)

    def print(self) -> str:
        elem_ty = self.type.array_element_type.print()
        body = ", ".join(f"{elem_ty} {element.print()}" for element in self.const_array)
        return f"[{body}]"


class ConstantZero(Constant):
    """The all-zero initialiser of any type."""

    @staticmethod
    def create(type: "Type", module: "Module") -> "ConstantZero":
        return ConstantZero(type, module)

    def print(self) -> str:
        return "zeroinitializer"