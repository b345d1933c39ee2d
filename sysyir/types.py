"""IR type system: primitive, function, array and pointer types."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Iterable, Optional

if TYPE_CHECKING:
    from .module import Module


class TypeID(enum.Enum):
    """Kinds of IR types."""

    VOID = enum.auto()
    LABEL = enum.auto()
    INTEGER = enum.auto()
    FLOAT = enum.auto()
    FUNCTION = enum.auto()
    ARRAY = enum.auto()
    POINTER = enum.auto()


class Type:
    """Base IR type; every type is registered with its owning module."""

    def __init__(self, tid: TypeID, module: "Module") -> None:
        self.tid = tid
        self.module = module
        module.add_type(self)

    def is_void_type(self) -> bool:
        return self.tid is TypeID.VOID

    def is_label_type(self) -> bool:
        return self.tid is TypeID.LABEL

    def is_integer_type(self) -> bool:
        return self.tid is TypeID.INTEGER

    def is_float_type(self) -> bool:
        return self.tid is TypeID.FLOAT

    def is_function_type(self) -> bool:
        return self.tid is TypeID.FUNCTION

    def is_array_type(self) -> bool:
        return self.tid is TypeID.ARRAY

    def is_pointer_type(self) -> bool:
        return self.tid is TypeID.POINTER

    @property
    def pointer_element_type(self) -> Optional["Type"]:
        """The pointee type, or None when this is not a pointer."""
        return None

    @property
    def array_element_type(self) -> Optional["Type"]:
        """The element type, or None when this is not an array."""
        return None

    @property
    def size(self) -> int:
        """Storage size in bytes; zero for types without storage."""
        return 0

    def print(self) -> str:
        if self.tid is TypeID.VOID:
            return "void"
        if self.tid is TypeID.LABEL:
            return "label"
        return ""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.print()}>"


class IntegerType(Type):
    """Integer type of a fixed bit width."""

    def __init__(self, num_bits: int, module: "Module") -> None:
        self.num_bits = num_bits
        super().__init__(TypeID.INTEGER, module)

    @property
    def size(self) -> int:
        return max(self.num_bits // 8, 1)

    def print(self) -> str:
        return f"i{self.num_bits}"


class FloatType(Type):
    """32-bit floating point type."""

    def __init__(self, module: "Module") -> None:
        super().__init__(TypeID.FLOAT, module)

    @property
    def size(self) -> int:
        return 4

    def print(self) -> str:
        return "float"


class FunctionType(Type):
    """Signature of a function: return type and parameter types."""

    def __init__(self, result: Type, params: Iterable[Type], module: "Module") -> None:
        self.return_type = result
        self.params = list(params)
        super().__init__(TypeID.FUNCTION, module)

    @staticmethod
    def is_valid_return_type(ty: Type) -> bool:
        return ty.is_integer_type() or ty.is_void_type()

    @staticmethod
    def is_valid_argument_type(ty: Type) -> bool:
        return ty.is_integer_type() or ty.is_pointer_type()

    @property
    def num_of_args(self) -> int:
        return len(self.params)

    def param_type(self, index: int) -> Type:
        return self.params[index]

    def print(self) -> str:
        params = ", ".join(p.print() for p in self.params)
        return f"{self.return_type.print()} ({params})"


class ArrayType(Type):
    """Fixed-length array of a contained element type."""

    def __init__(self, contained: Type, num_elements: int) -> None:
        self.element_type = contained
        self.num_elements = num_elements
        super().__init__(TypeID.ARRAY, contained.module)

    @staticmethod
    def is_valid_element_type(ty: Type) -> bool:
        return ty.is_integer_type() or ty.is_array_type() or ty.is_float_type()

    @staticmethod
    def get(contained: Type, num_elements: int) -> "ArrayType":
        """Return the module's unique array type for these parameters."""
        return contained.module.array_type(contained, num_elements)

    @property
    def array_element_type(self) -> Type:
        return self.element_type

    @property
    def size(self) -> int:
        return self.element_type.size * self.num_elements

    def print(self) -> str:
        return f"[{self.num_elements} x {self.element_type.print()}]"


class PointerType(Type):
    """Pointer to a contained type."""

    def __init__(self, contained: Type) -> None:
        self.element_type = contained
        super().__init__(TypeID.POINTER, contained.module)

    @staticmethod
    def get(contained: Type) -> "PointerType":
        """Return the module's unique pointer type to ``contained``."""
        return contained.module.pointer_type(contained)

    @property
    def pointer_element_type(self) -> Type:
        return self.element_type

    @property
    def size(self) -> int:
        if self.element_type.is_array_type():
            return self.element_type.size
        return 4

    def print(self) -> str:
        return f"{self.element_type.print()}*"