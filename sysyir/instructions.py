"""IR instructions and their textual form."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List, Optional

from .opcodes import CmpOp, OpID, print_cmp_type, print_fcmp_type
from .types import ArrayType, PointerType
from .values import User, Value, print_as_op

if TYPE_CHECKING:
    from .function import BasicBlock, Function
    from .module import Module
    from .types import FunctionType, Type

_BINARY_OPS = frozenset({
    OpID.ADD, OpID.SUB, OpID.MUL, OpID.SDIV, OpID.SREM,
    OpID.FADD, OpID.FSUB, OpID.FMUL, OpID.FDIV,
})
_VOID_OPS = frozenset({OpID.RET, OpID.BR, OpID.STORE})


class Instruction(User):
    """An instruction; on creation it is appended to its parent block."""

    def __init__(self, type: "Type", op_id: OpID, num_ops: int,
                 parent: Optional["BasicBlock"]) -> None:
        super().__init__(type, "", num_ops)
        self.op_id = op_id
        self.parent = parent
        if parent is not None:
            parent.add_instruction(self)

    @property
    def function(self) -> "Function":
        return self.parent.parent

    @property
    def module(self) -> "Module":
        return self.parent.module

    def is_void(self) -> bool:
        """Whether the instruction produces no value."""
        return self.op_id in _VOID_OPS or self.type.is_void_type()

    def is_binary(self) -> bool:
        return self.op_id in _BINARY_OPS and self.num_operands == 2

    def is_gep(self) -> bool:
        return self.op_id is OpID.GETELEMENTPTR

    def _op_name(self) -> str:
        return self.module.get_instr_op_name(self.op_id)

    def _second_operand(self) -> str:
        lhs, rhs = self.get_operand(0), self.get_operand(1)
        return print_as_op(rhs, lhs.type is not rhs.type)


class BinaryInst(Instruction):
    """Two-operand arithmetic instruction."""

    def __init__(self, type: "Type", op_id: OpID, v1: Value, v2: Value,
                 bb: "BasicBlock") -> None:
        super().__init__(type, op_id, 2, bb)
        self.set_operand(0, v1)
        self.set_operand(1, v2)

    @staticmethod
    def create_add(v1: Value, v2: Value, bb: "BasicBlock", module: "Module") -> "BinaryInst":
        ty = v1.type if v1.type.is_pointer_type() else v2.type
        return BinaryInst(ty, OpID.ADD, v1, v2, bb)

    @staticmethod
    def create_sub(v1: Value, v2: Value, bb: "BasicBlock", module: "Module") -> "BinaryInst":
        return BinaryInst(module.int32_type, OpID.SUB, v1, v2, bb)

    @staticmethod
    def create_mul(v1: Value, v2: Value, bb: "BasicBlock", module: "Module") -> "BinaryInst":
        return BinaryInst(module.int32_type, OpID.MUL, v1, v2, bb)

    @staticmethod
    def create_sdiv(v1: Value, v2: Value, bb: "BasicBlock", module: "Module") -> "BinaryInst":
        return BinaryInst(module.int32_type, OpID.SDIV, v1, v2, bb)

    @staticmethod
    def create_srem(v1: Value, v2: Value, bb: "BasicBlock", module: "Module") -> "BinaryInst":
        return BinaryInst(module.int32_type, OpID.SREM, v1, v2, bb)

    @staticmethod
    def create_fadd(v1: Value, v2: Value, bb: "BasicBlock", module: "Module") -> "BinaryInst":
        return BinaryInst(module.float_type, OpID.FADD, v1, v2, bb)

    @staticmethod
    def create_fsub(v1: Value, v2: Value, bb: "BasicBlock", module: "Module") -> "BinaryInst":
        return BinaryInst(module.float_type, OpID.FSUB, v1, v2, bb)

    @staticmethod
    def create_fmul(v1: Value, v2: Value, bb: "BasicBlock", module: "Module") -> "BinaryInst":
        return BinaryInst(module.float_type, OpID.FMUL, v1, v2, bb)

    @staticmethod
    def create_fdiv(v1: Value, v2: Value, bb: "BasicBlock", module: "Module") -> "BinaryInst":
        return BinaryInst(module.float_type, OpID.FDIV, v1, v2, bb)

    def print(self) -> str:
        lhs = self.get_operand(0)
        return (f"%{self.name} = {self._op_name()} {lhs.type.print()} "
                f"{print_as_op(lhs, False)}, {self._second_operand()}")


class CmpInst(Instruction):
    """Integer comparison yielding an i1."""

    def __init__(self, type: "Type", cmp_op: CmpOp, lhs: Value, rhs: Value,
                 bb: "BasicBlock") -> None:
        super().__init__(type, OpID.CMP, 2, bb)
        self.cmp_op = cmp_op
        self.set_operand(0, lhs)
        self.set_operand(1, rhs)

    @staticmethod
    def create_cmp(op: CmpOp, lhs: Value, rhs: Value, bb: "BasicBlock",
                   module: "Module") -> "CmpInst":
        return CmpInst(module.int1_type, op, lhs, rhs, bb)

    def print(self) -> str:
        lhs = self.get_operand(0)
        return (f"%{self.name} = {self._op_name()} {print_cmp_type(self.cmp_op)} "
                f"{lhs.type.print()} {print_as_op(lhs, False)}, {self._second_operand()}")


class FCmpInst(Instruction):
    """Float comparison yielding an i1."""

    def __init__(self, type: "Type", cmp_op: CmpOp, lhs: Value, rhs: Value,
                 bb: "BasicBlock") -> None:
        super().__init__(type, OpID.FCMP, 2, bb)
        self.cmp_op = cmp_op
        self.set_operand(0, lhs)
        self.set_operand(1, rhs)

    @staticmethod
    def create_fcmp(op: CmpOp, lhs: Value, rhs: Value, bb: "BasicBlock",
                    module: "Module") -> "FCmpInst":
        return FCmpInst(module.int1_type, op, lhs, rhs, bb)

    def print(self) -> str:
        lhs = self.get_operand(0)
        return (f"%{self.name} = {self._op_name()} {print_fcmp_type(self.cmp_op)} "
                f"{lhs.type.print()} {print_as_op(lhs, False)}, {self._second_operand()}")


class CallInst(Instruction):
    """Call of a function; operand 0 is the callee."""

    def __init__(self, func: "Function", args: Iterable[Value], bb: "BasicBlock") -> None:
        args = list(args)
        super().__init__(func.return_type, OpID.CALL, len(args) + 1, bb)
        self.set_operand(0, func)
        for index, arg in enumerate(args, start=1):
            self.set_operand(index, arg)

    @staticmethod
    def create(func: "Function", args: Iterable[Value], bb: "BasicBlock") -> "CallInst":
        return CallInst(func, args, bb)

    @property
    def function_type(self) -> "FunctionType":
        return self.get_operand(0).type

    def print(self) -> str:
        text = "" if self.is_void() else f"%{self.name} = "
        text += (f"{self._op_name()} {self.function_type.return_type.print()} "
                 f"{print_as_op(self.get_operand(0), False)}(")
        text += ", ".join(
            f"{arg.type.print()} {print_as_op(arg, False)}" for arg in self.operands[1:]
        )
        return text + ")"


class BranchInst(Instruction):
    """Conditional or unconditional branch."""

    def __init__(self, operands: List[Value], bb: "BasicBlock", module: "Module") -> None:
        super().__init__(module.void_type, OpID.BR, len(operands), bb)
        for index, operand in enumerate(operands):
            self.set_operand(index, operand)

    @staticmethod
    def create_cond_br(cond: Value, if_true: "BasicBlock", if_false: "BasicBlock",
                       bb: "BasicBlock") -> "BranchInst":
        if_true.add_pre_basic_block(bb)
        if_false.add_pre_basic_block(bb)
        bb.add_succ_basic_block(if_false)
        bb.add_succ_basic_block(if_true)
        return BranchInst([cond, if_true, if_false], bb, if_true.module)

    @staticmethod
    def create_br(if_true: "BasicBlock", bb: "BasicBlock") -> "BranchInst":
        if_true.add_pre_basic_block(bb)
        bb.add_succ_basic_block(if_true)
        return BranchInst([if_true], bb, if_true.module)

    def is_cond_br(self) -> bool:
        return self.num_operands == 3

    def print(self) -> str:
        return f"{self._op_name()} " + ", ".join(
            print_as_op(operand, True) for operand in self.operands
        )


class ReturnInst(Instruction):
    """Return, with or without a value."""

    def __init__(self, val: Optional[Value], bb: "BasicBlock") -> None:
        super().__init__(bb.module.void_type, OpID.RET, 0 if val is None else 1, bb)
        if val is not None:
            self.set_operand(0, val)

    @staticmethod
    def create_ret(val: Value, bb: "BasicBlock") -> "ReturnInst":
        return ReturnInst(val, bb)

    @staticmethod
    def create_void_ret(bb: "BasicBlock") -> "ReturnInst":
        return ReturnInst(None, bb)

    def is_void_ret(self) -> bool:
        return self.num_operands == 0

    def print(self) -> str:
        if self.is_void_ret():
            return f"{self._op_name()} void"
        val = self.get_operand(0)
        return f"{self._op_name()} {val.type.print()} {print_as_op(val, False)}"


class GetElementPtrInst(Instruction):
    """Address computation into an array or through a pointer."""

    def __init__(self, ptr: Value, idxs: Iterable[Value], bb: "BasicBlock") -> None:
        idxs = list(idxs)
        self.element_type = self.compute_element_type(ptr, idxs)
        super().__init__(PointerType.get(self.element_type), OpID.GETELEMENTPTR,
                         1 + len(idxs), bb)
        self.set_operand(0, ptr)
        for index, idx in enumerate(idxs, start=1):
            self.set_operand(index, idx)

    @staticmethod
    def compute_element_type(ptr: Value, idxs: List[Value]) -> "Type":
        """Type addressed by indexing ``ptr`` with ``idxs``."""
        ty = ptr.type.pointer_element_type
        if ty is None:
            raise ValueError("getelementptr requires a pointer operand")
        if ty.is_array_type():
            arr_ty: ArrayType = ty
            for _ in idxs[1:]:
                ty = arr_ty.element_type
                if ty.is_array_type():
                    arr_ty = ty
        return ty

    @staticmethod
    def create_gep(ptr: Value, idxs: Iterable[Value], bb: "BasicBlock") -> "GetElementPtrInst":
        return GetElementPtrInst(ptr, idxs, bb)

    def print(self) -> str:
        base = self.get_operand(0).type.pointer_element_type.print()
        operands = ", ".join(
            f"{op.type.print()} {print_as_op(op, False)}" for op in self.operands
        )
        return f"%{self.name} = {self._op_name()} {base}, {operands}"


class StoreInst(Instruction):
    """Store of a value through a pointer."""

    def __init__(self, val: Value, ptr: Value, bb: "BasicBlock") -> None:
        super().__init__(bb.module.void_type, OpID.STORE, 2, bb)
        self.set_operand(0, val)
        self.set_operand(1, ptr)

    @staticmethod
    def create_store(val: Value, ptr: Value, bb: "BasicBlock") -> "StoreInst":
        return StoreInst(val, ptr, bb)

    def print(self) -> str:
        val = self.get_operand(0)
        return (f"{self._op_name()} {val.type.print()} {print_as_op(val, False)}, "
                f"{print_as_op(self.get_operand(1), True)}")


class LoadInst(Instruction):
    """Load of a value through a pointer."""

    def __init__(self, ty: "Type", ptr: Value, bb: "BasicBlock") -> None:
        super().__init__(ty, OpID.LOAD, 1, bb)
        self.set_operand(0, ptr)

    @staticmethod
    def create_load(ty: "Type", ptr: Value, bb: "BasicBlock") -> "LoadInst":
        return LoadInst(ty, ptr, bb)

    @property
    def load_type(self) -> "Type":
        return self.get_operand(0).type.pointer_element_type

    def print(self) -> str:
        ptr = self.get_operand(0)
        return (f"%{self.name} = {self._op_name()} "
                f"{ptr.type.pointer_element_type.print()}, {print_as_op(ptr, True)}")


class AllocaInst(Instruction):
    """Stack allocation; its value is a pointer to the allocated type."""

    def __init__(self, ty: "Type", bb: "BasicBlock") -> None:
        self.alloca_type = ty
        super().__init__(PointerType.get(ty), OpID.ALLOCA, 0, bb)

    @staticmethod
    def create_alloca(ty: "Type", bb: "BasicBlock") -> "AllocaInst":
        return AllocaInst(ty, bb)

    def print(self) -> str:
        return f"%{self.name} = {self._op_name()} {self.alloca_type.print()}"


class _CastInst(Instruction):
    """Single-operand conversion to a destination type."""

    def __init__(self, op_id: OpID, val: Value, ty: "Type", bb: "BasicBlock") -> None:
        super().__init__(ty, op_id, 1, bb)
        self.dest_type = ty
        self.set_operand(0, val)

    def print(self) -> str:
        val = self.get_operand(0)
        return (f"%{self.name} = {self._op_name()} {val.type.print()} "
                f"{print_as_op(val, False)} to {self.dest_type.print()}")


class ZextInst(_CastInst):
    """Zero extension."""

    @staticmethod
    def create_zext(val: Value, ty: "Type", bb: "BasicBlock") -> "ZextInst":
        return ZextInst(OpID.ZEXT, val, ty, bb)

    def print(self) -> str:
        return super().print()


class FpToSiInst(_CastInst):
    """Float to signed integer conversion."""

    @staticmethod
    def create_fptosi(val: Value, ty: "Type", bb: "BasicBlock") -> "FpToSiInst":
        return FpToSiInst(OpID.FPTOSI, val, ty, bb)

    def print(self) -> str:
        return super().print()


class SiToFpInst(_CastInst):
    """Signed integer to float conversion."""

    @staticmethod
    def create_sitofp(val: Value, ty: "Type", bb: "BasicBlock") -> "SiToFpInst":
        return SiToFpInst(OpID.SITOFP, val, ty, bb)

    def print(self) -> str:
        return super().print()


class PhiInst(Instruction):
    """SSA phi node; it is not placed in its block automatically."""

    def __init__(self, ty: "Type", bb: "BasicBlock") -> None:
        super().__init__(ty, OpID.PHI, 0, None)
        self.parent = bb

    @staticmethod
    def create_phi(ty: "Type", bb: "BasicBlock") -> "PhiInst":
        return PhiInst(ty, bb)

    def add_phi_pair(self, value: Value, pre_bb: "BasicBlock") -> None:
        self.add_operand(value)
        self.add_operand(pre_bb)

    def print(self) -> str:
        pairs = list(zip(self.operands[0::2], self.operands[1::2]))
        parts = [f"[ {print_as_op(val, False)}, {print_as_op(bb, False)} ]"
                 for val, bb in pairs]
        preds = self.parent.pre_basic_blocks
        if len(pairs) < len(preds):
            known = [bb for _, bb in pairs]
            parts.extend(
                f"[ undef, {print_as_op(pre, False)} ]"
                for pre in preds
                if not any(pre is bb for bb in known)
            )
        return (f"%{self.name} = {self._op_name()} {self.type.print()} "
                + ", ".join(parts))