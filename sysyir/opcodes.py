"""Instruction opcodes and comparison predicates."""

from __future__ import annotations

import enum


class OpID(enum.IntEnum):
    """Instruction opcodes, in their canonical order."""

    RET = enum.auto()
    BR = enum.auto()
    ADD = enum.auto()
    SUB = enum.auto()
    MUL = enum.auto()
    SDIV = enum.auto()
    SREM = enum.auto()
    FADD = enum.auto()
    FSUB = enum.auto()
    FMUL = enum.auto()
    FDIV = enum.auto()
    ALLOCA = enum.auto()
    LOAD = enum.auto()
    STORE = enum.auto()
    CMP = enum.auto()
    FCMP = enum.auto()
    PHI = enum.auto()
    CALL = enum.auto()
    GETELEMENTPTR = enum.auto()
    ZEXT = enum.auto()
    FPTOSI = enum.auto()
    SITOFP = enum.auto()


class CmpOp(enum.Enum):
    """Comparison predicates shared by integer and float compares."""

    EQ = enum.auto()
    NE = enum.auto()
    GT = enum.auto()
    GE = enum.auto()
    LT = enum.auto()
    LE = enum.auto()


_OP_NAMES = {
    OpID.RET: "ret",
    OpID.BR: "br",
    OpID.ADD: "add",
    OpID.SUB: "sub",
    OpID.MUL: "mul",
    OpID.SDIV: "sdiv",
    OpID.SREM: "srem",
    OpID.FADD: "fadd",
    OpID.FSUB: "fsub",
    OpID.FMUL: "fmul",
    OpID.FDIV: "fdiv",
    OpID.ALLOCA: "alloca",
    OpID.LOAD: "load",
    OpID.STORE: "store",
    OpID.CMP: "icmp",
    OpID.FCMP: "fcmp",
    OpID.PHI: "phi",
    OpID.CALL: "call",
    OpID.GETELEMENTPTR: "getelementptr",
    OpID.ZEXT: "zext",
    OpID.FPTOSI: "fptosi",
    OpID.SITOFP: "sitofp",
}

_CMP_NAMES = {
    CmpOp.GE: "sge",
    CmpOp.GT: "sgt",
    CmpOp.LE: "sle",
    CmpOp.LT: "slt",
    CmpOp.EQ: "eq",
    CmpOp.NE: "ne",
}

_FCMP_NAMES = {
    CmpOp.GE: "uge",
    CmpOp.GT: "ugt",
    CmpOp.LE: "ule",
    CmpOp.LT: "ult",
    CmpOp.EQ: "ueq",
    CmpOp.NE: "une",
}


def op_name(op: OpID) -> str:
    """Textual mnemonic of an opcode."""
    return _OP_NAMES[op]


def print_cmp_type(op: CmpOp) -> str:
    """Integer comparison predicate as printed in the IR."""
    return _CMP_NAMES.get(op, "wrong cmpop")


def print_fcmp_type(op: CmpOp) -> str:
    """Float comparison predicate as printed in the IR."""
    return _FCMP_NAMES.get(op, "wrong fcmpop")