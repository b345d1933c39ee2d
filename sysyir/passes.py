"""Optimisation pass framework and the expression ordering used by CSE."""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, List, Type as PyType, TypeVar

from .constants import ConstantFloat, ConstantInt
from .opcodes import OpID

if TYPE_CHECKING:
    from .instructions import Instruction
    from .module import Module
    from .values import Value

_COMMUTATIVE = frozenset({OpID.ADD, OpID.MUL, OpID.FADD, OpID.FMUL})

PassT = TypeVar("PassT", bound="Pass")


class Pass(abc.ABC):
    """A transformation or analysis run over a whole module."""

    def __init__(self, module: "Module") -> None:
        self.module = module

    @abc.abstractmethod
    def execute(self) -> None:
        """Run the pass over the module."""

    @property
    def name(self) -> str:
        """Name of the pass."""
        return type(self).__name__


class PassManager:
    """Holds passes for a module and runs them in the order they were added."""

    def __init__(self, module: "Module") -> None:
        self.module = module
        self.passes: List[Pass] = []

    def add_pass(self, pass_type: PyType[PassT]) -> PassT:
        """Instantiate ``pass_type`` for the module and queue it."""
        instance = pass_type(self.module)
        self.passes.append(instance)
        return instance

    def execute(self) -> None:
        for each in self.passes:
            each.execute()


def const_expr_numbering(value: "Value") -> int:
    """Rank of an operand: 1 for int constants, 2 for float constants, 3 otherwise."""
    if isinstance(value, ConstantInt):
        return 1
    if isinstance(value, ConstantFloat):
        return 2
    return 3


def _cmp(x, y) -> int:
    return (x > y) - (x < y)


def _compare_same_rank(x: "Value", y: "Value", rank: int) -> int:
    """Compare two operands of equal rank by value, or by identity."""
    if rank in (1, 2):
        return _cmp(x.value, y.value)
    return _cmp(id(x), id(y))


def _compare_operand(x: "Value", y: "Value") -> int:
    rank_x, rank_y = const_expr_numbering(x), const_expr_numbering(y)
    if rank_x != rank_y:
        return _cmp(rank_x, rank_y)
    return _compare_same_rank(x, y, rank_x)


def expr_less(a: "Instruction", b: "Instruction") -> bool:
    """Strict ordering of expressions used to recognise common subexpressions.

    Two expressions neither of which is less than the other compute the same
    value; operands of commutative operators are put in canonical order first.
    """
    opa, opb = a.op_id, b.op_id
    if opa != opb:
        return opa < opb

    if a.is_binary():
        al, ar = a.get_operand(0), a.get_operand(1)
        bl, br = b.get_operand(0), b.get_operand(1)
        al_n, ar_n = const_expr_numbering(al), const_expr_numbering(ar)
        bl_n, br_n = const_expr_numbering(bl), const_expr_numbering(br)
        if opa in _COMMUTATIVE:
            if al_n > ar_n:
                al, ar, al_n, ar_n = ar, al, ar_n, al_n
            if bl_n > br_n:
                bl, br, bl_n, br_n = br, bl, br_n, bl_n

        if al_n < bl_n:
            return True
        if al_n == bl_n and ar_n < br_n:
            return True
        if not (al_n == bl_n and ar_n == br_n):
            return False

        left = _compare_same_rank(al, bl, al_n)
        if left != 0:
            return left < 0
        return _compare_same_rank(ar, br, ar_n) < 0

    if a.is_gep():
        for x, y in zip(a.operands, b.operands):
            result = _compare_operand(x, y)
            if result != 0:
                return result < 0
        return a.num_operands < b.num_operands

    return _compare_operand(a.get_operand(0), b.get_operand(0)) < 0