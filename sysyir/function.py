"""Functions, their arguments and basic blocks."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional

from .opcodes import OpID
from .values import Value, print_as_op

if TYPE_CHECKING:
    from .module import Module
    from .types import FunctionType, Type

_PREDS_PADDING = " " * 48


class Argument(Value):
    """A formal parameter of a function."""

    def __init__(self, type: "Type", name: str = "", function: Optional["Function"] = None,
                 arg_no: int = 0) -> None:
        super().__init__(type, name)
        self.parent = function
        self.arg_no = arg_no

    def print(self) -> str:
        return f"{self.type.print()} %{self.name}"


class Function(Value):
    """A function definition or declaration within a module."""

    def __init__(self, type: "FunctionType", name: str, module: "Module") -> None:
        super().__init__(type, name)
        self.module = module
        self.basic_blocks: List[BasicBlock] = []
        self._seq_cnt = 0
        module.add_function(self)
        self.arguments: List[Argument] = [
            Argument(type.param_type(index), "", self, index)
            for index in range(type.num_of_args)
        ]

    @staticmethod
    def create(type: "FunctionType", name: str, module: "Module") -> "Function":
        return Function(type, name, module)

    @property
    def function_type(self) -> "FunctionType":
        return self.type

    @property
    def return_type(self) -> "Type":
        return self.type.return_type

    @property
    def num_of_args(self) -> int:
        return self.type.num_of_args

    @property
    def num_basic_blocks(self) -> int:
        return len(self.basic_blocks)

    @property
    def entry_block(self) -> Optional["BasicBlock"]:
        return self.basic_blocks[0] if self.basic_blocks else None

    @property
    def is_declaration(self) -> bool:
        return not self.basic_blocks

    def add_basic_block(self, bb: "BasicBlock") -> None:
        self.basic_blocks.append(bb)

    def remove(self, bb: "BasicBlock") -> None:
        """Drop ``bb`` from the function and unlink it from the CFG."""
        self.basic_blocks = [block for block in self.basic_blocks if block is not bb]
        for pre in list(bb.pre_basic_blocks):
            pre.remove_succ_basic_block(bb)
        for succ in list(bb.succ_basic_blocks):
            succ.remove_pre_basic_block(bb)

    def set_instr_name(self) -> None:
        """Name every unnamed argument, block and non-void instruction."""
        named = 0

        def assign(value: Value, prefix: str) -> None:
            nonlocal named
            if value.set_name(f"{prefix}{named + self._seq_cnt}"):
                named += 1

        for arg in self.arguments:
            assign(arg, "arg")
        for bb in self.basic_blocks:
            assign(bb, "label")
            for instr in bb.instructions:
                if not instr.is_void():
                    assign(instr, "op")
        self._seq_cnt += named

    def as_operand(self) -> str:
        return f"@{self.name}"

    def print(self) -> str:
        self.set_instr_name()
        keyword = "declare" if self.is_declaration else "define"
        header = f"{keyword} {self.return_type.print()} {print_as_op(self, False)}("
        if self.is_declaration:
            header += ", ".join(
                self.type.param_type(index).print() for index in range(self.num_of_args)
            )
            return header + ")\n"
        header += ", ".join(arg.print() for arg in self.arguments)
        body = "".join(bb.print() for bb in self.basic_blocks)
        return f"{header}) {{\n{body}}}"


class BasicBlock(Value):
    """A straight-line sequence of instructions with CFG edges."""

    def __init__(self, module: "Module", name: str = "",
                 parent: Optional[Function] = None) -> None:
        super().__init__(module.label_type, name)
        self._module = module
        self.parent = parent
        self.instructions: List[Any] = []
        self.pre_basic_blocks: List[BasicBlock] = []
        self.succ_basic_blocks: List[BasicBlock] = []
        if parent is not None:
            parent.add_basic_block(self)

    @property
    def module(self) -> "Module":
        return self.parent.module if self.parent is not None else self._module

    def add_instruction(self, instr: Any) -> None:
        self.instructions.append(instr)

    def insert_instruction(self, index: int, instr: Any) -> None:
        self.instructions.insert(index, instr)

    def add_instr_begin(self, instr: Any) -> None:
        self.instructions.insert(0, instr)

    def delete_instr(self, instr: Any) -> None:
        """Remove ``instr`` from the block and detach it from its operands."""
        self.instructions = [item for item in self.instructions if item is not instr]
        instr.remove_use_of_ops()

    @property
    def terminator(self) -> Optional[Any]:
        """The final ret or br instruction, or None when there is none."""
        if not self.instructions:
            return None
        last = self.instructions[-1]
        return last if last.op_id in (OpID.RET, OpID.BR) else None

    def add_pre_basic_block(self, bb: "BasicBlock") -> None:
        self.pre_basic_blocks.append(bb)

    def add_succ_basic_block(self, bb: "BasicBlock") -> None:
        self.succ_basic_blocks.append(bb)

    def remove_pre_basic_block(self, bb: "BasicBlock") -> None:
        self.pre_basic_blocks = [b for b in self.pre_basic_blocks if b is not bb]

    def remove_succ_basic_block(self, bb: "BasicBlock") -> None:
        self.succ_basic_blocks = [b for b in self.succ_basic_blocks if b is not bb]

    def erase_from_parent(self) -> None:
        self.parent.remove(self)

    def print(self) -> str:
        text = f"{self.name}:"
        preds = self.pre_basic_blocks
        if preds:
            text += _PREDS_PADDING + "; preds = "
            first = preds[0]
            for bb in preds:
                if bb is not first:
                    text += ", "
                text += print_as_op(bb, False)
        if self.parent is None:
            text += "\n; Error: Block without parent!"
        text += "\n"
        text += "".join(f"  {instr.print()}\n" for instr in self.instructions)
        return text