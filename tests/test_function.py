import pytest

from sysyir.function import Argument, BasicBlock, Function
from sysyir.module import Module
from sysyir.opcodes import OpID
from sysyir.types import FunctionType
from sysyir.values import User, Value


class _StubInst(User):
    def __init__(self, type, op_id, void=True, text="stub", operands=()):
        super().__init__(type, "", 0)
        self.op_id = op_id
        self._void = void
        self._text = text
        for op in operands:
            self.add_operand(op)

    def is_void(self):
        return self._void

    def print(self):
        return self._text


@pytest.fixture
def module():
    return Module("m")


def _func(module, ret=None, params=(), name="f"):
    ret = ret if ret is not None else module.int32_type
    return Function.create(FunctionType(ret, list(params), module), name, module)


def test_create_registers_and_builds_args(module):
    f = _func(module, params=[module.int32_type, module.float_type])
    assert module.functions == [f]
    assert f.num_of_args == 2
    assert [a.type for a in f.arguments] == [module.int32_type, module.float_type]
    assert [a.arg_no for a in f.arguments] == [0, 1]
    assert all(a.parent is f for a in f.arguments)


def test_return_type(module):
    f = _func(module, ret=module.void_type)
    assert f.return_type is module.void_type


def test_declaration_print(module):
    f = _func(module, params=[module.int32_type, module.float_type])
    assert f.is_declaration
    assert f.print() == "declare i32 @f(i32, float)\n"


def test_blocks_and_entry(module):
    f = _func(module)
    assert f.entry_block is None
    entry = BasicBlock(module, "entry", f)
    other = BasicBlock(module, "", f)
    assert f.entry_block is entry
    assert f.basic_blocks == [entry, other]
    assert f.num_basic_blocks == 2
    assert not f.is_declaration
    assert entry.module is module


def test_set_instr_name(module):
    f = _func(module, params=[module.int32_type, module.int32_type])
    BasicBlock(module, "entry", f)
    BasicBlock(module, "", f)
    f.set_instr_name()
    names = [a.name for a in f.arguments]
    assert names == ["arg0", "arg1"]
    assert f.basic_blocks[0].name == "entry"
    label = f.basic_blocks[1].name
    assert label.startswith("label")
    assert label not in names


def test_set_instr_name_skips_void_and_is_stable(module):
    f = _func(module)
    bb = BasicBlock(module, "entry", f)
    void_inst = _StubInst(module.void_type, OpID.STORE, void=True)
    val_inst = _StubInst(module.int32_type, OpID.ADD, void=False)
    bb.add_instruction(void_inst)
    bb.add_instruction(val_inst)
    f.set_instr_name()
    assert void_inst.name == ""
    assert val_inst.name.startswith("op")
    first = val_inst.name
    f.set_instr_name()
    assert val_inst.name == first


def test_print_definition(module):
    f = _func(module, ret=module.void_type, name="main")
    BasicBlock(module, "entry", f)
    assert f.print() == "define void @main() {\nentry:\n}"


def test_print_definition_with_args(module):
    f = _func(module, params=[module.int32_type])
    bb = BasicBlock(module, "entry", f)
    bb.add_instruction(_StubInst(module.void_type, OpID.RET, text="ret void"))
    text = f.print()
    arg = f.arguments[0]
    assert text.startswith(f"define i32 @f({arg.print()}) {{\n")
    assert "  ret void\n" in text
    assert text.endswith("}")


def test_argument_print(module):
    arg = Argument(module.float_type, "x")
    assert arg.print() == "float %x"


def test_function_as_operand(module):
    f = _func(module, name="compute")
    assert f.as_operand() == "@compute"


def test_instruction_ordering(module):
    f = _func(module)
    bb = BasicBlock(module, "entry", f)
    a = _StubInst(module.void_type, OpID.STORE)
    b = _StubInst(module.void_type, OpID.STORE)
    c = _StubInst(module.void_type, OpID.STORE)
    bb.add_instruction(a)
    bb.add_instr_begin(b)
    bb.insert_instruction(1, c)
    assert bb.instructions == [b, c, a]


def test_delete_instr_removes_uses(module):
    f = _func(module)
    bb = BasicBlock(module, "entry", f)
    operand = Value(module.int32_type, "v")
    inst = _StubInst(module.void_type, OpID.STORE, operands=[operand])
    bb.add_instruction(inst)
    assert len(operand.use_list) == 1
    bb.delete_instr(inst)
    assert bb.instructions == []
    assert operand.use_list == []


def test_terminator(module):
    f = _func(module)
    bb = BasicBlock(module, "entry", f)
    assert bb.terminator is None
    bb.add_instruction(_StubInst(module.void_type, OpID.STORE))
    assert bb.terminator is None
    br = _StubInst(module.void_type, OpID.BR)
    bb.add_instruction(br)
    assert bb.terminator is br
    ret_bb = BasicBlock(module, "r", f)
    ret = _StubInst(module.void_type, OpID.RET)
    ret_bb.add_instruction(ret)
    assert ret_bb.terminator is ret


def test_remove_unlinks_cfg(module):
    f = _func(module)
    a = BasicBlock(module, "a", f)
    b = BasicBlock(module, "b", f)
    c = BasicBlock(module, "c", f)
    a.add_succ_basic_block(b)
    b.add_pre_basic_block(a)
    b.add_succ_basic_block(c)
    c.add_pre_basic_block(b)
    b.erase_from_parent()
    assert f.basic_blocks == [a, c]
    assert a.succ_basic_blocks == []
    assert c.pre_basic_blocks == []


def test_print_block_with_preds(module):
    f = _func(module)
    a = BasicBlock(module, "a", f)
    b = BasicBlock(module, "b", f)
    target = BasicBlock(module, "t", f)
    target.add_pre_basic_block(a)
    target.add_pre_basic_block(b)
    text = target.print()
    assert text.startswith("t:")
    assert text.endswith("; preds = %a, %b\n")


def test_print_block_without_parent(module):
    bb = BasicBlock(module, "lonely")
    assert bb.parent is None
    assert bb.print() == "lonely:\n; Error: Block without parent!\n"
    assert bb.module is module