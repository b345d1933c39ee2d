import pytest

from sysyir.module import Module
from sysyir.types import ArrayType, FunctionType, PointerType, TypeID


@pytest.fixture
def module():
    return Module("m")


def test_primitive_prints(module):
    assert module.int32_type.print() == "i32"
    assert module.int1_type.print() == "i1"
    assert module.float_type.print() == "float"
    assert module.void_type.print() == "void"
    assert module.label_type.print() == "label"


def test_type_predicates(module):
    assert module.int32_type.is_integer_type()
    assert not module.int32_type.is_float_type()
    assert module.float_type.is_float_type()
    assert module.void_type.is_void_type()
    assert module.label_type.is_label_type()
    assert module.int1_type.tid is TypeID.INTEGER


def test_pointer_cached_and_printed(module):
    p1 = PointerType.get(module.int32_type)
    p2 = PointerType.get(module.int32_type)
    assert p1 is p2
    assert p1 is module.int32_ptr_type()
    assert p1.is_pointer_type()
    assert p1.pointer_element_type is module.int32_type
    assert p1.print() == module.int32_type.print() + "*"


def test_pointer_element_none_for_non_pointer(module):
    assert module.int32_type.pointer_element_type is None
    assert module.int32_type.array_element_type is None


def test_array_cached_and_printed(module):
    a = ArrayType.get(module.int32_type, 4)
    assert a is ArrayType.get(module.int32_type, 4)
    assert a is not ArrayType.get(module.int32_type, 5)
    assert a.print() == "[4 x i32]"
    assert a.array_element_type is module.int32_type


def test_nested_array_print(module):
    inner = ArrayType.get(module.float_type, 3)
    outer = ArrayType.get(inner, 2)
    assert outer.print() == "[2 x [3 x float]]"


def test_sizes(module):
    assert module.int32_type.size == 4
    assert module.int1_type.size == 1
    assert module.float_type.size == 4
    assert module.void_type.size == 0
    arr = ArrayType.get(module.int32_type, 6)
    assert arr.size == 6 * module.int32_type.size
    assert PointerType.get(arr).size == arr.size
    assert PointerType.get(module.float_type).size == 4


def test_function_type(module):
    fty = FunctionType(module.int32_type, [module.int32_type, module.float_ptr_type()], module)
    assert fty.num_of_args == 2
    assert fty.param_type(1) is module.float_ptr_type()
    assert fty.return_type is module.int32_type
    assert fty.print() == "i32 (i32, float*)"
    assert fty.is_function_type()


def test_validity_predicates(module):
    assert FunctionType.is_valid_return_type(module.void_type)
    assert not FunctionType.is_valid_return_type(module.float_type)
    assert FunctionType.is_valid_argument_type(module.int32_ptr_type())
    assert not FunctionType.is_valid_argument_type(module.label_type)
    assert ArrayType.is_valid_element_type(module.float_type)
    assert not ArrayType.is_valid_element_type(module.int32_ptr_type())


def test_types_registered_with_module(module):
    arr = ArrayType.get(module.int1_type, 2)
    assert arr in module.types
    assert module.int32_type in module.types