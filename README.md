# sysyir

`sysyir` is an in-memory intermediate representation for programs in the SysY
language. It models types, values, constants, global variables, functions,
basic blocks and instructions in SSA form, and prints a module as LLVM-style
textual IR.

## Installation

```
pip install .
```

The package depends only on the standard library.

## Building a module

```python
from sysyir.module import Module
from sysyir.types import FunctionType
from sysyir.function import Function, BasicBlock
from sysyir.constants import ConstantInt
from sysyir.instructions import BinaryInst, ReturnInst

m = Module("example")
fty = FunctionType(m.int32_type, [m.int32_type], m)
f = Function.create(fty, "inc", m)
entry = BasicBlock(m, "entry", f)

one = ConstantInt.create(1, m)
total = BinaryInst.create_add(f.arguments[0], one, entry, m)
ReturnInst.create_ret(total, entry)

m.set_print_name()
print(m.print())
```

The code above prints:

```
define i32 @inc(i32 %arg0) {
entry:
  %op1 = add i32 %arg0, 1
  ret i32 %op1
}
```

`Module.set_print_name` gives every unnamed argument, block and
value-producing instruction a name (`argN`, `labelN`, `opN`); values that
already have a name keep it.

## What the package provides

- `sysyir.types`: `Type`, `IntegerType`, `FloatType`, `FunctionType`,
  `ArrayType` and `PointerType`. A module interns its pointer and array
  types (`Module.pointer_type`, `Module.array_type`, `PointerType.get`,
  `ArrayType.get`), so two types are the same type only when they are the
  same object.
- `sysyir.values`: `Value`, `User`, `Use` and `print_as_op`. Values keep use
  lists and support `replace_all_use_with`.
- `sysyir.constants`: `ConstantInt` (wrapped to 32 bits; `create_bool` makes
  an `i1`), `ConstantFloat` (rounded to single precision and printed as the
  hex pattern of the widened double), `ConstantArray` and `ConstantZero`.
- `sysyir.globals`: `GlobalVariable`. `GlobalVariable.create` takes the type
  of the stored value and gives the global a pointer type to it.
- `sysyir.function`: `Function`, `Argument` and `BasicBlock`. A basic block
  tracks its predecessor and successor blocks; branches created with
  `BranchInst.create_br` and `create_cond_br` record these edges.
- `sysyir.instructions`: arithmetic, comparison, call, branch, return,
  getelementptr, load, store, alloca, conversion and phi instructions. Each
  has a static constructor (`create_add`, `create_cmp`, `create`,
  `create_gep`, ...) that appends the new instruction to the given block,
  except `PhiInst.create_phi`, which only records the block as its parent;
  incoming values are added with `PhiInst.add_phi_pair`.
- `sysyir.opcodes`: the `OpID` and `CmpOp` enumerations and their printed
  names.
- `sysyir.passes`: the `Pass` base class and `PassManager`, plus
  `expr_less`, a strict ordering of expressions under which two instructions
  that compute the same value compare equal (operands of commutative
  operators are put in a canonical order first).

## Writing a pass

```python
from sysyir.passes import Pass, PassManager

class CountInstructions(Pass):
    def execute(self):
        self.count = sum(
            len(bb.instructions)
            for f in self.module.functions
            for bb in f.basic_blocks
        )

manager = PassManager(m)
counter = manager.add_pass(CountInstructions)
manager.execute()
print(counter.name, counter.count)   # CountInstructions 2
```

`PassManager.add_pass` instantiates the pass for the module, queues it and
returns it; `execute` runs the queued passes in order.

## What the package does not do

`sysyir` is the IR and a pass framework only. It has no SysY parser or
front end that turns source text into IR, no command-line compiler, and no
ready-made optimisation passes: dominator trees, promotion of memory to
registers, liveness analysis and common-subexpression elimination have to be
written as `Pass` subclasses by the user.

## Running the tests

```
pip install .[test]
pytest
```