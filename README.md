# zenlang

The compiling and packaging side of ZenLang, a small scripting language.
The package turns a ZenLang syntax tree into a flat list of bytecode
instructions, stores that code together with its function table and
dependencies in a binary module, and provides the host layer through which
a virtual machine prints, reads input, reads and writes files and finds
other modules.

## What is inside

- `zenlang.opcode` – the instruction set. `Op` names every instruction and
  the operand types it carries; `Opcode(op, *args)` is one immutable
  instruction. Operands are checked on construction: a wrong count or type
  raises `TypeError`, an integer out of range raises `ValueError`.
- `zenlang.module` – `Module` holds a module's `dependencies`, `name`,
  `functions` (a list of `ModuleFunction` entries: name, start address,
  argument count) and `opcodes`. `Module.compile()` serialises a module to
  bytes and `Module.load(data)` builds one from bytes; malformed input
  raises `ModuleDecodeError` (a `ValueError`). `Module.get_opcode(addr)`
  returns the instruction at an address.
- `zenlang.nodes` – the syntax tree. Every node derives from
  `zenlang.nodes.node.Node` and emits its instructions into the compiler's
  module:
  - `zenlang.nodes.expressions`: `AstNumber`, `AstString`, `AstBoolean`,
    `AstNull`, `AstVarRef`, `AstArray`, `AstDict`, `AstArrayIndex`,
    `AstBinop` (with the operators in `BinopOp`) and `AstFuncCall`;
  - `zenlang.nodes.statements`: `AstAssign`, `AstArrayAssign`, `AstReturn`,
    `AstVmcall`, `AstDynmod`, `AstMod`, `AstFunction` and the tree root
    `AstRoot`;
  - `zenlang.nodes.control`: `AstIfChain` with `AstIfStmt`, `AstElifStmt`
    and `AstElseStmt` (including the `if let` / `elif let` forms),
    `AstWhileStmt`, `AstBreak` and `AstContinue`.

  Nodes used as bare statements can be told `disable_push()` so they do not
  leave an unused value on the stack.
- `zenlang.compiler` – `Compiler` asks its parser object to `parse()`, then
  compiles the parser's `root` into `compiler.module`. It records warnings
  in `compiler.warnings`, for instance when a function implicitly returns
  null. Errors in the tree are raised as `CompileError`.
- `zenlang.func_attr` – `FunctionAttribute`, the attributes a function may
  carry. `FunctionAttribute.map("naked")` gives `FunctionAttribute.NAKED`
  (any other name gives `None`); a naked function does not store its
  arguments into named variables on entry.
- `zenlang.interop` – `interop_ok(value)` and `interop_err(value)` build the
  result dictionaries (`_ok` / `_err`) that ZenLang code understands.
- `zenlang.host` – `Platform`, the abstract interface a virtual machine
  talks to, and `StdPlatform`, an implementation on standard input and
  output and the local file system. `StdPlatform(builtin_modules)` takes an
  optional mapping of module names to factories; for any other name
  `get_module(name)` loads `<name>.zenc` from the working directory and
  returns `None` if it is missing or invalid.
- `zenlang.unescape` – `unescape(s)` turns backslash escapes written out in
  source text (`\n`, `\t`, `\"`, `\x41`, `\u00e9`, octal `\101`, ...) into
  the characters they stand for, and raises `ValueError` for unknown,
  truncated or malformed escapes.

## Compiling a tree

The compiler works with any object that has a `root` node and a `parse()`
method:

```python
from zenlang.compiler import Compiler
from zenlang.nodes.expressions import AstNumber
from zenlang.nodes.statements import AstFunction, AstReturn, AstRoot


class TreeSource:
    def __init__(self, root):
        self.root = root

    def parse(self):
        pass


main = AstFunction(name="main", children=[AstReturn(AstNumber(42.0))])
compiler = Compiler(TreeSource(AstRoot(children=[main])))
compiler.compile()

module = compiler.module
module.name = "answer"
# module.opcodes == [Opcode(Op.LOADCN, 42.0), Opcode(Op.RET)]
```

## Compiled modules

A compiled module is a self-contained byte string. Writing one to a file
and reading it back gives an equal module:

```python
from pathlib import Path

from zenlang.module import Module

data = module.compile()
Path("answer.zenc").write_bytes(data)

restored = Module.load(Path("answer.zenc").read_bytes())
assert restored == module
```

## Results between host and script

```python
from zenlang.interop import interop_ok, interop_err

interop_ok(3)        # {"_ok": 3, "_err": None}
interop_err("oops")  # {"_ok": None, "_err": "oops"}
```

## Escapes in string literals

```python
from zenlang.unescape import unescape

unescape(r"line one\nline two")   # a two-line string
unescape(r"\x41\u00e9")           # "Aé"
```

## What the package does not do

- It has no tokenizer or parser for ZenLang source text. Trees are built
  from the node classes directly, and `Compiler` takes any object that
  provides them.
- It has no virtual machine: compiled modules can be produced, saved and
  loaded, but not executed.
- It ships no standard library module; `StdPlatform` only knows the
  built-in modules it is given and `.zenc` files on disk.
- There is no command-line program.

## Running the tests

The test suite uses pytest and is declared in the `test` extra.