"""Expression nodes: literals, variable references, operators and calls."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from zenlang.compiler import CompileError
from zenlang.nodes.node import Node
from zenlang.opcode import Op, Opcode

if TYPE_CHECKING:
    from zenlang.compiler import Compiler

__all__ = [
    "AstArray",
    "AstArrayIndex",
    "BinopOp",
    "AstBinop",
    "AstBoolean",
    "AstDict",
    "AstNull",
    "AstNumber",
    "AstString",
    "AstVarRef",
    "AstFuncCall",
]


def _required(node: Node | None, what: str) -> Node:
    if node is None:
        raise CompileError(f"{what} is None")
    return node


@dataclass
class AstArray(Node):
    """Array literal built from its element expressions."""

    values: list[Node] = field(default_factory=list)
    do_push: bool = True

    def compile(self, compiler: Compiler) -> None:
        if not self.do_push:
            return
        for value in self.values:
            value.compile(compiler)
        compiler.module.opcodes.append(Opcode(Op.CAFSE, len(self.values)))


@dataclass
class AstArrayIndex(Node):
    """Indexing of an array or dictionary: ``array[index]``."""

    array: Node | None = None
    index: Node | None = None
    do_push: bool = True

    def disable_push(self) -> None:
        self.do_push = False

    def compile(self, compiler: Compiler) -> None:
        if not self.do_push:
            return
        _required(self.array, "array").compile(compiler)
        _required(self.index, "index").compile(compiler)
        compiler.module.opcodes.append(Opcode(Op.IAFS))


class BinopOp(Enum):
    """Binary operators, valued by the instruction each one compiles to."""

    PLUS = Op.ADD
    MINUS = Op.SUB
    MUL = Op.MUL
    DIV = Op.DIV
    EQ = Op.EQ
    NEQ = Op.NEQ
    LT = Op.LT
    GT = Op.GT
    LE = Op.LE
    GE = Op.GE
    BITSHR = Op.BSHR
    BITSHL = Op.BSHL
    BITAND = Op.BAND
    BITOR = Op.BOR


@dataclass
class AstBinop(Node):
    """Binary operation on two operand expressions."""

    left: Node | None = None
    right: Node | None = None
    op: BinopOp = BinopOp.PLUS
    do_push: bool = True

    def disable_push(self) -> None:
        self.do_push = False

    def compile(self, compiler: Compiler) -> None:
        _required(self.left, "left").compile(compiler)
        _required(self.right, "right").compile(compiler)
        opcodes = compiler.module.opcodes
        opcodes.append(Opcode(self.op.value))
        if not self.do_push:
            opcodes.append(Opcode(Op.POP))


@dataclass
class AstBoolean(Node):
    """Boolean constant."""

    flag: bool = False
    do_push: bool = True

    def compile(self, compiler: Compiler) -> None:
        if self.do_push:
            compiler.module.opcodes.append(Opcode(Op.LOADCB, self.flag))


@dataclass
class AstDict(Node):
    """Dictionary literal: ordered ``(key, expression)`` pairs."""

    entries: list[tuple[str, Node]] = field(default_factory=list)
    do_push: bool = True

    def compile(self, compiler: Compiler) -> None:
        if not self.do_push:
            return
        names = []
        for name, value in self.entries:
            value.compile(compiler)
            names.append(name)
        compiler.module.opcodes.append(Opcode(Op.CDFSE, names))


@dataclass
class AstNull(Node):
    """The null constant."""

    do_push: bool = True

    def compile(self, compiler: Compiler) -> None:
        if self.do_push:
            compiler.module.opcodes.append(Opcode(Op.LOADCNU))


@dataclass
class AstNumber(Node):
    """Numeric constant."""

    number: float = 0.0
    do_push: bool = True

    def compile(self, compiler: Compiler) -> None:
        if self.do_push:
            compiler.module.opcodes.append(Opcode(Op.LOADCN, self.number))


@dataclass
class AstString(Node):
    """String constant."""

    string: str = ""
    do_push: bool = True

    def compile(self, compiler: Compiler) -> None:
        if self.do_push:
            compiler.module.opcodes.append(Opcode(Op.LOADCS, self.string))


@dataclass
class AstVarRef(Node):
    """Reference to a variable by name."""

    name: str = ""
    do_push: bool = True

    def disable_push(self) -> None:
        self.do_push = False

    def compile(self, compiler: Compiler) -> None:
        if self.do_push:
            compiler.module.opcodes.append(Opcode(Op.LOADV, self.name))


@dataclass
class AstFuncCall(Node):
    """Call of the function that ``reference`` evaluates to."""

    reference: Node | None = None
    args: list[Node] = field(default_factory=list)
    do_push: bool = True

    def disable_push(self) -> None:
        self.do_push = False

    def compile(self, compiler: Compiler) -> None:
        opcodes = compiler.module.opcodes
        opcodes.append(Opcode(Op.BFAS))
        for arg in self.args:
            arg.compile(compiler)
        opcodes.append(Opcode(Op.EFAS))
        _required(self.reference, "reference").compile(compiler)
        opcodes.append(Opcode(Op.CALL))
        if self.do_push:
            opcodes.append(Opcode(Op.PUSHRET))