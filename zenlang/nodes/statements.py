"""Statement nodes and the top-level declarations of a program."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from zenlang.compiler import CompileError
from zenlang.func_attr import FunctionAttribute
from zenlang.module import ModuleFunction
from zenlang.nodes.node import Node
from zenlang.opcode import Op, Opcode

if TYPE_CHECKING:
    from zenlang.compiler import Compiler

__all__ = [
    "AstArrayAssign",
    "AstAssign",
    "AstDynmod",
    "AstReturn",
    "AstVmcall",
    "AstMod",
    "AstFunction",
    "AstRoot",
]


def _required(node: Node | None, what: str) -> Node:
    if node is None:
        raise CompileError(f"{what} is None")
    return node


@dataclass
class AstArrayAssign(Node):
    """Assignment into an element of an array or dictionary variable."""

    name: str = ""
    indexes: list[Node] = field(default_factory=list)
    expr: Node | None = None

    def compile(self, compiler: Compiler) -> None:
        _required(self.expr, "expr").compile(compiler)
        for index in self.indexes:
            index.compile(compiler)
        compiler.module.opcodes.append(Opcode(Op.AIAFS, self.name, len(self.indexes)))


@dataclass
class AstAssign(Node):
    """Assignment of an expression to a variable."""

    name: str = ""
    expr: Node | None = None

    def compile(self, compiler: Compiler) -> None:
        _required(self.expr, "expr").compile(compiler)
        compiler.module.opcodes.append(Opcode(Op.STOREV, self.name))


@dataclass
class AstDynmod(Node):
    """Loading of a module whose name is computed at run time."""

    name: Node | None = None

    def compile(self, compiler: Compiler) -> None:
        _required(self.name, "name").compile(compiler)
        compiler.module.opcodes.append(Opcode(Op.VMCALL, 4))


@dataclass
class AstReturn(Node):
    """Return of a value from the current function."""

    value: Node | None = None

    def compile(self, compiler: Compiler) -> None:
        _required(self.value, "value").compile(compiler)
        compiler.module.opcodes.append(Opcode(Op.RET))


@dataclass
class AstVmcall(Node):
    """Direct call into a virtual machine service by number."""

    id: int = 0

    def compile(self, compiler: Compiler) -> None:
        compiler.module.opcodes.append(Opcode(Op.VMCALL, self.id))


@dataclass
class AstMod(Node):
    """Declaration of a module dependency."""

    name: str = ""

    def compile(self, compiler: Compiler) -> None:
        compiler.module.dependencies.append(self.name)


@dataclass
class AstFunction(Node):
    """Function definition with its arguments, attributes and body."""

    name: str = ""
    args: list[str] = field(default_factory=list)
    attrs: list[FunctionAttribute] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)

    def compile_all(self, compiler: Compiler) -> None:
        """Compile the function and its body, adding a null return if missing."""
        self.compile(compiler)
        for child in self.children:
            child.compile_all(compiler)
        opcodes = compiler.module.opcodes
        if not opcodes or opcodes[-1].op is not Op.RET:
            opcodes.append(Opcode(Op.LOADCNU))
            opcodes.append(Opcode(Op.RET))
            compiler.warnings.append(f"function {self.name} implicitly returns null")

    def compile(self, compiler: Compiler) -> None:
        if self.name == "main" and self.args:
            raise CompileError("main function should not accept any arguments")
        module = compiler.module
        module.functions.append(
            ModuleFunction(self.name, len(module.opcodes), len(self.args))
        )
        if FunctionAttribute.NAKED not in self.attrs:
            module.opcodes.extend(Opcode(Op.STOREV, arg) for arg in reversed(self.args))


@dataclass
class AstRoot(Node):
    """Top of the syntax tree; holds the program's declarations."""

    children: list[Node] = field(default_factory=list)

    def compile(self, compiler: Compiler) -> None:
        """The root emits nothing itself."""