"""Control flow nodes: if chains, while loops, break and continue."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable

from zenlang.compiler import CompileError
from zenlang.nodes.node import Node
from zenlang.opcode import Op, Opcode

if TYPE_CHECKING:
    from zenlang.compiler import Compiler

__all__ = [
    "AstBreak",
    "AstContinue",
    "AstIfStmt",
    "AstElifStmt",
    "AstElseStmt",
    "AstIfChain",
    "AstWhileStmt",
]

_CONDITIONAL_BRANCHES = (Op.BST, Op.BSNN)


def _patch(opcodes: list[Opcode], index: int, kinds: Iterable[Op], addr: int) -> None:
    """Set the target of the branch at ``index`` if it is one of ``kinds``."""
    current = opcodes[index]
    if current.op in kinds:
        opcodes[index] = Opcode(current.op, addr)


def _emit_placeholder_branch(compiler: Compiler, op: Op) -> int:
    opcodes = compiler.module.opcodes
    index = len(opcodes)
    opcodes.append(Opcode(op, 0))
    return index


@dataclass
class AstBreak(Node):
    """Jump out of the innermost enclosing loop."""

    def compile(self, compiler: Compiler) -> None:
        addr = len(compiler.module.opcodes)
        if compiler.while_break_indexes:
            compiler.while_break_indexes[-1].append(addr)
        compiler.module.opcodes.append(Opcode(Op.BR, 0))


@dataclass
class AstContinue(Node):
    """Jump back to the condition of the innermost enclosing loop."""

    def compile(self, compiler: Compiler) -> None:
        addr = len(compiler.module.opcodes)
        if compiler.while_continue_indexes:
            compiler.while_continue_indexes[-1].append(addr)
        compiler.module.opcodes.append(Opcode(Op.BR, 0))


@dataclass
class AstIfStmt(Node):
    """Head of an if chain: ``if cond {}`` or ``if let name = expr {}``."""

    value: Node | None = None
    body: list[Node] = field(default_factory=list)
    if_let: bool = False
    if_let_name: str = ""
    if_let_expr: Node | None = None

    def compile(self, compiler: Compiler) -> None:
        """Emits nothing; the enclosing chain compiles this branch."""


@dataclass
class AstElifStmt(Node):
    """An ``elif`` branch of an if chain, optionally in ``elif let`` form."""

    value: Node | None = None
    body: list[Node] = field(default_factory=list)
    elif_let: bool = False
    elif_let_name: str = ""
    elif_let_expr: Node | None = None

    def compile(self, compiler: Compiler) -> None:
        """Emits nothing; the enclosing chain compiles this branch."""


@dataclass
class AstElseStmt(Node):
    """The ``else`` branch of an if chain."""

    body: list[Node] = field(default_factory=list)

    def compile(self, compiler: Compiler) -> None:
        """Emits nothing; the enclosing chain compiles this branch."""


def _compile_let_test(compiler: Compiler, expr: Node, name: str) -> int:
    expr.compile(compiler)
    opcodes = compiler.module.opcodes
    opcodes.append(Opcode(Op.STOREV, name))
    opcodes.append(Opcode(Op.LOADV, name))
    return _emit_placeholder_branch(compiler, Op.BSNN)


@dataclass
class AstIfChain(Node):
    """An ``if`` with any number of ``elif`` branches and an optional ``else``.

    All conditions are evaluated first, each followed by a conditional
    branch to its block; a final unconditional branch leads to the ``else``
    block or past the chain. Every block ends with a branch past the chain.
    """

    head: AstIfStmt | None = None
    elifs: list[AstElifStmt] = field(default_factory=list)
    else_node: AstElseStmt | None = None

    def compile(self, compiler: Compiler) -> None:
        head = self.head
        if head is None:
            raise CompileError("self.head is None")

        branch_indexes: list[int] = []
        end_branch_indexes: list[int] = []

        if not head.if_let:
            if head.value is None:
                raise CompileError("head.value is None")
            head.value.compile(compiler)
            branch_indexes.append(_emit_placeholder_branch(compiler, Op.BST))
        else:
            if head.if_let_expr is None:
                raise CompileError("head.if_let_expr is None")
            branch_indexes.append(
                _compile_let_test(compiler, head.if_let_expr, head.if_let_name)
            )

        for elif_node in self.elifs:
            if not elif_node.elif_let:
                if elif_node.value is not None:
                    elif_node.value.compile(compiler)
                branch_indexes.append(_emit_placeholder_branch(compiler, Op.BST))
            else:
                if elif_node.elif_let_expr is None:
                    raise CompileError("elif_node.elif_let_expr is None")
                branch_indexes.append(
                    _compile_let_test(
                        compiler, elif_node.elif_let_expr, elif_node.elif_let_name
                    )
                )

        fallthrough_index = _emit_placeholder_branch(compiler, Op.BR)

        blocks = [head.body, *(elif_node.body for elif_node in self.elifs)]
        for branch_index, body in zip(branch_indexes, blocks):
            addr = len(compiler.module.opcodes)
            for node in body:
                node.compile_all(compiler)
            end_branch_indexes.append(_emit_placeholder_branch(compiler, Op.BR))
            _patch(compiler.module.opcodes, branch_index, _CONDITIONAL_BRANCHES, addr)

        else_addr = len(compiler.module.opcodes)
        if self.else_node is not None:
            for node in self.else_node.body:
                node.compile_all(compiler)

        opcodes = compiler.module.opcodes
        _patch(opcodes, fallthrough_index, (Op.BR,), else_addr)

        end = len(opcodes)
        for index in end_branch_indexes:
            _patch(opcodes, index, (Op.BR,), end)


@dataclass
class AstWhileStmt(Node):
    """A loop that runs its body while the condition is true."""

    value: Node | None = None
    body: list[Node] = field(default_factory=list)

    def compile(self, compiler: Compiler) -> None:
        cmp_addr = len(compiler.module.opcodes)

        if self.value is None:
            raise CompileError("self.value is None")
        self.value.compile(compiler)

        opcodes = compiler.module.opcodes
        opcodes.append(Opcode(Op.BST, len(opcodes) + 2))
        exit_branch_index = _emit_placeholder_branch(compiler, Op.BR)

        compiler.while_break_indexes.append([])
        compiler.while_continue_indexes.append([])
        try:
            for node in self.body:
                node.compile(compiler)

            opcodes = compiler.module.opcodes
            exit_addr = len(opcodes) + 1
            _patch(opcodes, exit_branch_index, (Op.BR,), exit_addr)
            opcodes.append(Opcode(Op.BR, cmp_addr))

            for index in compiler.while_break_indexes[-1]:
                _patch(opcodes, index, (Op.BR,), exit_addr)
            for index in compiler.while_continue_indexes[-1]:
                _patch(opcodes, index, (Op.BR,), cmp_addr)
        finally:
            compiler.while_break_indexes.pop()
            compiler.while_continue_indexes.pop()