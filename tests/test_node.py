import pytest

from zenlang.compiler import CompileError, Compiler
from zenlang.nodes.node import Node
from zenlang.opcode import Op, Opcode


class Emit(Node):
    def __init__(self, name, children=()):
        self.name = name
        self.children = list(children)

    def compile(self, compiler):
        compiler.module.opcodes.append(Opcode(Op.LOADV, self.name))


class Fail(Node):
    def compile(self, compiler):
        raise CompileError("broken")


class NoParser:
    root = None

    def parse(self):
        raise CompileError("not used")


def emitted(compiler):
    return [opcode.args[0] for opcode in compiler.module.opcodes]


def test_node_is_abstract():
    with pytest.raises(TypeError):
        Node()


def test_compile_all_is_depth_first_parent_first():
    tree = Emit("a", [Emit("b", [Emit("c")]), Emit("d")])
    compiler = Compiler(NoParser())
    tree.compile_all(compiler)
    assert emitted(compiler) == ["a", "b", "c", "d"]


def test_leaf_without_children_compiles_once():
    compiler = Compiler(NoParser())
    Emit("x").compile_all(compiler)
    assert emitted(compiler) == ["x"]


def test_default_disable_push_keeps_output():
    node = Emit("x")
    node.disable_push()
    compiler = Compiler(NoParser())
    node.compile_all(compiler)
    assert emitted(compiler) == ["x"]


def test_error_stops_remaining_children():
    tree = Emit("a", [Fail(), Emit("b")])
    compiler = Compiler(NoParser())
    with pytest.raises(CompileError, match="broken"):
        tree.compile_all(compiler)
    assert emitted(compiler) == ["a"]