"""Base class for syntax tree nodes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from zenlang.compiler import Compiler

__all__ = ["Node"]


class Node(ABC):
    """A syntax tree node that emits instructions into a compiler's module.

    Nodes that own nested nodes set ``children``; those are compiled after
    the node itself by ``compile_all``.
    """

    children: Sequence[Node] = ()

    def disable_push(self) -> None:
        """Stop the node from leaving its value on the stack.

        Nodes used as bare statements are told this so that unused values
        do not pile up; nodes without a value ignore it.
        """

    def compile_all(self, compiler: Compiler) -> None:
        """Compile this node, then its children depth first."""
        self.compile(compiler)
        for child in self.children:
            child.compile_all(compiler)

    @abstractmethod
    def compile(self, compiler: Compiler) -> None:
        """Emit this node's instructions; raises CompileError on failure."""