"""Compiler that turns a parsed syntax tree into a module."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from zenlang.module import Module

if TYPE_CHECKING:
    from zenlang.nodes.node import Node

__all__ = ["CompileError", "Compiler"]


class CompileError(Exception):
    """Raised when source cannot be parsed or compiled."""


class _Parser(Protocol):
    root: Node

    def parse(self) -> None:
        """Parse the source into ``root``, raising CompileError on failure."""


class Compiler:
    """Compiles the tree produced by a parser into ``module``.

    The loop index stacks hold, for each enclosing loop, the positions of
    branch instructions emitted by ``break`` and ``continue`` that still
    need their target addresses.
    """

    def __init__(self, parser: _Parser) -> None:
        self.parser = parser
        self.module = Module()
        self.while_break_indexes: list[list[int]] = []
        self.while_continue_indexes: list[list[int]] = []
        self.warnings: list[str] = []

    def compile(self) -> None:
        """Parse the source and compile the whole tree into ``module``."""
        self.warnings.clear()
        self.parser.parse()
        self.parser.root.compile_all(self)