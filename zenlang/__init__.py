"""Syntax tree compiler, bytecode modules and host platform layer for ZenLang."""

__version__ = "0.1.0"