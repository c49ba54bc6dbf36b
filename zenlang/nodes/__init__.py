"""Syntax tree nodes for expressions, statements and control flow that emit bytecode."""