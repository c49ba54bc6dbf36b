"""Instructions executed by the virtual machine."""

from __future__ import annotations

from enum import Enum
from typing import Any

__all__ = ["Op", "Opcode"]

_INT_BITS = {"u8": 8, "u32": 32, "u64": 64}


class Op(Enum):
    """Instruction kinds.

    The value is the variant index used in the binary module format;
    ``operands`` names the operand types the instruction carries.
    """

    operands: tuple[str, ...]

    def __new__(cls, code: int, *operands: str) -> Op:
        member = object.__new__(cls)
        member._value_ = code
        member.operands = operands
        return member

    CALL = (0,)
    VMCALL = (1, "u8")
    DYNVMCALL = (2,)
    LOADCN = (3, "f64")
    LOADCNU = (4,)
    LOADCB = (5, "bool")
    LOADCS = (6, "string")
    LOADV = (7, "string")
    STOREV = (8, "string")
    PUSHRET = (9,)
    CAFSE = (10, "u64")
    IAFS = (11,)
    CDFSE = (12, "strings")
    AIAFS = (13, "string", "u64")
    BFAS = (14,)
    EFAS = (15,)
    POP = (16,)
    BST = (17, "u32")
    BSNN = (18, "u32")
    BR = (19, "u32")
    ADD = (20,)
    SUB = (21,)
    MUL = (22,)
    DIV = (23,)
    EQ = (24,)
    NEQ = (25,)
    LT = (26,)
    GT = (27,)
    LE = (28,)
    GE = (29,)
    BSHR = (30,)
    BSHL = (31,)
    BAND = (32,)
    BOR = (33,)
    RET = (34,)


def _coerce(kind: str, value: Any) -> Any:
    if kind in _INT_BITS:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{kind} operand must be an int, got {value!r}")
        if not 0 <= value < 1 << _INT_BITS[kind]:
            raise ValueError(f"{value} does not fit in {kind}")
        return value
    if kind == "f64":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"f64 operand must be a number, got {value!r}")
        return float(value)
    if kind == "bool":
        if not isinstance(value, bool):
            raise TypeError(f"bool operand must be a bool, got {value!r}")
        return value
    if kind == "string":
        if not isinstance(value, str):
            raise TypeError(f"string operand must be a str, got {value!r}")
        return value
    if isinstance(value, str):
        raise TypeError("string list operand must be a sequence of str, not a str")
    items = tuple(value)
    if not all(isinstance(item, str) for item in items):
        raise TypeError("string list operand must contain only str")
    return items


class Opcode:
    """One immutable instruction: an ``Op`` and its operands."""

    __slots__ = ("_op", "_args")

    def __init__(self, op: Op, *args: Any) -> None:
        if not isinstance(op, Op):
            raise TypeError(f"expected an Op, got {op!r}")
        if len(args) != len(op.operands):
            raise TypeError(
                f"{op.name} takes {len(op.operands)} operand(s), got {len(args)}"
            )
        self._op = op
        self._args = tuple(_coerce(kind, arg) for kind, arg in zip(op.operands, args))

    @property
    def op(self) -> Op:
        return self._op

    @property
    def args(self) -> tuple[Any, ...]:
        return self._args

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Opcode):
            return NotImplemented
        return self._op is other._op and self._args == other._args

    def __hash__(self) -> int:
        return hash((self._op, self._args))

    def __repr__(self) -> str:
        inner = ", ".join([f"Op.{self._op.name}", *map(repr, self._args)])
        return f"Opcode({inner})"