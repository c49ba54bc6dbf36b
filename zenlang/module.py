"""Compiled modules and their binary serialization."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Any, Callable

from zenlang.opcode import Op, Opcode

__all__ = ["ModuleDecodeError", "ModuleFunction", "Module"]

_INT_BITS = {"u32": 32, "u64": 64}
_WIDE_MARKERS = {251: (16, "<H"), 252: (32, "<I"), 253: (64, "<Q")}


class ModuleDecodeError(ValueError):
    """Raised when bytes do not hold a valid serialized module."""


@dataclass
class ModuleFunction:
    """A function entry: name, start address and argument count."""

    name: str
    addr: int
    args_count: int


def _put_varint(out: bytearray, value: int, bits: int) -> None:
    if not 0 <= value < 1 << bits:
        raise ValueError(f"{value} does not fit in u{bits}")
    if value < 251:
        out.append(value)
    elif value <= 0xFFFF:
        out.append(251)
        out += struct.pack("<H", value)
    elif value <= 0xFFFFFFFF:
        out.append(252)
        out += struct.pack("<I", value)
    else:
        out.append(253)
        out += struct.pack("<Q", value)


def _put_string(out: bytearray, text: str) -> None:
    raw = text.encode("utf-8")
    _put_varint(out, len(raw), 64)
    out += raw


def _put_operand(out: bytearray, kind: str, value: Any) -> None:
    if kind == "u8":
        out.append(value)
    elif kind in _INT_BITS:
        _put_varint(out, value, _INT_BITS[kind])
    elif kind == "f64":
        out += struct.pack("<d", value)
    elif kind == "bool":
        out.append(1 if value else 0)
    elif kind == "string":
        _put_string(out, value)
    else:
        _put_varint(out, len(value), 64)
        for item in value:
            _put_string(out, item)


class _Reader:
    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    def take(self, count: int) -> bytes:
        end = self._pos + count
        if end > len(self._data):
            raise ModuleDecodeError("unexpected end of input")
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def byte(self) -> int:
        return self.take(1)[0]

    def varint(self, bits: int) -> int:
        marker = self.byte()
        if marker < 251:
            return marker
        width = _WIDE_MARKERS.get(marker)
        if width is None or width[0] > bits:
            raise ModuleDecodeError(f"invalid integer marker {marker} for u{bits}")
        size, fmt = width
        return struct.unpack(fmt, self.take(size // 8))[0]

    def string(self) -> str:
        raw = self.take(self.varint(64))
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ModuleDecodeError("string is not valid UTF-8") from exc

    def boolean(self) -> bool:
        value = self.byte()
        if value not in (0, 1):
            raise ModuleDecodeError(f"invalid boolean byte {value}")
        return value == 1

    def sequence(self, read_item: Callable[[], Any]) -> list[Any]:
        return [read_item() for _ in range(self.varint(64))]

    def operand(self, kind: str) -> Any:
        if kind == "u8":
            return self.byte()
        if kind in _INT_BITS:
            return self.varint(_INT_BITS[kind])
        if kind == "f64":
            return struct.unpack("<d", self.take(8))[0]
        if kind == "bool":
            return self.boolean()
        if kind == "string":
            return self.string()
        return self.sequence(self.string)

    def opcode(self) -> Opcode:
        code = self.varint(32)
        try:
            op = Op(code)
        except ValueError:
            raise ModuleDecodeError(f"unknown opcode variant {code}") from None
        return Opcode(op, *(self.operand(kind) for kind in op.operands))

    def function(self) -> ModuleFunction:
        name = self.string()
        addr = self.varint(32)
        args_count = self.varint(64)
        return ModuleFunction(name, addr, args_count)


@dataclass
class Module:
    """Compiled code: dependencies, name, function table and instructions."""

    dependencies: list[str] = field(default_factory=list)
    name: str = ""
    functions: list[ModuleFunction] = field(default_factory=list)
    opcodes: list[Opcode] = field(default_factory=list)

    def compile(self) -> bytes:
        """Serialize the module; raises ValueError if a field is out of range."""
        out = bytearray()
        _put_varint(out, len(self.dependencies), 64)
        for dependency in self.dependencies:
            _put_string(out, dependency)
        _put_string(out, self.name)
        _put_varint(out, len(self.functions), 64)
        for function in self.functions:
            _put_string(out, function.name)
            _put_varint(out, function.addr, 32)
            _put_varint(out, function.args_count, 64)
        _put_varint(out, len(self.opcodes), 64)
        for opcode in self.opcodes:
            _put_varint(out, opcode.op.value, 32)
            for kind, value in zip(opcode.op.operands, opcode.args):
                _put_operand(out, kind, value)
        return bytes(out)

    @classmethod
    def load(cls, data: bytes) -> Module:
        """Deserialize a module; trailing bytes are ignored."""
        reader = _Reader(data)
        dependencies = reader.sequence(reader.string)
        name = reader.string()
        functions = reader.sequence(reader.function)
        opcodes = reader.sequence(reader.opcode)
        return cls(dependencies, name, functions, opcodes)

    def get_opcode(self, addr: int) -> Opcode:
        """Return the instruction at ``addr``."""
        if addr < 0:
            raise IndexError(f"negative address {addr}")
        return self.opcodes[addr]