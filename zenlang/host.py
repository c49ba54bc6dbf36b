"""Host services the virtual machine relies on for I/O and module lookup."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import Callable, Mapping

from zenlang.module import Module, ModuleDecodeError

__all__ = ["Platform", "StdPlatform"]


class Platform(ABC):
    """Operating-system dependent services used by the virtual machine."""

    @abstractmethod
    def print(self, s: str) -> None:
        """Write ``s`` without a trailing newline."""

    def println(self, s: str) -> None:
        """Write ``s`` followed by a newline."""
        self.print(s + "\n")

    @abstractmethod
    def get_string(self) -> str:
        """Read one line of input."""

    def get_module(self, name: str) -> Module | None:
        """Find a module by name; None if it is not available."""
        return None

    @abstractmethod
    def read_file_bytes(self, name: str) -> bytes | None:
        """Read a whole file; None if it cannot be read."""

    @abstractmethod
    def write_file_bytes(self, name: str, data: bytes) -> None:
        """Write a whole file, ignoring failures."""


class StdPlatform(Platform):
    """Platform backed by standard streams and the local file system.

    ``builtin_modules`` maps module names to factories that build them;
    other modules are loaded from ``<name>.zenc`` in the working directory.
    """

    def __init__(
        self, builtin_modules: Mapping[str, Callable[[], Module]] | None = None
    ) -> None:
        self.builtin_modules = dict(builtin_modules or {})

    def print(self, s: str) -> None:
        sys.stdout.write(s)
        sys.stdout.flush()

    def get_string(self) -> str:
        try:
            line = sys.stdin.readline()
        except OSError:
            line = ""
        return line.strip()

    def get_module(self, name: str) -> Module | None:
        factory = self.builtin_modules.get(name)
        if factory is not None:
            return factory()
        data = self.read_file_bytes(name + ".zenc")
        if data is None:
            return None
        try:
            return Module.load(data)
        except ModuleDecodeError:
            return None

    def read_file_bytes(self, name: str) -> bytes | None:
        try:
            with open(name, "rb") as handle:
                return handle.read()
        except OSError:
            return None

    def write_file_bytes(self, name: str, data: bytes) -> None:
        try:
            with open(name, "wb") as handle:
                handle.write(data)
        except OSError:
            pass