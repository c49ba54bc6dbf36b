"""Attributes that can be attached to function definitions."""

from __future__ import annotations

from enum import Enum

__all__ = ["FunctionAttribute"]


class FunctionAttribute(Enum):
    """A function attribute, valued by its name in source code."""

    NAKED = "naked"

    @classmethod
    def map(cls, name: str) -> FunctionAttribute | None:
        """Return the attribute with the given source name, or None."""
        try:
            return cls(name)
        except ValueError:
            return None