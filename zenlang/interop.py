"""Result values shared between the host and running programs."""

from __future__ import annotations

from typing import Any

__all__ = ["interop_ok", "interop_err"]


def interop_ok(value: Any) -> dict[str, Any]:
    """Return a result dictionary holding a success value."""
    return {"_ok": value, "_err": None}


def interop_err(value: Any) -> dict[str, Any]:
    """Return a result dictionary holding an error value."""
    return {"_ok": None, "_err": value}