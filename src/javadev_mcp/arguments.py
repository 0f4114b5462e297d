"""Argument accessors shared by tool and prompt collaborators.

The dispatcher passes ``arguments`` through untouched, so each
collaborator checks its own inputs with these helpers.
"""

from __future__ import annotations

from typing import Any

from javadev_mcp.protocol.errors import ArgumentError


def require_text(arguments: dict[str, Any], key: str) -> str:
    """Return ``arguments[key]`` as a string, raising if it is absent."""
    value = arguments.get(key)
    if value is None:
        raise ArgumentError(key)
    if isinstance(value, (dict, list)):
        raise ArgumentError(key, "expected a string")
    return str(value)


def optional_text(arguments: dict[str, Any], key: str, default: str) -> str:
    value = arguments.get(key)
    if value is None:
        return default
    return str(value)


def flag(arguments: dict[str, Any], key: str, default: bool) -> bool:
    """Read a boolean argument, accepting ``"true"``/``"false"`` strings too."""
    value = arguments.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    if isinstance(value, (int, float)):
        return value != 0
    return default
