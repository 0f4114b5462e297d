"""Identifier case helpers for generated Java source."""

from __future__ import annotations

import re

_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")


def lower_camel(name: str) -> str:
    if not name:
        return name
    return name[0].lower() + name[1:]


def upper_camel(name: str) -> str:
    if not name:
        return name
    return name[0].upper() + name[1:]


def snake_case(name: str) -> str:
    """``createdAt`` -> ``created_at``; only lower-to-upper boundaries split."""
    return _CAMEL_BOUNDARY.sub(r"\1_\2", name).lower()
