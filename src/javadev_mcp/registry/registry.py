"""CapabilityRegistry — immutable name-to-binding catalog.

One registry exists per capability kind (tools, resources, prompts).  Each
entry binds a descriptor to the collaborator function that serves it.
Lookups are exact-match and case-sensitive; there is no prefix or
wildcard matching, even for URI-shaped keys.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

ToolHandler = Callable[[dict[str, Any]], dict[str, Any]]
ResourceHandler = Callable[[Path], dict[str, Any]]
PromptHandler = Callable[[dict[str, Any]], dict[str, Any]]

D = TypeVar("D", bound=BaseModel)
H = TypeVar("H")


@dataclass(frozen=True)
class Binding(Generic[D, H]):
    """A descriptor paired with the function that implements it."""

    descriptor: D
    handler: H


class CapabilityRegistry(Generic[D, H]):
    """Read-only catalog keyed by a descriptor attribute.

    Usage::

        tools = CapabilityRegistry("tool", "name", [(descriptor, handler)])
        binding = tools.lookup("spring-controller-generator")
        listing = tools.dump()       # wire-ready, registration order
    """

    def __init__(self, kind: str, key_field: str, entries: Iterable[tuple[D, H]]) -> None:
        self._kind = kind
        bindings: dict[str, Binding[D, H]] = {}
        for descriptor, handler in entries:
            key = getattr(descriptor, key_field)
            if key in bindings:
                msg = f"duplicate {kind} registration: {key}"
                raise ValueError(msg)
            bindings[key] = Binding(descriptor=descriptor, handler=handler)
        self._bindings = bindings

    @property
    def kind(self) -> str:
        return self._kind

    def lookup(self, key: str) -> Binding[D, H] | None:
        """Return the binding registered under exactly *key*, or ``None``."""
        return self._bindings.get(key)

    def keys(self) -> list[str]:
        return list(self._bindings)

    def descriptors(self) -> list[D]:
        return [b.descriptor for b in self._bindings.values()]

    def dump(self) -> list[dict[str, Any]]:
        """Serialize every descriptor with its wire (camelCase) field names."""
        return [d.model_dump(by_alias=True) for d in self.descriptors()]

    def __contains__(self, key: object) -> bool:
        return key in self._bindings

    def __iter__(self) -> Iterator[Binding[D, H]]:
        return iter(self._bindings.values())

    def __len__(self) -> int:
        return len(self._bindings)
