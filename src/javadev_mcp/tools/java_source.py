"""Tree-sitter front end for Java source files.

Parses a compilation unit into a small declaration model (package,
imports, class/interface declarations with their members) that the
analyzer and the test generator walk instead of raw syntax nodes.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from functools import cache
from pathlib import Path

import tree_sitter_java
from tree_sitter import Language, Node, Parser

from javadev_mcp.protocol.errors import CollaboratorError

_TYPE_NODES = frozenset({"class_declaration", "interface_declaration"})
_NAME_NODES = frozenset({"identifier", "scoped_identifier"})
_PARAMETER_NODES = frozenset({"formal_parameter", "spread_parameter"})
_FIELD_NODES = frozenset({"field_declaration", "constant_declaration"})


class JavaSourceError(CollaboratorError):
    """A Java file is missing or cannot be parsed."""


@dataclass(frozen=True)
class JavaMethod:
    name: str
    parameter_count: int
    is_public: bool


@dataclass
class JavaType:
    """A class or interface declaration, with its directly nested types."""

    name: str
    is_interface: bool
    is_abstract: bool
    methods: list[JavaMethod] = field(default_factory=list)
    fields: list[str] = field(default_factory=list)
    field_declarations: int = 0
    nested: list[JavaType] = field(default_factory=list)

    def walk(self) -> Iterator[JavaType]:
        """Yield this type then every nested type, depth-first."""
        yield self
        for inner in self.nested:
            yield from inner.walk()


@dataclass
class CompilationUnit:
    package: str | None
    imports: list[str]
    types: list[JavaType]
    line_count: int

    def all_types(self) -> Iterator[JavaType]:
        for declared in self.types:
            yield from declared.walk()


@cache
def _parser() -> Parser:
    return Parser(Language(tree_sitter_java.language()))


def parse_java(source: str) -> CompilationUnit:
    """Parse Java *source*, raising :class:`JavaSourceError` on syntax errors."""
    tree = _parser().parse(source.encode("utf-8"))
    root = tree.root_node
    if root.has_error:
        raise JavaSourceError("Unable to parse Java file")

    package: str | None = None
    imports: list[str] = []
    types: list[JavaType] = []
    for child in root.named_children:
        if child.type == "package_declaration":
            package = _qualified_name(child)
        elif child.type == "import_declaration":
            name = _qualified_name(child)
            if name:
                imports.append(name)
        elif child.type in _TYPE_NODES:
            types.append(_type_declaration(child))

    return CompilationUnit(
        package=package,
        imports=imports,
        types=types,
        line_count=len(source.splitlines()),
    )


def load_java(path: str, missing_message: str) -> CompilationUnit:
    """Read and parse the file at *path*.

    *missing_message* prefixes the path in the error raised when the file
    does not exist.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise JavaSourceError(f"{missing_message}: {path}")
    return parse_java(file_path.read_text(encoding="utf-8"))


def _text(node: Node) -> str:
    return node.text.decode("utf-8") if node.text is not None else ""


def _qualified_name(node: Node) -> str | None:
    for child in node.named_children:
        if child.type in _NAME_NODES:
            return _text(child)
    return None


def _modifiers(node: Node) -> set[str]:
    for child in node.children:
        if child.type == "modifiers":
            return {m.type for m in child.children}
    return set()


def _type_declaration(node: Node) -> JavaType:
    name_node = node.child_by_field_name("name")
    declared = JavaType(
        name=_text(name_node) if name_node is not None else "",
        is_interface=node.type == "interface_declaration",
        is_abstract="abstract" in _modifiers(node),
    )
    body = node.child_by_field_name("body")
    if body is None:
        return declared

    for member in body.named_children:
        if member.type == "method_declaration":
            declared.methods.append(_method(member))
        elif member.type in _FIELD_NODES:
            declared.field_declarations += 1
            for declarator in member.children_by_field_name("declarator"):
                var_name = declarator.child_by_field_name("name")
                if var_name is not None:
                    declared.fields.append(_text(var_name))
        elif member.type in _TYPE_NODES:
            declared.nested.append(_type_declaration(member))
    return declared


def _method(node: Node) -> JavaMethod:
    name_node = node.child_by_field_name("name")
    params = node.child_by_field_name("parameters")
    count = 0
    if params is not None:
        count = sum(1 for p in params.named_children if p.type in _PARAMETER_NODES)
    return JavaMethod(
        name=_text(name_node) if name_node is not None else "",
        parameter_count=count,
        is_public="public" in _modifiers(node),
    )
