"""Shared CLI output formatters."""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.table import Table

from javadev_mcp.registry.catalog import ServerCatalog  # noqa: TC001

console = Console()


def print_catalog(catalog: ServerCatalog, *, as_json: bool = False) -> None:
    """Pretty-print every registry of *catalog*."""
    if as_json:
        data = {
            "tools": catalog.tools.dump(),
            "resources": catalog.resources.dump(),
            "prompts": catalog.prompts.dump(),
        }
        console.print_json(json.dumps(data))
        return

    print_tools_table(catalog.tools.dump())
    print_resources_table(catalog.resources.dump())
    print_prompts_table(catalog.prompts.dump())


def print_tools_table(tools: list[dict[str, Any]]) -> None:
    table = Table(title="Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Required")

    for tool in tools:
        schema = tool.get("inputSchema", {})
        table.add_row(
            tool.get("name", "?"),
            _truncate(tool.get("description", "")),
            ", ".join(schema.get("required", [])) or "-",
        )

    console.print(table)


def print_resources_table(resources: list[dict[str, Any]]) -> None:
    table = Table(title="Resources")
    table.add_column("URI", style="cyan")
    table.add_column("Name")
    table.add_column("Description")
    table.add_column("MIME type")

    for resource in resources:
        table.add_row(
            resource.get("uri", "?"),
            resource.get("name", ""),
            _truncate(resource.get("description", "")),
            resource.get("mimeType", ""),
        )

    console.print(table)


def print_prompts_table(prompts: list[dict[str, Any]]) -> None:
    table = Table(title="Prompts")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Arguments")

    for prompt in prompts:
        table.add_row(
            prompt.get("name", "?"),
            _truncate(prompt.get("description", "")),
            ", ".join(prompt.get("arguments", {})) or "-",
        )

    console.print(table)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
