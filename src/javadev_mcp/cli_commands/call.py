"""``javadev-mcp call`` — invoke one tool without a client."""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path

import click

from javadev_mcp.cli_commands._output import console


@click.command()
@click.argument("tool")
@click.option("--args", "raw_args", default="{}", help="Tool arguments as a JSON object.")
@click.option(
    "--root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project root for the dispatcher (defaults to the working directory).",
)
def call(tool: str, raw_args: str, root: Path | None) -> None:
    """Call TOOL once through the dispatcher and print the response."""
    from javadev_mcp.protocol.dispatcher import McpDispatcher
    from javadev_mcp.registry.catalog import build_catalog

    try:
        arguments = json.loads(raw_args)
    except json.JSONDecodeError as exc:
        console.print(f"[red]Invalid --args:[/red] {exc}")
        sys.exit(1)

    dispatcher = McpDispatcher(build_catalog(), project_root=root or Path.cwd())
    request = {
        "jsonrpc": "2.0",
        "id": 1,
        "method": "tools/call",
        "params": {"name": tool, "arguments": arguments},
    }
    response = asyncio.run(dispatcher.handle(request))
    assert response is not None

    console.print_json(json.dumps(response))
    if "error" in response:
        sys.exit(1)
