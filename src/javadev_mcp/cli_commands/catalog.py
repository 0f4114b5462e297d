"""``javadev-mcp catalog`` — list the tools, resources and prompts."""

from __future__ import annotations

import click

from javadev_mcp.cli_commands._output import print_catalog


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def catalog(as_json: bool) -> None:
    """Show everything the server advertises to clients."""
    from javadev_mcp.registry.catalog import build_catalog

    print_catalog(build_catalog(), as_json=as_json)
