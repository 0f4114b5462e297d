"""javadev-mcp CLI entrypoint."""

from __future__ import annotations

import click

from javadev_mcp import __version__


@click.group()
@click.version_option(version=__version__, prog_name="javadev-mcp")
def main() -> None:
    """javadev-mcp — Java and Spring Boot tools over the Model Context Protocol."""


# Register subcommands
from javadev_mcp.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
