"""``javadev-mcp serve`` — run the MCP server over stdio."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import click

from javadev_mcp.utils.log_setup import stderr_console

logger = logging.getLogger(__name__)


@click.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML settings file.",
)
@click.option(
    "--root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project directory served by the java-project:// resources.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level (logs go to stderr).",
)
@click.option("--telemetry", is_flag=True, help="Enable OpenTelemetry tracing.")
def serve(
    config_path: Path | None,
    root: Path | None,
    log_level: str | None,
    telemetry: bool,
) -> None:
    """Serve tools, resources and prompts to one client on stdin/stdout."""
    from javadev_mcp.config import ConfigurationError, ServerSettings, SettingsLoader
    from javadev_mcp.protocol.dispatcher import McpDispatcher
    from javadev_mcp.protocol.server import McpServer
    from javadev_mcp.protocol.transport import StdioTransport
    from javadev_mcp.registry.catalog import build_catalog
    from javadev_mcp.utils.log_setup import configure_logging
    from javadev_mcp.utils.telemetry import configure_telemetry

    try:
        settings = SettingsLoader(config_path).load() if config_path else ServerSettings()
    except ConfigurationError as exc:
        stderr_console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)

    overrides: dict[str, object] = {}
    if root is not None:
        overrides["project_root"] = root
    if log_level is not None:
        overrides["log_level"] = log_level.upper()
    if overrides:
        settings = settings.model_copy(update=overrides)
    if telemetry:
        settings.telemetry.enabled = True

    configure_logging(settings.log_level)

    if settings.telemetry.enabled:
        try:
            configure_telemetry(
                service_name=settings.server_name,
                export_to_console=settings.telemetry.export_to_console,
                otlp_endpoint=settings.telemetry.otlp_endpoint,
            )
        except ImportError as exc:
            logger.warning("Telemetry disabled: %s", exc)

    dispatcher = McpDispatcher(
        build_catalog(),
        project_root=settings.project_root,
        server_name=settings.server_name,
        server_version=settings.server_version,
        protocol_version=settings.protocol_version,
    )
    server = McpServer(dispatcher, StdioTransport())
    logger.info("Serving project root %s", settings.project_root)

    try:
        asyncio.run(server.serve())
    except KeyboardInterrupt:
        logger.info("Interrupted; shutting down")
