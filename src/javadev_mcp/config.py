"""Server settings — pydantic models and the YAML settings loader."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

from javadev_mcp import __version__
from javadev_mcp.protocol.models import PROTOCOL_VERSION

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class ConfigurationError(Exception):
    """Raised when a settings file fails parsing or validation."""


class TelemetrySettings(BaseModel):
    """Optional tracing configuration."""

    enabled: bool = False
    export_to_console: bool = False
    otlp_endpoint: str | None = None


class ServerSettings(BaseModel):
    """Everything the ``serve`` command needs to start a server.

    ``project_root`` is the directory handed to resource providers; it
    defaults to the working directory at the moment the settings are
    built.
    """

    project_root: Path = Field(default_factory=Path.cwd)
    log_level: LogLevel = "INFO"
    server_name: str = "Java Dev MCP Server"
    server_version: str = __version__
    protocol_version: str = PROTOCOL_VERSION
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)


class SettingsLoader:
    """Load and validate a YAML settings file into :class:`ServerSettings`."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> ServerSettings:
        """Read YAML, interpolate env vars, and validate.

        Environment variables in the form ``${VAR}`` or ``$VAR`` are expanded
        using :func:`os.path.expandvars` before YAML parsing.  A relative
        ``project_root`` is resolved against the settings file's directory.

        Raises:
            ConfigurationError: On read errors, YAML errors or schema failures.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigurationError(f"Cannot read {self._path}: {exc}") from exc

        expanded = os.path.expandvars(raw)

        try:
            data: Any = yaml.safe_load(expanded)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"YAML parse error: {exc}") from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError("Settings YAML must be a mapping")

        try:
            settings = ServerSettings.model_validate(data)
        except ValidationError as exc:
            raise ConfigurationError(str(exc)) from exc

        if "project_root" in data and not settings.project_root.is_absolute():
            settings = settings.model_copy(
                update={"project_root": self._path.parent / settings.project_root}
            )
        return settings
