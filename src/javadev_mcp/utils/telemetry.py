"""OpenTelemetry tracing helpers for the MCP server.

Provides a thin wrapper around the OpenTelemetry API so the dispatcher can
call ``get_tracer()`` without caring whether the SDK is installed.  When
the SDK is *not* configured the API returns no-op implementations.

Usage::

    from javadev_mcp.utils.telemetry import ATTR_RPC_METHOD, get_tracer

    _tracer = get_tracer(__name__)

    with _tracer.start_as_current_span("mcp.request") as span:
        span.set_attribute(ATTR_RPC_METHOD, "tools/call")

To activate real tracing, call :func:`configure_telemetry` once at startup
(requires the ``otel`` extra: ``pip install javadev-mcp[otel]``).  Span
exports never go to stdout, which carries protocol frames.
"""

from __future__ import annotations

import sys
from types import SimpleNamespace
from typing import Any

from opentelemetry import trace

# ---------------------------------------------------------------------------
# Semantic attribute keys used by the dispatcher
# ---------------------------------------------------------------------------

ATTR_RPC_METHOD = "mcp.method"
ATTR_RPC_ID = "mcp.request.id"
ATTR_TOOL_NAME = "mcp.tool.name"
ATTR_RESOURCE_URI = "mcp.resource.uri"
ATTR_PROMPT_NAME = "mcp.prompt.name"
ATTR_ERROR_CODE = "mcp.error.code"

_INSTRUMENTATION_NAME = "javadev_mcp"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Return a :class:`~opentelemetry.trace.Tracer` for *name*.

    If the OpenTelemetry SDK has not been configured the returned tracer
    is a no-op.
    """
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(
    *,
    service_name: str = "javadev-mcp",
    export_to_console: bool = True,
    otlp_endpoint: str | None = None,
) -> None:
    """Install an SDK tracer provider (requires ``javadev-mcp[otel]``).

    Exporters are resolved before anything is installed, so a missing
    optional package leaves the no-op provider in place.

    Parameters
    ----------
    service_name:
        The ``service.name`` resource attribute.
    export_to_console:
        If ``True``, print finished spans as JSON on stderr.
    otlp_endpoint:
        If set, batch spans to this OTLP/gRPC collector.

    Raises
    ------
    ImportError
        If ``opentelemetry-sdk`` (or, with *otlp_endpoint*,
        ``opentelemetry-exporter-otlp``) is not installed.
    """
    sdk = _load_sdk()

    processors: list[Any] = []
    if export_to_console:
        processors.append(sdk.SimpleSpanProcessor(sdk.ConsoleSpanExporter(out=sys.stderr)))
    if otlp_endpoint:
        processors.append(sdk.BatchSpanProcessor(_otlp_exporter(otlp_endpoint)))

    provider = sdk.TracerProvider(resource=sdk.Resource.create({"service.name": service_name}))
    for processor in processors:
        provider.add_span_processor(processor)
    trace.set_tracer_provider(provider)


def _load_sdk() -> SimpleNamespace:
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports,reportUnknownVariableType]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports,reportUnknownVariableType]
        from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports,reportUnknownVariableType]
            BatchSpanProcessor,
            ConsoleSpanExporter,
            SimpleSpanProcessor,
        )
    except ImportError as exc:
        msg = (
            "opentelemetry-sdk is required for configure_telemetry(). "
            "Install it with: pip install javadev-mcp[otel]"
        )
        raise ImportError(msg) from exc

    return SimpleNamespace(
        Resource=Resource,
        TracerProvider=TracerProvider,
        BatchSpanProcessor=BatchSpanProcessor,
        ConsoleSpanExporter=ConsoleSpanExporter,
        SimpleSpanProcessor=SimpleSpanProcessor,
    )


def _otlp_exporter(endpoint: str) -> Any:
    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter  # pyright: ignore[reportMissingImports,reportUnknownVariableType]
    except ImportError as exc:
        msg = (
            "opentelemetry-exporter-otlp is required for OTLP export. "
            "Install it with: pip install javadev-mcp[otel]"
        )
        raise ImportError(msg) from exc
    return OTLPSpanExporter(endpoint=endpoint)
