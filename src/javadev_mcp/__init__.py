"""Java Dev MCP server — Spring Boot and Java tooling over the Model Context Protocol."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "1.0.0"

if TYPE_CHECKING:
    from javadev_mcp.protocol.dispatcher import McpDispatcher as McpDispatcher
    from javadev_mcp.protocol.server import McpServer as McpServer

_LAZY_EXPORTS = {
    "McpDispatcher": "javadev_mcp.protocol.dispatcher",
    "McpServer": "javadev_mcp.protocol.server",
}


def __getattr__(name: str) -> object:
    module_path = _LAZY_EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'javadev_mcp' has no attribute {name!r}")
