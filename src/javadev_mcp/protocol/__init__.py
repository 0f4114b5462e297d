"""Protocol layer — JSON-RPC envelopes, stdio transport, dispatcher and server loop.

The dispatcher and server live in :mod:`javadev_mcp.protocol.dispatcher` and
:mod:`javadev_mcp.protocol.server`; they depend on the collaborators, which in
turn depend on the error types exported here.
"""

from javadev_mcp.protocol.errors import (
    CollaboratorError,
    McpError,
    ParseError,
    UnknownMethodError,
    UnknownPromptError,
    UnknownResourceError,
    UnknownToolError,
)
from javadev_mcp.protocol.models import JsonRpcError, JsonRpcRequest, JsonRpcResponse
from javadev_mcp.protocol.transport import ServerTransport, StdioTransport

__all__ = [
    "CollaboratorError",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "McpError",
    "ParseError",
    "ServerTransport",
    "StdioTransport",
    "UnknownMethodError",
    "UnknownPromptError",
    "UnknownResourceError",
    "UnknownToolError",
]
