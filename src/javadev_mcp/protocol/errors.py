"""Shared error types for the protocol layer.

Every failure that can reach the wire is an :class:`McpError`.  The
dispatcher is the only place that turns one into a ``{code, message}``
pair, so each subclass pins its JSON-RPC error code here.
"""

from __future__ import annotations

# Business errors share one code; the message disambiguates.
BUSINESS_ERROR = -1
INVALID_REQUEST = -32600
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class McpError(Exception):
    """Base error for all protocol-layer failures."""

    code: int = BUSINESS_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ParseError(McpError):
    """An input line is not valid UTF-8 JSON."""

    code = INTERNAL_ERROR

    def __init__(self, line: str) -> None:
        self.line = line
        super().__init__("Error parsing message")


class SerializationError(McpError):
    """A response envelope could not be encoded as JSON."""

    code = INTERNAL_ERROR

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("Error serializing response")


class InternalError(McpError):
    """An unexpected fault inside the dispatcher itself."""

    code = INTERNAL_ERROR

    def __init__(self, message: str = "Internal server error") -> None:
        super().__init__(message)


class InvalidRequestError(McpError):
    """The request envelope is malformed (not an object, bad ``method``...)."""

    code = INVALID_REQUEST


class InvalidParamsError(McpError):
    """A required parameter of a routed method is missing or mistyped."""

    code = INVALID_PARAMS

    def __init__(self, param: str, expected: str = "") -> None:
        self.param = param
        if expected:
            super().__init__(f"Invalid parameter '{param}': expected {expected}")
        else:
            super().__init__(f"Missing required parameter: {param}")


class UnknownMethodError(McpError):
    """The request names a method the server does not route."""

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Unknown method: {method}")


class UnknownToolError(McpError):
    """Requested tool does not exist in the tool registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class UnknownResourceError(McpError):
    """Requested URI does not exist in the resource registry."""

    def __init__(self, uri: str) -> None:
        self.uri = uri
        super().__init__(f"Unknown resource: {uri}")


class UnknownPromptError(McpError):
    """Requested prompt does not exist in the prompt registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown prompt: {name}")


class CollaboratorError(McpError):
    """A tool, resource or prompt provider failed while serving a request."""


class ArgumentError(CollaboratorError):
    """A collaborator was called without one of its required arguments."""

    def __init__(self, key: str, detail: str = "") -> None:
        self.key = key
        msg = f"Missing required argument: {key}"
        if detail:
            msg = f"Invalid argument '{key}': {detail}"
        super().__init__(msg)
