"""MCP models — JSON-RPC 2.0 envelopes and capability descriptors.

Implements the message format of the Model Context Protocol for the
server side: request/response envelopes plus the descriptors returned by
``initialize``, ``tools/list``, ``resources/list`` and ``prompts/list``.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, Field, model_validator

JSONRPC_VERSION = "2.0"
PROTOCOL_VERSION = "2024-11-05"

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request message.

    ``id`` is optional on the wire: a message without one is a
    notification, detected through :attr:`is_notification` rather than by
    comparing against ``None`` (an explicit ``"id": null`` still expects a
    reply).
    """

    model_config = {"frozen": True}

    jsonrpc: str = JSONRPC_VERSION
    id: int | str | None = None
    method: str
    params: dict[str, Any] = Field(default_factory=lambda: dict[str, Any]())

    @property
    def is_notification(self) -> bool:
        return "id" not in self.model_fields_set


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message carrying exactly one of result/error."""

    jsonrpc: str = JSONRPC_VERSION
    id: int | str | None = None
    result: dict[str, Any] | None = None
    error: JsonRpcError | None = None

    @model_validator(mode="after")
    def _exactly_one_outcome(self) -> JsonRpcResponse:
        if (self.result is None) == (self.error is None):
            msg = "response must carry exactly one of 'result' or 'error'"
            raise ValueError(msg)
        return self

    @classmethod
    def success(cls, request_id: int | str | None, result: dict[str, Any]) -> JsonRpcResponse:
        return cls(id=request_id, result=result)

    @classmethod
    def failure(cls, request_id: int | str | None, code: int, message: str) -> JsonRpcResponse:
        return cls(id=request_id, error=JsonRpcError(code=code, message=message))

    def to_wire(self) -> dict[str, Any]:
        """Return the envelope as sent: ``id`` always present, one outcome key."""
        data: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            data["error"] = self.error.model_dump()
        else:
            data["result"] = self.result
        return data


# ---------------------------------------------------------------------------
# MCP-specific payloads
# ---------------------------------------------------------------------------


def _declares_default(fragment: dict[str, Any]) -> bool:
    # Textual match over the whole fragment, keys and values alike.
    return "default" in json.dumps(fragment)


class InputSchema(BaseModel):
    """JSON Schema of a tool's ``arguments`` object."""

    model_config = {"frozen": True}

    type: str = "object"
    properties: dict[str, dict[str, Any]] = Field(default_factory=lambda: dict[str, dict[str, Any]]())
    required: list[str] = []

    @classmethod
    def from_properties(cls, properties: dict[str, dict[str, Any]]) -> InputSchema:
        """Build a schema whose ``required`` list holds every property without a default."""
        required = [name for name, fragment in properties.items() if not _declares_default(fragment)]
        return cls(properties=properties, required=required)


class ToolDescriptor(BaseModel):
    """A tool definition as returned by ``tools/list``."""

    model_config = {"populate_by_name": True, "frozen": True}

    name: str
    description: str = ""
    input_schema: InputSchema = Field(default_factory=InputSchema, alias="inputSchema")


class ResourceDescriptor(BaseModel):
    """A resource definition as returned by ``resources/list``."""

    model_config = {"populate_by_name": True, "frozen": True}

    uri: str
    name: str
    description: str = ""
    mime_type: str = Field(default="application/json", alias="mimeType")

    @classmethod
    def for_uri(cls, uri: str, description: str, mime_type: str = "application/json") -> ResourceDescriptor:
        """Create a descriptor named after the last path segment of *uri*."""
        return cls(
            uri=uri,
            name=uri.rsplit("/", 1)[-1],
            description=description,
            mime_type=mime_type,
        )


class PromptDescriptor(BaseModel):
    """A prompt definition as returned by ``prompts/list``."""

    model_config = {"frozen": True}

    name: str
    description: str = ""
    arguments: dict[str, dict[str, Any]] = Field(default_factory=lambda: dict[str, dict[str, Any]]())


class ServerInfo(BaseModel):
    name: str
    version: str


class ToolsCapability(BaseModel):
    model_config = {"populate_by_name": True}

    list_changed: bool = Field(default=True, alias="listChanged")


class ResourcesCapability(BaseModel):
    model_config = {"populate_by_name": True}

    subscribe: bool = True
    list_changed: bool = Field(default=True, alias="listChanged")


class PromptsCapability(BaseModel):
    model_config = {"populate_by_name": True}

    list_changed: bool = Field(default=True, alias="listChanged")


class ServerCapabilities(BaseModel):
    """Capabilities advertised once, in the ``initialize`` result."""

    tools: ToolsCapability = Field(default_factory=ToolsCapability)
    resources: ResourcesCapability = Field(default_factory=ResourcesCapability)
    prompts: PromptsCapability = Field(default_factory=PromptsCapability)


class InitializeResult(BaseModel):
    """Payload of the ``initialize`` response."""

    model_config = {"populate_by_name": True}

    protocol_version: str = Field(default=PROTOCOL_VERSION, alias="protocolVersion")
    server_info: ServerInfo = Field(alias="serverInfo")
    capabilities: ServerCapabilities = Field(default_factory=ServerCapabilities)
