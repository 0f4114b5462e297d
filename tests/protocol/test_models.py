"""Tests for JSON-RPC envelopes and MCP descriptor models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from javadev_mcp.protocol.models import (
    PROTOCOL_VERSION,
    InitializeResult,
    InputSchema,
    JsonRpcRequest,
    JsonRpcResponse,
    PromptDescriptor,
    ResourceDescriptor,
    ServerInfo,
    ToolDescriptor,
)


class TestJsonRpcRequest:
    def test_defaults(self) -> None:
        req = JsonRpcRequest(id=1, method="tools/list")
        assert req.jsonrpc == "2.0"
        assert req.params == {}
        assert not req.is_notification

    def test_missing_id_is_notification(self) -> None:
        req = JsonRpcRequest.model_validate({"jsonrpc": "2.0", "method": "initialized"})
        assert req.is_notification
        assert req.id is None

    def test_explicit_null_id_is_not_notification(self) -> None:
        req = JsonRpcRequest.model_validate({"id": None, "method": "tools/list"})
        assert not req.is_notification

    def test_string_id(self) -> None:
        req = JsonRpcRequest.model_validate({"id": "abc", "method": "initialize"})
        assert req.id == "abc"

    def test_method_required(self) -> None:
        with pytest.raises(ValidationError):
            JsonRpcRequest.model_validate({"id": 1})

    def test_frozen(self) -> None:
        req = JsonRpcRequest(id=1, method="initialize")
        with pytest.raises(ValidationError):
            req.method = "other"  # type: ignore[misc]


class TestJsonRpcResponse:
    def test_success_wire(self) -> None:
        wire = JsonRpcResponse.success(7, {"tools": []}).to_wire()
        assert wire == {"jsonrpc": "2.0", "id": 7, "result": {"tools": []}}

    def test_failure_wire(self) -> None:
        wire = JsonRpcResponse.failure("a", -1, "Unknown tool: x").to_wire()
        assert wire == {
            "jsonrpc": "2.0",
            "id": "a",
            "error": {"code": -1, "message": "Unknown tool: x"},
        }

    def test_null_id_is_kept(self) -> None:
        wire = JsonRpcResponse.failure(None, -32603, "Error parsing message").to_wire()
        assert "id" in wire
        assert wire["id"] is None

    def test_empty_result_is_success(self) -> None:
        wire = JsonRpcResponse.success(1, {}).to_wire()
        assert wire["result"] == {}
        assert "error" not in wire

    def test_neither_outcome_rejected(self) -> None:
        with pytest.raises(ValidationError, match="exactly one"):
            JsonRpcResponse(id=1)

    def test_both_outcomes_rejected(self) -> None:
        with pytest.raises(ValidationError, match="exactly one"):
            JsonRpcResponse(id=1, result={}, error={"code": -1, "message": "x"})


class TestInputSchema:
    def test_required_excludes_defaults_in_order(self) -> None:
        schema = InputSchema.from_properties(
            {
                "b": {"type": "string", "description": "B"},
                "flag": {"type": "boolean", "description": "F", "default": True},
                "a": {"type": "string", "description": "A"},
            }
        )
        assert schema.required == ["b", "a"]
        assert schema.type == "object"

    def test_default_word_in_description_counts(self) -> None:
        schema = InputSchema.from_properties(
            {"mode": {"type": "string", "description": "Uses the default mode"}}
        )
        assert schema.required == []


class TestDescriptors:
    def test_tool_dumps_camel_case(self) -> None:
        tool = ToolDescriptor(name="t", description="d", input_schema=InputSchema())
        data = tool.model_dump(by_alias=True)
        assert set(data) == {"name", "description", "inputSchema"}
        assert data["inputSchema"] == {"type": "object", "properties": {}, "required": []}

    def test_resource_for_uri(self) -> None:
        res = ResourceDescriptor.for_uri("java-project://current/structure", "desc")
        data = res.model_dump(by_alias=True)
        assert data == {
            "uri": "java-project://current/structure",
            "name": "structure",
            "description": "desc",
            "mimeType": "application/json",
        }

    def test_prompt_arguments(self) -> None:
        prompt = PromptDescriptor(name="p", arguments={"x": {"type": "string"}})
        assert prompt.model_dump()["arguments"] == {"x": {"type": "string"}}


class TestInitializeResult:
    def test_capabilities_shape(self) -> None:
        result = InitializeResult(server_info=ServerInfo(name="S", version="1")).model_dump(
            by_alias=True
        )
        assert result == {
            "protocolVersion": PROTOCOL_VERSION,
            "serverInfo": {"name": "S", "version": "1"},
            "capabilities": {
                "tools": {"listChanged": True},
                "resources": {"subscribe": True, "listChanged": True},
                "prompts": {"listChanged": True},
            },
        }
