"""Tests for McpDispatcher routing, parameter checks and error mapping."""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, Mock

from javadev_mcp.protocol.dispatcher import McpDispatcher
from javadev_mcp.protocol.errors import ArgumentError
from javadev_mcp.protocol.models import (
    InputSchema,
    PromptDescriptor,
    ResourceDescriptor,
    ToolDescriptor,
)
from javadev_mcp.registry.catalog import ServerCatalog, build_catalog
from javadev_mcp.registry.registry import CapabilityRegistry


def _request(method: str, params: dict[str, Any] | None = None, request_id: Any = 1) -> dict[str, Any]:
    message: dict[str, Any] = {"jsonrpc": "2.0", "id": request_id, "method": method}
    if params is not None:
        message["params"] = params
    return message


def _custom_catalog(**tools: Any) -> ServerCatalog:
    return ServerCatalog(
        tools=CapabilityRegistry(
            "tool",
            "name",
            [(ToolDescriptor(name=name, input_schema=InputSchema()), fn) for name, fn in tools.items()],
        ),
        resources=CapabilityRegistry(
            "resource",
            "uri",
            [(ResourceDescriptor.for_uri("test://root/path", "echo"), lambda root: {"root": str(root)})],
        ),
        prompts=CapabilityRegistry("prompt", "name", [(PromptDescriptor(name="p"), lambda args: {"args": args})]),
    )


class TestInitialize:
    async def test_returns_server_identity(self, dispatcher: McpDispatcher) -> None:
        response = await dispatcher.handle(_request("initialize", {"clientInfo": {"name": "t"}}))
        assert response is not None
        assert response["jsonrpc"] == "2.0"
        assert response["id"] == 1
        result = response["result"]
        assert result["protocolVersion"] == "2024-11-05"
        assert result["serverInfo"] == {"name": "Java Dev MCP Server", "version": "1.0.0"}
        assert result["capabilities"]["tools"] == {"listChanged": True}
        assert result["capabilities"]["resources"] == {"subscribe": True, "listChanged": True}
        assert result["capabilities"]["prompts"] == {"listChanged": True}

    async def test_without_params(self, dispatcher: McpDispatcher) -> None:
        response = await dispatcher.handle(_request("initialize"))
        assert response is not None
        assert "result" in response

    async def test_is_idempotent(self, dispatcher: McpDispatcher) -> None:
        first = await dispatcher.handle(_request("initialize", request_id=1))
        second = await dispatcher.handle(_request("initialize", request_id=2))
        assert first is not None and second is not None
        assert first["result"] == second["result"]

    async def test_custom_identity(self, catalog: ServerCatalog, tmp_path: Path) -> None:
        custom = McpDispatcher(
            catalog, project_root=tmp_path, server_name="Custom", server_version="9.9"
        )
        response = await custom.handle(_request("initialize"))
        assert response is not None
        assert response["result"]["serverInfo"] == {"name": "Custom", "version": "9.9"}


class TestListings:
    async def test_tools_list_order_and_required(self, dispatcher: McpDispatcher) -> None:
        response = await dispatcher.handle(_request("tools/list"))
        assert response is not None
        tools = response["result"]["tools"]
        assert [t["name"] for t in tools] == [
            "java-class-analyzer",
            "spring-controller-generator",
            "jpa-entity-generator",
            "unit-test-generator",
        ]
        required = {t["name"]: t["inputSchema"]["required"] for t in tools}
        assert required["java-class-analyzer"] == ["filePath"]
        assert required["spring-controller-generator"] == ["entityName", "packageName"]
        assert required["jpa-entity-generator"] == [
            "entityName",
            "packageName",
            "fields",
            "tableName",
        ]
        assert required["unit-test-generator"] == ["classPath"]

    async def test_listings_are_stable(self, dispatcher: McpDispatcher) -> None:
        first = await dispatcher.handle(_request("tools/list", request_id=1))
        second = await dispatcher.handle(_request("tools/list", request_id=2))
        assert first is not None and second is not None
        assert first["result"] == second["result"]

    async def test_resources_list(self, dispatcher: McpDispatcher) -> None:
        response = await dispatcher.handle(_request("resources/list"))
        assert response is not None
        resources = response["result"]["resources"]
        assert [r["uri"] for r in resources] == [
            "java-project://current/structure",
            "java-project://current/dependencies",
            "java-project://current/configuration",
        ]
        assert all(r["mimeType"] == "application/json" for r in resources)

    async def test_prompts_list(self, dispatcher: McpDispatcher) -> None:
        response = await dispatcher.handle(_request("prompts/list"))
        assert response is not None
        prompts = response["result"]["prompts"]
        assert [p["name"] for p in prompts] == [
            "create-spring-boot-service",
            "implement-crud-operations",
        ]
        assert set(prompts[0]["arguments"]) == {"serviceName", "includeDatabase"}


class TestToolsCall:
    async def test_controller_generation(self, dispatcher: McpDispatcher) -> None:
        response = await dispatcher.handle(
            _request(
                "tools/call",
                {
                    "name": "spring-controller-generator",
                    "arguments": {"entityName": "User", "packageName": "com.example"},
                },
            )
        )
        assert response is not None
        result = response["result"]
        assert result["fileName"] == "UserController.java"
        assert "@RestController" in result["controllerCode"]
        assert len(result["instructions"]) == 5

    async def test_analyzer(self, dispatcher: McpDispatcher, user_service_file: Path) -> None:
        response = await dispatcher.handle(
            _request(
                "tools/call",
                {"name": "java-class-analyzer", "arguments": {"filePath": str(user_service_file)}},
            )
        )
        assert response is not None
        assert response["result"]["analysis"]["packageName"] == "com.example.service"

    async def test_unknown_tool(self, tmp_path: Path) -> None:
        handler = Mock(return_value={})
        dispatcher = McpDispatcher(_custom_catalog(known=handler), project_root=tmp_path)
        response = await dispatcher.handle(
            _request("tools/call", {"name": "nope", "arguments": {}}, request_id=5)
        )
        assert not handler.called
        assert response == {
            "jsonrpc": "2.0",
            "id": 5,
            "error": {"code": -1, "message": "Unknown tool: nope"},
        }

    async def test_unknown_tool_reported_before_arguments(self, dispatcher: McpDispatcher) -> None:
        response = await dispatcher.handle(_request("tools/call", {"name": "nope"}))
        assert response is not None
        assert response["error"]["message"] == "Unknown tool: nope"

    async def test_missing_name(self, dispatcher: McpDispatcher) -> None:
        response = await dispatcher.handle(_request("tools/call", {"arguments": {}}))
        assert response is not None
        assert response["error"] == {
            "code": -32602,
            "message": "Missing required parameter: name",
        }

    async def test_missing_params_entirely(self, dispatcher: McpDispatcher) -> None:
        response = await dispatcher.handle(_request("tools/call"))
        assert response is not None
        assert response["error"]["code"] == -32602

    async def test_missing_arguments(self, dispatcher: McpDispatcher) -> None:
        response = await dispatcher.handle(
            _request("tools/call", {"name": "spring-controller-generator"})
        )
        assert response is not None
        assert response["error"] == {
            "code": -32602,
            "message": "Missing required parameter: arguments",
        }

    async def test_non_object_arguments(self, dispatcher: McpDispatcher) -> None:
        response = await dispatcher.handle(
            _request("tools/call", {"name": "spring-controller-generator", "arguments": [1]})
        )
        assert response is not None
        assert response["error"]["code"] == -32602
        assert "arguments" in response["error"]["message"]

    async def test_non_string_name(self, dispatcher: McpDispatcher) -> None:
        response = await dispatcher.handle(_request("tools/call", {"name": 3, "arguments": {}}))
        assert response is not None
        assert response["error"] == {
            "code": -32602,
            "message": "Invalid parameter 'name': expected a string",
        }

    async def test_collaborator_argument_error(self, dispatcher: McpDispatcher) -> None:
        response = await dispatcher.handle(
            _request("tools/call", {"name": "spring-controller-generator", "arguments": {}})
        )
        assert response is not None
        assert response["error"] == {
            "code": -1,
            "message": "Missing required argument: entityName",
        }

    async def test_missing_java_file(self, dispatcher: McpDispatcher, tmp_path: Path) -> None:
        missing = tmp_path / "Missing.java"
        response = await dispatcher.handle(
            _request(
                "tools/call",
                {"name": "java-class-analyzer", "arguments": {"filePath": str(missing)}},
            )
        )
        assert response is not None
        assert response["error"] == {"code": -1, "message": f"File not found: {missing}"}

    async def test_unexpected_collaborator_failure(self, tmp_path: Path) -> None:
        def boom(arguments: dict[str, Any]) -> dict[str, Any]:
            raise RuntimeError("kaboom")

        dispatcher = McpDispatcher(_custom_catalog(boom=boom), project_root=tmp_path)
        response = await dispatcher.handle(_request("tools/call", {"name": "boom", "arguments": {}}))
        assert response is not None
        assert response["error"]["code"] == -1
        assert response["error"]["message"] == "Error executing tool boom: kaboom"

    async def test_collaborator_error_passes_through(self, tmp_path: Path) -> None:
        def strict(arguments: dict[str, Any]) -> dict[str, Any]:
            raise ArgumentError("thing")

        dispatcher = McpDispatcher(_custom_catalog(strict=strict), project_root=tmp_path)
        response = await dispatcher.handle(
            _request("tools/call", {"name": "strict", "arguments": {}})
        )
        assert response is not None
        assert response["error"]["message"] == "Missing required argument: thing"

    async def test_non_mapping_result(self, tmp_path: Path) -> None:
        dispatcher = McpDispatcher(
            _custom_catalog(listy=lambda arguments: ["not", "a", "dict"]), project_root=tmp_path
        )
        response = await dispatcher.handle(_request("tools/call", {"name": "listy", "arguments": {}}))
        assert response is not None
        assert response["error"]["code"] == -1
        assert "expected a mapping result" in response["error"]["message"]

    async def test_arguments_passed_through(self, tmp_path: Path) -> None:
        dispatcher = McpDispatcher(
            _custom_catalog(echo=lambda arguments: {"got": arguments}), project_root=tmp_path
        )
        response = await dispatcher.handle(
            _request("tools/call", {"name": "echo", "arguments": {"x": [1, 2], "y": None}})
        )
        assert response is not None
        assert response["result"] == {"got": {"x": [1, 2], "y": None}}


class TestListedNamesResolve:
    async def test_every_listed_tool_is_callable(self, dispatcher: McpDispatcher) -> None:
        listing = await dispatcher.handle(_request("tools/list"))
        assert listing is not None
        names = [tool["name"] for tool in listing["result"]["tools"]]
        assert names

        for name in names:
            response = await dispatcher.handle(
                _request("tools/call", {"name": name, "arguments": {}})
            )
            assert response is not None
            if "error" in response:
                assert not response["error"]["message"].startswith("Unknown tool"), name

    async def test_every_listed_resource_is_readable(self, dispatcher: McpDispatcher) -> None:
        listing = await dispatcher.handle(_request("resources/list"))
        assert listing is not None
        uris = [resource["uri"] for resource in listing["result"]["resources"]]
        assert uris

        for uri in uris:
            response = await dispatcher.handle(_request("resources/read", {"uri": uri}))
            assert response is not None
            if "error" in response:
                assert not response["error"]["message"].startswith("Unknown resource"), uri

    async def test_every_listed_prompt_is_gettable(self, dispatcher: McpDispatcher) -> None:
        listing = await dispatcher.handle(_request("prompts/list"))
        assert listing is not None
        names = [prompt["name"] for prompt in listing["result"]["prompts"]]
        assert names

        for name in names:
            response = await dispatcher.handle(
                _request("prompts/get", {"name": name, "arguments": {}})
            )
            assert response is not None
            if "error" in response:
                assert not response["error"]["message"].startswith("Unknown prompt"), name


class TestResourcesRead:
    async def test_structure_uses_project_root(self, tmp_path: Path) -> None:
        (tmp_path / "pom.xml").write_text("<project/>", encoding="utf-8")
        dispatcher = McpDispatcher(build_catalog(), project_root=tmp_path)
        response = await dispatcher.handle(
            _request("resources/read", {"uri": "java-project://current/structure"})
        )
        assert response is not None
        structure = response["result"]["structure"]
        assert structure["projectType"] == "Maven"
        assert structure["rootPath"] == str(tmp_path)

    async def test_root_is_injected(self, tmp_path: Path) -> None:
        dispatcher = McpDispatcher(_custom_catalog(), project_root=tmp_path)
        response = await dispatcher.handle(_request("resources/read", {"uri": "test://root/path"}))
        assert response is not None
        assert response["result"] == {"root": str(tmp_path)}

    async def test_unknown_uri(self, dispatcher: McpDispatcher) -> None:
        response = await dispatcher.handle(
            _request("resources/read", {"uri": "java-project://current/other"})
        )
        assert response is not None
        assert response["error"] == {
            "code": -1,
            "message": "Unknown resource: java-project://current/other",
        }

    async def test_uri_match_is_exact(self, dispatcher: McpDispatcher) -> None:
        response = await dispatcher.handle(
            _request("resources/read", {"uri": "JAVA-PROJECT://current/structure"})
        )
        assert response is not None
        assert response["error"]["code"] == -1

    async def test_missing_uri(self, dispatcher: McpDispatcher) -> None:
        response = await dispatcher.handle(_request("resources/read", {}))
        assert response is not None
        assert response["error"] == {"code": -32602, "message": "Missing required parameter: uri"}


class TestPromptsGet:
    async def test_service_prompt(self, dispatcher: McpDispatcher) -> None:
        response = await dispatcher.handle(
            _request(
                "prompts/get",
                {"name": "create-spring-boot-service", "arguments": {"serviceName": "Billing"}},
            )
        )
        assert response is not None
        result = response["result"]
        assert result["description"] == "Step-by-step guide to create a Spring Boot service"
        assert result["messages"][0]["role"] == "user"
        assert "'Billing'" in result["messages"][0]["content"]["text"]

    async def test_arguments_optional_at_dispatch(self, dispatcher: McpDispatcher) -> None:
        response = await dispatcher.handle(
            _request("prompts/get", {"name": "create-spring-boot-service"})
        )
        assert response is not None
        assert response["error"] == {
            "code": -1,
            "message": "Missing required argument: serviceName",
        }

    async def test_unknown_prompt(self, dispatcher: McpDispatcher) -> None:
        response = await dispatcher.handle(_request("prompts/get", {"name": "nope"}))
        assert response is not None
        assert response["error"] == {"code": -1, "message": "Unknown prompt: nope"}

    async def test_non_object_arguments(self, dispatcher: McpDispatcher) -> None:
        response = await dispatcher.handle(
            _request("prompts/get", {"name": "implement-crud-operations", "arguments": "x"})
        )
        assert response is not None
        assert response["error"]["code"] == -32602


class TestEnvelope:
    async def test_unknown_method(self, dispatcher: McpDispatcher) -> None:
        response = await dispatcher.handle(_request("foo/bar", request_id="req-9"))
        assert response == {
            "jsonrpc": "2.0",
            "id": "req-9",
            "error": {"code": -1, "message": "Unknown method: foo/bar"},
        }

    async def test_notification_gets_no_reply(self, dispatcher: McpDispatcher) -> None:
        response = await dispatcher.handle({"jsonrpc": "2.0", "method": "notifications/initialized"})
        assert response is None

    async def test_notification_for_known_method(self, dispatcher: McpDispatcher) -> None:
        response = await dispatcher.handle({"jsonrpc": "2.0", "method": "tools/list"})
        assert response is None

    async def test_null_id_gets_reply(self, dispatcher: McpDispatcher) -> None:
        response = await dispatcher.handle(_request("tools/list", request_id=None))
        assert response is not None
        assert response["id"] is None
        assert "result" in response

    async def test_non_object_message(self, dispatcher: McpDispatcher) -> None:
        response = await dispatcher.handle([1, 2, 3])
        assert response is not None
        assert response["id"] is None
        assert response["error"]["code"] == -32600

    async def test_missing_method(self, dispatcher: McpDispatcher) -> None:
        response = await dispatcher.handle({"jsonrpc": "2.0", "id": 4})
        assert response is not None
        assert response["id"] == 4
        assert response["error"]["code"] == -32600

    async def test_non_string_method(self, dispatcher: McpDispatcher) -> None:
        response = await dispatcher.handle({"jsonrpc": "2.0", "id": 4, "method": 12})
        assert response is not None
        assert response["error"]["code"] == -32600

    async def test_non_object_params(self, dispatcher: McpDispatcher) -> None:
        response = await dispatcher.handle({"jsonrpc": "2.0", "id": 4, "method": "tools/list", "params": [1]})
        assert response is not None
        assert response["error"]["code"] == -32600

    async def test_null_params_treated_as_empty(self, dispatcher: McpDispatcher) -> None:
        response = await dispatcher.handle(
            {"jsonrpc": "2.0", "id": 4, "method": "tools/list", "params": None}
        )
        assert response is not None
        assert "result" in response

    async def test_internal_fault(self, dispatcher: McpDispatcher) -> None:
        dispatcher._handlers["tools/list"] = AsyncMock(side_effect=RuntimeError("broken"))
        response = await dispatcher.handle(_request("tools/list", request_id=8))
        assert response == {
            "jsonrpc": "2.0",
            "id": 8,
            "error": {"code": -32603, "message": "Internal server error"},
        }

    def test_supported_methods(self, dispatcher: McpDispatcher) -> None:
        assert dispatcher.supported_methods == {
            "initialize",
            "tools/list",
            "tools/call",
            "resources/list",
            "resources/read",
            "prompts/list",
            "prompts/get",
        }
