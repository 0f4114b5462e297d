"""McpDispatcher — routes JSON-RPC requests to handlers and collaborators.

The dispatcher never touches a stream: it takes a decoded JSON value and
returns the wire-ready response envelope (or ``None`` for notifications).
It is the single place where typed failures become ``{code, message}``
pairs.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any

from opentelemetry import trace
from pydantic import ValidationError

from javadev_mcp import __version__
from javadev_mcp.protocol.errors import (
    CollaboratorError,
    InternalError,
    InvalidParamsError,
    InvalidRequestError,
    McpError,
    UnknownMethodError,
    UnknownPromptError,
    UnknownResourceError,
    UnknownToolError,
)
from javadev_mcp.protocol.models import (
    PROTOCOL_VERSION,
    InitializeResult,
    JsonRpcRequest,
    JsonRpcResponse,
    ServerInfo,
)
from javadev_mcp.registry.catalog import ServerCatalog
from javadev_mcp.utils.telemetry import (
    ATTR_ERROR_CODE,
    ATTR_PROMPT_NAME,
    ATTR_RESOURCE_URI,
    ATTR_RPC_ID,
    ATTR_RPC_METHOD,
    ATTR_TOOL_NAME,
    get_tracer,
)

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

MethodHandler = Callable[[dict[str, Any]], Awaitable[dict[str, Any]]]


class McpDispatcher:
    """Maintains a method-to-handler map and turns requests into responses.

    Usage::

        dispatcher = McpDispatcher(build_catalog(), project_root=Path.cwd())
        response = await dispatcher.handle({"jsonrpc": "2.0", "id": 1, "method": "tools/list"})

    Tool arguments are passed to collaborators as received; the input
    schemas in ``tools/list`` document them but are not enforced here.
    """

    def __init__(
        self,
        catalog: ServerCatalog,
        *,
        project_root: Path,
        server_name: str = "Java Dev MCP Server",
        server_version: str = __version__,
        protocol_version: str = PROTOCOL_VERSION,
    ) -> None:
        self._catalog = catalog
        self._project_root = project_root
        self._initialize_result = InitializeResult(
            protocol_version=protocol_version,
            server_info=ServerInfo(name=server_name, version=server_version),
        ).model_dump(by_alias=True)
        self._handlers: dict[str, MethodHandler] = {
            "initialize": self._initialize,
            "tools/list": self._tools_list,
            "tools/call": self._tools_call,
            "resources/list": self._resources_list,
            "resources/read": self._resources_read,
            "prompts/list": self._prompts_list,
            "prompts/get": self._prompts_get,
        }

    @property
    def catalog(self) -> ServerCatalog:
        return self._catalog

    @property
    def supported_methods(self) -> frozenset[str]:
        return frozenset(self._handlers)

    async def handle(self, message: Any) -> dict[str, Any] | None:
        """Process one decoded message and return its response envelope.

        Returns ``None`` when the message is a notification (no ``id``).
        Never raises: every failure becomes an error envelope.
        """
        request_id = _recover_id(message)
        try:
            request = _coerce_request(message)
        except McpError as exc:
            logger.warning("Rejected malformed request: %s", exc.message)
            return JsonRpcResponse.failure(request_id, exc.code, exc.message).to_wire()

        with _tracer.start_as_current_span("mcp.request") as span:
            span.set_attribute(ATTR_RPC_METHOD, request.method)
            if request.id is not None:
                span.set_attribute(ATTR_RPC_ID, str(request.id))
            response = await self._dispatch(request, span)

        if request.is_notification:
            logger.debug("Notification %s handled; no reply", request.method)
            return None
        return response.to_wire()

    async def _dispatch(self, request: JsonRpcRequest, span: trace.Span) -> JsonRpcResponse:
        logger.debug("Handling method: %s", request.method)
        try:
            handler = self._handlers.get(request.method)
            if handler is None:
                raise UnknownMethodError(request.method)
            result = await handler(request.params)
        except McpError as exc:
            logger.warning("%s failed: %s", request.method, exc.message)
            span.set_attribute(ATTR_ERROR_CODE, exc.code)
            return JsonRpcResponse.failure(request.id, exc.code, exc.message)
        except Exception:
            logger.exception("Error handling message: %s", request.method)
            fault = InternalError()
            span.set_attribute(ATTR_ERROR_CODE, fault.code)
            return JsonRpcResponse.failure(request.id, fault.code, fault.message)
        return JsonRpcResponse.success(request.id, result)

    # ------------------------------------------------------------------
    # Method handlers
    # ------------------------------------------------------------------

    async def _initialize(self, params: dict[str, Any]) -> dict[str, Any]:
        client = params.get("clientInfo")
        if isinstance(client, dict):
            logger.info("Initializing session for client %s", client.get("name", "?"))
        return dict(self._initialize_result)

    async def _tools_list(self, params: dict[str, Any]) -> dict[str, Any]:
        return {"tools": self._catalog.tools.dump()}

    async def _resources_list(self, params: dict[str, Any]) -> dict[str, Any]:
        return {"resources": self._catalog.resources.dump()}

    async def _prompts_list(self, params: dict[str, Any]) -> dict[str, Any]:
        return {"prompts": self._catalog.prompts.dump()}

    async def _tools_call(self, params: dict[str, Any]) -> dict[str, Any]:
        name = _require_str(params, "name")
        _current_span_attr(ATTR_TOOL_NAME, name)
        binding = self._catalog.lookup_tool(name)
        if binding is None:
            raise UnknownToolError(name)
        arguments = _require_object(params, "arguments")
        return await _invoke(f"tool {name}", binding.handler, arguments)

    async def _resources_read(self, params: dict[str, Any]) -> dict[str, Any]:
        uri = _require_str(params, "uri")
        _current_span_attr(ATTR_RESOURCE_URI, uri)
        binding = self._catalog.lookup_resource(uri)
        if binding is None:
            raise UnknownResourceError(uri)
        return await _invoke(f"resource {uri}", binding.handler, self._project_root)

    async def _prompts_get(self, params: dict[str, Any]) -> dict[str, Any]:
        name = _require_str(params, "name")
        _current_span_attr(ATTR_PROMPT_NAME, name)
        binding = self._catalog.lookup_prompt(name)
        if binding is None:
            raise UnknownPromptError(name)
        arguments = params.get("arguments")
        if arguments is None:
            arguments = {}
        elif not isinstance(arguments, dict):
            raise InvalidParamsError("arguments", "an object")
        return await _invoke(f"prompt {name}", binding.handler, arguments)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _recover_id(message: Any) -> int | str | None:
    if isinstance(message, dict):
        candidate = message.get("id")
        if isinstance(candidate, (int, str)) and not isinstance(candidate, bool):
            return candidate
    return None


def _coerce_request(message: Any) -> JsonRpcRequest:
    if not isinstance(message, dict):
        raise InvalidRequestError("Invalid request: expected a JSON object")
    method = message.get("method")
    if not isinstance(method, str):
        raise InvalidRequestError("Invalid request: 'method' must be a string")
    data = dict(message)
    if data.get("params") is None:
        data.pop("params", None)
    elif not isinstance(data["params"], dict):
        raise InvalidRequestError("Invalid request: 'params' must be an object")
    try:
        return JsonRpcRequest.model_validate(data)
    except ValidationError as exc:
        raise InvalidRequestError(f"Invalid request: {exc.errors()[0]['msg']}") from exc


def _require_str(params: dict[str, Any], key: str) -> str:
    value = params.get(key)
    if value is None:
        raise InvalidParamsError(key)
    if not isinstance(value, str):
        raise InvalidParamsError(key, "a string")
    return value


def _require_object(params: dict[str, Any], key: str) -> dict[str, Any]:
    value = params.get(key)
    if value is None:
        raise InvalidParamsError(key)
    if not isinstance(value, dict):
        raise InvalidParamsError(key, "an object")
    return value


def _current_span_attr(key: str, value: str) -> None:
    trace.get_current_span().set_attribute(key, value)


async def _invoke(
    label: str,
    handler: Callable[[Any], dict[str, Any]],
    argument: Any,
) -> dict[str, Any]:
    """Run a collaborator in a worker thread and normalize its failures."""
    try:
        result = await asyncio.to_thread(handler, argument)
    except CollaboratorError:
        raise
    except Exception as exc:
        logger.exception("Collaborator %s raised", label)
        raise CollaboratorError(f"Error executing {label}: {exc}") from exc
    if not isinstance(result, dict):
        msg = f"Error executing {label}: expected a mapping result, got {type(result).__name__}"
        raise CollaboratorError(msg)
    return result
