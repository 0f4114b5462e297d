"""McpServer — the read/dispatch/write loop over a :class:`ServerTransport`.

One line in, at most one line out, strictly in order.  A failure while
handling one line is answered with an error envelope and the loop moves
on; only end of input stops it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from javadev_mcp.protocol.errors import InternalError, ParseError, SerializationError
from javadev_mcp.protocol.models import JsonRpcResponse

if TYPE_CHECKING:
    from javadev_mcp.protocol.dispatcher import McpDispatcher
    from javadev_mcp.protocol.transport import ServerTransport

logger = logging.getLogger(__name__)


class McpServer:
    """Serves a single peer over one transport until the input ends.

    Usage::

        server = McpServer(dispatcher, StdioTransport())
        await server.serve()
    """

    def __init__(self, dispatcher: McpDispatcher, transport: ServerTransport) -> None:
        self._dispatcher = dispatcher
        self._transport = transport
        self._handled = 0

    @property
    def handled(self) -> int:
        """Number of input lines processed so far."""
        return self._handled

    async def serve(self) -> None:
        """Run the loop until the transport reports end of stream."""
        logger.info("Starting Java Dev MCP Server...")
        while True:
            line = await self._transport.read_next()
            if line is None:
                break
            try:
                response = await self.process_line(line)
            except Exception:
                logger.exception("Error handling message")
                fault = InternalError()
                response = JsonRpcResponse.failure(None, fault.code, fault.message).to_wire()
            self._handled += 1
            if response is not None:
                await self._emit(response)
        logger.info("STDIO transport stopped after %d message(s)", self._handled)

    async def process_line(self, line: bytes) -> dict[str, Any] | None:
        """Decode and dispatch one line; return the envelope to send, if any."""
        try:
            message = self._transport.parse(line)
        except ParseError as exc:
            logger.error("Error parsing message: %.200s", exc.line)
            return JsonRpcResponse.failure(None, exc.code, exc.message).to_wire()
        return await self._dispatcher.handle(message)

    async def _emit(self, envelope: dict[str, Any]) -> None:
        try:
            await self._transport.write_line(envelope)
        except SerializationError as exc:
            logger.error("Error serializing response: %s", exc.detail)
            fallback = JsonRpcResponse.failure(envelope.get("id"), exc.code, exc.message)
            await self._transport.write_line(fallback.to_wire())
