"""Server transports — newline-delimited JSON: UTF-8 lines in, text lines out.

A transport satisfies the :class:`ServerTransport` protocol, providing
``read_next``, ``parse`` and ``write_line``.  It is the only component
allowed to touch the underlying streams.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import Any, BinaryIO, Protocol, TextIO, runtime_checkable

from javadev_mcp.protocol.errors import ParseError, SerializationError

logger = logging.getLogger(__name__)


@runtime_checkable
class ServerTransport(Protocol):
    """Abstract line-oriented transport for the server side of MCP."""

    async def read_next(self) -> bytes | None: ...
    def parse(self, line: bytes) -> Any: ...
    async def write_line(self, envelope: dict[str, Any]) -> None: ...


class StdioTransport:
    """Reads requests from stdin and writes responses to stdout.

    Requests are read as raw bytes and decoded per line, so one line of
    bad UTF-8 fails only that request.  Both streams default to the
    process streams but can be replaced (``io.BytesIO`` / ``io.StringIO``
    in tests).  Blocking reads run in a worker thread so the event loop
    stays responsive.
    """

    def __init__(self, reader: BinaryIO | None = None, writer: TextIO | None = None) -> None:
        self._reader = reader if reader is not None else sys.stdin.buffer
        self._writer = writer if writer is not None else sys.stdout

    async def read_next(self) -> bytes | None:
        """Return the next non-blank line, or ``None`` at end of stream."""
        while True:
            line = await asyncio.to_thread(self._reader.readline)
            if not line:
                return None
            stripped = line.strip()
            if stripped:
                return stripped

    def parse(self, line: bytes) -> Any:
        """Decode one line of UTF-8 JSON text.

        Raises:
            ParseError: On invalid UTF-8, invalid JSON or nesting too deep
                for the decoder.
        """
        try:
            message = json.loads(line.decode("utf-8"))
        except (ValueError, RecursionError) as exc:
            raise ParseError(line.decode("utf-8", errors="replace")) from exc
        logger.debug("Received message: %s", line)
        return message

    async def write_line(self, envelope: dict[str, Any]) -> None:
        """Encode *envelope* as a single JSON line and flush it."""
        try:
            text = json.dumps(envelope, allow_nan=False)
        except (TypeError, ValueError) as exc:
            raise SerializationError(str(exc)) from exc
        self._writer.write(text + "\n")
        self._writer.flush()
        logger.debug("Sent response: %s", text)
