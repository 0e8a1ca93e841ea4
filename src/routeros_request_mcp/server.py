"""MCP server entry point for sending RouterOS API requests.

Exposes tools, resources, and prompts via the Model Context Protocol
using the official Python MCP SDK with stdio transport.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from .errors import RouterOSRequestError
from .protocol.command import normalize_command
from .protocol.query import Query
from .protocol.request import Request
from .transport.communicator import Communicator
from .transport.socket_connection import (
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
    SocketConnection,
)

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "routeros-request",
    instructions="Builds RouterOS API requests from CLI or API syntax and sends them",
)

# Global connection state
_connection: SocketConnection | None = None
_communicator: Communicator | None = None


def _get_communicator() -> Communicator:
    """Get the communicator for the active connection, raising if none."""
    if _connection is None or not _connection.connected or _communicator is None:
        raise RuntimeError(
            "Not connected to a router. Use the 'connect' tool first."
        )
    return _communicator


def _build_request(
    command: str,
    tag: str | None = None,
    arguments: dict[str, str] | None = None,
    where: list[str] | None = None,
) -> Request:
    request = Request(command).set_tag(tag)
    for name, value in (arguments or {}).items():
        request.set_argument(name, value)
    if where:
        query = Query()
        for condition in where:
            name, sep, value = condition.partition("=")
            query.add_where(name, value if sep else None)
        request.set_query(query)
    return request


# ─── CONNECTION TOOLS ─────────────────────────────────────────────────

@mcp.tool()
def connect(
    host: str,
    port: int = DEFAULT_PORT,
    timeout: float = DEFAULT_TIMEOUT,
) -> dict[str, Any]:
    """Open a TCP connection to the RouterOS API service.

    Args:
        host: Router address.
        port: API port (default 8728).
        timeout: Connect and write timeout in seconds.
    """
    global _connection, _communicator
    if _connection is not None and _connection.connected:
        return {
            "connected": True,
            "message": "Already connected",
            "host": _connection.peer_info.host,
        }

    _connection = SocketConnection(host, port=port, timeout=timeout)
    info = _connection.open()
    _communicator = Communicator(_connection)

    return {
        "connected": True,
        "host": info.host,
        "port": info.port,
        "local_address": info.local_address,
    }


@mcp.tool()
def disconnect() -> dict[str, bool]:
    """Close the connection to the router."""
    global _connection, _communicator
    if _connection is not None:
        _connection.close()
    _connection = None
    _communicator = None
    return {"disconnected": True}


# ─── REQUEST TOOLS ────────────────────────────────────────────────────

@mcp.tool()
def normalize(command: str) -> dict[str, Any]:
    """Convert a command in CLI or API syntax to its API path.

    Args:
        command: e.g. "/ip arp print" or "/interface ethernet .. print".
    """
    try:
        return {"command": normalize_command(command)}
    except RouterOSRequestError as e:
        return e.to_dict()


@mcp.tool()
def describe_request(
    command: str,
    tag: str | None = None,
    arguments: dict[str, str] | None = None,
) -> dict[str, Any]:
    """Parse a request without sending it.

    Args:
        command: Command with optional inline arguments,
                 e.g. '/ip address add address=10.0.0.1/24 interface=ether1'.
        tag: Optional tag echoed in replies.
        arguments: Extra arguments; they override inline ones.
    """
    try:
        return _build_request(command, tag, arguments).to_dict()
    except RouterOSRequestError as e:
        return e.to_dict()


@mcp.tool()
def send_request(
    command: str,
    tag: str | None = None,
    arguments: dict[str, str] | None = None,
    where: list[str] | None = None,
) -> dict[str, Any]:
    """Send a request to the connected router.

    Replies are not read by this server.

    Args:
        command: Command with optional inline arguments.
        tag: Optional tag echoed in replies.
        arguments: Extra arguments; they override inline ones.
        where: Query conditions such as ["type=ether", "disabled"],
               all of which must hold.
    """
    try:
        request = _build_request(command, tag, arguments, where)
    except RouterOSRequestError as e:
        return e.to_dict()

    com = _get_communicator()
    try:
        sent = request.send(com)
    except RouterOSRequestError as e:
        return e.to_dict()

    logger.info("Sent %s (%d bytes)", request.get_command(), sent)
    return {"sent": True, "bytes": sent, "command": request.get_command()}


# ─── RESOURCES ────────────────────────────────────────────────────────

@mcp.resource("routeros://connection/status")
def resource_connection_status() -> str:
    """Current connection state."""
    if _connection is None or not _connection.connected:
        return json.dumps({"connected": False})
    info = _connection.peer_info
    return json.dumps({
        "connected": True,
        "host": info.host,
        "port": info.port,
        "accepting_data": _connection.is_accepting_data(),
    })


# ─── PROMPTS ──────────────────────────────────────────────────────────

@mcp.prompt()
def compose_command(task: str) -> str:
    """Help turn a task description into a RouterOS request."""
    return f"""Compose a RouterOS request for this task: {task}

Write the command in CLI form (e.g. "/ip address print") or API form
(e.g. "/ip/address/print"). Use ".." to go up one menu level.
Put arguments after the command as name=value pairs; quote values that
contain spaces (comment="uplink port"). A name without a value is a flag.

Check the result with describe_request before calling send_request."""


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    logging.basicConfig(level=logging.INFO)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
