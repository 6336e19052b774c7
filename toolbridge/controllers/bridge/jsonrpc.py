"""
JSON-RPC Framing

Line-delimited JSON-RPC 2.0 helpers for the MCP stdio transport.
"""

import json
from typing import Any, TextIO

# Standard JSON-RPC error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
SERVER_ERROR = -32000


def make_result(request_id, result: Any) -> dict:
    """Build a JSON-RPC success response."""
    return {
        "jsonrpc": "2.0",
        "id": request_id,
        "result": result,
    }


def make_error(request_id, code: int, message: str) -> dict:
    """Build a JSON-RPC error response."""
    return {
        "jsonrpc": "2.0",
        "id": request_id,
        "error": {"code": code, "message": message},
    }


def parse_message(line: str) -> Any:
    """Decode one line of input. Raises ValueError on invalid JSON."""
    return json.loads(line)


def write_message(stream: TextIO, message: dict) -> None:
    """Write a JSON-RPC message as a single line and flush."""
    stream.write(json.dumps(message) + "\n")
    stream.flush()
