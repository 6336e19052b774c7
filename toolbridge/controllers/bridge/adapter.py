"""
MCP Protocol Adapter

Translates MCP requests into remote tool API calls and the results back
into MCP response shapes.

Catalog failures propagate (the session reports them as JSON-RPC errors);
tool execution failures are returned in-band as `isError` results so the
calling agent can reason about them.
"""

from typing import Any, Callable, Optional

from pydantic import ValidationError

from toolbridge.client import RemoteToolClient
from toolbridge.configs.constants import PROTOCOL_VERSION, SERVER_NAME, SERVER_VERSION
from toolbridge.configs.logging import get_logger
from toolbridge.controllers.bridge.jsonrpc import (
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    make_result,
)
from toolbridge.exceptions import ProtocolError, ToolInvocationError
from toolbridge.models import ToolCallResult, ToolInvocationRequest

logger = get_logger("adapter")


class ProtocolAdapter:
    """Request handlers for the MCP methods the bridge serves."""

    def __init__(self, client: RemoteToolClient):
        self.client = client
        self._handlers: dict[str, Callable[[dict], Any]] = {
            "initialize": self.handle_initialize,
            "ping": self.handle_ping,
            "tools/list": self.handle_tools_list,
            "tools/call": self.handle_tools_call,
        }

    def dispatch(self, request: dict) -> Optional[dict]:
        """
        Route one JSON-RPC message to its handler.

        Returns:
            The response message, or None for notifications

        Raises:
            ProtocolError: Unknown method or invalid params
            CatalogFetchError: tools/list could not reach a valid catalog
        """
        method = request.get("method")
        if not isinstance(method, str):
            raise ProtocolError(INVALID_REQUEST, "Invalid request: missing method")

        # Notifications don't require a response
        if "id" not in request:
            logger.debug(f"Received notification: {method}")
            return None

        handler = self._handlers.get(method)
        if handler is None:
            logger.warning(f"Unknown method: {method}")
            raise ProtocolError(METHOD_NOT_FOUND, f"Method not found: {method}")

        params = request.get("params") or {}
        if not isinstance(params, dict):
            raise ProtocolError(INVALID_PARAMS, f"Invalid params for {method}")

        return make_result(request["id"], handler(params))

    def handle_initialize(self, params: dict) -> dict:
        """Handle MCP initialize request."""
        requested = params.get("protocolVersion")
        logger.info(f"Client initializing (protocol {requested or 'unspecified'})")
        return {
            "protocolVersion": requested or PROTOCOL_VERSION,
            "capabilities": {
                "tools": {},
            },
            "serverInfo": {
                "name": SERVER_NAME,
                "version": SERVER_VERSION,
            },
        }

    def handle_ping(self, params: dict) -> dict:
        return {}

    def handle_tools_list(self, params: dict) -> dict:
        """Handle MCP tools/list request. CatalogFetchError propagates."""
        logger.info("Handling ListTools request")
        tools = self.client.list_tools()
        return {"tools": [tool.model_dump() for tool in tools]}

    def handle_tools_call(self, params: dict) -> dict:
        """Handle MCP tools/call request."""
        try:
            call = ToolInvocationRequest.model_validate(params)
        except ValidationError as e:
            raise ProtocolError(INVALID_PARAMS, f"Invalid tools/call params: {e}") from e

        logger.info(f"Handling CallTool request: {call.name}")

        try:
            payload = self.client.execute_tool(call.name, call.arguments)
        except ToolInvocationError as e:
            logger.error(f"CallTool failed: {call.name}: {e.message}")
            return ToolCallResult.from_failure(e.message).model_dump()

        return ToolCallResult.from_payload(payload).model_dump()
