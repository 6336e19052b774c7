"""
Remote Tool API Client

Wraps the HTTP tool-provider API: fetches the tool catalog and executes
tools, normalizing every failure into a typed bridge exception.

Usage:
    from toolbridge.client import RemoteToolClient

    client = RemoteToolClient("http://localhost:8005", token)
    tools = client.list_tools()
    result = client.execute_tool("echo", {"text": "hi"})
"""

import json
from enum import Enum
from typing import Any, Callable, Optional
from urllib.parse import quote

import requests

from toolbridge.configs.constants import AUTH_HEADER, CATALOG_PATH, get_timeout
from toolbridge.configs.logging import get_logger
from toolbridge.exceptions import (
    AuthenticationError,
    CatalogFetchError,
    RemoteApiError,
    ToolInvocationError,
    ToolNotFoundError,
    TransportError,
)
from toolbridge.models import ToolDescriptor

logger = get_logger("client")


# --- Failure Classification ---


class FailureKind(Enum):
    """Closed set of ways a tool execution can fail."""
    AUTHENTICATION = "authentication"
    NOT_FOUND = "not_found"
    REMOTE_API = "remote_api"
    TRANSPORT = "transport"


STATUS_FAILURES = {
    401: FailureKind.AUTHENTICATION,
    404: FailureKind.NOT_FOUND,
}


def classify_failure(status_code: Optional[int]) -> FailureKind:
    """Map an HTTP status (None when no response arrived) to a FailureKind."""
    if status_code is None:
        return FailureKind.TRANSPORT
    return STATUS_FAILURES.get(status_code, FailureKind.REMOTE_API)


def _describe_body(response: requests.Response) -> str:
    """Serialize an error response body, preferring its JSON form."""
    try:
        return json.dumps(response.json())
    except ValueError:
        return response.text.strip()


def _authentication_error(name, response, cause) -> ToolInvocationError:
    return AuthenticationError("Authentication failed: Invalid or expired JWT token", name)


def _not_found_error(name, response, cause) -> ToolInvocationError:
    return ToolNotFoundError(f"Tool '{name}' not found on remote API", name)


def _remote_api_error(name, response, cause) -> ToolInvocationError:
    body = _describe_body(response) if response is not None else ""
    status = response.status_code if response is not None else None
    if body:
        return RemoteApiError(f"Remote API error: {body}", name, status_code=status)
    return RemoteApiError(f"Failed to execute tool: HTTP {status}", name, status_code=status)


def _transport_error(name, response, cause) -> ToolInvocationError:
    return TransportError(f"Failed to execute tool: {cause}", name)


ERROR_BUILDERS: dict[FailureKind, Callable[..., ToolInvocationError]] = {
    FailureKind.AUTHENTICATION: _authentication_error,
    FailureKind.NOT_FOUND: _not_found_error,
    FailureKind.REMOTE_API: _remote_api_error,
    FailureKind.TRANSPORT: _transport_error,
}


def invocation_error(
    name: str,
    response: Optional[requests.Response] = None,
    cause: Optional[BaseException] = None,
) -> ToolInvocationError:
    """
    Build the typed error for a failed tool execution.

    Args:
        name: Tool that was being executed
        response: Error response, or None if the request never got one
        cause: Underlying exception, used for transport failures

    Returns:
        One of AuthenticationError, ToolNotFoundError, RemoteApiError,
        TransportError
    """
    status = response.status_code if response is not None else None
    kind = classify_failure(status)
    return ERROR_BUILDERS[kind](name, response, cause)


# --- Client ---


class RemoteToolClient:
    """
    Synchronous HTTP client for the remote tool API.

    Holds only fixed configuration (base URL, token, timeout), so one
    instance is reused for every request. Each call is attempted once.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = get_timeout("remote_request"),
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = requests.Session()
        self._session.headers.update({
            AUTH_HEADER: token,
            "Content-Type": "application/json",
        })

        logger.info(f"Remote tool client initialized, base URL: {self.base_url}")

    def close(self) -> None:
        """Release pooled connections."""
        self._session.close()

    def __enter__(self) -> "RemoteToolClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def list_tools(self) -> list[ToolDescriptor]:
        """
        Fetch the remote tool catalog and translate it to MCP descriptors.

        Returns:
            Tool descriptors in catalog order

        Raises:
            CatalogFetchError: Request failed or the catalog was malformed
        """
        url = f"{self.base_url}{CATALOG_PATH}"
        logger.info("Fetching tools from remote API")

        try:
            response = self._session.get(url, timeout=self.timeout)
            response.raise_for_status()
            tools = self._parse_catalog(response.json())
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Failed to fetch tools: {e}")
            raise CatalogFetchError(f"Failed to fetch tools from remote API: {e}") from e

        logger.info(f"Tools fetched successfully, count: {len(tools)}")
        return tools

    @staticmethod
    def _parse_catalog(body: Any) -> list[ToolDescriptor]:
        if not isinstance(body, dict) or "tools" not in body:
            raise ValueError("malformed catalog response: missing tools array")
        records = body["tools"]
        if not isinstance(records, list):
            raise ValueError("malformed catalog response: tools is not an array")
        return [ToolDescriptor.from_remote(record) for record in records]

    def execute_tool(self, name: str, arguments: dict) -> Any:
        """
        Execute a tool on the remote API.

        Args:
            name: Tool name, exactly as advertised in the catalog
            arguments: JSON-serializable arguments mapping

        Returns:
            The remote response payload (typically `{success, ...}`)

        Raises:
            AuthenticationError: Remote rejected the token (401)
            ToolNotFoundError: Remote does not know the tool (404)
            RemoteApiError: Any other error response, or an unusable body
            TransportError: No response (connection failure, timeout)
        """
        url = f"{self.base_url}{CATALOG_PATH}/{quote(name, safe='')}"
        logger.info(f"Executing tool: {name}")
        logger.debug(f"Tool arguments for {name}: {arguments}")

        try:
            response = self._session.post(url, json=arguments, timeout=self.timeout)
            response.raise_for_status()
        except requests.HTTPError as e:
            error = invocation_error(name, response=e.response, cause=e)
            logger.error(f"Tool execution failed: {name}: {error}")
            raise error from e
        except requests.RequestException as e:
            error = invocation_error(name, cause=e)
            logger.error(f"Tool execution failed: {name}: {error}")
            raise error from e

        try:
            payload = self._parse_payload(name, response)
        except RemoteApiError as e:
            logger.error(f"Tool execution failed: {name}: {e}")
            raise

        success = payload.get("success") if isinstance(payload, dict) else None
        logger.info(f"Tool executed successfully: {name} (success={success})")
        return payload

    @staticmethod
    def _parse_payload(name: str, response: requests.Response) -> Any:
        # Non-JSON bodies are returned as text
        try:
            payload = response.json()
        except ValueError:
            payload = response.text
        # Empty containers are valid payloads; null, false, 0 and "" are not
        if not payload and not isinstance(payload, (dict, list)):
            raise RemoteApiError(
                "Failed to execute tool: malformed execution response: missing data",
                name,
                status_code=response.status_code,
            )
        return payload
