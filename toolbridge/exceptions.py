"""
Tool Bridge Exception Hierarchy

Centralized exception classes for structured error handling across the bridge.
All bridge-specific exceptions inherit from BridgeError.

Usage:
    from toolbridge.exceptions import CatalogFetchError, ToolInvocationError

    try:
        tools = client.list_tools()
    except CatalogFetchError as e:
        logger.error(f"Catalog fetch failed: {e}")
"""


class BridgeError(Exception):
    """Base exception for all bridge errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(BridgeError):
    """Error in bridge configuration."""

    pass


class MissingConfigError(ConfigurationError):
    """Required configuration value is missing."""

    def __init__(self, message: str, variable: str | None = None):
        super().__init__(message)
        self.variable = variable


# =============================================================================
# Remote API Client Errors
# =============================================================================


class ClientError(BridgeError):
    """Base class for remote tool API errors."""

    pass


class CatalogFetchError(ClientError):
    """Tool catalog could not be fetched or was malformed."""

    pass


class ToolInvocationError(ClientError):
    """Base class for failures while executing a remote tool.

    These are rendered in-band as tool results, never as protocol errors.
    """

    def __init__(self, message: str, tool_name: str | None = None):
        super().__init__(message)
        self.tool_name = tool_name


class AuthenticationError(ToolInvocationError):
    """Remote API rejected the access token."""

    pass


class ToolNotFoundError(ToolInvocationError):
    """Remote API does not know the requested tool."""

    pass


class RemoteApiError(ToolInvocationError):
    """Remote API answered with an error response or an unusable body."""

    def __init__(
        self,
        message: str,
        tool_name: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message, tool_name)
        self.status_code = status_code


class TransportError(ToolInvocationError):
    """Request never produced a response (connection failure, timeout)."""

    pass


# =============================================================================
# Protocol / Lifecycle Errors
# =============================================================================


class ProtocolError(BridgeError):
    """Local JSON-RPC request could not be served."""

    def __init__(self, code: int, message: str):
        super().__init__(message)
        self.code = code


class SessionStateError(BridgeError):
    """Lifecycle transition not allowed from the current session state."""

    pass


class FatalStartupError(BridgeError):
    """Uncaught failure during startup or serving; terminates the process."""

    pass
