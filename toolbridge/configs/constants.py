"""
Tool Bridge Constants

Static configuration values: remote API defaults, request headers,
timeouts and the identity advertised to MCP clients.
"""

from toolbridge import __version__

# --- Remote API ---

DEFAULT_API_URL = "http://localhost:8005"

AUTH_HEADER = "x-access-token"

CATALOG_PATH = "/tools"

# --- Timeout Configuration ---
# Centralized timeout values (in seconds)

TIMEOUTS = {
    "remote_request": 30,  # Every call to the remote tool API
}


def get_timeout(name: str, default: float = 30) -> float:
    """Get a timeout value by name, falling back to default."""
    return TIMEOUTS.get(name, default)


# --- MCP Server Identity ---

SERVER_NAME = "toolbridge-stdio-wrapper"
SERVER_VERSION = __version__
PROTOCOL_VERSION = "2024-11-05"

DEFAULT_INPUT_SCHEMA = {"type": "object", "properties": {}}
