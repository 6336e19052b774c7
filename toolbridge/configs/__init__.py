"""
Tool Bridge Configuration Module

Re-exports commonly used functions for cleaner imports across the codebase.
"""

# Logging (most commonly used)
from toolbridge.configs.logging import get_logger, setup_logging

# Constants
from toolbridge.configs.constants import (
    AUTH_HEADER,
    DEFAULT_API_URL,
    PROTOCOL_VERSION,
    SERVER_NAME,
    SERVER_VERSION,
    TIMEOUTS,
    get_timeout,
)

# Settings
from toolbridge.configs.settings import BridgeConfig, load_config

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    # Constants
    "AUTH_HEADER",
    "DEFAULT_API_URL",
    "PROTOCOL_VERSION",
    "SERVER_NAME",
    "SERVER_VERSION",
    "TIMEOUTS",
    "get_timeout",
    # Settings
    "BridgeConfig",
    "load_config",
]
