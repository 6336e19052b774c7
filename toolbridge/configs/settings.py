"""
Tool Bridge Settings

Environment-provided configuration, read once at startup.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from toolbridge.configs.constants import DEFAULT_API_URL, get_timeout
from toolbridge.exceptions import MissingConfigError


@dataclass(frozen=True)
class BridgeConfig:
    """Resolved bridge configuration."""

    api_url: str = DEFAULT_API_URL
    jwt_token: str = ""
    log_file: Optional[str] = None
    debug: bool = False
    request_timeout: float = get_timeout("remote_request")

    def validate(self) -> None:
        """Raise MissingConfigError if a required value is absent."""
        if not self.jwt_token:
            raise MissingConfigError(
                "JWT_TOKEN environment variable is required",
                variable="JWT_TOKEN",
            )

    def describe(self) -> dict:
        """Loggable view of the config that never includes the token."""
        return {
            "api_url": self.api_url,
            "log_file": self.log_file,
            "debug": self.debug,
            "request_timeout": self.request_timeout,
            "jwt_token_set": bool(self.jwt_token),
        }


def load_config(environ: Optional[Mapping[str, str]] = None) -> BridgeConfig:
    """
    Build a BridgeConfig from environment variables.

    Args:
        environ: Mapping to read from. Defaults to os.environ.

    Returns:
        BridgeConfig (not yet validated)
    """
    if environ is None:
        environ = os.environ

    return BridgeConfig(
        api_url=environ.get("API_URL") or DEFAULT_API_URL,
        jwt_token=environ.get("JWT_TOKEN", "").strip(),
        log_file=environ.get("LOG_FILE") or None,
        debug=environ.get("TOOLBRIDGE_DEBUG", "").lower() in ("true", "1", "yes"),
    )
