"""
Tool Bridge Logging Configuration

Configures logging based on environment variables:
- TOOLBRIDGE_DEBUG: Enable debug logging (default: false)
- LOG_FILE: Log file path (default: unset, logging is silent)

stdout carries the MCP protocol, so nothing is ever logged there.
"""

import logging
import os
from pathlib import Path
from typing import Optional

ROOT_LOGGER = "toolbridge"


def setup_logging(
    debug: Optional[bool] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Configure logging for the bridge.

    The sink is chosen once here: a file handler when a log file is
    configured, otherwise a NullHandler so every log call is a no-op.

    Args:
        debug: Enable debug level. Defaults to TOOLBRIDGE_DEBUG env var.
        log_file: Log file path. Defaults to LOG_FILE env var.

    Returns:
        Root logger for the bridge
    """
    # Read from env if not provided
    if debug is None:
        debug = os.environ.get("TOOLBRIDGE_DEBUG", "").lower() in ("true", "1", "yes")
    if log_file is None:
        log_file = os.environ.get("LOG_FILE") or None

    level = logging.DEBUG if debug else logging.INFO

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.propagate = False

    # Clear existing handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if not log_file:
        logger.addHandler(logging.NullHandler())
        return logger

    # Ensure log directory exists
    log_path = Path(log_file).expanduser()
    log_path.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(
        "%(asctime)s %(levelname)-5s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    file_handler = logging.FileHandler(log_path)
    file_handler.setFormatter(formatter)
    file_handler.setLevel(level)
    logger.addHandler(file_handler)
    logger.info(f"Logging to file: {log_path}")

    return logger


def get_logger(component: str) -> logging.Logger:
    """
    Get a logger for a specific component.

    Args:
        component: Component name (e.g., "client", "adapter", "session")

    Returns:
        Logger instance for the component
    """
    return logging.getLogger(f"{ROOT_LOGGER}.{component}")
