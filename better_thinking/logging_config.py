"""Diagnostic logging for the MCP server process.

The rendered thought frames, advisory warnings and errors all travel through
the root logger to stderr, since stdout belongs to the MCP stdio transport.
"""

import logging
import os
import sys
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
JSON_FIELDS = "%(asctime)s %(name)s %(levelname)s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def build_formatter(log_format: str) -> logging.Formatter:
    """Formatter for ``text`` (default) or ``json`` output"""
    if log_format.lower() == "json":
        return JsonFormatter(JSON_FIELDS, rename_fields={"asctime": "timestamp", "levelname": "level"})
    return logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT)


def configure_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> logging.Handler:
    """Route all logging to a single stderr handler.

    Args:
        level: Root log level, defaults to the LOG_LEVEL env var or INFO
        log_format: ``text`` or ``json``, defaults to the LOG_FORMAT env var

    Returns:
        The installed handler
    """
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    log_format = log_format or os.getenv("LOG_FORMAT", "text")

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(build_formatter(log_format))

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)

    # The SDK logs every request it dispatches
    logging.getLogger("mcp.server.lowlevel").setLevel(logging.WARNING)
    return handler
