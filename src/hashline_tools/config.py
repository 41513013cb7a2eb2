"""Hashline configuration constants.

Defaults live here so the CLI, the MCP server and the file layer agree on
them. Every value can be overridden through the environment.
"""
import os

MAX_FILE_BYTES = int(os.getenv("HASHLINE_MAX_FILE_BYTES", str(10 * 1024 * 1024)))
"""Largest file (in bytes) that read and edit will load."""

MAX_EDITS = int(os.getenv("HASHLINE_MAX_EDITS", "100"))
"""Maximum number of edit operations accepted in one batch."""

DEFAULT_ENCODING = os.getenv("HASHLINE_DEFAULT_ENCODING", "utf-8")

WORKSPACE_ROOT = os.getenv("HASHLINE_ROOT", os.getcwd())
"""Directory the MCP tools are sandboxed to."""

LOG_LEVEL = os.getenv("HASHLINE_LOG_LEVEL", "WARNING").upper()
LOG_JSON = os.getenv("HASHLINE_LOG_JSON", "").lower() in ("1", "true", "yes")

SERVER_NAME = "hashline"
DEFAULT_PORT = int(os.getenv("MCP_PORT", "4001"))
DEFAULT_HOST = os.getenv("MCP_HOST", "127.0.0.1")
