"""MCP tools exposed by the hashline server."""

from fastmcp import FastMCP

from .hashline_edit import register_tools as register_hashline_edit
from .hashline_read import register_tools as register_hashline_read


def register_all_tools(mcp: FastMCP, root: str | None = None) -> list[str]:
    """Register every hashline tool and return their names."""
    register_hashline_read(mcp, root=root)
    register_hashline_edit(mcp, root=root)
    return ["hashline_read", "hashline_edit"]


__all__ = ["register_all_tools"]
