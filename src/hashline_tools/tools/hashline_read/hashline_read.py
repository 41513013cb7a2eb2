from fastmcp import FastMCP

from ... import config
from ...errors import HashlineError
from ...files import read_text
from ...line_endings import TextDocument
from ...security import get_secure_path
from ...service import read_hashlines


def register_tools(mcp: FastMCP, root: str | None = None) -> None:
    """Register the hashline read tool with the MCP server."""

    @mcp.tool()
    def hashline_read(
        path: str,
        offset: int = 1,
        limit: int = 0,
        encoding: str = config.DEFAULT_ENCODING,
    ) -> dict:
        """
        Purpose
            Read a text file with LINE:HASH anchors in front of every line.

        When to use
            Before editing a file with hashline_edit: the anchors returned here
            address the lines to change.

        Rules & Constraints
            Output lines look like 12:a3b1|content; the part before '|' is the anchor.
            Anchors are 1-indexed. Hashes ignore whitespace.

        Args:
            path: The path to the file (relative to the workspace root)
            offset: 1-indexed first line to return (default: 1)
            limit: Max lines to return, 0 = all (default: 0)
            encoding: File encoding (default "utf-8")

        Returns:
            Dict with hashline content and paging metadata, or error dict
        """
        try:
            secure_path = get_secure_path(path, root)
        except ValueError as e:
            return {"error": str(e)}

        try:
            raw = read_text(secure_path, encoding)
            content = read_hashlines(raw, offset=offset, limit=limit)
        except HashlineError as e:
            return e.to_dict()

        return {
            "success": True,
            "path": path,
            "content": content,
            "offset": offset,
            "limit": limit,
            "total_lines": len(TextDocument.from_text(raw).lines),
            "shown_lines": len(content.split("\n")) if content else 0,
        }
