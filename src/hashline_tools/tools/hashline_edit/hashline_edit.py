from fastmcp import FastMCP

from ... import config
from ...diagnostics import render_remap
from ...errors import HashlineError, StaleAnchorsError
from ...hashline import format_hashlines
from ...security import get_secure_path
from ...service import edit_file


def register_tools(mcp: FastMCP, root: str | None = None) -> None:
    """Register the hashline edit tool with the MCP server."""

    @mcp.tool()
    def hashline_edit(
        path: str,
        edits: str,
        preview: bool = False,
        encoding: str = config.DEFAULT_ENCODING,
    ) -> dict:
        """
        Purpose
            Edit a file using anchor-based line references (N:hash) for precise edits.

        When to use
            After reading a file with hashline_read, use the anchors to make
            targeted edits without reproducing exact file content.

        Rules & Constraints
            Anchors must match the current file content (hash validation).
            An anchor whose line moved is relocated when its hash is unique in the file.
            All edits in a batch are validated before any are applied (atomic).
            Overlapping line edits within a single call are rejected.
            A batch that leaves the file unchanged is rejected.

        Args:
            path: The path to the file (relative to the workspace root)
            edits: JSON array of edit operations, or {"edits": [...]}.
                Each op is an object with exactly one key:
                - set_line: {anchor, new_text}
                - replace_lines: {start_anchor, end_anchor, new_text}
                - insert_after: {anchor, text}
                - replace: {old_text, new_text, all}
            preview: If True, include a basic line diff in the result
            encoding: File encoding (default "utf-8")

        Returns:
            Dict with success status, updated hashline content, and edit count, or error dict.
            Stale anchors produce an error dict with "mismatches" and a "remap" of
            old anchors to current ones.
        """
        try:
            secure_path = get_secure_path(path, root)
        except ValueError as e:
            return {"error": str(e)}

        try:
            result = edit_file(secure_path, edits, encoding)
        except StaleAnchorsError as e:
            error = e.to_dict()
            error["remap"] = render_remap(e.mismatches)
            return error
        except HashlineError as e:
            return e.to_dict()

        response = {
            "success": True,
            "path": path,
            "edits_applied": result.operations,
            "content": format_hashlines(result.new_lines),
        }
        if not result.changed:
            response["note"] = "No edits supplied; file left unchanged"
        if preview:
            response["diff"] = result.diff()
        return response
