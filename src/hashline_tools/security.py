import os
import re

from . import config

# Pattern to detect Windows drive letters (e.g., C:, D:, Z:)
_WINDOWS_DRIVE_RE = re.compile(r"^[A-Za-z]:")


def get_secure_path(path: str, root: str | None = None) -> str:
    """Resolve ``path`` inside the workspace root and refuse anything outside it.

    - Normalizes both '/' and '\\' separators to os.sep.
    - Treats absolute paths as relative to the root.
    - Blocks Windows drive-letter paths and null bytes.
    """
    root_dir = os.path.abspath(root or config.WORKSPACE_ROOT)

    path = path.strip()
    if not path:
        raise ValueError("Path must not be empty")

    if "\x00" in path:
        raise ValueError(f"Access denied: Path contains null bytes: '{path}'")

    normalized = path.replace("/", os.sep).replace("\\", os.sep)

    if _WINDOWS_DRIVE_RE.match(normalized):
        raise ValueError(
            f"Access denied: Absolute paths with drive letters are not allowed: '{path}'"
        )

    normalized = normalized.lstrip(os.sep)
    normalized = os.path.normpath(normalized) if normalized else ""

    final_path = os.path.abspath(os.path.join(root_dir, normalized))

    try:
        common_prefix = os.path.commonpath([final_path, root_dir])
    except ValueError as err:
        raise ValueError(f"Access denied: Path '{path}' is outside the workspace.") from err

    if common_prefix != root_dir:
        raise ValueError(f"Access denied: Path '{path}' is outside the workspace.")

    return final_path
