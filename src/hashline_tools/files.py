"""Reading and atomically writing the files being edited."""

from __future__ import annotations

import contextlib
import os
import tempfile

from . import config
from .errors import FileAccessError


def read_text(path: str, encoding: str = config.DEFAULT_ENCODING) -> str:
    """Read a whole text file without translating line endings.

    Raises:
        FileAccessError: If the file is missing, too large or undecodable.
    """
    if not os.path.exists(path):
        raise FileAccessError(f"File not found at {path}")
    if not os.path.isfile(path):
        raise FileAccessError(f"Path is not a file: {path}")

    size = os.path.getsize(path)
    if size > config.MAX_FILE_BYTES:
        raise FileAccessError(f"File too large ({size} bytes, max {config.MAX_FILE_BYTES})")

    try:
        with open(path, encoding=encoding, newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError, LookupError) as e:
        raise FileAccessError(f"Failed to read {path}: {e}") from e


def atomic_write(path: str, content: str, encoding: str = config.DEFAULT_ENCODING) -> None:
    """Replace ``path`` with ``content`` via a temp file and os.replace.

    The file's permission bits are preserved. Readers see either the old or
    the new content, never a partial write.

    Raises:
        FileAccessError: If the file cannot be written.
    """
    try:
        original_mode = os.stat(path).st_mode
        fd, tmp_path = tempfile.mkstemp(dir=os.path.dirname(os.path.abspath(path)))
        fd_open = True
        try:
            os.fchmod(fd, original_mode)
            with os.fdopen(fd, "w", encoding=encoding, newline="") as f:
                fd_open = False
                f.write(content)
            os.replace(tmp_path, path)
        except BaseException:
            if fd_open:
                os.close(fd)
            with contextlib.suppress(OSError):
                os.unlink(tmp_path)
            raise
    except (OSError, UnicodeEncodeError, LookupError) as e:
        raise FileAccessError(f"Failed to write {path}: {e}") from e
