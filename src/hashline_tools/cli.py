"""
Command-line interface for hashline.

Usage:
    hashline read src/app.py --offset 10 --limit 20
    hashline edit src/app.py --edits-json '[{"set_line": {"anchor": "12:a3b1", "new_text": "x = 1"}}]'
    hashline edit src/app.py --edits-file edits.json --preview
    hashline serve --stdio
"""

import argparse
import sys
import traceback
from pathlib import Path

from . import config
from .errors import FileAccessError, HashlineError
from .logging_config import configure_logging
from .service import edit_file, read_file


def register_commands(subparsers: argparse._SubParsersAction) -> None:
    """Register the read, edit and serve commands."""
    read_parser = subparsers.add_parser(
        "read",
        help="Print a file with LINE:HASH| prefixes",
        description="Read a text file and print hashline-prefixed output: LINE:HASH|content",
    )
    read_parser.add_argument("path", type=Path, help="File to read")
    read_parser.add_argument("--offset", type=int, default=1, help="Start line (1-indexed)")
    read_parser.add_argument("--limit", type=int, default=0, help="Max lines (0 = all)")
    read_parser.add_argument("--encoding", default=config.DEFAULT_ENCODING)
    read_parser.set_defaults(func=cmd_read)

    edit_parser = subparsers.add_parser(
        "edit",
        help="Apply hashline edits to a file",
        description="Apply a batch of LINE:HASH-anchored edits to a text file",
    )
    edit_parser.add_argument("path", type=Path, help="File to edit")
    source = edit_parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--edits-json",
        help="JSON edits payload (either a full object or just an array of edits)",
    )
    source.add_argument("--edits-file", type=Path, help="Read JSON edits payload from file")
    edit_parser.add_argument(
        "--preview",
        action="store_true",
        help="Print a basic line diff to stderr before writing",
    )
    edit_parser.add_argument("--encoding", default=config.DEFAULT_ENCODING)
    edit_parser.set_defaults(func=cmd_edit)

    serve_parser = subparsers.add_parser("serve", help="Run the hashline MCP server")
    serve_parser.add_argument(
        "--stdio", action="store_true", help="Use STDIO transport instead of HTTP"
    )
    serve_parser.add_argument("--host", default=config.DEFAULT_HOST, help="HTTP server host")
    serve_parser.add_argument("--port", type=int, default=config.DEFAULT_PORT, help="HTTP server port")
    serve_parser.add_argument(
        "--root", default=None, help="Directory the tools may access (default: $HASHLINE_ROOT or cwd)"
    )
    serve_parser.set_defaults(func=cmd_serve)


def cmd_read(args: argparse.Namespace) -> int:
    print(read_file(str(args.path), offset=args.offset, limit=args.limit, encoding=args.encoding))
    return 0


def cmd_edit(args: argparse.Namespace) -> int:
    if args.edits_file is not None:
        try:
            payload = args.edits_file.read_text(encoding="utf-8")
        except OSError as e:
            raise FileAccessError(f"Failed to read edits file {args.edits_file}: {e}") from e
    else:
        payload = args.edits_json

    result = edit_file(str(args.path), payload, encoding=args.encoding)

    if args.preview:
        print(f"--- {args.path}\n+++ {args.path}\n", file=sys.stderr)
        diff = result.diff()
        if diff:
            print(diff, file=sys.stderr)

    if result.changed:
        print(f"updated {args.path}", file=sys.stderr)
    else:
        print(f"no edits supplied, {args.path} left unchanged", file=sys.stderr)
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    from .server import run_server

    run_server(stdio=args.stdio, host=args.host, port=args.port, root=args.root)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hashline",
        description="Hashline read/edit tools (LINE:HASH anchors)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show full tracebacks on error",
    )
    parser.add_argument("--log-level", default=config.LOG_LEVEL, help="Minimum log level")
    parser.add_argument(
        "--json-logs",
        action="store_true",
        default=config.LOG_JSON,
        help="Emit logs as JSON",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    register_commands(subparsers)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(json_output=args.json_logs, log_level=args.log_level)

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130
    except HashlineError as exc:
        print(f"error: {exc.message}", file=sys.stderr)
        if args.verbose:
            traceback.print_exc(file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
