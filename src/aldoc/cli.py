"""Command-line interface for aldoc."""

import argparse
import json
import logging
import sys

from . import __version__
from .buffer import StringBuffer
from .declarations import find_declaration
from .errors import AldocError, DeclarationNotFoundError
from .locator import (
    doc_block_above,
    extract_tag,
    find_doc_block_end,
    find_doc_block_start,
    line_indent_column,
    parse_doc_xml,
)
from .models import ALObject
from .synthesizer import generate_doc, indent_block
from .utils import line_index, parse_attr_filter, parse_location

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000


def load_location(location: str) -> tuple[StringBuffer, int, int]:
    """Load the file named by a 'path:line' spec.

    Returns:
        Tuple of (buffer, 1-based line, 0-based line index).
    """
    path, line = parse_location(location)
    buffer = StringBuffer.from_file(path)
    return buffer, line, line_index(buffer, line)


def cmd_doc(args: argparse.Namespace) -> int:
    """Print the documentation snippet for the declaration on a line."""
    try:
        buffer, line, idx = load_location(args.location)

        construct = find_declaration(buffer, idx)
        if construct is None:
            raise DeclarationNotFoundError(line, buffer.line_at(idx))

        documentation = generate_doc(construct)
        column = line_indent_column(buffer, idx)

        if args.json:
            data = {
                "kind": "object" if isinstance(construct, ALObject) else "procedure",
                "declaration": construct.to_dict(),
                "documentation": documentation,
                "indent": column,
            }
            print(json.dumps(data, indent=2))
        else:
            print(indent_block(documentation, column))
        return 0

    except AldocError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_extract(args: argparse.Namespace) -> int:
    """Print one tag of the documentation block above a line."""
    try:
        buffer, line, idx = load_location(args.location)
        attr_name, attr_value = parse_attr_filter(args.attr)

        block = doc_block_above(buffer, idx)
        if not block:
            print(f"No documentation above line {line}")
            return 0

        fragment = extract_tag(block, args.tag, attr_name, attr_value)
        if not fragment:
            print(f"No <{args.tag}> found in documentation above line {line}")
            return 0

        print(fragment)
        return 0

    except AldocError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_parse(args: argparse.Namespace) -> int:
    """Print the documentation block above a line as JSON."""
    try:
        buffer, line, idx = load_location(args.location)

        block = doc_block_above(buffer, idx)
        if not block:
            print(f"No documentation above line {line}")
            return 0

        tree = parse_doc_xml(block)
        if tree is None:
            print(
                f"Error: documentation above line {line} is not well-formed XML",
                file=sys.stderr,
            )
            return 1

        print(json.dumps(tree, indent=2))
        return 0

    except AldocError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_block_end(args: argparse.Namespace) -> int:
    """Report the documentation block directly above a line."""
    try:
        buffer, line, idx = load_location(args.location)

        end = find_doc_block_end(buffer, idx)
        start = find_doc_block_start(buffer, idx)

        if args.json:
            data = {
                "start_line": start + 1 if start != -1 else None,
                "end_line": end if end != -1 else None,
            }
            print(json.dumps(data, indent=2))
        elif end == -1:
            print(f"No documentation block above line {line}")
        else:
            print(f"Documentation block: lines {start + 1}-{end}")
        return 0

    except AldocError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_serve(args: argparse.Namespace) -> int:
    """Start the API server."""
    try:
        import uvicorn

        print("Starting aldoc API server...")
        print(f"API docs: http://{args.host}:{args.port}/docs")
        print()

        # When reload is enabled, uvicorn requires the app as an import string
        app_target = "aldoc.api:app" if args.reload else None
        if app_target is None:
            from .api import app
            app_target = app

        uvicorn.run(
            app_target,
            host=args.host,
            port=args.port,
            reload=args.reload,
        )
        return 0

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="aldoc",
        description="Generate and inspect XML documentation comments in AL source.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # doc
    doc_parser = subparsers.add_parser(
        "doc", help="Generate documentation for the declaration on a line"
    )
    doc_parser.add_argument("location", help="Declaration location: 'path:line'")
    doc_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # extract
    extract_parser = subparsers.add_parser(
        "extract", help="Extract a tag from the documentation above a line"
    )
    extract_parser.add_argument("location", help="Declaration location: 'path:line'")
    extract_parser.add_argument("tag", help="Tag name, e.g. summary, param, returns")
    extract_parser.add_argument(
        "--attr", "-a", help="Attribute filter, e.g. name=Customer"
    )

    # parse
    parse_parser = subparsers.add_parser(
        "parse", help="Parse the documentation above a line into JSON"
    )
    parse_parser.add_argument("location", help="Declaration location: 'path:line'")

    # block-end
    block_end_parser = subparsers.add_parser(
        "block-end", help="Locate the documentation block directly above a line"
    )
    block_end_parser.add_argument("location", help="Declaration location: 'path:line'")
    block_end_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # serve
    serve_parser = subparsers.add_parser("serve", help="Start the API server")
    serve_parser.add_argument(
        "--host", default=DEFAULT_HOST, help=f"Host to bind to (default: {DEFAULT_HOST})"
    )
    serve_parser.add_argument(
        "--port", "-p", type=int, default=DEFAULT_PORT,
        help=f"Port to bind to (default: {DEFAULT_PORT})"
    )
    serve_parser.add_argument(
        "--reload", action="store_true", help="Enable auto-reload for development"
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )

    if not args.command:
        parser.print_help()
        return 0

    commands = {
        "doc": cmd_doc,
        "extract": cmd_extract,
        "parse": cmd_parse,
        "block-end": cmd_block_end,
        "serve": cmd_serve,
    }

    cmd_func = commands.get(args.command)
    if cmd_func:
        return cmd_func(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
