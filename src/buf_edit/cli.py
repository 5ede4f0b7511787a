"""``buf-edit``: apply a command script to a file."""

from __future__ import annotations

import argparse
import os
import sys
from typing import List, Optional, Sequence

from buf_edit.actions import CommandError, run_script
from buf_edit.buffer import BufferIOError, Status, dump, load, save
from buf_edit.runtime import telemetry

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NOT_FOUND = 2


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="buf-edit",
        description="Edit a file with ed-style line commands.",
    )
    parser.add_argument("path", help="File to edit")
    parser.add_argument(
        "-e",
        "--expression",
        action="append",
        default=[],
        metavar="CMD",
        help="Command to run; may be repeated",
    )
    parser.add_argument(
        "-f",
        "--script-file",
        metavar="SCRIPT",
        help="File with one command per line, run after any -e commands",
    )
    parser.add_argument(
        "-n",
        "--print",
        action="store_true",
        dest="print_only",
        help="Print the result to stdout instead of saving",
    )
    parser.add_argument(
        "-o",
        "--output",
        metavar="OUT",
        help="Save to OUT instead of overwriting PATH",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 2 when the script ends on a failed search",
    )
    parser.add_argument(
        "--encoding",
        default=os.environ.get("BUF_EDIT_ENCODING", "utf-8"),
        help="Text encoding for reading and writing (default: utf-8)",
    )
    return parser.parse_args(argv)


def _read_script(path: str, encoding: str) -> List[str]:
    try:
        with open(path, "r", encoding=encoding) as stream:
            return stream.read().splitlines()
    except (OSError, UnicodeDecodeError, LookupError) as exc:
        raise BufferIOError(
            f"Cannot read script '{path}': {exc}", source_id=path
        ) from exc


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    commands = list(args.expression)

    try:
        if args.script_file:
            commands.extend(_read_script(args.script_file, args.encoding))
        buffer = load(args.path, encoding=args.encoding)
        with telemetry.span(
            "cli::run",
            component="cli",
            metadata={"source": args.path, "commands": len(commands)},
        ):
            buffer = run_script(buffer, commands)
        if args.print_only:
            sys.stdout.write(dump(buffer))
        else:
            save(buffer, args.output, encoding=args.encoding)
    except (BufferIOError, CommandError) as exc:
        print(f"buf-edit: {exc}", file=sys.stderr)
        return EXIT_ERROR

    if args.strict and buffer.status is Status.NOT_FOUND:
        print("buf-edit: pattern not found", file=sys.stderr)
        return EXIT_NOT_FOUND
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
