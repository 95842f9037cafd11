"""Command-line interface for unibom."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import BinaryIO, NoReturn

import unibom
from unibom._utils import _parse_expect
from unibom.enums import ExitStatus
from unibom.errors import BomError

_PROG = "bom"


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors with the generic status.

    argparse exits with 2 by default, which ``bom`` reserves for a failed
    ``--expect`` check.
    """

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(ExitStatus.FAILURE, f"{self.prog}: error: {message}\n")


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog=_PROG, description="Detect, strip and convert Unicode byte order marks."
    )
    modes = parser.add_mutually_exclusive_group()
    modes.add_argument(
        "-s",
        "--strip",
        dest="mode",
        action="store_const",
        const="strip",
        help="Strip the BOM and output the remainder of the file",
    )
    modes.add_argument(
        "-d",
        "--detect",
        dest="mode",
        action="store_const",
        const="detect",
        help="Report the detected BOM type and exit",
    )
    modes.add_argument(
        "--list",
        dest="mode",
        action="store_const",
        const="list",
        help="List the supported BOM types",
    )
    modes.add_argument(
        "-p",
        "--print",
        dest="print_type",
        metavar="TYPE",
        help='Output the byte sequence corresponding to "TYPE"',
    )
    modes.add_argument(
        "-v", "--version", action="version", version=f"{_PROG} {unibom.__version__}"
    )
    parser.add_argument(
        "-e",
        "--expect",
        action="append",
        default=[],
        metavar="TYPES",
        help="Expect the specified BOM type(s) (separated by commas)",
    )
    parser.add_argument(
        "-l",
        "--lenient",
        action="store_true",
        help="Skip invalid input byte sequences instead of failing",
    )
    parser.add_argument(
        "--prefer32",
        action="store_true",
        help="Prefer UTF-32LE instead of UTF-16LE followed by NUL",
    )
    parser.add_argument(
        "-u",
        "--utf8",
        action="store_true",
        help="Convert the remainder of the file to UTF-8",
    )
    parser.add_argument(
        "--debug", action="store_true", help="Log conversion details to stderr"
    )
    parser.add_argument(
        "file", nargs="?", help='Input file (default: stdin, also "-")'
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Run the ``bom`` command-line tool.

    :param argv: Command-line arguments.  Defaults to ``sys.argv[1:]``.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.print_type is not None:
        args.mode = "print"
    if args.mode is None:
        parser.print_usage(sys.stderr)
        sys.exit(ExitStatus.FAILURE)
    if args.file is not None and args.mode not in ("strip", "detect"):
        parser.error(f"unexpected argument: {args.file}")

    if args.debug:
        logging.basicConfig(
            level=logging.DEBUG, format="%(name)s: %(message)s", stream=sys.stderr
        )

    expect = [name for item in args.expect for name in item.split(",")]
    try:
        _parse_expect(expect)
        if args.mode == "list":
            for name in unibom.list_types():
                print(name)
        elif args.mode == "print":
            _write_stdout(unibom.print_bytes(args.print_type))
        elif args.file is None or args.file == "-":
            _run(args, expect, sys.stdin.buffer)
        else:
            with Path(args.file).open("rb") as f:
                _run(args, expect, f)
    except BomError as e:
        print(f"{_PROG}: {e}", file=sys.stderr)
        sys.exit(e.exit_status)
    except OSError as e:
        print(f"{_PROG}: {e}", file=sys.stderr)
        sys.exit(ExitStatus.FAILURE)


def _run(args: argparse.Namespace, expect: list[str], source: BinaryIO) -> None:
    if args.mode == "detect":
        print(unibom.detect(source, expect, prefer32=args.prefer32))
        return
    unibom.strip(
        source,
        sys.stdout.buffer,
        expect,
        lenient=args.lenient,
        prefer32=args.prefer32,
        utf8=args.utf8,
    )


def _write_stdout(data: bytes) -> None:
    sys.stdout.buffer.write(data)
    sys.stdout.buffer.flush()


if __name__ == "__main__":
    main()
