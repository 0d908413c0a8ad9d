"""Command-line entry point: JSON document in, Go literal out."""

from __future__ import annotations

import json
import logging
import sys

from .build import DEFAULT_MAX_DEPTH, LiteralBuilder, Options
from .emit import render
from .errors import GoAstGenError
from .parse import ParseError, parse
from .serialize import serialize
from .tokens import TokenizeError

PHASES: list[str] = [
    "build",
]

USAGE: str = """\
goastgen [OPTIONS] [INPUT] [-o OUTPUT]

Reads a JSON document from INPUT (or stdin) and prints it as a Go literal.

Options:
  --max-depth N       Reject values nested deeper than N (default 200)
  --stop-at PHASE     Stop after phase and print its tree as JSON: build
  --check             Parse the rendered literal back and compare trees
  --verbose           Log build steps to stderr
  -o, --output FILE   Write output to FILE instead of stdout
  --help              Show this help message
"""


class Args:
    """Parsed command-line arguments."""

    def __init__(self) -> None:
        self.max_depth: int = DEFAULT_MAX_DEPTH
        self.stop_at: str | None = None
        self.check: bool = False
        self.verbose: bool = False
        self.input_file: str | None = None
        self.output_file: str | None = None


def _usage_error(msg: str) -> None:
    print("error: " + msg, file=sys.stderr)
    sys.exit(2)


def parse_args(argv: list[str]) -> Args:
    """Parse command-line arguments; exits with status 2 on misuse."""
    result = Args()
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg == "--help" or arg == "-h":
            print(USAGE, end="")
            sys.exit(0)
        elif arg == "--max-depth":
            if i + 1 >= len(argv):
                _usage_error("--max-depth requires an argument")
            value = argv[i + 1]
            if not value.isdigit():
                _usage_error("--max-depth expects a non-negative integer, got '" + value + "'")
            result.max_depth = int(value)
            i += 2
        elif arg == "--stop-at":
            if i + 1 >= len(argv):
                _usage_error("--stop-at requires an argument")
            result.stop_at = argv[i + 1]
            i += 2
        elif arg == "-o" or arg == "--output":
            if i + 1 >= len(argv):
                _usage_error(arg + " requires an argument")
            result.output_file = argv[i + 1]
            i += 2
        elif arg == "--check":
            result.check = True
            i += 1
        elif arg == "--verbose" or arg == "-v":
            result.verbose = True
            i += 1
        elif arg.startswith("-") and arg != "-":
            _usage_error("unknown flag '" + arg + "'")
        else:
            if result.input_file is not None:
                _usage_error("unexpected argument '" + arg + "'")
            result.input_file = None if arg == "-" else arg
            i += 1
    if result.stop_at is not None and result.stop_at not in PHASES:
        _usage_error("unknown phase '" + result.stop_at + "'")
    return result


def read_source(input_file: str | None) -> tuple[str, int]:
    """Read source from file or stdin. Returns (source, exit_code) where exit_code 0 means OK."""
    if input_file is not None:
        try:
            with open(input_file, "rb") as f:
                raw = f.read()
        except OSError:
            print("error: cannot open '" + input_file + "'", file=sys.stderr)
            return ("", 1)
    else:
        raw = sys.stdin.buffer.read()
    try:
        return (raw.decode("utf-8"), 0)
    except ValueError:
        print("error: invalid utf-8 in input", file=sys.stderr)
        return ("", 1)


def write_output(output: str, output_file: str | None) -> int:
    """Write output to file or stdout. Returns 0 on success, 1 on error."""
    if output_file is not None:
        try:
            with open(output_file, "w", encoding="utf-8") as f:
                f.write(output + "\n")
        except OSError:
            print("error: cannot write '" + output_file + "'", file=sys.stderr)
            return 1
        return 0
    print(output)
    return 0


def run_pipeline(source: str, args: Args) -> tuple[int, str]:
    """Decode, build and render. Returns (exit_code, output)."""
    try:
        document = json.loads(source)
    except json.JSONDecodeError as e:
        print("error: invalid JSON: " + e.msg + " at line " + str(e.lineno) + " col " + str(e.colno), file=sys.stderr)
        return (1, "")
    except RecursionError:
        print("error: invalid JSON: nesting too deep", file=sys.stderr)
        return (1, "")
    builder = LiteralBuilder(Options(max_depth=args.max_depth))
    try:
        tree = builder.build(document)
    except GoAstGenError as e:
        print("error: " + e.msg, file=sys.stderr)
        return (1, "")
    except ValueError as e:
        print("error: " + str(e), file=sys.stderr)
        return (1, "")
    if args.stop_at == "build":
        return (0, json.dumps(serialize(tree), indent=2))
    output = render(tree)
    if args.check:
        try:
            reparsed = parse(output)
        except (TokenizeError, ParseError) as e:
            print("error: rendered literal does not parse: " + str(e), file=sys.stderr)
            return (1, "")
        if reparsed != tree:
            print("error: rendered literal parses to a different tree", file=sys.stderr)
            return (1, "")
    return (0, output)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(sys.argv[1:] if argv is None else argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s", stream=sys.stderr)
    source, err = read_source(args.input_file)
    if err != 0:
        return err
    if len(source.strip()) == 0:
        print("error: no input provided", file=sys.stderr)
        return 2
    exit_code, output = run_pipeline(source, args)
    if exit_code != 0:
        return exit_code
    return write_output(output, args.output_file)


if __name__ == "__main__":
    sys.exit(main())
