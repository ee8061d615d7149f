#!/usr/bin/env python3
"""
bfi — tape language interpreter CLI

Usage:
    python bfi.py <program.bf> [--tape-length 1024] [--start 512] [--prompt]
                               [--tokens | --ast] [-v | -vv | -q]

Program input is read from stdin one byte at a time; program output is
written to stdout as UTF-8 text, one character per cell value.

Examples:
    python bfi.py hello.bf
    echo -n "abc" | python bfi.py rot13.bf
    python bfi.py deep.bf --tape-length 0x8000 --start 0
    python bfi.py loops.bf --ast                    # dump the instruction tree
"""

import argparse
import logging
import os
import sys

# Allow running from project root or as module
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from bf_interpreter import __version__, run_source
from bf_interpreter.lexer import Lexer
from bf_interpreter.parser import Parser, ParseError
from bf_interpreter.tape import DEFAULT_TAPE_LENGTH, TapeConfig, TapeConfigError
from bf_interpreter.interpreter import ExecutionError

logger = logging.getLogger("bfi")


def parse_int_arg(value: str) -> int:
    """Parse an integer argument that may be hex (0x...), $ prefix, or decimal."""
    value = value.strip()
    if value.startswith("0x") or value.startswith("0X"):
        return int(value, 16)
    if value.startswith("$"):
        return int(value[1:], 16)
    return int(value)


def setup_logging(verbose: int, quiet: bool):
    """Configure the root logger from -v / -q flags."""
    if quiet:
        level = logging.ERROR
    elif verbose == 0:
        level = logging.WARNING
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    logging.basicConfig(level=level, handlers=[console], force=True)


def main():
    parser = argparse.ArgumentParser(
        prog="bfi",
        description="Interpreter for the eight-symbol tape language",
    )
    parser.add_argument("input", help="Program source file")
    parser.add_argument("--tape-length", default=None,
                        help=f"Number of tape cells (default: {DEFAULT_TAPE_LENGTH})")
    parser.add_argument("--start", default=None,
                        help="Initial data pointer offset (default: tape length / 2)")
    parser.add_argument("--prompt", action="store_true",
                        help="Print 'Input N:' on stderr before each read")
    parser.add_argument("--verbose", "-v", action="count", default=0,
                        help="Increase log verbosity (-v, -vv)")
    parser.add_argument("--quiet", "-q", action="store_true",
                        help="Only log errors")
    parser.add_argument("--tokens", action="store_true",
                        help="Dump operation stream and exit (debug)")
    parser.add_argument("--ast", action="store_true",
                        help="Dump instruction tree and exit (debug)")
    parser.add_argument("--version", action="version",
                        version=f"bfi {__version__}")

    args = parser.parse_args()
    setup_logging(args.verbose, args.quiet)

    # Read input
    if not os.path.exists(args.input):
        print(f"Error: Input file does not exist: {args.input}", file=sys.stderr)
        sys.exit(1)
    try:
        with open(args.input, "r", encoding="utf-8") as f:
            source = f.read()
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading {args.input}: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        length = parse_int_arg(args.tape_length) if args.tape_length else DEFAULT_TAPE_LENGTH
        start = parse_int_arg(args.start) if args.start else None
        config = TapeConfig(length=length, start=start)
    except (ValueError, TapeConfigError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    logger.info("Program: %s (%d characters)", args.input, len(source))
    logger.info("Tape:    %d cells, pointer at %d", config.length, config.start)

    try:
        # Token dump mode
        if args.tokens:
            for op in Lexer(source).tokenize():
                print(op)
            sys.exit(0)

        # AST dump mode
        if args.ast:
            _print_tree(Parser(Lexer(source).tokenize()).parse())
            sys.exit(0)

        tape = run_source(source, config=config,
                          prompt=sys.stderr if args.prompt else None)

        logger.info("Done: pointer at %d", tape.pointer)
        logger.debug("Tape at exit: %s", tape.dump(max(tape.pointer - 8, 0)))

    except ParseError as e:
        print(f"Parse error: {e}", file=sys.stderr)
        sys.exit(1)
    except ExecutionError as e:
        print(f"Runtime error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Internal interpreter error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(2)


def _print_tree(node, indent=0):
    """Pretty-print an instruction tree (debug helper)."""
    prefix = "  " * indent
    body = getattr(node, "body", None)
    print(f"{prefix}{type(node).__name__} @L{node.line}:{node.col}")
    if body is not None:
        for child in body:
            _print_tree(child, indent + 1)


if __name__ == "__main__":
    main()
