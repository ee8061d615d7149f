"""
bfi — tree-walking interpreter for the eight-symbol tape language
==================================================================
Runs programs written in the classic ``> < + - . , [ ]`` language against
a fixed-length byte tape with a movable data pointer.

Architecture:
    ┌──────────┐    ┌────────────┐    ┌──────────────┐    ┌─────────────┐
    │  Source  │───>│   Lexer    │───>│    Parser    │───>│ Interpreter │──> output
    │  (text)  │    │(operations)│    │(instruction  │    │ (tape walk) │<── input
    └──────────┘    └────────────┘    │    tree)     │    └─────────────┘
                                      └──────────────┘

    - lexer.py:       Symbol filter; anything outside the alphabet is a comment
    - parser.py:      Depth-counting loop matcher, recursive over nested spans
    - ast_nodes.py:   Dataclass tree; Repeat owns its body
    - tape.py:        bytearray cells + data pointer, TapeConfig
    - interpreter.py: Recursive evaluator with bounds and input checks
"""

__version__ = "0.1.0"

from typing import BinaryIO, Optional, TextIO

from .lexer import Lexer, Operation, OpType, tokenize
from .ast_nodes import *
from .parser import Parser, ParseError, parse
from .tape import DEFAULT_TAPE_LENGTH, Tape, TapeConfig, TapeConfigError
from .interpreter import (Interpreter, ExecutionError, TapeBoundsError,
                          InputExhaustedError, NestingDepthError, execute)


def run_source(source: str, *, config: Optional[TapeConfig] = None,
               stdin: Optional[BinaryIO] = None,
               stdout: Optional[BinaryIO] = None,
               prompt: Optional[TextIO] = None) -> Tape:
    """Tokenize, parse and execute program text.

    Full pipeline: Lexer -> Parser -> Program -> Interpreter.

    Args:
        source: Program text. Non-command characters are ignored.
        config: Tape length and start offset (default 1024 cells, pointer
            in the middle).
        stdin: Binary input source (default ``sys.stdin.buffer``).
        stdout: Binary output sink (default ``sys.stdout.buffer``).
        prompt: Text stream for ``Input N:`` prompts, or None for silent reads.

    Returns:
        The tape after execution.

    Raises:
        ParseError: unbalanced loop delimiters.
        ExecutionError: pointer out of bounds or input exhausted.
    """
    program = parse(tokenize(source))
    tape = Tape(config)
    Interpreter(stdin=stdin, stdout=stdout, prompt=prompt).run(program, tape)
    return tape
