"""
Tree-walking evaluator for the bfi interpreter.

Executes a Program (see ast_nodes) against a Tape. Each output cell is
written to a binary sink as the UTF-8 encoding of the character with
that code (cell 255 becomes b"\xc3\xbf"); input bytes come from a
binary source one at a time. A Repeat node re-runs its whole
body while the current cell is non-zero; a program that never clears
that cell simply never returns.

Error handling:
  - Moving the data pointer past either end of the tape raises
    TapeBoundsError.
  - Reading when the input source is exhausted raises
    InputExhaustedError.
  - Loops nested deeper than the Python stack allows raise
    NestingDepthError.
All of them stop execution immediately and leave the tape as it was at the
failing instruction.
"""

from __future__ import annotations
import logging
import sys
from typing import BinaryIO, List, Optional, TextIO
from .ast_nodes import *
from .tape import Tape

logger = logging.getLogger(__name__)


class ExecutionError(Exception):
    def __init__(self, message: str, node: Instruction):
        self.node = node
        super().__init__(f"Runtime error at L{node.line}:{node.col}: {message}")


class TapeBoundsError(ExecutionError):
    def __init__(self, node: Instruction, pointer: int, direction: str, length: int):
        self.pointer = pointer
        self.direction = direction
        super().__init__(
            f"cannot move {direction} from cell {pointer} (tape is [0, {length}))", node)


class InputExhaustedError(ExecutionError):
    def __init__(self, node: Instruction, ordinal: int):
        self.ordinal = ordinal
        super().__init__(f"input exhausted at read #{ordinal}", node)


class NestingDepthError(ExecutionError):
    def __init__(self, node: Instruction):
        super().__init__("loops are nested too deeply to execute", node)


class Interpreter:
    """Runs instruction trees against a tape.

    Args:
        stdin: Binary input source (``read(1)`` returning ``b""`` at EOF).
            Defaults to ``sys.stdin.buffer``.
        stdout: Binary output sink. Defaults to ``sys.stdout.buffer``.
        prompt: Optional text stream that receives ``Input N:`` before
            each read. ``None`` reads silently.
    """

    def __init__(self, stdin: Optional[BinaryIO] = None,
                 stdout: Optional[BinaryIO] = None,
                 prompt: Optional[TextIO] = None):
        self.stdin = stdin if stdin is not None else sys.stdin.buffer
        self.stdout = stdout if stdout is not None else sys.stdout.buffer
        self.prompt = prompt
        self.input_count = 0
        self.output_count = 0

    def run(self, program: Program, tape: Tape) -> None:
        """Execute ``program`` from the top with fresh I/O counters."""
        self.input_count = 0
        self.output_count = 0
        try:
            self.execute(program.body, tape)
        except RecursionError:
            raise NestingDepthError(program) from None
        logger.debug("Run finished: %d bytes out, %d bytes in, pointer at %d",
                     self.output_count, self.input_count, tape.pointer)

    def execute(self, body: List[Instruction], tape: Tape) -> None:
        """Execute an instruction sequence in order."""
        for node in body:
            if isinstance(node, MoveRight):
                self._move(node, tape, 1)
            elif isinstance(node, MoveLeft):
                self._move(node, tape, -1)
            elif isinstance(node, Increment):
                tape.increment()
            elif isinstance(node, Decrement):
                tape.decrement()
            elif isinstance(node, Output):
                self._output(tape)
            elif isinstance(node, Input):
                self._input(node, tape)
            elif isinstance(node, Repeat):
                while tape.value != 0:
                    self.execute(node.body, tape)
            else:
                raise TypeError(f"Unknown instruction node: {type(node).__name__}")

    # ── Handlers ──────────────────────────────

    def _move(self, node: Instruction, tape: Tape, delta: int):
        if not tape.can_move(delta):
            direction = "right" if delta > 0 else "left"
            raise TapeBoundsError(node, tape.pointer, direction, len(tape))
        tape.pointer += delta

    def _output(self, tape: Tape):
        self.stdout.write(chr(tape.value).encode("utf-8"))
        if hasattr(self.stdout, "flush"):
            self.stdout.flush()
        self.output_count += 1

    def _input(self, node: Instruction, tape: Tape):
        if self.prompt is not None:
            print(f"Input {self.input_count}:", file=self.prompt, flush=True)
        data = self.stdin.read(1)
        if not data:
            raise InputExhaustedError(node, self.input_count)
        self.input_count += 1
        tape.value = data[0]


def execute(program: Program, tape: Optional[Tape] = None, *,
            stdin: Optional[BinaryIO] = None,
            stdout: Optional[BinaryIO] = None,
            prompt: Optional[TextIO] = None) -> Tape:
    """Run ``program`` and return the tape it ran against.

    A fresh default tape is allocated when ``tape`` is not given.
    """
    if tape is None:
        tape = Tape()
    Interpreter(stdin=stdin, stdout=stdout, prompt=prompt).run(program, tape)
    return tape
