"""
Structural parser for the bfi interpreter.

Turns the flat operation stream from the Lexer into an instruction tree
(see ast_nodes). Loop delimiters are matched with a depth counter: a
span between a ``[`` at depth 0 and the ``]`` that brings the depth
back to 0 is parsed recursively and becomes a single Repeat node.

Offsets in errors always refer to the full operation stream, including
errors found while parsing a nested span.
"""

from __future__ import annotations
import logging
from typing import List, Optional, Sequence
from .lexer import Operation, OpType
from .ast_nodes import *

logger = logging.getLogger(__name__)


class ParseError(Exception):
    def __init__(self, message: str, operation: Operation, kind: str):
        self.operation = operation
        self.offset = operation.offset
        self.kind = kind
        loc = f"L{operation.line}:{operation.col}"
        super().__init__(f"Parse error at {loc}: {message}")


# Direct operation -> node mapping for everything except the delimiters
PRIMITIVES = {
    OpType.MOVE_RIGHT: MoveRight,
    OpType.MOVE_LEFT: MoveLeft,
    OpType.INCREMENT: Increment,
    OpType.DECREMENT: Decrement,
    OpType.OUTPUT: Output,
    OpType.INPUT: Input,
}


class Parser:
    """Builds a Program from a sequence of Operations."""

    def __init__(self, operations: Sequence[Operation]):
        self.operations = list(operations)

    def parse(self) -> Program:
        """Parse the whole operation stream into a Program tree."""
        try:
            body = self._parse_span(0, len(self.operations))
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("Parsed %d operations into %d nodes (max loop depth %d)",
                             len(self.operations), count_nodes(body), loop_depth(body))
        except RecursionError:
            first = next(op for op in self.operations if op.type is OpType.LOOP_BEGIN)
            raise ParseError(f"Loops starting at #{first.offset} are nested too deeply",
                             first, "too_deep") from None
        return Program(line=1, col=1, body=body)

    def _parse_span(self, start: int, end: int) -> List[Instruction]:
        """Parse ``operations[start:end]`` into an instruction list."""
        body: List[Instruction] = []
        depth = 0
        loop_start: Optional[Operation] = None
        loop_index = start

        for i in range(start, end):
            op = self.operations[i]

            if depth == 0:
                if op.type is OpType.LOOP_BEGIN:
                    loop_start = op
                    loop_index = i
                    depth += 1
                elif op.type is OpType.LOOP_END:
                    raise ParseError(f"Loop ending at #{op.offset} has no beginning",
                                     op, "unmatched_end")
                else:
                    body.append(PRIMITIVES[op.type](line=op.line, col=op.col))
                continue

            if op.type is OpType.LOOP_BEGIN:
                depth += 1
            elif op.type is OpType.LOOP_END:
                depth -= 1
                if depth == 0:
                    inner = self._parse_span(loop_index + 1, i)
                    body.append(Repeat(line=loop_start.line, col=loop_start.col, body=inner))

        if depth != 0:
            raise ParseError(f"Loop that starts at #{loop_start.offset} has no matching ending!",
                             loop_start, "unmatched_begin")

        return body


def parse(operations: Sequence[Operation]) -> Program:
    """Convenience wrapper: ``Parser(operations).parse()``."""
    return Parser(operations).parse()
