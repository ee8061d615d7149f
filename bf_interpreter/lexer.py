"""
Lexer / Tokenizer for the bfi interpreter.

Converts program text into a flat stream of operations for the parser.
Only the eight command symbols are significant:

    >   move the data pointer right
    <   move the data pointer left
    +   increment the current cell
    -   decrement the current cell
    .   output the current cell
    ,   read one byte into the current cell
    [   loop begin
    ]   loop end

Every other character is a comment and is dropped without a diagnostic.
"""

from __future__ import annotations
import enum
import logging
from dataclasses import dataclass
from typing import Dict, List

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────
# Operation types
# ──────────────────────────────────────────────

class OpType(enum.Enum):
    MOVE_RIGHT = ">"
    MOVE_LEFT = "<"
    INCREMENT = "+"
    DECREMENT = "-"
    OUTPUT = "."
    INPUT = ","
    LOOP_BEGIN = "["
    LOOP_END = "]"


# ──────────────────────────────────────────────
# Operation data class
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class Operation:
    type: OpType
    offset: int         # index in the operation stream
    line: int = 0
    col: int = 0

    def __repr__(self):
        return f"Operation({self.type.name}, #{self.offset}, L{self.line}:{self.col})"


# ──────────────────────────────────────────────
# Symbol map
# ──────────────────────────────────────────────

SYMBOLS: Dict[str, OpType] = {op.value: op for op in OpType}


class Lexer:
    """Filters program text down to a list of Operations."""

    def __init__(self, source: str):
        self.source = source
        self.line = 1
        self.col = 1
        self.operations: List[Operation] = []

    def tokenize(self) -> List[Operation]:
        for ch in self.source:
            op = SYMBOLS.get(ch)
            if op is not None:
                self.operations.append(
                    Operation(op, len(self.operations), self.line, self.col))
            if ch == "\n":
                self.line += 1
                self.col = 1
            else:
                self.col += 1

        logger.debug("Tokenized %d characters into %d operations",
                     len(self.source), len(self.operations))
        return self.operations


def tokenize(source: str) -> List[Operation]:
    """Convenience wrapper: ``Lexer(source).tokenize()``."""
    return Lexer(source).tokenize()
