"""
Instruction tree definitions for the bfi interpreter.

The parser turns the flat operation stream into these nodes and the
interpreter walks them. Primitive commands are leaf nodes; a matched
``[ ... ]`` pair becomes a single Repeat node that owns its body.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List


# ──────────────────────────────────────────────
# Base node
# ──────────────────────────────────────────────

@dataclass
class Instruction:
    """Base class for all instruction nodes."""
    line: int = 0
    col: int = 0


# ──────────────────────────────────────────────
# Primitive commands
# ──────────────────────────────────────────────

@dataclass
class MoveRight(Instruction):
    pass


@dataclass
class MoveLeft(Instruction):
    pass


@dataclass
class Increment(Instruction):
    pass


@dataclass
class Decrement(Instruction):
    pass


@dataclass
class Output(Instruction):
    pass


@dataclass
class Input(Instruction):
    pass


# ──────────────────────────────────────────────
# Structured loop
# ──────────────────────────────────────────────

@dataclass
class Repeat(Instruction):
    """Runs ``body`` while the current cell is non-zero."""
    body: List[Instruction] = field(default_factory=list)


# ──────────────────────────────────────────────
# Root
# ──────────────────────────────────────────────

@dataclass
class Program(Instruction):
    """Root node: the top-level instruction sequence."""
    body: List[Instruction] = field(default_factory=list)


def loop_depth(body: List[Instruction]) -> int:
    """Deepest Repeat nesting inside ``body`` (0 when there are no loops)."""
    depth = 0
    for node in body:
        if isinstance(node, Repeat):
            depth = max(depth, 1 + loop_depth(node.body))
    return depth


def count_nodes(body: List[Instruction]) -> int:
    """Total number of nodes in the tree, Repeat nodes included."""
    total = 0
    for node in body:
        total += 1
        if isinstance(node, Repeat):
            total += count_nodes(node.body)
    return total
