"""
Tape memory for the bfi interpreter.

A fixed-length run of unsigned 8-bit cells plus the data pointer that
addresses them. Cells start at zero; the pointer starts at the configured
offset (by default the middle of the tape so programs can move in both
directions). Moving off either end is an error, never a wraparound.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_TAPE_LENGTH = 1024


class TapeConfigError(ValueError):
    pass


@dataclass
class TapeConfig:
    """Tape size and starting pointer offset.

    ``start=None`` means ``length // 2``.
    """
    length: int = DEFAULT_TAPE_LENGTH
    start: Optional[int] = None

    def __post_init__(self):
        if self.length <= 0:
            raise TapeConfigError(f"Tape length must be positive (got {self.length})")
        if self.start is None:
            self.start = self.length // 2
        if not 0 <= self.start < self.length:
            raise TapeConfigError(
                f"Start offset {self.start} is outside the tape [0, {self.length})")


class Tape:
    """Byte cells with a movable data pointer.

    The interpreter is the only mutator. Bounds are checked by the caller
    when the pointer moves, so cell access here assumes a valid pointer.
    """

    def __init__(self, config: Optional[TapeConfig] = None):
        if config is None:
            config = TapeConfig()
        self.config = config
        self.cells = bytearray(config.length)
        self.pointer = config.start
        logger.debug("Allocated tape: %d cells, pointer at %d", config.length, config.start)

    def __len__(self) -> int:
        return len(self.cells)

    # --- Current cell ---

    @property
    def value(self) -> int:
        return self.cells[self.pointer]

    @value.setter
    def value(self, val: int):
        self.cells[self.pointer] = val & 0xFF

    def increment(self):
        self.cells[self.pointer] = (self.cells[self.pointer] + 1) & 0xFF

    def decrement(self):
        self.cells[self.pointer] = (self.cells[self.pointer] - 1) & 0xFF

    # --- Pointer ---

    def can_move(self, delta: int) -> bool:
        return 0 <= self.pointer + delta < len(self.cells)

    def dump(self, start: int = 0, length: int = 16) -> str:
        """Hex dump of a tape window, the current cell bracketed."""
        end = min(start + length, len(self.cells))
        parts = []
        for i in range(max(start, 0), end):
            cell = f"{self.cells[i]:02X}"
            parts.append(f"[{cell}]" if i == self.pointer else f" {cell} ")
        return f"{max(start, 0):04X}: " + "".join(parts)
