from __future__ import annotations

from typing import List

import numpy as np

from .errors import make_out_of_bounds_error

DEFAULT_TAPE_SIZE = 30000

BOUNDS_ERROR = 'error'
BOUNDS_WRAP = 'wrap'
BOUNDS_POLICIES = (BOUNDS_ERROR, BOUNDS_WRAP)


class Tape:
    """Fixed-capacity array of byte cells addressed by a movable cursor.

    Cell arithmetic wraps modulo 256. Moving the cursor past either end
    raises OutOfBounds under the "error" policy, or wraps around to the
    other end under "wrap".
    """

    def __init__(self, size: int = DEFAULT_TAPE_SIZE, *, bounds: str = BOUNDS_ERROR):
        if size < 1:
            raise ValueError(f"Tape size must be at least 1, got {size}")
        if bounds not in BOUNDS_POLICIES:
            raise ValueError(f"Unknown bounds policy: {bounds!r}")
        self.cells = np.zeros(size, dtype=np.uint8)
        self.pointer = 0
        self.bounds = bounds

    def __len__(self) -> int:
        return len(self.cells)

    def advance(self) -> None:
        self._move(self.pointer + 1)

    def retreat(self) -> None:
        self._move(self.pointer - 1)

    def _move(self, target: int) -> None:
        size = len(self.cells)
        if 0 <= target < size:
            self.pointer = target
        elif self.bounds == BOUNDS_WRAP:
            self.pointer = target % size
        else:
            raise make_out_of_bounds_error(pointer=target, size=size)

    def increment_cell(self) -> None:
        # int() first: uint8 scalar arithmetic would overflow with a warning
        self.cells[self.pointer] = (int(self.cells[self.pointer]) + 1) & 0xFF

    def decrement_cell(self) -> None:
        self.cells[self.pointer] = (int(self.cells[self.pointer]) - 1) & 0xFF

    def read_cell(self) -> int:
        return int(self.cells[self.pointer])

    def write_cell(self, value: int) -> None:
        self.cells[self.pointer] = value & 0xFF

    def dump(self, start: int = 0, count: int = 16) -> List[int]:
        return [int(b) for b in self.cells[start:start + count]]
