"""Execution trace storage."""

from typing import Callable

import numpy as np

from primitives.field import FF


class TraceTable:
    """Execution trace: `length` rows of `width` base field elements.

    Stored row-major as an FF array of shape (length, width), so `data[:, col]`
    is a register column and `data[row]` is one state.
    """

    def __init__(self, width: int, length: int):
        if width <= 0:
            raise ValueError(f"trace width must be positive, got {width}")
        if length <= 0:
            raise ValueError(f"trace length must be positive, got {length}")
        self.data = FF.Zeros((length, width))

    @property
    def width(self) -> int:
        return self.data.shape[1]

    @property
    def length(self) -> int:
        return self.data.shape[0]

    def fill(
        self,
        init: Callable[[np.ndarray], None],
        update: Callable[[int, np.ndarray], None],
    ) -> None:
        """Populate the trace row by row.

        `init(state)` writes row 0 into a mutable state of `width` elements;
        `update(step, state)` advances that state in place to produce row
        step + 1.
        """
        state = FF.Zeros(self.width)
        init(state)
        self.data[0] = state
        for step in range(self.length - 1):
            update(step, state)
            self.data[step + 1] = state

    def get(self, col: int, row: int):
        """Value of register `col` at step `row`."""
        return self.data[row, col]

    def __eq__(self, other) -> bool:
        if not isinstance(other, TraceTable):
            return NotImplemented
        return self.data.shape == other.data.shape and bool(np.array_equal(self.data, other.data))

    def __repr__(self) -> str:
        return f"TraceTable(width={self.width}, length={self.length})"
