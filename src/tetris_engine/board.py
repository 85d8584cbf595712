"""Board representation for the Tetris playfield."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from .tetromino import Shape, shape_cells


# Dimensions of the standard Tetris board.
WIDTH = 10
HEIGHT = 20

EMPTY = 0

Grid = NDArray[np.uint8]


class CellOutOfRange(IndexError):
    """Raised when a cell outside the board is queried."""

    def __init__(self, row: int, col: int) -> None:
        super().__init__(f"Cell ({row}, {col}) out of bounds")
        self.row = row
        self.col = col


def create_empty_cells(rows: int, cols: int) -> Grid:
    """Return a new flat buffer of ``rows * cols`` empty cells."""

    return np.zeros(rows * cols, dtype=np.uint8)


class Board:
    """Tetris board holding the locked cells.

    Cells live in a single contiguous buffer indexed by ``row * cols + col``.
    Only :meth:`lock`, :meth:`clear_full_rows` and :meth:`reset` write to it.
    """

    def __init__(self, rows: int = HEIGHT, cols: int = WIDTH) -> None:
        if rows <= 0 or cols <= 0:
            raise ValueError(f"Board dimensions must be positive, got {rows}x{cols}")
        self._rows = rows
        self._cols = cols
        self._cells: Grid = create_empty_cells(rows, cols)

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def grid(self) -> Grid:
        """Read-only ``(rows, cols)`` view of the cells."""

        view = self._cells.reshape(self._rows, self._cols).view()
        view.setflags(write=False)
        return view

    def _check(self, row: int, col: int) -> None:
        if not (0 <= row < self._rows and 0 <= col < self._cols):
            raise CellOutOfRange(row, col)

    def cell_at(self, row: int, col: int) -> int:
        """Return the value at ``(row, col)``.

        ``0`` means empty, otherwise the value is ``type_id + 1`` of the piece
        that was locked there.

        Raises:
            CellOutOfRange: If the coordinates are outside the board.
        """

        self._check(row, col)
        return int(self._cells[row * self._cols + col])

    def is_occupied(self, row: int, col: int) -> bool:
        self._check(row, col)
        return bool(self._cells[row * self._cols + col] != EMPTY)

    def is_row_full(self, row: int) -> bool:
        """Return ``True`` if every column of ``row`` is occupied."""

        self._check(row, 0)
        start = row * self._cols
        return bool(np.all(self._cells[start:start + self._cols] != EMPTY))

    def lock(self, shape: Shape, origin_x: int, origin_y: int, type_id: int) -> None:
        """Write the occupied cells of ``shape`` into the board.

        Each cell is stored as ``type_id + 1``.  Cells falling outside the
        board, including rows above the top, are skipped.
        """

        value = np.uint8(int(type_id) + 1)
        for r, c in shape_cells(shape):
            row = origin_y + r
            col = origin_x + c
            if 0 <= row < self._rows and 0 <= col < self._cols:
                self._cells[row * self._cols + col] = value

    def clear_full_rows(self) -> int:
        """Clear completed rows and return how many were removed.

        Remaining rows keep their relative order and drop down; the same
        number of empty rows is inserted at the top.
        """

        grid = self._cells.reshape(self._rows, self._cols)
        full_rows = np.all(grid != EMPTY, axis=1)
        cleared = int(np.count_nonzero(full_rows))
        if cleared:
            remaining = grid[~full_rows].reshape(-1)
            self._cells[: cleared * self._cols] = EMPTY
            self._cells[cleared * self._cols:] = remaining
        return cleared

    def reset(self) -> None:
        """Set every cell to empty."""

        self._cells.fill(EMPTY)

    def snapshot(self) -> Grid:
        """Return an independent ``(rows, cols)`` copy of the cells."""

        return self._cells.reshape(self._rows, self._cols).copy()

    def occupied_count(self) -> int:
        return int(np.count_nonzero(self._cells))
