"""Utility helpers for the Tetris engine."""

from __future__ import annotations

from typing import List, Optional

from .board import Board
from .tetromino import ActivePiece, Shape, shape_cells


BASE_INTERVAL_MS = 500

# (minimum lines cleared, tick interval in milliseconds), fastest first.
SPEED_TABLE = (
    (30, 200),
    (20, 300),
    (10, 400),
)


def tick_interval_ms(lines_cleared: int, base_interval_ms: int = BASE_INTERVAL_MS) -> int:
    """Return the delay between gravity ticks for ``lines_cleared``.

    The driver should call this again after every update so the speed
    follows the player's progress.  A table entry never exceeds
    ``base_interval_ms``, so a faster configured base is not slowed down
    once the player starts clearing lines.
    """

    for threshold, interval in SPEED_TABLE:
        if lines_cleared >= threshold:
            return min(interval, base_interval_ms)
    return base_interval_ms


def can_place(board: Board, shape: Shape, x: int, y: int) -> bool:
    """Return ``True`` if ``shape`` with its origin at ``(x, y)`` fits on ``board``.

    Every occupied cell must stay within the board's columns and above its
    bottom edge, and must not overlap a locked cell.  Cells above the top row
    are exempt from the overlap test so pieces can spawn partially off-screen.
    This single check backs movement, rotation and spawning.
    """

    for r, c in shape_cells(shape):
        row = y + r
        col = x + c
        if not 0 <= col < board.cols or row >= board.rows:
            return False
        if row >= 0 and board.is_occupied(row, col):
            return False
    return True


def render_grid(board: Board, active: Optional[ActivePiece] = None) -> List[List[int]]:
    """Return a copy of the board grid with the active piece overlaid.

    This is a convenience for renderers that want a single 2D array to draw
    without mutating the underlying board state (i.e. without locking the
    piece). Cells occupied by the active piece receive ``type_id + 1``.
    """

    grid = board.snapshot().tolist()
    if active is not None:
        for r, c in active.cells():
            if 0 <= r < board.rows and 0 <= c < board.cols:
                grid[r][c] = int(active.type) + 1
    return grid
