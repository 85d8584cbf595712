"""Tetromino definitions and the active falling piece.

Shapes are stored as immutable 0/1 matrices.  Rotation is a pure transform
which always yields a new matrix, so a :class:`Piece` can be shared freely
between the engine, renderers and tests without defensive copies.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Tuple

Shape = Tuple[Tuple[int, ...], ...]


class TetrominoType(IntEnum):
    """Enumeration of the seven standard tetromino shapes.

    The integer value is the piece's type id.  Locked board cells store
    ``type_id + 1`` so that ``0`` stays free to mean "empty".
    """

    I = 0
    J = 1
    L = 2
    O = 3
    S = 4
    T = 5
    Z = 6


# Spawn orientation for each tetromino.
_BASE_SHAPES: Tuple[Tuple[TetrominoType, Shape], ...] = (
    (TetrominoType.I, ((1, 1, 1, 1),)),
    (TetrominoType.J, ((1, 0, 0), (1, 1, 1))),
    (TetrominoType.L, ((0, 0, 1), (1, 1, 1))),
    (TetrominoType.O, ((1, 1), (1, 1))),
    (TetrominoType.S, ((0, 1, 1), (1, 1, 0))),
    (TetrominoType.T, ((0, 1, 0), (1, 1, 1))),
    (TetrominoType.Z, ((1, 1, 0), (0, 1, 1))),
)


def all_shapes() -> List[Tuple[TetrominoType, Shape]]:
    """Return the ``(type, base shape)`` pairs ordered by type id."""

    return list(_BASE_SHAPES)


def rotate(shape: Shape) -> Shape:
    """Return ``shape`` rotated 90 degrees clockwise.

    For an ``R x C`` input the result is ``C x R`` with
    ``out[c][R - 1 - r] == shape[r][c]``.  Applying the transform four times
    gives back the original matrix.
    """

    rows = len(shape)
    cols = len(shape[0])
    return tuple(
        tuple(shape[rows - 1 - j][c] for j in range(rows)) for c in range(cols)
    )


def shape_cells(shape: Shape) -> List[Tuple[int, int]]:
    """Return the ``(row, col)`` offsets of the occupied cells in ``shape``."""

    return [
        (r, c)
        for r, line in enumerate(shape)
        for c, value in enumerate(line)
        if value
    ]


@dataclass(frozen=True)
class Piece:
    """Immutable pairing of a tetromino type and one of its orientations."""

    type: TetrominoType
    shape: Shape

    @classmethod
    def of(cls, piece_type: TetrominoType) -> "Piece":
        """Return the piece for ``piece_type`` in its spawn orientation."""

        piece_type = TetrominoType(piece_type)
        return cls(piece_type, _BASE_SHAPES[piece_type][1])

    @property
    def width(self) -> int:
        return len(self.shape[0])

    @property
    def height(self) -> int:
        return len(self.shape)

    def rotated(self) -> "Piece":
        return Piece(self.type, rotate(self.shape))

    def cells(self) -> List[Tuple[int, int]]:
        return shape_cells(self.shape)


def random_piece(rng) -> Piece:
    """Pick a piece uniformly at random using ``rng``.

    ``rng`` only needs a ``randrange`` method, so :class:`random.Random`
    instances and small deterministic stubs both work.
    """

    return Piece.of(TetrominoType(rng.randrange(len(_BASE_SHAPES))))


@dataclass(frozen=True)
class ActivePiece:
    """Falling piece together with the board position of its shape origin.

    ``x`` is the column and ``y`` the row of the shape's top-left cell.  The
    origin may sit above the visible board while a piece is spawning.
    """

    piece: Piece
    x: int
    y: int

    @property
    def type(self) -> TetrominoType:
        return self.piece.type

    @property
    def shape(self) -> Shape:
        return self.piece.shape

    def moved(self, dx: int, dy: int) -> "ActivePiece":
        """Return a copy shifted by ``dx`` columns and ``dy`` rows."""

        return ActivePiece(self.piece, self.x + dx, self.y + dy)

    def rotated(self) -> "ActivePiece":
        """Return a copy rotated clockwise around the same origin."""

        return ActivePiece(self.piece.rotated(), self.x, self.y)

    def cells(self) -> List[Tuple[int, int]]:
        """Return the absolute ``(row, col)`` coordinates of the piece."""

        return [(self.y + r, self.x + c) for r, c in self.piece.cells()]
