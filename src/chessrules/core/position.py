"""Board coordinates and geometry helpers.

Coordinates are ``(row, column)`` pairs in ``[0, 8)``.  Row 0 is the white
back rank and is rendered as rank 8 in algebraic notation::

    (0, 0) = a8 ... (0, 7) = h8
    ...
    (7, 0) = a1 ... (7, 7) = h1
"""

from __future__ import annotations

from dataclasses import dataclass

BOARD_SIZE = 8

_FILES = "abcdefgh"
_RANKS = "12345678"


class InvalidPosition(ValueError):
    """Raised when a coordinate or square name lies outside the board."""


def is_on_board(row: int, column: int) -> bool:
    """Check whether the coordinate pair addresses a square."""
    return 0 <= row < BOARD_SIZE and 0 <= column < BOARD_SIZE


@dataclass(frozen=True, slots=True)
class Position:
    """Immutable square coordinate."""

    row: int
    column: int

    def __post_init__(self) -> None:
        if not is_on_board(self.row, self.column):
            raise InvalidPosition(f"Invalid position: ({self.row}, {self.column})")

    # ── Geometry ─────────────────────────────────────────────────────────

    def row_distance(self, other: Position) -> int:
        return abs(self.row - other.row)

    def column_distance(self, other: Position) -> int:
        return abs(self.column - other.column)

    def distance(self, other: Position) -> int:
        """King-move (Chebyshev) distance."""
        return max(self.row_distance(other), self.column_distance(other))

    def is_same_row(self, other: Position) -> bool:
        return self.row == other.row

    def is_same_column(self, other: Position) -> bool:
        return self.column == other.column

    def is_same_diagonal(self, other: Position) -> bool:
        return self.row_distance(other) == self.column_distance(other)

    def offset(self, d_row: int, d_column: int) -> Position | None:
        """Shifted square, or ``None`` when it would leave the board."""
        row = self.row + d_row
        column = self.column + d_column
        if not is_on_board(row, column):
            return None
        return Position(row, column)

    @property
    def is_light(self) -> bool:
        return (self.row + self.column) % 2 == 0

    # ── Notation ─────────────────────────────────────────────────────────

    def to_algebraic(self) -> str:
        """Square name, e.g. ``Position(7, 0)`` → ``'a1'``."""
        return f"{_FILES[self.column]}{BOARD_SIZE - self.row}"

    @classmethod
    def from_algebraic(cls, name: str) -> Position:
        """Parse square name, e.g. ``'h8'`` → ``Position(0, 7)``."""
        if len(name) != 2 or name[0] not in _FILES or name[1] not in _RANKS:
            raise InvalidPosition(f"Invalid square name: {name!r}")
        return cls(BOARD_SIZE - int(name[1]), _FILES.index(name[0]))

    def __str__(self) -> str:
        return self.to_algebraic()

    def __repr__(self) -> str:
        return f"Position({self.row}, {self.column})"


def all_positions() -> list[Position]:
    """Every square in row-major order."""
    return [Position(r, c) for r in range(BOARD_SIZE) for c in range(BOARD_SIZE)]
