"""Piece model: identity-bearing pieces and their immutable snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from chessrules.core import movement
from chessrules.core.enums import Color, PieceKind
from chessrules.core.position import Position

if TYPE_CHECKING:
    from chessrules.core.board import Board

_UNICODE: dict[tuple[Color, PieceKind], str] = {
    (Color.WHITE, PieceKind.PAWN): "♙",
    (Color.WHITE, PieceKind.KNIGHT): "♘",
    (Color.WHITE, PieceKind.BISHOP): "♗",
    (Color.WHITE, PieceKind.ROOK): "♖",
    (Color.WHITE, PieceKind.QUEEN): "♕",
    (Color.WHITE, PieceKind.KING): "♔",
    (Color.BLACK, PieceKind.PAWN): "♟",
    (Color.BLACK, PieceKind.KNIGHT): "♞",
    (Color.BLACK, PieceKind.BISHOP): "♝",
    (Color.BLACK, PieceKind.ROOK): "♜",
    (Color.BLACK, PieceKind.QUEEN): "♛",
    (Color.BLACK, PieceKind.KING): "♚",
}


def _colored_symbol(kind: PieceKind, color: Color) -> str:
    return kind.symbol if color == Color.WHITE else kind.symbol.lower()


@dataclass(frozen=True, slots=True)
class PieceSnapshot:
    """Immutable value copy of a piece, kept by the move history."""

    kind: PieceKind
    color: Color
    position: Position | None
    has_moved: bool

    @property
    def symbol(self) -> str:
        return _colored_symbol(self.kind, self.color)

    def __str__(self) -> str:
        return self.symbol


@dataclass(eq=False, slots=True)
class Piece:
    """A piece on (or captured from) the board.

    Pieces compare by identity: two white pawns are different pieces even
    when they stand on the same square of two boards.  Movement rules live
    in :mod:`chessrules.core.movement` and are dispatched on :attr:`kind`.
    """

    kind: PieceKind
    color: Color
    position: Position | None = None
    has_moved: bool = False

    # ── Movement ─────────────────────────────────────────────────────────

    def raw_can_move(self, target: Position | None, board: Board) -> bool:
        """Geometric legality, ignoring exposure of the own king."""
        return movement.raw_can_move(self, target, board)

    def generate_candidates(self, board: Board) -> list[Position]:
        """Every square accepted by :meth:`raw_can_move`."""
        return movement.generate_candidates(self, board)

    def mark_moved(self) -> None:
        self.has_moved = True

    # ── Relations ────────────────────────────────────────────────────────

    def is_same_color(self, other: Piece) -> bool:
        return self.color == other.color

    def is_opposite_color(self, other: Piece) -> bool:
        return self.color != other.color

    # ── Copies and display ───────────────────────────────────────────────

    def copy(self) -> Piece:
        """Detached piece with the same state."""
        return Piece(self.kind, self.color, self.position, self.has_moved)

    def snapshot(self) -> PieceSnapshot:
        return PieceSnapshot(self.kind, self.color, self.position, self.has_moved)

    @property
    def value(self) -> int:
        return self.kind.material

    @property
    def symbol(self) -> str:
        """Letter symbol, uppercase for white and lowercase for black."""
        return _colored_symbol(self.kind, self.color)

    @property
    def unicode_symbol(self) -> str:
        """Unicode chess glyph, e.g. ♞."""
        return _UNICODE[(self.color, self.kind)]

    @property
    def full_name(self) -> str:
        return f"{self.color.display_name} {self.kind.display_name}"

    def __str__(self) -> str:
        if self.position is None:
            return self.full_name
        return f"{self.full_name} on {self.position}"
