"""Board - piece placement on an 8x8 grid, side to move and captures."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.enums import CastlingRights, Color, PieceKind
from chessrules.core.movement import (
    KING_HOME_COLUMN,
    KINGSIDE_ROOK_COLUMN,
    QUEENSIDE_ROOK_COLUMN,
)
from chessrules.core.piece import Piece
from chessrules.core.position import BOARD_SIZE, Position

_BACK_RANK: tuple[PieceKind, ...] = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)

_CASTLING_FLAGS: dict[Color, tuple[CastlingRights, CastlingRights]] = {
    Color.WHITE: (CastlingRights.WHITE_KINGSIDE, CastlingRights.WHITE_QUEENSIDE),
    Color.BLACK: (CastlingRights.BLACK_KINGSIDE, CastlingRights.BLACK_QUEENSIDE),
}


@dataclass(frozen=True, slots=True)
class SquareView:
    """What a renderer needs to draw one occupied square."""

    symbol: str
    color: Color


class Board:
    """Mutable 8x8 board owning every piece placed on it.

    The board never toggles :attr:`current_player` on its own; the game
    controller calls :meth:`switch_player` after a move has been applied.
    """

    __slots__ = ("_squares", "current_player", "_captured")

    def __init__(self, current_player: Color = Color.WHITE) -> None:
        self._squares: list[list[Piece | None]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]
        self.current_player = current_player
        self._captured: list[Piece] = []

    # -- Element access -----------------------------------------------------

    def piece_at(self, pos: Position | None) -> Piece | None:
        if pos is None:
            return None
        return self._squares[pos.row][pos.column]

    def place(self, pos: Position, piece: Piece | None) -> None:
        """Overwrite *pos* with *piece* (or clear it)."""
        self._squares[pos.row][pos.column] = piece
        if piece is not None:
            piece.position = pos

    def remove(self, pos: Position) -> Piece | None:
        """Clear *pos* and return its former occupant."""
        piece = self.piece_at(pos)
        self._squares[pos.row][pos.column] = None
        return piece

    def __getitem__(self, pos: Position) -> Piece | None:
        return self.piece_at(pos)

    def __setitem__(self, pos: Position, piece: Piece | None) -> None:
        self.place(pos, piece)

    def is_empty(self, pos: Position | None) -> bool:
        return self.piece_at(pos) is None

    def contains_piece_of_color(self, pos: Position | None, color: Color) -> bool:
        piece = self.piece_at(pos)
        return piece is not None and piece.color == color

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color | None = None) -> list[Piece]:
        """Pieces of *color* (all pieces when ``None``) in row-major order."""
        return [
            piece
            for row in self._squares
            for piece in row
            if piece is not None and (color is None or piece.color == color)
        ]

    def find_king(self, color: Color) -> Piece | None:
        for piece in self.pieces(color):
            if piece.kind == PieceKind.KING:
                return piece
        return None

    @property
    def captured_pieces(self) -> list[Piece]:
        """Captured pieces in capture order (a copy)."""
        return list(self._captured)

    def add_captured(self, piece: Piece) -> None:
        self._captured.append(piece)

    def switch_player(self) -> None:
        self.current_player = self.current_player.opposite

    def castling_rights(self) -> CastlingRights:
        """Rights implied by unmoved kings and unmoved home-square rooks."""
        rights = CastlingRights.NONE
        for color, (kingside, queenside) in _CASTLING_FLAGS.items():
            row = color.back_rank
            king = self.piece_at(Position(row, KING_HOME_COLUMN))
            if king is None or king.kind != PieceKind.KING or king.color != color:
                continue
            if king.has_moved:
                continue
            for column, flag in (
                (KINGSIDE_ROOK_COLUMN, kingside),
                (QUEENSIDE_ROOK_COLUMN, queenside),
            ):
                rook = self.piece_at(Position(row, column))
                if (
                    rook is not None
                    and rook.kind == PieceKind.ROOK
                    and rook.color == color
                    and not rook.has_moved
                ):
                    rights |= flag
        return rights

    # -- Moves --------------------------------------------------------------

    def apply_plain_move(self, from_pos: Position, to_pos: Position) -> bool:
        """Relocate the piece on *from_pos*, capturing any enemy on *to_pos*.

        Returns ``False`` without touching the board when the square is
        empty, holds a piece of the side not to move, or the piece's raw
        movement rule rejects the destination.
        """
        piece = self.piece_at(from_pos)
        if piece is None or piece.color != self.current_player:
            return False
        if not piece.raw_can_move(to_pos, self):
            return False

        captured = self.remove(to_pos)
        if captured is not None:
            self._captured.append(captured)

        self.remove(from_pos)
        self.place(to_pos, piece)
        piece.mark_moved()
        return True

    # -- Check detection ----------------------------------------------------

    def attackers_of(self, square: Position, color: Color) -> list[Piece]:
        """Pieces of *color* whose raw rule reaches the occupied *square*."""
        return [p for p in self.pieces(color) if p.raw_can_move(square, self)]

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked?  A missing king is never in check."""
        king = self.find_king(color)
        if king is None or king.position is None:
            return False
        opponent = color.opposite
        return any(
            piece.raw_can_move(king.position, self) for piece in self.pieces(opponent)
        )

    def would_be_in_check_after(
        self, from_pos: Position, to_pos: Position, color: Color
    ) -> bool:
        """Would *color* be in check once the piece on *from_pos* goes to *to_pos*?

        Evaluated on a detached copy; the board itself is left untouched.
        """
        trial = self.copy()
        piece = trial.remove(from_pos)
        trial.remove(to_pos)
        trial.place(to_pos, piece)
        return trial.is_in_check(color)

    # -- Copying / setup ----------------------------------------------------

    def copy(self) -> Board:
        """Deep copy: pieces are cloned, captured pieces are shared."""
        b = Board(self.current_player)
        b._squares = [
            [piece.copy() if piece is not None else None for piece in row]
            for row in self._squares
        ]
        b._captured = self._captured.copy()
        return b

    def clear(self) -> None:
        self._squares = [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        self._captured = []
        self.current_player = Color.WHITE

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position, white to move."""
        b = cls()
        for color in Color:
            for column, kind in enumerate(_BACK_RANK):
                b.place(Position(color.back_rank, column), Piece(kind, color))
            for column in range(BOARD_SIZE):
                b.place(
                    Position(color.pawn_start_row, column),
                    Piece(PieceKind.PAWN, color),
                )
        return b

    # -- Rendering ----------------------------------------------------------

    def render_snapshot(self) -> tuple[tuple[SquareView | None, ...], ...]:
        """8x8 grid (row-major) of symbol and color per occupied square."""
        return tuple(
            tuple(
                SquareView(piece.symbol, piece.color) if piece is not None else None
                for piece in row
            )
            for row in self._squares
        )

    # -- Dunder helpers -----------------------------------------------------

    def _signature(self) -> tuple[object, ...]:
        return tuple(
            (piece.kind, piece.color, piece.has_moved) if piece is not None else None
            for row in self._squares
            for piece in row
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self.current_player == other.current_player
            and self._signature() == other._signature()
        )

    def __str__(self) -> str:
        rows = ["  a b c d e f g h"]
        for r, row in enumerate(self._squares):
            rank = BOARD_SIZE - r
            cells = " ".join(piece.symbol if piece else "." for piece in row)
            rows.append(f"{rank} {cells} {rank}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)

    def __repr__(self) -> str:
        return f"Board(current_player={self.current_player.name})\n{self}"
