"""Core enumerations and flags for the rules engine."""

from __future__ import annotations

from enum import IntEnum, IntFlag, auto


class Color(IntEnum):
    """Side color.

    White starts on rows 0-1 and advances towards row 7; black starts on
    rows 6-7 and advances towards row 0.
    """

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def pawn_direction(self) -> int:
        """Row delta of a single pawn step."""
        return 1 if self == Color.WHITE else -1

    @property
    def pawn_start_row(self) -> int:
        return 1 if self == Color.WHITE else 6

    @property
    def back_rank(self) -> int:
        """Row holding the king and the rooks at game start."""
        return 0 if self == Color.WHITE else 7

    @property
    def promotion_row(self) -> int:
        return 7 if self == Color.WHITE else 0

    @property
    def en_passant_row(self) -> int:
        """Row a pawn must stand on to capture en passant."""
        return 4 if self == Color.WHITE else 3

    @property
    def display_name(self) -> str:
        return self.name.capitalize()

    def __str__(self) -> str:
        return self.name.lower()


class PieceKind(IntEnum):
    """The six chess piece kinds."""

    KING = 1
    QUEEN = 2
    ROOK = 3
    BISHOP = 4
    KNIGHT = 5
    PAWN = 6

    @property
    def material(self) -> int:
        """Conventional material value (the king is never traded)."""
        return _MATERIAL[self]

    @property
    def symbol(self) -> str:
        """One-letter algebraic symbol, e.g. ``N`` for a knight."""
        return _SYMBOLS[self]

    @property
    def display_name(self) -> str:
        return self.name.capitalize()

    @property
    def is_minor(self) -> bool:
        return self in (PieceKind.BISHOP, PieceKind.KNIGHT)


_MATERIAL: dict[PieceKind, int] = {
    PieceKind.KING: 0,
    PieceKind.QUEEN: 9,
    PieceKind.ROOK: 5,
    PieceKind.BISHOP: 3,
    PieceKind.KNIGHT: 3,
    PieceKind.PAWN: 1,
}

_SYMBOLS: dict[PieceKind, str] = {
    PieceKind.KING: "K",
    PieceKind.QUEEN: "Q",
    PieceKind.ROOK: "R",
    PieceKind.BISHOP: "B",
    PieceKind.KNIGHT: "N",
    PieceKind.PAWN: "P",
}


class MoveFlag(IntEnum):
    """Move classification recorded in the history."""

    NORMAL = 0
    DOUBLE_PAWN = 1
    EN_PASSANT = 2
    CASTLE_KINGSIDE = 3
    CASTLE_QUEENSIDE = 4
    PROMOTION = 5

    @property
    def is_castle(self) -> bool:
        return self in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE)


class CastlingRights(IntFlag):
    """Bitmask for castling availability."""

    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH


class GameState(IntEnum):
    """Status of the side to move, derived after every move."""

    ONGOING = 0
    CHECK = 1
    CHECKMATE = 2
    STALEMATE = 3
    DRAW = 4

    @property
    def is_terminal(self) -> bool:
        """Whether no further moves may be played."""
        return self in (GameState.CHECKMATE, GameState.STALEMATE, GameState.DRAW)

    @property
    def description(self) -> str:
        return _STATE_DESCRIPTIONS[self]


_STATE_DESCRIPTIONS: dict[GameState, str] = {
    GameState.ONGOING: "Game in progress",
    GameState.CHECK: "Check",
    GameState.CHECKMATE: "Checkmate",
    GameState.STALEMATE: "Stalemate",
    GameState.DRAW: "Draw",
}


class DrawReason(IntEnum):
    """Which rule produced a drawn status."""

    STALEMATE = auto()
    INSUFFICIENT_MATERIAL = auto()
    THREEFOLD_REPETITION = auto()
    FIFTY_MOVE_RULE = auto()
