"""Raw movement rules and candidate generation for every piece kind.

Each kind maps to a pair of plain functions through lookup tables: a
predicate answering "may this piece go to *target*?" and a generator
listing every square for which the predicate holds.  Neither looks at the
mover's own king; that filter belongs to the validator.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from chessrules.core.enums import PieceKind
from chessrules.core.position import Position

if TYPE_CHECKING:
    from chessrules.core.board import Board
    from chessrules.core.piece import Piece


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

KING_HOME_COLUMN = 4
KINGSIDE_ROOK_COLUMN = 7
QUEENSIDE_ROOK_COLUMN = 0

# (columns that must be empty, columns the king passes through or lands on)
_KINGSIDE_PATH: tuple[tuple[int, ...], tuple[int, ...]] = ((5, 6), (5, 6))
_QUEENSIDE_PATH: tuple[tuple[int, ...], tuple[int, ...]] = ((1, 2, 3), (3, 2))

MoveRule = Callable[["Piece", Position, "Board"], bool]
CandidateRule = Callable[["Piece", "Board"], list[Position]]


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


# -- Raw movement predicates ------------------------------------------------


def _pawn_can_move(piece: Piece, target: Position, board: Board) -> bool:
    origin = piece.position
    assert origin is not None
    occupant = board.piece_at(target)
    step = piece.color.pawn_direction
    d_row = target.row - origin.row
    d_col = origin.column_distance(target)

    if d_col == 0 and d_row == step:
        return occupant is None

    if d_col == 0 and d_row == 2 * step and not piece.has_moved:
        return occupant is None and board.piece_at(origin.offset(step, 0)) is None

    if d_col == 1 and d_row == step:
        return occupant is not None and occupant.color != piece.color

    return False


def _knight_can_move(piece: Piece, target: Position, board: Board) -> bool:
    origin = piece.position
    assert origin is not None
    return {origin.row_distance(target), origin.column_distance(target)} == {1, 2}


def _king_can_move(piece: Piece, target: Position, board: Board) -> bool:
    origin = piece.position
    assert origin is not None
    return origin.distance(target) == 1


def _slider_rule(directions: tuple[tuple[int, int], ...]) -> MoveRule:
    def can_move(piece: Piece, target: Position, board: Board) -> bool:
        origin = piece.position
        assert origin is not None
        d_row = target.row - origin.row
        d_col = target.column - origin.column
        if d_row and d_col and abs(d_row) != abs(d_col):
            return False

        step = (_sign(d_row), _sign(d_col))
        if step not in directions:
            return False

        walk = origin.offset(*step)
        while walk is not None and walk != target:
            if board.piece_at(walk) is not None:
                return False
            walk = walk.offset(*step)
        return True

    return can_move


# -- Candidate generators ---------------------------------------------------


def _pawn_candidates(piece: Piece, board: Board) -> list[Position]:
    origin = piece.position
    assert origin is not None
    step = piece.color.pawn_direction
    squares = [
        origin.offset(step, 0),
        origin.offset(2 * step, 0) if not piece.has_moved else None,
        origin.offset(step, -1),
        origin.offset(step, 1),
    ]
    return [sq for sq in squares if sq is not None and raw_can_move(piece, sq, board)]


def _offset_candidates(offsets: tuple[tuple[int, int], ...]) -> CandidateRule:
    def candidates(piece: Piece, board: Board) -> list[Position]:
        origin = piece.position
        assert origin is not None
        moves: list[Position] = []
        for d_row, d_col in offsets:
            to_sq = origin.offset(d_row, d_col)
            if to_sq is None:
                continue
            target = board.piece_at(to_sq)
            if target is None or target.color != piece.color:
                moves.append(to_sq)
        return moves

    return candidates


def _slider_candidates(directions: tuple[tuple[int, int], ...]) -> CandidateRule:
    def candidates(piece: Piece, board: Board) -> list[Position]:
        origin = piece.position
        assert origin is not None
        moves: list[Position] = []
        for d_row, d_col in directions:
            to_sq = origin.offset(d_row, d_col)
            while to_sq is not None:
                target = board.piece_at(to_sq)
                if target is None:
                    moves.append(to_sq)
                    to_sq = to_sq.offset(d_row, d_col)
                    continue
                if target.color != piece.color:
                    moves.append(to_sq)
                break
        return moves

    return candidates


_MOVE_RULES: dict[PieceKind, MoveRule] = {
    PieceKind.PAWN: _pawn_can_move,
    PieceKind.KNIGHT: _knight_can_move,
    PieceKind.BISHOP: _slider_rule(BISHOP_DIRS),
    PieceKind.ROOK: _slider_rule(ROOK_DIRS),
    PieceKind.QUEEN: _slider_rule(QUEEN_DIRS),
    PieceKind.KING: _king_can_move,
}

_CANDIDATE_RULES: dict[PieceKind, CandidateRule] = {
    PieceKind.PAWN: _pawn_candidates,
    PieceKind.KNIGHT: _offset_candidates(KNIGHT_OFFSETS),
    PieceKind.BISHOP: _slider_candidates(BISHOP_DIRS),
    PieceKind.ROOK: _slider_candidates(ROOK_DIRS),
    PieceKind.QUEEN: _slider_candidates(QUEEN_DIRS),
    PieceKind.KING: _offset_candidates(KING_OFFSETS),
}


# -- Public API -------------------------------------------------------------


def raw_can_move(piece: Piece, target: Position | None, board: Board) -> bool:
    """Whether *piece* may geometrically reach *target*.

    Same-color occupancy and blocked paths are rejected; exposing the
    mover's own king is not considered.
    """
    origin = piece.position
    if target is None or origin is None or target == origin:
        return False
    occupant = board.piece_at(target)
    if occupant is not None and occupant.color == piece.color:
        return False
    return _MOVE_RULES[piece.kind](piece, target, board)


def generate_candidates(piece: Piece, board: Board) -> list[Position]:
    """All destinations satisfying :func:`raw_can_move` for *piece*."""
    if piece.position is None:
        return []
    return _CANDIDATE_RULES[piece.kind](piece, board)


def is_on_promotion_rank(piece: Piece, square: Position | None = None) -> bool:
    """Whether a pawn on *square* (default: its own square) must promote."""
    square = square if square is not None else piece.position
    if piece.kind != PieceKind.PAWN or square is None:
        return False
    return square.row == piece.color.promotion_row


# -- Castling ---------------------------------------------------------------


def _can_castle(
    king: Piece,
    board: Board,
    rook_column: int,
    path: tuple[tuple[int, ...], tuple[int, ...]],
) -> bool:
    origin = king.position
    if king.kind != PieceKind.KING or king.has_moved or origin is None:
        return False
    if origin != Position(king.color.back_rank, KING_HOME_COLUMN):
        return False
    if board.is_in_check(king.color):
        return False

    row = origin.row
    rook = board.piece_at(Position(row, rook_column))
    if (
        rook is None
        or rook.kind != PieceKind.ROOK
        or rook.color != king.color
        or rook.has_moved
    ):
        return False

    between, transit = path
    if any(board.piece_at(Position(row, col)) is not None for col in between):
        return False

    # The king may not pass through, or land on, an attacked square.
    return not any(
        board.would_be_in_check_after(origin, Position(row, col), king.color)
        for col in transit
    )


def can_castle_kingside(king: Piece, board: Board) -> bool:
    return _can_castle(king, board, KINGSIDE_ROOK_COLUMN, _KINGSIDE_PATH)


def can_castle_queenside(king: Piece, board: Board) -> bool:
    return _can_castle(king, board, QUEENSIDE_ROOK_COLUMN, _QUEENSIDE_PATH)


def can_castle(king: Piece, board: Board) -> bool:
    """Whether castling is available on either side."""
    return can_castle_kingside(king, board) or can_castle_queenside(king, board)
