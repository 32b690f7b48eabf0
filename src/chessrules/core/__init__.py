"""Core domain layer — coordinates, pieces and the board, no external dependencies.

Quick start::

    from chessrules.core import Board, Color, Position

    board = Board.initial()
    pawn = board.piece_at(Position(1, 4))
    print(pawn.generate_candidates(board))
"""

from chessrules.core.board import Board, SquareView
from chessrules.core.enums import (
    CastlingRights,
    Color,
    DrawReason,
    GameState,
    MoveFlag,
    PieceKind,
)
from chessrules.core.movement import (
    can_castle,
    can_castle_kingside,
    can_castle_queenside,
    generate_candidates,
    is_on_promotion_rank,
    raw_can_move,
)
from chessrules.core.piece import Piece, PieceSnapshot
from chessrules.core.position import (
    BOARD_SIZE,
    InvalidPosition,
    Position,
    all_positions,
    is_on_board,
)
from chessrules.core.zobrist import position_key

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "DrawReason",
    "GameState",
    "MoveFlag",
    "PieceKind",
    # Coordinates
    "BOARD_SIZE",
    "InvalidPosition",
    "Position",
    "all_positions",
    "is_on_board",
    # Domain objects
    "Board",
    "Piece",
    "PieceSnapshot",
    "SquareView",
    # Movement
    "can_castle",
    "can_castle_kingside",
    "can_castle_queenside",
    "generate_candidates",
    "is_on_promotion_rank",
    "raw_can_move",
    # Hashing
    "position_key",
]
