"""Castling, en passant and promotion: detection, validation and execution.

Every special move goes through the same three stages.  Detection looks at
the shape of ``(from, to)`` only, validation adds the legality checks
without touching the board, and execution mutates the board in one step
once validation has passed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from chessrules.core.board import Board
from chessrules.core.enums import MoveFlag, PieceKind
from chessrules.core.movement import (
    KINGSIDE_ROOK_COLUMN,
    QUEENSIDE_ROOK_COLUMN,
    can_castle_kingside,
    can_castle_queenside,
)
from chessrules.core.piece import Piece
from chessrules.core.position import Position
from chessrules.rules.config import RulesConfig
from chessrules.rules.history import MoveHistory

_LOGGER = logging.getLogger(__name__)

PROMOTION_KINDS: tuple[PieceKind, ...] = (
    PieceKind.QUEEN,
    PieceKind.ROOK,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
)

# Rook destination column after castling, keyed by the rook's home column.
_ROOK_TARGET_COLUMN: dict[int, int] = {
    KINGSIDE_ROOK_COLUMN: 5,
    QUEENSIDE_ROOK_COLUMN: 3,
}


@dataclass(frozen=True, slots=True)
class SpecialMoveResult:
    """Outcome of an executed special move."""

    flag: MoveFlag
    piece: Piece
    captured: Piece | None = None
    promoted: Piece | None = None


class SpecialMovesHandler:
    """Handles the three move families that a plain relocation cannot express."""

    __slots__ = ("_board", "_history", "_config")

    def __init__(
        self,
        board: Board,
        history: MoveHistory,
        config: RulesConfig | None = None,
    ) -> None:
        self._board = board
        self._history = history
        self._config = config or RulesConfig()

    # ── Detection ────────────────────────────────────────────────────────

    def special_move_flag(
        self, from_pos: Position, to_pos: Position
    ) -> MoveFlag | None:
        """Classify ``(from, to)`` as a special move, or ``None``."""
        if self.is_castling(from_pos, to_pos):
            if to_pos.column > from_pos.column:
                return MoveFlag.CASTLE_KINGSIDE
            return MoveFlag.CASTLE_QUEENSIDE
        if self.is_en_passant(from_pos, to_pos):
            return MoveFlag.EN_PASSANT
        if self.is_promotion(from_pos, to_pos):
            return MoveFlag.PROMOTION
        return None

    def is_special_move(self, from_pos: Position, to_pos: Position) -> bool:
        return self.special_move_flag(from_pos, to_pos) is not None

    def is_castling(self, from_pos: Position, to_pos: Position) -> bool:
        king = self._board.piece_at(from_pos)
        if king is None or king.kind != PieceKind.KING:
            return False
        if from_pos.row_distance(to_pos) != 0 or from_pos.column_distance(to_pos) != 2:
            return False
        if to_pos.column > from_pos.column:
            return can_castle_kingside(king, self._board)
        return can_castle_queenside(king, self._board)

    def is_en_passant(self, from_pos: Position, to_pos: Position) -> bool:
        pawn = self._board.piece_at(from_pos)
        if pawn is None or pawn.kind != PieceKind.PAWN:
            return False
        step = self._history.last_double_step
        if step is None or step.capturer_color != pawn.color:
            return False
        # The double-stepped pawn must still be where it landed.
        if self._board.piece_at(step.landing) is not step.pawn:
            return False
        return self._history.can_en_passant(from_pos, to_pos)

    def is_promotion(self, from_pos: Position, to_pos: Position) -> bool:
        pawn = self._board.piece_at(from_pos)
        if pawn is None or pawn.kind != PieceKind.PAWN:
            return False
        color = pawn.color
        promotion_row = color.promotion_row
        return (
            from_pos.row == promotion_row - color.pawn_direction
            and to_pos.row == promotion_row
            and from_pos.column_distance(to_pos) <= 1
        )

    # ── Validation ───────────────────────────────────────────────────────

    def is_valid_special_move(self, from_pos: Position, to_pos: Position) -> bool:
        flag = self.special_move_flag(from_pos, to_pos)
        if flag is None:
            return False
        if flag.is_castle:
            # Availability already covers check, path and transit squares.
            return True
        if flag == MoveFlag.EN_PASSANT:
            return self._is_valid_en_passant(from_pos, to_pos)
        return self._is_valid_promotion(from_pos, to_pos)

    def _is_valid_en_passant(self, from_pos: Position, to_pos: Position) -> bool:
        victim_sq = self._history.en_passant_victim_square(to_pos)
        pawn = self._board.piece_at(from_pos)
        if victim_sq is None or pawn is None:
            return False

        trial = self._board.copy()
        mover = trial.remove(from_pos)
        trial.remove(victim_sq)
        trial.place(to_pos, mover)
        return not trial.is_in_check(pawn.color)

    def _is_valid_promotion(self, from_pos: Position, to_pos: Position) -> bool:
        pawn = self._board.piece_at(from_pos)
        if pawn is None or not pawn.raw_can_move(to_pos, self._board):
            return False
        return not self._board.would_be_in_check_after(from_pos, to_pos, pawn.color)

    # ── Execution ────────────────────────────────────────────────────────

    def execute_special_move(
        self,
        from_pos: Position,
        to_pos: Position,
        promotion: PieceKind | None = None,
    ) -> SpecialMoveResult | None:
        """Validate and play a special move; ``None`` when it is not legal."""
        flag = self.special_move_flag(from_pos, to_pos)
        if flag is None or not self.is_valid_special_move(from_pos, to_pos):
            _LOGGER.debug("Rejected special move %s-%s", from_pos, to_pos)
            return None

        if flag.is_castle:
            result = self._execute_castling(from_pos, to_pos, flag)
        elif flag == MoveFlag.EN_PASSANT:
            result = self._execute_en_passant(from_pos, to_pos)
        else:
            result = self._execute_promotion(from_pos, to_pos, promotion)

        _LOGGER.debug("Executed %s %s-%s", flag.name, from_pos, to_pos)
        return result

    def _execute_castling(
        self, from_pos: Position, to_pos: Position, flag: MoveFlag
    ) -> SpecialMoveResult:
        board = self._board
        row = from_pos.row
        rook_column = (
            KINGSIDE_ROOK_COLUMN
            if flag == MoveFlag.CASTLE_KINGSIDE
            else QUEENSIDE_ROOK_COLUMN
        )
        rook_from = Position(row, rook_column)
        rook_to = Position(row, _ROOK_TARGET_COLUMN[rook_column])

        king = board.remove(from_pos)
        rook = board.remove(rook_from)
        assert king is not None and rook is not None
        board.place(to_pos, king)
        board.place(rook_to, rook)
        king.mark_moved()
        rook.mark_moved()
        return SpecialMoveResult(flag, king)

    def _execute_en_passant(
        self, from_pos: Position, to_pos: Position
    ) -> SpecialMoveResult:
        board = self._board
        victim_sq = self._history.en_passant_victim_square(to_pos)
        assert victim_sq is not None

        pawn = board.remove(from_pos)
        assert pawn is not None
        board.place(to_pos, pawn)
        pawn.mark_moved()

        victim = board.remove(victim_sq)
        if victim is not None:
            board.add_captured(victim)
        return SpecialMoveResult(MoveFlag.EN_PASSANT, pawn, captured=victim)

    def _execute_promotion(
        self,
        from_pos: Position,
        to_pos: Position,
        promotion: PieceKind | None,
    ) -> SpecialMoveResult:
        board = self._board
        kind = self.resolve_promotion(promotion)

        captured = board.remove(to_pos)
        if captured is not None:
            board.add_captured(captured)

        pawn = board.remove(from_pos)
        assert pawn is not None
        promoted = Piece(kind, pawn.color, has_moved=True)
        board.place(to_pos, promoted)
        return SpecialMoveResult(
            MoveFlag.PROMOTION, pawn, captured=captured, promoted=promoted
        )

    def resolve_promotion(self, choice: PieceKind | None) -> PieceKind:
        """The kind a pawn becomes; invalid or missing choices fall back."""
        if choice in PROMOTION_KINDS:
            assert choice is not None
            return choice
        if choice is not None:
            _LOGGER.debug("Invalid promotion choice %s, using default", choice)
        return self._config.default_promotion

    # ── Enumeration ──────────────────────────────────────────────────────

    def get_special_moves(self, pos: Position) -> list[Position]:
        """Castling and en-passant destinations available to the piece on *pos*."""
        piece = self._board.piece_at(pos)
        if piece is None:
            return []

        moves: list[Position] = []
        if piece.kind == PieceKind.KING:
            if can_castle_kingside(piece, self._board):
                target = pos.offset(0, 2)
                if target is not None:
                    moves.append(target)
            if can_castle_queenside(piece, self._board):
                target = pos.offset(0, -2)
                if target is not None:
                    moves.append(target)

        elif piece.kind == PieceKind.PAWN and pos.row == piece.color.en_passant_row:
            for d_col in (-1, 1):
                target = pos.offset(piece.color.pawn_direction, d_col)
                if target is not None and self.is_en_passant(pos, target):
                    moves.append(target)

        return moves
