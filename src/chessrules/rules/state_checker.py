"""High-level status derivation: check, checkmate, stalemate, draws."""

from __future__ import annotations

from chessrules.core.board import Board
from chessrules.core.enums import Color, DrawReason, GameState, PieceKind
from chessrules.rules.config import RulesConfig
from chessrules.rules.history import MoveHistory
from chessrules.rules.validator import MoveValidator


class GameStateChecker:
    """Derives the status of the side to move.

    Nothing is cached: every query recomputes from the board, the validator
    and the history.
    """

    # Draw policy:
    # - Insufficient material: K vs K, K + single minor vs K.
    # - Threefold repetition of the full position (pieces, turn, castling,
    #   en passant).
    # - Fifty-move rule per RulesConfig.

    __slots__ = ("_board", "_validator", "_history", "_config")

    def __init__(
        self,
        board: Board,
        validator: MoveValidator,
        history: MoveHistory,
        config: RulesConfig | None = None,
    ) -> None:
        self._board = board
        self._validator = validator
        self._history = history
        self._config = config or RulesConfig()

    def _side(self, color: Color | None) -> Color:
        return self._board.current_player if color is None else color

    # ── Check family ─────────────────────────────────────────────────────

    def is_in_check(self, color: Color | None = None) -> bool:
        return self._board.is_in_check(self._side(color))

    def has_valid_moves(self, color: Color | None = None) -> bool:
        return self._validator.has_valid_moves(self._side(color))

    def is_checkmate(self, color: Color | None = None) -> bool:
        side = self._side(color)
        if not self.is_in_check(side):
            return False
        return not self.has_valid_moves(side)

    def is_stalemate(self, color: Color | None = None) -> bool:
        side = self._side(color)
        if self.is_in_check(side):
            return False
        return not self.has_valid_moves(side)

    # ── Draw rules ───────────────────────────────────────────────────────

    def is_insufficient_material(self) -> bool:
        """K vs K, or K + one bishop/knight vs a lone K."""
        white = self._non_king_pieces(Color.WHITE)
        black = self._non_king_pieces(Color.BLACK)

        if not white and not black:
            return True

        if not white and len(black) == 1:
            return black[0].is_minor
        if not black and len(white) == 1:
            return white[0].is_minor

        return False

    def _non_king_pieces(self, color: Color) -> list[PieceKind]:
        return [p.kind for p in self._board.pieces(color) if p.kind != PieceKind.KING]

    def is_fifty_move_rule(self) -> bool:
        config = self._config
        if config.fifty_move_resets:
            return self._history.halfmove_clock >= config.fifty_move_limit
        return self._history.move_count >= config.fifty_move_limit

    def is_threefold_repetition(self) -> bool:
        return self._history.is_threefold_repetition(
            self._board, self._config.repetition_limit
        )

    def draw_reason(self) -> DrawReason | None:
        """The first draw rule that applies to the side to move, if any."""
        if self.is_stalemate():
            return DrawReason.STALEMATE
        if self.is_insufficient_material():
            return DrawReason.INSUFFICIENT_MATERIAL
        if self.is_threefold_repetition():
            return DrawReason.THREEFOLD_REPETITION
        if self.is_fifty_move_rule():
            return DrawReason.FIFTY_MOVE_RULE
        return None

    def is_draw(self) -> bool:
        return self.draw_reason() is not None

    # ── Status ───────────────────────────────────────────────────────────

    def game_state(self) -> GameState:
        """Checkmate, stalemate, check, draw, then ongoing, in that order."""
        side = self._board.current_player
        in_check = self.is_in_check(side)
        has_moves = self.has_valid_moves(side)

        if not has_moves:
            return GameState.CHECKMATE if in_check else GameState.STALEMATE
        if in_check:
            return GameState.CHECK
        if (
            self.is_insufficient_material()
            or self.is_threefold_repetition()
            or self.is_fifty_move_rule()
        ):
            return GameState.DRAW
        return GameState.ONGOING
