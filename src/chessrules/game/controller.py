"""GameController — the single orchestrator of a game.

Coordinates: Board, MoveHistory, MoveValidator, SpecialMovesHandler and
GameStateChecker.  Only the controller sequences a move (validate, mutate,
log, toggle the turn, derive the status); the components it owns never do
so as a side effect of a query.  Emits events via simple callbacks so a
presentation layer or tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chessrules.core.board import Board, SquareView
from chessrules.core.enums import Color, DrawReason, GameState, PieceKind
from chessrules.core.piece import Piece
from chessrules.core.position import Position
from chessrules.rules.config import RulesConfig
from chessrules.rules.history import MoveHistory, MoveRecord
from chessrules.rules.special_moves import SpecialMovesHandler
from chessrules.rules.state_checker import GameStateChecker
from chessrules.rules.validator import MoveValidator

_LOGGER = logging.getLogger(__name__)

Square = Position | str

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, GameState], None]  # record, new status
GameOverCallback = Callable[[GameState], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    """Result of :meth:`GameController.apply_move`."""

    accepted: bool
    status: GameState
    captured: Piece | None = None
    record: MoveRecord | None = None


def _coerce(square: Square) -> Position:
    if isinstance(square, Position):
        return square
    return Position.from_algebraic(square)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController:
    """Plays one game at a time on behalf of a driver (UI or test).

    Squares may be given as :class:`Position` objects or as algebraic names
    such as ``"e2"``; malformed names raise
    :class:`~chessrules.core.position.InvalidPosition`.
    """

    __slots__ = (
        "_config",
        "_board",
        "_history",
        "_special",
        "_validator",
        "_checker",
        "_status",
        "events",
    )

    def __init__(
        self,
        board: Board | None = None,
        config: RulesConfig | None = None,
    ) -> None:
        self._config = config or RulesConfig()
        self.events = GameEvents()
        self.new_game(board)

    def new_game(self, board: Board | None = None) -> None:
        """Start over from *board* (the standard setup by default)."""
        self._board = board if board is not None else Board.initial()
        self._history = MoveHistory()
        self._history.begin(self._board)
        self._special = SpecialMovesHandler(self._board, self._history, self._config)
        self._validator = MoveValidator(self._board, self._history, self._special)
        self._checker = GameStateChecker(
            self._board, self._validator, self._history, self._config
        )
        self._status = self._checker.game_state()
        _LOGGER.info(
            "New game: %s to move, status %s",
            self._board.current_player,
            self._status.name,
        )

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self._board

    @property
    def history(self) -> MoveHistory:
        return self._history

    @property
    def validator(self) -> MoveValidator:
        return self._validator

    @property
    def special_moves(self) -> SpecialMovesHandler:
        return self._special

    @property
    def checker(self) -> GameStateChecker:
        return self._checker

    @property
    def config(self) -> RulesConfig:
        return self._config

    @property
    def status(self) -> GameState:
        return self._status

    @property
    def current_player(self) -> Color:
        return self._board.current_player

    @property
    def is_game_over(self) -> bool:
        return self._status.is_terminal

    def draw_reason(self) -> DrawReason | None:
        if self._status not in (GameState.DRAW, GameState.STALEMATE):
            return None
        return self._checker.draw_reason()

    # ── Driver queries ───────────────────────────────────────────────────

    def legal_destinations(self, square: Square) -> list[Position]:
        if self.is_game_over:
            return []
        return self._validator.get_valid_moves(_coerce(square))

    def is_promotion_move(self, from_sq: Square, to_sq: Square) -> bool:
        """Whether a legal move needs a promotion choice from the driver."""
        from_pos, to_pos = _coerce(from_sq), _coerce(to_sq)
        return self._special.is_promotion(
            from_pos, to_pos
        ) and self._validator.is_valid_move(from_pos, to_pos)

    def render_snapshot(self) -> tuple[tuple[SquareView | None, ...], ...]:
        return self._board.render_snapshot()

    def captured_pieces(self) -> list[Piece]:
        return self._board.captured_pieces

    # ── Moves ────────────────────────────────────────────────────────────

    def apply_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceKind | None = None,
    ) -> MoveOutcome:
        """Play a move for the side to move.

        Illegal moves, and any move after the game has ended, are rejected
        without changing anything.  A missing or invalid *promotion* choice
        promotes to the configured default (a queen).
        """
        from_pos, to_pos = _coerce(from_sq), _coerce(to_sq)
        if self.is_game_over:
            _LOGGER.debug("Rejected %s-%s: game is over", from_pos, to_pos)
            return MoveOutcome(False, self._status)
        if not self._validator.is_valid_move(from_pos, to_pos):
            _LOGGER.debug("Rejected illegal move %s-%s", from_pos, to_pos)
            return MoveOutcome(False, self._status)

        board = self._board
        piece = board.piece_at(from_pos)
        assert piece is not None

        flag = self._special.special_move_flag(from_pos, to_pos)
        promoted_to: PieceKind | None = None
        if flag is not None:
            result = self._special.execute_special_move(from_pos, to_pos, promotion)
            if result is None:
                return MoveOutcome(False, self._status)
            captured = result.captured
            if result.promoted is not None:
                promoted_to = result.promoted.kind
        else:
            captured = board.piece_at(to_pos)
            if not board.apply_plain_move(from_pos, to_pos):
                return MoveOutcome(False, self._status)

        record = self._history.record(
            from_pos,
            to_pos,
            piece,
            captured,
            board,
            flag=flag,
            promotion=promoted_to,
        )
        board.switch_player()
        self._status = self._checker.game_state()

        self._emit_move(record)
        if self._status.is_terminal:
            _LOGGER.info("Game over after %s: %s", record, self._status.name)
            self._emit_game_over()

        return MoveOutcome(True, self._status, captured, record)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _emit_move(self, record: MoveRecord) -> None:
        for cb in self.events.on_move:
            cb(record, self._status)

    def _emit_game_over(self) -> None:
        for cb in self.events.on_game_over:
            cb(self._status)
