"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from chessrules.core.board import Board
from chessrules.core.enums import Color, PieceKind
from chessrules.core.piece import Piece
from chessrules.core.position import Position
from chessrules.rules.history import MoveHistory
from chessrules.rules.special_moves import SpecialMovesHandler
from chessrules.rules.state_checker import GameStateChecker
from chessrules.rules.validator import MoveValidator

PutPiece = Callable[..., Piece]
AdvancePiece = Callable[[Position, Position], Piece]


@pytest.fixture
def board() -> Board:
    """An empty board, white to move."""
    return Board()


@pytest.fixture
def put(board: Board) -> PutPiece:
    """Place a piece on the ``board`` fixture: ``put(row, col, kind, color)``."""

    def _put(
        row: int,
        column: int,
        kind: PieceKind,
        color: Color,
        *,
        moved: bool = False,
    ) -> Piece:
        piece = Piece(kind, color, has_moved=moved)
        board.place(Position(row, column), piece)
        return piece

    return _put


@pytest.fixture
def history(board: Board) -> MoveHistory:
    h = MoveHistory()
    h.begin(board)
    return h


@pytest.fixture
def special(board: Board, history: MoveHistory) -> SpecialMovesHandler:
    return SpecialMovesHandler(board, history)


@pytest.fixture
def validator(
    board: Board, history: MoveHistory, special: SpecialMovesHandler
) -> MoveValidator:
    return MoveValidator(board, history, special)


@pytest.fixture
def checker(
    board: Board, validator: MoveValidator, history: MoveHistory
) -> GameStateChecker:
    return GameStateChecker(board, validator, history)


@pytest.fixture
def advance(board: Board, history: MoveHistory) -> AdvancePiece:
    """Relocate a piece by hand and log it, bypassing turn and legality."""

    def _advance(from_pos: Position, to_pos: Position) -> Piece:
        piece = board.remove(from_pos)
        assert piece is not None
        captured = board.remove(to_pos)
        board.place(to_pos, piece)
        piece.mark_moved()
        history.record(from_pos, to_pos, piece, captured, board)
        return piece

    return _advance
