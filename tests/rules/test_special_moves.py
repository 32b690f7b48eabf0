"""Tests for SpecialMovesHandler: castling, en passant and promotion."""

from collections.abc import Callable

import pytest

from chessrules.core.board import Board
from chessrules.core.enums import Color, MoveFlag, PieceKind
from chessrules.core.piece import Piece
from chessrules.core.position import Position
from chessrules.rules.config import RulesConfig
from chessrules.rules.history import MoveHistory
from chessrules.rules.special_moves import PROMOTION_KINDS, SpecialMovesHandler

W, B = Color.WHITE, Color.BLACK
Put = Callable[..., Piece]
Advance = Callable[[Position, Position], Piece]


class TestCastling:
    @pytest.fixture
    def castle_setup(self, put: Put) -> tuple[Piece, Piece, Piece]:
        king = put(0, 4, PieceKind.KING, W)
        short_rook = put(0, 7, PieceKind.ROOK, W)
        long_rook = put(0, 0, PieceKind.ROOK, W)
        put(7, 4, PieceKind.KING, B)
        return king, short_rook, long_rook

    def test_detection(
        self, castle_setup: tuple[Piece, Piece, Piece], special: SpecialMovesHandler
    ) -> None:
        e, g, c = Position(0, 4), Position(0, 6), Position(0, 2)
        assert special.is_castling(e, g)
        assert special.special_move_flag(e, g) == MoveFlag.CASTLE_KINGSIDE
        assert special.special_move_flag(e, c) == MoveFlag.CASTLE_QUEENSIDE
        assert not special.is_castling(e, Position(0, 5))
        assert set(special.get_special_moves(e)) == {g, c}

    def test_kingside(
        self,
        board: Board,
        castle_setup: tuple[Piece, Piece, Piece],
        special: SpecialMovesHandler,
    ) -> None:
        king, rook, _ = castle_setup
        result = special.execute_special_move(Position(0, 4), Position(0, 6))
        assert result is not None
        assert result.flag == MoveFlag.CASTLE_KINGSIDE
        assert result.piece is king
        assert result.captured is None
        assert board.piece_at(Position(0, 6)) is king
        assert board.piece_at(Position(0, 5)) is rook
        assert board.is_empty(Position(0, 4))
        assert board.is_empty(Position(0, 7))
        assert king.has_moved and rook.has_moved

    def test_queenside(
        self,
        board: Board,
        castle_setup: tuple[Piece, Piece, Piece],
        special: SpecialMovesHandler,
    ) -> None:
        king, _, rook = castle_setup
        result = special.execute_special_move(Position(0, 4), Position(0, 2))
        assert result is not None
        assert result.flag == MoveFlag.CASTLE_QUEENSIDE
        assert board.piece_at(Position(0, 2)) is king
        assert board.piece_at(Position(0, 3)) is rook
        assert board.is_empty(Position(0, 0))
        assert board.is_empty(Position(0, 1))

    def test_rejected_after_king_moved(
        self,
        board: Board,
        castle_setup: tuple[Piece, Piece, Piece],
        special: SpecialMovesHandler,
    ) -> None:
        king, _, _ = castle_setup
        king.mark_moved()
        assert special.execute_special_move(Position(0, 4), Position(0, 6)) is None
        assert board.piece_at(Position(0, 4)) is king

    def test_rejected_through_attacked_square(
        self,
        put: Put,
        castle_setup: tuple[Piece, Piece, Piece],
        special: SpecialMovesHandler,
    ) -> None:
        put(4, 5, PieceKind.ROOK, B)
        assert not special.is_valid_special_move(Position(0, 4), Position(0, 6))
        assert special.is_valid_special_move(Position(0, 4), Position(0, 2))

    def test_black_castles_on_its_own_back_rank(
        self, board: Board, put: Put, special: SpecialMovesHandler
    ) -> None:
        put(0, 4, PieceKind.KING, W)
        king = put(7, 4, PieceKind.KING, B)
        rook = put(7, 7, PieceKind.ROOK, B)
        board.switch_player()
        result = special.execute_special_move(Position(7, 4), Position(7, 6))
        assert result is not None
        assert board.piece_at(Position(7, 6)) is king
        assert board.piece_at(Position(7, 5)) is rook


class TestEnPassant:
    @pytest.fixture
    def ep_setup(self, put: Put, advance: Advance) -> tuple[Piece, Piece]:
        put(0, 4, PieceKind.KING, W)
        put(7, 0, PieceKind.KING, B)
        attacker = put(4, 3, PieceKind.PAWN, W, moved=True)
        put(6, 4, PieceKind.PAWN, B)
        victim = advance(Position(6, 4), Position(4, 4))
        return attacker, victim

    def test_detection(
        self, ep_setup: tuple[Piece, Piece], special: SpecialMovesHandler
    ) -> None:
        assert special.is_en_passant(Position(4, 3), Position(5, 4))
        assert special.special_move_flag(Position(4, 3), Position(5, 4)) == (
            MoveFlag.EN_PASSANT
        )
        assert not special.is_en_passant(Position(4, 3), Position(5, 3))
        assert special.get_special_moves(Position(4, 3)) == [Position(5, 4)]

    def test_capture_removes_pawn_beside_attacker(
        self,
        board: Board,
        ep_setup: tuple[Piece, Piece],
        special: SpecialMovesHandler,
    ) -> None:
        attacker, victim = ep_setup
        result = special.execute_special_move(Position(4, 3), Position(5, 4))
        assert result is not None
        assert result.flag == MoveFlag.EN_PASSANT
        assert result.captured is victim
        assert board.piece_at(Position(5, 4)) is attacker
        assert board.is_empty(Position(4, 4))
        assert board.is_empty(Position(4, 3))
        assert board.captured_pieces == [victim]

    def test_window_expires(
        self,
        put: Put,
        advance: Advance,
        ep_setup: tuple[Piece, Piece],
        special: SpecialMovesHandler,
    ) -> None:
        put(1, 7, PieceKind.PAWN, W)
        advance(Position(1, 7), Position(2, 7))
        assert not special.is_en_passant(Position(4, 3), Position(5, 4))
        assert special.execute_special_move(Position(4, 3), Position(5, 4)) is None

    def test_only_the_opponent_may_capture(
        self, put: Put, advance: Advance, special: SpecialMovesHandler
    ) -> None:
        put(6, 3, PieceKind.PAWN, B, moved=True)
        put(6, 4, PieceKind.PAWN, B)
        advance(Position(6, 4), Position(4, 4))
        assert not special.is_en_passant(Position(6, 3), Position(5, 4))

    def test_black_captures_en_passant(
        self,
        board: Board,
        put: Put,
        advance: Advance,
        special: SpecialMovesHandler,
    ) -> None:
        attacker = put(3, 5, PieceKind.PAWN, B, moved=True)
        put(1, 6, PieceKind.PAWN, W)
        victim = advance(Position(1, 6), Position(3, 6))
        result = special.execute_special_move(Position(3, 5), Position(2, 6))
        assert result is not None and result.captured is victim
        assert board.piece_at(Position(2, 6)) is attacker
        assert board.is_empty(Position(3, 6))

    def test_rejected_when_it_exposes_the_king(
        self, put: Put, advance: Advance, special: SpecialMovesHandler
    ) -> None:
        # Both pawns leave the row, opening it for the rook.
        put(4, 0, PieceKind.KING, W)
        put(7, 7, PieceKind.KING, B)
        put(4, 7, PieceKind.ROOK, B)
        put(4, 3, PieceKind.PAWN, W, moved=True)
        put(6, 4, PieceKind.PAWN, B)
        advance(Position(6, 4), Position(4, 4))
        assert special.is_en_passant(Position(4, 3), Position(5, 4))
        assert not special.is_valid_special_move(Position(4, 3), Position(5, 4))


class TestPromotion:
    @pytest.fixture
    def pawn(self, put: Put) -> Piece:
        put(0, 0, PieceKind.KING, W)
        put(5, 7, PieceKind.KING, B)
        return put(6, 3, PieceKind.PAWN, W, moved=True)

    def test_detection_is_shape_only(
        self, pawn: Piece, special: SpecialMovesHandler
    ) -> None:
        assert special.is_promotion(Position(6, 3), Position(7, 3))
        assert special.is_promotion(Position(6, 3), Position(7, 4))
        assert not special.is_promotion(Position(6, 3), Position(7, 6))
        assert not special.is_promotion(Position(5, 7), Position(6, 7))

    @pytest.mark.parametrize("kind", PROMOTION_KINDS)
    def test_chosen_kind(
        self, board: Board, pawn: Piece, special: SpecialMovesHandler, kind: PieceKind
    ) -> None:
        result = special.execute_special_move(Position(6, 3), Position(7, 3), kind)
        assert result is not None and result.promoted is not None
        promoted = board.piece_at(Position(7, 3))
        assert promoted is result.promoted
        assert promoted.kind == kind
        assert promoted.color == W
        assert promoted.has_moved
        assert board.is_empty(Position(6, 3))

    def test_default_is_queen(
        self, board: Board, pawn: Piece, special: SpecialMovesHandler
    ) -> None:
        special.execute_special_move(Position(6, 3), Position(7, 3))
        promoted = board.piece_at(Position(7, 3))
        assert promoted is not None and promoted.kind == PieceKind.QUEEN

    @pytest.mark.parametrize("choice", [PieceKind.KING, PieceKind.PAWN])
    def test_invalid_choice_falls_back(
        self,
        board: Board,
        pawn: Piece,
        special: SpecialMovesHandler,
        choice: PieceKind,
    ) -> None:
        special.execute_special_move(Position(6, 3), Position(7, 3), choice)
        promoted = board.piece_at(Position(7, 3))
        assert promoted is not None and promoted.kind == PieceKind.QUEEN

    def test_configured_default(self, board: Board, history: MoveHistory) -> None:
        handler = SpecialMovesHandler(
            board, history, RulesConfig(default_promotion=PieceKind.KNIGHT)
        )
        assert handler.resolve_promotion(None) == PieceKind.KNIGHT
        assert handler.resolve_promotion(PieceKind.ROOK) == PieceKind.ROOK

    def test_capture_promotion(
        self,
        board: Board,
        put: Put,
        pawn: Piece,
        special: SpecialMovesHandler,
    ) -> None:
        rook = put(7, 4, PieceKind.ROOK, B)
        result = special.execute_special_move(Position(6, 3), Position(7, 4))
        assert result is not None
        assert result.captured is rook
        assert board.captured_pieces == [rook]
        promoted = board.piece_at(Position(7, 4))
        assert promoted is not None and promoted.kind == PieceKind.QUEEN

    def test_blocked_push_is_rejected(
        self, put: Put, pawn: Piece, special: SpecialMovesHandler
    ) -> None:
        put(7, 3, PieceKind.BISHOP, B)
        assert special.execute_special_move(Position(6, 3), Position(7, 3)) is None

    def test_black_promotes_on_row_zero(
        self, board: Board, put: Put, special: SpecialMovesHandler
    ) -> None:
        put(1, 5, PieceKind.PAWN, B, moved=True)
        special.execute_special_move(Position(1, 5), Position(0, 5))
        promoted = board.piece_at(Position(0, 5))
        assert promoted is not None
        assert promoted.symbol == "q"


class TestNotSpecial:
    def test_plain_moves_are_not_special(self, special: SpecialMovesHandler) -> None:
        assert not special.is_special_move(Position(1, 4), Position(3, 4))
        assert special.special_move_flag(Position(3, 3), Position(4, 3)) is None
        assert special.execute_special_move(Position(3, 3), Position(4, 3)) is None
        assert special.get_special_moves(Position(3, 3)) == []
