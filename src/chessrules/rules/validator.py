"""MoveValidator — the single legality oracle and move enumerator."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.board import Board
from chessrules.core.enums import Color, MoveFlag
from chessrules.core.position import Position
from chessrules.rules.history import MoveHistory
from chessrules.rules.special_moves import SpecialMovesHandler


@dataclass(frozen=True, slots=True)
class MovePair:
    """A ``(from, to)`` pair of squares."""

    from_pos: Position
    to_pos: Position

    def __str__(self) -> str:
        return f"{self.from_pos}-{self.to_pos}"


class MoveValidator:
    """Decides whether a move is legal for the side to move.

    A move is legal when the piece belongs to the side to move, its raw
    movement rule accepts the destination and the own king is not left in
    check.  Castling and en passant fail the raw rule by construction, so
    those shapes are recognised first and handed to the special-move
    handler as a whole.
    """

    __slots__ = ("_board", "_history", "_special")

    def __init__(
        self,
        board: Board,
        history: MoveHistory,
        special: SpecialMovesHandler | None = None,
    ) -> None:
        self._board = board
        self._history = history
        self._special = special or SpecialMovesHandler(board, history)

    @property
    def special_moves(self) -> SpecialMovesHandler:
        return self._special

    # -- Single moves -------------------------------------------------------

    def is_valid_move(
        self, from_pos: Position | None, to_pos: Position | None
    ) -> bool:
        """Whether the side to move may play *from_pos* → *to_pos*."""
        return self._is_valid_for(from_pos, to_pos, self._board.current_player)

    def _is_valid_for(
        self, from_pos: Position | None, to_pos: Position | None, color: Color
    ) -> bool:
        if from_pos is None or to_pos is None:
            return False

        board = self._board
        piece = board.piece_at(from_pos)
        if piece is None or piece.color != color:
            return False

        target = board.piece_at(to_pos)
        if target is not None and target.color == piece.color:
            return False

        flag = self._special.special_move_flag(from_pos, to_pos)
        if flag is not None and flag != MoveFlag.PROMOTION:
            return self._special.is_valid_special_move(from_pos, to_pos)

        if not piece.raw_can_move(to_pos, board):
            return False

        if flag == MoveFlag.PROMOTION:
            return self._special.is_valid_special_move(from_pos, to_pos)

        return not self.would_put_king_in_check(from_pos, to_pos, piece.color)

    def would_put_king_in_check(
        self, from_pos: Position, to_pos: Position, color: Color
    ) -> bool:
        return self._board.would_be_in_check_after(from_pos, to_pos, color)

    # -- Enumeration --------------------------------------------------------

    def get_valid_moves(self, pos: Position | None) -> list[Position]:
        """Legal destinations for the piece on *pos* if it is its side's turn."""
        return self._valid_moves_for(pos, self._board.current_player)

    def _valid_moves_for(self, pos: Position | None, color: Color) -> list[Position]:
        piece = self._board.piece_at(pos)
        if pos is None or piece is None or piece.color != color:
            return []

        moves: list[Position] = []
        candidates = piece.generate_candidates(self._board)
        for to_pos in candidates + self._special.get_special_moves(pos):
            if to_pos not in moves and self._is_valid_for(pos, to_pos, color):
                moves.append(to_pos)
        return moves

    def get_all_valid_moves(self, color: Color) -> list[MovePair]:
        """Every legal move *color* would have if it were to move."""
        moves: list[MovePair] = []
        for piece in self._board.pieces(color):
            from_pos = piece.position
            if from_pos is None:
                continue
            for to_pos in self._valid_moves_for(from_pos, color):
                moves.append(MovePair(from_pos, to_pos))
        return moves

    def has_valid_moves(self, color: Color) -> bool:
        for piece in self._board.pieces(color):
            if self._valid_moves_for(piece.position, color):
                return True
        return False
