"""Move history — executed moves, en-passant window and repetition keys."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from chessrules.core.enums import Color, MoveFlag, PieceKind
from chessrules.core.piece import Piece, PieceSnapshot
from chessrules.core.position import Position
from chessrules.core.zobrist import position_key

if TYPE_CHECKING:
    from chessrules.core.board import Board


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the move history."""

    from_pos: Position
    to_pos: Position
    piece: PieceSnapshot
    captured: PieceSnapshot | None
    mover: Color
    flag: MoveFlag = MoveFlag.NORMAL
    promotion: PieceKind | None = None
    position_key: int = 0

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    def __str__(self) -> str:
        if self.flag == MoveFlag.CASTLE_KINGSIDE:
            return "O-O"
        if self.flag == MoveFlag.CASTLE_QUEENSIDE:
            return "O-O-O"
        capture = "x" if self.captured is not None else ""
        text = f"{self.piece.kind.symbol}{self.from_pos}{capture}{self.to_pos}"
        if self.promotion is not None:
            text += f"={self.promotion.symbol}"
        return text


@dataclass(frozen=True, slots=True)
class DoubleStep:
    """The most recent two-square pawn advance."""

    pawn: Piece
    landing: Position

    @property
    def capturer_color(self) -> Color:
        return self.pawn.color.opposite


def _capturable_column(
    board: Board, landing: Position, capturer_color: Color
) -> int | None:
    """Column of *landing* if a *capturer_color* pawn stands beside it."""
    for side in (-1, 1):
        beside = landing.offset(0, side)
        if beside is None:
            continue
        neighbour = board.piece_at(beside)
        if (
            neighbour is not None
            and neighbour.kind == PieceKind.PAWN
            and neighbour.color == capturer_color
        ):
            return landing.column
    return None


class MoveHistory:
    """Append-only log of executed moves.

    Besides the records themselves the history tracks the last pawn double
    step (valid for the very next move only), a halfmove clock for the
    fifty-move rule and a Zobrist key per record for repetition detection.
    """

    __slots__ = ("_moves", "_double_step", "_halfmove_clock", "_initial_key")

    def __init__(self) -> None:
        self._moves: list[MoveRecord] = []
        self._double_step: DoubleStep | None = None
        self._halfmove_clock = 0
        self._initial_key: int | None = None

    def begin(self, board: Board) -> None:
        """Forget all moves and remember *board* as the starting position."""
        self._moves.clear()
        self._double_step = None
        self._halfmove_clock = 0
        self._initial_key = position_key(board)

    # ── Recording ────────────────────────────────────────────────────────

    def record(
        self,
        from_pos: Position,
        to_pos: Position,
        piece: Piece,
        captured: Piece | None,
        board_after: Board,
        *,
        flag: MoveFlag | None = None,
        promotion: PieceKind | None = None,
    ) -> MoveRecord:
        """Append a move played by *piece* and return its record.

        *board_after* is the board once the move has been applied; the side
        to move in its key is the mover's opponent.
        """
        is_double_step = (
            piece.kind == PieceKind.PAWN
            and from_pos.is_same_column(to_pos)
            and to_pos.row - from_pos.row == 2 * piece.color.pawn_direction
        )
        if is_double_step:
            self._double_step = DoubleStep(piece, to_pos)
        else:
            self._double_step = None

        if flag is None:
            flag = MoveFlag.DOUBLE_PAWN if is_double_step else MoveFlag.NORMAL

        if piece.kind == PieceKind.PAWN or captured is not None:
            self._halfmove_clock = 0
        else:
            self._halfmove_clock += 1

        record = MoveRecord(
            from_pos=from_pos,
            to_pos=to_pos,
            piece=piece.snapshot(),
            captured=captured.snapshot() if captured is not None else None,
            mover=piece.color,
            flag=flag,
            promotion=promotion,
            position_key=position_key(
                board_after,
                side_to_move=piece.color.opposite,
                en_passant_column=(
                    _capturable_column(board_after, to_pos, piece.color.opposite)
                    if is_double_step
                    else None
                ),
            ),
        )
        self._moves.append(record)
        return record

    # ── En passant ───────────────────────────────────────────────────────

    @property
    def last_double_step(self) -> DoubleStep | None:
        return self._double_step

    def can_en_passant(
        self, attacker_pos: Position | None, target_pos: Position | None
    ) -> bool:
        """Could a pawn on *attacker_pos* capture en passant onto *target_pos*?

        The double-stepped pawn must stand beside the attacker and the target
        must be the square directly behind it, seen from the attacker.
        """
        step = self._double_step
        if step is None or attacker_pos is None or target_pos is None:
            return False

        landing = step.landing
        if not attacker_pos.is_same_row(landing):
            return False
        if attacker_pos.column_distance(landing) != 1:
            return False
        if target_pos.column != landing.column:
            return False
        return target_pos.row == attacker_pos.row + step.capturer_color.pawn_direction

    def en_passant_victim_square(self, target_pos: Position) -> Position | None:
        """Square of the pawn removed by an en-passant capture onto *target_pos*."""
        step = self._double_step
        if step is None:
            return None
        landing = step.landing
        behind = landing.offset(step.capturer_color.pawn_direction, 0)
        if behind != target_pos:
            return None
        return landing

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def move_count(self) -> int:
        return len(self._moves)

    @property
    def moves(self) -> list[MoveRecord]:
        return list(self._moves)

    @property
    def last_move(self) -> MoveRecord | None:
        return self._moves[-1] if self._moves else None

    @property
    def halfmove_clock(self) -> int:
        """Plies since the last capture or pawn move."""
        return self._halfmove_clock

    def current_key(self, board: Board) -> int:
        """Key of *board*; the en-passant column counts only when capturable."""
        step = self._double_step
        column = None
        if step is not None:
            column = _capturable_column(board, step.landing, step.capturer_color)
        return position_key(board, en_passant_column=column)

    def repetition_count(self, board: Board) -> int:
        """How many times the position on *board* occurred in this game."""
        key = self.current_key(board)
        count = sum(1 for record in self._moves if record.position_key == key)
        if self._initial_key == key:
            count += 1
        return count

    def is_threefold_repetition(self, board: Board, limit: int = 3) -> bool:
        if not self._moves:
            return False
        return self.repetition_count(board) >= limit

    def __len__(self) -> int:
        return len(self._moves)

    def __iter__(self) -> Iterator[MoveRecord]:
        return iter(self._moves)
